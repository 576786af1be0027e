"""Custom exceptions for stackscout.

TIER 0: No internal imports, only Python stdlib.
"""


class StackscoutError(Exception):
    """Base exception for stackscout."""

    pass


class ConfigError(StackscoutError):
    """Configuration error."""

    pass


class CatalogError(StackscoutError):
    """Pattern catalog failed validation."""

    pass


class ManifestError(StackscoutError):
    """Package manifest could not be parsed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
