"""Scan configuration.

TIER 1: May import from core only.

``ScanConfig`` carries every tunable of a scan with its documented default.
Callers that keep overrides elsewhere (CLI flags, a settings file) turn them
into a config with ``config_from_dict``.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from core.errors import ConfigError

# Version control, dependency caches, build outputs
DEFAULT_IGNORE_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "bower_components",
        "vendor",
        "__pycache__",
        ".venv",
        "venv",
        ".tox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".next",
        ".nuxt",
        ".turbo",
        ".cache",
        ".parcel-cache",
        "dist",
        "build",
        "out",
        "coverage",
        "target",
    }
)

# Directories excluded from structural analysis only
DEFAULT_SKIP_DIRS = frozenset(
    {
        "test",
        "tests",
        "__tests__",
        "mock",
        "mocks",
        "__mocks__",
        "fixture",
        "fixtures",
        "__fixtures__",
        "generated",
        "__generated__",
        "storybook",
        ".storybook",
        "stories",
    }
)

DEFAULT_SOURCE_EXTENSIONS = frozenset(
    {".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts", ".py", ".vue", ".svelte"}
)

# Catalog entries also target SQL migrations and XML sitemaps
DEFAULT_SCAN_EXTENSIONS = DEFAULT_SOURCE_EXTENSIONS | {".sql", ".xml"}

DEFAULT_SOURCE_ROOT_NAMES = frozenset({"src", "app", "source"})

DEFAULT_CATCH_ALL_NAMES = frozenset({"utils", "helpers", "shared", "common", "lib", "misc"})

_SET_FIELDS = {
    "ignore_dirs",
    "skip_dirs",
    "source_extensions",
    "scan_extensions",
    "source_root_names",
    "catch_all_names",
}


@dataclass(frozen=True)
class ScanConfig:
    """Tunables for a scan. Thresholds are exclusive lower bounds."""

    ignore_dirs: frozenset[str] = DEFAULT_IGNORE_DIRS
    skip_dirs: frozenset[str] = DEFAULT_SKIP_DIRS
    source_extensions: frozenset[str] = DEFAULT_SOURCE_EXTENSIONS
    scan_extensions: frozenset[str] = DEFAULT_SCAN_EXTENSIONS
    god_directory_warning: int = 15
    god_directory_critical: int = 30
    naming_min_files: int = 3
    max_nesting_depth: int = 5
    source_root_names: frozenset[str] = DEFAULT_SOURCE_ROOT_NAMES
    barrel_reexport_limit: int = 10
    catch_all_names: frozenset[str] = DEFAULT_CATCH_ALL_NAMES
    catch_all_limit: int = 10
    mixed_export_named_min: int = 3
    max_workers: int | None = None
    confidence_overrides: dict[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.god_directory_critical < self.god_directory_warning:
            raise ConfigError("god_directory_critical must be >= god_directory_warning")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigError("max_workers must be a positive integer")
        for pattern_id, value in self.confidence_overrides.items():
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"confidence override for {pattern_id} must be in [0, 1]")

    def with_overrides(self, **changes: Any) -> "ScanConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def config_from_dict(data: dict[str, Any], base: ScanConfig | None = None) -> ScanConfig:
    """Build a ScanConfig from a plain mapping.

    Args:
        data: Mapping of field name to value (lists are accepted for set fields).
        base: Config to override (default: ``ScanConfig()``).

    Returns:
        New ScanConfig.

    Raises:
        ConfigError: On unknown keys or values of the wrong type.
    """
    base = base or ScanConfig()
    known = {f.name: f for f in fields(ScanConfig)}
    changes: dict[str, Any] = {}

    for key, value in data.items():
        if key.startswith("$"):
            continue
        if key not in known:
            raise ConfigError(f"Unknown config key: {key}")

        if key in _SET_FIELDS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{key} must be a list of strings")
            changes[key] = frozenset(value)
        elif key == "confidence_overrides":
            if not isinstance(value, dict) or not all(
                isinstance(v, int | float) and not isinstance(v, bool) for v in value.values()
            ):
                raise ConfigError("confidence_overrides must map pattern ids to numbers")
            changes[key] = {str(k): float(v) for k, v in value.items()}
        elif key == "max_workers":
            if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
                raise ConfigError("max_workers must be an integer or null")
            changes[key] = value
        else:
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{key} must be a non-negative integer")
            changes[key] = value

    return replace(base, **changes)
