"""Port interfaces for detectors.

TIER 0: No internal imports, only Python stdlib.

A detector is any predicate over (file path, file content) that yields zero
or one match span. The matching engine depends only on this contract, so
regex detectors and future AST-based detectors are interchangeable.
"""

from typing import NamedTuple, Protocol, runtime_checkable


class MatchSpan(NamedTuple):
    """Character offsets of a match in file content (end exclusive)."""

    start: int
    end: int


@runtime_checkable
class Detector(Protocol):
    """Port for content detectors.

    Implemented by: analyzer.catalog.RegexDetector
    """

    def find(self, path: str, content: str) -> MatchSpan | None:
        """Return the first match span in content, or None."""
        ...


def verify_detector(obj: object) -> bool:
    """Check that an object satisfies the Detector port.

    Args:
        obj: Candidate detector.

    Returns:
        True if the object implements ``find``.
    """
    return isinstance(obj, Detector)
