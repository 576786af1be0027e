"""Pattern matching engine.

TIER 2: May import from core, lib.

Applies catalog entries to file contents. Files are matched independently,
so matching fans out over a thread pool; the merged detections are sorted
before they are returned, which keeps output identical for any worker count.
"""

import os
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from analyzer.catalog import PatternCatalog, applies_to
from core.models import Detection, LineRange
from lib.config import ScanConfig
from lib.logger import get_logger
from lib.walker import WalkedFile

logger = get_logger("engine")

# Below this many files the pool costs more than it saves
PARALLEL_THRESHOLD = 10


def read_source(path: Path) -> str | None:
    """Read a file as UTF-8 text.

    Returns:
        File content, or None for unreadable, undecodable or binary files.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Skipping {path}: {e}")
        return None
    if "\x00" in content:
        return None
    return content


def line_of(content: str, offset: int) -> int:
    """1-based line number of a character offset."""
    return content.count("\n", 0, offset) + 1


def match_content(
    rel_path: str,
    content: str,
    catalog: PatternCatalog,
    overrides: Mapping[str, float] | None = None,
) -> list[Detection]:
    """Match one file's content against every applicable pattern.

    The first matcher of a pattern that hits wins; each pattern yields at
    most one detection per file.

    Args:
        rel_path: Forward-slash path relative to the scan root.
        content: File content.
        catalog: Patterns to apply.
        overrides: Optional pattern id -> confidence replacements.

    Returns:
        Detections in catalog order.
    """
    overrides = overrides or {}
    detections = []

    for pattern in catalog:
        if not applies_to(pattern, rel_path):
            continue
        for detector in pattern.code_patterns:
            span = detector.find(rel_path, content)
            if span is None:
                continue
            start = line_of(content, span.start)
            end = max(start, line_of(content, max(span.start, span.end - 1)))
            detections.append(
                Detection(
                    file_path=rel_path,
                    line_range=LineRange(start, end),
                    pattern_category=pattern.id,
                    confidence_score=overrides.get(pattern.id, pattern.confidence_base),
                    domain=pattern.domain,
                )
            )
            break

    return detections


def run_patterns(
    files: Iterable[WalkedFile],
    catalog: PatternCatalog,
    config: ScanConfig | None = None,
) -> tuple[list[Detection], list[str]]:
    """Run the catalog over a set of files.

    Args:
        files: Candidate files (paths relative to the scan root).
        catalog: Patterns to apply.
        config: Scan configuration (worker count, confidence overrides).

    Returns:
        Tuple of (sorted detections, sorted warnings for skipped files).
    """
    config = config or ScanConfig()
    candidates = [f for f in files if any(applies_to(p, f.rel_path) for p in catalog)]

    def scan_one(walked: WalkedFile) -> tuple[list[Detection], str | None]:
        content = read_source(walked.path)
        if content is None:
            return [], f"Skipped unreadable file {walked.rel_path}"
        return match_content(walked.rel_path, content, catalog, config.confidence_overrides), None

    if len(candidates) >= PARALLEL_THRESHOLD:
        workers = config.max_workers or min(8, os.cpu_count() or 4)
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(scan_one, candidates))
    else:
        results = [scan_one(f) for f in candidates]

    detections: list[Detection] = []
    warnings: list[str] = []
    for found, warning in results:
        detections.extend(found)
        if warning:
            warnings.append(warning)

    detections.sort(key=lambda d: d.sort_key)
    logger.debug(f"Matched {len(detections)} detections in {len(candidates)} files")
    return detections, sorted(warnings)
