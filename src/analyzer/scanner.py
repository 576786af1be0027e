"""Scan orchestrator.

TIER 2: May import from core, lib.

Composes workspace resolution, pattern matching, code organization and
(for monorepos) design-system analysis into one ScanResult. Data problems
become warnings; only configuration and catalog errors propagate.
"""

from pathlib import Path

from analyzer.catalog import PatternCatalog, default_catalog
from analyzer.design_system import analyze_design_system
from analyzer.engine import run_patterns
from analyzer.organization import analyze_code_organization
from core.models import ScanResult
from lib.config import ScanConfig
from lib.logger import get_logger
from lib.walker import walk_files
from lib.workspace import discover_workspaces

logger = get_logger("scanner")


def scan_codebase(
    root: Path | str,
    config: ScanConfig | None = None,
    catalog: PatternCatalog | None = None,
) -> ScanResult:
    """Scan a source tree.

    Args:
        root: Scan root directory.
        config: Scan configuration (defaults when omitted).
        catalog: Pattern catalog (the default catalog when omitted).

    Returns:
        ScanResult. A missing root yields an empty result rather than an error.
    """
    root = Path(root)
    config = config or ScanConfig()

    if not root.is_dir():
        logger.warning(f"Scan root does not exist: {root}")
        return ScanResult()

    catalog = catalog if catalog is not None else default_catalog()

    workspaces, warnings = discover_workspaces(root, config.ignore_dirs | config.skip_dirs)
    roots = sorted({w.root for w in workspaces})
    logger.info(f"Scanning {root} ({len(workspaces)} workspaces)")

    files = walk_files(root, config.ignore_dirs, config.scan_extensions)
    detections, match_warnings = run_patterns(files, catalog, config)
    warnings.extend(match_warnings)

    report = analyze_code_organization(root, config, roots)
    warnings.extend(report.warnings)
    findings = list(report.findings)

    layers = None
    if len(roots) > 1:
        design_findings, layers = analyze_design_system(root, workspaces)
        findings.extend(design_findings)

    return ScanResult(
        detections=detections,
        structural_findings=findings or None,
        code_organization_stats=report.stats,
        workspaces=workspaces,
        design_system_layers=layers,
        warnings=sorted(set(warnings)),
    )
