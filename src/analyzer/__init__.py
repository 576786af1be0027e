"""Analyzer module - pattern matching and structural analysis.

TIER 2: May import from core, lib.

Entry points:
- scan_codebase: full scan (detections, findings, stats, workspaces)
- analyze_code_organization: structural analysis only
"""

from analyzer.catalog import (
    PatternCatalog,
    RegexDetector,
    default_catalog,
    get_pattern_catalog,
    get_patterns_for_domain,
)
from analyzer.cycles import find_cycles
from analyzer.design_system import analyze_design_system
from analyzer.engine import match_content, run_patterns
from analyzer.graph import build_dependency_graph
from analyzer.organization import OrganizationReport, analyze_code_organization
from analyzer.scanner import scan_codebase

__all__ = [
    "OrganizationReport",
    "PatternCatalog",
    "RegexDetector",
    "analyze_code_organization",
    "analyze_design_system",
    "build_dependency_graph",
    "default_catalog",
    "find_cycles",
    "get_pattern_catalog",
    "get_patterns_for_domain",
    "match_content",
    "run_patterns",
    "scan_codebase",
]
