"""Core module - types, data model, errors, ports.

TIER 0: No internal imports, only Python stdlib.

Exports:
- Error types: StackscoutError, ConfigError, CatalogError, ManifestError
- Enums: Domain, NamingConvention, FindingType, Severity, Language, PackageManager
- Model: PatternDefinition, Detection, LineRange, Workspace, StructuralFinding,
  CodeOrganizationStats, DesignSystemLayers, ScanResult
- Ports: Detector, MatchSpan
"""

from core.errors import CatalogError, ConfigError, ManifestError, StackscoutError
from core.models import (
    CodeOrganizationStats,
    DesignSystemLayers,
    Detection,
    LineRange,
    PatternDefinition,
    ScanResult,
    StructuralFinding,
    Workspace,
)
from core.ports import Detector, MatchSpan, verify_detector
from core.types import (
    DEFERRED_DOMAINS,
    Domain,
    FindingType,
    Language,
    NamingConvention,
    PackageManager,
    Severity,
    most_specific_domain,
)

__all__ = [
    "DEFERRED_DOMAINS",
    "CatalogError",
    "CodeOrganizationStats",
    "ConfigError",
    "DesignSystemLayers",
    "Detection",
    "Detector",
    "Domain",
    "FindingType",
    "Language",
    "LineRange",
    "ManifestError",
    "MatchSpan",
    "NamingConvention",
    "PackageManager",
    "PatternDefinition",
    "ScanResult",
    "Severity",
    "StackscoutError",
    "StructuralFinding",
    "Workspace",
    "most_specific_domain",
    "verify_detector",
]
