"""Scan data model.

TIER 0: No internal imports, only Python stdlib.

All entities are produced fresh for each scan. ``to_dict()`` returns the
camelCase shape consumed by downstream tooling.
"""

from dataclasses import dataclass, field
from typing import Any

from core.ports import Detector
from core.types import Domain, FindingType, Language, NamingConvention, PackageManager, Severity


@dataclass(frozen=True)
class PatternDefinition:
    """A detector for hand-rolled code that duplicates library functionality.

    Carries no recommendation data: choosing a library is left to the
    downstream reasoning step.
    """

    id: str
    domain: Domain
    description: str
    file_patterns: tuple[str, ...]
    code_patterns: tuple[Detector, ...]
    confidence_base: float


@dataclass(frozen=True)
class LineRange:
    """Inclusive 1-based line span."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if not 1 <= self.start <= self.end:
            raise ValueError(f"invalid line range {self.start}-{self.end}")

    def to_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class Detection:
    """One (pattern, file) match."""

    file_path: str
    line_range: LineRange
    pattern_category: str
    confidence_score: float
    domain: Domain

    @property
    def sort_key(self) -> tuple[str, int, str]:
        return (self.file_path, self.line_range.start, self.pattern_category)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "lineRange": self.line_range.to_dict(),
            "patternCategory": self.pattern_category,
            "confidenceScore": self.confidence_score,
            "domain": self.domain.value,
        }


@dataclass(frozen=True)
class Workspace:
    """A discovered project root with its own manifest."""

    root: str
    language: Language
    package_manager: PackageManager
    dependencies: dict[str, str] = field(default_factory=dict)
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": self.root,
            "language": self.language.value,
            "packageManager": self.package_manager.value,
            "dependencies": dict(self.dependencies),
        }


@dataclass(frozen=True)
class StructuralFinding:
    """A structural observation about directories, files or the import graph."""

    type: FindingType
    domain: Domain
    severity: Severity
    paths: tuple[str, ...]
    description: str
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "type": self.type.value,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "paths": list(self.paths),
            "description": self.description,
        }
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        return data


@dataclass
class CodeOrganizationStats:
    """Aggregate statistics for one full tree traversal."""

    total_source_files: int = 0
    max_directory_depth: int = 0
    circular_dependency_count: int = 0
    naming_conventions: dict[str, int] = field(default_factory=dict)

    def count_name(self, convention: NamingConvention) -> None:
        key = convention.value
        self.naming_conventions[key] = self.naming_conventions.get(key, 0) + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalSourceFiles": self.total_source_files,
            "maxDirectoryDepth": self.max_directory_depth,
            "circularDependencyCount": self.circular_dependency_count,
            "namingConventions": dict(sorted(self.naming_conventions.items())),
        }


@dataclass(frozen=True)
class DesignSystemLayers:
    """Which design-system layers a monorepo provides."""

    has_tokens: bool
    has_config: bool
    has_ui: bool

    def to_dict(self) -> dict[str, bool]:
        return {"hasTokens": self.has_tokens, "hasConfig": self.has_config, "hasUI": self.has_ui}


@dataclass
class ScanResult:
    """Aggregate result of one scan invocation."""

    detections: list[Detection] = field(default_factory=list)
    structural_findings: list[StructuralFinding] | None = None
    code_organization_stats: CodeOrganizationStats = field(default_factory=CodeOrganizationStats)
    workspaces: list[Workspace] = field(default_factory=list)
    design_system_layers: DesignSystemLayers | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "detections": [d.to_dict() for d in self.detections],
            "codeOrganizationStats": self.code_organization_stats.to_dict(),
            "workspaces": [w.to_dict() for w in self.workspaces],
            "warnings": list(self.warnings),
        }
        if self.structural_findings is not None:
            data["structuralFindings"] = [f.to_dict() for f in self.structural_findings]
        if self.design_system_layers is not None:
            data["designSystemLayers"] = self.design_system_layers.to_dict()
        return data
