"""Code organization analyzer.

TIER 2: May import from core, lib.

Produces filesystem-fact findings only (no library suggestions):
- god-directory: too many source files directly in one directory
- mixed-naming-convention: more than one file naming style per directory
- deep-nesting: directories nested too far below the source root
- catch-all-directory: oversized utils/helpers-style directories
- barrel-bloat: index files re-exporting too much, and mixed export style
- circular-dependency: import cycles, per workspace

Test, mock, fixture, generated and storybook directories are never walked,
and files whose leading comment says auto-generated are dropped before analysis.
"""

import re
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath

from analyzer.cycles import find_cycles
from analyzer.engine import read_source
from analyzer.graph import build_dependency_graph
from core.models import CodeOrganizationStats, StructuralFinding
from core.types import Domain, FindingType, NamingConvention, Severity
from lib.config import ScanConfig
from lib.logger import get_logger
from lib.walker import WalkedFile, walk_files

logger = get_logger("organization")

# Marker honored only inside the leading comment block
GENERATED_MARKER_RE = re.compile(r"\bauto-generated\b", re.IGNORECASE)
GENERATED_SCAN_CHARS = 1024

JS_TS_EXTENSIONS = frozenset({".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts"})

REEXPORT_RE = re.compile(
    r"""^[ \t]*export\s+(?:type\s+)?(?:\*(?:\s*as\s+[\w$]+)?|\{[^}]{0,1000}\})\s*from\s*['"]""",
    re.MULTILINE,
)
PY_REEXPORT_RE = re.compile(r"^[ \t]*from\s+\.[\w.]*\s+import\b", re.MULTILINE)

DEFAULT_EXPORT_RE = re.compile(r"^[ \t]*export\s+default\b", re.MULTILINE)
NAMED_EXPORT_RE = re.compile(
    r"^[ \t]*export\s+(?:declare\s+)?(?:async\s+)?(?:abstract\s+)?"
    r"(?:const|let|var|function\*?|class|interface|type|enum)\s+[\w$]",
    re.MULTILINE,
)
EXPORT_LIST_RE = re.compile(r"^[ \t]*export\s+(?:type\s+)?\{([^}]{0,1000})\}", re.MULTILINE)

ORG = Domain.CODE_ORGANIZATION


@dataclass
class SourceFile:
    """An analysed file with its content."""

    walked: WalkedFile
    content: str

    @property
    def rel_path(self) -> str:
        return self.walked.rel_path

    @property
    def is_barrel(self) -> bool:
        return is_barrel_file(self.walked.name)


@dataclass
class OrganizationReport:
    """Result of one code organization pass."""

    findings: list[StructuralFinding] = field(default_factory=list)
    stats: CodeOrganizationStats = field(default_factory=CodeOrganizationStats)
    warnings: list[str] = field(default_factory=list)


def is_barrel_file(name: str) -> bool:
    """Check whether a file name marks a re-export aggregator."""
    return name == "__init__.py" or name.split(".", 1)[0] == "index"


def leading_comment(content: str) -> str:
    """Comment lines at the top of a file, up to the first code line."""
    lines = []
    in_block = False
    for line in content[:GENERATED_SCAN_CHARS].splitlines():
        stripped = line.strip()
        if in_block:
            lines.append(stripped)
            in_block = "*/" not in stripped
        elif stripped.startswith(("//", "#")):
            lines.append(stripped)
        elif stripped.startswith("/*"):
            lines.append(stripped)
            in_block = "*/" not in stripped[2:]
        elif stripped:
            break
    return "\n".join(lines)


def is_generated(content: str) -> bool:
    return GENERATED_MARKER_RE.search(leading_comment(content)) is not None


def count_reexports(name: str, content: str) -> int:
    if name.endswith(".py"):
        return len(PY_REEXPORT_RE.findall(content))
    return len(REEXPORT_RE.findall(content))


def count_exports(content: str) -> tuple[int, int]:
    """Count (default, named) exports in a JS/TS module."""
    defaults = len(DEFAULT_EXPORT_RE.findall(content))
    named = len(NAMED_EXPORT_RE.findall(content))
    for names in EXPORT_LIST_RE.findall(content):
        for item in names.split(","):
            item = item.strip()
            if item and not item.endswith(" default"):
                named += 1
    return defaults, named


def workspace_for(rel_path: str, roots: list[str]) -> str:
    """Return the deepest workspace root containing a path ("." otherwise)."""
    best = "."
    for root in roots:
        if root == ".":
            continue
        if rel_path.startswith(root + "/") and len(root) > len(best):
            best = root
    return best


def _dir_parts(rel_dir: str) -> tuple[str, ...]:
    return () if rel_dir == "." else PurePosixPath(rel_dir).parts


def nesting_base(parts: tuple[str, ...], workspace_root: str, source_roots: Iterable[str]) -> int:
    """Index of the first directory counted toward nesting depth.

    Depth counts from just below the first source-root component (``src``,
    ``app``...) inside the workspace, else from the workspace root.
    """
    start = len(_dir_parts(workspace_root))
    source_roots = set(source_roots)
    for i in range(start, len(parts)):
        if parts[i] in source_roots:
            return i + 1
    return start


def collect_sources(root: Path, config: ScanConfig) -> tuple[list[SourceFile], list[str]]:
    """Walk the tree and load every analysable source file."""
    sources = []
    warnings = []
    ignore = config.ignore_dirs | config.skip_dirs

    for walked in walk_files(root, ignore, config.source_extensions):
        content = read_source(walked.path)
        if content is None:
            warnings.append(f"Skipped unreadable file {walked.rel_path}")
            continue
        if is_generated(content):
            logger.debug(f"Skipping generated file {walked.rel_path}")
            continue
        sources.append(SourceFile(walked, content))

    return sources, warnings


def compute_stats(sources: list[SourceFile]) -> CodeOrganizationStats:
    """Aggregate statistics over one full traversal."""
    stats = CodeOrganizationStats(total_source_files=len(sources))
    for source in sources:
        stats.max_directory_depth = max(stats.max_directory_depth, source.walked.depth)
        if not source.is_barrel:
            stats.count_name(NamingConvention.classify(source.walked.name))
    return stats


def find_god_directories(by_dir: dict[str, list[SourceFile]], config: ScanConfig) -> list[StructuralFinding]:
    findings = []
    for rel_dir, files in sorted(by_dir.items()):
        count = len(files)
        if count <= config.god_directory_warning:
            continue
        severity = Severity.CRITICAL if count > config.god_directory_critical else Severity.WARNING
        findings.append(
            StructuralFinding(
                type=FindingType.GOD_DIRECTORY,
                domain=ORG,
                severity=severity,
                paths=(rel_dir,),
                description=f"Directory {rel_dir} contains {count} source files",
                metadata={"fileCount": count},
            )
        )
    return findings


def directory_conventions(names: Iterable[str]) -> dict[str, int]:
    """Count naming conventions among the file names of one directory.

    Single lowercase words join snake_case when the directory already uses
    snake_case and no multi-word kebab-case name, and kebab-case otherwise.
    """
    counts: dict[str, int] = defaultdict(int)
    single_words = 0
    for name in names:
        if NamingConvention.is_single_word(name):
            single_words += 1
        else:
            counts[NamingConvention.classify(name).value] += 1

    if single_words:
        snake, kebab = NamingConvention.SNAKE_CASE.value, NamingConvention.KEBAB_CASE.value
        target = snake if snake in counts and kebab not in counts else kebab
        counts[target] += single_words
    return dict(counts)


def find_mixed_naming(by_dir: dict[str, list[SourceFile]], config: ScanConfig) -> list[StructuralFinding]:
    findings = []
    for rel_dir, files in sorted(by_dir.items()):
        if len(files) < config.naming_min_files:
            continue

        counts = directory_conventions(f.walked.name for f in files if not f.is_barrel)
        if len(counts) < 2:
            continue

        conventions = ", ".join(sorted(counts))
        findings.append(
            StructuralFinding(
                type=FindingType.MIXED_NAMING_CONVENTION,
                domain=ORG,
                severity=Severity.WARNING,
                paths=(rel_dir,),
                description=f"Directory {rel_dir} mixes file naming conventions: {conventions}",
                metadata={"conventions": dict(sorted(counts.items()))},
            )
        )
    return findings


def find_deep_nesting(
    by_dir: dict[str, list[SourceFile]],
    workspace_roots: list[str],
    config: ScanConfig,
) -> list[StructuralFinding]:
    # flagged directory -> deepest depth seen below it
    flagged: dict[str, int] = {}
    limit = config.max_nesting_depth

    for rel_dir in sorted(by_dir):
        parts = _dir_parts(rel_dir)
        base = nesting_base(parts, workspace_for(rel_dir + "/", workspace_roots), config.source_root_names)
        depth = len(parts) - base
        if depth <= limit:
            continue
        branch = "/".join(parts[: base + limit + 1])
        flagged[branch] = max(flagged.get(branch, 0), depth)

    return [
        StructuralFinding(
            type=FindingType.DEEP_NESTING,
            domain=ORG,
            severity=Severity.WARNING,
            paths=(branch,),
            description=f"Directory {branch} is nested more than {limit} levels below its source root",
            metadata={"depth": depth, "limit": limit},
        )
        for branch, depth in sorted(flagged.items())
    ]


def find_catch_all(by_dir: dict[str, list[SourceFile]], config: ScanConfig) -> list[StructuralFinding]:
    findings = []
    for rel_dir, files in sorted(by_dir.items()):
        name = PurePosixPath(rel_dir).name
        if name not in config.catch_all_names or len(files) <= config.catch_all_limit:
            continue
        findings.append(
            StructuralFinding(
                type=FindingType.CATCH_ALL_DIRECTORY,
                domain=ORG,
                severity=Severity.WARNING,
                paths=(rel_dir,),
                description=f"Catch-all directory '{name}' ({rel_dir}) holds {len(files)} files",
                metadata={"fileCount": len(files)},
            )
        )
    return findings


def find_export_issues(sources: list[SourceFile], config: ScanConfig) -> list[StructuralFinding]:
    """Barrel re-export bloat and mixed default/named export style."""
    findings = []
    for source in sources:
        name = source.walked.name
        if source.is_barrel:
            count = count_reexports(name, source.content)
            if count > config.barrel_reexport_limit:
                findings.append(
                    StructuralFinding(
                        type=FindingType.BARREL_BLOAT,
                        domain=ORG,
                        severity=Severity.WARNING,
                        paths=(source.rel_path,),
                        description=f"Barrel file {source.rel_path} has {count} re-export statements",
                        metadata={"issue": "reexport-count", "reexportCount": count},
                    )
                )
            continue

        if PurePosixPath(name).suffix.lower() not in JS_TS_EXTENSIONS:
            continue
        defaults, named = count_exports(source.content)
        if defaults == 1 and named >= config.mixed_export_named_min:
            findings.append(
                StructuralFinding(
                    type=FindingType.BARREL_BLOAT,
                    domain=ORG,
                    severity=Severity.WARNING,
                    paths=(source.rel_path,),
                    description=(
                        f"{source.rel_path} mixes a default export with {named} named exports"
                    ),
                    metadata={"issue": "mixed-export-style", "namedExports": named},
                )
            )
    return findings


def find_circular_dependencies(
    sources: list[SourceFile],
    workspace_roots: list[str],
) -> list[StructuralFinding]:
    """Build one import graph per workspace and report its cycles."""
    partitions: dict[str, dict[str, str]] = defaultdict(dict)
    for source in sources:
        partitions[workspace_for(source.rel_path, workspace_roots)][source.rel_path] = source.content

    findings = []
    for workspace in sorted(partitions):
        for cycle in find_cycles(build_dependency_graph(partitions[workspace])):
            chain = " -> ".join((*cycle, cycle[0]))
            findings.append(
                StructuralFinding(
                    type=FindingType.CIRCULAR_DEPENDENCY,
                    domain=ORG,
                    severity=Severity.CRITICAL,
                    paths=cycle,
                    description=f"Circular import: {chain}",
                    metadata={"workspace": workspace, "length": len(cycle)},
                )
            )
    return findings


def analyze_code_organization(
    root: Path | str,
    config: ScanConfig | None = None,
    workspace_roots: Iterable[str] | None = None,
) -> OrganizationReport:
    """Analyze directory structure and import relationships.

    Args:
        root: Scan root directory.
        config: Thresholds and ignore policy (defaults when omitted).
        workspace_roots: Workspace roots relative to ``root``; cycles are
            searched per workspace. Defaults to the scan root alone.

    Returns:
        OrganizationReport with ordered findings and aggregate stats. A
        missing root yields an empty report.
    """
    root = Path(root)
    config = config or ScanConfig()
    roots = sorted(set(workspace_roots or ())) or ["."]

    if not root.is_dir():
        return OrganizationReport()

    sources, warnings = collect_sources(root, config)

    by_dir: dict[str, list[SourceFile]] = defaultdict(list)
    for source in sources:
        by_dir[source.walked.rel_dir].append(source)

    findings = [
        *find_god_directories(by_dir, config),
        *find_mixed_naming(by_dir, config),
        *find_deep_nesting(by_dir, roots, config),
        *find_catch_all(by_dir, config),
        *find_export_issues(sources, config),
    ]
    cycles = find_circular_dependencies(sources, roots)
    findings.extend(cycles)

    stats = compute_stats(sources)
    stats.circular_dependency_count = len(cycles)

    logger.debug(f"Code organization: {len(sources)} files, {len(findings)} findings")
    return OrganizationReport(findings=findings, stats=stats, warnings=sorted(warnings))
