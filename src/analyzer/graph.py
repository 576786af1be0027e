"""Dependency graph builder.

TIER 2: May import from core, lib.
Supports Python (AST) and TypeScript/JavaScript (regex).

Only relative imports become edges. Package imports and relative targets
that do not resolve to a known file are dropped without error.
"""

import ast
import posixpath
import re
from collections.abc import Mapping

from lib.logger import get_logger

logger = get_logger("graph")

TS_IMPORT_PATTERNS = [
    # import Foo from './x'  |  import Foo, { a } from './x'  |  import Foo, * as ns from './x'
    r"""\bimport\s+(?:type\s+)?[\w$]+\s*(?:,\s*(?:\{[^}]{0,1000}\}|\*\s*as\s+[\w$]+)\s*)?from\s*['"]([^'"\n]+)['"]""",
    r"""\bimport\s+(?:type\s+)?\{[^}]{0,1000}\}\s*from\s*['"]([^'"\n]+)['"]""",
    r"""\bimport\s+\*\s*as\s+[\w$]+\s+from\s*['"]([^'"\n]+)['"]""",
    r"""\bimport\s*['"]([^'"\n]+)['"]""",
    r"""\bimport\s*\(\s*['"`]([^'"`\n]+)['"`]\s*\)""",
    r"""\brequire\s*\(\s*['"`]([^'"`\n]+)['"`]\s*\)""",
    r"""\bexport\s+(?:type\s+)?\{[^}]{0,1000}\}\s*from\s*['"]([^'"\n]+)['"]""",
    r"""\bexport\s+\*\s*(?:as\s+[\w$]+\s+)?from\s*['"]([^'"\n]+)['"]""",
]

_TS_IMPORT_RES = [re.compile(p) for p in TS_IMPORT_PATTERNS]

# Resolution order for extensionless specifiers
RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".mts", ".cts", ".vue", ".svelte")

# ESM TypeScript imports name the emitted .js file
_EMITTED_SOURCES = {
    ".js": (".ts", ".tsx"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def is_relative_specifier(spec: str) -> bool:
    return spec in (".", "..") or spec.startswith(("./", "../"))


def extract_ts_imports(content: str) -> list[str]:
    """Extract relative import specifiers from TS/JS source.

    Args:
        content: File content.

    Returns:
        Relative specifiers in order of first appearance.
    """
    found = []
    for pattern in _TS_IMPORT_RES:
        for match in pattern.finditer(content):
            found.append((match.start(), match.group(1)))

    specs: list[str] = []
    for _, spec in sorted(found):
        if is_relative_specifier(spec) and spec not in specs:
            specs.append(spec)
    return specs


def extract_python_imports(content: str) -> list[tuple[int, str | None, list[str]]]:
    """Extract relative imports from Python source using AST.

    Args:
        content: File content.

    Returns:
        List of (level, module, imported names) for each ``from .x import y``.
    """
    try:
        tree = ast.parse(content)
    except (SyntaxError, ValueError):
        return []

    imports = []
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.level > 0:
            imports.append((node.level, node.module, [alias.name for alias in node.names]))
    return imports


def _normalize(path: str) -> str | None:
    """Normalize a joined path; None when it escapes the walk root."""
    normalized = posixpath.normpath(path)
    if normalized == ".." or normalized.startswith("../"):
        return None
    return normalized


def resolve_ts_import(source: str, spec: str, nodes: Mapping[str, object] | set[str]) -> str | None:
    """Resolve a relative TS/JS specifier to a known file.

    Tries the exact path, then each source extension, then ``index.*``
    inside a directory, then the TypeScript source behind a ``.js`` name.
    """
    target = _normalize(posixpath.join(posixpath.dirname(source), spec))
    if target is None:
        return None

    candidates = [target]
    candidates.extend(target + ext for ext in RESOLVE_EXTENSIONS)
    candidates.extend(posixpath.normpath(posixpath.join(target, "index" + ext)) for ext in RESOLVE_EXTENSIONS)
    stem, ext = posixpath.splitext(target)
    candidates.extend(stem + alt for alt in _EMITTED_SOURCES.get(ext, ()))

    for candidate in candidates:
        if candidate in nodes:
            return candidate
    return None


def resolve_python_import(
    source: str,
    level: int,
    module: str | None,
    names: list[str],
    nodes: Mapping[str, object] | set[str],
) -> list[str]:
    """Resolve a relative Python import to module or package files."""
    base = posixpath.dirname(source)
    for _ in range(level - 1):
        base = posixpath.dirname(base) if base not in ("", "..") else ".."

    if module:
        return _resolve_module(posixpath.join(base, *module.split(".")), nodes)

    # from . import a, b: a name is a submodule, else an attribute of the package
    resolved = []
    for name in names:
        found = _resolve_module(posixpath.join(base, name), nodes) if name != "*" else []
        if not found:
            found = _resolve_module(base, nodes)
        resolved.extend(target for target in found if target not in resolved)
    return resolved


def _resolve_module(target: str, nodes: Mapping[str, object] | set[str]) -> list[str]:
    """Resolve a dotted-path target to ``x.py`` or ``x/__init__.py``."""
    normalized = _normalize(target) if target else None
    if normalized is None:
        return []
    for candidate in (normalized + ".py", posixpath.join(normalized, "__init__.py")):
        if candidate in nodes:
            return [candidate]
    return []


def file_imports(rel_path: str, content: str, nodes: Mapping[str, object] | set[str]) -> list[str]:
    """Resolve one file's relative imports to graph nodes."""
    if rel_path.endswith(".py"):
        targets = []
        for level, module, names in extract_python_imports(content):
            targets.extend(resolve_python_import(rel_path, level, module, names, nodes))
    else:
        targets = [
            resolved
            for spec in extract_ts_imports(content)
            if (resolved := resolve_ts_import(rel_path, spec, nodes)) is not None
        ]
    return sorted({t for t in targets if t != rel_path})


def build_dependency_graph(sources: Mapping[str, str]) -> dict[str, list[str]]:
    """Build a directed import graph over one workspace's files.

    Args:
        sources: Mapping of forward-slash relative path -> file content.

    Returns:
        Adjacency mapping (every file is a node; edges sorted).
    """
    graph = {path: file_imports(path, sources[path], sources) for path in sorted(sources)}
    edge_count = sum(len(targets) for targets in graph.values())
    logger.debug(f"Dependency graph: {len(graph)} nodes, {edge_count} edges")
    return graph
