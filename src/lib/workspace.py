"""Workspace resolution - finds project roots in single repos and monorepos.

TIER 1: May import from core only.

Every directory holding a package manifest becomes a workspace. The scan
root comes first, nested roots follow in lexicographic discovery order.
"""

import json
import posixpath
import re
from collections.abc import Collection
from pathlib import Path
from typing import Any

import tomllib

from core.errors import ManifestError
from core.models import Workspace
from core.types import Language, PackageManager
from lib.logger import get_logger
from lib.walker import walk_files

logger = get_logger("workspace")

# Manifest files, in per-directory priority order
MANIFEST_FILES = ("package.json", "pyproject.toml", "Cargo.toml", "go.mod", "requirements.txt")

# Lock file -> package manager (first match wins)
NODE_LOCK_FILES = (
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
    ("bun.lockb", PackageManager.BUN),
    ("bun.lock", PackageManager.BUN),
    ("package-lock.json", PackageManager.NPM),
)
PYTHON_LOCK_FILES = (
    ("poetry.lock", PackageManager.POETRY),
    ("uv.lock", PackageManager.UV),
    ("pdm.lock", PackageManager.PDM),
    ("Pipfile.lock", PackageManager.PIPENV),
)

# [tool.*] table -> declared Python package manager
TOOL_MANAGERS = (
    ("poetry", PackageManager.POETRY),
    ("pdm", PackageManager.PDM),
    ("uv", PackageManager.UV),
)

TS_EXTENSIONS = frozenset({".ts", ".tsx", ".mts", ".cts"})
JS_EXTENSIONS = frozenset({".js", ".jsx", ".mjs", ".cjs"})

# PEP 508 requirement: name, optional extras, then the version spec up to markers
REQUIREMENT_RE = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]{0,200}\])?\s*([^;#]*)")
GO_REQUIRE_RE = re.compile(r"^\s*([^\s()]+)\s+(v[^\s]+)", re.MULTILINE)
GO_REQUIRE_BLOCK_RE = re.compile(r"^require\s*\(\s*\n(.*?)^\)", re.MULTILINE | re.DOTALL)
GO_REQUIRE_LINE_RE = re.compile(r"^require\s+([^\s(]+)\s+(v\S+)", re.MULTILINE)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(path.name, f"unreadable: {e}") from e


def _version_string(value: Any) -> str:
    """Normalize a dependency version declaration to a string."""
    if isinstance(value, str):
        return value or "*"
    if isinstance(value, dict):
        for key in ("version", "tag", "branch", "rev", "path", "git"):
            if isinstance(value.get(key), str):
                return value[key]
        return "*"
    return str(value)


def _table(data: dict[str, Any], key: str, manifest: str) -> dict[str, Any]:
    """Nested mapping of a manifest; a missing or null entry is empty.

    Raises:
        ManifestError: If the entry is present but not a mapping.
    """
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ManifestError(manifest, f"'{key}' must be a table, got {type(value).__name__}")
    return value


def parse_requirement(line: str) -> tuple[str, str] | None:
    """Split a PEP 508 requirement string into (name, version spec).

    Returns:
        Tuple of name and spec (``*`` when unpinned), or None for
        blank lines, comments and pip options.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith(("#", "-")):
        return None
    match = REQUIREMENT_RE.match(stripped)
    if not match:
        return None
    spec = match.group(2).strip()
    return match.group(1), spec or "*"


def parse_package_json(directory: Path) -> tuple[dict[str, str], PackageManager | None, str | None]:
    """Parse package.json into (dependencies, declared manager, package name).

    Raises:
        ManifestError: If the manifest is not a JSON object or has a malformed section.
    """
    try:
        data = json.loads(_read_text(directory / "package.json"))
    except json.JSONDecodeError as e:
        raise ManifestError("package.json", f"invalid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ManifestError("package.json", "expected a JSON object")

    deps: dict[str, str] = {}
    for section in ("devDependencies", "dependencies"):
        block = _table(data, section, "package.json")
        deps.update({str(k): _version_string(v) for k, v in block.items()})

    declared = None
    manager_field = data.get("packageManager")
    if isinstance(manager_field, str):
        manager_name = manager_field.split("@", 1)[0].strip().lower()
        try:
            declared = PackageManager(manager_name)
        except ValueError:
            logger.debug(f"Unknown packageManager field: {manager_field}")

    name = data.get("name") if isinstance(data.get("name"), str) else None
    return deps, declared, name


def parse_pyproject(directory: Path) -> tuple[dict[str, str], PackageManager | None, str | None]:
    """Parse pyproject.toml (PEP 621, table-style and Poetry dependencies).

    Raises:
        ManifestError: If the manifest is not valid TOML or has a malformed table.
    """
    try:
        data = tomllib.loads(_read_text(directory / "pyproject.toml"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError("pyproject.toml", f"invalid TOML: {e}") from e

    deps: dict[str, str] = {}

    def add_requirements(entries: Any) -> None:
        if isinstance(entries, list):
            for entry in entries:
                if isinstance(entry, str) and (parsed := parse_requirement(entry)):
                    deps[parsed[0]] = parsed[1]
        elif isinstance(entries, dict):
            deps.update({str(k): _version_string(v) for k, v in entries.items() if k != "python"})

    project = _table(data, "project", "pyproject.toml")
    for group in _table(project, "optional-dependencies", "pyproject.toml").values():
        add_requirements(group)
    for group in _table(data, "dependency-groups", "pyproject.toml").values():
        add_requirements(group)

    tool = _table(data, "tool", "pyproject.toml")
    poetry = _table(tool, "poetry", "pyproject.toml")
    add_requirements(poetry.get("dev-dependencies"))
    for group in _table(poetry, "group", "pyproject.toml").values():
        if isinstance(group, dict):
            add_requirements(group.get("dependencies"))
    add_requirements(poetry.get("dependencies"))
    add_requirements(project.get("dependencies"))

    declared = None
    for tool_name, manager in TOOL_MANAGERS:
        if tool_name in tool:
            declared = manager
            break

    name = project.get("name") or poetry.get("name")
    return deps, declared, name if isinstance(name, str) else None


def parse_requirements_txt(directory: Path) -> dict[str, str]:
    """Parse requirements.txt into a dependency mapping."""
    deps: dict[str, str] = {}
    for line in _read_text(directory / "requirements.txt").splitlines():
        if parsed := parse_requirement(line):
            deps[parsed[0]] = parsed[1]
    return deps


def parse_cargo(directory: Path) -> tuple[dict[str, str], str | None]:
    """Parse Cargo.toml dependencies.

    Raises:
        ManifestError: If the manifest is not valid TOML or has a malformed table.
    """
    try:
        data = tomllib.loads(_read_text(directory / "Cargo.toml"))
    except tomllib.TOMLDecodeError as e:
        raise ManifestError("Cargo.toml", f"invalid TOML: {e}") from e

    deps: dict[str, str] = {}
    for section in ("dev-dependencies", "build-dependencies", "dependencies"):
        deps.update({str(k): _version_string(v) for k, v in _table(data, section, "Cargo.toml").items()})
    name = _table(data, "package", "Cargo.toml").get("name")
    return deps, name if isinstance(name, str) else None


def parse_go_mod(directory: Path) -> tuple[dict[str, str], str | None]:
    """Parse go.mod require directives."""
    content = _read_text(directory / "go.mod")
    deps: dict[str, str] = {}
    for block in GO_REQUIRE_BLOCK_RE.findall(content):
        deps.update(dict(GO_REQUIRE_RE.findall(block)))
    deps.update(dict(GO_REQUIRE_LINE_RE.findall(content)))
    module = re.search(r"^module\s+(\S+)", content, re.MULTILINE)
    return deps, module.group(1) if module else None


def _lock_file_manager(
    directory: Path, lock_files: tuple[tuple[str, PackageManager], ...]
) -> PackageManager | None:
    for filename, manager in lock_files:
        if (directory / filename).exists():
            return manager
    return None


def infer_node_language(directory: Path, extension_counts: dict[str, int]) -> Language:
    """TypeScript when configured or dominant in the workspace files."""
    ts_count = sum(extension_counts.get(ext, 0) for ext in TS_EXTENSIONS)
    js_count = sum(extension_counts.get(ext, 0) for ext in JS_EXTENSIONS)
    if (directory / "tsconfig.json").exists() or ts_count > js_count:
        return Language.TYPESCRIPT
    return Language.JAVASCRIPT


def _owning_root(rel_dir: str, roots: Collection[str]) -> str | None:
    """Deepest workspace root enclosing a directory."""
    current = rel_dir
    while current not in roots:
        if current == ".":
            return None
        current = posixpath.dirname(current) or "."
    return current


def _build_workspace(
    manifest: str,
    directory: Path,
    rel_dir: str,
    extension_counts: dict[str, int],
) -> Workspace | None:
    """Build a workspace for one manifest, or None when it is merged elsewhere."""
    if manifest == "package.json":
        deps, declared, name = parse_package_json(directory)
        manager = _lock_file_manager(directory, NODE_LOCK_FILES) or declared or PackageManager.NPM
        return Workspace(rel_dir, infer_node_language(directory, extension_counts), manager, deps, name)

    if manifest == "pyproject.toml":
        deps, declared, name = parse_pyproject(directory)
        if (directory / "requirements.txt").exists():
            deps = {**parse_requirements_txt(directory), **deps}
        manager = _lock_file_manager(directory, PYTHON_LOCK_FILES) or declared or PackageManager.PIP
        return Workspace(rel_dir, Language.PYTHON, manager, deps, name)

    if manifest == "requirements.txt":
        if (directory / "pyproject.toml").exists():
            return None
        manager = _lock_file_manager(directory, PYTHON_LOCK_FILES) or PackageManager.PIP
        return Workspace(rel_dir, Language.PYTHON, manager, parse_requirements_txt(directory))

    if manifest == "Cargo.toml":
        deps, name = parse_cargo(directory)
        return Workspace(rel_dir, Language.RUST, PackageManager.CARGO, deps, name)

    deps, name = parse_go_mod(directory)
    return Workspace(rel_dir, Language.GO, PackageManager.GO, deps, name)


def scan_tree(
    root: Path, ignore_dirs: Collection[str] = ()
) -> tuple[dict[str, list[str]], dict[str, dict[str, int]]]:
    """Collect manifests and script extension counts in one walk.

    Returns:
        Tuple of (workspace root -> manifest names in priority order,
        workspace root -> TS/JS extension counts). Each script file counts
        toward its deepest enclosing workspace only.
    """
    found: dict[str, set[str]] = {}
    scripts: list[tuple[str, str]] = []
    for walked in walk_files(root, ignore_dirs):
        if walked.name in MANIFEST_FILES:
            found.setdefault(walked.rel_dir, set()).add(walked.name)
        ext = walked.path.suffix.lower()
        if ext in TS_EXTENSIONS or ext in JS_EXTENSIONS:
            scripts.append((walked.rel_dir, ext))

    ordered = sorted(found, key=lambda r: (r != ".", r))
    manifests = {r: [m for m in MANIFEST_FILES if m in found[r]] for r in ordered}

    counts: dict[str, dict[str, int]] = {r: {} for r in ordered}
    for rel_dir, ext in scripts:
        owner = _owning_root(rel_dir, counts)
        if owner is not None:
            counts[owner][ext] = counts[owner].get(ext, 0) + 1
    return manifests, counts


def discover_workspaces(
    root: Path, ignore_dirs: Collection[str] = ()
) -> tuple[list[Workspace], list[str]]:
    """Resolve every workspace under root.

    Malformed manifests are skipped with a warning; a missing root yields
    no workspaces.

    Args:
        root: Scan root directory.
        ignore_dirs: Directory names never searched.

    Returns:
        Tuple of (workspaces, non-fatal warnings).
    """
    if not root.is_dir():
        return [], []

    manifests, counts = scan_tree(root, ignore_dirs)
    workspaces: list[Workspace] = []
    warnings: list[str] = []

    for rel_dir, names in manifests.items():
        directory = root if rel_dir == "." else root / rel_dir
        for manifest in names:
            try:
                workspace = _build_workspace(manifest, directory, rel_dir, counts[rel_dir])
            except ManifestError as e:
                message = f"Skipping workspace {rel_dir}: {e}"
                logger.warning(message)
                warnings.append(message)
                continue
            if workspace is not None:
                workspaces.append(workspace)

    return workspaces, warnings


def resolve_workspaces(root: Path, ignore_dirs: Collection[str] = ()) -> list[Workspace]:
    """Resolve workspaces, discarding warnings."""
    return discover_workspaces(root, ignore_dirs)[0]
