"""Design-system layer analysis for monorepos.

TIER 2: May import from core, lib.

A healthy design system splits into a token layer, a shared config layer
(Tailwind preset or similar) and a UI component layer. Workspaces are
classified by directory name or package name.
"""

import re
from pathlib import Path, PurePosixPath

from core.models import DesignSystemLayers, StructuralFinding, Workspace
from core.types import Domain, FindingType, Severity
from lib.logger import get_logger

logger = get_logger("design_system")

TAILWIND_CONFIG_FILES = (
    "tailwind.config.ts",
    "tailwind.config.js",
    "tailwind.config.cjs",
    "tailwind.config.mjs",
)

HEX_COLOR_RE = re.compile(r"""['"`]#(?:[0-9a-fA-F]{8}|[0-9a-fA-F]{6}|[0-9a-fA-F]{3,4})['"`]""")

UI_NAMES = frozenset({"ui", "components", "design-system"})


def _labels(workspace: Workspace) -> list[str]:
    """Directory and unscoped package names of a workspace, lowercased."""
    labels = [PurePosixPath(workspace.root).name.lower()]
    if workspace.name:
        labels.append(workspace.name.rsplit("/", 1)[-1].lower())
    return labels


def is_token_layer(workspace: Workspace) -> bool:
    return any("token" in label for label in _labels(workspace))


def is_config_layer(workspace: Workspace) -> bool:
    return any(
        keyword in label for label in _labels(workspace) for keyword in ("tailwind", "config", "preset")
    )


def is_ui_layer(workspace: Workspace) -> bool:
    return any(
        label in UI_NAMES or label.endswith("-ui") or label.startswith("ui-") for label in _labels(workspace)
    )


def classify_layers(workspaces: list[Workspace]) -> DesignSystemLayers:
    """Determine which layers the nested workspaces provide."""
    nested = [w for w in workspaces if w.root != "."]
    return DesignSystemLayers(
        has_tokens=any(is_token_layer(w) for w in nested),
        has_config=any(is_config_layer(w) for w in nested),
        has_ui=any(is_ui_layer(w) for w in nested),
    )


def find_hardcoded_config_values(root: Path, workspaces: list[Workspace]) -> list[StructuralFinding]:
    """Flag Tailwind configs that hardcode hex colours instead of tokens."""
    findings = []
    for workspace in sorted(workspaces, key=lambda w: w.root):
        for filename in TAILWIND_CONFIG_FILES:
            path = root / workspace.root / filename
            if not path.is_file():
                continue
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Cannot read {path}: {e}")
                continue

            count = len(HEX_COLOR_RE.findall(content))
            if not count:
                continue
            rel_path = filename if workspace.root == "." else f"{workspace.root}/{filename}"
            findings.append(
                StructuralFinding(
                    type=FindingType.HARDCODED_CONFIG_VALUES,
                    domain=Domain.DESIGN_SYSTEM,
                    severity=Severity.WARNING,
                    paths=(rel_path,),
                    description=f"{rel_path} hardcodes {count} hex colour values instead of design tokens",
                    metadata={"hexColorCount": count},
                )
            )
    return findings


def analyze_design_system(
    root: Path, workspaces: list[Workspace]
) -> tuple[list[StructuralFinding], DesignSystemLayers]:
    """Check design-system layering across monorepo workspaces.

    Args:
        root: Scan root directory.
        workspaces: Resolved workspaces (roots relative to ``root``).

    Returns:
        Tuple of (findings, detected layers).
    """
    layers = classify_layers(workspaces)
    ui_roots = tuple(sorted(w.root for w in workspaces if w.root != "." and is_ui_layer(w)))
    findings = []

    if layers.has_ui and not layers.has_tokens:
        findings.append(
            StructuralFinding(
                type=FindingType.MISSING_LAYER,
                domain=Domain.DESIGN_SYSTEM,
                severity=Severity.CRITICAL,
                paths=ui_roots,
                description="UI package found without a design token package",
                metadata={"missing": "tokens"},
            )
        )
    if layers.has_ui and not layers.has_config:
        findings.append(
            StructuralFinding(
                type=FindingType.MISSING_LAYER,
                domain=Domain.DESIGN_SYSTEM,
                severity=Severity.WARNING,
                paths=ui_roots,
                description="UI package found without a shared styling config package",
                metadata={"missing": "config"},
            )
        )

    findings.extend(find_hardcoded_config_values(root, workspaces))
    return findings, layers
