"""Lib module - filesystem and configuration adapters.

TIER 1: May import from core only.
"""

from lib.config import ScanConfig, config_from_dict
from lib.logger import get_logger
from lib.walker import WalkedFile, has_extension, walk_files
from lib.workspace import discover_workspaces, parse_requirement, resolve_workspaces

__all__ = [
    "ScanConfig",
    "WalkedFile",
    "config_from_dict",
    "discover_workspaces",
    "get_logger",
    "has_extension",
    "parse_requirement",
    "resolve_workspaces",
    "walk_files",
]
