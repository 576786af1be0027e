"""Pytest configuration and shared fixtures."""

import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def write_file(tmp_path):
    """Return a helper that writes a file (creating parents) under tmp_path."""

    def _write(rel_path: str, content: str = "") -> Path:
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_json(write_file):
    """Return a helper that writes a JSON document."""

    def _write(rel_path: str, data: dict) -> Path:
        return write_file(rel_path, json.dumps(data))

    return _write


@pytest.fixture
def monorepo(write_json, write_file, tmp_path):
    """Create a three-package monorepo without a design token package."""
    write_json("package.json", {"name": "monorepo", "dependencies": {}})
    write_json("packages/ui/package.json", {"name": "@app/ui", "dependencies": {"react": "^18.0.0"}})
    write_file("packages/ui/src/index.ts", "export const Button = () => {};")
    write_json("packages/api/package.json", {"name": "@app/api", "dependencies": {"express": "^4.0.0"}})
    write_file("packages/api/src/server.ts", "export const server = {};")
    return tmp_path
