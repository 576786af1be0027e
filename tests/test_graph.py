"""Tests for analyzer/graph.py - Dependency graph builder."""

from analyzer.cycles import find_cycles
from analyzer.graph import (
    build_dependency_graph,
    extract_python_imports,
    extract_ts_imports,
    resolve_python_import,
    resolve_ts_import,
)


class TestExtractTsImports:
    """Tests for extract_ts_imports()."""

    def test_all_import_forms(self):
        """Should collect every static relative import form."""
        content = """
import React from 'react';
import Foo from './foo';
import { a, b } from "./named";
import * as ns from './namespace';
import Def, { c } from './mixed';
import './side-effect';
const lazy = import('./lazy');
const req = require('../required');
export { d } from './reexported';
export * from './everything';
import type { T } from './types';
"""
        assert extract_ts_imports(content) == [
            "./foo",
            "./named",
            "./namespace",
            "./mixed",
            "./side-effect",
            "./lazy",
            "../required",
            "./reexported",
            "./everything",
            "./types",
        ]

    def test_multiline_named_import(self):
        """Should handle named imports split across lines."""
        content = "import {\n  one,\n  two,\n} from './multi';\n"
        assert extract_ts_imports(content) == ["./multi"]

    def test_package_imports_ignored(self):
        """Should ignore bare and aliased package specifiers."""
        content = "import x from 'lodash';\nimport y from '@/lib/y';\nimport z from '@scope/pkg';"
        assert extract_ts_imports(content) == []

    def test_duplicates_collapsed(self):
        """Should list each specifier once."""
        assert extract_ts_imports("import a from './a';\nimport { b } from './a';") == ["./a"]


class TestExtractPythonImports:
    """Tests for extract_python_imports()."""

    def test_relative_imports_only(self):
        """Should return relative ImportFrom nodes."""
        content = "import os\nfrom pathlib import Path\nfrom .models import User\nfrom .. import utils\n"
        assert extract_python_imports(content) == [(1, "models", ["User"]), (2, None, ["utils"])]

    def test_syntax_error_returns_empty(self):
        """Should return [] for unparsable source."""
        assert extract_python_imports("def broken(:\n") == []


class TestResolveTsImport:
    """Tests for resolve_ts_import()."""

    def test_extension_resolution(self):
        """Should append source extensions."""
        nodes = {"src/a.ts", "src/b.tsx"}
        assert resolve_ts_import("src/a.ts", "./b", nodes) == "src/b.tsx"

    def test_index_resolution(self):
        """Should resolve a directory to its index file."""
        nodes = {"src/a.ts", "src/components/index.ts"}
        assert resolve_ts_import("src/a.ts", "./components", nodes) == "src/components/index.ts"

    def test_parent_directory(self):
        """Should resolve ../ specifiers."""
        nodes = {"src/lib/db.ts", "src/features/user.ts"}
        assert resolve_ts_import("src/features/user.ts", "../lib/db", nodes) == "src/lib/db.ts"

    def test_js_specifier_maps_to_ts_source(self):
        """Should resolve ESM .js specifiers to .ts sources."""
        nodes = {"src/a.ts", "src/b.ts"}
        assert resolve_ts_import("src/a.ts", "./b.js", nodes) == "src/b.ts"

    def test_escaping_root_dropped(self):
        """Should drop targets above the walk root."""
        assert resolve_ts_import("a.ts", "../outside", {"a.ts"}) is None

    def test_missing_target_dropped(self):
        """Should return None for unresolvable targets."""
        assert resolve_ts_import("src/a.ts", "./types", {"src/a.ts"}) is None


class TestResolvePythonImport:
    """Tests for resolve_python_import()."""

    def test_module_file(self):
        """Should resolve from .mod import x to mod.py."""
        nodes = {"pkg/a.py", "pkg/mod.py"}
        assert resolve_python_import("pkg/a.py", 1, "mod", ["x"], nodes) == ["pkg/mod.py"]

    def test_package_init(self):
        """Should resolve a package to its __init__.py."""
        nodes = {"pkg/sub/a.py", "pkg/core/__init__.py"}
        assert resolve_python_import("pkg/sub/a.py", 2, "core", ["x"], nodes) == ["pkg/core/__init__.py"]

    def test_from_dot_import_submodule(self):
        """Should resolve from . import name to the sibling module only."""
        nodes = {"pkg/a.py", "pkg/b.py", "pkg/__init__.py"}
        assert resolve_python_import("pkg/a.py", 1, None, ["b"], nodes) == ["pkg/b.py"]

    def test_from_dot_import_attribute(self):
        """A name that is not a submodule resolves to the package."""
        nodes = {"pkg/a.py", "pkg/__init__.py"}
        assert resolve_python_import("pkg/a.py", 1, None, ["VERSION"], nodes) == ["pkg/__init__.py"]

    def test_from_dot_import_mixed_names(self):
        """Submodules and package attributes resolve together without duplicates."""
        nodes = {"pkg/a.py", "pkg/b.py", "pkg/__init__.py"}
        resolved = resolve_python_import("pkg/a.py", 1, None, ["b", "X", "Y"], nodes)
        assert resolved == ["pkg/b.py", "pkg/__init__.py"]

    def test_too_many_levels_dropped(self):
        """Should drop imports climbing above the root."""
        assert resolve_python_import("a.py", 4, "x", ["y"], {"a.py", "x.py"}) == []


class TestBuildDependencyGraph:
    """Tests for build_dependency_graph()."""

    def test_every_file_is_a_node(self):
        """Files without imports still appear as nodes."""
        graph = build_dependency_graph({"a.ts": "import b from './b';", "b.ts": "export default 1;"})
        assert graph == {"a.ts": ["b.ts"], "b.ts": []}

    def test_self_edges_dropped(self):
        """A file importing itself adds no edge."""
        assert build_dependency_graph({"a.ts": "import a from './a';"}) == {"a.ts": []}

    def test_mixed_languages(self):
        """Python and TS files resolve independently."""
        sources = {
            "web/app.ts": "import { api } from './api';",
            "web/api.ts": "",
            "svc/main.py": "from .db import session\n",
            "svc/db.py": "",
        }
        graph = build_dependency_graph(sources)
        assert graph["web/app.ts"] == ["web/api.ts"]
        assert graph["svc/main.py"] == ["svc/db.py"]

    def test_package_reexport_is_not_a_cycle(self):
        """__init__ importing a module that imports a sibling adds no back edge."""
        sources = {
            "pkg/__init__.py": "from .mod import X\n",
            "pkg/mod.py": "from . import other\nX = 1\n",
            "pkg/other.py": "",
        }
        graph = build_dependency_graph(sources)
        assert graph == {
            "pkg/__init__.py": ["pkg/mod.py"],
            "pkg/mod.py": ["pkg/other.py"],
            "pkg/other.py": [],
        }
        assert find_cycles(graph) == []
