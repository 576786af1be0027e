"""Tests for analyzer/catalog.py - Pattern catalog."""

import re

import pytest

from analyzer.catalog import (
    PatternCatalog,
    RegexDetector,
    applies_to,
    default_catalog,
    get_pattern_catalog,
    get_patterns_for_domain,
    glob_matches,
    rx,
)
from core.errors import CatalogError
from core.models import PatternDefinition
from core.ports import MatchSpan, verify_detector
from core.types import DEFERRED_DOMAINS, Domain

REQUIRED_DOMAINS = [d for d in Domain if d not in DEFERRED_DOMAINS]


def make_pattern(pattern_id="p", confidence=0.5, domain=Domain.SEO, detectors=None):
    return PatternDefinition(
        id=pattern_id,
        domain=domain,
        description="test pattern",
        file_patterns=("**/*.ts",),
        code_patterns=tuple(detectors if detectors is not None else [rx(r"needle")]),
        confidence_base=confidence,
    )


def find(pattern_id: str, content: str, path: str = "src/file.ts") -> bool:
    """Return True when the given catalog entry matches content at path."""
    pattern = default_catalog().get(pattern_id)
    assert pattern is not None
    return applies_to(pattern, path) and any(d.find(path, content) for d in pattern.code_patterns)


class TestDefaultCatalog:
    """Tests for the default catalog contents."""

    def test_has_51_patterns(self):
        """Should define 51 detectors."""
        assert len(get_pattern_catalog()) == 51

    @pytest.mark.parametrize("domain", REQUIRED_DOMAINS, ids=lambda d: d.value)
    def test_every_non_deferred_domain_covered(self, domain):
        """Every domain except the deferred parents has a pattern."""
        assert get_patterns_for_domain(domain)

    def test_deferred_domains_have_no_patterns(self):
        """Deferred parent domains are left to the reasoning step."""
        for domain in DEFERRED_DOMAINS:
            assert get_patterns_for_domain(domain) == []

    def test_unique_ids(self):
        """All pattern ids should be unique."""
        ids = [p.id for p in get_pattern_catalog()]
        assert len(ids) == len(set(ids))

    def test_confidence_in_range(self):
        """All confidence values should lie in [0, 1]."""
        assert all(0.0 <= p.confidence_base <= 1.0 for p in get_pattern_catalog())

    def test_order_is_stable(self):
        """Two catalogs should list the same ids in the same order."""
        assert [p.id for p in get_pattern_catalog()] == [p.id for p in get_pattern_catalog()]

    def test_no_recommendation_fields(self):
        """Definitions should carry detection data only."""
        pattern = get_pattern_catalog()[0]
        for field_name in ("suggested_library", "suggested_version", "license", "alternatives"):
            assert not hasattr(pattern, field_name)

    def test_filter_by_domain_string(self):
        """Should filter by domain value string."""
        patterns = get_patterns_for_domain("i18n")
        assert patterns
        assert all(p.domain is Domain.I18N for p in patterns)

    def test_unknown_domain_returns_empty(self):
        """Should return [] for an unknown domain."""
        assert get_patterns_for_domain("nonexistent-domain") == []

    def test_code_organization_patterns(self):
        """Code organization has exactly three entries."""
        ids = {p.id for p in get_patterns_for_domain(Domain.CODE_ORGANIZATION)}
        assert ids == {
            "org-deep-relative-import",
            "org-barrel-reexport-wildcard",
            "org-catch-all-utils-import",
        }

    def test_child_domain_assigned(self):
        """Entries tagged with a parent and a child land in the child."""
        catalog = default_catalog()
        assert catalog.get("ux-manual-loading-states").domain is Domain.EMPTY_LOADING_ERROR_STATES
        assert catalog.get("ab-test-manual-random-split").domain is Domain.AB_TESTING_EXPERIMENTATION
        assert catalog.get("metrics-manual-timing").domain is Domain.LOGGING_TRACING_METRICS

    def test_detectors_satisfy_port(self):
        """Every detector should implement the Detector port."""
        for pattern in get_pattern_catalog():
            assert all(verify_detector(d) for d in pattern.code_patterns)


class TestPatternCatalogValidation:
    """Tests for PatternCatalog construction checks."""

    def test_duplicate_id_rejected(self):
        """Should raise CatalogError for duplicate ids."""
        with pytest.raises(CatalogError, match="Duplicate"):
            PatternCatalog([make_pattern("a"), make_pattern("a")])

    @pytest.mark.parametrize("confidence", [-0.1, 1.01])
    def test_confidence_out_of_range_rejected(self, confidence):
        """Should raise CatalogError for confidence outside [0, 1]."""
        with pytest.raises(CatalogError):
            PatternCatalog([make_pattern(confidence=confidence)])

    def test_unknown_domain_rejected(self):
        """Should raise CatalogError for a plain-string domain."""
        with pytest.raises(CatalogError, match="unknown domain"):
            PatternCatalog([make_pattern(domain="not-a-domain")])

    def test_empty_matchers_rejected(self):
        """Should raise CatalogError when no detectors are given."""
        with pytest.raises(CatalogError, match="no code patterns"):
            PatternCatalog([make_pattern(detectors=[])])

    def test_non_detector_rejected(self):
        """Should raise CatalogError for objects without find()."""
        with pytest.raises(CatalogError):
            PatternCatalog([make_pattern(detectors=[re.compile("x")])])

    def test_custom_detector_accepted(self):
        """Any object implementing find() is a detector."""

        class FirstLine:
            def find(self, path, content):
                return MatchSpan(0, 1) if content else None

        catalog = PatternCatalog([make_pattern(detectors=[FirstLine()])])
        assert len(catalog) == 1
        assert "p" in catalog


class TestRegexDetector:
    """Tests for RegexDetector."""

    def test_returns_span(self):
        """Should return the first match span."""
        detector = RegexDetector(re.compile(r"b+"))
        assert detector.find("x.ts", "abbbc bb") == MatchSpan(1, 4)

    def test_returns_none_without_match(self):
        """Should return None when nothing matches."""
        assert rx(r"zzz").find("x.ts", "abc") is None


class TestGlobMatches:
    """Tests for glob_matches()."""

    @pytest.mark.parametrize(
        ("path", "glob", "expected"),
        [
            ("src/a.ts", "**/*.ts", True),
            ("a.ts", "**/*.ts", True),
            ("src/deep/a.test.ts", "**/*.test.ts", True),
            ("src/a.tsx", "**/*.ts", False),
            ("src/components/index.ts", "**/index.ts", True),
            ("src/components/reexports.ts", "**/index.ts", False),
            ("pkg/__init__.py", "**/__init__.py", True),
        ],
    )
    def test_glob(self, path, glob, expected):
        """Should match globs against forward-slash paths."""
        assert glob_matches(path, glob) is expected


class TestDetectors:
    """Representative positive and negative matches."""

    def test_pluralization(self):
        """Should detect count ternaries."""
        assert find("i18n-manual-pluralization", "return count === 1 ? 'item' : 'items';")
        assert find("i18n-manual-pluralization", "const s = list.length !== 1 ? 's' : '';")

    def test_meta_tags(self):
        """Should detect DOM meta injection."""
        assert find("seo-manual-meta-tags", "const m = document.createElement('meta');")

    def test_random_split(self):
        """Should detect Math.random() splits."""
        assert find("ab-test-manual-random-split", "const v = Math.random() < 0.5 ? 'a' : 'b';")

    def test_jwt_base64(self):
        """Should detect manual JWT decoding."""
        code = "const payload = Buffer.from(token.split('.')[1], 'base64').toString();"
        assert find("auth-manual-jwt-handling", code)

    def test_console_logging(self):
        """Should detect console logging."""
        assert find("observability-manual-logging", "console.log('Processing order', order.id);")

    def test_hardcoded_colors_only_in_jsx(self):
        """Should match JSX files but not plain TS."""
        code = '<div className="bg-[#1a1a2e]">card</div>'
        assert find("design-hardcoded-colors", code, path="src/Card.tsx")
        assert not find("design-hardcoded-colors", code, path="src/card.ts")

    def test_inline_styles(self):
        """Should detect inline style objects."""
        assert find("design-inline-styles", "<div style={{ padding: '16px' }} />", path="src/Box.tsx")

    def test_conditional_class_names(self):
        """Should detect ternary className strings."""
        code = "<button className={active ? 'bg-blue-500' : 'bg-gray-500'}>x</button>"
        assert find("design-no-cn-utility", code, path="src/Button.tsx")

    def test_raw_sql_interpolation(self):
        """Should detect interpolated SQL template strings."""
        assert find("db-manual-raw-sql", "db.query(`SELECT * FROM users WHERE id = ${id}`);")

    def test_migration_sql_file(self):
        """Should scan .sql files for DDL."""
        assert find("db-manual-migration-script", "CREATE TABLE IF NOT EXISTS users (id int);", "db/001.sql")

    def test_sitemap_xml_file(self):
        """Should scan .xml files for sitemaps."""
        assert find("seo-manual-sitemap", '<?xml version="1.0"?><urlset xmlns="x">', "public/sitemap.xml")

    def test_python_prompt_fstring(self):
        """Should detect f-string prompt templates."""
        assert find("ai-manual-prompt-template", 'text = f"Answer {question}" + prompt_suffix', "bot/chat.py")

    def test_test_assertions_only_in_test_files(self):
        """Should restrict assertion patterns to test files."""
        code = "assert.equal(a, b);"
        assert find("test-manual-assertions", code, path="src/sum.test.ts")
        assert not find("test-manual-assertions", code, path="src/sum.ts")

    def test_vat_needs_assignment(self):
        """Should not flag words merely containing 'vat'."""
        assert find("ecommerce-manual-tax-calculation", "const vat = price * 0.2;")
        assert not find("ecommerce-manual-tax-calculation", "const private_key = 1; renovation();")

    def test_plain_code_matches_nothing(self):
        """A plain arithmetic module should not match any pattern."""
        code = "export function add(a: number, b: number): number {\n  return a + b;\n}\n"
        assert not any(find(p.id, code) for p in get_pattern_catalog())


class TestCodeOrganizationDetectors:
    """Tests for the code-organization detectors."""

    def test_deep_relative_import(self):
        """Three or more ../ hops are flagged."""
        assert find("org-deep-relative-import", "import { config } from '../../../config/app';")
        assert find("org-deep-relative-import", "const db = require('../../../lib/database');")

    def test_shallow_relative_import_not_flagged(self):
        """One or two hops are fine."""
        code = "import { theme } from '../theme';\nimport { cn } from '../../utils/cn';"
        assert not find("org-deep-relative-import", code)

    def test_python_deep_relative_import(self):
        """Four leading dots climb three packages."""
        assert find("org-deep-relative-import", "from ....settings import base\n", "app/a/b/c/views.py")
        assert not find("org-deep-relative-import", "from ..settings import base\n", "app/a/views.py")

    def test_wildcard_reexport_in_index(self):
        """export * in an index file is flagged."""
        code = "export * from './Button';\nexport * from './Card';"
        assert find("org-barrel-reexport-wildcard", code, path="src/components/index.ts")

    def test_wildcard_reexport_outside_index(self):
        """export * in a regular module is not flagged."""
        code = "export * from './Button';"
        assert not find("org-barrel-reexport-wildcard", code, path="src/components/reexports.ts")

    def test_python_star_import_in_init(self):
        """from .x import * in __init__.py is flagged."""
        assert find("org-barrel-reexport-wildcard", "from .models import *\n", "pkg/__init__.py")

    def test_catch_all_import(self):
        """Imports from utils/helpers folders are flagged."""
        assert find("org-catch-all-utils-import", "import { formatDate } from '../utils/formatDate';")
        assert find("org-catch-all-utils-import", "import { debounce } from '@/helpers/debounce';")
        assert not find("org-catch-all-utils-import", "import { Button } from '../components/Button';")
