"""Core types and enums.

TIER 0: No internal imports, only Python stdlib.
"""

import re
from enum import Enum


class Domain(str, Enum):
    """Audit categories a pattern or finding belongs to.

    Parent domains (ux-completeness, growth-hacking, observability) only
    receive a pattern when no child domain fits.
    """

    # A. UX / Design
    UX_COMPLETENESS = "ux-completeness"
    EMPTY_LOADING_ERROR_STATES = "empty-loading-error-states"
    A11Y_ACCESSIBILITY = "a11y-accessibility"
    FORMS_UX = "forms-ux"
    VALIDATION_FEEDBACK = "validation-feedback"
    NOTIFICATIONS_INAPP = "notifications-inapp"
    DESIGN_SYSTEM = "design-system"
    # B. SEO / i18n / Content
    SEO = "seo"
    I18N = "i18n"
    CONTENT_MARKETING = "content-marketing"
    # C. Growth & Data
    GROWTH_HACKING = "growth-hacking"
    AB_TESTING_EXPERIMENTATION = "ab-testing-experimentation"
    ANALYTICS_TRACKING = "analytics-tracking"
    # D. App / Frontend Architecture
    AGENT_ARCHITECTURE = "agent-architecture"
    STATE_MANAGEMENT = "state-management"
    DATA_FETCHING_CACHING = "data-fetching-caching"
    ERROR_HANDLING_RESILIENCE = "error-handling-resilience"
    REALTIME_COLLABORATION = "realtime-collaboration"
    FILE_UPLOAD_MEDIA = "file-upload-media"
    CODE_ORGANIZATION = "code-organization"
    # E. Backend / Platform
    DATABASE_ORM_MIGRATIONS = "database-orm-migrations"
    CACHING_RATE_LIMIT = "caching-rate-limit"
    FEATURE_FLAGS_CONFIG = "feature-flags-config"
    # F. Security / Compliance
    AUTH_SECURITY = "auth-security"
    SECURITY_HARDENING = "security-hardening"
    # G. Observability / Ops
    OBSERVABILITY = "observability"
    ERROR_MONITORING = "error-monitoring"
    LOGGING_TRACING_METRICS = "logging-tracing-metrics"
    # H. Delivery / Quality
    TESTING_STRATEGY = "testing-strategy"
    # I. Performance
    PERFORMANCE_WEB_VITALS = "performance-web-vitals"
    # J. AI Engineering
    AI_MODEL_SERVING = "ai-model-serving"
    # K. Business domains
    PAYMENTS_BILLING = "payments-billing"
    CROSS_BORDER_ECOMMERCE = "cross-border-ecommerce"

    @property
    def parent(self) -> "Domain | None":
        """Parent domain, if this domain refines one."""
        return DOMAIN_PARENTS.get(self)

    @property
    def specificity(self) -> int:
        """Rank used to prefer child domains over standalone and parent ones."""
        if self in PARENT_DOMAINS:
            return 0
        return 2 if self in DOMAIN_PARENTS else 1


# Child -> parent relations between domains
DOMAIN_PARENTS: dict[Domain, Domain] = {
    Domain.EMPTY_LOADING_ERROR_STATES: Domain.UX_COMPLETENESS,
    Domain.A11Y_ACCESSIBILITY: Domain.UX_COMPLETENESS,
    Domain.FORMS_UX: Domain.UX_COMPLETENESS,
    Domain.VALIDATION_FEEDBACK: Domain.UX_COMPLETENESS,
    Domain.NOTIFICATIONS_INAPP: Domain.UX_COMPLETENESS,
    Domain.AB_TESTING_EXPERIMENTATION: Domain.GROWTH_HACKING,
    Domain.ANALYTICS_TRACKING: Domain.GROWTH_HACKING,
    Domain.FEATURE_FLAGS_CONFIG: Domain.GROWTH_HACKING,
    Domain.ERROR_MONITORING: Domain.OBSERVABILITY,
    Domain.LOGGING_TRACING_METRICS: Domain.OBSERVABILITY,
}

PARENT_DOMAINS = frozenset(DOMAIN_PARENTS.values())

# Domains left to the external reasoning step (no regex-detectable patterns)
DEFERRED_DOMAINS = frozenset({Domain.UX_COMPLETENESS, Domain.GROWTH_HACKING})


def most_specific_domain(*candidates: Domain) -> Domain:
    """Pick the single most specific domain among candidate tags.

    Ties keep declaration order, so the first listed candidate wins.

    Raises:
        ValueError: If no candidates are given.
    """
    if not candidates:
        raise ValueError("at least one candidate domain is required")
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.specificity > best.specificity:
            best = candidate
    return best


class NamingConvention(str, Enum):
    """File naming conventions, in classification precedence order."""

    PASCAL_CASE = "PascalCase"
    CAMEL_CASE = "camelCase"
    KEBAB_CASE = "kebab-case"
    SNAKE_CASE = "snake_case"
    OTHER = "other"

    @classmethod
    def classify(cls, name: str) -> "NamingConvention":
        """Classify a file name (extension included or not).

        Only the part before the first dot is considered, so
        ``Button.test.tsx`` is classified as ``Button``.
        """
        stem = name.split(".", 1)[0]
        for convention, pattern in _NAMING_RULES:
            if pattern.fullmatch(stem):
                return convention
        return cls.OTHER

    @staticmethod
    def is_single_word(name: str) -> bool:
        """A single lowercase word fits both kebab-case and snake_case."""
        return _SINGLE_WORD_RE.fullmatch(name.split(".", 1)[0]) is not None


_SINGLE_WORD_RE = re.compile(r"[a-z][a-z0-9]*")

_NAMING_RULES: tuple[tuple[NamingConvention, re.Pattern[str]], ...] = (
    (NamingConvention.PASCAL_CASE, re.compile(r"[A-Z][a-z0-9]+(?:[A-Z][a-z0-9]*)*")),
    (NamingConvention.CAMEL_CASE, re.compile(r"[a-z][a-z0-9]*(?:[A-Z][a-z0-9]*)+")),
    (NamingConvention.KEBAB_CASE, re.compile(r"[a-z][a-z0-9]*(?:-[a-z0-9]+)*")),
    (NamingConvention.SNAKE_CASE, re.compile(r"[a-z][a-z0-9]*(?:_[a-z0-9]+)+")),
)


class FindingType(str, Enum):
    """Structural finding categories."""

    GOD_DIRECTORY = "god-directory"
    MIXED_NAMING_CONVENTION = "mixed-naming-convention"
    DEEP_NESTING = "deep-nesting"
    BARREL_BLOAT = "barrel-bloat"
    CATCH_ALL_DIRECTORY = "catch-all-directory"
    CIRCULAR_DEPENDENCY = "circular-dependency"
    HARDCODED_CONFIG_VALUES = "hardcoded-config-values"
    MISSING_LAYER = "missing-layer"


class Severity(str, Enum):
    """Finding severities."""

    WARNING = "warning"
    CRITICAL = "critical"


class Language(str, Enum):
    """Workspace languages."""

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    RUST = "rust"
    GO = "go"
    UNKNOWN = "unknown"


class PackageManager(str, Enum):
    """Package managers inferred from manifests and lock files."""

    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"
    PIP = "pip"
    POETRY = "poetry"
    UV = "uv"
    PIPENV = "pipenv"
    PDM = "pdm"
    CARGO = "cargo"
    GO = "go"
