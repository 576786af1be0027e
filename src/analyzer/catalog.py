"""Pattern catalog - detectors for hand-rolled library functionality.

TIER 2: May import from core, lib.

The catalog defines WHAT to detect, never what to recommend. Each entry is
assigned to its most specific domain; parent domains only hold patterns no
child domain fits.

Every "any character" span is bounded ({0,N}) so a single pathological
file cannot make a pattern backtrack without limit.
"""

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from fnmatch import fnmatchcase
from posixpath import basename

from core.errors import CatalogError
from core.models import PatternDefinition
from core.ports import MatchSpan, verify_detector
from core.types import Domain, most_specific_domain

# File globs
JSX = ("**/*.tsx", "**/*.jsx")
JS_TS = ("**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx")
TS_JS = ("**/*.ts", "**/*.js")
TS_JS_PY = ("**/*.ts", "**/*.js", "**/*.py")
TEST_FILES = ("**/*.test.ts", "**/*.test.js", "**/*.spec.ts", "**/*.spec.js")
MODULES = ("**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx", "**/*.mjs", "**/*.cjs", "**/*.py")
INDEX_FILES = (
    "**/index.ts",
    "**/index.tsx",
    "**/index.js",
    "**/index.jsx",
    "**/index.mjs",
    "**/__init__.py",
)


@dataclass(frozen=True)
class RegexDetector:
    """Detector backed by a compiled regular expression."""

    pattern: re.Pattern[str]

    def find(self, path: str, content: str) -> MatchSpan | None:
        match = self.pattern.search(content)
        if match is None:
            return None
        return MatchSpan(match.start(), match.end())


def rx(source: str, flags: int = 0) -> RegexDetector:
    """Compile a regex detector."""
    return RegexDetector(re.compile(source, flags))


def glob_matches(rel_path: str, pattern: str) -> bool:
    """Match a forward-slash path against a glob.

    ``**/`` also matches zero directories, so ``**/*.ts`` covers files at
    the top level.
    """
    if fnmatchcase(rel_path, pattern):
        return True
    if pattern.startswith("**/"):
        rest = pattern[3:]
        return fnmatchcase(basename(rel_path), rest) or fnmatchcase(rel_path, rest)
    return False


def applies_to(pattern: PatternDefinition, rel_path: str) -> bool:
    """Check whether a pattern's file globs accept a path."""
    return any(glob_matches(rel_path, glob) for glob in pattern.file_patterns)


def _pattern(
    pattern_id: str,
    domains: Domain | tuple[Domain, ...],
    description: str,
    file_patterns: tuple[str, ...],
    code_patterns: list[RegexDetector],
    confidence: float,
) -> PatternDefinition:
    candidates = domains if isinstance(domains, tuple) else (domains,)
    return PatternDefinition(
        id=pattern_id,
        domain=most_specific_domain(*candidates),
        description=description,
        file_patterns=file_patterns,
        code_patterns=tuple(code_patterns),
        confidence_base=confidence,
    )


class PatternCatalog:
    """Immutable, order-stable registry of pattern definitions.

    Raises:
        CatalogError: On duplicate ids, confidence outside [0, 1], a domain
            that is not a Domain member, or an entry without detectors.
    """

    def __init__(self, patterns: Iterable[PatternDefinition]) -> None:
        self._patterns = tuple(patterns)
        self._by_id: dict[str, PatternDefinition] = {}
        for pattern in self._patterns:
            self._validate(pattern)
            self._by_id[pattern.id] = pattern

    def _validate(self, pattern: PatternDefinition) -> None:
        if pattern.id in self._by_id:
            raise CatalogError(f"Duplicate pattern id: {pattern.id}")
        if not 0.0 <= pattern.confidence_base <= 1.0:
            raise CatalogError(
                f"Pattern {pattern.id} has confidence {pattern.confidence_base} outside [0, 1]"
            )
        if not isinstance(pattern.domain, Domain):
            raise CatalogError(f"Pattern {pattern.id} has unknown domain {pattern.domain!r}")
        if not pattern.code_patterns:
            raise CatalogError(f"Pattern {pattern.id} has no code patterns")
        if not all(verify_detector(d) for d in pattern.code_patterns):
            raise CatalogError(f"Pattern {pattern.id} has a detector without find()")
        if not pattern.file_patterns:
            raise CatalogError(f"Pattern {pattern.id} has no file patterns")

    def __iter__(self) -> Iterator[PatternDefinition]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, pattern_id: object) -> bool:
        return pattern_id in self._by_id

    def get(self, pattern_id: str) -> PatternDefinition | None:
        return self._by_id.get(pattern_id)

    def patterns(self) -> list[PatternDefinition]:
        """All patterns in declaration order."""
        return list(self._patterns)

    def for_domain(self, domain: Domain | str) -> list[PatternDefinition]:
        """Patterns of one domain; unknown domains yield an empty list."""
        try:
            wanted = Domain(domain)
        except ValueError:
            return []
        return [p for p in self._patterns if p.domain is wanted]

    def domains(self) -> set[Domain]:
        return {p.domain for p in self._patterns}


def _entries() -> list[PatternDefinition]:
    """Build the default pattern list."""
    return [
        # -------------------------------------------------------------------
        # A. UX / Design
        # -------------------------------------------------------------------
        _pattern(
            "ux-manual-loading-states",
            (Domain.UX_COMPLETENESS, Domain.EMPTY_LOADING_ERROR_STATES),
            "Hand-rolled loading state management without skeleton/spinner library",
            JSX,
            [
                rx(r"isLoading\s*\?\s*.{0,200}?(?:Loading|Spinner|\.\.\.)", re.I),
                rx(r"useState\s*<\s*boolean\s*>\s*\(\s*(?:true|false)\s*\).{0,200}?loading", re.I),
            ],
            0.55,
        ),
        _pattern(
            "a11y-manual-click-handler-div",
            Domain.A11Y_ACCESSIBILITY,
            "Clickable div/span without keyboard accessibility",
            JSX,
            [
                rx(r"<div\s[^>]{0,300}onClick\s*=\s*\{"),
                rx(r"<span\s[^>]{0,300}onClick\s*=\s*\{"),
            ],
            0.6,
        ),
        _pattern(
            "a11y-manual-focus-management",
            Domain.A11Y_ACCESSIBILITY,
            "Hand-rolled focus management and keyboard trap",
            ("**/*.tsx", "**/*.jsx", "**/*.ts", "**/*.js"),
            [
                rx(r"\.focus\s*\(\s*\)[\s\S]{0,200}?(?:tabIndex|keyCode|keyDown)", re.I),
                rx(r'''addEventListener\s*\(\s*['"`]keydown['"`][\s\S]{0,200}?(?:Tab|Escape|27|9)\b'''),
                rx(r"document\s*\.\s*activeElement"),
            ],
            0.55,
        ),
        _pattern(
            "forms-manual-state-tracking",
            Domain.FORMS_UX,
            "Multiple useState hooks for individual form fields",
            JSX,
            [
                rx(
                    r'''const\s*\[\s*\w+,\s*set\w+\s*\]\s*=\s*useState\s*\(\s*['"`]{2}\s*\)'''
                    r"[\s\S]{0,200}?onChange"
                ),
                rx(
                    r"e\s*\.\s*target\s*\.\s*value[\s\S]{0,50}?"
                    r"set\w+\s*\(\s*e\s*\.\s*target\s*\.\s*value\s*\)"
                ),
            ],
            0.65,
        ),
        _pattern(
            "forms-manual-submit-handler",
            Domain.FORMS_UX,
            "Hand-rolled form submission with manual preventDefault and state collection",
            JSX,
            [
                rx(r"handleSubmit[\s\S]{0,100}?preventDefault\s*\(\s*\)[\s\S]{0,200}?fetch\s*\("),
                rx(r"onSubmit[\s\S]{0,100}?e\s*\.\s*preventDefault[\s\S]{0,200}?(?:setLoading|setError)"),
            ],
            0.6,
        ),
        _pattern(
            "validation-manual-form-errors",
            Domain.VALIDATION_FEEDBACK,
            "Hand-rolled form validation with manual error state tracking",
            ("**/*.tsx", "**/*.jsx", "**/*.ts", "**/*.js"),
            [
                rx(r'''setError\s*\(\s*['"`]'''),
                rx(r'''errors\s*\[\s*['"`]\w+['"`]\s*\]'''),
                rx(r"validate\w*\s*=\s*\(\s*\)\s*=>"),
            ],
            0.7,
        ),
        _pattern(
            "notifications-manual-alert",
            Domain.NOTIFICATIONS_INAPP,
            "Using window.alert/confirm/prompt instead of a toast/notification library",
            JS_TS,
            [
                rx(r"window\s*\.\s*alert\s*\("),
                rx(r"window\s*\.\s*confirm\s*\("),
                rx(r"window\s*\.\s*prompt\s*\("),
            ],
            0.75,
        ),
        _pattern(
            "design-hardcoded-colors",
            Domain.DESIGN_SYSTEM,
            "Hardcoded hex/rgb colors in JSX/TSX instead of CSS variables or design tokens",
            JSX,
            [
                rx(r'''(?:color|background|border|fill|stroke)\s*[:=]\s*['"`]#[0-9a-fA-F]{3,8}['"`]'''),
                rx(r'''(?:color|background|border)\s*[:=]\s*['"`]rgb\('''),
                rx(r"className\s*=.{0,300}?(?:bg|text|border)-\[#[0-9a-fA-F]{3,8}\]"),
            ],
            0.6,
        ),
        _pattern(
            "design-inline-styles",
            Domain.DESIGN_SYSTEM,
            "Inline style objects in JSX instead of utility classes or design tokens",
            JSX,
            [
                rx(r"style\s*=\s*\{\s*\{"),
                rx(r"style\s*=\s*\{[^}]{0,300}(?:padding|margin|fontSize|color|width|height)\s*:"),
            ],
            0.55,
        ),
        _pattern(
            "design-no-cn-utility",
            Domain.DESIGN_SYSTEM,
            "String concatenation for className instead of cn()/clsx/cva utility",
            JSX,
            [
                rx(r"className\s*=\s*\{[^}`]{0,300}`[^`]{0,300}\$\{"),
                rx(r'''className\s*=\s*\{[^}]{0,300}\+\s*['"`]'''),
                rx(r'''className\s*=\s*\{[^}?]{0,300}\?\s*['"`][^'"]{0,200}['"`]\s*:\s*['"`]'''),
            ],
            0.6,
        ),
        # -------------------------------------------------------------------
        # B. SEO / i18n / Content
        # -------------------------------------------------------------------
        _pattern(
            "seo-manual-meta-tags",
            Domain.SEO,
            "Hand-rolled <meta> tag injection via DOM manipulation",
            JS_TS,
            [
                rx(r'''document\s*\.\s*createElement\s*\(\s*['"`]meta['"`]\s*\)'''),
                rx(r"document\s*\.\s*head\s*\.\s*appendChild"),
                rx(r'''document\s*\.\s*querySelector\s*\(\s*['"`]meta\['''),
            ],
            0.75,
        ),
        _pattern(
            "seo-manual-sitemap",
            Domain.SEO,
            "Hand-rolled XML sitemap generation",
            ("**/*.ts", "**/*.js", "**/*.xml"),
            [
                rx(r"<\?xml\s+version"),
                rx(r"<urlset\s+xmlns"),
                rx(r"writeFileSync\s*\(.{0,200}?sitemap", re.I),
            ],
            0.8,
        ),
        _pattern(
            "i18n-manual-pluralization",
            Domain.I18N,
            "Hand-rolled pluralization logic (if/else or ternary on count)",
            JS_TS,
            [
                rx(r'''count\s*[=!]==?\s*1\s*\?\s*(['"`])[^'"`\n]{0,200}\1\s*:\s*(['"`])[^'"`\n]{0,200}\2'''),
                rx(
                    r'''\.length\s*[=!]==?\s*1\s*\?\s*(['"`])[^'"`\n]{0,200}\1\s*:\s*'''
                    r'''(['"`])[^'"`\n]{0,200}\2'''
                ),
            ],
            0.7,
        ),
        _pattern(
            "i18n-manual-locale-detection",
            Domain.I18N,
            "Manual navigator.language or Accept-Language header parsing",
            JS_TS,
            [
                rx(r"navigator\s*\.\s*language"),
                rx(r"accept-language", re.I),
                rx(r"toLocaleDateString\s*\("),
            ],
            0.65,
        ),
        _pattern(
            "content-manual-markdown-parsing",
            Domain.CONTENT_MARKETING,
            "Hand-rolled markdown parsing with regex or string manipulation",
            JS_TS,
            [
                rx(r"\.replace\s*\(\s*/\s*#"),
                rx(r"\.replace\s*\(\s*/\s*\\\*\\\*"),
                rx(r'''\.split\s*\(\s*['"`]\\n['"`]\s*\)\s*\.\s*map'''),
            ],
            0.65,
        ),
        _pattern(
            "content-manual-mdx-processing",
            Domain.CONTENT_MARKETING,
            "Hand-rolled MDX/markdown file processing pipeline",
            TS_JS,
            [
                rx(r"readFileSync\s*\(.{0,200}?\.mdx?\b", re.I),
                rx(r"glob\s*\(.{0,200}?\.mdx?\b", re.I),
                rx(r"frontmatter|gray-matter", re.I),
            ],
            0.6,
        ),
        # -------------------------------------------------------------------
        # C. Growth & Data
        # -------------------------------------------------------------------
        _pattern(
            "ab-test-manual-random-split",
            (Domain.GROWTH_HACKING, Domain.AB_TESTING_EXPERIMENTATION),
            "Hand-rolled A/B testing with Math.random() or cookie-based splits",
            JS_TS,
            [
                rx(r"Math\s*\.\s*random\s*\(\s*\)\s*[<>]=?\s*0?\.\s*5"),
                rx(r'''variant\s*=\s*['"`][AB]['"`]''', re.I),
                rx(r"experiment\s*[=:]\s*.{0,200}?random", re.I),
            ],
            0.7,
        ),
        _pattern(
            "analytics-manual-tracking",
            (Domain.GROWTH_HACKING, Domain.ANALYTICS_TRACKING),
            "Hand-rolled analytics/tracking calls instead of a product analytics SDK",
            JS_TS,
            [
                rx(r"window\s*\.\s*dataLayer\s*\.\s*push\s*\("),
                rx(r'''gtag\s*\(\s*['"`]event['"`]'''),
                rx(r'''fbq\s*\(\s*['"`]track['"`]'''),
                rx(r"navigator\s*\.\s*sendBeacon\s*\("),
            ],
            0.7,
        ),
        # -------------------------------------------------------------------
        # D. App / Frontend Architecture
        # -------------------------------------------------------------------
        _pattern(
            "agent-manual-tool-dispatch",
            Domain.AGENT_ARCHITECTURE,
            "Hand-rolled tool dispatch with switch/case or if/else chains",
            TS_JS_PY,
            [
                rx(r"switch\s*\(\s*tool(?:Name|_name|Id)\s*\)", re.I),
                rx(r'''if\s*\(\s*tool(?:Name|_name)\s*===?\s*['"`]''', re.I),
                rx(r"tool_map\s*\[", re.I),
            ],
            0.7,
        ),
        _pattern(
            "agent-manual-context-window",
            Domain.AGENT_ARCHITECTURE,
            "Hand-rolled context window management (token counting, truncation)",
            TS_JS_PY,
            [
                rx(r"token[_s]?\s*(?:count|length|limit)", re.I),
                rx(r"truncat(?:e|ion)\s*.{0,200}?(?:context|message|prompt)", re.I),
                rx(r"maxTokens?\s*[=:]", re.I),
            ],
            0.6,
        ),
        _pattern(
            "state-manual-usestate-chain",
            Domain.STATE_MANAGEMENT,
            "Multiple related useState hooks that should be a single store",
            JSX,
            [
                rx(
                    r"useState\s*\([^\n]{0,200}\);\s*\n\s*const\s*\[[^\]\n]{0,200}\]\s*=\s*"
                    r"useState\s*\([^\n]{0,200}\);\s*\n\s*const\s*\[[^\]\n]{0,200}\]\s*=\s*useState"
                ),
                rx(
                    r"const\s*\[\w+,\s*set\w+\]\s*=\s*useState[\s\S]{0,100}?"
                    r"const\s*\[\w+,\s*set\w+\]\s*=\s*useState[\s\S]{0,100}?"
                    r"const\s*\[\w+,\s*set\w+\]\s*=\s*useState"
                ),
            ],
            0.6,
        ),
        _pattern(
            "state-manual-context-provider",
            Domain.STATE_MANAGEMENT,
            "Hand-rolled React Context for global state management",
            ("**/*.tsx", "**/*.jsx", "**/*.ts", "**/*.js"),
            [
                rx(r"createContext\s*<[^(]{0,300}>\s*\("),
                rx(r"useReducer\s*\(\s*\w+Reducer"),
                rx(r"Provider\s+value\s*=\s*\{[\s\S]{0,300}?dispatch"),
            ],
            0.55,
        ),
        _pattern(
            "state-manual-redux-boilerplate",
            Domain.STATE_MANAGEMENT,
            "Redux boilerplate without Redux Toolkit (manual action creators, reducers)",
            TS_JS,
            [
                rx(r'''type\s*:\s*['"`][A-Z_]+['"`]\s*,\s*payload'''),
                rx(r"switch\s*\(\s*action\s*\.\s*type\s*\)"),
                rx(r"const\s+\w+\s*=\s*\(\s*state\s*=\s*initialState\s*,\s*action\s*\)"),
            ],
            0.75,
        ),
        _pattern(
            "data-fetch-useeffect",
            Domain.DATA_FETCHING_CACHING,
            "Manual data fetching with fetch/axios inside useEffect",
            JSX,
            [
                rx(r"useEffect\s*\(\s*\(\s*\)\s*=>\s*\{[\s\S]{0,200}?fetch\s*\("),
                rx(r"useEffect\s*\(\s*\(\s*\)\s*=>\s*\{[\s\S]{0,200}?axios\s*\.\s*get"),
                rx(r"useEffect\s*\(\s*\(\s*\)\s*=>\s*\{[\s\S]{0,100}?setLoading\s*\(\s*true\s*\)"),
            ],
            0.7,
        ),
        _pattern(
            "data-fetch-manual-cache",
            Domain.DATA_FETCHING_CACHING,
            "Hand-rolled client-side data cache with Map or object",
            JS_TS,
            [
                rx(
                    r"new\s+Map\s*<[^>\n]{0,200}>\s*\(\s*\)[\s\S]{0,200}?\.set\s*\("
                    r"[\s\S]{0,100}?\.get\s*\("
                ),
                rx(r"cache\s*\[\s*\w+\s*\]\s*=[\s\S]{0,100}?cache\s*\[\s*\w+\s*\]"),
                rx(r"const\s+cache\s*=\s*(?:new\s+Map|\{\})"),
            ],
            0.6,
        ),
        _pattern(
            "data-fetch-manual-retry",
            Domain.DATA_FETCHING_CACHING,
            "Hand-rolled fetch retry logic with loops or recursion",
            TS_JS,
            [
                rx(r"retry\s*[<>=]\s*\d+[\s\S]{0,200}?fetch\s*\(", re.I),
                rx(r"for\s*\(\s*let\s+\w+\s*=\s*0[\s\S]{0,200}?fetch\s*\("),
                rx(r"attempts?\s*[+\-]=\s*1[\s\S]{0,100}?(?:fetch|axios)", re.I),
            ],
            0.7,
        ),
        _pattern(
            "error-manual-error-boundary",
            Domain.ERROR_HANDLING_RESILIENCE,
            "Hand-rolled error boundary class component",
            ("**/*.tsx", "**/*.jsx", "**/*.ts", "**/*.js"),
            [
                rx(r"componentDidCatch\s*\("),
                rx(r"getDerivedStateFromError\s*\("),
                rx(r"class\s+\w*ErrorBoundary\s+extends\s+(?:React\.)?Component"),
            ],
            0.8,
        ),
        _pattern(
            "error-manual-result-type",
            Domain.ERROR_HANDLING_RESILIENCE,
            "Hand-rolled Result/Either type for error handling",
            TS_JS,
            [
                rx(r"type\s+Result\s*<[^=]{0,200}>\s*=\s*\{?\s*(?:success|ok|data|error)", re.I),
                rx(r"interface\s+(?:Result|Either)\s*<[^{]{0,200}>\s*\{", re.I),
                rx(
                    r"\{\s*ok\s*:\s*true[\s\S]{0,50}?data\s*:[\s\S]{0,100}?"
                    r"\{\s*ok\s*:\s*false[\s\S]{0,50}?error\s*:"
                ),
            ],
            0.65,
        ),
        _pattern(
            "realtime-manual-websocket",
            Domain.REALTIME_COLLABORATION,
            "Hand-rolled WebSocket connection management",
            JS_TS,
            [
                rx(r"new\s+WebSocket\s*\("),
                rx(r"\.onmessage\s*=\s*"),
                rx(r"\.send\s*\(\s*JSON\s*\.\s*stringify"),
            ],
            0.65,
        ),
        _pattern(
            "upload-manual-filereader",
            Domain.FILE_UPLOAD_MEDIA,
            "Hand-rolled file reading with FileReader API",
            JS_TS,
            [
                rx(r"new\s+FileReader\s*\(\s*\)"),
                rx(r"readAsDataURL\s*\("),
                rx(r"readAsArrayBuffer\s*\("),
            ],
            0.6,
        ),
        _pattern(
            "upload-manual-drag-drop",
            Domain.FILE_UPLOAD_MEDIA,
            "Hand-rolled drag-and-drop file upload handling",
            ("**/*.tsx", "**/*.jsx", "**/*.ts", "**/*.js"),
            [
                rx(r'''addEventListener\s*\(\s*['"`](?:dragover|dragenter|drop)['"`]'''),
                rx(r"onDrop\s*=\s*\{[\s\S]{0,200}?dataTransfer\s*\.\s*files"),
                rx(r"e\s*\.\s*dataTransfer\s*\.\s*files"),
            ],
            0.65,
        ),
        # -------------------------------------------------------------------
        # E. Backend / Platform
        # -------------------------------------------------------------------
        _pattern(
            "db-manual-raw-sql",
            Domain.DATABASE_ORM_MIGRATIONS,
            "Hand-rolled raw SQL queries with string interpolation",
            TS_JS,
            [
                rx(r"`SELECT\s[^`]{0,500}?FROM\s[^`$]{0,500}\$\{", re.I),
                rx(r"`INSERT\s+INTO\s[^`$]{0,500}\$\{", re.I),
                rx(r"`UPDATE\s[^`]{0,500}?SET\s[^`$]{0,500}\$\{", re.I),
                rx(r'''query\s*\(\s*['"`](?:SELECT|INSERT|UPDATE|DELETE)\b''', re.I),
            ],
            0.7,
        ),
        _pattern(
            "db-manual-migration-script",
            Domain.DATABASE_ORM_MIGRATIONS,
            "Hand-rolled database migration with CREATE TABLE / ALTER TABLE",
            ("**/*.ts", "**/*.js", "**/*.sql"),
            [
                rx(r"CREATE\s+TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?\w+", re.I),
                rx(r"ALTER\s+TABLE\s+\w+\s+(?:ADD|DROP|MODIFY)", re.I),
                rx(r'''\.exec\s*\(\s*['"`](?:CREATE|ALTER|DROP)\s''', re.I),
            ],
            0.65,
        ),
        _pattern(
            "ratelimit-manual-counter",
            Domain.CACHING_RATE_LIMIT,
            "Hand-rolled rate limiting with in-memory counters or timestamps",
            TS_JS,
            [
                rx(r"requestCount\s*[+]=\s*1", re.I),
                rx(r"rateLimi(?:t|ter)", re.I),
                rx(r"new\s+Map\s*\(\s*\).{0,200}?(?:timestamp|count|window)", re.I),
            ],
            0.65,
        ),
        _pattern(
            "feature-flags-manual-env",
            (Domain.GROWTH_HACKING, Domain.FEATURE_FLAGS_CONFIG),
            "Hand-rolled feature flag checks via environment variables or config objects",
            JS_TS,
            [
                rx(r"process\s*\.\s*env\s*\.\s*FEATURE_"),
                rx(r"featureFlags?\s*\["),
                rx(r"isFeatureEnabled\s*\("),
            ],
            0.6,
        ),
        # -------------------------------------------------------------------
        # F. Security / Compliance
        # -------------------------------------------------------------------
        _pattern(
            "auth-manual-jwt-handling",
            Domain.AUTH_SECURITY,
            "Hand-rolled JWT token creation/verification",
            TS_JS_PY,
            [
                rx(r'''atob\s*\(\s*.{0,200}?split\s*\(\s*['"`]\.['"`]\s*\)'''),
                rx(r'''Buffer\s*\.\s*from\s*\(.{0,200}?['"`]base64['"`]\s*\)'''),
                rx(r"jwt\s*\.\s*sign\s*\(", re.I),
                rx(r"createHmac\s*\("),
            ],
            0.75,
        ),
        _pattern(
            "security-manual-headers",
            Domain.SECURITY_HARDENING,
            "Hand-rolled security headers instead of helmet/middleware",
            TS_JS,
            [
                rx(r'''setHeader\s*\(\s*['"`]X-Frame-Options['"`]''', re.I),
                rx(r'''setHeader\s*\(\s*['"`]X-Content-Type-Options['"`]''', re.I),
                rx(r'''setHeader\s*\(\s*['"`]Content-Security-Policy['"`]''', re.I),
            ],
            0.7,
        ),
        # -------------------------------------------------------------------
        # G. Observability / Ops
        # -------------------------------------------------------------------
        _pattern(
            "observability-manual-logging",
            Domain.OBSERVABILITY,
            "Hand-rolled logging with console.log/console.error in production code",
            JS_TS,
            [rx(r"console\s*\.\s*(?:log|error|warn|info)\s*\(")],
            0.55,
        ),
        _pattern(
            "error-monitoring-manual-tracking",
            (Domain.OBSERVABILITY, Domain.ERROR_MONITORING),
            "Hand-rolled error tracking with try/catch and HTTP reporting",
            JS_TS,
            [
                rx(r"catch\s*\(\s*\w+\s*\)\s*\{[^}]{0,300}fetch\s*\("),
                rx(r"window\s*\.\s*onerror"),
                rx(r'''process\s*\.\s*on\s*\(\s*['"`]uncaughtException['"`]'''),
            ],
            0.7,
        ),
        _pattern(
            "metrics-manual-timing",
            (Domain.OBSERVABILITY, Domain.LOGGING_TRACING_METRICS),
            "Hand-rolled performance timing with Date.now() or performance.now()",
            JS_TS,
            [
                rx(r"const\s+\w*[Ss]tart\w*\s*=\s*(?:Date|performance)\s*\.\s*now\s*\(\s*\)"),
                rx(r"(?:Date|performance)\s*\.\s*now\s*\(\s*\)\s*-\s*\w*[Ss]tart"),
                rx(r"console\s*\.\s*time\s*\("),
            ],
            0.55,
        ),
        _pattern(
            "metrics-manual-structured-log",
            (Domain.OBSERVABILITY, Domain.LOGGING_TRACING_METRICS),
            "Hand-rolled structured logging with JSON.stringify",
            TS_JS,
            [
                rx(r"console\s*\.\s*(?:log|info)\s*\(\s*JSON\s*\.\s*stringify\s*\("),
                rx(r"console\s*\.\s*(?:log|info)\s*\(\s*\{[\s\S]{0,200}?(?:timestamp|level|message)", re.I),
            ],
            0.7,
        ),
        # -------------------------------------------------------------------
        # H. Delivery / Quality
        # -------------------------------------------------------------------
        _pattern(
            "test-manual-assertions",
            Domain.TESTING_STRATEGY,
            "Hand-rolled test assertions without a test framework",
            TEST_FILES,
            [
                rx(r"if\s*\([^)]{0,50}!==[^)]{0,50}\)\s*throw\s+new\s+Error"),
                rx(r"assert\s*\.\s*(?:equal|strictEqual|deepEqual)\s*\("),
                rx(r"console\s*\.\s*assert\s*\("),
            ],
            0.7,
        ),
        _pattern(
            "test-manual-mocks",
            Domain.TESTING_STRATEGY,
            "Hand-rolled mock/stub implementations",
            TEST_FILES,
            [
                rx(r"const\s+mock\w+\s*=\s*\(\s*\)\s*=>\s*(?:Promise\s*\.\s*resolve|\{)", re.I),
                rx(r"jest\s*\.\s*fn\s*\(\s*\)"),
                rx(r"sinon\s*\.\s*stub\s*\("),
            ],
            0.5,
        ),
        # -------------------------------------------------------------------
        # I. Performance
        # -------------------------------------------------------------------
        _pattern(
            "perf-unoptimized-images",
            Domain.PERFORMANCE_WEB_VITALS,
            "Using raw <img> tags instead of optimized image components",
            JSX,
            [
                rx(r"<img\s[^>]{0,300}src\s*=\s*\{"),
                rx(r'''<img\s[^>]{0,300}src\s*=\s*['"`](?:https?:|/)'''),
            ],
            0.5,
        ),
        # -------------------------------------------------------------------
        # J. AI Engineering
        # -------------------------------------------------------------------
        _pattern(
            "ai-manual-prompt-template",
            Domain.AI_MODEL_SERVING,
            "Hand-rolled prompt template string interpolation",
            ("**/*.ts", "**/*.tsx", "**/*.js", "**/*.jsx", "**/*.py"),
            [
                rx(
                    r"`[^`$]{0,300}\$\{[^}\n]{0,200}\}[^`]{0,300}`[^\n]{0,200}?"
                    r"(?:prompt|system|user|assistant)",
                    re.I,
                ),
                rx(
                    r'''\bf['"][^'"\n{]{0,200}\{[^}\n]{0,100}\}[^\n]{0,200}?(?:prompt|model|completion)''',
                    re.I,
                ),
                rx(r'''\.replace\s*\(\s*['"`]\{[^}\n]{0,200}\}['"`]'''),
            ],
            0.65,
        ),
        _pattern(
            "ai-manual-inference-http",
            Domain.AI_MODEL_SERVING,
            "Hand-rolled HTTP calls to model inference endpoints",
            TS_JS_PY,
            [
                rx(r'''fetch\s*\(\s*['"`][^\n]{0,200}?(?:openai|anthropic|huggingface|inference)''', re.I),
                rx(r'''axios\s*\.\s*post\s*\(\s*['"`][^\n]{0,200}?(?:completions|chat|generate)''', re.I),
                rx(r'''requests\s*\.\s*post\s*\(\s*['"`][^\n]{0,200}?(?:v1/|api/)''', re.I),
            ],
            0.7,
        ),
        # -------------------------------------------------------------------
        # K. Business domains
        # -------------------------------------------------------------------
        _pattern(
            "payments-manual-integration",
            Domain.PAYMENTS_BILLING,
            "Hand-rolled payment gateway HTTP integration",
            TS_JS_PY,
            [
                rx(r'''fetch\s*\(\s*['"`][^'"`\n]{0,200}?(?:stripe|paypal|checkout)[^'"`\n]{0,200}['"`]''', re.I),
                rx(r"payment[_-]?intent", re.I),
                rx(r"charge\s*\.\s*create", re.I),
            ],
            0.75,
        ),
        _pattern(
            "ecommerce-manual-tax-calculation",
            Domain.CROSS_BORDER_ECOMMERCE,
            "Hand-rolled tax/VAT calculation logic",
            TS_JS_PY,
            [
                rx(r"tax[_-]?rate\s*[=:]\s*0?\.\d+", re.I),
                rx(r"\bvat\s*[=:*]", re.I),
                rx(r"calculateTax\s*\(", re.I),
            ],
            0.65,
        ),
        # -------------------------------------------------------------------
        # L. Code organization
        # -------------------------------------------------------------------
        _pattern(
            "org-deep-relative-import",
            Domain.CODE_ORGANIZATION,
            "Relative import climbing three or more directories",
            MODULES,
            [
                rx(r'''(?:\bfrom|\bimport|\brequire)\s*\(?\s*['"`](?:\.\./){3,}'''),
                rx(r"^[ \t]*from\s+\.{4,}[\w.]*\s+import\b", re.M),
            ],
            0.6,
        ),
        _pattern(
            "org-barrel-reexport-wildcard",
            Domain.CODE_ORGANIZATION,
            "Wildcard re-export in an index/barrel file",
            INDEX_FILES,
            [
                rx(r'''\bexport\s+\*\s+(?:as\s+\w+\s+)?from\s+['"`]'''),
                rx(r"^[ \t]*from\s+\.[\w.]*\s+import\s+\*", re.M),
            ],
            0.5,
        ),
        _pattern(
            "org-catch-all-utils-import",
            Domain.CODE_ORGANIZATION,
            "Import from a catch-all utils/helpers directory",
            MODULES,
            [
                rx(r'''\bfrom\s+['"`](?:(?:\.{1,2}|@|~)/){1,10}(?:utils|helpers|misc|common|shared)/'''),
                rx(r"^[ \t]*from\s+\.+(?:utils|helpers|misc|common|shared)\b", re.M),
            ],
            0.55,
        ),
    ]


def default_catalog() -> PatternCatalog:
    """Build the default catalog (validated on construction)."""
    return PatternCatalog(_entries())


def get_pattern_catalog() -> list[PatternDefinition]:
    """Return the full, order-stable list of pattern definitions."""
    return default_catalog().patterns()


def get_patterns_for_domain(domain: Domain | str) -> list[PatternDefinition]:
    """Return patterns filtered to one domain."""
    return default_catalog().for_domain(domain)
