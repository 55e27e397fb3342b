"""Rule tables for report content checks.

Each table is plain data so rules can be added or tuned without touching the
check functions in checks.py.
"""

import re
from typing import NamedTuple

from report_qc.models import Category, Severity


class PatternRule(NamedTuple):
    """A regex that produces one finding when it matches."""
    pattern: re.Pattern
    severity: Severity
    category: Category
    message: str


# ── Boilerplate phrases (one IMPORTANT finding per phrase found) ───────────

BANNED_PHRASES = [
    "We'd love to chat",
    "We'd love to connect",
    "If this resonates",
    "No pitch, just",
    "Let us know if you'd like to discuss",
    "We think we could be a good fit",
    "In conclusion",
    "To summarize",
    "Moving forward",
]

# Counted with word boundaries; total over all words is compared to the limit.
WEASEL_WORDS = ["likely", "probably", "perhaps", "possibly", "might", "may be"]

# Counted once per distinct phrase present.
GENERIC_PHRASES = [
    "legal services",
    "high-quality",
    "world-class",
    "industry-leading",
    "best-in-class",
]

# ── Broken rendering ──────────────────────────────────────────────────────

PLACEHOLDER_MARKERS = ["{{", "}}", "[TODO]", "[PLACEHOLDER]", "Lorem ipsum"]

# Matched against visible text only, case-sensitive.
BROKEN_TOKEN_PATTERN = re.compile(r"(?<![\w-])(undefined|null|NaN)(?![\w-])")

EM_DASH_PATTERN = re.compile(r"—|&mdash;|&#8212;")

# ── Unrealistic claims ────────────────────────────────────────────────────

UNREALISTIC_CLAIMS = [
    PatternRule(
        re.compile(r"\bguarantee(?:d|s)?\b", re.IGNORECASE),
        Severity.IMPORTANT, Category.CREDIBILITY,
        "Absolute guarantee language",
    ),
    PatternRule(
        re.compile(r"\b100\s?%\s+(?:success|results|win rate|of cases)\b", re.IGNORECASE),
        Severity.IMPORTANT, Category.CREDIBILITY,
        "100% outcome claim",
    ),
    PatternRule(
        re.compile(r"\b(?:double|triple|quadruple)\s+your\s+(?:cases|clients|revenue|caseload|leads)\b", re.IGNORECASE),
        Severity.IMPORTANT, Category.CREDIBILITY,
        "Implausible multiplier claim",
    ),
    PatternRule(
        re.compile(r"\b(?:[5-9]|[1-9]\d+)\s?x\s+(?:more\s+)?(?:cases|clients|revenue|leads|growth|roi)\b", re.IGNORECASE),
        Severity.IMPORTANT, Category.CREDIBILITY,
        "Implausible multiplier claim",
    ),
    PatternRule(
        re.compile(r"\b(?:overnight success|risk[- ]free|never lose a case)\b", re.IGNORECASE),
        Severity.IMPORTANT, Category.CREDIBILITY,
        "Too-good-to-be-true promise",
    ),
]

# ── Structure and visual markers ──────────────────────────────────────────

FLOW_MARKER = "→"
FLOW_MARKER_ENTITIES = ("&rarr;", "&#8594;")
EMPHASIS_TAGS = ["strong", "b", "em"]

GAP_SECTION_CLASS = "gap-card"
HERO_TOTAL_CLASS = "hero-total"
GAP_COST_CLASS = "gap-cost"
COMPETITOR_CLASS_FRAGMENT = "competitor"

RESPONSIVE_PATTERN = re.compile(r"@media|name=[\"']viewport[\"']", re.IGNORECASE)
FONT_FAMILY_PATTERN = re.compile(r"font-family\s*:", re.IGNORECASE)

# ── Money figures ─────────────────────────────────────────────────────────

MONEY_PATTERN = re.compile(
    r"[$£€]\s?(\d{1,3}(?:,\d{3})+|\d+(?:\.\d+)?)\s*([KkMm])?(?![\w])"
)

# ── Verbose client labels (deterministic pre-fix) ─────────────────────────

VERBOSE_PHRASE_FIXES = [
    # divorce
    (r"individual going through a divorce", "divorcing client"),
    (r"individual going through divorce", "divorcing client"),
    (r"person going through a divorce", "divorcing client"),
    (r"person going through divorce", "divorcing client"),
    (r"someone going through a divorce", "divorcing client"),
    (r"someone going through divorce", "divorcing client"),
    (r"people going through a divorce", "divorcing clients"),
    (r"people going through divorce", "divorcing clients"),
    (r"individuals going through divorce", "divorcing clients"),
    # family law
    (r"individual dealing with a family matter", "family law client"),
    (r"person dealing with a family matter", "family law client"),
    (r"individual facing a family issue", "family law client"),
    # estate planning
    (r"family member dealing with estate", "someone planning their estate"),
    (r"individual planning their estate", "estate planning client"),
    (r"person planning their estate", "estate planning client"),
    # immigration
    (r"individual facing immigration issues", "immigration client"),
    (r"person facing immigration issues", "immigration client"),
    (r"individual dealing with immigration", "immigration client"),
    # personal injury
    (r"individual injured in an accident", "accident victim"),
    (r"person injured in an accident", "accident victim"),
    (r"individual who was injured", "accident victim"),
    # planning ahead
    (r"individuals planning ahead", "potential clients"),
    (r"individual planning ahead", "potential client"),
    (r"person planning ahead", "potential client"),
    (r"people planning ahead", "potential clients"),
    (r"someone planning ahead", "potential client"),
    # general
    (r"individual with a legal problem", "potential client"),
    (r"person with a legal problem", "potential client"),
    (r"individual seeking legal help", "potential client"),
    (r"person seeking legal help", "potential client"),
    # catch-all, must stay last
    (r"\ban individual\b", "a potential client"),
    (r"\ba individual\b", "a potential client"),
]
