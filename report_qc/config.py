"""Central configuration for the report QC pipeline."""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, default))


def _env_float(name: str, default: float) -> float:
    return float(os.getenv(name, default))


# ── Paths (relative to the working directory) ──────────────────────────────
QC_RESULT_PATH = Path(os.getenv("QC_RESULT_PATH", "qc-result.json"))
ITERATIVE_RESULT_PATH = Path(os.getenv("ITERATIVE_RESULT_PATH", "iterative-qc-result.json"))
IMPROVEMENT_NOTES_PATH = Path(os.getenv("IMPROVEMENT_NOTES_PATH", "improvement-notes.txt"))

# ── API Keys ───────────────────────────────────────────────────────────────
ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY", "")

# ── Claude settings ────────────────────────────────────────────────────────
QC_MODEL = os.getenv("QC_MODEL", "claude-haiku-4-5-20251001")  # AI analysis phase
FIX_MODEL = os.getenv("FIX_MODEL", "claude-sonnet-4-5-20250929")  # guidance + data fixes
LIGHT_MODEL = os.getenv("LIGHT_MODEL", "claude-haiku-4-5-20251001")  # practice content
QC_TEMPERATURE = 0.0

LIGHT_TIMEOUT = _env_float("QC_LIGHT_TIMEOUT", 15.0)  # seconds
HEAVY_TIMEOUT = _env_float("QC_HEAVY_TIMEOUT", 60.0)
LLM_MAX_RETRIES = _env_int("QC_LLM_MAX_RETRIES", 2)  # overload / rate limit only
LLM_RETRY_DELAY = _env_float("QC_LLM_RETRY_DELAY", 2.0)  # fixed, no backoff

AI_TEXT_BUDGET = _env_int("QC_AI_TEXT_BUDGET", 30000)  # chars of report text sent to the model
AI_ANALYSIS_MAX_TOKENS = 3000
GUIDANCE_MAX_TOKENS = 2000
FIX_MAX_TOKENS = 4000
PRACTICE_CONTENT_MAX_TOKENS = 500
GUIDANCE_EXCERPT_CHARS = 3000

# ── Iteration controller ───────────────────────────────────────────────────
MAX_ITERATIONS = _env_int("QC_MAX_ITERATIONS", 5)
ROUND_DELAY = _env_float("QC_ROUND_DELAY", 2.0)  # seconds between rounds
REPORT_RENDER_COMMAND = os.getenv("REPORT_RENDER_COMMAND", "")
RENDER_TIMEOUT = _env_float("QC_RENDER_TIMEOUT", 300.0)

# ── Decision policy ────────────────────────────────────────────────────────
# Calibration of these thresholds is product-specific; see DESIGN.md.
CRITICAL_TOLERANCE = 0
IMPORTANT_TOLERANCE = _env_int("QC_IMPORTANT_TOLERANCE", 1)

# ── Research data thresholds ───────────────────────────────────────────────
MIN_FIRM_NAME_LENGTH = _env_int("QC_MIN_FIRM_NAME_LENGTH", 3)
PLACEHOLDER_FIRM_NAMES = {"unknown", "unknown firm", "null", "undefined", "n/a"}
GENERIC_PRACTICE_AREAS = {"legal services"}
MIN_COMPETITORS = _env_int("QC_MIN_COMPETITORS", 3)
MIN_COMPETITOR_NAME_LENGTH = _env_int("QC_MIN_COMPETITOR_NAME_LENGTH", 5)
MAX_REVIEW_COUNT = _env_int("QC_MAX_REVIEW_COUNT", 10000)
MAX_RATING = _env_float("QC_MAX_RATING", 5.0)
US_COUNTRY_NAMES = {"", "us", "usa", "u.s.", "u.s.a.", "united states", "united states of america"}

# ── Report content thresholds ──────────────────────────────────────────────
MATH_TOLERANCE = _env_float("QC_MATH_TOLERANCE", 0.05)  # 5% of the hero total
ROUND_FIGURE_UNIT = _env_int("QC_ROUND_FIGURE_UNIT", 10000)  # $10K; also covers $20K / $30K / $50K multiples
REQUIRED_GAP_SECTIONS = _env_int("QC_REQUIRED_GAP_SECTIONS", 3)
MIN_FLOW_MARKERS = _env_int("QC_MIN_FLOW_MARKERS", 2)
MIN_EMPHASIS_MARKS = _env_int("QC_MIN_EMPHASIS_MARKS", 3)
MIN_FIRM_NAME_MENTIONS = _env_int("QC_MIN_FIRM_NAME_MENTIONS", 2)
MIN_CITY_MENTIONS = _env_int("QC_MIN_CITY_MENTIONS", 4)
MAX_WEASEL_WORDS = _env_int("QC_MAX_WEASEL_WORDS", 5)
MAX_GENERIC_PHRASES = _env_int("QC_MAX_GENERIC_PHRASES", 3)
MAX_EXCLAMATIONS = _env_int("QC_MAX_EXCLAMATIONS", 2)
MIN_WORD_COUNT = _env_int("QC_MIN_WORD_COUNT", 800)
MAX_WORD_COUNT = _env_int("QC_MAX_WORD_COUNT", 5000)

# ── Market conventions ─────────────────────────────────────────────────────
UK_COUNTRY_MARKERS = ("uk", "united kingdom", "england", "scotland", "wales", "gb")

# ── Email QC ───────────────────────────────────────────────────────────────
REPORT_URL_PREFIX = os.getenv("REPORT_URL_PREFIX", "https://reports.mortarmetrics.com/")
EMAIL_BODY_MIN_CHARS = _env_int("QC_EMAIL_BODY_MIN_CHARS", 100)
EMAIL_BODY_MAX_CHARS = _env_int("QC_EMAIL_BODY_MAX_CHARS", 1000)
