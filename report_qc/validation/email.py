"""Deterministic checks for the outreach email that links to a report.

No model calls. Every finding is a WARNING: email QC informs the operator but
never blocks sending.
"""

from __future__ import annotations

import re
from typing import Optional

from report_qc import config
from report_qc.models import Category, Finding, Severity

GENERIC_CONTACT_NAMES = {"Partner", "there"}
GENERIC_FIRM_NAMES = {"your firm", "unknown firm"}

_PLACEHOLDER = re.compile(r"\{\{|\}\}|\[TODO\]|undefined|(?<!\w)null(?!\w)|(?<!\w)NaN(?!\w)")
_MOJIBAKE = re.compile(r"Â£|Â|â€\"|â€™|â€œ|â€")
_EM_DASH = re.compile(r"—|&mdash;")


def _warn(category: Category, message: str) -> Finding:
    return Finding(Severity.WARNING, category, message, phase="email")


def validate_email(
    subject: Optional[str],
    body: Optional[str],
    html: Optional[str] = None,
    context: Optional[dict] = None,
) -> list[Finding]:
    """Check one email. ``context`` carries contactName, firmName, reportUrl,
    totalRange, totalCases and practiceLabel."""
    ctx = context or {}
    warnings = []
    all_text = f"{subject or ''}{body or ''}{html or ''}"

    if _EM_DASH.search(all_text):
        warnings.append(_warn(Category.LANGUAGE, "Em dash found in email body or HTML"))
    if _PLACEHOLDER.search(all_text):
        warnings.append(_warn(Category.BROKEN, "Placeholder or undefined/null/NaN found in email"))
    if _MOJIBAKE.search(all_text):
        warnings.append(_warn(Category.BROKEN, "Encoding issue (mojibake) detected in email"))

    # Contact name
    name = (ctx.get("contactName") or "").strip()
    if not name:
        warnings.append(_warn(Category.CONTENT, "Contact name is empty"))
    else:
        if name in GENERIC_CONTACT_NAMES:
            warnings.append(_warn(Category.CONTENT, f'Contact name is generic: "{name}"'))
        if name == name.upper() and len(name) > 2:
            warnings.append(_warn(Category.CONTENT, f'Contact name is all-caps: "{name}"'))
        if len(name) < 2 or len(name) > 50:
            warnings.append(_warn(
                Category.CONTENT,
                f'Contact name length out of range ({len(name)} chars): "{name}"',
            ))

    # Report URL
    url = ctx.get("reportUrl") or ""
    if not url.strip():
        warnings.append(_warn(Category.BROKEN, "Report URL is empty"))
    else:
        if not url.startswith(config.REPORT_URL_PREFIX):
            warnings.append(_warn(
                Category.BROKEN,
                f'Report URL doesn\'t start with {config.REPORT_URL_PREFIX}: "{url}"',
            ))
        if re.search(r"\s", url):
            warnings.append(_warn(Category.BROKEN, "Report URL contains spaces"))

    if not any(ctx.get(key) for key in ("totalRange", "totalCases", "practiceLabel")):
        warnings.append(_warn(
            Category.CONTENT,
            "No personalization data (totalRange, totalCases, practiceLabel all missing)",
        ))

    firm = (ctx.get("firmName") or "").strip()
    if not firm:
        warnings.append(_warn(Category.CONTENT, "Firm name is empty"))
    elif firm.lower() in GENERIC_FIRM_NAMES:
        warnings.append(_warn(Category.CONTENT, f'Firm name is generic: "{firm}"'))

    # Body length
    if body and body.strip():
        length = len(body.strip())
        if length < config.EMAIL_BODY_MIN_CHARS:
            warnings.append(_warn(
                Category.FINAL,
                f"Email body too short ({length} chars, min {config.EMAIL_BODY_MIN_CHARS})",
            ))
        if length > config.EMAIL_BODY_MAX_CHARS:
            warnings.append(_warn(
                Category.FINAL,
                f"Email body too long ({length} chars, max {config.EMAIL_BODY_MAX_CHARS})",
            ))
    else:
        warnings.append(_warn(Category.FINAL, "Email body is empty"))

    return warnings
