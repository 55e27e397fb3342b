"""Failure analysis between iterations: guidance, data fixes, improvement notes.

Both model steps are best effort. A failed guidance call leaves the notes
without model commentary; a failed or malformed fix reply leaves the research
record as it was. Neither aborts the round.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from report_qc.config import FIX_MAX_TOKENS, FIX_MODEL, GUIDANCE_MAX_TOKENS, HEAVY_TIMEOUT
from report_qc.loaders.research import competitors, firm_name, firm_reviews, location
from report_qc.models import Finding
from report_qc.pipeline.ai_analysis import AI_ERRORS, parse_json_reply
from report_qc.pipeline.prompts import build_fix_prompt, build_guidance_prompt

MAX_NOTE_FAILURES = 10


def failure_lines(findings) -> list[str]:
    return [f"[{f.severity.value}] {f}" for f in findings]


def request_fix_guidance(
    llm: Optional[Any],
    research: dict,
    report_html: str,
    findings: list[Finding],
    practice: Optional[dict] = None,
) -> Optional[str]:
    """Free-text root causes and fixes for a failed report, or None."""
    if llm is None:
        return None
    print(f"  -> Analyzing failures ({FIX_MODEL})...")
    prompt = build_guidance_prompt(research, report_html, failure_lines(findings), practice)
    try:
        guidance = llm.complete(prompt, max_tokens=GUIDANCE_MAX_TOKENS, timeout=HEAVY_TIMEOUT, model=FIX_MODEL)
    except AI_ERRORS as e:
        print(f"  Warning: fix guidance failed: {e}")
        return None
    print("  OK Fix guidance received")
    return guidance


def apply_fixes(
    llm: Optional[Any],
    research: dict,
    guidance: Optional[str],
    findings: list[Finding],
) -> dict:
    """Ask the model for an improved research record.

    Runs without guidance too, from the failure list alone. Returns the
    replacement record when the reply parses to a JSON object, otherwise the
    record passed in.
    """
    if llm is None:
        return research
    print(f"  -> Applying data fixes ({FIX_MODEL})...")
    prompt = build_fix_prompt(research, guidance, failure_lines(findings))
    try:
        reply = llm.complete(prompt, max_tokens=FIX_MAX_TOKENS, timeout=HEAVY_TIMEOUT, model=FIX_MODEL)
        fixed = parse_json_reply(reply)
    except AI_ERRORS as e:
        print(f"  Warning: could not apply data fixes ({e}), keeping current research data")
        return research
    if not isinstance(fixed, dict):
        print("  Warning: data fix reply is not a JSON object, keeping current research data")
        return research
    print("  OK Research data updated")
    return fixed


def build_improvement_notes(
    iteration: int,
    research: dict,
    findings: list[Finding],
    guidance: Optional[str] = None,
) -> str:
    """Instructions handed to the report renderer for the next attempt."""
    loc = location(research)
    reviews, rating = firm_reviews(research)
    names = ", ".join(c["name"] for c in competitors(research)[:3] if c["name"])
    failures = "\n".join(failure_lines(findings[:MAX_NOTE_FAILURES]))

    return f"""ITERATION {iteration} - FIX THESE ISSUES:

{guidance or '(no AI guidance available)'}

QC FAILURES TO ADDRESS:
{failures}

CRITICAL REQUIREMENTS:
- Use ACTUAL firm name: "{firm_name(research)}"
- Use ACTUAL location: {loc['city']}, {loc['state']}
- Reference ACTUAL competitors by name ({names})
- Use ACTUAL review data (Firm: {reviews or 0} reviews @ {rating or 0} stars)
- Be specific: cite numbers, names, data points
- NO placeholder text or template variables
- NO banned phrases ("We'd love to chat", "If this resonates")
- NO weasel words (likely, probably, perhaps)
- Math must be accurate: the three gap costs must add up to the hero total
- Bold the most important parts (<strong>)

HERO REQUIREMENTS:
- Must include firm name and location
- Must cite SPECIFIC competitor data if available
- Must show contrast (them vs competitors)
"""


def summarize_record_change(before: dict, after: dict) -> list[str]:
    """Top-level keys whose values differ between two research records."""
    keys = sorted(set(before) | set(after))
    return [k for k in keys if json.dumps(before.get(k), sort_keys=True) != json.dumps(after.get(k), sort_keys=True)]
