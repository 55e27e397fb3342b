"""AI-analysis phase: a reader-perspective review of the rendered report.

Advisory only. No key means "skipped", any failure means "error"; neither
raises, and neither adds findings of its own.
"""

from __future__ import annotations

import json
import re
from typing import Any, Optional

import anthropic

from report_qc.config import AI_ANALYSIS_MAX_TOKENS, AI_TEXT_BUDGET, HEAVY_TIMEOUT, QC_MODEL
from report_qc.loaders.report import extract_text
from report_qc.models import AIAnalysis, AIStatus, Category, Finding, Severity
from report_qc.pipeline.prompts import build_analysis_prompt

_FENCE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")

# Errors that downgrade an AI call instead of aborting the run
AI_ERRORS = (anthropic.APIError, json.JSONDecodeError, ValueError, TypeError, KeyError)


def parse_json_reply(text: str) -> Any:
    """Parse a model reply as JSON, tolerating a ``` / ```json fence or a preamble."""
    match = _FENCE.search(text)
    if match:
        text = match.group(1)
    text = text.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise
        return json.loads(text[start:end + 1])


def _issue_to_finding(issue: dict) -> Finding:
    return Finding(
        severity=Severity.parse(str(issue.get("severity", ""))),
        category=Category.parse(str(issue.get("category", ""))),
        message=str(issue.get("issue") or issue.get("message") or "").strip() or "Unspecified issue",
        evidence=issue.get("evidence") or None,
        fix=issue.get("fix") or None,
        phase="ai",
    )


def analysis_from_reply(data: dict) -> AIAnalysis:
    issues = data.get("issues") or []
    if not isinstance(issues, list):
        raise ValueError("'issues' must be a list")
    findings = tuple(_issue_to_finding(i) for i in issues if isinstance(i, dict))
    would_book = data.get("wouldBook")
    return AIAnalysis(
        status=AIStatus.COMPLETE,
        findings=findings,
        would_book=would_book if isinstance(would_book, bool) else None,
        verdict=data.get("overallVerdict"),
        biggest_issue=data.get("biggestIssue"),
    )


def run_ai_analysis(llm: Optional[Any], research: dict, report_html: str) -> AIAnalysis:
    """Review the report with the model and return its findings.

    Args:
        llm: Object with ``complete(prompt, max_tokens, timeout=..., model=...)``,
            or None when no credentials are configured.
        research: The research record the report was rendered from.
        report_html: Rendered report HTML.
    """
    if llm is None:
        print("  .. AI analysis skipped (ANTHROPIC_API_KEY not set)")
        return AIAnalysis.skipped()

    report_text = extract_text(report_html)[:AI_TEXT_BUDGET]
    prompt = build_analysis_prompt(research, report_text)

    print(f"  -> Running AI analysis ({QC_MODEL})...")
    try:
        reply = llm.complete(prompt, max_tokens=AI_ANALYSIS_MAX_TOKENS, timeout=HEAVY_TIMEOUT, model=QC_MODEL)
        data = parse_json_reply(reply)
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        analysis = analysis_from_reply(data)
    except AI_ERRORS as e:
        print(f"  Warning: AI analysis failed: {e}")
        return AIAnalysis.failed(str(e))

    print(f"  OK AI analysis complete ({len(analysis.findings)} issue(s))")
    return analysis
