"""Prompts for the AI analysis, fix guidance, data fix and practice content calls."""

from __future__ import annotations

import json
from typing import Optional

from report_qc.config import GUIDANCE_EXCERPT_CHARS
from report_qc.loaders.research import (
    competitors,
    expected_currency,
    expected_terminology,
    firm_name,
    location,
    location_label,
    practice_areas,
)


# ── AI analysis ───────────────────────────────────────────────────────────


def build_analysis_prompt(research: dict, report_text: str) -> str:
    """Ask for a reader-perspective review of one report, answered as JSON."""
    name = firm_name(research)
    country = location(research)["country"]
    competitor_names = ", ".join(c["name"] for c in competitors(research) if c["name"])

    return f"""You are a brutal QC reviewer for marketing reports sent to law firm leads. Your job is to find EVERY issue that would make a lead NOT want to book a meeting.

CONTEXT:
- Firm: {name}
- Location: {location_label(research)}
- Country: {country or 'Unknown (assume US if no country)'}
- Practice areas: {', '.join(practice_areas(research))}
- Competitors found: {competitor_names}
- Expected currency: {expected_currency(research)}
- Expected terminology: {expected_terminology(research)}

REPORT TEXT TO REVIEW:
{report_text}

ANALYZE FOR THESE SPECIFIC ISSUES:

1. GEOGRAPHIC MISMATCH (CRITICAL)
   - Are competitors from the WRONG geographic area? (e.g. US firms shown for a UK lead)
   - US indicators: "LLC", "PLLC", "P.C.", US city names, US area codes
   - UK indicators: "LLP", "Limited", UK city names

2. CURRENCY MISMATCH (CRITICAL)
   - UK firms MUST use £ (GBP), not $ (USD)
   - US, Canada and Australia use $

3. TERMINOLOGY MISMATCH (IMPORTANT)
   - UK: "solicitor", "barrister", "practice"
   - US: "attorney", "lawyer", "firm"

4. AWKWARD PHRASING (IMPORTANT)
   - Unnatural client labels ("individual going through a divorce" instead of "divorcing client")
   - Generic or robotic language
   - Grammar issues (a/an errors, etc.)

5. BROKEN CONTENT (CRITICAL)
   - Missing data (empty sections, "undefined", "null", "NaN")
   - Trailing punctuation with nothing after it
   - Placeholder text
   - Zero values that shouldn't be zero

6. CREDIBILITY ISSUES (IMPORTANT)
   - Claims that seem too good to be true
   - Missing context or caveats
   - Anything that would make a sophisticated law firm partner skeptical

7. WOULD YOU BOOK A MEETING? (OVERALL)
   - As a partner at {name}, would this report convince you to book a call?
   - What's the single biggest issue that would make you ignore it?

Return your analysis as JSON ONLY (no other text):
{{
  "issues": [
    {{
      "severity": "CRITICAL|IMPORTANT|WARNING",
      "category": "GEOGRAPHIC|CURRENCY|TERMINOLOGY|PHRASING|BROKEN|CREDIBILITY",
      "issue": "Brief description of the problem",
      "evidence": "Quote from the report showing the issue",
      "fix": "What should be done to fix it"
    }}
  ],
  "wouldBook": true,
  "overallVerdict": "One sentence summary of report quality",
  "biggestIssue": "The single most important thing to fix"
}}"""


# ── Fix guidance and data fixes ───────────────────────────────────────────


def _practice_section(practice: Optional[dict]) -> str:
    if not practice:
        return ""
    label = practice.get("clientLabel") or {}
    return f"""
PRACTICE CONTEXT (use these labels when suggesting phrasing fixes):
- Primary practice area: {practice.get('primaryPracticeArea', '')}
- Client label: {label.get('singular', '')} / {label.get('plural', '')}
- Emergency scenario: {practice.get('emergencyScenario', '')}
- Attorney type: {practice.get('attorneyType', '')}
"""


def build_guidance_prompt(
    research: dict,
    report_html: str,
    failures: list[str],
    practice: Optional[dict] = None,
) -> str:
    """Ask for root causes and concrete fixes for a failed report."""
    return f"""You are a quality control expert for law firm marketing reports. A report has failed validation with the following issues:

RESEARCH DATA:
{json.dumps(research, indent=2)}

CURRENT REPORT EXCERPT (first {GUIDANCE_EXCERPT_CHARS} chars):
{report_html[:GUIDANCE_EXCERPT_CHARS]}

QC FAILURES:
{chr(10).join(failures)}
{_practice_section(practice)}
Analyze these failures and provide:
1. ROOT CAUSES: What's fundamentally wrong?
2. SPECIFIC FIXES: Concrete improvements needed
3. PRIORITY: Which issues are most critical?
4. REGENERATION GUIDANCE: What should the report generator focus on?

Be direct and actionable. No fluff."""


def build_fix_prompt(research: dict, guidance: Optional[str], failures: list[str]) -> str:
    """Ask for a complete replacement research record as JSON."""
    issues = f"QC ISSUES:\n{chr(10).join(failures)}\n" if failures else ""
    return f"""You are fixing law firm research data based on QC failures.

CURRENT RESEARCH DATA:
{json.dumps(research, indent=2)}

AI ANALYSIS OF ISSUES:
{guidance or "(no analysis available, work from the QC issues below)"}

{issues}
Generate IMPROVED research data by:
1. Fixing any generic/placeholder values
2. Improving specificity where data is weak
3. Adding missing critical fields
4. Ensuring mathematical consistency

Return ONLY valid JSON with the complete improved research object. No markdown, no explanation."""


# ── Practice content ──────────────────────────────────────────────────────


def build_practice_prompt(practice_list: str, city: str, state: str) -> str:
    return f"""You're writing marketing content for a law firm. Based on their practice areas, generate contextually appropriate content.

Firm's practice areas: {practice_list}
Location: {city}, {state}

Determine the PRIMARY practice area and generate content for it. Important distinctions:
- "Estate planning" = proactive planning (wills, trusts); the client is planning ahead
- "Probate" = after death; the client is a family member dealing with a death in the family
- "Real estate" = property transactions; the client is a buyer or property owner
- "Estate" alone usually means estate planning, NOT real estate
- "Landlord/tenant" = eviction cases; the client is a landlord facing an eviction

Return ONLY this JSON:
{{
  "primaryPracticeArea": "the main practice area you identified",
  "clientLabel": {{
    "singular": "who the typical client is (landlord, accident victim, immigrant, etc.)",
    "plural": "plural form"
  }},
  "emergencyScenario": "what situation triggers them to call (realistic for THIS practice area)",
  "attorneyType": "how to describe this attorney type (family, estate planning, immigration, etc.)",
  "articleForAttorney": "a or an, by sound ('an estate' but 'a family')",
  "articleForClient": "a or an, by sound ('an immigrant' but 'a landlord')"
}}"""
