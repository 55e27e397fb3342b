"""
AI ANALYSIS TEST SUITE
======================
The model is always a MagicMock here; conftest.py strips ANTHROPIC_API_KEY so
nothing reaches the network.

Covers: skip without credentials, fenced JSON replies, label mapping, error
degradation, and gating after critical basic findings.
"""
import json
from unittest.mock import MagicMock

from report_qc.models import AIStatus, Category, QCStatus, Severity
from report_qc.pipeline.ai_analysis import parse_json_reply, run_ai_analysis
from report_qc.pipeline.llm import build_llm_client
from report_qc.pipeline.prompts import build_analysis_prompt
from report_qc.pipeline.qc import run_qc


SAMPLE_REPLY = {
    "issues": [
        {
            "severity": "IMPORTANT",
            "category": "PHRASING",
            "issue": "Client label reads awkwardly",
            "evidence": "individual going through a divorce",
            "fix": "Say divorcing client",
        },
        {"severity": "MINOR", "category": "TONE", "issue": "Slightly salesy close"},
    ],
    "wouldBook": False,
    "overallVerdict": "Solid data, clumsy wording.",
    "biggestIssue": "Awkward client label",
}


def _llm(reply=None, error=None):
    llm = MagicMock()
    if error is not None:
        llm.complete.side_effect = error
    else:
        llm.complete.return_value = reply
    return llm


def test_no_credentials_means_no_client():
    assert build_llm_client(api_key="") is None


def test_skipped_without_client(research, report_html):
    analysis = run_ai_analysis(None, research, report_html)

    assert analysis.status is AIStatus.SKIPPED
    assert analysis.findings == ()


def test_fenced_reply_is_parsed(research, report_html):
    llm = _llm(f"```json\n{json.dumps(SAMPLE_REPLY)}\n```")

    analysis = run_ai_analysis(llm, research, report_html)

    assert analysis.status is AIStatus.COMPLETE
    assert analysis.would_book is False
    assert analysis.biggest_issue == "Awkward client label"
    assert analysis.verdict == "Solid data, clumsy wording."

    first, second = analysis.findings
    assert (first.severity, first.category, first.phase) == (Severity.IMPORTANT, Category.PHRASING, "ai")
    assert first.fix == "Say divorcing client"
    # MINOR maps to WARNING, unknown categories to CREDIBILITY
    assert (second.severity, second.category) == (Severity.WARNING, Category.CREDIBILITY)


def test_request_uses_zero_temperature_settings(research, report_html):
    llm = _llm(json.dumps(SAMPLE_REPLY))

    run_ai_analysis(llm, research, report_html)

    _, kwargs = llm.complete.call_args
    assert kwargs["max_tokens"] == 3000
    assert kwargs["timeout"] == 60.0


def test_model_error_degrades_to_error_status(research, report_html):
    analysis = run_ai_analysis(_llm(error=ValueError("boom")), research, report_html)

    assert analysis.status is AIStatus.ERROR
    assert analysis.error == "boom"
    assert analysis.findings == ()


def test_unparseable_reply_degrades_to_error_status(research, report_html):
    analysis = run_ai_analysis(_llm("I could not review this report."), research, report_html)

    assert analysis.status is AIStatus.ERROR


def test_ai_failure_alone_never_fails_the_run(research, report_html):
    result = run_qc(research, report_html, llm=_llm(error=ValueError("timeout")))

    assert result.status is QCStatus.PASSED
    assert result.ai.status is AIStatus.ERROR
    assert result.to_dict()["ai_error"] == "timeout"


def test_ai_critical_finding_fails_the_run(research, report_html):
    reply = {
        "issues": [{"severity": "CRITICAL", "category": "CURRENCY", "issue": "Uses £ for a US firm"}],
        "wouldBook": False,
    }

    result = run_qc(research, report_html, llm=_llm(json.dumps(reply)))

    assert result.status is QCStatus.FAILED
    assert result.findings[-1].phase == "ai"
    assert str(result.findings[-1]).startswith("[AI] [CURRENCY]")


def test_critical_basic_findings_gate_the_model(research, report_html):
    research["competitors"] = []
    llm = _llm(json.dumps(SAMPLE_REPLY))

    result = run_qc(research, report_html, llm=llm)

    assert result.status is QCStatus.FAILED
    assert result.ai.status is AIStatus.GATED
    llm.complete.assert_not_called()


def test_prompt_carries_market_conventions(research):
    research["location"] = {"city": "Leeds", "state": "", "country": "England"}

    prompt = build_analysis_prompt(research, "report text")

    assert "Expected currency: £" in prompt
    assert "solicitor/barrister" in prompt
    assert "Smith Family Law" in prompt


def test_parse_json_reply_tolerates_preamble():
    assert parse_json_reply('Here you go: {"issues": []} Thanks') == {"issues": []}
