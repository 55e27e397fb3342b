"""One QC pass: basic checks, AI analysis, decision."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from report_qc.config import QC_RESULT_PATH
from report_qc.errors import InputError
from report_qc.loaders.report import load_report
from report_qc.loaders.research import firm_name, load_research, location_label
from report_qc.models import AIAnalysis, Category, Finding, QCResult, Severity
from report_qc.pipeline.ai_analysis import run_ai_analysis
from report_qc.validation.checks import run_basic_checks
from report_qc.validation.policy import decide


def run_qc(
    research: dict,
    report_html: str,
    llm: Optional[Any] = None,
    iteration: int = 1,
) -> QCResult:
    """Validate one report version and decide whether it can be sent.

    A CRITICAL basic finding already fails the report, so the model call is
    skipped (AI status "gated") in that case.
    """
    print("  -> Running basic checks...")
    basic = run_basic_checks(research, report_html)
    critical = sum(1 for f in basic if f.severity is Severity.CRITICAL)
    print(f"  OK Basic checks: {len(basic)} finding(s), {critical} critical")

    if critical:
        print("  .. AI analysis not run: critical basic issues")
        ai = AIAnalysis.gated()
        phase = "BASIC"
    else:
        ai = run_ai_analysis(llm, research, report_html)
        phase = "COMPLETE"

    findings = tuple(basic) + ai.findings
    status, recommendation = decide(findings)
    return QCResult(
        status=status,
        findings=findings,
        recommendation=recommendation,
        iteration_count=iteration,
        ai=ai,
        phase=phase,
        firm_name=firm_name(research),
        location=location_label(research),
    )


def load_failure(error: InputError, iteration: int = 1) -> QCResult:
    finding = Finding(Severity.CRITICAL, Category.FILE_LOAD, str(error), phase="input")
    status, recommendation = decide([finding])
    return QCResult(
        status=status,
        findings=(finding,),
        recommendation=recommendation,
        iteration_count=iteration,
        phase="FILE_LOAD",
    )


def run_qc_files(
    research_path: str | Path,
    report_path: str | Path,
    llm: Optional[Any] = None,
    iteration: int = 1,
) -> QCResult:
    """run_qc on files; an unloadable input becomes a single FILE_LOAD finding."""
    try:
        research = load_research(research_path)
        report_html = load_report(report_path)
    except InputError as e:
        print(f"  Warning: {e}")
        return load_failure(e, iteration)

    print(f"  OK Loaded {firm_name(research) or '(no firm name)'}, report {len(report_html) // 1024}KB")
    return run_qc(research, report_html, llm=llm, iteration=iteration)


def save_qc_result(result: QCResult, path: str | Path = QC_RESULT_PATH) -> Path:
    """Write the result JSON, replacing any previous one."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    return path
