"""Human-readable terminal output for QC results."""

from report_qc.models import AIStatus, QCResult, Severity, group_by_category

_SEVERITY_MARK = {
    Severity.CRITICAL: "!!",
    Severity.IMPORTANT: " -",
    Severity.WARNING: " ~",
}

_PHASE_TITLES = [
    ("input", "INPUT"),
    ("basic", "BASIC CHECKS"),
    ("ai", "AI ANALYSIS"),
]


def _finding_lines(findings) -> list[str]:
    lines = []
    for category, items in group_by_category(findings).items():
        lines.append(f"  {category}:")
        for f in items:
            lines.append(f"  {_SEVERITY_MARK[f.severity]} [{f.severity.value}] {f.message}")
            if f.evidence:
                lines.append(f"       evidence: {f.evidence}")
            if f.fix:
                lines.append(f"       fix: {f.fix}")
    return lines


def format_qc_report(result: QCResult) -> str:
    """Format one QC pass as a CLI report ending in a PASSED/FAILED banner."""
    counts = result.counts
    lines = [
        f"{'='*60}",
        f"QC REPORT: {result.firm_name or '(unknown firm)'}"
        + (f" ({result.location})" if result.location else ""),
        f"{'='*60}",
        f"Iteration: {result.iteration_count}",
        f"Critical: {counts['critical']}   Important: {counts['important']}   Warnings: {counts['warning']}",
    ]

    for phase, title in _PHASE_TITLES:
        findings = [f for f in result.findings if f.phase == phase]
        if findings:
            lines.append(f"\n{title} ({len(findings)}):")
            lines.extend(_finding_lines(findings))

    ai = result.ai
    if ai is not None:
        lines.append("")
        if ai.status is AIStatus.COMPLETE:
            lines.append(f"AI analysis: complete ({len(ai.findings)} issue(s))")
            if ai.would_book is not None:
                lines.append(f"  Would book: {'YES' if ai.would_book else 'NO'}")
            if ai.biggest_issue:
                lines.append(f"  Biggest issue: {ai.biggest_issue}")
            if ai.verdict:
                lines.append(f"  Verdict: {ai.verdict}")
        elif ai.status is AIStatus.SKIPPED:
            lines.append("AI analysis: skipped (no API key)")
        elif ai.status is AIStatus.GATED:
            lines.append("AI analysis: not run (critical basic issues)")
        else:
            lines.append(f"AI analysis: error ({ai.error})")

    if not result.findings:
        lines.append("\nAll checks passed!")

    lines.append(f"\n{result.recommendation}")
    lines.append(f"{'='*60}")
    lines.append("QC PASSED" if result.passed else "QC FAILED")
    lines.append(f"{'='*60}")
    return "\n".join(lines)


def format_rejection(result: QCResult, iterations: int) -> str:
    """Unresolved findings after the iteration limit, for manual review."""
    lines = [
        f"{'='*60}",
        f"REJECTED after {iterations} iteration(s): manual review required",
        f"{'='*60}",
    ]
    unresolved = [f for f in result.findings if f.severity is not Severity.WARNING]
    lines.extend(_finding_lines(unresolved or result.findings))
    lines.append(f"{'='*60}")
    return "\n".join(lines)
