"""Decision policy: turn a finding list into a send / do-not-send verdict."""

from report_qc.config import CRITICAL_TOLERANCE, IMPORTANT_TOLERANCE
from report_qc.models import QCStatus, count_by_severity


def decide(findings) -> tuple[QCStatus, str]:
    """Return (status, recommendation) for the combined basic + AI findings.

    FAILED  = any CRITICAL, or more than one IMPORTANT
    PASSED  = otherwise; the recommendation says whether anything minor remains
    """
    counts = count_by_severity(findings)
    critical = counts["critical"]
    important = counts["important"]
    warning = counts["warning"]

    if critical > CRITICAL_TOLERANCE:
        return QCStatus.FAILED, f"{critical} critical issue(s) found. Report cannot be sent."
    if important > IMPORTANT_TOLERANCE:
        return QCStatus.FAILED, f"{important} important issue(s) found. Review before sending."
    if important or warning:
        return QCStatus.PASSED, f"Passed with {important + warning} minor issue(s). Safe to send."
    return QCStatus.PASSED, "High quality report. Send immediately."
