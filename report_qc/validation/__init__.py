"""Report validation: basic checks, email checks, decision policy, and reporting."""

from report_qc.validation.checks import run_basic_checks
from report_qc.validation.email import validate_email
from report_qc.validation.phrasing import prefix_verbose_phrasing
from report_qc.validation.policy import decide
from report_qc.validation.report import format_qc_report, format_rejection

__all__ = [
    "run_basic_checks",
    "validate_email",
    "prefix_verbose_phrasing",
    "decide",
    "format_qc_report",
    "format_rejection",
]
