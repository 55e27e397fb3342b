"""Result types shared by the validators, the decision policy and the controller.

Findings are immutable once produced. A QC pass only ever collects them into a
new QCResult; nothing downstream edits a finding in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    IMPORTANT = "IMPORTANT"
    WARNING = "WARNING"

    @classmethod
    def parse(cls, value: str) -> "Severity":
        """Map a model-supplied severity label onto the taxonomy (MINOR -> WARNING)."""
        label = (value or "").strip().upper()
        if label in cls.__members__:
            return cls[label]
        return cls.WARNING


class Category(str, Enum):
    GEOGRAPHIC = "GEOGRAPHIC"
    CURRENCY = "CURRENCY"
    TERMINOLOGY = "TERMINOLOGY"
    PHRASING = "PHRASING"
    BROKEN = "BROKEN"
    CREDIBILITY = "CREDIBILITY"
    STRUCTURE = "STRUCTURE"
    CONTENT = "CONTENT"
    LANGUAGE = "LANGUAGE"
    VISUAL = "VISUAL"
    FINAL = "FINAL"
    DATA_EXISTENCE = "DATA_EXISTENCE"
    DATA_SANITY = "DATA_SANITY"
    MATH = "MATH"
    LOGIC = "LOGIC"
    FILE_LOAD = "FILE_LOAD"

    @classmethod
    def parse(cls, value: str) -> "Category":
        label = (value or "").strip().upper()
        if label in cls.__members__:
            return cls[label]
        if label == "PERSONALIZATION":
            return cls.CONTENT
        return cls.CREDIBILITY


class QCStatus(str, Enum):
    PASSED = "PASSED"
    FAILED = "FAILED"


class AIStatus(str, Enum):
    COMPLETE = "complete"
    SKIPPED = "skipped"  # no credentials configured
    ERROR = "error"  # attempted and failed
    GATED = "gated"  # basic phase already failed critically


@dataclass(frozen=True)
class Finding:
    """One validation observation."""
    severity: Severity
    category: Category
    message: str
    evidence: Optional[str] = None
    fix: Optional[str] = None
    phase: str = "basic"

    def to_dict(self) -> dict:
        data = {
            "severity": self.severity.value,
            "category": self.category.value,
            "phase": self.phase,
            "message": self.message,
        }
        if self.evidence:
            data["evidence"] = self.evidence
        if self.fix:
            data["fix"] = self.fix
        return data

    def __str__(self) -> str:
        tag = "[AI] " if self.phase == "ai" else ""
        return f"{tag}[{self.category.value}] {self.message}"


@dataclass(frozen=True)
class AIAnalysis:
    status: AIStatus
    findings: tuple[Finding, ...] = ()
    would_book: Optional[bool] = None
    verdict: Optional[str] = None
    biggest_issue: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def skipped(cls) -> "AIAnalysis":
        return cls(status=AIStatus.SKIPPED)

    @classmethod
    def gated(cls) -> "AIAnalysis":
        return cls(status=AIStatus.GATED)

    @classmethod
    def failed(cls, error: str) -> "AIAnalysis":
        return cls(status=AIStatus.ERROR, error=error)


def count_by_severity(findings) -> dict[str, int]:
    counts = {"critical": 0, "important": 0, "warning": 0}
    for finding in findings:
        counts[finding.severity.value.lower()] += 1
    return counts


def group_by_category(findings) -> dict[str, list[Finding]]:
    """Group findings by category, preserving first-seen order."""
    grouped: dict[str, list[Finding]] = {}
    for finding in findings:
        grouped.setdefault(finding.category.value, []).append(finding)
    return grouped


@dataclass(frozen=True)
class QCResult:
    """Aggregated verdict for one report version."""
    status: QCStatus
    findings: tuple[Finding, ...]
    recommendation: str
    iteration_count: int = 1
    ai: Optional[AIAnalysis] = None
    phase: str = "COMPLETE"
    firm_name: str = ""
    location: str = ""
    counts: dict = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "counts", count_by_severity(self.findings))

    @property
    def passed(self) -> bool:
        return self.status is QCStatus.PASSED

    def by_category(self) -> dict[str, list[Finding]]:
        return group_by_category(self.findings)

    def to_dict(self) -> dict:
        ai = self.ai
        return {
            "status": self.status.value,
            "phase": self.phase,
            "firm_name": self.firm_name,
            "location": self.location,
            "iteration": self.iteration_count,
            "counts": dict(self.counts),
            "findings": [f.to_dict() for f in self.findings],
            "ai_analysis": ai.status.value if ai else None,
            "ai_error": ai.error if ai else None,
            "would_book": ai.would_book if ai else None,
            "biggest_issue": ai.biggest_issue if ai else None,
            "verdict": ai.verdict if ai else None,
            "recommendation": self.recommendation,
        }
