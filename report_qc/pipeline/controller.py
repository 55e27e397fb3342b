"""Iterative QC: validate, analyze the failure, regenerate, and validate again.

The loop is an explicit state machine. ``next_state`` holds every transition
and does no I/O; ``IterativeQC`` performs the work attached to each state.

    VALIDATING --PASSED--> PASSED
    VALIDATING --FAILED, iteration < max--> ANALYZING_FAILURE
    VALIDATING --FAILED, iteration == max--> REJECTED
    ANALYZING_FAILURE --> REGENERATING
    REGENERATING --> VALIDATING
"""

from __future__ import annotations

import copy
import json
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from report_qc.cache import ContentCache
from report_qc.config import ITERATIVE_RESULT_PATH, MAX_ITERATIONS, QC_RESULT_PATH, ROUND_DELAY
from report_qc.errors import RegenerationError
from report_qc.loaders.report import save_report
from report_qc.loaders.research import firm_name, location, location_label, practice_areas
from report_qc.models import QCResult, QCStatus, Severity
from report_qc.pipeline.fixer import (
    apply_fixes,
    build_improvement_notes,
    request_fix_guidance,
    summarize_record_change,
)
from report_qc.pipeline.practice_content import generate_practice_content
from report_qc.pipeline.qc import run_qc, save_qc_result
from report_qc.validation.phrasing import prefix_verbose_phrasing
from report_qc.validation.report import format_qc_report, format_rejection

Renderer = Callable[[dict, str, Optional[str]], str]


class LoopState(str, Enum):
    VALIDATING = "VALIDATING"
    ANALYZING_FAILURE = "ANALYZING_FAILURE"
    REGENERATING = "REGENERATING"
    PASSED = "PASSED"
    REJECTED = "REJECTED"


TERMINAL_STATES = (LoopState.PASSED, LoopState.REJECTED)


def next_state(
    state: LoopState,
    status: Optional[QCStatus],
    iteration: int,
    max_iterations: int = MAX_ITERATIONS,
) -> LoopState:
    """Transition out of ``state``. ``status`` is only read after VALIDATING."""
    if state is LoopState.VALIDATING:
        if status is None:
            raise ValueError("VALIDATING needs a QC status to transition")
        if status is QCStatus.PASSED:
            return LoopState.PASSED
        if iteration < max_iterations:
            return LoopState.ANALYZING_FAILURE
        return LoopState.REJECTED
    if state is LoopState.ANALYZING_FAILURE:
        return LoopState.REGENERATING
    if state is LoopState.REGENERATING:
        return LoopState.VALIDATING
    raise ValueError(f"{state.value} is a terminal state")


@dataclass
class IterationOutcome:
    state: LoopState
    iterations: int
    result: QCResult
    research: dict
    report_html: str

    @property
    def passed(self) -> bool:
        return self.state is LoopState.PASSED

    def to_dict(self) -> dict:
        grouped = {
            category: [f.message for f in items]
            for category, items in self.result.by_category().items()
        }
        return {
            "status": self.state.value,
            "iterations": self.iterations,
            "firm_name": firm_name(self.research),
            "location": location_label(self.research),
            "recommendation": self.result.recommendation,
            "findings_by_category": grouped,
        }


class IterativeQC:
    """Drive up to ``max_iterations`` validate / fix / regenerate rounds.

    Args:
        renderer: Callable ``(research, contact_name, notes) -> html``.
        llm: Language-model client, or None to run basic checks only.
        contact_name: Passed through to the renderer.
        max_iterations: Number of validations before the report is rejected.
        round_delay: Fixed pause in seconds after each regeneration.
        qc_result_path: Where each round's QCResult is written.
        report_path: If set, every regenerated report is written here.
        result_path: Where the final outcome is written.
        cache: Practice-content cache shared by all rounds.
    """

    def __init__(
        self,
        renderer: Renderer,
        llm: Optional[Any] = None,
        contact_name: str = "Partner",
        max_iterations: int = MAX_ITERATIONS,
        round_delay: float = ROUND_DELAY,
        qc_result_path: str | Path = QC_RESULT_PATH,
        report_path: Optional[str | Path] = None,
        result_path: str | Path = ITERATIVE_RESULT_PATH,
        cache: Optional[ContentCache] = None,
    ):
        if max_iterations < 1:
            raise ValueError("max_iterations must be at least 1")
        self.renderer = renderer
        self.llm = llm
        self.contact_name = contact_name
        self.max_iterations = max_iterations
        self.round_delay = round_delay
        self.qc_result_path = Path(qc_result_path)
        self.report_path = Path(report_path) if report_path else None
        self.result_path = Path(result_path)
        self.cache = cache if cache is not None else ContentCache()

    # ── Loop ──────────────────────────────────────────────────────────────

    def run(self, research: dict, report_html: str) -> IterationOutcome:
        """Run rounds until the report passes or the iteration limit is hit.

        Raises RegenerationError if the renderer fails; the loop does not
        continue with a stale report.
        """
        state = LoopState.VALIDATING
        iteration = 1
        research = copy.deepcopy(research)
        result: Optional[QCResult] = None
        notes = None

        while state not in TERMINAL_STATES:
            if state is LoopState.VALIDATING:
                print(f"\n{'='*60}")
                print(f"ITERATION {iteration}/{self.max_iterations}")
                print(f"{'='*60}")
                result = run_qc(research, report_html, llm=self.llm, iteration=iteration)
                print(format_qc_report(result))
                save_qc_result(result, self.qc_result_path)
                state = next_state(state, result.status, iteration, self.max_iterations)

            elif state is LoopState.ANALYZING_FAILURE:
                research, notes = self._analyze_failure(research, report_html, result, iteration)
                state = next_state(state, None, iteration, self.max_iterations)

            elif state is LoopState.REGENERATING:
                report_html = self._regenerate(research, notes)
                iteration += 1
                if self.round_delay > 0:
                    print(f"  .. waiting {self.round_delay:g}s before next validation")
                    time.sleep(self.round_delay)
                state = next_state(state, None, iteration, self.max_iterations)

        outcome = IterationOutcome(state, iteration, result, research, report_html)
        self._finish(outcome)
        return outcome

    # ── Round steps ───────────────────────────────────────────────────────

    def _analyze_failure(
        self,
        research: dict,
        report_html: str,
        result: QCResult,
        iteration: int,
    ) -> tuple[dict, str]:
        """Best effort: get guidance, try a data fix, write notes for the renderer."""
        round_research = copy.deepcopy(research)
        failures = [f for f in result.findings if f.severity is not Severity.WARNING]
        failures = failures or list(result.findings)
        print(f"\n  QC FAILED - {len(failures)} issue(s) to address")

        practice = None
        if self.llm is not None:
            loc = location(round_research)
            practice = generate_practice_content(
                self.llm, practice_areas(round_research), loc["city"], loc["state"], self.cache
            )

        guidance = request_fix_guidance(self.llm, round_research, report_html, failures, practice)
        if guidance:
            print(f"{'-'*60}\n{guidance}\n{'-'*60}")

        fixed = apply_fixes(self.llm, round_research, guidance, failures)
        changed = summarize_record_change(research, fixed)
        if changed:
            print(f"  OK Research fields changed: {', '.join(changed)}")

        notes = build_improvement_notes(iteration, fixed, failures, guidance)
        return fixed, notes

    def _regenerate(self, research: dict, notes: Optional[str]) -> str:
        try:
            html = self.renderer(copy.deepcopy(research), self.contact_name, notes)
        except RegenerationError:
            raise
        except Exception as e:
            raise RegenerationError(f"Could not regenerate report: {e}") from e
        if not isinstance(html, str) or not html.strip():
            raise RegenerationError("Renderer returned no HTML")

        html, fixed = prefix_verbose_phrasing(html)
        if fixed:
            print(f"  OK Pre-fixed {fixed} verbose phrase(s)")
        if self.report_path:
            save_report(html, self.report_path)
        return html

    def _finish(self, outcome: IterationOutcome) -> None:
        if outcome.passed:
            print(f"\n{'='*60}")
            print(f"REPORT PASSED after {outcome.iterations} iteration(s)")
            print(f"Firm: {firm_name(outcome.research)} ({location_label(outcome.research)})")
            print(f"{'='*60}")
        else:
            print()
            print(format_rejection(outcome.result, outcome.iterations))

        with open(self.result_path, "w", encoding="utf-8") as f:
            json.dump(outcome.to_dict(), f, indent=2, ensure_ascii=False)
