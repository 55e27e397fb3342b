"""QC pipeline: model client, AI analysis, fixes, rendering, and the iteration loop."""

from report_qc.pipeline.controller import IterationOutcome, IterativeQC, LoopState, next_state
from report_qc.pipeline.llm import ClaudeClient, build_llm_client
from report_qc.pipeline.qc import run_qc, run_qc_files, save_qc_result
from report_qc.pipeline.renderer import CommandRenderer

__all__ = [
    "IterationOutcome",
    "IterativeQC",
    "LoopState",
    "next_state",
    "ClaudeClient",
    "build_llm_client",
    "run_qc",
    "run_qc_files",
    "save_qc_result",
    "CommandRenderer",
]
