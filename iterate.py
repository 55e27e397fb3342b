#!/usr/bin/env python3
"""Iterative QC: validate, fix, regenerate, up to MAX_ITERATIONS rounds.

Usage:
    python iterate.py research.json report.html                # contact name "Partner"
    python iterate.py research.json report.html "Jane Doe"
    python iterate.py research.json report.html --max-iterations 3

The report generator is run through REPORT_RENDER_COMMAND (set it in .env),
for example:
    REPORT_RENDER_COMMAND="node report-generator.js {research} {contact} --notes {notes} --out {report}"

Exit code 0 means the final report passed, 1 means it was rejected or could
not be regenerated.
"""

import argparse
import sys

from report_qc.cache import ContentCache
from report_qc.config import MAX_ITERATIONS, REPORT_RENDER_COMMAND
from report_qc.errors import QCError
from report_qc.loaders import load_report, load_research
from report_qc.pipeline import CommandRenderer, IterativeQC, build_llm_client


def main():
    parser = argparse.ArgumentParser(description="Validate and regenerate a gap report until it passes")
    parser.add_argument("research", help="Research JSON")
    parser.add_argument("report", help="Rendered report HTML (overwritten by each regeneration)")
    parser.add_argument("contact_name", nargs="?", default="Partner", help="Contact name for the report")
    parser.add_argument("--max-iterations", type=int, default=MAX_ITERATIONS)
    parser.add_argument("--render-command", default=REPORT_RENDER_COMMAND, help="Overrides REPORT_RENDER_COMMAND")
    args = parser.parse_args()

    try:
        research = load_research(args.research)
        report_html = load_report(args.report)
        renderer = CommandRenderer(args.render_command, report_path=args.report)
        controller = IterativeQC(
            renderer,
            llm=build_llm_client(),
            contact_name=args.contact_name,
            max_iterations=args.max_iterations,
            report_path=args.report,
            cache=ContentCache(),
        )
        outcome = controller.run(research, report_html)
    except (QCError, ValueError) as e:
        print(f"\nERROR: {e}")
        sys.exit(1)

    sys.exit(0 if outcome.passed else 1)


if __name__ == "__main__":
    main()
