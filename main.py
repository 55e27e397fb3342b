#!/usr/bin/env python3
"""Single QC pass over a rendered gap report.

Usage:
    python main.py research.json report.html              # basic checks + AI analysis
    python main.py research.json report.html --no-ai      # basic checks only
    python main.py research.json report.html --out qc.json

Exit code 0 means the report is safe to send, 1 means do not send; the
details are in the written QC result JSON.
"""

import argparse
import sys

from report_qc.config import QC_RESULT_PATH
from report_qc.pipeline import build_llm_client, run_qc_files, save_qc_result
from report_qc.validation import format_qc_report


def main():
    parser = argparse.ArgumentParser(description="Validate a law-firm gap report before sending")
    parser.add_argument("research", help="Research JSON the report was rendered from")
    parser.add_argument("report", help="Rendered report HTML")
    parser.add_argument("--out", default=str(QC_RESULT_PATH), help="Where to write the QC result JSON")
    parser.add_argument("--no-ai", action="store_true", help="Skip the AI analysis phase")
    args = parser.parse_args()

    print(f"\n{'='*60}")
    print(f"QC: {args.report}")
    print(f"{'='*60}")

    llm = None if args.no_ai else build_llm_client()
    result = run_qc_files(args.research, args.report, llm=llm)

    print(f"\n{format_qc_report(result)}")
    path = save_qc_result(result, args.out)
    print(f"\nResult saved to {path}")

    sys.exit(0 if result.passed else 1)


if __name__ == "__main__":
    main()
