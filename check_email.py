#!/usr/bin/env python3
"""Deterministic checks for an outgoing report email.

Usage:
    python check_email.py email.json

email.json holds {"subject", "body", "html", "context": {contactName,
firmName, reportUrl, totalRange, totalCases, practiceLabel}}.

Findings are warnings only: the exit code is always 0 unless the file
cannot be read.
"""

import argparse
import json
import sys

from report_qc.validation import validate_email


def main():
    parser = argparse.ArgumentParser(description="Check an outgoing report email")
    parser.add_argument("email", help="Email JSON file")
    args = parser.parse_args()

    try:
        with open(args.email, "r", encoding="utf-8") as f:
            email = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"ERROR: cannot read {args.email}: {e}")
        sys.exit(1)
    if not isinstance(email, dict):
        print(f"ERROR: {args.email} must contain a JSON object")
        sys.exit(1)

    warnings = validate_email(
        email.get("subject"),
        email.get("body"),
        email.get("html"),
        email.get("context"),
    )

    print(f"{'='*60}")
    print(f"EMAIL QC: {email.get('subject') or '(no subject)'}")
    print(f"{'='*60}")
    if warnings:
        print(f"WARNINGS ({len(warnings)}):")
        for w in warnings:
            print(f"  ~ {w.message}")
    else:
        print("All checks passed!")
    print(f"{'='*60}")


if __name__ == "__main__":
    main()
