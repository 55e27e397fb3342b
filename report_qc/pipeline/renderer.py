"""Report regeneration through an external generator process.

The controller accepts any callable ``(research, contact_name, notes) -> html``.
CommandRenderer is the one used from the command line: it hands the research
record and notes to the configured generator command as files and reads the
rendered HTML back.
"""

from __future__ import annotations

import shlex
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from report_qc.config import IMPROVEMENT_NOTES_PATH, RENDER_TIMEOUT, REPORT_RENDER_COMMAND
from report_qc.errors import RegenerationError
from report_qc.loaders.report import load_report
from report_qc.loaders.research import save_research


class CommandRenderer:
    """Run ``command`` to re-render a report.

    The command string may use the placeholders {research}, {contact},
    {report} and {notes}; each is replaced by the matching path or value
    after shell-style splitting, so paths with spaces survive.
    """

    def __init__(
        self,
        command: str = REPORT_RENDER_COMMAND,
        report_path: str | Path = "report.html",
        notes_path: str | Path = IMPROVEMENT_NOTES_PATH,
        timeout: float = RENDER_TIMEOUT,
    ):
        if not command:
            raise ValueError("REPORT_RENDER_COMMAND not set. Add it to your .env file.")
        self.command = command
        self.report_path = Path(report_path)
        self.notes_path = Path(notes_path)
        self.timeout = timeout

    def _argv(self, research_path: Path, contact_name: str) -> list[str]:
        values = {
            "research": str(research_path),
            "contact": contact_name,
            "report": str(self.report_path),
            "notes": str(self.notes_path),
        }
        return [arg.format(**values) for arg in shlex.split(self.command)]

    def __call__(self, research: dict, contact_name: str, notes: Optional[str] = None) -> str:
        self.notes_path.write_text(notes or "", encoding="utf-8")
        # the previous round's report must not be read back as this round's
        self.report_path.unlink(missing_ok=True)

        with tempfile.TemporaryDirectory() as tmp:
            research_path = Path(tmp) / "research.json"
            save_research(research, research_path)
            argv = self._argv(research_path, contact_name)
            print(f"  -> Regenerating report: {' '.join(argv)}")
            try:
                subprocess.run(argv, check=True, timeout=self.timeout)
            except (OSError, subprocess.SubprocessError) as e:
                raise RegenerationError(f"Report generator failed: {e}") from e

        if not self.report_path.exists():
            raise RegenerationError(f"Report generator exited without writing {self.report_path}")
        html = load_report(self.report_path)
        print(f"  OK Report regenerated ({len(html) // 1024}KB)")
        return html
