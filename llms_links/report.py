"""Render a :class:`RunReport` as console text."""

from __future__ import annotations

from typing import List

from llms_links.models import RunReport


def render_report(report: RunReport) -> str:
    """Return the final summary printed at the end of a run."""
    lines: List[str] = [
        f"Checked {report.urls_checked} URL(s) in {report.files_checked} file(s)"
        f" ({report.skipped} skipped)."
    ]

    if report.ok:
        lines.append("🎉 All URLs validated successfully!")
        return "\n".join(lines)

    if report.failure_count:
        lines.append(f"🚨 Found {report.failure_count} invalid URL(s):")
        for path, failures in report.failures.items():
            for failure in failures:
                lines.append(f"  - File: {path}")
                lines.append(f"    URL: {failure.url}")
                lines.append(f"    Reason: {failure.reason}")
                lines.append("")

    if report.file_errors:
        lines.append(f"🚨 Could not process {len(report.file_errors)} file(s):")
        for error in report.file_errors:
            lines.append(f"  - File: {error.source}")
            lines.append(f"    Reason: {error.reason}")
            lines.append("")

    return "\n".join(lines).rstrip("\n")
