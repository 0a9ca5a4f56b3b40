"""Utilities for rendering clean reports in the CLI."""

from __future__ import annotations

import json

from linkclean.models import CleanReport


def render_report(report: CleanReport) -> str:
    """Render the counters of *report* as an aligned block of text."""
    rows = [
        ("Links found", report.urls_found),
        ("Links cleaned", report.urls_modified),
        ("Params removed", report.params_removed),
    ]
    width = max(len(label) for label, _ in rows)
    lines = ["--- Clean report ---"]
    lines.extend(f"  {label.ljust(width)} : {value}" for label, value in rows)
    return "\n".join(lines)


def render_report_json(report: CleanReport) -> str:
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)
