"""
Rendering of run reports for humans and machines.
"""

import io
from typing import Any, Dict

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .cleanup.models import RemovalOutcome, RemovalResult, RunReport

MAX_STATUS_WIDTH = 80
CONSOLE_WIDTH = 240


def status_text(outcome: RemovalOutcome) -> str:
    """Human-readable status of one outcome."""
    if outcome.result is RemovalResult.REMOVED:
        return "Removed"
    if outcome.is_dry_run:
        return "Eligible for removal"
    if outcome.result is RemovalResult.SKIPPED:
        return f"Skipped: {outcome.reason}"
    return f"Error: {outcome.reason}"


def outcome_to_dict(outcome: RemovalOutcome) -> Dict[str, Any]:
    resource = outcome.resource
    return {
        "kind": resource.kind.value,
        "id": resource.id,
        "name": resource.name,
        "created_at": resource.created_at.isoformat() if resource.created_at else None,
        "result": outcome.result.value,
        "reason": outcome.reason,
    }


def report_to_dict(report: RunReport) -> Dict[str, Any]:
    """
    Convert a report to a JSON-serialisable dictionary.

    Args:
        report: Cycle report

    Returns:
        Dictionary with "kind", "resources" and "counts" keys
    """
    return {
        "kind": report.kind.value,
        "resources": [outcome_to_dict(o) for o in report.outcomes],
        "counts": report.counts(),
    }


def render_table(report: RunReport) -> str:
    """Render a report as a plain-text table, one row per outcome."""
    table = Table(box=box.SQUARE)
    table.add_column("Resource Type")
    table.add_column("Name")
    table.add_column("Status", max_width=MAX_STATUS_WIDTH, overflow="fold")
    for outcome in report.outcomes:
        table.add_row(
            outcome.resource.kind.display_name,
            Text(outcome.resource.name),
            Text(status_text(outcome)),
        )

    console = Console(file=io.StringIO(), width=CONSOLE_WIDTH, record=True, color_system=None)
    console.print(table)
    return console.export_text().rstrip("\n")
