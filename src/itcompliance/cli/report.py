"""
CLI command for the compliance summary.

Usage:
    itcompliance report entries.yaml
    itcompliance report entries.yaml --format json

Exit codes:
    0 = every record passed and no stored status has drifted
    1 = failures or drifted statuses present
"""

from __future__ import annotations

import json

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from itcompliance.analytics import ComplianceSummary, SummaryCalculator
from itcompliance.cli.ux import console, header, warning
from itcompliance.config import get_settings
from itcompliance.core.errors import ExitCode, main_with_error_handling
from itcompliance.domain.loader import load_records
from itcompliance.validation import load_policy


def _rate_style(rate: float) -> str:
    if rate >= 80:
        return "green"
    if rate >= 60:
        return "yellow"
    return "red"


@main_with_error_handling()
def report_command(
    records_file: str,
    format: str | None = None,
    policy_file: str | None = None,
) -> int:
    """
    Summarize compliance across every record in a file.

    Args:
        records_file: YAML or JSON file of machine check entries
        format: Output format (table, json); defaults to settings
        policy_file: Optional YAML policy overrides; defaults to settings

    Returns:
        Exit code: 0 when fully compliant, 1 otherwise
    """
    settings = get_settings()
    policy = load_policy(policy_file or settings.policy_file)

    summary = SummaryCalculator(policy).summarize(load_records(records_file))

    if (format or settings.default_format) == "json":
        console.print_json(json.dumps(summary.to_dict()))
    else:
        _print_table(summary)

    if summary.failed or summary.drifted:
        return ExitCode.WARNING
    return ExitCode.SUCCESS


def _print_table(summary: ComplianceSummary) -> None:
    header("Compliance Summary")

    style = _rate_style(summary.compliance_rate)
    console.print(
        Panel(
            f"[{style}]{summary.compliance_rate:.1f}%[/{style}]  "
            f"[dim]{summary.passed} passed / {summary.failed} failed / {summary.total} total[/dim]",
            title="Compliance Rate",
            border_style=style,
        )
    )

    table = Table(title="By Department", show_header=True, header_style="bold cyan")
    table.add_column("Department", style="bold")
    table.add_column("Tier")
    table.add_column("Total", justify="right")
    table.add_column("Passed", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Rate", justify="right")
    for dept in summary.departments:
        rate_style = _rate_style(dept.compliance_rate)
        table.add_row(
            escape(str(dept.department)),
            dept.tier,
            str(dept.total),
            str(dept.passed),
            str(dept.failed),
            f"[{rate_style}]{dept.compliance_rate:.1f}%[/{rate_style}]",
        )
    console.print(table)

    if summary.failure_reasons:
        reasons = Table(title="Failure Reasons", show_header=True, header_style="bold cyan")
        reasons.add_column("Field")
        reasons.add_column("Records", justify="right")
        for field_name, count in summary.failure_reasons.items():
            reasons.add_row(field_name.value, str(count))
        console.print(reasons)

    if summary.drifted:
        console.print()
        warning(f"{len(summary.drifted)} stored statuses no longer match the current policy")
        for drifted in summary.drifted:
            console.print(
                f"  [muted]{escape(str(drifted.name))} ({escape(str(drifted.department))}): "
                f"stored {escape(drifted.stored_status)}, now {drifted.current_status}[/muted]"
            )
    console.print()
