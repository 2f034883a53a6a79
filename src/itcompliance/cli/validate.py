"""
CLI command for validating machine check records.

Usage:
    itcompliance validate entries.yaml
    itcompliance validate entries.json --format json
    itcompliance validate entries.yaml --policy policy.yaml

Exit codes:
    0 = every record passed
    1 = at least one record failed compliance
"""

from __future__ import annotations

import json

from rich.markup import escape
from rich.table import Table

from itcompliance.analytics import SummaryCalculator
from itcompliance.cli.ux import FAIL_MARK, PASS_MARK, console, header, success, warning
from itcompliance.config import get_settings
from itcompliance.core.errors import ExitCode, main_with_error_handling
from itcompliance.core.tiers import get_department_tier
from itcompliance.domain.loader import load_records
from itcompliance.domain.models import MachineCheckRecord, ValidationResult
from itcompliance.logging import bind_context
from itcompliance.validation import load_policy, validate_entry


@main_with_error_handling()
def validate_command(
    records_file: str,
    format: str | None = None,
    policy_file: str | None = None,
) -> int:
    """
    Validate every record in a file against the compliance policy.

    Args:
        records_file: YAML or JSON file of machine check entries
        format: Output format (table, json); defaults to settings
        policy_file: Optional YAML policy overrides; defaults to settings

    Returns:
        Exit code: 0 if all records passed, 1 otherwise
    """
    settings = get_settings()
    policy = load_policy(policy_file or settings.policy_file)
    output_format = format or settings.default_format

    records = load_records(records_file)
    results: list[tuple[MachineCheckRecord, ValidationResult]] = []
    for record in records:
        result = validate_entry(record, policy)
        bind_context(record=record.name, department=record.department).info(
            "record_validated", status=result.status.value
        )
        results.append((record, result))

    if output_format == "json":
        _print_json(results)
    else:
        _print_table(results, SummaryCalculator(policy))

    failed = sum(1 for _, result in results if not result.passed)
    return ExitCode.WARNING if failed else ExitCode.SUCCESS


def _print_json(results: list[tuple[MachineCheckRecord, ValidationResult]]) -> None:
    payload = [
        {
            "name": record.name,
            "department": record.department,
            "tier": get_department_tier(record.department).value,
            "status": result.status.value,
            "storedStatus": record.status,
            **result.to_dict(),
        }
        for record, result in results
    ]
    console.print_json(json.dumps(payload))


def _print_table(
    results: list[tuple[MachineCheckRecord, ValidationResult]],
    calculator: SummaryCalculator,
) -> None:
    header("IT Compliance Check")

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Name", style="bold")
    table.add_column("Department")
    table.add_column("Processor")
    table.add_column("Memory")
    table.add_column("Graphics")
    table.add_column("Storage")
    table.add_column("Internet Speed")
    table.add_column("Operating System")
    table.add_column("Status")

    for record, result in results:
        cells = []
        for row in calculator.detail_view(record, result):
            cell = escape(row.value)
            if row.failed:
                cell = f"[red]{cell} {FAIL_MARK}[/red]"
            cells.append(cell)
        status = (
            f"[green]{PASS_MARK} Passed[/green]" if result.passed else f"[red]{FAIL_MARK} Failed[/red]"
        )
        table.add_row(escape(str(record.name)), escape(str(record.department)), *cells, status)

    console.print(table)
    console.print()

    failed = sum(1 for _, result in results if not result.passed)
    if failed:
        warning(f"{failed}/{len(results)} records failed compliance")
    else:
        success(f"All {len(results)} records passed")
