"""
CLI command listing departments and their policy tiers.
"""

from __future__ import annotations

from itcompliance.cli.ux import print_table
from itcompliance.core.errors import ExitCode, main_with_error_handling
from itcompliance.core.tiers import DEPARTMENT_TIERS, PolicyTier


@main_with_error_handling()
def departments_command(tier: str | None = None) -> int:
    """List known departments, optionally filtered to one tier."""
    rows = [
        [dept.value, dept_tier.value]
        for dept, dept_tier in DEPARTMENT_TIERS.items()
        if tier is None or dept_tier is PolicyTier(tier)
    ]
    print_table("Departments", ["Department", "Tier"], rows)
    return ExitCode.SUCCESS
