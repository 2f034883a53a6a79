"""
Compliance analytics.

Batch summaries of machine check verdicts:
- Pass/fail totals and compliance rate
- Per-department breakdown with policy tier
- Failure reasons by field
- Stored statuses that no longer match the current policy
"""

from itcompliance.analytics.calculator import SummaryCalculator
from itcompliance.analytics.models import (
    ComplianceSummary,
    DepartmentStats,
    DriftedRecord,
    FieldVerdict,
)

__all__ = [
    "ComplianceSummary",
    "DepartmentStats",
    "DriftedRecord",
    "FieldVerdict",
    "SummaryCalculator",
]
