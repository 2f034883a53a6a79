"""
Compliance analytics data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from itcompliance.domain.models import ComplianceField


@dataclass
class DepartmentStats:
    """Pass/fail counts for one department."""

    department: str
    tier: str
    total: int = 0
    passed: int = 0
    failed: int = 0

    @property
    def compliance_rate(self) -> float:
        return round(self.passed / max(self.total, 1) * 100, 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "department": self.department,
            "tier": self.tier,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "compliance_rate": self.compliance_rate,
        }


@dataclass
class DriftedRecord:
    """A record whose stored status disagrees with a fresh evaluation."""

    name: str
    department: str
    stored_status: str
    current_status: str
    failed_fields: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "department": self.department,
            "stored_status": self.stored_status,
            "current_status": self.current_status,
            "failed_fields": self.failed_fields,
        }


@dataclass
class ComplianceSummary:
    """Aggregate verdicts over a batch of records."""

    total: int
    passed: int
    failed: int
    departments: list[DepartmentStats] = field(default_factory=list)
    failure_reasons: dict[ComplianceField, int] = field(default_factory=dict)
    drifted: list[DriftedRecord] = field(default_factory=list)

    @property
    def compliance_rate(self) -> float:
        """Percentage of records passing (0.0 for an empty batch)."""
        if self.total == 0:
            return 0.0
        return round(self.passed / self.total * 100, 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "compliance_rate": self.compliance_rate,
            "departments": [d.to_dict() for d in self.departments],
            "failure_reasons": {k.value: v for k, v in self.failure_reasons.items()},
            "drifted": [d.to_dict() for d in self.drifted],
        }


@dataclass(frozen=True)
class FieldVerdict:
    """One row of the read-only detail view.

    Attributes:
        field: Field name from the failed_fields vocabulary
        value: Value as displayed
        failed: Whether to draw a failure marker next to the value
        failing_metrics: For internet speed, which averages missed
            (download, upload, ping)
    """

    field: ComplianceField
    value: str
    failed: bool
    failing_metrics: tuple[str, ...] = ()
