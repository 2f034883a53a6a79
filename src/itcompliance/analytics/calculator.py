"""
Compliance summary calculator.

Re-evaluates a batch of stored records and aggregates the verdicts by
department and failing field. Stored statuses are compared with the fresh
verdicts and mismatches are reported; nothing is written back.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

import structlog

from itcompliance.analytics.models import (
    ComplianceSummary,
    DepartmentStats,
    DriftedRecord,
    FieldVerdict,
)
from itcompliance.core.tiers import get_department_tier
from itcompliance.domain.models import (
    FIELD_ORDER,
    ComplianceField,
    MachineCheckRecord,
    ValidationResult,
)
from itcompliance.validation.compliance import speed_test_averages, validate_entry
from itcompliance.validation.policy import DEFAULT_POLICY, CompliancePolicy

logger = structlog.get_logger()


class SummaryCalculator:
    """Aggregates compliance verdicts across records."""

    def __init__(self, policy: CompliancePolicy = DEFAULT_POLICY):
        self.policy = policy

    def summarize(self, records: Iterable[MachineCheckRecord]) -> ComplianceSummary:
        """
        Evaluate every record and aggregate the results.

        Args:
            records: Records to evaluate

        Returns:
            ComplianceSummary with per-department counts, failure reasons
            in field order, and records whose stored status has drifted
        """
        departments: dict[str, DepartmentStats] = {}
        reasons: Counter[ComplianceField] = Counter()
        drifted: list[DriftedRecord] = []
        total = passed = 0

        for record in records:
            result = validate_entry(record, self.policy)
            total += 1

            # Hand-edited departments may not be hashable strings
            department = str(record.department)
            stats = departments.get(department)
            if stats is None:
                stats = DepartmentStats(
                    department=department,
                    tier=get_department_tier(record.department).value,
                )
                departments[department] = stats
            stats.total += 1

            if result.passed:
                passed += 1
                stats.passed += 1
            else:
                stats.failed += 1
                reasons.update(result.failed_fields)

            if record.status is not None and record.status != result.status.value:
                drifted.append(
                    DriftedRecord(
                        name=record.name,
                        department=record.department,
                        stored_status=str(record.status),
                        current_status=result.status.value,
                        failed_fields=[f.value for f in result.failed_fields],
                    )
                )

        if drifted:
            logger.warning("status_drift_detected", count=len(drifted))

        return ComplianceSummary(
            total=total,
            passed=passed,
            failed=total - passed,
            departments=sorted(departments.values(), key=lambda d: d.department),
            failure_reasons={f: reasons[f] for f in FIELD_ORDER if reasons[f]},
            drifted=drifted,
        )

    def detail_view(
        self, record: MachineCheckRecord, result: ValidationResult | None = None
    ) -> list[FieldVerdict]:
        """
        Build the per-field rows of the read-only detail view.

        Args:
            record: Record to display
            result: Verdict to mark; evaluated fresh when omitted

        Returns:
            One FieldVerdict per field, in field order
        """
        if result is None:
            result = validate_entry(record, self.policy)

        values: dict[ComplianceField, str] = {
            ComplianceField.PROCESSOR: str(record.processor.display(record.computer_type)),
            ComplianceField.MEMORY: str(record.memory),
            ComplianceField.GRAPHICS: str(record.graphics),
            ComplianceField.STORAGE: str(record.storage),
            ComplianceField.OPERATING_SYSTEM: str(record.operating_system),
        }

        rows: list[FieldVerdict] = []
        for name in FIELD_ORDER:
            failed = result.has_failed(name)
            if name is ComplianceField.INTERNET_SPEED:
                rows.append(self._speed_row(record, failed))
            else:
                rows.append(FieldVerdict(field=name, value=values[name], failed=failed))
        return rows

    def _speed_row(self, record: MachineCheckRecord, failed: bool) -> FieldVerdict:
        try:
            averages = speed_test_averages(record.speed_tests)
        except (TypeError, AttributeError):
            averages = None

        if averages is None:
            return FieldVerdict(
                field=ComplianceField.INTERNET_SPEED, value="no usable tests", failed=failed
            )

        missed: list[str] = []
        if failed:
            if averages.download_mbps < self.policy.min_download_mbps:
                missed.append("download")
            if averages.upload_mbps < self.policy.min_upload_mbps:
                missed.append("upload")
            if averages.ping_ms > self.policy.max_ping_ms:
                missed.append("ping")

        return FieldVerdict(
            field=ComplianceField.INTERNET_SPEED,
            value=(
                f"{averages.download_mbps:.1f} Mbps down, "
                f"{averages.upload_mbps:.1f} Mbps up, "
                f"{averages.ping_ms:.0f} ms"
            ),
            failed=failed,
            failing_metrics=tuple(missed),
        )
