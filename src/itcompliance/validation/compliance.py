"""
Machine compliance evaluator.

Applies six independent field checks to a machine check record and reports
which fields fall short of the department's policy tier:

    Processor         Apple Silicon, Intel Core i5/i7/i9 11th Gen+, Ryzen 5/7/9
    Memory            16GB or more
    Graphics          premium tier only; Creative needs RTX 2050 or better
    Storage           1TB (premium) or 512GB (standard)
    Internet Speed    mean of 3 tests: >= 20 down, >= 5 up, <= 50 ms ping
    Operating System  Windows 11 Pro, or macOS Sonoma/Sequoia

Every check runs for every record; failures are listed in the order above.
Malformed values fail their field instead of raising, so any stored record
can be rendered with a verdict.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

import structlog

from itcompliance.core.errors import RecordPreconditionError
from itcompliance.core.tiers import PolicyTier, get_department_tier
from itcompliance.domain.models import (
    ComplianceField,
    ComputerType,
    MachineCheckRecord,
    ProcessorBrand,
    SpeedTest,
    ValidationResult,
)
from itcompliance.domain.parsing import digits_value, parse_capacity, parse_graphics
from itcompliance.validation.policy import DEFAULT_POLICY, CompliancePolicy

logger = structlog.get_logger()


@dataclass(frozen=True)
class SpeedAverages:
    """Mean speed test results."""

    download_mbps: float
    upload_mbps: float
    ping_ms: float


def speed_test_averages(speed_tests: Sequence[SpeedTest]) -> SpeedAverages | None:
    """Average download, upload and ping over all tests.

    Returns:
        SpeedAverages, or None when there are no tests
    """
    count = len(speed_tests)
    if count == 0:
        return None
    return SpeedAverages(
        download_mbps=sum(t.download_mbps for t in speed_tests) / count,
        upload_mbps=sum(t.upload_mbps for t in speed_tests) / count,
        ping_ms=sum(t.ping_ms for t in speed_tests) / count,
    )


def is_processor_valid(
    record: MachineCheckRecord, policy: CompliancePolicy = DEFAULT_POLICY
) -> bool:
    """Check the processor. The rule is the same for both tiers."""
    processor = record.processor

    if record.computer_type == ComputerType.MAC:
        chip = processor.mac_processor
        return isinstance(chip, str) and bool(chip) and chip.startswith(policy.mac_processor_prefix)

    if record.computer_type == ComputerType.WINDOWS:
        if processor.brand == ProcessorBrand.INTEL:
            if processor.series not in policy.intel_series_allowed:
                return False
            generation = digits_value(processor.generation) or 0
            return generation >= policy.min_intel_generation

        if processor.brand == ProcessorBrand.AMD:
            return processor.series in policy.amd_series_allowed

    return False


def is_memory_valid(memory: Any, policy: CompliancePolicy = DEFAULT_POLICY) -> bool:
    """Check memory capacity; applies to every department."""
    gigabytes = digits_value(memory)
    return gigabytes is not None and gigabytes >= policy.min_memory_gb


def is_graphics_valid(
    record: MachineCheckRecord,
    tier: PolicyTier,
    policy: CompliancePolicy = DEFAULT_POLICY,
) -> bool:
    """Check graphics against the department tier."""
    if tier is PolicyTier.STANDARD:
        # Integrated graphics are enough
        return True

    gpu = parse_graphics(record.graphics)

    if record.department in policy.creative_departments:
        return gpu.rtx_model is not None and gpu.rtx_model >= policy.creative_min_rtx

    if gpu.iris_xe or gpu.dedicated:
        return True
    return record.computer_type == ComputerType.MAC and gpu.integrated_or_apple


def is_storage_valid(
    storage: Any,
    tier: PolicyTier,
    policy: CompliancePolicy = DEFAULT_POLICY,
) -> bool:
    """Check storage capacity against the department tier."""
    capacity = parse_capacity(storage)
    if capacity.value is None:
        return False
    if capacity.unit == "TB":
        return capacity.value >= policy.min_storage_tb
    return capacity.value >= policy.min_storage_gb(tier)


def is_internet_speed_valid(
    speed_tests: Sequence[SpeedTest], policy: CompliancePolicy = DEFAULT_POLICY
) -> bool:
    """Check mean speed test results. Extra tests beyond the minimum are averaged in."""
    if len(speed_tests) < policy.min_speed_tests:
        return False
    averages = speed_test_averages(speed_tests)
    if averages is None:
        return False
    return (
        averages.download_mbps >= policy.min_download_mbps
        and averages.upload_mbps >= policy.min_upload_mbps
        and averages.ping_ms <= policy.max_ping_ms
    )


def is_operating_system_valid(
    record: MachineCheckRecord, policy: CompliancePolicy = DEFAULT_POLICY
) -> bool:
    """Check the OS by exact name. The rule is the same for both tiers."""
    if record.computer_type == ComputerType.WINDOWS:
        return record.operating_system in policy.windows_os_allowed
    if record.computer_type == ComputerType.MAC:
        return record.operating_system in policy.mac_os_allowed
    return False


def _passes(name: ComplianceField, check: Callable[[], bool]) -> bool:
    try:
        return bool(check())
    except (TypeError, ValueError, AttributeError) as e:
        # Malformed value: fail the field rather than the evaluation
        logger.debug("field_check_error", field=name.value, error=str(e))
        return False


def validate_entry(
    record: MachineCheckRecord,
    policy: CompliancePolicy = DEFAULT_POLICY,
) -> ValidationResult:
    """
    Evaluate a machine check record against the compliance policy.

    Args:
        record: Record to evaluate; never modified
        policy: Thresholds to apply

    Returns:
        ValidationResult listing failed fields in evaluation order

    Raises:
        RecordPreconditionError: If record or its speed test list is missing

    Example:
        >>> result = validate_entry(record)
        >>> result.passed, [f.value for f in result.failed_fields]
        (False, ['Graphics'])
    """
    if record is None:
        raise RecordPreconditionError("No record to validate")
    if not isinstance(record.speed_tests, (list, tuple)):
        raise RecordPreconditionError(
            "Record has no speed test list", details={"name": record.name}
        )

    tier = get_department_tier(record.department)

    checks: tuple[tuple[ComplianceField, Callable[[], bool]], ...] = (
        (ComplianceField.PROCESSOR, lambda: is_processor_valid(record, policy)),
        (ComplianceField.MEMORY, lambda: is_memory_valid(record.memory, policy)),
        (ComplianceField.GRAPHICS, lambda: is_graphics_valid(record, tier, policy)),
        (ComplianceField.STORAGE, lambda: is_storage_valid(record.storage, tier, policy)),
        (
            ComplianceField.INTERNET_SPEED,
            lambda: is_internet_speed_valid(record.speed_tests, policy),
        ),
        (ComplianceField.OPERATING_SYSTEM, lambda: is_operating_system_valid(record, policy)),
    )

    failed = tuple(name for name, check in checks if not _passes(name, check))

    logger.debug(
        "entry_validated",
        department=record.department,
        tier=tier.value,
        passed=not failed,
        failed_fields=[f.value for f in failed],
    )
    return ValidationResult(failed_fields=failed)
