"""
Compliance policy evaluation.

Checks a machine check record against the department-tier policy and
reports which fields fail.
"""

from itcompliance.validation.compliance import (
    SpeedAverages,
    is_graphics_valid,
    is_internet_speed_valid,
    is_memory_valid,
    is_operating_system_valid,
    is_processor_valid,
    is_storage_valid,
    speed_test_averages,
    validate_entry,
)
from itcompliance.validation.policy import DEFAULT_POLICY, CompliancePolicy, load_policy

__all__ = [
    "CompliancePolicy",
    "DEFAULT_POLICY",
    "SpeedAverages",
    "is_graphics_valid",
    "is_internet_speed_valid",
    "is_memory_valid",
    "is_operating_system_valid",
    "is_processor_valid",
    "is_storage_valid",
    "load_policy",
    "speed_test_averages",
    "validate_entry",
]
