"""Core modules for itcompliance - centralized definitions and utilities."""

from itcompliance.core.errors import (
    ComplianceError,
    ConfigurationError,
    ExitCode,
    InputFileError,
    RecordPreconditionError,
    format_error_message,
    main_with_error_handling,
)
from itcompliance.core.tiers import (
    DEPARTMENT_NAMES,
    DEPARTMENT_TIERS,
    PREMIUM_DEPARTMENTS,
    Department,
    PolicyTier,
    get_department_tier,
    is_known_department,
    is_premium_department,
)

__all__ = [
    # Errors
    "ExitCode",
    "ComplianceError",
    "ConfigurationError",
    "InputFileError",
    "RecordPreconditionError",
    "main_with_error_handling",
    "format_error_message",
    # Tiers
    "Department",
    "PolicyTier",
    "DEPARTMENT_NAMES",
    "DEPARTMENT_TIERS",
    "PREMIUM_DEPARTMENTS",
    "get_department_tier",
    "is_known_department",
    "is_premium_department",
]
