"""
Centralized department tier definitions.

This module is the single source of truth for which policy tier a
department is held to. Every known department is mapped explicitly, so a
department added to ``Department`` without a tier fails at import time
instead of silently landing in the standard tier.

Tiers:
- premium: Departments doing design, video or web work. Stricter graphics
  and storage requirements.
- standard: Everyone else. Integrated graphics and 512GB storage suffice.
"""

from __future__ import annotations

from enum import StrEnum

import structlog

logger = structlog.get_logger()


class PolicyTier(StrEnum):
    """Compliance policy tiers."""

    PREMIUM = "premium"
    STANDARD = "standard"


class Department(StrEnum):
    """Departments known to the console."""

    ABLED_ONLINE = "Abled Online"
    BLAB = "BLAB"
    BUSINESS_DEVELOPMENT = "Business Development"
    COACH = "Coach"
    CREATIVE = "Creative"
    CS = "CS"
    EA = "EA"
    EMT = "EMT"
    ESG = "ESG"
    FINANCE = "Finance"
    HR = "HR"
    IT = "IT"
    LANG = "Lang"
    LD = "LD"
    LEARNING = "Learning"
    MANCOM = "Mancom"
    MKT = "MKT"
    OTHERS = "Others"
    QA = "QA"
    RS = "RS"
    SPECIAL_PROJECTS = "Special Projects"
    STUDENT = "Student"
    TRAINEE = "Trainee"
    WEBDEV = "WebDev"


# Department -> tier. Must cover every Department member.
DEPARTMENT_TIERS: dict[Department, PolicyTier] = {
    Department.ABLED_ONLINE: PolicyTier.PREMIUM,
    Department.BLAB: PolicyTier.STANDARD,
    Department.BUSINESS_DEVELOPMENT: PolicyTier.STANDARD,
    Department.COACH: PolicyTier.STANDARD,
    Department.CREATIVE: PolicyTier.PREMIUM,
    Department.CS: PolicyTier.STANDARD,
    Department.EA: PolicyTier.STANDARD,
    Department.EMT: PolicyTier.STANDARD,
    Department.ESG: PolicyTier.STANDARD,
    Department.FINANCE: PolicyTier.STANDARD,
    Department.HR: PolicyTier.STANDARD,
    Department.IT: PolicyTier.STANDARD,
    Department.LANG: PolicyTier.STANDARD,
    Department.LD: PolicyTier.STANDARD,
    Department.LEARNING: PolicyTier.PREMIUM,
    Department.MANCOM: PolicyTier.STANDARD,
    Department.MKT: PolicyTier.STANDARD,
    Department.OTHERS: PolicyTier.STANDARD,
    Department.QA: PolicyTier.STANDARD,
    Department.RS: PolicyTier.STANDARD,
    Department.SPECIAL_PROJECTS: PolicyTier.STANDARD,
    Department.STUDENT: PolicyTier.STANDARD,
    Department.TRAINEE: PolicyTier.STANDARD,
    Department.WEBDEV: PolicyTier.PREMIUM,
}

_unmapped = set(Department) - set(DEPARTMENT_TIERS)
if _unmapped:
    raise RuntimeError(f"Departments without a policy tier: {sorted(_unmapped)}")

PREMIUM_DEPARTMENTS: frozenset[str] = frozenset(
    dept.value for dept, tier in DEPARTMENT_TIERS.items() if tier is PolicyTier.PREMIUM
)

# Canonical department names, in display order
DEPARTMENT_NAMES: tuple[str, ...] = tuple(dept.value for dept in Department)


def is_known_department(department: str) -> bool:
    """Check if a department name is one the console knows about."""
    return department in DEPARTMENT_NAMES


def get_department_tier(department: str) -> PolicyTier:
    """Get the policy tier for a department.

    Matching is exact and case-sensitive. Unknown departments (legacy or
    hand-edited data) are held to the standard tier.

    Args:
        department: Department name as stored on the record

    Returns:
        PolicyTier for the department
    """
    if is_known_department(department):
        return DEPARTMENT_TIERS[Department(department)]
    logger.warning("unknown_department", department=department, tier=PolicyTier.STANDARD.value)
    return PolicyTier.STANDARD


def is_premium_department(department: str) -> bool:
    """Check if a department is held to the premium tier."""
    return get_department_tier(department) is PolicyTier.PREMIUM
