"""
Compliance policy thresholds.

``DEFAULT_POLICY`` is the policy the console enforces today. A YAML file can
override individual values, e.g.::

    min_memory_gb: 32
    mac_os_allowed: [Sequoia]

Records persisted with a status computed under an older policy are not
re-evaluated when these values change.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import structlog
import yaml

from itcompliance.core.errors import ConfigurationError
from itcompliance.core.tiers import PolicyTier

logger = structlog.get_logger()


@dataclass(frozen=True)
class CompliancePolicy:
    """Thresholds applied by the policy evaluator.

    Attributes:
        min_memory_gb: Minimum RAM for every department
        intel_series_allowed: Intel series that qualify (generation permitting)
        min_intel_generation: Oldest qualifying Intel generation
        amd_series_allowed: AMD series that qualify
        mac_processor_prefix: Prefix shared by Apple Silicon chip names
        premium_min_storage_gb: Minimum GB-denominated storage, premium tier
        standard_min_storage_gb: Minimum GB-denominated storage, standard tier
        min_storage_tb: Minimum TB-denominated storage, both tiers
        creative_departments: Premium departments that need an RTX card
        creative_min_rtx: Lowest qualifying RTX model number
        min_speed_tests: Number of speed tests required
        min_download_mbps: Minimum mean download speed
        min_upload_mbps: Minimum mean upload speed
        max_ping_ms: Maximum mean ping
        windows_os_allowed: Accepted Windows editions (exact match)
        mac_os_allowed: Accepted macOS releases (exact match)
    """

    min_memory_gb: int = 16
    intel_series_allowed: tuple[str, ...] = ("Core i5", "Core i7", "Core i9")
    min_intel_generation: int = 11
    amd_series_allowed: tuple[str, ...] = ("Ryzen 5", "Ryzen 7", "Ryzen 9")
    mac_processor_prefix: str = "M"
    premium_min_storage_gb: int = 1000
    standard_min_storage_gb: int = 512
    min_storage_tb: int = 1
    creative_departments: tuple[str, ...] = ("Creative",)
    creative_min_rtx: int = 2050
    min_speed_tests: int = 3
    min_download_mbps: float = 20.0
    min_upload_mbps: float = 5.0
    max_ping_ms: float = 50.0
    windows_os_allowed: tuple[str, ...] = ("Windows 11 Pro",)
    mac_os_allowed: tuple[str, ...] = ("Sonoma", "Sequoia")

    def min_storage_gb(self, tier: PolicyTier) -> int:
        """Minimum GB-denominated storage for a tier."""
        if tier is PolicyTier.PREMIUM:
            return self.premium_min_storage_gb
        return self.standard_min_storage_gb

    def with_overrides(self, overrides: dict[str, Any]) -> CompliancePolicy:
        """Return a copy with the given values replaced.

        Raises:
            ConfigurationError: On unknown keys or values of the wrong type
        """
        known = {f.name: f for f in fields(self)}
        unknown = sorted(set(overrides) - set(known))
        if unknown:
            raise ConfigurationError(
                "Unknown policy settings", details={"keys": ", ".join(unknown)}
            )

        coerced: dict[str, Any] = {}
        for key, value in overrides.items():
            current = getattr(self, key)
            if isinstance(current, tuple):
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    raise ConfigurationError(
                        "Policy setting must be a list of strings", details={"key": key}
                    )
                coerced[key] = tuple(value)
            elif isinstance(current, str):
                if not isinstance(value, str):
                    raise ConfigurationError(
                        "Policy setting must be a string", details={"key": key}
                    )
                coerced[key] = value
            else:
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigurationError(
                        "Policy setting must be a number", details={"key": key}
                    )
                coerced[key] = type(current)(value)
        return replace(self, **coerced)


DEFAULT_POLICY = CompliancePolicy()


def load_policy(path: str | Path | None = None) -> CompliancePolicy:
    """Load a policy, applying overrides from a YAML file if given.

    Args:
        path: Optional path to a YAML mapping of policy overrides

    Returns:
        CompliancePolicy with overrides applied

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    if path is None:
        return DEFAULT_POLICY

    policy_path = Path(path)
    try:
        with open(policy_path) as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        raise ConfigurationError(
            "Policy file not found", details={"path": str(policy_path)}
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(
            "Policy file is not valid YAML", details={"path": str(policy_path), "error": str(e)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Policy file must contain a mapping", details={"path": str(policy_path)}
        )

    policy = DEFAULT_POLICY.with_overrides(data)
    logger.info("policy_loaded", path=str(policy_path), overrides=sorted(data))
    return policy
