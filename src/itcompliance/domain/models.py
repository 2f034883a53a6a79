"""
Machine check domain models.

Snapshot of a submitted PC compliance check and the verdict produced for it.
Records are immutable; the evaluator never changes them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Mapping

from itcompliance.core.errors import RecordPreconditionError


class ComputerType(StrEnum):
    """Machine platform; selects the processor and OS sub-policy."""

    WINDOWS = "Windows"
    MAC = "Mac"


class ProcessorBrand(StrEnum):
    """Windows processor vendors."""

    INTEL = "Intel"
    AMD = "AMD"


class CheckStatus(StrEnum):
    """Status stored on a record after evaluation."""

    PASSED = "Passed"
    FAILED = "Failed"


class ComplianceField(StrEnum):
    """Field names reported in failed_fields.

    Display code keys its failure markers off these strings, so the values
    must stay stable.
    """

    PROCESSOR = "Processor"
    MEMORY = "Memory"
    GRAPHICS = "Graphics"
    STORAGE = "Storage"
    INTERNET_SPEED = "Internet Speed"
    OPERATING_SYSTEM = "Operating System"


# Evaluation order; failed_fields always follows it
FIELD_ORDER: tuple[ComplianceField, ...] = (
    ComplianceField.PROCESSOR,
    ComplianceField.MEMORY,
    ComplianceField.GRAPHICS,
    ComplianceField.STORAGE,
    ComplianceField.INTERNET_SPEED,
    ComplianceField.OPERATING_SYSTEM,
)


@dataclass(frozen=True)
class ProcessorInfo:
    """Processor details.

    Windows machines fill brand/series/generation, Macs fill mac_processor.
    """

    brand: str = ""
    series: str = ""
    generation: str = ""
    mac_processor: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> ProcessorInfo:
        """Build processor details from the console shape.

        Anything other than a mapping (a legacy free-text label, say) gives an
        empty processor, which fails the processor check.
        """
        if not isinstance(data, Mapping):
            data = {}
        return cls(
            brand=_text(data.get("brand")),
            series=_text(data.get("series")),
            generation=_text(data.get("generation")),
            mac_processor=_text(data.get("macProcessor")),
        )

    def display(self, computer_type: str) -> str:
        """Human-readable processor label as shown in the detail view."""
        if computer_type == ComputerType.MAC:
            return self.mac_processor
        return " ".join(str(part) for part in (self.brand, self.series, self.generation) if part)


@dataclass(frozen=True)
class SpeedTest:
    """One internet speed test measurement."""

    download_mbps: float
    upload_mbps: float
    ping_ms: float
    url: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SpeedTest:
        return cls(
            download_mbps=_first(data, "downloadSpeed", "downloadSpeedMbps"),
            upload_mbps=_first(data, "uploadSpeed", "uploadSpeedMbps"),
            ping_ms=_first(data, "ping", "pingMs"),
            url=_text(data.get("url")),
        )


@dataclass(frozen=True)
class MachineCheckRecord:
    """A machine configuration submitted for compliance checking.

    Attributes:
        department: Department name; determines the policy tier
        computer_type: "Windows" or "Mac"
        processor: Processor details for the platform
        memory: Capacity string such as "16GB"
        graphics: Free-text GPU description
        storage: Capacity string such as "512GB" or "1TB"
        operating_system: Installed OS name or release name
        speed_tests: Internet speed measurements (three expected)
        status: Verdict persisted with the record, if any. This is a cached
            snapshot and may disagree with a fresh evaluation.
    """

    department: str
    computer_type: str
    processor: ProcessorInfo
    memory: str
    graphics: str
    storage: str
    operating_system: str
    speed_tests: tuple[SpeedTest, ...]

    # Descriptive fields carried by the console; not evaluated
    name: str = ""
    batch_number: str = ""
    pc_model: str = ""
    isp: str = ""
    connection_type: str = ""
    ip_address: str = ""
    status: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MachineCheckRecord:
        """Build a record from the console's JSON entry shape.

        Values are kept as submitted so malformed data surfaces as field
        failures. Only a missing mapping or speed test list is rejected.

        Raises:
            RecordPreconditionError: If data is not a mapping or has no
                speedTests list
        """
        if not isinstance(data, Mapping):
            raise RecordPreconditionError(
                "Record must be a mapping", details={"type": type(data).__name__}
            )
        tests = data.get("speedTests")
        if not isinstance(tests, list):
            raise RecordPreconditionError(
                "Record has no speedTests list", details={"name": data.get("name", "")}
            )

        return cls(
            department=_text(data.get("department")),
            computer_type=_text(data.get("computerType")),
            processor=ProcessorInfo.from_dict(data.get("processor")),
            memory=data.get("memory", ""),
            graphics=data.get("graphics", ""),
            storage=data.get("storage", ""),
            operating_system=data.get("operatingSystem", ""),
            speed_tests=tuple(
                SpeedTest.from_dict(t) if isinstance(t, Mapping) else t for t in tests
            ),
            name=_text(data.get("name")),
            batch_number=_text(data.get("batchNumber")),
            pc_model=_text(data.get("pcModel")),
            isp=_text(data.get("isp")),
            connection_type=_text(data.get("connectionType")),
            ip_address=_text(data.get("ipAddress")),
            status=data.get("status"),
        )


@dataclass(frozen=True)
class ValidationResult:
    """Verdict for one record."""

    failed_fields: tuple[ComplianceField, ...] = field(default_factory=tuple)

    @property
    def passed(self) -> bool:
        return not self.failed_fields

    @property
    def status(self) -> CheckStatus:
        return CheckStatus.PASSED if self.passed else CheckStatus.FAILED

    def has_failed(self, name: str) -> bool:
        return name in self.failed_fields

    def to_dict(self) -> dict[str, Any]:
        """Convert to the console's JSON shape."""
        return {
            "passed": self.passed,
            "failedFields": [f.value for f in self.failed_fields],
        }


def _text(value: Any) -> str:
    """Absent optional strings become empty."""
    return "" if value is None else value


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None
