"""Machine check records, verdicts and boundary parsers."""

from itcompliance.domain.models import (
    FIELD_ORDER,
    CheckStatus,
    ComplianceField,
    ComputerType,
    MachineCheckRecord,
    ProcessorBrand,
    ProcessorInfo,
    SpeedTest,
    ValidationResult,
)
from itcompliance.domain.loader import load_records
from itcompliance.domain.parsing import (
    Capacity,
    GraphicsProfile,
    digits_value,
    parse_capacity,
    parse_graphics,
)

__all__ = [
    # Models
    "CheckStatus",
    "ComplianceField",
    "ComputerType",
    "FIELD_ORDER",
    "MachineCheckRecord",
    "ProcessorBrand",
    "ProcessorInfo",
    "SpeedTest",
    "ValidationResult",
    # Loading
    "load_records",
    # Parsing
    "Capacity",
    "GraphicsProfile",
    "digits_value",
    "parse_capacity",
    "parse_graphics",
]
