"""
Load machine check records from YAML or JSON exports.

Accepted shapes:
1. A list of entries
2. A mapping with an ``entries`` list (console export format)

Files ending in .json are read with the json module, everything else as YAML.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog
import yaml

from itcompliance.core.errors import InputFileError
from itcompliance.domain.models import MachineCheckRecord

logger = structlog.get_logger()


def load_records(path: str | Path) -> list[MachineCheckRecord]:
    """
    Read machine check records from a file.

    Args:
        path: Path to a YAML or JSON file

    Returns:
        Records in file order

    Raises:
        InputFileError: If the file is missing, unparsable or has no entries list
        RecordPreconditionError: If an entry is not a mapping or lacks speedTests
    """
    records_path = Path(path)
    try:
        with open(records_path) as f:
            if records_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise InputFileError("Records file not found", details={"path": str(records_path)}) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InputFileError(
            "Records file could not be parsed",
            details={"path": str(records_path), "error": str(e)},
        ) from e

    if isinstance(data, dict):
        data = data.get("entries")
    if not isinstance(data, list):
        raise InputFileError(
            "Records file must contain a list of entries", details={"path": str(records_path)}
        )

    records = [MachineCheckRecord.from_dict(entry) for entry in data]
    logger.info("records_loaded", path=str(records_path), count=len(records))
    return records
