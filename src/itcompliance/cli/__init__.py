"""
CLI commands for itcompliance.
"""

from itcompliance.cli.departments import departments_command
from itcompliance.cli.report import report_command
from itcompliance.cli.validate import validate_command

__all__ = [
    "departments_command",
    "report_command",
    "validate_command",
]
