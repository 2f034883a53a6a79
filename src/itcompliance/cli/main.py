"""
itcompliance command line.

Usage:
    itcompliance <command> [args]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from itcompliance.config import get_settings
from itcompliance.core.tiers import PolicyTier
from itcompliance.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="itcompliance", description="IT compliance checks for staff machines"
    )
    parser.add_argument("--log-level", help="Log level (default from ITCOMPLIANCE_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command")

    validate_parser = subparsers.add_parser("validate", help="Validate machine check records")
    validate_parser.add_argument("records_file", help="YAML or JSON file of entries")
    validate_parser.add_argument("--format", choices=["table", "json"], default=None)
    validate_parser.add_argument("--policy", dest="policy_file", help="YAML policy overrides")

    report_parser = subparsers.add_parser("report", help="Summarize compliance across records")
    report_parser.add_argument("records_file", help="YAML or JSON file of entries")
    report_parser.add_argument("--format", choices=["table", "json"], default=None)
    report_parser.add_argument("--policy", dest="policy_file", help="YAML policy overrides")

    departments_parser = subparsers.add_parser("departments", help="List departments and tiers")
    departments_parser.add_argument(
        "--tier", choices=[t.value for t in PolicyTier], default=None
    )

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging("DEBUG" if settings.debug else (args.log_level or settings.log_level))

    if args.command == "validate":
        from itcompliance.cli.validate import validate_command

        sys.exit(validate_command(args.records_file, format=args.format, policy_file=args.policy_file))

    if args.command == "report":
        from itcompliance.cli.report import report_command

        sys.exit(report_command(args.records_file, format=args.format, policy_file=args.policy_file))

    if args.command == "departments":
        from itcompliance.cli.departments import departments_command

        sys.exit(departments_command(tier=args.tier))

    parser.print_help()
    sys.exit(0)


if __name__ == "__main__":
    main()
