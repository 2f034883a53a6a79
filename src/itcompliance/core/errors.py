"""
Unified error handling for itcompliance commands.

This module provides standardized error handling, exit codes, and
error reporting for the CLI and for callers of the policy evaluator.

Exit Codes:
- 0: Success (every evaluated record passed)
- 1: Warning (operation succeeded, at least one record failed compliance)
- 10: Configuration error (bad settings or policy file)
- 11: Input error (records file missing or unreadable)
- 12: Precondition error (caller handed the evaluator a broken record)
- 127: Unknown/internal error
"""

from __future__ import annotations

import functools
import sys
import traceback
from enum import IntEnum
from typing import Any, Callable, TypeVar

import structlog

logger = structlog.get_logger()


class ExitCode(IntEnum):
    """Standardized exit codes for CLI commands."""

    SUCCESS = 0
    WARNING = 1
    CONFIG_ERROR = 10
    INPUT_ERROR = 11
    PRECONDITION_ERROR = 12
    UNKNOWN_ERROR = 127


class ComplianceError(Exception):
    """Base exception for itcompliance errors with exit code support."""

    exit_code: ExitCode = ExitCode.UNKNOWN_ERROR
    show_traceback: bool = False

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(ComplianceError):
    """Raised for settings and policy file errors."""

    exit_code = ExitCode.CONFIG_ERROR


class InputFileError(ComplianceError):
    """Raised when a records file cannot be read or parsed."""

    exit_code = ExitCode.INPUT_ERROR


class RecordPreconditionError(ComplianceError):
    """Raised when a caller passes a record the evaluator cannot judge.

    This is a caller bug (no record at all, or no speed test list), not a
    non-compliant machine, so it is never folded into a field failure.
    """

    exit_code = ExitCode.PRECONDITION_ERROR


F = TypeVar("F", bound=Callable[..., int])


def main_with_error_handling(
    *,
    show_traceback: bool = False,
    log_errors: bool = True,
) -> Callable[[F], F]:
    """
    Decorator for CLI command functions that provides unified error handling.

    Args:
        show_traceback: If True, show full traceback for unexpected errors
        log_errors: If True, log errors to structlog

    Exit codes:
        - ComplianceError subclasses: Uses the error's exit_code
        - KeyboardInterrupt: Returns 130 (standard for SIGINT)
        - Other exceptions: Returns 127 (unknown error)
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> int:
            try:
                return func(*args, **kwargs)
            except ComplianceError as e:
                if log_errors:
                    logger.error(
                        "command_error",
                        error_type=type(e).__name__,
                        message=e.message,
                        exit_code=e.exit_code,
                        **e.details,
                    )
                print(f"error: {format_error_message(e)}", file=sys.stderr)
                if e.show_traceback or show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return e.exit_code
            except KeyboardInterrupt:
                if log_errors:
                    logger.info("command_interrupted")
                return 130
            except Exception as e:
                if log_errors:
                    logger.error(
                        "unexpected_error",
                        error_type=type(e).__name__,
                        message=str(e),
                        exit_code=ExitCode.UNKNOWN_ERROR,
                    )
                if show_traceback:
                    traceback.print_exc(file=sys.stderr)
                return ExitCode.UNKNOWN_ERROR

        return wrapper  # type: ignore[return-value]

    return decorator


def format_error_message(error: ComplianceError) -> str:
    """Format an error message for display to users."""
    msg = error.message
    if error.details:
        detail_str = ", ".join(f"{k}={v}" for k, v in error.details.items())
        msg = f"{msg} ({detail_str})"
    return msg
