"""
Parsers for the free-text fields of a machine check.

Memory, storage and graphics arrive as strings typed or picked in a form.
These helpers turn them into structured values once, at the boundary, so the
evaluator compares numbers and flags rather than matching strings.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Literal

# ASCII digits only; other Unicode digits count as non-digits
_NON_DIGITS = re.compile(r"[^0-9]")
_RTX_MODEL = re.compile(r"rtx\s*([0-9]+)")

# int() rejects longer digit strings by default
_MAX_INT_DIGITS = 4300

# Substrings that mark a dedicated GPU
DEDICATED_GPU_MARKERS: tuple[str, ...] = ("rtx", "gtx", "radeon", "nvidia")
INTEGRATED_GPU_MARKERS: tuple[str, ...] = ("integrated", "apple")
IRIS_XE_MARKER = "iris xe"


def _to_number(digits: str) -> int | float:
    if len(digits) > _MAX_INT_DIGITS:
        return float(digits)
    return int(digits)


def digits_value(text: Any) -> int | float | None:
    """Parse the digits of a string as an integer.

    Every character other than an ASCII digit is dropped first, so "16GB"
    gives 16 and "12th Gen" gives 12. Digit strings too long for int()
    come back as a float. Returns None when no digits remain or the value
    is not a string.
    """
    if not isinstance(text, str):
        return None
    digits = _NON_DIGITS.sub("", text)
    if not digits:
        return None
    return _to_number(digits)


@dataclass(frozen=True)
class Capacity:
    """A storage or memory capacity."""

    value: int | float | None
    unit: Literal["GB", "TB"]


def parse_capacity(text: Any) -> Capacity:
    """Parse a capacity string like "512GB" or "1TB".

    The unit is TB when the string contains "TB" (case-sensitive), GB
    otherwise.
    """
    unit: Literal["GB", "TB"] = "TB" if isinstance(text, str) and "TB" in text else "GB"
    return Capacity(value=digits_value(text), unit=unit)


@dataclass(frozen=True)
class GraphicsProfile:
    """Structured view of a graphics description.

    Attributes:
        iris_xe: Mentions Intel Iris Xe
        dedicated: Mentions an RTX, GTX, Radeon or NVIDIA part
        integrated_or_apple: Mentions integrated or Apple graphics
        rtx_model: Model number of the first "rtx N" reference, if any
    """

    iris_xe: bool = False
    dedicated: bool = False
    integrated_or_apple: bool = False
    rtx_model: int | float | None = None


def parse_graphics(text: Any) -> GraphicsProfile:
    """Parse a graphics description, case-insensitively.

    Examples:
        >>> parse_graphics("NVIDIA GeForce RTX 3060").rtx_model
        3060
        >>> parse_graphics("Intel Iris Xe Graphics").iris_xe
        True
    """
    if not isinstance(text, str):
        return GraphicsProfile()
    lowered = text.lower()
    match = _RTX_MODEL.search(lowered)
    return GraphicsProfile(
        iris_xe=IRIS_XE_MARKER in lowered,
        dedicated=any(marker in lowered for marker in DEDICATED_GPU_MARKERS),
        integrated_or_apple=any(marker in lowered for marker in INTEGRATED_GPU_MARKERS),
        rtx_model=_to_number(match.group(1)) if match else None,
    )
