"""Helpers for working with the fixed-width fields of two-line element sets."""

from __future__ import annotations

import math
import re

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DIGITS = "0123456789"


def parse_scientific_notation(value: str) -> str:
    """Turn a TLE implied-decimal field such as ``-11606-4`` into ``-.11606e-4``."""
    if not value:
        return "0.0"
    if len(value) < 3:
        raise ValueError(f"field too short for implied-decimal notation: {value!r}")

    mantissa, exponent = value[:-2], value[-2:]
    if "." not in mantissa:
        mantissa = f"{mantissa[:1]}.{mantissa[1:]}"
    return f"{mantissa}e{exponent}"


def validate_tle(line1: str, line2: str) -> None:
    """Check lengths, line numbers, matching satellite ids and checksums.

    Raises ValueError describing the first problem found.
    """
    if len(line1) != 69 or len(line2) != 69:
        raise ValueError("invalid TLE line length")
    if line1[0] != "1" or line2[0] != "2":
        raise ValueError("invalid line numbers")
    if line1[2:7] != line2[2:7]:
        raise ValueError("satellite IDs do not match")
    if not (verify_checksum(line1) and verify_checksum(line2)):
        raise ValueError("checksum verification failed")


def verify_checksum(line: str) -> bool:
    """Return whether the modulo-10 checksum in column 69 matches the line."""
    if len(line) < 69:
        raise ValueError(f"line too short for checksum: {len(line)} chars")

    total = sum(
        1 if char == "-" else int(char)
        for char in line[:68]
        if char == "-" or char in _DIGITS
    )
    check_char = line[68]
    if check_char not in _DIGITS:
        return False
    return int(check_char) == total % 10


def normalize_angle(angle: float) -> float:
    """Fold an angle in degrees into the range [-180, 180]."""
    angle = math.fmod(angle, 360)
    if angle > 180:
        angle -= 360
    elif angle < -180:
        angle += 360
    return angle


def day_of_year_to_month_day(day_of_year: int, is_leap: bool) -> tuple[int, int]:
    """Convert a day of the year to ``(month, day)``.

    A day past the end of the year yields ``(1, 0)``.
    """
    days_in_month = [31, 29 if is_leap else 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    remaining = day_of_year
    for month, days in enumerate(days_in_month, start=1):
        if remaining <= days:
            return month, remaining
        remaining -= days
    return 1, 0


def parse_float(text: str) -> float:
    """Parse a floating-point number, rejecting padding and digit separators."""
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid float syntax: {text!r}")
    return float(text)


def parse_int(text: str) -> int:
    """Parse a signed 64-bit decimal integer."""
    if not _INT_PATTERN.fullmatch(text):
        raise ValueError(f"invalid integer syntax: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def days_to_mdhms(year: int, days: float) -> tuple[int, int, int, int, float]:
    """Split a fractional day of the year into month, day, hour, minute, second.

    Seconds are truncated to whole microseconds.
    """
    whole = math.floor(days)
    fraction = days - whole

    is_leap = year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)
    month, day = day_of_year_to_month_day(int(whole), is_leap)
    if month == 13:
        month = 12
        day += 31

    fraction += 0.5 / 86400e6
    seconds_total = fraction * 86400.0
    total_minutes = int(math.floor(seconds_total / 60.0))
    second = math.fmod(seconds_total, 60.0)
    hour, minute = divmod(total_minutes, 60)

    second = math.floor(second * 1e6) / 1e6
    return month, day, hour, minute, second