"""Reading two-line element sets into structured records."""

from __future__ import annotations

import datetime as _dt
import os
from dataclasses import dataclass

from satprop.tleutils import parse_float, parse_int, parse_scientific_notation


class TLEError(ValueError):
    """Raised when a two-line element set cannot be read."""


@dataclass(frozen=True)
class TLELine1:
    """Fields of the first line of a TLE, kept as text."""

    line_string: str
    line_number: str = ""
    satellite_id: str = ""
    classification: str = ""
    launch_year: str = ""
    launch_number: str = ""
    launch_piece: str = ""
    epoch_year: str = ""
    epoch_day: str = ""
    first_derivative: str = ""
    second_derivative: str = ""
    bstar: str = ""
    ephemeris_type: str = ""
    element_set_number: str = ""
    checksum: str = ""


@dataclass(frozen=True)
class TLELine2:
    """Fields of the second line of a TLE, kept as text."""

    line_string: str
    line_number: str = ""
    satellite_id: str = ""
    inclination: str = ""
    right_ascension: str = ""
    eccentricity: str = ""
    argument_of_perigee: str = ""
    mean_anomaly: str = ""
    mean_motion: str = ""
    revolution_number: str = ""
    checksum: str = ""


_LINE1_FIELDS = (
    ("line_number", 0, 1),
    ("satellite_id", 2, 7),
    ("classification", 7, 8),
    ("launch_year", 9, 11),
    ("launch_number", 11, 14),
    ("launch_piece", 14, 17),
    ("epoch_year", 18, 20),
    ("epoch_day", 20, 32),
    ("first_derivative", 33, 43),
    ("second_derivative", 44, 52),
    ("bstar", 53, 61),
    ("ephemeris_type", 62, 63),
    ("element_set_number", 64, 68),
    ("checksum", 68, 69),
)
_LINE1_SCIENTIFIC = {"first_derivative", "second_derivative", "bstar"}

_LINE2_FIELDS = (
    ("line_number", 0, 1),
    ("satellite_id", 2, 7),
    ("inclination", 8, 16),
    ("right_ascension", 17, 25),
    ("eccentricity", 26, 33),
    ("argument_of_perigee", 34, 42),
    ("mean_anomaly", 43, 51),
    ("mean_motion", 52, 63),
    ("revolution_number", 63, 68),
    ("checksum", 68, 69),
)

_NANOS_PER_DAY = 24.0 * 60.0 * 60.0 * 1e9


@dataclass(frozen=True)
class TLE:
    """A named two-line element set."""

    name: str
    line1: TLELine1
    line2: TLELine2
    norad_id: str = ""

    def __str__(self) -> str:
        return f"{self.name}\n{self.line1.line_string}\n{self.line2.line_string}"

    def time(self) -> _dt.datetime:
        """Return the epoch of the element set as an aware UTC datetime."""
        epoch = f"{self.line1.epoch_year}{self.line1.epoch_day}"
        parts = epoch.split(".", 1)
        if len(parts) != 2:
            raise TLEError(
                f"invalid TLE epoch format: {epoch!r}. Expected format YYDDD.FFFFFFFF"
            )
        year_day, fraction_digits = parts
        if len(year_day) != 5:
            raise TLEError(
                f"invalid TLE epoch format: year/day part {year_day!r} must be 5 digits (YYDDD)"
            )

        year_text, day_text = year_day[:2], year_day[2:]
        try:
            year_yy = parse_int(year_text)
        except ValueError as exc:
            raise TLEError(f"invalid TLE epoch: cannot parse year {year_text!r}") from exc
        full_year = 1900 + year_yy if year_yy >= 57 else 2000 + year_yy

        try:
            day_of_year = parse_int(day_text)
        except ValueError as exc:
            raise TLEError(
                f"invalid TLE epoch: cannot parse day of year {day_text!r}"
            ) from exc
        if not 1 <= day_of_year <= 366:
            raise TLEError(
                f"invalid TLE epoch: day of year {day_of_year} out of range (1-366)"
            )

        fraction_text = "0." + fraction_digits
        try:
            fraction = parse_float(fraction_text)
        except ValueError as exc:
            raise TLEError(
                f"invalid TLE epoch: cannot parse fractional day {fraction_text!r}"
            ) from exc
        if not 0.0 <= fraction < 1.0:
            raise TLEError(
                f"invalid TLE epoch: fractional day {fraction:f} out of range [0.0, 1.0)"
            )

        try:
            start_of_year = _dt.datetime(full_year, 1, 1, tzinfo=_dt.timezone.utc)
        except ValueError as exc:
            raise TLEError(f"invalid TLE epoch: year {full_year} out of range") from exc
        nanos = round(fraction * _NANOS_PER_DAY)
        micros = (nanos + 500) // 1000
        return start_of_year + _dt.timedelta(days=day_of_year - 1, microseconds=micros)


def _extract(line: str, spec) -> dict[str, str]:
    return {name: line[start:end].strip() for name, start, end in spec}


def read_tle_line1(line: str) -> TLELine1:
    """Split the first line of a TLE into its fields."""
    if len(line) < 69:
        raise TLEError(f"line 1 too short: {len(line)} chars")
    values = _extract(line, _LINE1_FIELDS)
    for name in _LINE1_SCIENTIFIC:
        try:
            values[name] = parse_scientific_notation(values[name])
        except ValueError as exc:
            raise TLEError(f"line 1 field {name} is malformed: {values[name]!r}") from exc
    return TLELine1(line_string=line, **values)


def read_tle_line2(line: str) -> TLELine2:
    """Split the second line of a TLE into its fields."""
    if len(line) < 69:
        raise TLEError(f"line 2 too short: {len(line)} chars")
    values = _extract(line, _LINE2_FIELDS)
    values["eccentricity"] = "0." + values["eccentricity"]
    return TLELine2(line_string=line, **values)


def parse_tle(line1: str, line2: str, name: str) -> TLE:
    """Build a TLE from its two data lines and a name."""
    return TLE(name=name, line1=read_tle_line1(line1), line2=read_tle_line2(line2))


def _lines(handle):
    for raw in handle:
        line = raw[:-1] if raw.endswith("\n") else raw
        yield line[:-1] if line.endswith("\r") else line


def read_tle_file(path: str | os.PathLike) -> list[TLE]:
    """Read every element set from a file of optional name lines and data lines."""
    tles: list[TLE] = []
    name = ""
    line1: TLELine1 | None = None

    with open(path, encoding="utf-8", newline="") as handle:
        for line in _lines(handle):
            if line.startswith("1 "):
                line1 = read_tle_line1(line)
            elif line.startswith("2 "):
                line2 = read_tle_line2(line)
                tles.append(
                    TLE(
                        name=name,
                        line1=line1 if line1 is not None else TLELine1(line_string=""),
                        line2=line2,
                        norad_id=line.split()[1],
                    )
                )
                name, line1 = "", None
            else:
                name = line.strip()

    return tles