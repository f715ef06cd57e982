"""Satellite records built from two-line element sets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from satprop.conversions import days2mdhms, eci_to_lla, gstime_from_date, jday
from satprop.geometry import DEG2RAD, XPDOTP
from satprop.gravity import GravConst, Gravity, get_grav_const
from satprop.sgp4 import propagate, sgp4init
from satprop.tleutils import parse_float, parse_int

_LINE1_MIN_LENGTH = 61
_LINE2_MIN_LENGTH = 63


@dataclass(eq=False)
class Satellite:
    """Orbital elements of one satellite, plus the state SGP4 derives from them.

    Right after :func:`parse_tle` the elements hold the values written in the
    element set (degrees, revolutions per day). :func:`tle_to_sat` converts
    them to radians and radians per minute and initialises the propagator,
    which adds its coefficients to the record as further attributes.
    """

    line1: str
    line2: str
    whichconst: GravConst
    satnum: int = 0
    epochyr: int = 0
    epochdays: float = 0.0
    jdsatepoch: float = 0.0
    ndot: float = 0.0
    nddot: float = 0.0
    bstar: float = 0.0
    inclo: float = 0.0
    nodeo: float = 0.0
    ecco: float = 0.0
    argpo: float = 0.0
    mo: float = 0.0
    no: float = 0.0
    error: int = 0
    error_message: str = ""

    def locate(self, when: datetime) -> tuple[float, float, float, float]:
        """Return ``(latitude, longitude, altitude, velocity)`` at ``when``.

        Latitude and longitude are in radians, altitude in km and velocity
        is the circular orbital speed in km/s. A naive ``when`` is taken as
        UTC. The record itself is left unchanged.
        """
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        fields = (when.year, when.month, when.day, when.hour, when.minute, when.second)
        position, _ = propagate(self, *fields)
        gmst = gstime_from_date(*fields)
        altitude, velocity, latlon = eci_to_lla(position, gmst)
        return latlon.latitude, latlon.longitude, altitude, velocity


def _compact(field: str) -> str:
    """Drop the first two blanks of a field, as the element-set layout pads them."""
    return field.replace(" ", "", 2)


def parse_tle(line1: str, line2: str, gravity: Gravity | str) -> Satellite:
    """Read the orbital elements of a two-line element set.

    The values are kept in the units of the element set. Raises ValueError
    for a line that is too short, a malformed field or an unknown gravity
    model.
    """
    if len(line1) < _LINE1_MIN_LENGTH:
        raise ValueError(f"line 1 too short: {len(line1)} chars")
    if len(line2) < _LINE2_MIN_LENGTH:
        raise ValueError(f"line 2 too short: {len(line2)} chars")

    return Satellite(
        line1=line1,
        line2=line2,
        whichconst=get_grav_const(gravity),
        satnum=parse_int(line1[2:7].strip()),
        epochyr=parse_int(line1[18:20]),
        epochdays=parse_float(line1[20:32]),
        ndot=parse_float(_compact(line1[33:43])),
        nddot=parse_float(_compact(f"{line1[44:45]}.{line1[45:50]}e{line1[50:52]}")),
        bstar=parse_float(_compact(f"{line1[53:54]}.{line1[54:59]}e{line1[59:61]}")),
        inclo=parse_float(_compact(line2[8:16])),
        nodeo=parse_float(_compact(line2[17:25])),
        ecco=parse_float("." + line2[26:33]),
        argpo=parse_float(_compact(line2[34:42])),
        mo=parse_float(_compact(line2[43:51])),
        no=parse_float(_compact(line2[52:63])),
    )


def tle_to_sat(line1: str, line2: str, gravity: Gravity | str) -> Satellite:
    """Parse a two-line element set and initialise it for propagation."""
    sat = parse_tle(line1, line2, gravity)

    sat.no = sat.no / XPDOTP
    sat.ndot = sat.ndot / (XPDOTP * 1440.0)
    sat.nddot = sat.nddot / (XPDOTP * 1440.0 * 1440)

    sat.inclo *= DEG2RAD
    sat.nodeo *= DEG2RAD
    sat.argpo *= DEG2RAD
    sat.mo *= DEG2RAD

    year = sat.epochyr + 2000 if sat.epochyr < 57 else sat.epochyr + 1900
    mon, day, hr, minute, sec = days2mdhms(year, sat.epochdays)
    sat.jdsatepoch = jday(year, int(mon), int(day), int(hr), int(minute), int(sec))

    sgp4init(sat, sat.jdsatepoch - 2433281.5, "i")
    return sat


def new_satellite_from_tle(tle, gravity: Gravity | str) -> Satellite:
    """Build a ready-to-propagate satellite from a parsed element set."""
    return tle_to_sat(tle.line1.line_string, tle.line2.line_string, gravity)