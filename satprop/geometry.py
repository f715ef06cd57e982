"""Small value types and angle constants shared by the propagator."""

from __future__ import annotations

import math
from dataclasses import dataclass

TWOPI = math.pi * 2.0
DEG2RAD = math.pi / 180.0
RAD2DEG = 180.0 / math.pi
XPDOTP = 1440.0 / (2.0 * math.pi)


@dataclass(frozen=True)
class LatLong:
    """Latitude and longitude, in degrees or radians."""

    latitude: float
    longitude: float


@dataclass(frozen=True)
class Vector3:
    """A position or velocity in three dimensions."""

    x: float
    y: float
    z: float


@dataclass(frozen=True)
class LookAngles:
    """Azimuth, elevation and range of a target seen from an observer."""

    az: float
    el: float
    rg: float