"""Gravity models used by the SGP4 propagator."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum


class Gravity(str, Enum):
    """Names of the supported gravity models."""

    WGS72OLD = "wgs72old"
    WGS72 = "wgs72"
    WGS84 = "wgs84"


@dataclass(frozen=True)
class GravConst:
    """Constants that depend on the selected gravity model."""

    mu: float
    radiusearthkm: float
    xke: float
    tumin: float
    j2: float
    j3: float
    j4: float
    j3oj2: float


def _build(mu: float, radius: float, xke: float, j2: float, j3: float, j4: float) -> GravConst:
    return GravConst(
        mu=mu,
        radiusearthkm=radius,
        xke=xke,
        tumin=1.0 / xke,
        j2=j2,
        j3=j3,
        j4=j4,
        j3oj2=j3 / j2,
    )


def _xke(radius: float, mu: float) -> float:
    return 60.0 / math.sqrt(radius * radius * radius / mu)


_MODELS = {
    Gravity.WGS72OLD: _build(
        398600.79964, 6378.135, 0.0743669161, 0.001082616, -0.00000253881, -0.00000165597
    ),
    Gravity.WGS72: _build(
        398600.8,
        6378.135,
        _xke(6378.135, 398600.8),
        0.001082616,
        -0.00000253881,
        -0.00000165597,
    ),
    Gravity.WGS84: _build(
        398600.5,
        6378.137,
        _xke(6378.137, 398600.5),
        0.00108262998905,
        -0.00000253215306,
        -0.00000161098761,
    ),
}


def get_grav_const(name: Gravity | str) -> GravConst:
    """Return the constants of the named gravity model.

    Raises ValueError for an unknown model name.
    """
    try:
        model = Gravity(name)
    except ValueError:
        raise ValueError(f"{name} is not a valid gravity model") from None
    return _MODELS[model]