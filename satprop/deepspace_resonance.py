"""Deep-space secular rates and geopotential resonance for SGP4.

``dsinit`` sets up the lunar-solar secular rates and, for orbits near the
half-day or one-day period, the resonance coefficients. ``dspace`` applies
the secular rates and integrates the resonance terms up to a given time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from satprop.deepspace_common import DscomResult
from satprop.gravity import GravConst
from satprop.geometry import TWOPI

_ZNS = 1.19459e-5
_ZNL = 1.5835218e-4
_RPTIM = 4.37526908801129966e-3
_X2O3 = 2.0 / 3.0
_NEAR_EQUATORIAL = 5.2359877e-2

_Q22 = 1.7891679e-6
_Q31 = 2.1460748e-6
_Q33 = 2.2123015e-7
_ROOT22 = 1.7891679e-6
_ROOT32 = 3.7393792e-7
_ROOT44 = 7.3636953e-9
_ROOT52 = 1.1428639e-7
_ROOT54 = 2.1765803e-9

_FASX2 = 0.13130908
_FASX4 = 2.8843198
_FASX6 = 0.37448087
_G22 = 5.7686396
_G32 = 0.95240898
_G44 = 1.8014998
_G52 = 1.0508330
_G54 = 4.4108898
_STEPP = 720.0
_STEPN = -720.0
_STEP2 = 259200.0


@dataclass(frozen=True)
class DsinitResult:
    """Secular rates, resonance coefficients and updated mean elements."""

    em: float
    argpm: float
    inclm: float
    mm: float
    nm: float
    nodem: float
    irez: int
    atime: float
    d2201: float
    d2211: float
    d3210: float
    d3222: float
    d4410: float
    d4422: float
    d5220: float
    d5232: float
    d5421: float
    d5433: float
    dedt: float
    didt: float
    dmdt: float
    dndt: float
    dnodt: float
    domdt: float
    del1: float
    del2: float
    del3: float
    xfact: float
    xlamo: float
    xli: float
    xni: float


@dataclass(frozen=True)
class DspaceResult:
    """Mean elements and integrator state at the requested time."""

    atime: float
    em: float
    argpm: float
    inclm: float
    xli: float
    mm: float
    xni: float
    nodem: float
    dndt: float
    nm: float


def _half_day_coefficients(
    cosim: float, sinim: float, em: float, emsq: float, nm: float, aonv: float
) -> dict[str, float]:
    cosisq = cosim * cosim
    eoc = em * emsq
    g201 = -0.306 - (em - 0.64) * 0.440

    if em <= 0.65:
        g211 = 3.616 - 13.2470 * em + 16.2900 * emsq
        g310 = -19.302 + 117.3900 * em - 228.4190 * emsq + 156.5910 * eoc
        g322 = -18.9068 + 109.7927 * em - 214.6334 * emsq + 146.5816 * eoc
        g410 = -41.122 + 242.6940 * em - 471.0940 * emsq + 313.9530 * eoc
        g422 = -146.407 + 841.8800 * em - 1629.014 * emsq + 1083.4350 * eoc
        g520 = -532.114 + 3017.977 * em - 5740.032 * emsq + 3708.2760 * eoc
    else:
        g211 = -72.099 + 331.819 * em - 508.738 * emsq + 266.724 * eoc
        g310 = -346.844 + 1582.851 * em - 2415.925 * emsq + 1246.113 * eoc
        g322 = -342.585 + 1554.908 * em - 2366.899 * emsq + 1215.972 * eoc
        g410 = -1052.797 + 4758.686 * em - 7193.992 * emsq + 3651.957 * eoc
        g422 = -3581.690 + 16178.110 * em - 24462.770 * emsq + 12422.520 * eoc
        if em > 0.715:
            g520 = -5149.66 + 29936.92 * em - 54087.36 * emsq + 31324.56 * eoc
        else:
            g520 = 1464.74 - 4664.75 * em + 3763.64 * emsq

    if em < 0.7:
        g533 = -919.22770 + 4988.6100 * em - 9064.7700 * emsq + 5542.21 * eoc
        g521 = -822.71072 + 4568.6173 * em - 8491.4146 * emsq + 5337.524 * eoc
        g532 = -853.66600 + 4690.2500 * em - 8624.7700 * emsq + 5341.4 * eoc
    else:
        g533 = -37995.780 + 161616.52 * em - 229838.20 * emsq + 109377.94 * eoc
        g521 = -51752.104 + 218913.95 * em - 309468.16 * emsq + 146349.42 * eoc
        g532 = -40023.880 + 170470.89 * em - 242699.48 * emsq + 115605.82 * eoc

    sini2 = sinim * sinim
    f220 = 0.75 * (1.0 + 2.0 * cosim + cosisq)
    f221 = 1.5 * sini2
    f321 = 1.875 * sinim * (1.0 - 2.0 * cosim - 3.0 * cosisq)
    f322 = -1.875 * sinim * (1.0 + 2.0 * cosim - 3.0 * cosisq)
    f441 = 35.0 * sini2 * f220
    f442 = 39.3750 * sini2 * sini2
    f522 = 9.84375 * sinim * (
        sini2 * (1.0 - 2.0 * cosim - 5.0 * cosisq)
        + 0.33333333 * (-2.0 + 4.0 * cosim + 6.0 * cosisq)
    )
    f523 = sinim * (
        4.92187512 * sini2 * (-2.0 - 4.0 * cosim + 10.0 * cosisq)
        + 6.56250012 * (1.0 + 2.0 * cosim - 3.0 * cosisq)
    )
    f542 = 29.53125 * sinim * (
        2.0 - 8.0 * cosim + cosisq * (-12.0 + 8.0 * cosim + 10.0 * cosisq)
    )
    f543 = 29.53125 * sinim * (
        -2.0 - 8.0 * cosim + cosisq * (12.0 + 8.0 * cosim - 10.0 * cosisq)
    )

    xno2 = nm * nm
    ainv2 = aonv * aonv
    temp1 = 3.0 * xno2 * ainv2
    temp = temp1 * _ROOT22
    coefficients = {"d2201": temp * f220 * g201, "d2211": temp * f221 * g211}
    temp1 *= aonv
    temp = temp1 * _ROOT32
    coefficients["d3210"] = temp * f321 * g310
    coefficients["d3222"] = temp * f322 * g322
    temp1 *= aonv
    temp = 2.0 * temp1 * _ROOT44
    coefficients["d4410"] = temp * f441 * g410
    coefficients["d4422"] = temp * f442 * g422
    temp1 *= aonv
    temp = temp1 * _ROOT52
    coefficients["d5220"] = temp * f522 * g520
    coefficients["d5232"] = temp * f523 * g532
    temp = 2.0 * temp1 * _ROOT54
    coefficients["d5421"] = temp * f542 * g521
    coefficients["d5433"] = temp * f543 * g533
    return coefficients


def _one_day_coefficients(
    cosim: float, sinim: float, emsq: float, nm: float, aonv: float
) -> dict[str, float]:
    g200 = 1.0 + emsq * (-2.5 + 0.8125 * emsq)
    g310 = 1.0 + 2.0 * emsq
    g300 = 1.0 + emsq * (-6.0 + 6.60937 * emsq)
    f220 = 0.75 * (1.0 + cosim) * (1.0 + cosim)
    f311 = 0.9375 * sinim * sinim * (1.0 + 3.0 * cosim) - 0.75 * (1.0 + cosim)
    f330 = 1.875 * (1.0 + cosim) ** 3
    del1 = 3.0 * nm * nm * aonv * aonv
    return {
        "del2": 2.0 * del1 * f220 * g200 * _Q22,
        "del3": 3.0 * del1 * f330 * g300 * _Q33 * aonv,
        "del1": del1 * f311 * g310 * _Q31 * aonv,
    }


def dsinit(
    grav: GravConst,
    common: DscomResult,
    t: float,
    tc: float,
    gsto: float,
    mo: float,
    mdot: float,
    no: float,
    nodeo: float,
    nodedot: float,
    xpidot: float,
    ecco: float,
    eccsq: float,
    argpo: float,
    inclm: float,
    nm: float,
) -> DsinitResult:
    """Initialise the deep-space secular rates and resonance terms.

    ``common`` is the result of ``dscom`` for the orbit. The argument of
    perigee, node and mean anomaly start from zero and receive only the
    secular change over ``t`` minutes. Resonance is detected from ``nm``:
    ``irez`` is 1 for one-day and 2 for half-day eccentric orbits.
    """
    cosim = common.cosim
    sinim = common.sinim
    emsq = common.emsq
    em = common.em

    irez = 0
    if 0.0034906585 < nm < 0.0052359877:
        irez = 1
    if 8.26e-3 <= nm <= 9.24e-3 and em >= 0.5:
        irez = 2

    near_equatorial = inclm < _NEAR_EQUATORIAL or inclm > math.pi - _NEAR_EQUATORIAL

    ses = common.ss1 * _ZNS * common.ss5
    sis = common.ss2 * _ZNS * (common.sz11 + common.sz13)
    sls = -_ZNS * common.ss3 * (common.sz1 + common.sz3 - 14.0 - 6.0 * emsq)
    sghs = common.ss4 * _ZNS * (common.sz31 + common.sz33 - 6.0)
    shs = 0.0 if near_equatorial else -_ZNS * common.ss2 * (common.sz21 + common.sz23)
    if sinim != 0.0:
        shs /= sinim
    sgs = sghs - cosim * shs

    dedt = ses + common.s1 * _ZNL * common.s5
    didt = sis + common.s2 * _ZNL * (common.z11 + common.z13)
    dmdt = sls - _ZNL * common.s3 * (common.z1 + common.z3 - 14.0 - 6.0 * emsq)
    sghl = common.s4 * _ZNL * (common.z31 + common.z33 - 6.0)
    shll = 0.0 if near_equatorial else -_ZNL * common.s2 * (common.z21 + common.z23)
    domdt = sgs + sghl
    dnodt = shs
    if sinim != 0.0:
        domdt -= cosim / sinim * shll
        dnodt += shll / sinim

    dndt = 0.0
    theta = math.fmod(gsto + tc * _RPTIM, TWOPI)
    em += dedt * t
    inclm += didt * t
    argpm = domdt * t
    nodem = dnodt * t
    mm = dmdt * t

    coefficients = dict.fromkeys(
        (
            "d2201", "d2211", "d3210", "d3222", "d4410", "d4422",
            "d5220", "d5232", "d5421", "d5433", "del1", "del2", "del3",
        ),
        0.0,
    )
    xfact = xlamo = xli = xni = atime = 0.0

    if irez:
        aonv = math.pow(nm / grav.xke, _X2O3)
        if irez == 2:
            coefficients.update(
                _half_day_coefficients(cosim, sinim, ecco, eccsq, nm, aonv)
            )
            xlamo = math.fmod(mo + nodeo + nodeo - theta - theta, TWOPI)
            xfact = mdot + dmdt + 2.0 * (nodedot + dnodt - _RPTIM) - no
        else:
            coefficients.update(_one_day_coefficients(cosim, sinim, emsq, nm, aonv))
            xlamo = math.fmod(mo + nodeo + argpo - theta, TWOPI)
            xfact = mdot + xpidot - _RPTIM + dmdt + domdt + dnodt - no
        xli = xlamo
        xni = no
        atime = 0.0
        nm = no + dndt

    return DsinitResult(
        em=em,
        argpm=argpm,
        inclm=inclm,
        mm=mm,
        nm=nm,
        nodem=nodem,
        irez=irez,
        atime=atime,
        dedt=dedt,
        didt=didt,
        dmdt=dmdt,
        dndt=dndt,
        dnodt=dnodt,
        domdt=domdt,
        xfact=xfact,
        xlamo=xlamo,
        xli=xli,
        xni=xni,
        **coefficients,
    )


def _resonance_rates(satrec, xli: float, xni: float, atime: float) -> tuple[float, float, float]:
    """Return ``(xndt, xldot, xnddt)`` for the current integrator state."""
    xldot = xni + satrec.xfact
    if satrec.irez != 2:
        xndt = (
            satrec.del1 * math.sin(xli - _FASX2)
            + satrec.del2 * math.sin(2.0 * (xli - _FASX4))
            + satrec.del3 * math.sin(3.0 * (xli - _FASX6))
        )
        xnddt = (
            satrec.del1 * math.cos(xli - _FASX2)
            + 2.0 * satrec.del2 * math.cos(2.0 * (xli - _FASX4))
            + 3.0 * satrec.del3 * math.cos(3.0 * (xli - _FASX6))
        )
    else:
        xomi = satrec.argpo + satrec.argpdot * atime
        x2omi = xomi + xomi
        x2li = xli + xli
        xndt = (
            satrec.d2201 * math.sin(x2omi + xli - _G22)
            + satrec.d2211 * math.sin(xli - _G22)
            + satrec.d3210 * math.sin(xomi + xli - _G32)
            + satrec.d3222 * math.sin(-xomi + xli - _G32)
            + satrec.d4410 * math.sin(x2omi + x2li - _G44)
            + satrec.d4422 * math.sin(x2li - _G44)
            + satrec.d5220 * math.sin(xomi + xli - _G52)
            + satrec.d5232 * math.sin(-xomi + xli - _G52)
            + satrec.d5421 * math.sin(xomi + x2li - _G54)
            + satrec.d5433 * math.sin(-xomi + x2li - _G54)
        )
        xnddt = (
            satrec.d2201 * math.cos(x2omi + xli - _G22)
            + satrec.d2211 * math.cos(xli - _G22)
            + satrec.d3210 * math.cos(xomi + xli - _G32)
            + satrec.d3222 * math.cos(-xomi + xli - _G32)
            + satrec.d5220 * math.cos(xomi + xli - _G52)
            + satrec.d5232 * math.cos(-xomi + xli - _G52)
            + 2.0
            * (
                satrec.d4410 * math.cos(x2omi + x2li - _G44)
                + satrec.d4422 * math.cos(x2li - _G44)
                + satrec.d5421 * math.cos(xomi + x2li - _G54)
                + satrec.d5433 * math.cos(-xomi + x2li - _G54)
            )
        )
    return xndt, xldot, xnddt * xldot


def dspace(
    satrec,
    t: float,
    em: float,
    argpm: float,
    inclm: float,
    mm: float,
    nodem: float,
    nm: float,
) -> DspaceResult:
    """Apply deep-space secular rates and integrate resonance effects.

    ``satrec`` supplies the fields produced by :func:`dsinit` together with
    ``argpo``, ``argpdot``, ``gsto`` and ``no``. ``t`` is the time since
    epoch in minutes; the integrator restarts from epoch unless its stored
    state lies between epoch and ``t``.
    """
    theta = math.fmod(satrec.gsto + t * _RPTIM, TWOPI)
    em += satrec.dedt * t
    inclm += satrec.didt * t
    argpm += satrec.domdt * t
    nodem += satrec.dnodt * t
    mm += satrec.dmdt * t

    atime = satrec.atime
    xli = satrec.xli
    xni = satrec.xni
    dndt = 0.0

    if satrec.irez != 0:
        if atime == 0.0 or t * atime <= 0.0 or abs(t) < abs(atime):
            atime = 0.0
            xni = satrec.no
            xli = satrec.xlamo

        delt = _STEPP if t > 0.0 else _STEPN

        while True:
            xndt, xldot, xnddt = _resonance_rates(satrec, xli, xni, atime)
            if abs(t - atime) < _STEPP:
                ft = t - atime
                break
            xli += xldot * delt + xndt * _STEP2
            xni += xndt * delt + xnddt * _STEP2
            atime += delt

        nm = xni + xndt * ft + xnddt * ft * ft * 0.5
        xl = xli + xldot * ft + xndt * ft * ft * 0.5
        if satrec.irez != 1:
            mm = xl - 2.0 * nodem + 2.0 * theta
        else:
            mm = xl - nodem - argpm + theta
        dndt = nm - satrec.no
        nm = satrec.no + dndt

    return DspaceResult(
        atime=atime,
        em=em,
        argpm=argpm,
        inclm=inclm,
        xli=xli,
        mm=mm,
        xni=xni,
        nodem=nodem,
        dndt=dndt,
        nm=nm,
    )