"""SGP4 initialisation and propagation of two-line element orbits.

The functions work on a satellite record: any object carrying the mean
elements as attributes (``whichconst``, ``ecco``, ``inclo``, ``nodeo``,
``argpo``, ``mo``, ``no`` in radians per minute, ``bstar`` and, for
:func:`propagate`, ``jdsatepoch``). :func:`sgp4init` stores the derived
coefficients on that record and :func:`sgp4` reads them back.

Problems met during propagation are recorded on the record as ``error``
(0 when all is well) and ``error_message``, and the position is still
returned, so that a whole track can be computed in one pass.
"""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass

from satprop.conversions import gstime, jday
from satprop.deepspace_common import dpper, dscom
from satprop.deepspace_resonance import dsinit, dspace
from satprop.geometry import TWOPI, Vector3

_X2O3 = 2.0 / 3.0
_TEMP4 = 1.5e-12

_DSCOM_FIELDS = (
    "e3", "ee2", "peo", "pgho", "pho", "pinco", "plo",
    "se2", "se3", "sgh2", "sgh3", "sgh4", "sh2", "sh3",
    "si2", "si3", "sl2", "sl3", "sl4",
    "xgh2", "xgh3", "xgh4", "xh2", "xh3", "xi2", "xi3",
    "xl2", "xl3", "xl4", "zmol", "zmos",
)
_DSINIT_FIELDS = (
    "irez", "atime",
    "d2201", "d2211", "d3210", "d3222", "d4410", "d4422",
    "d5220", "d5232", "d5421", "d5433",
    "dedt", "didt", "dmdt", "dnodt", "domdt",
    "del1", "del2", "del3", "xfact", "xlamo", "xli", "xni",
)
_NEAR_EARTH_FIELDS = (
    "gsto", "con41", "cc1", "cc4", "cc5", "d2", "d3", "d4", "delmo", "eta",
    "argpdot", "omgcof", "sinmao", "t2cof", "t3cof", "t4cof", "t5cof",
    "x1mth2", "x7thm1", "mdot", "nodedot", "xmcof", "nodecf", "xlcof",
    "aycof", "t",
)

ERROR_MEAN_ECCENTRICITY = 1
ERROR_MEAN_MOTION = 2
ERROR_PERTURBED_ECCENTRICITY = 3
ERROR_SEMILATUS_RECTUM = 4
ERROR_DECAYED = 6


@dataclass(frozen=True)
class InitlResult:
    """Quantities derived from the mean elements at epoch."""

    ainv: float
    no: float
    ao: float
    con41: float
    con42: float
    cosio: float
    cosio2: float
    eccsq: float
    omeosq: float
    posq: float
    rp: float
    rteosq: float
    sinio: float
    gsto: float


def _pow(base: float, exponent: float) -> float:
    if base < 0.0 and not float(exponent).is_integer():
        return math.nan
    return math.pow(base, exponent)


def _sqrt(value: float) -> float:
    return math.sqrt(value) if value >= 0.0 else math.nan


def _div(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _fmod(value: float, modulus: float) -> float:
    return math.fmod(value, modulus) if math.isfinite(value) else math.nan


def _fail(satrec, code: int, message: str) -> None:
    satrec.error = code
    satrec.error_message = message


def initl(grav, ecco: float, epoch: float, inclo: float, no_kozai: float, opsmode: str = "i") -> InitlResult:
    """Recover the Brouwer mean motion and derive epoch quantities.

    ``epoch`` is in days since 1950 Jan 0.0 UTC. ``opsmode`` ``"a"`` uses
    the older sidereal-time formula, anything else the IAU-82 one.
    """
    eccsq = ecco * ecco
    omeosq = 1.0 - eccsq
    rteosq = _sqrt(omeosq)
    cosio = math.cos(inclo)
    cosio2 = cosio * cosio

    ak = _pow(grav.xke / no_kozai, _X2O3)
    d1 = 0.75 * grav.j2 * (3.0 * cosio2 - 1.0) / (rteosq * omeosq)
    del_ = d1 / (ak * ak)
    adel = ak * (1.0 - del_ * del_ - del_ * (1.0 / 3.0 + 134.0 * del_ * del_ / 81.0))
    del_ = d1 / (adel * adel)
    no = no_kozai / (1.0 + del_)

    ao = _pow(grav.xke / no, _X2O3)
    sinio = math.sin(inclo)
    po = ao * omeosq
    con42 = 1.0 - 5.0 * cosio2
    con41 = -con42 - cosio2 - cosio2

    if opsmode == "a":
        ts70 = epoch - 7305.0
        ds70 = math.floor(ts70 - 1.0e-8)
        tfrac = ts70 - ds70
        c1 = 1.72027916940703639e-2
        thgr70 = 1.7321343856509374
        fk5r = 5.07551419432269442e-15
        c1p2p = c1 + TWOPI
        gsto = math.fmod(thgr70 + c1 * ds70 + c1p2p * tfrac + ts70 * ts70 * fk5r, TWOPI)
        if gsto < 0.0:
            gsto += TWOPI
    else:
        gsto = gstime(epoch + 2433281.5)

    return InitlResult(
        ainv=1.0 / ao,
        no=no,
        ao=ao,
        con41=con41,
        con42=con42,
        cosio=cosio,
        cosio2=cosio2,
        eccsq=eccsq,
        omeosq=omeosq,
        posq=po * po,
        rp=ao * (1.0 - ecco),
        rteosq=rteosq,
        sinio=sinio,
        gsto=gsto,
    )


def sgp4init(satrec, epoch: float, opsmode: str = "i") -> tuple[Vector3, Vector3]:
    """Initialise ``satrec`` for propagation and return its state at epoch.

    ``epoch`` is the element epoch in days since 1950 Jan 0.0 UTC. The
    record's ``no`` is replaced by the un-Kozai'd mean motion.
    """
    for name in _NEAR_EARTH_FIELDS + _DSCOM_FIELDS + _DSINIT_FIELDS:
        setattr(satrec, name, 0.0)
    satrec.irez = 0
    satrec.isimp = 0
    satrec.method = "n"
    satrec.operationmode = opsmode

    grav = satrec.whichconst
    radiusearthkm = grav.radiusearthkm
    j2 = grav.j2
    j4 = grav.j4
    j3oj2 = grav.j3oj2

    ss = 78.0 / radiusearthkm + 1.0
    qzms2ttemp = (120.0 - 78.0) / radiusearthkm
    qzms2t = qzms2ttemp * qzms2ttemp * qzms2ttemp * qzms2ttemp

    satrec.init = "y"
    satrec.t = 0.0

    init = initl(grav, satrec.ecco, epoch, satrec.inclo, satrec.no, satrec.operationmode)
    satrec.no = init.no
    satrec.con41 = init.con41
    satrec.gsto = init.gsto
    satrec.error = 0
    satrec.error_message = ""

    if init.omeosq >= 0.0 or satrec.no >= 0.0:
        ao = init.ao
        ecco = satrec.ecco
        cosio = init.cosio
        cosio2 = init.cosio2
        sinio = init.sinio
        omeosq = init.omeosq
        rteosq = init.rteosq

        satrec.isimp = 1 if init.rp < 220.0 / radiusearthkm + 1.0 else 0
        sfour = ss
        qzms24 = qzms2t
        perige = (init.rp - 1.0) * radiusearthkm

        if perige < 156.0:
            sfour = perige - 78.0
            if perige < 98.0:
                sfour = 20.0
            qzms24temp = (128.0 - sfour) / radiusearthkm
            qzms24 = qzms24temp * qzms24temp * qzms24temp * qzms24temp
            sfour = sfour / radiusearthkm + 1.0

        pinvsq = 1.0 / init.posq
        tsi = 1.0 / (ao - sfour)
        satrec.eta = ao * ecco * tsi
        eta = satrec.eta
        etasq = eta * eta
        eeta = ecco * eta
        psisq = abs(1.0 - etasq)
        coef = qzms24 * math.pow(tsi, 4.0)
        coef1 = coef / math.pow(psisq, 3.5)
        cc2 = coef1 * satrec.no * (
            ao * (1.0 + 1.5 * etasq + eeta * (4.0 + etasq))
            + 0.375 * j2 * tsi / psisq * satrec.con41 * (8.0 + 3.0 * etasq * (8.0 + etasq))
        )
        satrec.cc1 = satrec.bstar * cc2
        cc3 = 0.0
        if ecco > 1.0e-4:
            cc3 = -2.0 * coef * tsi * j3oj2 * satrec.no * sinio / ecco

        satrec.x1mth2 = 1.0 - cosio2
        satrec.cc4 = 2.0 * satrec.no * coef1 * ao * omeosq * (
            eta * (2.0 + 0.5 * etasq)
            + ecco * (0.5 + 2.0 * etasq)
            - j2 * tsi / (ao * psisq) * (
                -3.0 * satrec.con41 * (1.0 - 2.0 * eeta + etasq * (1.5 - 0.5 * eeta))
                + 0.75 * satrec.x1mth2 * (2.0 * etasq - eeta * (1.0 + etasq))
                * math.cos(2.0 * satrec.argpo)
            )
        )
        satrec.cc5 = 2.0 * coef1 * ao * omeosq * (1.0 + 2.75 * (etasq + eeta) + eeta * etasq)

        cosio4 = cosio2 * cosio2
        temp1 = 1.5 * j2 * pinvsq * satrec.no
        temp2 = 0.5 * temp1 * j2 * pinvsq
        temp3 = -0.46875 * j4 * pinvsq * pinvsq * satrec.no

        satrec.mdot = (
            satrec.no
            + 0.5 * temp1 * rteosq * satrec.con41
            + 0.0625 * temp2 * rteosq * (13.0 - 78.0 * cosio2 + 137.0 * cosio4)
        )
        satrec.argpdot = (
            -0.5 * temp1 * init.con42
            + 0.0625 * temp2 * (7.0 - 114.0 * cosio2 + 395.0 * cosio4)
            + temp3 * (3.0 - 36.0 * cosio2 + 49.0 * cosio4)
        )
        xhdot1 = -temp1 * cosio
        satrec.nodedot = xhdot1 + (
            0.5 * temp2 * (4.0 - 19.0 * cosio2) + 2.0 * temp3 * (3.0 - 7.0 * cosio2)
        ) * cosio
        xpidot = satrec.argpdot + satrec.nodedot

        satrec.omgcof = satrec.bstar * cc3 * math.cos(satrec.argpo)
        satrec.xmcof = 0.0
        if ecco > 1.0e-4:
            satrec.xmcof = -_X2O3 * coef * satrec.bstar / eeta

        satrec.nodecf = 3.5 * omeosq * xhdot1 * satrec.cc1
        satrec.t2cof = 1.5 * satrec.cc1

        denominator = 1.0 + cosio if abs(cosio + 1.0) > 1.5e-12 else _TEMP4
        satrec.xlcof = -0.25 * j3oj2 * sinio * (3.0 + 5.0 * cosio) / denominator
        satrec.aycof = -0.5 * j3oj2 * sinio

        delmotemp = 1.0 + eta * math.cos(satrec.mo)
        satrec.delmo = delmotemp * delmotemp * delmotemp
        satrec.sinmao = math.sin(satrec.mo)
        satrec.x7thm1 = 7.0 * cosio2 - 1.0

        if TWOPI / satrec.no >= 225.0:
            satrec.method = "d"
            satrec.isimp = 1
            tc = 0.0
            inclm = satrec.inclo

            common = dscom(
                epoch, satrec.ecco, satrec.argpo, tc, satrec.inclo, satrec.nodeo, satrec.no
            )
            for name in _DSCOM_FIELDS:
                setattr(satrec, name, getattr(common, name))

            periodics = dpper(
                satrec,
                satrec.init,
                satrec.ecco,
                satrec.inclo,
                satrec.nodeo,
                satrec.argpo,
                satrec.mo,
                satrec.operationmode,
            )
            satrec.ecco = periodics.ep
            satrec.inclo = periodics.inclp
            satrec.nodeo = periodics.nodep
            satrec.argpo = periodics.argpp
            satrec.mo = periodics.mp

            secular = dsinit(
                grav,
                common,
                satrec.t,
                tc,
                satrec.gsto,
                satrec.mo,
                satrec.mdot,
                satrec.no,
                satrec.nodeo,
                satrec.nodedot,
                xpidot,
                satrec.ecco,
                init.eccsq,
                satrec.argpo,
                inclm,
                common.nm,
            )
            for name in _DSINIT_FIELDS:
                setattr(satrec, name, getattr(secular, name))

        if satrec.isimp != 1:
            cc1 = satrec.cc1
            cc1sq = cc1 * cc1
            satrec.d2 = 4.0 * ao * tsi * cc1sq
            temp = satrec.d2 * tsi * cc1 / 3.0
            satrec.d3 = (17.0 * ao + sfour) * temp
            satrec.d4 = 0.5 * temp * ao * tsi * (221.0 * ao + 31.0 * sfour) * cc1
            satrec.t3cof = satrec.d2 + 2.0 * cc1sq
            satrec.t4cof = 0.25 * (3.0 * satrec.d3 + cc1 * (12.0 * satrec.d2 + 10.0 * cc1sq))
            satrec.t5cof = 0.2 * (
                3.0 * satrec.d4
                + 12.0 * cc1 * satrec.d3
                + 6.0 * satrec.d2 * satrec.d2
                + 15.0 * cc1sq * (2.0 * satrec.d2 + cc1sq)
            )

    position, velocity = sgp4(satrec, 0.0)
    satrec.init = "n"
    return position, velocity


def sgp4(satrec, tsince: float) -> tuple[Vector3, Vector3]:
    """Return TEME position (km) and velocity (km/s) ``tsince`` minutes from epoch.

    ``satrec`` must have been prepared by :func:`sgp4init`. Problems are
    recorded in ``satrec.error`` and ``satrec.error_message``.
    """
    grav = satrec.whichconst
    radiusearthkm = grav.radiusearthkm
    xke = grav.xke
    j2 = grav.j2
    j3oj2 = grav.j3oj2
    vkmpersec = radiusearthkm * xke / 60.0

    satrec.t = tsince
    satrec.error = 0
    satrec.error_message = ""
    t = tsince

    xmdf = satrec.mo + satrec.mdot * t
    argpdf = satrec.argpo + satrec.argpdot * t
    nodedf = satrec.nodeo + satrec.nodedot * t
    argpm = argpdf
    mm = xmdf
    t2 = t * t
    nodem = nodedf + satrec.nodecf * t2
    tempa = 1.0 - satrec.cc1 * t
    tempe = satrec.bstar * satrec.cc4 * t
    templ = satrec.t2cof * t2

    if satrec.isimp != 1:
        delomg = satrec.omgcof * t
        delmtemp = 1.0 + satrec.eta * math.cos(xmdf)
        delm = satrec.xmcof * (delmtemp * delmtemp * delmtemp - satrec.delmo)
        temp = delomg + delm
        mm = xmdf + temp
        argpm = argpdf - temp
        t3 = t2 * t
        t4 = t3 * t
        tempa = tempa - satrec.d2 * t2 - satrec.d3 * t3 - satrec.d4 * t4
        tempe = tempe + satrec.bstar * satrec.cc5 * (math.sin(mm) - satrec.sinmao)
        templ = templ + satrec.t3cof * t3 + t4 * (satrec.t4cof + t * satrec.t5cof)

    nm = satrec.no
    em = satrec.ecco
    inclm = satrec.inclo
    deep = satrec.method == "d"

    if deep:
        state = dspace(satrec, t, em, argpm, inclm, mm, nodem, nm)
        em = state.em
        argpm = state.argpm
        inclm = state.inclm
        mm = state.mm
        nodem = state.nodem
        nm = state.nm

    if nm < 0.0:
        _fail(satrec, ERROR_MEAN_MOTION, "Mean motion is less than zero")

    am = _pow(_div(xke, nm), _X2O3) * tempa * tempa
    nm = _div(xke, _pow(am, 1.5))
    em = em - tempe

    if em >= 1.0 or em < -0.001:
        _fail(
            satrec,
            ERROR_MEAN_ECCENTRICITY,
            "mean eccentricity not within range 0.0 <= e < 1.0",
        )
    if em < 1.0e-6:
        em = 1.0e-6

    mm = mm + satrec.no * templ
    xlm = mm + argpm + nodem
    nodem = _fmod(nodem, TWOPI)
    argpm = _fmod(argpm, TWOPI)
    xlm = _fmod(xlm, TWOPI)
    mm = _fmod(xlm - argpm - nodem, TWOPI)

    sinim = math.sin(inclm)
    cosim = math.cos(inclm)

    ep = em
    xincp = inclm
    argpp = argpm
    nodep = nodem
    mp = mm
    sinip = sinim
    cosip = cosim

    if deep:
        periodics = dpper(satrec, "n", ep, xincp, nodep, argpp, mp, satrec.operationmode)
        ep = periodics.ep
        xincp = periodics.inclp
        nodep = periodics.nodep
        argpp = periodics.argpp
        mp = periodics.mp

        if xincp < 0.0:
            xincp = -xincp
            nodep = nodep + math.pi
            argpp = argpp - math.pi

        if ep < 0.0 or ep > 1.0:
            _fail(
                satrec,
                ERROR_PERTURBED_ECCENTRICITY,
                "perturbed eccentricity not within range 0.0 <= e <= 1.0",
            )

        sinip = math.sin(xincp)
        cosip = math.cos(xincp)
        satrec.aycof = -0.5 * j3oj2 * sinip
        denominator = 1.0 + cosip if abs(cosip + 1.0) > 1.5e-12 else _TEMP4
        satrec.xlcof = -0.25 * j3oj2 * sinip * (3.0 + 5.0 * cosip) / denominator

    axnl = ep * math.cos(argpp)
    temp = _div(1.0, am * (1.0 - ep * ep))
    aynl = ep * math.sin(argpp) + temp * satrec.aycof
    xl = mp + argpp + nodep + temp * satrec.xlcof * axnl

    u = _fmod(xl - nodep, TWOPI)
    eo1 = u
    tem5 = 9999.9
    sineo1 = 0.0
    coseo1 = 0.0
    iterations = 1
    while abs(tem5) >= 1.0e-12 and iterations <= 10:
        sineo1 = math.sin(eo1)
        coseo1 = math.cos(eo1)
        tem5 = 1.0 - coseo1 * axnl - sineo1 * aynl
        tem5 = _div(u - aynl * coseo1 + axnl * sineo1 - eo1, tem5)
        if abs(tem5) >= 0.95:
            tem5 = 0.95 if tem5 > 0.0 else -0.95
        eo1 = eo1 + tem5
        iterations += 1

    ecose = axnl * coseo1 + aynl * sineo1
    esine = axnl * sineo1 - aynl * coseo1
    el2 = axnl * axnl + aynl * aynl
    pl = am * (1.0 - el2)

    mrt = 0.0
    position = Vector3(0.0, 0.0, 0.0)
    velocity = Vector3(0.0, 0.0, 0.0)

    if pl < 0.0:
        _fail(satrec, ERROR_SEMILATUS_RECTUM, "semilatus rectum is less than zero")
    else:
        rl = am * (1.0 - ecose)
        rdotl = _div(_sqrt(am) * esine, rl)
        rvdotl = _div(_sqrt(pl), rl)
        betal = _sqrt(1.0 - el2)
        temp = esine / (1.0 + betal)
        sinu = _div(am, rl) * (sineo1 - aynl - axnl * temp)
        cosu = _div(am, rl) * (coseo1 - axnl + aynl * temp)
        su = math.atan2(sinu, cosu)
        sin2u = (cosu + cosu) * sinu
        cos2u = 1.0 - 2.0 * sinu * sinu
        temp = _div(1.0, pl)
        temp1 = 0.5 * j2 * temp
        temp2 = temp1 * temp

        if deep:
            cosisq = cosip * cosip
            satrec.con41 = 3.0 * cosisq - 1.0
            satrec.x1mth2 = 1.0 - cosisq
            satrec.x7thm1 = 7.0 * cosisq - 1.0

        mrt = rl * (1.0 - 1.5 * temp2 * betal * satrec.con41) + 0.5 * temp1 * satrec.x1mth2 * cos2u
        su = su - 0.25 * temp2 * satrec.x7thm1 * sin2u
        xnode = nodep + 1.5 * temp2 * cosip * sin2u
        xinc = xincp + 1.5 * temp2 * cosip * sinip * cos2u
        mvt = rdotl - nm * temp1 * satrec.x1mth2 * sin2u / xke
        rvdot = rvdotl + nm * temp1 * (satrec.x1mth2 * cos2u + 1.5 * satrec.con41) / xke

        sinsu = math.sin(su)
        cossu = math.cos(su)
        snod = math.sin(xnode)
        cnod = math.cos(xnode)
        sini = math.sin(xinc)
        cosi = math.cos(xinc)
        xmx = -snod * cosi
        xmy = cnod * cosi
        ux = xmx * sinsu + cnod * cossu
        uy = xmy * sinsu + snod * cossu
        uz = sini * sinsu
        vx = xmx * cossu - cnod * sinsu
        vy = xmy * cossu - snod * sinsu
        vz = sini * cossu

        mr = mrt * radiusearthkm
        position = Vector3(mr * ux, mr * uy, mr * uz)
        velocity = Vector3(
            (mvt * ux + rvdot * vx) * vkmpersec,
            (mvt * uy + rvdot * vy) * vkmpersec,
            (mvt * uz + rvdot * vz) * vkmpersec,
        )

    if mrt < 1.0:
        _fail(
            satrec,
            ERROR_DECAYED,
            "mrt is less than 1.0 indicating the satellite has decayed",
        )

    return position, velocity


def propagate(sat, year: int, month: int, day: int, hours: int, minutes: int, seconds: int) -> tuple[Vector3, Vector3]:
    """Return position and velocity at a UTC calendar time.

    The record is not modified; propagation runs on a copy of it.
    """
    tsince = (jday(year, month, day, hours, minutes, seconds) - sat.jdsatepoch) * 1440
    return sgp4(copy.copy(sat), tsince)