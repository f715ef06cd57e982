"""Deep-space terms shared by SGP4 initialisation and propagation.

``dscom`` computes the lunar and solar coefficients of an orbit once, and
``dpper`` applies the long-period periodic perturbations they describe.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from satprop.geometry import TWOPI

_ZES = 0.01675
_ZEL = 0.05490
_ZNS = 1.19459e-5
_ZNL = 1.5835218e-4


@dataclass(frozen=True)
class DscomResult:
    """Common deep-space quantities for one orbit."""

    snodm: float
    cnodm: float
    sinim: float
    cosim: float
    sinomm: float
    cosomm: float
    day: float
    e3: float
    ee2: float
    em: float
    emsq: float
    gam: float
    peo: float
    pgho: float
    pho: float
    pinco: float
    plo: float
    rtemsq: float
    se2: float
    se3: float
    sgh2: float
    sgh3: float
    sgh4: float
    sh2: float
    sh3: float
    si2: float
    si3: float
    sl2: float
    sl3: float
    sl4: float
    s1: float
    s2: float
    s3: float
    s4: float
    s5: float
    s6: float
    s7: float
    ss1: float
    ss2: float
    ss3: float
    ss4: float
    ss5: float
    ss6: float
    ss7: float
    sz1: float
    sz2: float
    sz3: float
    sz11: float
    sz12: float
    sz13: float
    sz21: float
    sz22: float
    sz23: float
    sz31: float
    sz32: float
    sz33: float
    xgh2: float
    xgh3: float
    xgh4: float
    xh2: float
    xh3: float
    xi2: float
    xi3: float
    xl2: float
    xl3: float
    xl4: float
    nm: float
    z1: float
    z2: float
    z3: float
    z11: float
    z12: float
    z13: float
    z21: float
    z22: float
    z23: float
    z31: float
    z32: float
    z33: float
    zmol: float
    zmos: float


@dataclass(frozen=True)
class DpperResult:
    """Mean elements after the long-period periodic corrections."""

    ep: float
    inclp: float
    nodep: float
    argpp: float
    mp: float


@dataclass(frozen=True)
class _BodyTerms:
    """Intermediate coefficients for one perturbing body (sun or moon)."""

    s1: float
    s2: float
    s3: float
    s4: float
    s5: float
    s6: float
    s7: float
    z1: float
    z2: float
    z3: float
    z11: float
    z12: float
    z13: float
    z21: float
    z22: float
    z23: float
    z31: float
    z32: float
    z33: float


def _body_terms(
    zcosg: float,
    zsing: float,
    zcosi: float,
    zsini: float,
    zcosh: float,
    zsinh: float,
    cc: float,
    *,
    sinim: float,
    cosim: float,
    sinomm: float,
    cosomm: float,
    em: float,
    emsq: float,
    betasq: float,
    rtemsq: float,
    xnoi: float,
) -> _BodyTerms:
    a1 = zcosg * zcosh + zsing * zcosi * zsinh
    a3 = -zsing * zcosh + zcosg * zcosi * zsinh
    a7 = -zcosg * zsinh + zsing * zcosi * zcosh
    a8 = zsing * zsini
    a9 = zsing * zsinh + zcosg * zcosi * zcosh
    a10 = zcosg * zsini
    a2 = cosim * a7 + sinim * a8
    a4 = cosim * a9 + sinim * a10
    a5 = -sinim * a7 + cosim * a8
    a6 = -sinim * a9 + cosim * a10

    x1 = a1 * cosomm + a2 * sinomm
    x2 = a3 * cosomm + a4 * sinomm
    x3 = -a1 * sinomm + a2 * cosomm
    x4 = -a3 * sinomm + a4 * cosomm
    x5 = a5 * sinomm
    x6 = a6 * sinomm
    x7 = a5 * cosomm
    x8 = a6 * cosomm

    z31 = 12.0 * x1 * x1 - 3.0 * x3 * x3
    z32 = 24.0 * x1 * x2 - 6.0 * x3 * x4
    z33 = 12.0 * x2 * x2 - 3.0 * x4 * x4
    z1 = 3.0 * (a1 * a1 + a2 * a2) + z31 * emsq
    z2 = 6.0 * (a1 * a3 + a2 * a4) + z32 * emsq
    z3 = 3.0 * (a3 * a3 + a4 * a4) + z33 * emsq
    z11 = -6.0 * a1 * a5 + emsq * (-24.0 * x1 * x7 - 6.0 * x3 * x5)
    z12 = -6.0 * (a1 * a6 + a3 * a5) + emsq * (
        -24.0 * (x2 * x7 + x1 * x8) - 6.0 * (x3 * x6 + x4 * x5)
    )
    z13 = -6.0 * a3 * a6 + emsq * (-24.0 * x2 * x8 - 6.0 * x4 * x6)
    z21 = 6.0 * a2 * a5 + emsq * (24.0 * x1 * x5 - 6.0 * x3 * x7)
    z22 = 6.0 * (a4 * a5 + a2 * a6) + emsq * (
        24.0 * (x2 * x5 + x1 * x6) - 6.0 * (x4 * x7 + x3 * x8)
    )
    z23 = 6.0 * a4 * a6 + emsq * (24.0 * x2 * x6 - 6.0 * x4 * x8)
    z1 = z1 + z1 + betasq * z31
    z2 = z2 + z2 + betasq * z32
    z3 = z3 + z3 + betasq * z33

    s3 = cc * xnoi
    s2 = -0.5 * s3 / rtemsq
    s4 = s3 * rtemsq
    s1 = -15.0 * em * s4
    s5 = x1 * x3 + x2 * x4
    s6 = x2 * x3 + x1 * x4
    s7 = x2 * x4 - x1 * x3

    return _BodyTerms(
        s1=s1, s2=s2, s3=s3, s4=s4, s5=s5, s6=s6, s7=s7,
        z1=z1, z2=z2, z3=z3,
        z11=z11, z12=z12, z13=z13,
        z21=z21, z22=z22, z23=z23,
        z31=z31, z32=z32, z33=z33,
    )


def dscom(
    epoch: float,
    ep: float,
    argpp: float,
    tc: float,
    inclp: float,
    nodep: float,
    np: float,
) -> DscomResult:
    """Compute the deep-space quantities common to secular and periodic terms.

    ``epoch`` is in days since 1950 Jan 0.0 UTC, angles are in radians and
    ``np`` is the mean motion in radians per minute.
    """
    c1ss = 2.9864797e-6
    c1l = 4.7968065e-7
    zsinis = 0.39785416
    zcosis = 0.91744867
    zcosgs = 0.1945905
    zsings = -0.98088458

    nm = np
    em = ep
    snodm = math.sin(nodep)
    cnodm = math.cos(nodep)
    sinomm = math.sin(argpp)
    cosomm = math.cos(argpp)
    sinim = math.sin(inclp)
    cosim = math.cos(inclp)
    emsq = em * em
    betasq = 1.0 - emsq
    rtemsq = math.sqrt(betasq)

    day = epoch + 18261.5 + tc / 1440.0
    xnodce = math.fmod(4.5236020 - 9.2422029e-4 * day, TWOPI)
    stem = math.sin(xnodce)
    ctem = math.cos(xnodce)
    zcosil = 0.91375164 - 0.03568096 * ctem
    zsinil = math.sqrt(1.0 - zcosil * zcosil)
    zsinhl = 0.089683511 * stem / zsinil
    zcoshl = math.sqrt(1.0 - zsinhl * zsinhl)
    gam = 5.8351514 + 0.0019443680 * day
    zx = 0.39785416 * stem / zsinil
    zy = zcoshl * ctem + 0.91744867 * zsinhl * stem
    zx = math.atan2(zx, zy)
    zx = gam + zx - xnodce
    zcosgl = math.cos(zx)
    zsingl = math.sin(zx)

    shared = dict(
        sinim=sinim,
        cosim=cosim,
        sinomm=sinomm,
        cosomm=cosomm,
        em=em,
        emsq=emsq,
        betasq=betasq,
        rtemsq=rtemsq,
        xnoi=1.0 / nm,
    )
    solar = _body_terms(zcosgs, zsings, zcosis, zsinis, cnodm, snodm, c1ss, **shared)
    lunar = _body_terms(
        zcosgl,
        zsingl,
        zcosil,
        zsinil,
        zcoshl * cnodm + zsinhl * snodm,
        snodm * zcoshl - cnodm * zsinhl,
        c1l,
        **shared,
    )

    zmol = math.fmod(4.7199672 + 0.22997150 * day - gam, TWOPI)
    zmos = math.fmod(6.2565837 + 0.017201977 * day, TWOPI)

    return DscomResult(
        snodm=snodm,
        cnodm=cnodm,
        sinim=sinim,
        cosim=cosim,
        sinomm=sinomm,
        cosomm=cosomm,
        day=day,
        e3=2.0 * lunar.s1 * lunar.s7,
        ee2=2.0 * lunar.s1 * lunar.s6,
        em=em,
        emsq=emsq,
        gam=gam,
        peo=0.0,
        pgho=0.0,
        pho=0.0,
        pinco=0.0,
        plo=0.0,
        rtemsq=rtemsq,
        se2=2.0 * solar.s1 * solar.s6,
        se3=2.0 * solar.s1 * solar.s7,
        sgh2=2.0 * solar.s4 * solar.z32,
        sgh3=2.0 * solar.s4 * (solar.z33 - solar.z31),
        sgh4=-18.0 * solar.s4 * _ZES,
        sh2=-2.0 * solar.s2 * solar.z22,
        sh3=-2.0 * solar.s2 * (solar.z23 - solar.z21),
        si2=2.0 * solar.s2 * solar.z12,
        si3=2.0 * solar.s2 * (solar.z13 - solar.z11),
        sl2=-2.0 * solar.s3 * solar.z2,
        sl3=-2.0 * solar.s3 * (solar.z3 - solar.z1),
        sl4=-2.0 * solar.s3 * (-21.0 - 9.0 * emsq) * _ZES,
        s1=lunar.s1,
        s2=lunar.s2,
        s3=lunar.s3,
        s4=lunar.s4,
        s5=lunar.s5,
        s6=lunar.s6,
        s7=lunar.s7,
        ss1=solar.s1,
        ss2=solar.s2,
        ss3=solar.s3,
        ss4=solar.s4,
        ss5=solar.s5,
        ss6=solar.s6,
        ss7=solar.s7,
        sz1=solar.z1,
        sz2=solar.z2,
        sz3=solar.z3,
        sz11=solar.z11,
        sz12=solar.z12,
        sz13=solar.z13,
        sz21=solar.z21,
        sz22=solar.z22,
        sz23=solar.z23,
        sz31=solar.z31,
        sz32=solar.z32,
        sz33=solar.z33,
        xgh2=2.0 * lunar.s4 * lunar.z32,
        xgh3=2.0 * lunar.s4 * (lunar.z33 - lunar.z31),
        xgh4=-18.0 * lunar.s4 * _ZEL,
        xh2=-2.0 * lunar.s2 * lunar.z22,
        xh3=-2.0 * lunar.s2 * (lunar.z23 - lunar.z21),
        xi2=2.0 * lunar.s2 * lunar.z12,
        xi3=2.0 * lunar.s2 * (lunar.z13 - lunar.z11),
        xl2=-2.0 * lunar.s3 * lunar.z2,
        xl3=-2.0 * lunar.s3 * (lunar.z3 - lunar.z1),
        xl4=-2.0 * lunar.s3 * (-21.0 - 9.0 * emsq) * _ZEL,
        nm=nm,
        z1=lunar.z1,
        z2=lunar.z2,
        z3=lunar.z3,
        z11=lunar.z11,
        z12=lunar.z12,
        z13=lunar.z13,
        z21=lunar.z21,
        z22=lunar.z22,
        z23=lunar.z23,
        z31=lunar.z31,
        z32=lunar.z32,
        z33=lunar.z33,
        zmol=zmol,
        zmos=zmos,
    )


def _body_periodics(zm: float, eccentricity: float) -> tuple[float, float, float]:
    zf = zm + 2.0 * eccentricity * math.sin(zm)
    sinzf = math.sin(zf)
    f2 = 0.5 * sinzf * sinzf - 0.25
    f3 = -0.5 * sinzf * math.cos(zf)
    return sinzf, f2, f3


def dpper(
    satrec,
    init: str,
    ep: float,
    inclp: float,
    nodep: float,
    argpp: float,
    mp: float,
    opsmode: str,
) -> DpperResult:
    """Apply the lunar-solar long-period periodics to the mean elements.

    ``satrec`` supplies the coefficients from :func:`dscom` as attributes,
    together with ``t``, the minutes since epoch. With ``init`` equal to
    ``"y"`` the elements are returned unchanged; with ``"n"`` the periodics
    are added. ``opsmode`` ``"a"`` keeps the node angle non-negative.
    """
    t = satrec.t

    zm = satrec.zmos if init == "y" else satrec.zmos + _ZNS * t
    sinzf, f2, f3 = _body_periodics(zm, _ZES)
    ses = satrec.se2 * f2 + satrec.se3 * f3
    sis = satrec.si2 * f2 + satrec.si3 * f3
    sls = satrec.sl2 * f2 + satrec.sl3 * f3 + satrec.sl4 * sinzf
    sghs = satrec.sgh2 * f2 + satrec.sgh3 * f3 + satrec.sgh4 * sinzf
    shs = satrec.sh2 * f2 + satrec.sh3 * f3

    zm = satrec.zmol if init == "y" else satrec.zmol + _ZNL * t
    sinzf, f2, f3 = _body_periodics(zm, _ZEL)
    sel = satrec.ee2 * f2 + satrec.e3 * f3
    sil = satrec.xi2 * f2 + satrec.xi3 * f3
    sll = satrec.xl2 * f2 + satrec.xl3 * f3 + satrec.xl4 * sinzf
    sghl = satrec.xgh2 * f2 + satrec.xgh3 * f3 + satrec.xgh4 * sinzf
    shll = satrec.xh2 * f2 + satrec.xh3 * f3

    if init == "n":
        pe = ses + sel - satrec.peo
        pinc = sis + sil - satrec.pinco
        pl = sls + sll - satrec.plo
        pgh = sghs + sghl - satrec.pgho
        ph = shs + shll - satrec.pho

        inclp += pinc
        ep += pe
        sinip = math.sin(inclp)
        cosip = math.cos(inclp)

        if inclp >= 0.2:
            ph /= sinip
            pgh -= cosip * ph
            argpp += pgh
            nodep += ph
            mp += pl
        else:
            sinop = math.sin(nodep)
            cosop = math.cos(nodep)
            alfdp = sinip * sinop + (ph * cosop + pinc * cosip * sinop)
            betdp = sinip * cosop + (-ph * sinop + pinc * cosip * cosop)

            nodep = math.fmod(nodep, TWOPI)
            if nodep < 0.0 and opsmode == "a":
                nodep += TWOPI
            xls = mp + argpp + pl + pgh + (cosip - pinc * sinip) * nodep
            xnoh = nodep
            nodep = math.atan2(alfdp, betdp)
            if nodep < 0.0 and opsmode == "a":
                nodep += TWOPI
            if abs(xnoh - nodep) > math.pi:
                if nodep < xnoh:
                    nodep += TWOPI
                else:
                    nodep -= TWOPI
            mp += pl
            argpp = xls - mp - cosip * nodep

    return DpperResult(ep=ep, inclp=inclp, nodep=nodep, argpp=argpp, mp=mp)