import dataclasses
import math
from types import SimpleNamespace

import pytest

from satprop.deepspace_common import DpperResult, DscomResult, dpper, dscom

_COEFFICIENT_NAMES = (
    "e3 ee2 peo pgho pho pinco plo se2 se3 sgh2 sgh3 sgh4 sh2 sh3 si2 si3 "
    "sl2 sl3 sl4 xgh2 xgh3 xgh4 xh2 xh3 xi2 xi3 xl2 xl3 xl4 zmol zmos"
).split()

# A highly eccentric, slowly moving orbit (roughly 1.2 revolutions per day).
_ORBIT = dict(
    epoch=19753.41,
    ep=0.1450506,
    argpp=3.6233,
    tc=0.0,
    inclp=0.2001,
    nodep=4.7667,
    np=0.005246,
)


def _satrec_from(result: DscomResult, t: float) -> SimpleNamespace:
    values = {name: getattr(result, name) for name in _COEFFICIENT_NAMES}
    return SimpleNamespace(t=t, **values)


def _zero_satrec(t: float = 0.0) -> SimpleNamespace:
    return SimpleNamespace(t=t, **{name: 0.0 for name in _COEFFICIENT_NAMES})


@pytest.fixture
def common():
    return dscom(**_ORBIT)


def test_dscom_passes_elements_through(common):
    assert common.em == _ORBIT["ep"]
    assert common.nm == _ORBIT["np"]
    assert common.emsq == pytest.approx(_ORBIT["ep"] ** 2)
    assert common.rtemsq == pytest.approx(math.sqrt(1.0 - _ORBIT["ep"] ** 2))


def test_dscom_trigonometry_of_inputs(common):
    assert common.sinim == pytest.approx(math.sin(_ORBIT["inclp"]))
    assert common.cosim == pytest.approx(math.cos(_ORBIT["inclp"]))
    assert common.snodm == pytest.approx(math.sin(_ORBIT["nodep"]))
    assert common.cnodm == pytest.approx(math.cos(_ORBIT["nodep"]))
    assert common.sinomm == pytest.approx(math.sin(_ORBIT["argpp"]))
    assert common.cosomm == pytest.approx(math.cos(_ORBIT["argpp"]))


def test_dscom_periodic_offsets_start_at_zero(common):
    assert (common.peo, common.pgho, common.pho, common.pinco, common.plo) == (
        0.0, 0.0, 0.0, 0.0, 0.0,
    )


def test_dscom_day_counts_from_epoch(common):
    assert common.day == pytest.approx(_ORBIT["epoch"] + 18261.5)
    later = dscom(**{**_ORBIT, "tc": 1440.0})
    assert later.day == pytest.approx(common.day + 1.0)


def test_dscom_body_angles_are_within_one_turn(common):
    assert 0.0 <= common.zmol < 2 * math.pi
    assert 0.0 <= common.zmos < 2 * math.pi


def test_dscom_eccentricity_constants(common):
    assert common.sgh4 == pytest.approx(-18.0 * common.ss4 * 0.01675)
    assert common.xgh4 == pytest.approx(-18.0 * common.s4 * 0.05490)
    assert common.s1 == pytest.approx(-15.0 * common.em * common.s4)
    assert common.ss1 == pytest.approx(-15.0 * common.em * common.ss4)


def test_dscom_solar_and_lunar_strengths(common):
    assert common.ss3 == pytest.approx(2.9864797e-6 / _ORBIT["np"])
    assert common.s3 == pytest.approx(4.7968065e-7 / _ORBIT["np"])


def test_dscom_all_values_finite(common):
    non_finite = {
        name: value
        for name, value in dataclasses.asdict(common).items()
        if not math.isfinite(value)
    }
    assert non_finite == {}


def test_dpper_init_returns_elements_unchanged(common):
    satrec = _satrec_from(common, t=500.0)
    result = dpper(satrec, "y", 0.1, 0.3, 1.0, 2.0, 3.0, "i")
    assert result == DpperResult(ep=0.1, inclp=0.3, nodep=1.0, argpp=2.0, mp=3.0)


def test_dpper_with_zero_coefficients_keeps_high_inclination_elements():
    result = dpper(_zero_satrec(100.0), "n", 0.1, 0.5, 1.0, 2.0, 3.0, "i")
    assert result.ep == pytest.approx(0.1)
    assert result.inclp == pytest.approx(0.5)
    assert result.nodep == pytest.approx(1.0)
    assert result.argpp == pytest.approx(2.0)
    assert result.mp == pytest.approx(3.0)


def test_dpper_with_zero_coefficients_keeps_low_inclination_elements():
    result = dpper(_zero_satrec(100.0), "n", 0.1, 0.1, 0.5, 2.0, 3.0, "i")
    assert result.inclp == pytest.approx(0.1)
    assert result.nodep == pytest.approx(0.5)
    assert result.argpp == pytest.approx(2.0)
    assert result.mp == pytest.approx(3.0)


def test_dpper_afspc_mode_keeps_node_positive():
    afspc = dpper(_zero_satrec(), "n", 0.1, 0.1, -0.5, 2.0, 3.0, "a")
    improved = dpper(_zero_satrec(), "n", 0.1, 0.1, -0.5, 2.0, 3.0, "i")
    assert afspc.nodep == pytest.approx(2 * math.pi - 0.5)
    assert improved.nodep == pytest.approx(-0.5)
    assert afspc.argpp == pytest.approx(2.0)


def test_dpper_applies_periodics_with_real_coefficients(common):
    satrec = _satrec_from(common, t=720.0)
    start = (0.1450506, 0.2001, 4.7667, 3.6233, 2.5122)
    result = dpper(satrec, "n", *start, "i")
    values = dataclasses.astuple(result)
    assert all(math.isfinite(value) for value in values)
    assert values != pytest.approx(start, abs=1e-12)
    assert abs(result.ep - start[0]) < 0.05
    assert abs(result.inclp - start[1]) < 0.05


def test_dpper_unknown_init_flag_applies_nothing(common):
    satrec = _satrec_from(common, t=720.0)
    result = dpper(satrec, "x", 0.1, 0.3, 1.0, 2.0, 3.0, "i")
    assert result == DpperResult(ep=0.1, inclp=0.3, nodep=1.0, argpp=2.0, mp=3.0)