import math

import pytest

from satprop.gravity import GravConst, Gravity, get_grav_const


@pytest.mark.parametrize("model", list(Gravity))
def test_derived_constants_are_consistent(model):
    grav = get_grav_const(model)
    assert grav.tumin * grav.xke == pytest.approx(1.0)
    assert grav.j3oj2 * grav.j2 == pytest.approx(grav.j3)


def test_wgs72old_uses_fixed_xke():
    grav = get_grav_const(Gravity.WGS72OLD)
    assert grav.xke == 0.0743669161
    assert grav.mu == 398600.79964


def test_wgs84_radius_and_mu():
    grav = get_grav_const(Gravity.WGS84)
    assert grav.radiusearthkm == 6378.137
    assert grav.mu == 398600.5


def test_wgs72_xke_close_to_old_model():
    assert get_grav_const(Gravity.WGS72).xke == pytest.approx(0.0743669161, abs=1e-8)


def test_wgs72_xke_matches_radius_and_mu():
    grav = get_grav_const(Gravity.WGS72)
    # xke^2 * r^3 / mu is fixed at 3600 (minutes per hour squared)
    assert grav.xke**2 * grav.radiusearthkm**3 / grav.mu == pytest.approx(3600.0)


def test_string_name_is_accepted():
    assert get_grav_const("wgs84") == get_grav_const(Gravity.WGS84)
    assert isinstance(get_grav_const("wgs72"), GravConst)
    assert get_grav_const("wgs72").radiusearthkm == 6378.135


def test_unknown_model_raises():
    with pytest.raises(ValueError, match="not a valid gravity model"):
        get_grav_const("wgs99")


def test_models_differ():
    old = get_grav_const(Gravity.WGS72OLD)
    new = get_grav_const(Gravity.WGS84)
    assert not math.isclose(old.j2, new.j2)