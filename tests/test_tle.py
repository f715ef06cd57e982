import dataclasses
import datetime as dt

import pytest

from satprop.tle import (
    TLE,
    TLEError,
    parse_tle,
    read_tle_file,
    read_tle_line1,
    read_tle_line2,
)

SAMPLE_TLE = """STARLINK-1039
1 44744U 19074AH  25018.17797797  .00031028  00000+0  20924-2 0  9996
2 44744  53.0542 291.9231 0001291  91.3884 268.7253 15.06407194285563"""

NAME, LINE1, LINE2 = SAMPLE_TLE.split("\n")


@pytest.fixture
def sample() -> TLE:
    return parse_tle(LINE1, LINE2, NAME)


@pytest.mark.parametrize(
    "getter, expected",
    [
        (lambda t: t.name, "STARLINK-1039"),
        (lambda t: t.line1.satellite_id, "44744"),
        (lambda t: t.line2.inclination, "53.0542"),
        (lambda t: t.line2.mean_motion, "15.06407194"),
    ],
)
def test_parse_tle(sample, getter, expected):
    assert getter(sample) == expected


def test_line1_fields(sample):
    line1 = sample.line1
    assert line1.classification == "U"
    assert line1.launch_year == "19"
    assert line1.launch_number == "074"
    assert line1.launch_piece == "AH"
    assert line1.epoch_year == "25"
    assert line1.epoch_day == "018.17797797"
    assert line1.second_derivative == "0.0000e+0"
    assert line1.bstar == "2.0924e-2"
    assert line1.element_set_number == "999"
    assert line1.checksum == "6"
    assert line1.line_string == LINE1


def test_line2_fields(sample):
    line2 = sample.line2
    assert line2.eccentricity == "0.0001291"
    assert line2.right_ascension == "291.9231"
    assert line2.argument_of_perigee == "91.3884"
    assert line2.mean_anomaly == "268.7253"
    assert line2.revolution_number == "28556"
    assert line2.checksum == "3"


def test_str(sample):
    assert str(sample) == SAMPLE_TLE


def test_read_tle_file(tmp_path):
    path = tmp_path / "tle_test.txt"
    path.write_text(SAMPLE_TLE, encoding="utf-8")
    tles = read_tle_file(path)
    assert len(tles) == 1
    assert tles[0].name == "STARLINK-1039"
    assert tles[0].norad_id == "44744"


def test_read_tle_file_multiple_with_crlf(tmp_path):
    other = (
        "ISS (ZARYA)\r\n"
        "1 25544U 98067A   08264.51782528 -.00002182  00000-0 -11606-4 0  2927\r\n"
        "2 25544  51.6416 247.4627 0006703 130.5360 325.0288 15.72125391563537\r\n"
    )
    path = tmp_path / "many.txt"
    path.write_bytes((SAMPLE_TLE + "\r\n" + other).encode("utf-8"))
    tles = read_tle_file(path)
    assert [t.name for t in tles] == ["STARLINK-1039", "ISS (ZARYA)"]
    assert tles[1].norad_id == "25544"
    assert tles[1].line1.bstar == "-.11606e-4"
    assert tles[1].line2.line_string.endswith("563537")


def test_read_tle_file_short_line(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("NAME\n1 44744U\n", encoding="utf-8")
    with pytest.raises(TLEError, match="line 1 too short"):
        read_tle_file(path)


def test_read_tle_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_tle_file(tmp_path / "absent.txt")


@pytest.mark.parametrize(
    "line1, line2",
    [
        ("", ""),
        ("1 44744U", "2 44744"),
        (
            "3 44744U 19074AH  25018.17797797  .00031028  00000+0  20924-2 0  9996",
            "4 44744  53.0542 291.9231 0001291  91.3884 268.7253 15.06407194285563",
        ),
    ],
)
def test_invalid_tle(line1, line2):
    with pytest.raises(TLEError):
        parse_tle("TEST", line1, line2)


def test_read_tle_line1_too_short_message():
    with pytest.raises(TLEError, match="line 1 too short: 8 chars"):
        read_tle_line1("1 44744U")


def test_read_tle_line2_too_short_message():
    with pytest.raises(TLEError, match="line 2 too short: 7 chars"):
        read_tle_line2("2 44744")


def test_tle_time(sample):
    expected = dt.datetime(2025, 1, 18, 4, 16, 17, 296608, tzinfo=dt.timezone.utc)
    assert sample.time() == expected


def test_tle_time_twentieth_century():
    line1 = "1 25544U 98067A   98264.51782528 -.00002182  00000-0 -11606-4 0  2927"
    tle = parse_tle(line1, LINE2, "OLD")
    assert tle.time().year == 1998


def _with_epoch(tle: TLE, year: str, day: str) -> TLE:
    line1 = dataclasses.replace(tle.line1, epoch_year=year, epoch_day=day)
    return dataclasses.replace(tle, line1=line1)


@pytest.mark.parametrize(
    "year, day, message",
    [
        ("25", "01817797797", "Expected format"),
        ("25", "0018.5", "5 digits"),
        ("2x", "018.5", "cannot parse year"),
        ("25", "0x8.5", "cannot parse day"),
        ("25", "000.5", "out of range"),
        ("25", "400.5", "out of range"),
        ("25", "018.5e", "fractional day"),
    ],
)
def test_tle_time_invalid(sample, year, day, message):
    broken = _with_epoch(sample, year, day)
    with pytest.raises(TLEError) as excinfo:
        broken.time()
    assert message in str(excinfo.value)