import pytest

from satprop.tleutils import (
    day_of_year_to_month_day,
    days_to_mdhms,
    normalize_angle,
    parse_float,
    parse_int,
    parse_scientific_notation,
    validate_tle,
    verify_checksum,
)

LINE1 = "1 44744U 19074AH  25018.17797797  .00031028  00000+0  20924-2 0  9996"
LINE2 = "2 44744  53.0542 291.9231 0001291  91.3884 268.7253 15.06407194285563"


@pytest.mark.parametrize(
    "line, valid",
    [
        (LINE1, True),
        (LINE2, True),
        ("1 44744U 19074AH  25018.17797797  .00031028  00000+0  20924-2 0  9995", False),
    ],
)
def test_verify_checksum(line, valid):
    assert verify_checksum(line) is valid


def test_verify_checksum_non_digit_check_character():
    assert verify_checksum(LINE1[:68] + "X") is False


def test_verify_checksum_short_line():
    with pytest.raises(ValueError):
        verify_checksum("1 44744U")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", "0.0"),
        ("00000-0", "0.0000e-0"),
        ("20924-2", "2.0924e-2"),
        ("-11606-4", "-.11606e-4"),
        ("00000+0", "0.0000e+0"),
    ],
)
def test_parse_scientific_notation(value, expected):
    assert parse_scientific_notation(value) == expected


def test_parse_scientific_notation_yields_parsable_float():
    assert float(parse_scientific_notation("-11606-4")) == pytest.approx(-1.1606e-5)


def test_parse_scientific_notation_too_short():
    with pytest.raises(ValueError):
        parse_scientific_notation("5")


def test_validate_tle_bad_length():
    with pytest.raises(ValueError, match="length"):
        validate_tle("1 44744U", "2 44744")


def test_validate_tle_bad_line_numbers():
    with pytest.raises(ValueError, match="line numbers"):
        validate_tle("3" + LINE1[1:], "4" + LINE2[1:])


def test_validate_tle_mismatched_ids():
    other = LINE2[:2] + "44745" + LINE2[7:]
    with pytest.raises(ValueError, match="satellite IDs"):
        validate_tle(LINE1, other)


def test_validate_tle_bad_checksum():
    with pytest.raises(ValueError, match="checksum"):
        validate_tle(LINE1[:68] + "5", LINE2)


@pytest.mark.parametrize(
    "angle, expected",
    [(45.0, 45.0), (190.0, -170.0), (-190.0, 170.0), (540.0, 180.0), (720.0, 0.0)],
)
def test_normalize_angle(angle, expected):
    assert normalize_angle(angle) == pytest.approx(expected)


@pytest.mark.parametrize(
    "day_of_year, is_leap, expected",
    [
        (1, False, (1, 1)),
        (60, False, (3, 1)),
        (60, True, (2, 29)),
        (365, False, (12, 31)),
        (366, True, (12, 31)),
        (400, False, (1, 0)),
    ],
)
def test_day_of_year_to_month_day(day_of_year, is_leap, expected):
    assert day_of_year_to_month_day(day_of_year, is_leap) == expected


def test_parse_float():
    assert parse_float("264.51782528") == 264.51782528


@pytest.mark.parametrize("text", ["abc", " 1.0", "1_0", ""])
def test_parse_float_invalid(text):
    with pytest.raises(ValueError):
        parse_float(text)


@pytest.mark.parametrize("text, expected", [("25544", 25544), ("-7", -7), ("+08", 8)])
def test_parse_int(text, expected):
    assert parse_int(text) == expected


@pytest.mark.parametrize("text", ["1.0", "", " 5", "1_000", "99999999999999999999"])
def test_parse_int_invalid(text):
    with pytest.raises(ValueError):
        parse_int(text)


def test_days_to_mdhms_sample_epoch():
    month, day, hour, minute, second = days_to_mdhms(2025, 18.17797797)
    assert (month, day, hour, minute) == (1, 18, 4, 16)
    assert second == pytest.approx(17.296608, abs=1e-6)


def test_days_to_mdhms_leap_year():
    month, day, hour, minute, second = days_to_mdhms(2008, 264.51782528)
    assert (month, day, hour, minute) == (9, 20, 12, 25)
    assert second == pytest.approx(40.104192, abs=1e-5)


def test_days_to_mdhms_start_of_day():
    assert days_to_mdhms(2021, 1.0) == (1, 1, 0, 0, 0.0)