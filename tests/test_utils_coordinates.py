import pytest

from reef_pipeline.errors import UnitConversionError
from reef_pipeline.utils_coordinates import (
    LAT_CARDINALS,
    LON_CARDINALS,
    decimal_to_dms,
    dms_to_decimal,
    join_dms,
    parse_dms,
    signed_decimal,
)


def approx(val, ref, tol=1e-4):
    return abs(val - ref) < tol


def test_scenario_c_dms_to_decimal():
    assert approx(dms_to_decimal("18 25 30"), 18.425)


def test_extra_whitespace_tolerated():
    assert approx(dms_to_decimal("  64   40 15 "), 64 + 40 / 60 + 15 / 3600)


@pytest.mark.parametrize("text", ["18 25", "18 25 30 1", "", None, "18 xx 30", "18  30"])
def test_malformed_strings_raise(text):
    with pytest.raises(UnitConversionError):
        dms_to_decimal(text)


@pytest.mark.parametrize("text", ["18 60 0", "18 25 60", "18 -1 0", "-18 25 30", "nan 25 30"])
def test_out_of_range_components_raise(text):
    with pytest.raises(UnitConversionError):
        parse_dms(text)


@pytest.mark.parametrize("dd", [0.0, 18.425, 64.670833, 88.175, 179.999722])
def test_decimal_dms_round_trip(dd):
    deg, minutes, seconds = decimal_to_dms(dd)
    assert approx(dms_to_decimal(join_dms(deg, minutes, seconds)), dd)


def test_decimal_to_dms_known_value():
    deg, minutes, seconds = decimal_to_dms(18.425)
    assert (deg, minutes) == (18, 25)
    assert approx(seconds, 30.0, tol=1e-6)


def test_signed_decimal_hemispheres():
    assert approx(signed_decimal("18 25 30", "N", LAT_CARDINALS, 90), 18.425)
    assert approx(signed_decimal("18 25 30", "s", LAT_CARDINALS, 90), -18.425)
    assert approx(signed_decimal("88 10 30", "W", LON_CARDINALS, 180), -88.175)
    assert approx(signed_decimal("88 10 30", "W", LON_CARDINALS, 180, apply_sign=False), 88.175)


def test_signed_decimal_rejects_wrong_axis_cardinal():
    with pytest.raises(UnitConversionError):
        signed_decimal("18 25 30", "E", LAT_CARDINALS, 90)


def test_signed_decimal_rejects_out_of_bounds():
    with pytest.raises(UnitConversionError):
        signed_decimal("95 0 0", "N", LAT_CARDINALS, 90)
