# utils_coordinates.py — Sexagesimal coordinate helpers
# Last Updated (UTC): 2026-10-19
# Description:
# • Joins degree/minute/second components into "<deg> <min> <sec>" strings.
# • Parses those strings back and converts to decimal degrees (and the inverse).
# • Applies the N/S/E/W hemisphere sign.

import math
import re
from typing import Tuple

from .errors import UnitConversionError

STAGE = "geo_type_converter"

LAT_LIMIT = 90.0
LON_LIMIT = 180.0

LAT_CARDINALS = ("N", "S")
LON_CARDINALS = ("E", "W")
NEGATIVE_CARDINALS = ("S", "W")


def clean_and_standardize_coordinate(coord_string) -> str:
    if coord_string is None:
        return ""
    return re.sub(r"\s+", " ", str(coord_string).strip().upper())


def format_dms_component(value) -> str:
    """
    Render one DMS component for joining: 18.0 -> '18', 30.5 -> '30.5',
    missing -> '' (so the joined string fails to parse later).
    """
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    return str(value).strip()


def join_dms(deg, minutes, seconds) -> str:
    return " ".join(format_dms_component(v) for v in (deg, minutes, seconds))


def parse_dms(coord_string: str) -> Tuple[float, float, float]:
    """
    '18 25 30' -> (18.0, 25.0, 30.0).
    Raises UnitConversionError unless there are exactly three numeric tokens
    with minutes and seconds in [0, 60).
    """
    tokens = str(coord_string).split() if coord_string is not None else []
    if len(tokens) != 3:
        raise UnitConversionError(
            f"expected 3 tokens '<deg> <min> <sec>', got {len(tokens)} in {coord_string!r}",
            stage=STAGE,
        )
    try:
        deg, minutes, seconds = (float(t) for t in tokens)
    except ValueError as exc:
        raise UnitConversionError(f"non-numeric component in {coord_string!r}", stage=STAGE) from exc

    if not all(math.isfinite(v) for v in (deg, minutes, seconds)):
        raise UnitConversionError(f"non-finite component in {coord_string!r}", stage=STAGE)
    if deg < 0:
        raise UnitConversionError(f"degrees must be unsigned in {coord_string!r}; use the cardinal field",
                                  stage=STAGE)
    if not (0 <= minutes < 60):
        raise UnitConversionError(f"minutes out of range in {coord_string!r}", stage=STAGE)
    if not (0 <= seconds < 60):
        raise UnitConversionError(f"seconds out of range in {coord_string!r}", stage=STAGE)
    return deg, minutes, seconds


def dms_to_decimal(coord_string: str) -> float:
    """'18 25 30' -> 18.425 (unsigned)."""
    deg, minutes, seconds = parse_dms(coord_string)
    return deg + minutes / 60.0 + seconds / 3600.0


def decimal_to_dms(dd: float) -> Tuple[int, int, float]:
    """
    Inverse of dms_to_decimal for an unsigned value: 18.425 -> (18, 25, 30.0).
    Seconds are not rounded; carry into minutes/degrees only on float spill.
    """
    if dd is None or not math.isfinite(dd) or dd < 0:
        raise UnitConversionError(f"cannot convert {dd!r} to DMS", stage=STAGE)
    degrees = int(dd)
    minutes_full = (dd - degrees) * 60
    minutes = int(minutes_full)
    seconds = (minutes_full - minutes) * 60
    if seconds >= 60 - 1e-9:
        seconds = 0.0
        minutes += 1
    if minutes >= 60:
        minutes = 0
        degrees += 1
    return degrees, minutes, seconds


def extract_cardinal(value, allowed: Tuple[str, ...]) -> str:
    """
    Returns the normalized cardinal letter ('n' -> 'N').
    Raises UnitConversionError if it is not one of `allowed`.
    """
    letter = clean_and_standardize_coordinate(value)
    if letter not in allowed:
        raise UnitConversionError(f"cardinal direction {value!r} not in {allowed}", stage=STAGE)
    return letter


def signed_decimal(coord_string: str, cardinal, allowed: Tuple[str, ...], limit: float,
                   apply_sign: bool = True) -> float:
    """
    Decimal degrees for one coordinate, negated for S/W when apply_sign.
    Raises UnitConversionError for a bad string, bad cardinal or |value| > limit.
    """
    letter = extract_cardinal(cardinal, allowed)
    dd = dms_to_decimal(coord_string)
    if dd > limit:
        raise UnitConversionError(f"{coord_string!r} exceeds {limit} degrees", stage=STAGE)
    if apply_sign and letter in NEGATIVE_CARDINALS:
        dd *= -1
    return dd
