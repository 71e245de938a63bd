# geo_type_converter.py — Decimal degrees, four-digit years, numeric types
# Last Updated (UTC): 2026-10-19
#
# Description:
# Final stage of the tidy pipeline:
#   - lat / lon "<deg> <min> <sec>" strings -> signed decimal degrees
#     (deg + min/60 + sec/3600, negated for S / W when apply_hemisphere_sign)
#   - two-digit year -> four-digit year by prefixing the century ("18" -> 2018)
#   - explicit numeric conversion of every numeric tidy column
#
# Data Handling Notes:
# - Century prefixing is a scoped assumption: every survey in the dataset falls
#   in 2000-2099. It is not general century inference, so anything other than
#   a two-digit year is rejected rather than guessed.
# - Any malformed coordinate raises UnitConversionError; any value that does
#   not parse as a number raises TypeCoercionError. Both name the row.

import logging
from typing import Optional

import pandas as pd

from .data_schema import NUMERIC_TARGETS, TIDY_COLUMNS, TIDY_DTYPES, require_columns
from .errors import TypeCoercionError, UnitConversionError
from .types import PipelineConfig
from .utils import coerce_numeric
from .utils_coordinates import (
    LAT_CARDINALS,
    LAT_LIMIT,
    LON_CARDINALS,
    LON_LIMIT,
    clean_and_standardize_coordinate,
    signed_decimal,
)

LOG = logging.getLogger(__name__)

STAGE = "geo_type_converter"


def normalize_year(value, century_prefix: str = "20") -> str:
    """'18' -> '2018'. Only two-digit years are accepted."""
    text = str(value).strip() if value is not None else ""
    if len(text) != 2 or not text.isdigit():
        raise TypeCoercionError(f"year {value!r} is not a two-digit year", stage=STAGE)
    return f"{century_prefix}{text}"


def convert_coordinates(df: pd.DataFrame, column: str, cardinal_column: str,
                        allowed, limit: float, apply_sign: bool = True) -> pd.Series:
    """Signed decimal degrees for one coordinate column, row by row."""
    values = []
    for row, text, cardinal in zip(df.index, df[column], df[cardinal_column]):
        try:
            values.append(signed_decimal(text, cardinal, allowed, limit, apply_sign))
        except UnitConversionError as exc:
            raise UnitConversionError(
                exc.message,
                stage=STAGE,
                context={"row": row, "column": column, "value": text, "cardinal": cardinal},
            ) from exc
    return pd.Series(values, index=df.index, name=column, dtype="float64")


def normalize_years(df: pd.DataFrame, century_prefix: str = "20") -> pd.Series:
    values = []
    for row, year in zip(df.index, df["year"]):
        try:
            values.append(normalize_year(year, century_prefix))
        except TypeCoercionError as exc:
            raise TypeCoercionError(
                f"year {year!r} is not a two-digit year",
                stage=STAGE,
                context={"row": row, "column": "year"},
            ) from exc
    return pd.Series(values, index=df.index, name="year", dtype=object)


def convert_geo_types(tidy_df: pd.DataFrame, config: Optional[PipelineConfig] = None) -> pd.DataFrame:
    """
    Convert coordinates, normalize years and coerce numeric columns.
    Returns a new frame with TIDY_COLUMNS in order and TIDY_DTYPES applied.
    """
    config = config or PipelineConfig()
    require_columns(tidy_df, TIDY_COLUMNS, STAGE)

    out = tidy_df.copy()
    out["lat"] = convert_coordinates(tidy_df, "lat", "lat_d", LAT_CARDINALS, LAT_LIMIT,
                                     config.apply_hemisphere_sign)
    out["lon"] = convert_coordinates(tidy_df, "lon", "lon_d", LON_CARDINALS, LON_LIMIT,
                                     config.apply_hemisphere_sign)
    out["lat_d"] = tidy_df["lat_d"].map(clean_and_standardize_coordinate)
    out["lon_d"] = tidy_df["lon_d"].map(clean_and_standardize_coordinate)
    out["year"] = normalize_years(tidy_df, config.century_prefix)

    for column, dtype in NUMERIC_TARGETS.items():
        out[column] = coerce_numeric(out[column], STAGE, dtype=dtype)

    out = out[TIDY_COLUMNS].astype(TIDY_DTYPES)
    LOG.info("%s: %d rows converted (hemisphere sign %s)", STAGE, len(out),
             "applied" if config.apply_hemisphere_sign else "not applied")
    return out
