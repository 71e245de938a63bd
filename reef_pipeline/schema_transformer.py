# schema_transformer.py — Site table -> tidy column layout
# Last Updated (UTC): 2026-10-19
#
# Description:
# Pure column reshaping of the site-level table, in order:
#   1. drop fields no longer needed (segment, totals, per-survey fields,
#      free-text location and error annotation columns)
#   2. merge latitude/longitude DMS triples into "<deg> <min> <sec>" strings
#   3. rename the cardinal-direction fields to lat_d / lon_d
#   4. inject region / method / data_source constants
#   5. split date (month-day-yy) into month / day / year text fields
#
# Data Handling Notes:
# - Row count and row order are unchanged.
# - Values stay text here; the geo/type converter does all numeric conversion.

import logging
from typing import Optional

import pandas as pd

from .data_schema import (
    CARDINAL_RENAMES,
    DATE_PARTS,
    LAT_DMS_COLUMNS,
    LON_DMS_COLUMNS,
    TIDY_COLUMNS,
    TRANSFORM_DROP_OPTIONAL,
    TRANSFORM_DROP_REQUIRED,
    require_columns,
)
from .errors import TypeCoercionError
from .types import PipelineConfig
from .utils_coordinates import join_dms

LOG = logging.getLogger(__name__)

STAGE = "schema_transformer"

REFERENCED_COLUMNS = (
    TRANSFORM_DROP_REQUIRED
    + LAT_DMS_COLUMNS
    + LON_DMS_COLUMNS
    + list(CARDINAL_RENAMES)
    + ["reef_id", "reef_name", "date", "coral", "coral_std", "depth_m", "n_surveys"]
)


def drop_unused_fields(df: pd.DataFrame) -> pd.DataFrame:
    optional = [c for c in TRANSFORM_DROP_OPTIONAL if c in df.columns]
    return df.drop(columns=TRANSFORM_DROP_REQUIRED + optional)


def merge_coordinates(df: pd.DataFrame) -> pd.DataFrame:
    """Replace the six DMS columns with `lat` and `lon` strings."""
    out = df.copy()
    out["lat"] = [join_dms(*row) for row in df[LAT_DMS_COLUMNS].itertuples(index=False, name=None)]
    out["lon"] = [join_dms(*row) for row in df[LON_DMS_COLUMNS].itertuples(index=False, name=None)]
    return out.drop(columns=LAT_DMS_COLUMNS + LON_DMS_COLUMNS)


def add_metadata(df: pd.DataFrame, config: PipelineConfig) -> pd.DataFrame:
    return df.assign(region=config.region, method=config.method, data_source=config.data_source)


def split_date(df: pd.DataFrame, delimiter: str = "-") -> pd.DataFrame:
    """
    '01-15-18' -> month='01', day='15', year='18'; drops `date`.
    Raises TypeCoercionError for a date that is not exactly three parts.
    """
    parts = []
    for row, value in zip(df.index, df["date"]):
        pieces = str(value).strip().split(delimiter) if isinstance(value, str) else []
        if len(pieces) != len(DATE_PARTS) or not all(p.strip() for p in pieces):
            raise TypeCoercionError(
                f"date {value!r} does not split into month{delimiter}day{delimiter}year",
                stage=STAGE,
                context={"row": row, "column": "date"},
            )
        parts.append([p.strip() for p in pieces])

    split = pd.DataFrame(parts, columns=DATE_PARTS, index=df.index, dtype=object)
    return pd.concat([df.drop(columns=["date"]), split], axis=1)


def transform_schema(site_df: pd.DataFrame, config: Optional[PipelineConfig] = None) -> pd.DataFrame:
    """
    Reshape the site table into the tidy column layout (TIDY_COLUMNS order).
    Raises SchemaError if any referenced field is missing.
    """
    config = config or PipelineConfig()
    require_columns(site_df, REFERENCED_COLUMNS, STAGE)

    out = drop_unused_fields(site_df)
    out = merge_coordinates(out)
    out = out.rename(columns=CARDINAL_RENAMES)
    out = add_metadata(out, config)
    out = split_date(out, config.date_delimiter)

    extra = [c for c in out.columns if c not in TIDY_COLUMNS]
    if extra:
        LOG.debug("%s: discarding unmapped column(s) %s", STAGE, extra)
    require_columns(out, TIDY_COLUMNS, STAGE)
    out = out[TIDY_COLUMNS]

    LOG.info("%s: %d rows reshaped to %d columns", STAGE, len(out), len(out.columns))
    return out
