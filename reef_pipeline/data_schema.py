"""
data_schema.py
Centralized column schema for every stage of the Reef Check tidy pipeline.
Stages check their inputs against these declarations instead of resolving
column names ad hoc.
"""

from typing import Iterable, List

import pandas as pd

from .errors import SchemaError

# ✅ Raw observation columns (after label normalization)
RAW_REQUIRED_COLUMNS = [
    "reef_id",
    "reef_name",
    "date",                          # month-day-yy text
    "depth",                         # metres
    "segment_code",                  # one of four 20 m segments
    "substrate_code",                # e.g. HC = hard coral
    "total",                         # points on this substrate in this segment
    "latitude_degrees",
    "latitude_minutes",
    "latitude_seconds",
    "latitude_cardinal_direction",
    "longitude_degrees",
    "longitude_minutes",
    "longitude_seconds",
    "longitude_cardinal_direction",
]

# Descriptive/annotation columns that may or may not be in the export
RAW_OPTIONAL_COLUMNS = [
    "state_province_island",
    "city_town",
    "errors",
    "what_errors",
]

# ✅ Survey stage
SURVEY_KEY = ["reef_id", "date", "depth", "substrate_code"]
SURVEY_DERIVED_COLUMNS = ["coral_pts", "poss_pts", "perc_survey"]

# ✅ Site stage
SITE_KEY = ["reef_id", "date"]
SITE_DERIVED_COLUMNS = ["coral", "coral_std", "depth_m", "n_surveys"]

# ✅ Schema transformer
TRANSFORM_DROP_REQUIRED = [
    "segment_code",
    "total",
    "perc_survey",
    "coral_pts",
    "poss_pts",
    "depth",
    "substrate_code",
]
TRANSFORM_DROP_OPTIONAL = list(RAW_OPTIONAL_COLUMNS)

LAT_DMS_COLUMNS = ["latitude_degrees", "latitude_minutes", "latitude_seconds"]
LON_DMS_COLUMNS = ["longitude_degrees", "longitude_minutes", "longitude_seconds"]

CARDINAL_RENAMES = {
    "longitude_cardinal_direction": "lon_d",
    "latitude_cardinal_direction": "lat_d",
}

# Input date is month<delim>day<delim>yy
DATE_PARTS = ["month", "day", "year"]

# ✅ Final tidy table: column -> dtype, in output order
TIDY_DTYPES = {
    "reef_id": object,
    "reef_name": object,
    "coral": "float64",
    "coral_std": "float64",
    "depth_m": "float64",
    "n_surveys": "int64",
    "lon": "float64",
    "lat": "float64",
    "lon_d": object,
    "lat_d": object,
    "region": object,
    "method": object,
    "data_source": object,
    "day": "int64",
    "month": "int64",
    "year": "int64",
}
TIDY_COLUMNS = list(TIDY_DTYPES.keys())

# Fields converted from text by the geo/type converter
NUMERIC_TARGETS = {
    "lon": "float64",
    "lat": "float64",
    "year": "int64",
    "day": "int64",
    "month": "int64",
    "coral": "float64",
    "coral_std": "float64",
    "depth_m": "float64",
    "n_surveys": "int64",
}


def missing_columns(df: pd.DataFrame, columns: Iterable[str]) -> List[str]:
    """Columns from `columns` not present in df, in declaration order."""
    present = set(df.columns)
    return [c for c in columns if c not in present]


def require_columns(df: pd.DataFrame, columns: Iterable[str], stage: str) -> None:
    """Raise SchemaError naming the stage if any declared column is absent."""
    missing = missing_columns(df, columns)
    if missing:
        raise SchemaError(
            f"missing required column(s): {', '.join(missing)}",
            stage=stage,
            context={"available": sorted(map(str, df.columns))},
        )
