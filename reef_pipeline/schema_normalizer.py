# schema_normalizer.py — Canonical column labels for raw Reef Check exports
# Last Updated (UTC): 2026-10-19
# Description:
# • Rewrites column labels to lower_snake_case so every later stage can address
#   columns by the names declared in data_schema.py.
# Data Handling Notes:
# • Only labels change: row count, row order and cell values are untouched.
# • Two labels that collapse to the same canonical label are rejected.

import logging
import re

import pandas as pd

from .data_schema import RAW_REQUIRED_COLUMNS, require_columns
from .errors import SchemaError

LOG = logging.getLogger(__name__)

STAGE = "schema_normalizer"

_SEPARATORS = re.compile(r"[\s\-./]+")
_REPEATED_UNDERSCORE = re.compile(r"_+")


def canonical_label(label) -> str:
    """
    'Latitude Cardinal Direction' -> 'latitude_cardinal_direction'
    'Segment-Code ' -> 'segment_code'
    """
    text = _SEPARATORS.sub("_", str(label).strip().lower())
    return _REPEATED_UNDERSCORE.sub("_", text).strip("_")


def normalize_columns(raw_df: pd.DataFrame) -> pd.DataFrame:
    """
    Return a copy of raw_df with canonical column labels.

    Raises SchemaError if two labels normalize to the same name or if any
    column in RAW_REQUIRED_COLUMNS is absent afterwards.
    """
    mapping = {col: canonical_label(col) for col in raw_df.columns}

    seen = {}
    for original, canonical in mapping.items():
        if canonical in seen:
            raise SchemaError(
                f"columns {seen[canonical]!r} and {original!r} both normalize to {canonical!r}",
                stage=STAGE,
            )
        seen[canonical] = original

    out = raw_df.rename(columns=mapping)
    require_columns(out, RAW_REQUIRED_COLUMNS, STAGE)

    renamed = sum(1 for k, v in mapping.items() if k != v)
    LOG.info("%s: %d rows, %d columns (%d relabelled)", STAGE, len(out), len(out.columns), renamed)
    return out
