# utils.py — Shared grouping and coercion helpers for the Reef Check pipeline
# Last Updated (UTC): 2026-10-19
# Description:
# • group_rows(): explicit group-by returning (key, rows) pairs, first-seen order.
# • coerce_numeric(): explicit text -> number conversion with a declared dtype.
# Data Handling Notes:
# • Missing key values form their own group (None), they are never dropped.
# • Coercion never produces NaN silently; the first offending row is reported.

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .errors import TypeCoercionError

LOG = logging.getLogger(__name__)


def _is_missing(v) -> bool:
    return v is None or (isinstance(v, float) and np.isnan(v)) or v is pd.NA or v is pd.NaT


def _key_part(v):
    return None if _is_missing(v) else v


def group_positions(df: pd.DataFrame, keys: Sequence[str]) -> Dict[tuple, List[int]]:
    """Map each key tuple to the row positions holding it, in first-seen order."""
    positions: Dict[tuple, List[int]] = {}
    key_values = df[list(keys)].itertuples(index=False, name=None)
    for pos, key in enumerate(key_values):
        positions.setdefault(tuple(_key_part(v) for v in key), []).append(pos)
    return positions


def group_rows(df: pd.DataFrame, keys: Sequence[str]) -> List[Tuple[tuple, pd.DataFrame]]:
    """
    Split df into (key_tuple, rows) pairs.
    Keys appear in first-seen order and each rows frame keeps the original index.
    """
    return [(key, df.iloc[pos]) for key, pos in group_positions(df, keys).items()]


def _strip_text(v):
    return v.strip() if isinstance(v, str) else v


def coerce_numeric(series: pd.Series, stage: str, dtype: str = "float64",
                   allow_missing: bool = False) -> pd.Series:
    """
    Convert a text/number Series to `dtype` ("float64" or "int64").

    Raises TypeCoercionError naming the column and row index of the first
    value that does not parse (or is missing, unless allow_missing), or that
    is fractional when an integer dtype was requested.
    """
    cleaned = series.map(_strip_text)
    cleaned = cleaned.where(cleaned != "")
    converted = pd.to_numeric(cleaned, errors="coerce")

    missing = cleaned.isna()
    unparsable = converted.isna() & ~missing
    if not allow_missing:
        unparsable = unparsable | missing
    if unparsable.any():
        _raise_bad_value(series, unparsable, stage, "is not numeric")

    if dtype == "int64":
        fractional = converted.notna() & (converted % 1 != 0)
        if fractional.any():
            _raise_bad_value(series, fractional, stage, "is not an integer")
        if converted.isna().any():
            return converted.astype("Int64")
        return converted.astype("int64")
    return converted.astype(dtype)


def _raise_bad_value(series: pd.Series, mask: pd.Series, stage: str, reason: str):
    row = mask[mask].index[0]
    value: Any = series.loc[row]
    if isinstance(value, pd.Series):
        value = value.iloc[0]
    raise TypeCoercionError(
        f"value {value!r} in column {series.name!r} {reason}",
        stage=stage,
        context={"row": row, "column": series.name, "bad_rows": int(mask.sum())},
    )


def describe_key(keys: Sequence[str], values: tuple) -> Dict[str, Optional[Any]]:
    """Pair key column names with a key tuple for error context and logs."""
    return dict(zip(keys, values))
