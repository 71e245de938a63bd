# site_aggregator.py — One record per site per survey day
# Last Updated (UTC): 2026-10-19
#
# Description:
# Combines the depth-stratified surveys done at a site on one date:
#   - coral:     mean perc_survey over the site-day's surveys (rounded)
#   - coral_std: sample standard deviation of the same values (rounded)
#   - depth_m:   mean survey depth (rounded)
#   - n_surveys: number of distinct perc_survey values
# then keeps one representative row per (reef_id, date).
#
# Data Handling Notes:
# - survey_df is fanned out (one row per segment); each survey is counted once
#   by reducing to its first row before the statistics are taken.
# - A site-day with a single survey reports coral_std = 0.0, never NaN.
# - The representative is the first-seen row of the group, taken whole, so all
#   of its non-aggregate fields come from the same source row.
# - Uniqueness of (reef_id, date) is re-checked after the collapse; a duplicate
#   is a logic defect and raises InvariantViolationError.

import logging
from typing import Dict

import numpy as np
import pandas as pd

from .data_schema import SITE_DERIVED_COLUMNS, SITE_KEY, SURVEY_KEY, require_columns
from .errors import AggregationError, InvariantViolationError
from .utils import coerce_numeric, describe_key, group_positions

LOG = logging.getLogger(__name__)

STAGE = "site_aggregator"

SINGLE_SURVEY_STD = 0.0


def derive_site_fields(key: tuple, surveys: pd.DataFrame,
                       coral_decimals: int = 2, depth_decimals: int = 2) -> Dict[str, float]:
    """
    Reduce the surveys of one site-day (one row per survey) to site fields.
    `perc_survey` and `depth` must already be numeric.
    """
    if surveys.empty:
        raise AggregationError("site-day has no surveys", stage=STAGE,
                               context=describe_key(SITE_KEY, key))

    perc = surveys["perc_survey"]
    if len(perc) > 1:
        std = round(float(perc.std(ddof=1)), coral_decimals)
    else:
        std = SINGLE_SURVEY_STD

    return {
        "coral": round(float(perc.mean()), coral_decimals),
        "coral_std": std,
        "depth_m": round(float(surveys["depth"].mean()), depth_decimals),
        "n_surveys": int(perc.nunique(dropna=True)),
    }


def find_duplicate_site_days(df: pd.DataFrame) -> pd.DataFrame:
    """Rows whose (reef_id, date) occurs more than once. Empty when unique."""
    require_columns(df, SITE_KEY, STAGE)
    return df[df.duplicated(subset=SITE_KEY, keep=False)]


def assert_unique_site_days(df: pd.DataFrame) -> None:
    """Raise InvariantViolationError if any (reef_id, date) pair repeats."""
    dupes = find_duplicate_site_days(df)
    if not dupes.empty:
        keys = sorted({tuple(map(str, k)) for k in dupes[SITE_KEY].itertuples(index=False, name=None)})
        raise InvariantViolationError(
            f"{len(keys)} (reef_id, date) pair(s) still duplicated after site aggregation",
            stage=STAGE,
            context={"keys": keys[:10], "rows": len(dupes)},
        )


def aggregate_sites(survey_df: pd.DataFrame, coral_decimals: int = 2,
                    depth_decimals: int = 2) -> pd.DataFrame:
    """
    Attach coral / coral_std / depth_m / n_surveys to every row of each
    (reef_id, date) group, collapse each group to its first row, and verify
    one row per site-day remains.
    """
    require_columns(survey_df, SURVEY_KEY + ["perc_survey"], STAGE)

    if survey_df.empty:
        LOG.warning("%s: empty survey table; nothing to aggregate", STAGE)
        out = survey_df.copy()
        for col in SITE_DERIVED_COLUMNS:
            out[col] = pd.Series(dtype="float64")
        return out

    work = survey_df.copy()
    work["perc_survey"] = coerce_numeric(work["perc_survey"], STAGE)
    depth_numeric = coerce_numeric(work["depth"], STAGE)

    # One row per survey for the statistics
    first_of_survey = ~work.duplicated(subset=SURVEY_KEY, keep="first")
    surveys = work[first_of_survey].assign(depth=depth_numeric[first_of_survey].to_numpy())

    stats = {
        key: derive_site_fields(key, surveys.iloc[pos], coral_decimals, depth_decimals)
        for key, pos in group_positions(surveys, SITE_KEY).items()
    }

    n = len(work)
    columns = {
        "coral": np.empty(n, dtype="float64"),
        "coral_std": np.empty(n, dtype="float64"),
        "depth_m": np.empty(n, dtype="float64"),
        "n_surveys": np.empty(n, dtype="int64"),
    }
    for key, pos in group_positions(work, SITE_KEY).items():
        for col, values in columns.items():
            values[pos] = stats[key][col]

    fanned = work.assign(**columns)
    out = fanned.drop_duplicates(subset=SITE_KEY, keep="first")

    assert_unique_site_days(out)

    LOG.info("%s: %d survey rows -> %d site-days (%d surveys)",
             STAGE, len(survey_df), len(out), len(surveys))
    return out
