# survey_aggregator.py — Per-survey percent cover
# Last Updated (UTC): 2026-10-19
#
# Description:
# Filters raw observations to the target substrate code (hard coral by default)
# and derives, for every survey (reef_id, date, depth, substrate_code):
#   - coral_pts:   sum of `total` over the survey's segment rows
#   - poss_pts:    distinct segments x points per segment (40 by protocol)
#   - perc_survey: coral_pts / poss_pts * 100
#
# Produced DataFrames:
# - survey_df: the filtered rows with the three fields attached to every row
#   (fan-out; row count equals the filtered input).
#
# Data Handling Notes:
# - A survey with no identifiable segments (poss_pts == 0) raises
#   AggregationError instead of producing NaN/inf.
# - perc_survey outside [0, 100] means the point totals are inconsistent with
#   the segment count and also raises AggregationError.

import logging
from typing import Dict

import numpy as np
import pandas as pd

from .data_schema import SURVEY_DERIVED_COLUMNS, SURVEY_KEY, require_columns
from .errors import AggregationError
from .utils import coerce_numeric, describe_key, group_positions

LOG = logging.getLogger(__name__)

STAGE = "survey_aggregator"

POINTS_PER_SEGMENT = 40


def filter_substrate(df: pd.DataFrame, target_code: str = "HC") -> pd.DataFrame:
    """Rows whose substrate_code (whitespace-stripped) equals target_code."""
    require_columns(df, ["substrate_code"], STAGE)
    codes = df["substrate_code"].map(lambda v: v.strip() if isinstance(v, str) else v)
    return df[codes == target_code]


def derive_survey_fields(key: tuple, rows: pd.DataFrame,
                         points_per_segment: int = POINTS_PER_SEGMENT) -> Dict[str, float]:
    """
    Reduce one survey group to its derived fields.
    `rows["total"]` must already be numeric.
    """
    segments = rows["segment_code"].nunique(dropna=True)
    poss_pts = int(segments * points_per_segment)
    if poss_pts == 0:
        raise AggregationError(
            "survey has zero possible points (no segments)",
            stage=STAGE,
            context=describe_key(SURVEY_KEY, key),
        )

    coral_pts = rows["total"].sum()
    perc_survey = coral_pts / poss_pts * 100
    if not 0 <= perc_survey <= 100:
        raise AggregationError(
            f"percent cover {perc_survey:.2f} outside [0, 100] "
            f"(coral_pts={coral_pts}, poss_pts={poss_pts})",
            stage=STAGE,
            context=describe_key(SURVEY_KEY, key),
        )

    return {
        "coral_pts": float(coral_pts),
        "poss_pts": poss_pts,
        "perc_survey": float(perc_survey),
    }


def aggregate_surveys(df: pd.DataFrame, target_code: str = "HC",
                      points_per_segment: int = POINTS_PER_SEGMENT) -> pd.DataFrame:
    """
    Filter to target_code and attach coral_pts / poss_pts / perc_survey to
    every row of each survey group. Input is not modified.
    """
    require_columns(df, SURVEY_KEY + ["segment_code", "total"], STAGE)

    filtered = filter_substrate(df, target_code).copy()
    if filtered.empty:
        LOG.warning("%s: no rows with substrate_code=%r; nothing to aggregate", STAGE, target_code)
        for col in SURVEY_DERIVED_COLUMNS:
            filtered[col] = pd.Series(dtype="float64")
        return filtered

    filtered["total"] = coerce_numeric(filtered["total"], STAGE)

    n = len(filtered)
    coral_pts = np.empty(n, dtype="float64")
    poss_pts = np.empty(n, dtype="int64")
    perc_survey = np.empty(n, dtype="float64")

    groups = group_positions(filtered, SURVEY_KEY)
    for key, pos in groups.items():
        fields = derive_survey_fields(key, filtered.iloc[pos], points_per_segment)
        coral_pts[pos] = fields["coral_pts"]
        poss_pts[pos] = fields["poss_pts"]
        perc_survey[pos] = fields["perc_survey"]

    out = filtered.assign(coral_pts=coral_pts, poss_pts=poss_pts, perc_survey=perc_survey)

    LOG.info("%s: %d of %d rows matched %r across %d surveys",
             STAGE, len(out), len(df), target_code, len(groups))
    return out
