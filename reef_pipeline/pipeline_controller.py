# pipeline_controller.py - Reef Check Tidy Pipeline
# 2026-10-19
#
# Description:
# Runs the end-to-end transformation of a raw Reef Check substrate export into
# the site-level tidy table:
# - Normalizing column labels (schema_normalizer.py)
# - Per-survey hard-coral percent cover (survey_aggregator.py)
# - One record per site per day (site_aggregator.py)
# - Tidy column layout (schema_transformer.py)
# - Decimal degrees and numeric types (geo_type_converter.py)
#
# External Data Sources:
# - Raw substrate CSV, one row per (site, date, depth, segment, substrate code).
#
# Produced DataFrames:
# - tidy_df: one row per (reef_id, date) with TIDY_COLUMNS.
#
# Data Handling Notes:
# - The raw CSV is read entirely as text; each stage converts what it needs.
# - Any ReefPipelineError aborts the run; nothing is written for a failed run.

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import pandas as pd

from .config import configure_logging, load_config_from_env
from .errors import ReefPipelineError
from .geo_type_converter import convert_geo_types
from .schema_normalizer import normalize_columns
from .schema_transformer import transform_schema
from .site_aggregator import aggregate_sites
from .survey_aggregator import aggregate_surveys
from .types import PipelineConfig

LOG = logging.getLogger(__name__)


def load_raw_observations(path) -> pd.DataFrame:
    """Read the raw export with every column as text."""
    path = Path(path)
    LOG.info("Loading raw observations from %s", path)
    return pd.read_csv(path, dtype=str)


def write_tidy_table(tidy_df: pd.DataFrame, path) -> Path:
    """Single batch write of the final table."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tidy_df.to_csv(path, index=False)
    LOG.info("✅ Tidy table saved to: %s (%d rows)", path, len(tidy_df))
    return path


def run_pipeline(raw_df: pd.DataFrame, config: Optional[PipelineConfig] = None) -> pd.DataFrame:
    """
    Raw observations -> tidy site-level table.
    Each stage returns a new frame; raw_df is not modified.
    """
    config = config or PipelineConfig()

    normalized_df = normalize_columns(raw_df)
    survey_df = aggregate_surveys(
        normalized_df,
        target_code=config.target_code,
        points_per_segment=config.points_per_segment,
    )
    site_df = aggregate_sites(
        survey_df,
        coral_decimals=config.coral_decimals,
        depth_decimals=config.depth_decimals,
    )
    tidy_df = transform_schema(site_df, config)
    return convert_geo_types(tidy_df, config)


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        prog="reef-tidy",
        description="Build the site-level tidy table from a raw Reef Check substrate export.",
    )
    parser.add_argument("input", nargs="?", default=os.getenv("REEF_INPUT_PATH"),
                        help="raw CSV (default: $REEF_INPUT_PATH)")
    parser.add_argument("output", nargs="?", default=os.getenv("REEF_OUTPUT_PATH"),
                        help="tidy CSV to write (default: $REEF_OUTPUT_PATH)")
    parser.add_argument("--log-level", default=None, help="default: $REEF_LOG_LEVEL or INFO")
    args = parser.parse_args(argv)
    if not args.input or not args.output:
        parser.error("input and output paths are required (args or REEF_INPUT_PATH / REEF_OUTPUT_PATH)")
    return args


def main(argv=None) -> int:
    config = load_config_from_env()
    args = _parse_args(argv)
    configure_logging(args.log_level)

    try:
        raw_df = load_raw_observations(args.input)
        tidy_df = run_pipeline(raw_df, config)
    except ReefPipelineError as e:
        LOG.error("❌ Pipeline aborted: %s", e)
        return 2

    write_tidy_table(tidy_df, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
