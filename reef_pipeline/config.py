"""
config.py

Centralized configuration for the Reef Check tidy pipeline.
Reads REEF_* environment variables (optionally from a .env file) into a
PipelineConfig and sets up logging consistently for every entry point.
"""

import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .types import PipelineConfig

LOG = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def _get_env_str(name: str, default: str) -> str:
    value = os.environ.get(name)
    return default if value in (None, "") else value


def _get_env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except (TypeError, ValueError):
        LOG.warning("Ignoring non-integer %s=%r; using %s", name, os.environ.get(name), default)
        return default


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value in (None, ""):
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def load_config_from_env(dotenv: bool = True) -> PipelineConfig:
    """
    Build a PipelineConfig from the environment.

    Env:
      REEF_TARGET_CODE (default "HC")
      REEF_POINTS_PER_SEGMENT (default 40)
      REEF_DATE_DELIMITER (default "-")
      REEF_REGION / REEF_METHOD / REEF_DATA_SOURCE
      REEF_APPLY_HEMISPHERE_SIGN ("1"/"0", default "1")
    """
    if dotenv:
        load_dotenv()

    defaults = PipelineConfig()
    return PipelineConfig(
        target_code=_get_env_str("REEF_TARGET_CODE", defaults.target_code),
        points_per_segment=_get_env_int("REEF_POINTS_PER_SEGMENT", defaults.points_per_segment),
        coral_decimals=defaults.coral_decimals,
        depth_decimals=defaults.depth_decimals,
        date_delimiter=_get_env_str("REEF_DATE_DELIMITER", defaults.date_delimiter),
        century_prefix=defaults.century_prefix,
        region=_get_env_str("REEF_REGION", defaults.region),
        method=_get_env_str("REEF_METHOD", defaults.method),
        data_source=_get_env_str("REEF_DATA_SOURCE", defaults.data_source),
        apply_hemisphere_sign=_get_env_bool("REEF_APPLY_HEMISPHERE_SIGN", defaults.apply_hemisphere_sign),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Apply the project log format; level from arg, else REEF_LOG_LEVEL, else INFO."""
    level_name = (level or os.environ.get("REEF_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
    logging.getLogger().setLevel(getattr(logging, level_name, logging.INFO))
