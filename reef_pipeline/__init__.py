"""
Reef Check tidy pipeline (flat layout)

Public API:
- types.PipelineConfig
- pipeline_controller.run_pipeline
- schema_normalizer.normalize_columns
- survey_aggregator.aggregate_surveys
- site_aggregator.aggregate_sites / assert_unique_site_days
- schema_transformer.transform_schema
- geo_type_converter.convert_geo_types
"""

from .errors import (
    AggregationError,
    InvariantViolationError,
    ReefPipelineError,
    SchemaError,
    TypeCoercionError,
    UnitConversionError,
)
from .types import PipelineConfig
from .schema_normalizer import normalize_columns
from .survey_aggregator import aggregate_surveys
from .site_aggregator import aggregate_sites, assert_unique_site_days, find_duplicate_site_days
from .schema_transformer import transform_schema
from .geo_type_converter import convert_geo_types
from .pipeline_controller import run_pipeline

__all__ = [
    "PipelineConfig",
    "run_pipeline",
    "normalize_columns",
    "aggregate_surveys",
    "aggregate_sites",
    "assert_unique_site_days",
    "find_duplicate_site_days",
    "transform_schema",
    "convert_geo_types",
    "ReefPipelineError",
    "SchemaError",
    "AggregationError",
    "InvariantViolationError",
    "UnitConversionError",
    "TypeCoercionError",
]
