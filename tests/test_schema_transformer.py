import pandas as pd
import pytest

from reef_pipeline.data_schema import TIDY_COLUMNS
from reef_pipeline.errors import SchemaError, TypeCoercionError
from reef_pipeline.schema_transformer import merge_coordinates, split_date, transform_schema
from reef_pipeline.site_aggregator import aggregate_sites
from reef_pipeline.survey_aggregator import aggregate_surveys
from reef_pipeline.types import PipelineConfig

from golden_frames import make_normalized_df


def make_site_df():
    return aggregate_sites(aggregate_surveys(make_normalized_df()))


def test_transform_schema_layout():
    site_df = make_site_df()
    out = transform_schema(site_df)
    assert list(out.columns) == TIDY_COLUMNS
    assert len(out) == len(site_df)
    for gone in ("segment_code", "total", "perc_survey", "city_town", "errors", "what_errors", "date"):
        assert gone not in out.columns


def test_coordinates_merged_and_cardinals_renamed():
    out = transform_schema(make_site_df())
    row = out[out["reef_id"] == "100"].iloc[0]
    assert row["lat"] == "18 25 30"
    assert row["lon"] == "64 40 15"
    assert row["lat_d"] == "N"
    assert row["lon_d"] == "W"


def test_metadata_constants_injected():
    out = transform_schema(make_site_df())
    assert set(out["region"]) == {"caribbean"}
    assert set(out["method"]) == {"line_transect"}
    assert set(out["data_source"]) == {"reef_check"}

    custom = transform_schema(make_site_df(), PipelineConfig(region="indo_pacific"))
    assert set(custom["region"]) == {"indo_pacific"}


def test_date_split_month_day_year():
    out = transform_schema(make_site_df())
    row = out[out["reef_id"] == "100"].iloc[0]
    assert (row["month"], row["day"], row["year"]) == ("01", "15", "18")


def test_split_date_custom_delimiter():
    df = pd.DataFrame({"date": ["3/2/19"]})
    out = split_date(df, "/")
    assert out.iloc[0].to_dict() == {"month": "3", "day": "2", "year": "19"}


def test_split_date_malformed_raises():
    df = pd.DataFrame({"date": ["01-15-18", "2018-01-15-x"]})
    with pytest.raises(TypeCoercionError) as exc:
        split_date(df)
    assert exc.value.context["row"] == 1


def test_merge_renders_integral_floats_without_decimal():
    df = pd.DataFrame({
        "latitude_degrees": [18.0], "latitude_minutes": [25.0], "latitude_seconds": [30.5],
        "longitude_degrees": [64], "longitude_minutes": [40], "longitude_seconds": [15],
    })
    out = merge_coordinates(df)
    assert out.iloc[0]["lat"] == "18 25 30.5"
    assert out.iloc[0]["lon"] == "64 40 15"


def test_missing_referenced_field_raises():
    site_df = make_site_df().drop(columns=["longitude_seconds"])
    with pytest.raises(SchemaError) as exc:
        transform_schema(site_df)
    assert "longitude_seconds" in str(exc.value)


def test_optional_annotation_columns_may_be_absent():
    site_df = make_site_df().drop(columns=["errors", "what_errors", "city_town", "state_province_island"])
    out = transform_schema(site_df)
    assert list(out.columns) == TIDY_COLUMNS
