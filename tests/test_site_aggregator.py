import pandas as pd
import pytest

from reef_pipeline.errors import InvariantViolationError
from reef_pipeline.schema_normalizer import normalize_columns
from reef_pipeline.site_aggregator import (
    aggregate_sites,
    assert_unique_site_days,
    derive_site_fields,
    find_duplicate_site_days,
)
from reef_pipeline.survey_aggregator import aggregate_surveys

from golden_frames import make_normalized_df, survey_rows


def make_survey_df():
    return aggregate_surveys(make_normalized_df())


def test_scenario_b_two_depths_one_site_day():
    out = aggregate_sites(make_survey_df())
    site = out[out["reef_id"] == "100"].iloc[0]
    assert site["coral"] == 20.0
    assert site["n_surveys"] == 2
    assert site["coral_std"] == pytest.approx(3.54)
    assert site["depth_m"] == 7.5


def test_single_survey_std_is_zero_not_nan():
    out = aggregate_sites(make_survey_df())
    site = out[out["reef_id"] == "200"].iloc[0]
    assert site["coral"] == 10.0
    assert site["coral_std"] == 0.0
    assert site["n_surveys"] == 1
    assert site["depth_m"] == 7.0
    assert not out["coral_std"].isna().any()


def test_one_row_per_site_day_and_recheck_is_clean():
    out = aggregate_sites(make_survey_df())
    assert len(out) == 2
    assert find_duplicate_site_days(out).empty
    assert_unique_site_days(out)


def test_representative_is_a_single_source_row():
    survey_df = make_survey_df()
    out = aggregate_sites(survey_df)
    for idx, row in out.iterrows():
        source = survey_df.loc[idx]
        for col in ("reef_name", "depth", "segment_code", "total", "latitude_seconds"):
            assert row[col] == source[col]


def test_first_seen_row_is_kept():
    survey_df = make_survey_df()
    out = aggregate_sites(survey_df)
    first_100 = survey_df[survey_df["reef_id"] == "100"].index[0]
    assert first_100 in out.index


def test_identical_survey_percents_count_once():
    rows = survey_rows([10, 8, 12, 6], depth="5") + survey_rows([10, 8, 12, 6], depth="10")
    out = aggregate_sites(aggregate_surveys(normalize_columns(pd.DataFrame(rows))))
    assert len(out) == 1
    assert out.iloc[0]["n_surveys"] == 1
    assert out.iloc[0]["coral"] == 22.5
    assert out.iloc[0]["coral_std"] == 0.0


def test_derive_site_fields_rounds_to_two_places():
    surveys = pd.DataFrame({"perc_survey": [10.0, 20.0, 25.0], "depth": [3.0, 5.0, 6.0]})
    fields = derive_site_fields(("100", "01-15-18"), surveys)
    assert fields["coral"] == 18.33
    assert fields["depth_m"] == 4.67
    assert fields["coral_std"] == 7.64
    assert fields["n_surveys"] == 3


def test_assert_unique_site_days_raises_on_duplicates():
    df = pd.DataFrame({"reef_id": ["100", "100", "200"], "date": ["01-15-18", "01-15-18", "03-02-19"]})
    assert len(find_duplicate_site_days(df)) == 2
    with pytest.raises(InvariantViolationError) as exc:
        assert_unique_site_days(df)
    assert ("100", "01-15-18") in exc.value.context["keys"]


def test_empty_survey_table():
    empty = make_survey_df().iloc[0:0]
    out = aggregate_sites(empty)
    assert out.empty
    assert "coral" in out.columns
