import numpy as np
import pandas as pd
import pytest

from reef_pipeline.errors import TypeCoercionError
from reef_pipeline.utils import coerce_numeric, group_rows


def test_group_rows_first_seen_order_and_index():
    df = pd.DataFrame({"site": ["b", "a", "b", "a"], "v": [1, 2, 3, 4]}, index=[10, 11, 12, 13])
    groups = group_rows(df, ["site"])
    assert [k for k, _ in groups] == [("b",), ("a",)]
    assert list(groups[0][1].index) == [10, 12]
    assert list(groups[1][1]["v"]) == [2, 4]


def test_group_rows_keeps_missing_keys_together():
    df = pd.DataFrame({"site": ["a", None, np.nan], "v": [1, 2, 3]})
    groups = dict(group_rows(df, ["site"]))
    assert list(groups[(None,)]["v"]) == [2, 3]


def test_coerce_numeric_strips_and_converts():
    s = pd.Series([" 5", "10 ", "7.5"], name="depth")
    assert list(coerce_numeric(s, "test")) == [5.0, 10.0, 7.5]


def test_coerce_numeric_int_dtype():
    s = pd.Series(["15", "02"], name="day")
    out = coerce_numeric(s, "test", dtype="int64")
    assert out.dtype == "int64"
    assert list(out) == [15, 2]


@pytest.mark.parametrize("bad", ["abc", "", None])
def test_coerce_numeric_rejects_bad_or_missing(bad):
    s = pd.Series(["1", bad], name="total")
    with pytest.raises(TypeCoercionError) as exc:
        coerce_numeric(s, "test")
    assert exc.value.context == {"row": 1, "column": "total", "bad_rows": 1}


def test_coerce_numeric_rejects_fractional_int():
    with pytest.raises(TypeCoercionError):
        coerce_numeric(pd.Series(["1.5"], name="day"), "test", dtype="int64")


def test_coerce_numeric_allow_missing():
    out = coerce_numeric(pd.Series(["1", None], name="x"), "test", allow_missing=True)
    assert out.iloc[0] == 1.0
    assert np.isnan(out.iloc[1])
