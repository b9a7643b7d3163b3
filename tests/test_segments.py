"""
Tests for Segment Definitions
"""

import numpy as np
import pandas as pd
import pytest

from chest_volume.exceptions import MalformedInputError, MissingSegmentError
from chest_volume.segments import normalize_segments, segments_from_table, select_segments


def test_segments_from_table():
    """Rows become segments; blank and missing cells are ignored."""
    table = pd.DataFrame([
        ["UL", "M01", "M02", "M04", np.nan],
        ["UR", "M02", "M03", "", None],
        [np.nan, "M09", None, None, None],
    ])

    segments = segments_from_table(table)

    assert segments == {"UL": ("M01", "M02", "M04"), "UR": ("M02", "M03")}


def test_segments_from_table_too_few_columns():
    with pytest.raises(MalformedInputError, match="at least two columns"):
        segments_from_table(pd.DataFrame([["UL"], ["UR"]]))


def test_segments_from_table_duplicate_names():
    table = pd.DataFrame([["UL", "M01"], ["UL", "M02"]])

    with pytest.raises(MalformedInputError, match="Duplicate"):
        segments_from_table(table)


def test_normalize_segments():
    segments = normalize_segments({" UL ": ["M01", " M02", "M01", ""], "single": "M07"})

    assert segments == {"UL": ("M01", "M02"), "single": ("M07",)}


def test_normalize_rejects_blank_name():
    with pytest.raises(MalformedInputError):
        normalize_segments({"": ["M01"]})


def test_select_segments():
    segments = {"UL": ["M01"], "UR": ["M02"], "LL": ["M03"]}

    assert select_segments(segments, ["LL", "UL"]) == {"LL": ("M03",), "UL": ("M01",)}
    assert select_segments(segments, "UR") == {"UR": ("M02",)}
    assert list(select_segments(segments)) == ["UL", "UR", "LL"]


def test_select_segments_strips_requested_names():
    segments = {" A ": ["x"], "B": ["y"]}

    assert select_segments(segments, [" A "]) == {"A": ("x",)}
    assert select_segments(segments, " B") == {"B": ("y",)}


def test_select_missing_segment():
    with pytest.raises(MissingSegmentError) as exc_info:
        select_segments({"UL": ["M01"]}, ["LR"])

    assert exc_info.value.segment == "LR"
    assert "LR" in str(exc_info.value)
