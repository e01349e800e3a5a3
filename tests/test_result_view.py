# tests/test_result_view.py

"""
Result View Tests - bound labels, percentage strings and defect rows
"""

from datetime import datetime, timezone

import pytest

from app.core.exceptions import EmptyBatchError, InvalidMeasurementError
from app.grading.defects import TOTAL_ROW, normalize_grain_type, summarize_defects
from app.grading.formatting import format_bound_label, format_number, format_percentage
from app.models.inspection import InspectionResponse
from app.models.standard import Grain, Standard
from app.services.inspection_service import build_result_view


def criterion(min_length, max_length):
    return Standard(id=1, key="c", name="C", min_length=min_length, max_length=max_length)



# FORMATTING


class TestFormatting:
    """Tests for bound labels and percentage strings."""

    @pytest.mark.parametrize("value, expected", [
        (7.0, "7"),
        (0, "0"),
        (3.5, "3.5"),
        (6.6, "6.6"),
        (99.0, "99"),
    ])
    def test_format_number(self, value, expected):
        assert format_number(value) == expected

    def test_wide_range_is_open_ended(self):
        assert format_bound_label(criterion(7, 99)) == ">= 7"

    def test_narrow_range(self):
        assert format_bound_label(criterion(3.5, 7)) == "3.5 - 7"

    def test_width_of_exactly_fifty_is_a_range(self):
        assert format_bound_label(criterion(0, 50)) == "0 - 50"

    def test_missing_bound_rejected(self):
        with pytest.raises(InvalidMeasurementError):
            format_bound_label(Standard(id=1, name="Open", min_length=1))

    @pytest.mark.parametrize("value, expected", [
        (60, "60.00 %"),
        (33.33, "33.33 %"),
        (0.0, "0.00 %"),
        (100.0, "100.00 %"),
    ])
    def test_format_percentage(self, value, expected):
        assert format_percentage(value) == expected



# DEFECT SUMMARY


class TestDefectSummary:
    """Tests for summarize_defects()."""

    def test_rows_in_order_then_total(self):
        rows = summarize_defects([Grain(length=5, type="white")])
        assert [r["name"] for r in rows] == [
            "yellow", "paddy", "damaged", "glutinous", "chalky", "red", TOTAL_ROW,
        ]
        assert all(r["actual"] == 0.0 for r in rows)

    def test_percentages(self):
        grains = [
            Grain(length=5, type="yellow"),
            Grain(length=5, type="Yellow"),
            Grain(length=5, type="damage"),
            Grain(length=5, type="white"),
        ]
        rows = {r["name"]: r["actual"] for r in summarize_defects(grains)}
        assert rows["yellow"] == 50.0
        assert rows["damaged"] == 25.0
        assert rows[TOTAL_ROW] == 75.0

    def test_normalize_grain_type(self):
        assert normalize_grain_type(" Damage ") == "damaged"
        assert normalize_grain_type("RED") == "red"
        assert normalize_grain_type(None) == ""

    def test_empty_batch_rejected(self):
        with pytest.raises(EmptyBatchError):
            summarize_defects([])



# RESULT VIEW


class TestBuildResultView:
    """Tests for build_result_view()."""

    @pytest.fixture
    def inspection(self, catalog):
        standard = catalog.find("Thai Hom Mali Rice 100%")
        scored = [
            c.model_copy(update={"value": v})
            for c, v in zip(standard.standard_data, [60.0, 33.33, 6.67])
        ]
        return InspectionResponse(
            inspection_id="abc123",
            name="Lot 1",
            standard_id=standard.id,
            standard_name=standard.name,
            standard_data=scored,
            total_sample=15,
            defect_rice=[{"name": "chalky", "actual": 6.67}, {"name": TOTAL_ROW, "actual": 6.67}],
            sampling_point=["Front End"],
            create_date=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )

    def test_composition_rows(self, inspection):
        view = build_result_view(inspection)
        assert [(c.name, c.standard, c.actual) for c in view.composition] == [
            ("Whole grain", ">= 7", "60.00 %"),
            ("Broken rice C1", "3.5 - 7", "33.33 %"),
            ("Broken rice C2", "0 - 3.5", "6.67 %"),
        ]

    def test_defect_rows_default_to_zero(self, inspection):
        view = build_result_view(inspection)
        rows = {r.name: r.actual for r in view.defect_rice}
        assert rows["chalky"] == "6.67 %"
        assert rows["yellow"] == "0.00 %"
        assert rows[TOTAL_ROW] == "6.67 %"
        assert len(view.defect_rice) == 7

    def test_metadata_carried(self, inspection):
        view = build_result_view(inspection)
        assert view.inspection_id == "abc123"
        assert view.standard == "Thai Hom Mali Rice 100%"
        assert view.total_sample == 15
        assert view.sampling_point == ["Front End"]
