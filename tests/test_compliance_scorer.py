# tests/test_compliance_scorer.py

"""
Compliance Scorer Tests - per-criterion percentages, bound semantics and errors
"""

import pytest

from app.core.exceptions import EmptyBatchError, InvalidMeasurementError
from app.grading.compliance_scorer import (
    ComplianceScorer,
    within_lower_bound,
    within_upper_bound,
)
from app.models.standard import Grain, Standard


@pytest.fixture
def scorer():
    return ComplianceScorer()



# BOUND PREDICATES


class TestBoundPredicates:
    """Tests for the upper/lower bound comparisons."""

    def test_lt_is_strict(self):
        assert within_upper_bound(9.99, 10, "LT") is True
        assert within_upper_bound(10, 10, "LT") is False

    def test_lte_is_inclusive(self):
        assert within_upper_bound(10, 10, "LTE") is True
        assert within_upper_bound(10.01, 10, "LTE") is False

    def test_gt_is_strict(self):
        assert within_lower_bound(5, 5, "GT") is False
        assert within_lower_bound(5.01, 5, "GT") is True

    def test_gte_is_inclusive(self):
        assert within_lower_bound(5, 5, "GTE") is True
        assert within_lower_bound(4.99, 5, "GTE") is False

    def test_unknown_condition_is_inclusive(self):
        """Anything other than LT/GT compares inclusively."""
        assert within_upper_bound(10, 10, "WHATEVER") is True
        assert within_lower_bound(5, 5, "") is True



# SCORING


class TestComplianceScorer:
    """Tests for ComplianceScorer.score()."""

    def test_inclusive_bounds_scenario(self, scorer, inclusive_standard, grains_factory):
        """Lengths 5, 7 and 10 qualify for 5-10 inclusive: 3 of 5."""
        scored = scorer.score(inclusive_standard, grains_factory([5, 7, 10, 11, 4]))
        assert len(scored) == 1
        assert scored[0].value == 60.0

    def test_strict_upper_bound_scenario(self, scorer, strict_upper_standard, grains_factory):
        """Only 9 qualifies for 5 <= length < 10: 1 of 3."""
        scored = scorer.score(strict_upper_standard, grains_factory([10, 10, 9]))
        assert scored[0].value == 33.33

    def test_half_up_rounding(self, scorer, inclusive_standard, grains_factory):
        """2/3 = 66.666... rounds to 66.67."""
        scored = scorer.score(inclusive_standard, grains_factory([6, 7, 20]))
        assert scored[0].value == 66.67

    def test_all_and_none_qualify(self, scorer, inclusive_standard, grains_factory):
        assert scorer.score(inclusive_standard, grains_factory([5, 6, 10]))[0].value == 100.0
        assert scorer.score(inclusive_standard, grains_factory([1, 2, 30]))[0].value == 0.0

    def test_criteria_scored_independently(self, scorer, catalog, grains_factory):
        """Each criterion sees the whole batch; order follows the catalog."""
        standard = catalog.find("Thai Hom Mali Rice 100%")
        scored = scorer.score(standard, grains_factory([7.5, 8.0, 5.0, 2.0]))

        assert [c.key for c in scored] == ["wholegrain", "broken_rice1", "broken_rice2"]
        assert [c.value for c in scored] == [50.0, 25.0, 25.0]

    def test_other_fields_pass_through(self, scorer, catalog, grains_factory):
        standard = catalog.find("White Rice 100% Grade A")
        scored = scorer.score(standard, grains_factory([6.0]))

        for original, result in zip(standard.standard_data, scored):
            assert result.model_dump(exclude={"value"}) == original.model_dump(exclude={"value"})

    def test_catalog_is_not_mutated(self, scorer, catalog, grains_factory):
        standard = catalog.find("Thai Hom Mali Rice 100%")
        before = standard.model_dump()

        scored = scorer.score(standard, grains_factory([7.5, 8.0]))

        assert standard.model_dump() == before
        assert all(c.value == 0 for c in standard.standard_data)
        assert scored[0] is not standard.standard_data[0]

    def test_does_not_recurse_into_grandchildren(self, scorer, grains_factory):
        standard = Standard.model_validate({
            "id": 1,
            "name": "Nested",
            "standardData": [
                {"id": 2, "name": "Child", "minLength": 0, "maxLength": 10,
                 "standardData": [
                     {"id": 3, "name": "Grandchild", "minLength": 0, "maxLength": 10},
                 ]},
            ],
        })
        scored = scorer.score(standard, grains_factory([5]))

        assert scored[0].value == 100.0
        assert scored[0].standard_data[0].value == 0.0

    def test_standard_without_criteria(self, scorer, grains_factory):
        """A matched standard with no criteria scores to an empty list."""
        standard = Standard(id=9, name="Empty criteria")
        assert scorer.score(standard, grains_factory([5])) == []

    def test_shape_not_consulted(self, scorer, grains_factory):
        standard = Standard.model_validate({
            "id": 1,
            "name": "Shape restricted",
            "standardData": [
                {"id": 2, "name": "Broken only", "shape": ["broken"], "minLength": 0, "maxLength": 10},
            ],
        })
        grains = [Grain(length=5, shape="wholegrain")]
        assert scorer.score(standard, grains)[0].value == 100.0

    def test_deterministic(self, scorer, catalog, grains_factory):
        standard = catalog.find("White Rice 5%")
        grains = grains_factory([0.5, 3.5, 7.0, 6.9, 12.0])
        assert scorer.score(standard, grains) == scorer.score(standard, grains)



# ERRORS


class TestComplianceScorerErrors:
    """Tests for rejected input."""

    def test_empty_batch_rejected(self, scorer, inclusive_standard):
        with pytest.raises(EmptyBatchError):
            scorer.score(inclusive_standard, [])

    def test_negative_length_rejected(self, scorer, inclusive_standard):
        grains = [Grain.model_construct(length=-1.0, weight=0.0, shape="", type="")]
        with pytest.raises(InvalidMeasurementError) as exc_info:
            scorer.score(inclusive_standard, grains)
        assert exc_info.value.field == "grains[0].length"

    def test_non_numeric_length_rejected(self, scorer, inclusive_standard):
        grains = [
            Grain(length=5),
            Grain.model_construct(length="long", weight=0.0, shape="", type=""),
        ]
        with pytest.raises(InvalidMeasurementError) as exc_info:
            scorer.score(inclusive_standard, grains)
        assert exc_info.value.field == "grains[1].length"

    def test_missing_bound_rejected(self, scorer, grains_factory):
        standard = Standard.model_validate({
            "id": 1,
            "name": "No max",
            "standardData": [{"id": 2, "key": "open", "name": "Open", "minLength": 1}],
        })
        with pytest.raises(InvalidMeasurementError) as exc_info:
            scorer.score(standard, grains_factory([5]))
        assert exc_info.value.field == "open.maxLength"
