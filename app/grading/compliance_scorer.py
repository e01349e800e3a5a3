# app/grading/compliance_scorer.py
"""
Compliance Scorer
-----------------
Scores a grain batch against the sub-criteria of one grading standard.

For each child criterion c of the selected standard (one level deep only):
    upper = length <  c.maxLength   if c.conditionMax == "LT"  else  length <= c.maxLength
    lower = length >  c.minLength   if c.conditionMin == "GT"  else  length >= c.minLength
    c.value = round(count(upper and lower) / len(grains) × 100, 2)

Catalog objects are never modified; every call returns fresh criterion copies.
"""
from typing import List, Sequence

import structlog

from app.core.exceptions import EmptyBatchError
from app.grading.utils import percentage, require_measurement
from app.models.enumerations import BoundCondition
from app.models.standard import Grain, Standard

logger = structlog.get_logger(__name__)


def within_upper_bound(length: float, max_length: float, condition_max: str) -> bool:
    if condition_max == BoundCondition.LT.value:
        return length < max_length
    return length <= max_length


def within_lower_bound(length: float, min_length: float, condition_min: str) -> bool:
    if condition_min == BoundCondition.GT.value:
        return length > min_length
    return length >= min_length


class ComplianceScorer:
    """Compute per-criterion compliance percentages for a grain batch."""

    def score(self, standard: Standard, grains: Sequence[Grain]) -> List[Standard]:
        """
        Args:
            standard: Top-level standard selected from the catalog.
            grains: Raw grain measurements; must be non-empty.

        Returns:
            Scored copies of ``standard.standard_data`` in the same order,
            each with ``value`` in [0, 100] rounded to 2 decimal places.

        Raises:
            EmptyBatchError: If ``grains`` is empty.
            InvalidMeasurementError: If a grain length or criterion bound is
                missing, non-numeric, non-finite or negative.
        """
        if not grains:
            raise EmptyBatchError()

        lengths = [
            require_measurement(grain.length, f"grains[{i}].length")
            for i, grain in enumerate(grains)
        ]

        scored: List[Standard] = []
        for criterion in standard.standard_data:
            min_length = require_measurement(
                criterion.min_length, f"{criterion.key or criterion.name}.minLength"
            )
            max_length = require_measurement(
                criterion.max_length, f"{criterion.key or criterion.name}.maxLength"
            )

            count = sum(
                1
                for length in lengths
                if within_upper_bound(length, max_length, criterion.condition_max)
                and within_lower_bound(length, min_length, criterion.condition_min)
            )

            scored.append(
                criterion.model_copy(update={"value": percentage(count, len(lengths))})
            )

        logger.info(
            "criteria_scored",
            standard_id=standard.id,
            standard_name=standard.name,
            grains=len(lengths),
            values={c.key or c.name: c.value for c in scored},
        )

        return scored
