"""
Grader
app/grading/grader.py

Single grading operation behind create-inspection: select the standard by
name, then score the grain batch against it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

import structlog

from app.core.exceptions import StandardNotFoundError
from app.grading.catalog import StandardsCatalog
from app.grading.compliance_scorer import ComplianceScorer
from app.grading.defects import summarize_defects
from app.models.standard import Grain, Standard

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GradingResult:
    """Output of grade_inspection()."""
    standard_id: int
    standard_name: str
    standard_data: List[Standard]       # scored sub-criteria, catalog order
    total_sample: int
    defect_rice: List[Dict[str, float]] = field(default_factory=list)


def grade_inspection(
    catalog: StandardsCatalog,
    standard_name: str,
    grains: Sequence[Grain],
    scorer: ComplianceScorer = None,
) -> GradingResult:
    """
    Raises:
        StandardNotFoundError: No top-level standard named ``standard_name``.
        EmptyBatchError: ``grains`` is empty.
        InvalidMeasurementError: A length or bound is unusable.
    """
    standard = catalog.find(standard_name)
    if standard is None:
        logger.warning(
            "standard_not_found",
            standard_name=standard_name,
            catalog_size=len(catalog),
        )
        raise StandardNotFoundError(standard_name)

    scorer = scorer or ComplianceScorer()
    scored = scorer.score(standard, grains)

    return GradingResult(
        standard_id=standard.id,
        standard_name=standard.name,
        standard_data=scored,
        total_sample=len(grains),
        defect_rice=summarize_defects(grains),
    )
