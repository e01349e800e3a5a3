"""
Defect Summary
app/grading/defects.py

Breaks a grain batch down by defect type for the inspection result view.
Each defect row is the share of grains of that type; "Total" is the share of
grains carrying any defect type. Non-defect types (e.g. "white") count toward
no row.
"""

from collections import Counter
from typing import Dict, List, Sequence

from app.core.exceptions import EmptyBatchError
from app.grading.utils import percentage
from app.models.enumerations import DefectType
from app.models.standard import Grain

TOTAL_ROW = "Total"

# Analyser spellings that map onto a defect type
_TYPE_ALIASES: Dict[str, str] = {
    "damage": DefectType.DAMAGED.value,
}


def normalize_grain_type(grain_type: str) -> str:
    key = (grain_type or "").strip().lower()
    return _TYPE_ALIASES.get(key, key)


def summarize_defects(grains: Sequence[Grain]) -> List[Dict[str, float]]:
    """
    Args:
        grains: Raw grain measurements; must be non-empty.

    Returns:
        Rows ``{"name": ..., "actual": pct}`` in DefectType order, then Total.
    """
    if not grains:
        raise EmptyBatchError()

    counts = Counter(normalize_grain_type(g.type) for g in grains)
    total = len(grains)

    rows = []
    defect_count = 0
    for defect in DefectType:
        n = counts.get(defect.value, 0)
        defect_count += n
        rows.append({"name": defect.value, "actual": percentage(n, total)})

    rows.append({"name": TOTAL_ROW, "actual": percentage(defect_count, total)})
    return rows
