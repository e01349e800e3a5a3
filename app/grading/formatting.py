"""
Result formatting helpers for the inspection result view.
"""

from app.grading.utils import require_measurement
from app.models.standard import Standard

# Ranges wider than this are open-ended in practice ("99" style upper bounds)
OPEN_RANGE_WIDTH = 50


def format_number(value: float) -> str:
    """Render a bound the way the catalog writes it: 7.0 -> "7", 6.5 -> "6.5"."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_bound_label(criterion: Standard) -> str:
    """
    ">= {min}" when the range is wider than OPEN_RANGE_WIDTH, else "{min} - {max}".
    """
    label = criterion.key or criterion.name
    min_length = require_measurement(criterion.min_length, f"{label}.minLength")
    max_length = require_measurement(criterion.max_length, f"{label}.maxLength")

    if max_length - min_length > OPEN_RANGE_WIDTH:
        return f">= {format_number(min_length)}"
    return f"{format_number(min_length)} - {format_number(max_length)}"


def format_percentage(value: float) -> str:
    """60 -> "60.00 %"."""
    return f"{value:.2f} %"
