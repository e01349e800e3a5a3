"""
Standards Catalog
app/grading/catalog.py

Loads the static grading standards file once and serves read-only lookups.

File format: a JSON list of Standard trees, e.g.
    [
      {"id": 1, "name": "Standard A", "standardData": [
          {"key": "wholegrain", "name": "Whole grain", "minLength": 7,
           "maxLength": 99, "conditionMin": "GTE", "conditionMax": "LT", ...}
      ]}
    ]
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

import structlog
from pydantic import TypeAdapter, ValidationError

from app.config import settings
from app.core.exceptions import CatalogLoadError
from app.models.standard import Standard

logger = structlog.get_logger(__name__)

_STANDARDS_ADAPTER = TypeAdapter(List[Standard])


def load(path: Path) -> Tuple[Standard, ...]:
    """
    Load and validate the standards catalog.

    Args:
        path: Path to the standards JSON file.

    Returns:
        Tuple of top-level Standards in file order.

    Raises:
        CatalogLoadError: If the file is missing, is not JSON, or is not a
            list of valid Standard objects.
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise CatalogLoadError(str(path), f"cannot read file: {e}") from e

    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CatalogLoadError(str(path), f"invalid JSON: {e}") from e

    try:
        standards = _STANDARDS_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise CatalogLoadError(
            str(path), f"invalid structure ({e.error_count()} errors)"
        ) from e

    return tuple(standards)


class StandardsCatalog:
    """Immutable, process-wide collection of grading standards."""

    def __init__(self, standards: Tuple[Standard, ...] = ()):
        self._standards = tuple(standards)

    @property
    def standards(self) -> Tuple[Standard, ...]:
        return self._standards

    def __len__(self) -> int:
        return len(self._standards)

    def find(self, name: str) -> Optional[Standard]:
        """Return the first top-level standard whose name equals ``name``."""
        for standard in self._standards:
            if standard.name == name:
                return standard
        return None

    def names(self) -> List[Tuple[int, str]]:
        """(id, name) pairs for the standard picker."""
        return [(s.id, s.name) for s in self._standards]

    @classmethod
    def from_file(cls, path: Path) -> "StandardsCatalog":
        """
        Build a catalog from ``path``, degrading to an empty catalog on failure.

        Load failures are logged, never raised: lookups against an empty
        catalog report every standard as not found.
        """
        try:
            standards = load(path)
        except CatalogLoadError as e:
            logger.error(
                "standards_catalog_load_failed",
                source=e.source,
                reason=e.reason,
            )
            return cls(())

        logger.info(
            "standards_catalog_loaded",
            source=str(path),
            standards=len(standards),
            criteria=sum(len(s.standard_data) for s in standards),
        )
        return cls(standards)


@lru_cache
def get_standards_catalog() -> StandardsCatalog:
    """Process-wide catalog singleton, loaded on first use."""
    return StandardsCatalog.from_file(settings.STANDARDS_FILE)
