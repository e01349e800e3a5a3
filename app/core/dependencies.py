"""
Dependencies - Rice Inspection Grading API
app/core/dependencies.py

FastAPI dependency injection for repositories, the standards catalog and services.
"""

from functools import lru_cache

from app.grading.catalog import StandardsCatalog, get_standards_catalog
from app.repositories.inspection_repository import InspectionRepository
from app.services.cache import get_cache
from app.services.inspection_service import InspectionService


@lru_cache()
def get_inspection_repository() -> InspectionRepository:
    """Get cached InspectionRepository instance."""
    return InspectionRepository()


def get_catalog() -> StandardsCatalog:
    """Get the process-wide standards catalog."""
    return get_standards_catalog()


def get_inspection_service() -> InspectionService:
    """Build an InspectionService over the shared repository, catalog and cache."""
    return InspectionService(
        repository=get_inspection_repository(),
        catalog=get_catalog(),
        cache=get_cache(),
    )
