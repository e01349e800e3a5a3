# tests/conftest.py

"""
Pytest Fixtures - Shared test configurations and data for grading, services and APIs

CATALOG REFERENCE (data/standards.json):
- 1: "Thai Hom Mali Rice 100%"   wholegrain 7-99 / broken_rice1 3.5-7 / broken_rice2 0-3.5
- 2: "White Rice 100% Grade A"   wholegrain >6.6 / head_rice 5.3-6.6 / broken_rice1 / broken_rice2
- 3: "White Rice 5%"             wholegrain / broken_rice1 / small_broken (GT 0)
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.core.dependencies import get_catalog, get_inspection_service
from app.grading.catalog import StandardsCatalog, load
from app.main import app
from app.models.standard import Grain, Standard
from app.services.inspection_service import InspectionService


# =============================================================================
# IN-MEMORY REPOSITORY DOUBLE
# =============================================================================

class FakeInspectionRepository:
    """Mirrors InspectionRepository's contract over a dict."""

    def __init__(self):
        self.documents: Dict[str, Dict[str, Any]] = {}

    def create(self, document: Dict[str, Any]) -> Dict[str, Any]:
        self.documents[document["inspection_id"]] = document
        return document

    def get_by_inspection_id(self, inspection_id: str) -> Optional[Dict[str, Any]]:
        return self.documents.get(inspection_id)

    def get_all(
        self,
        page: int = 1,
        page_size: int = 10,
        inspection_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> Tuple[List[Dict[str, Any]], int]:
        rows = list(self.documents.values())
        if inspection_id:
            rows = [r for r in rows if r["inspection_id"] == inspection_id]
        if date_from and date_to:
            rows = [r for r in rows if date_from <= r["create_date"] <= date_to]
        rows.sort(key=lambda r: r["create_date"], reverse=True)
        offset = (page - 1) * page_size
        return rows[offset:offset + page_size], len(rows)

    def delete_many(self, inspection_ids: Sequence[str]) -> int:
        deleted = 0
        for inspection_id in dict.fromkeys(inspection_ids):
            if self.documents.pop(inspection_id, None) is not None:
                deleted += 1
        return deleted


# =============================================================================
# CATALOG / GRAIN FIXTURES
# =============================================================================

@pytest.fixture(scope="session")
def catalog() -> StandardsCatalog:
    """Catalog built from the shipped standards file."""
    return StandardsCatalog(load(settings.STANDARDS_FILE))


@pytest.fixture
def inclusive_standard() -> Standard:
    """One criterion 5 <= length <= 10."""
    return Standard.model_validate({
        "id": 100,
        "key": "test_inclusive",
        "name": "Inclusive Test Standard",
        "standardData": [
            {"id": 101, "key": "mid", "name": "Mid length", "minLength": 5, "maxLength": 10,
             "conditionMin": "GTE", "conditionMax": "LTE", "value": 0},
        ],
    })


@pytest.fixture
def strict_upper_standard() -> Standard:
    """One criterion 5 <= length < 10."""
    return Standard.model_validate({
        "id": 200,
        "key": "test_strict_upper",
        "name": "Strict Upper Test Standard",
        "standardData": [
            {"id": 201, "key": "mid", "name": "Mid length", "minLength": 5, "maxLength": 10,
             "conditionMin": "GTE", "conditionMax": "LT", "value": 0},
        ],
    })


def make_grains(lengths, grain_type="white") -> List[Grain]:
    return [Grain(length=length, weight=0.02, shape="wholegrain", type=grain_type) for length in lengths]


@pytest.fixture
def grains_factory():
    return make_grains


# =============================================================================
# REQUEST FIXTURES
# =============================================================================

@pytest.fixture
def valid_inspection_data() -> Dict[str, Any]:
    """Create-inspection body against Thai Hom Mali Rice 100%."""
    return {
        "name": "Lot 42 morning sample",
        "standardName": "Thai Hom Mali Rice 100%",
        "note": "Silo 3",
        "price": 15000,
        "samplingPoint": ["Front End", "Back End"],
        "samplingDate": "2024-03-01T08:30:00Z",
        "raw": {
            "requestID": "req-0001",
            "imageURL": "https://example.com/sample.jpg",
            "grains": [
                {"length": 7.5, "weight": 0.02, "shape": "wholegrain", "type": "white"},
                {"length": 8.0, "weight": 0.02, "shape": "wholegrain", "type": "white"},
                {"length": 5.0, "weight": 0.01, "shape": "broken", "type": "yellow"},
                {"length": 2.0, "weight": 0.01, "shape": "broken", "type": "chalky"},
            ],
        },
    }


# =============================================================================
# FASTAPI TEST CLIENT FIXTURES
# =============================================================================

@pytest.fixture
def fake_repository() -> FakeInspectionRepository:
    return FakeInspectionRepository()


@pytest.fixture
def inspection_service(fake_repository, catalog) -> InspectionService:
    return InspectionService(repository=fake_repository, catalog=catalog, cache=None)


@pytest.fixture
def client(inspection_service, catalog):
    """TestClient with the inspection store replaced by an in-memory double."""
    app.dependency_overrides[get_inspection_service] = lambda: inspection_service
    app.dependency_overrides[get_catalog] = lambda: catalog
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def created_at():
    return datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)
