"""
Inspection Service - create / read / list / delete orchestration
app/services/inspection_service.py

Create flow for a single inspection:

  1. Look up the requested standard in the in-memory catalog
  2. Score the grain batch against its sub-criteria (ComplianceScorer)
  3. Summarize defect grains by type
  4. Persist the scored document to Snowflake (INSPECTIONS)
  5. Prime the Redis cache with the stored document

Reads replay the stored scored tree; nothing is re-graded after creation.
"""

import logging
import math
from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

import redis

from app.config import settings
from app.grading.catalog import StandardsCatalog
from app.grading.compliance_scorer import ComplianceScorer
from app.grading.defects import TOTAL_ROW
from app.grading.formatting import format_bound_label, format_percentage
from app.grading.grader import grade_inspection
from app.models.inspection import (
    CompositionItem,
    DefectRiceRow,
    InspectionCreate,
    InspectionResponse,
    InspectionResultResponse,
    PaginatedInspectionResponse,
)
from app.models.enumerations import DefectType
from app.repositories.inspection_repository import InspectionRepository
from app.services.cache import TTL_INSPECTION, get_inspection_cache_key
from app.services.redis_cache import RedisCache

logger = logging.getLogger(__name__)


class InspectionService:
    """
    Orchestrates grading and persistence of inspections.

    Reads from:
      - StandardsCatalog (in-memory, immutable)
      - INSPECTIONS (Snowflake), fronted by Redis

    Writes to:
      - INSPECTIONS
    """

    def __init__(
        self,
        repository: InspectionRepository,
        catalog: StandardsCatalog,
        cache: Optional[RedisCache] = None,
        scorer: Optional[ComplianceScorer] = None,
        page_size: Optional[int] = None,
    ):
        self.repository = repository
        self.catalog = catalog
        self.cache = cache
        self.scorer = scorer or ComplianceScorer()
        self.page_size = page_size or settings.HISTORY_PAGE_SIZE

    # -------------------------
    # Create
    # -------------------------
    def create_inspection(self, request: InspectionCreate) -> InspectionResponse:
        """
        Grade the submitted batch and persist the inspection.

        Raises:
            StandardNotFoundError, EmptyBatchError, InvalidMeasurementError:
                grading failed, nothing is persisted.
            RepositoryException: the document could not be stored.
        """
        result = grade_inspection(
            self.catalog, request.standard_name, request.raw.grains, self.scorer
        )

        inspection = InspectionResponse(
            inspection_id=uuid4().hex,
            name=request.name,
            standard_id=result.standard_id,
            standard_name=result.standard_name,
            standard_data=result.standard_data,
            total_sample=result.total_sample,
            defect_rice=result.defect_rice,
            note=request.note,
            price=request.price,
            sampling_point=[p.value for p in request.sampling_point],
            sampling_date=request.sampling_date,
            image_link=request.raw.image_url,
            create_date=datetime.now(timezone.utc),
        )

        self.repository.create(self._to_document(inspection))
        logger.info(
            "Created inspection %s (standard=%s, grains=%d)",
            inspection.inspection_id,
            inspection.standard_name,
            inspection.total_sample,
        )

        self._cache_set(inspection)
        return inspection

    # -------------------------
    # Read
    # -------------------------
    def get_inspection(self, inspection_id: str) -> Optional[InspectionResponse]:
        """Stored inspection, or None when no inspection has that ID."""
        cached = self._cache_get(inspection_id)
        if cached:
            return cached

        row = self.repository.get_by_inspection_id(inspection_id)
        if not row:
            return None

        inspection = InspectionResponse.model_validate(row)
        self._cache_set(inspection)
        return inspection

    def get_inspection_result(self, inspection_id: str) -> Optional[InspectionResultResponse]:
        """Result view with bound labels and percentage strings rendered."""
        inspection = self.get_inspection(inspection_id)
        if inspection is None:
            return None
        return build_result_view(inspection)

    def list_inspections(
        self,
        page: int = 1,
        inspection_id: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
    ) -> PaginatedInspectionResponse:
        rows, total = self.repository.get_all(
            page=page,
            page_size=self.page_size,
            inspection_id=inspection_id,
            date_from=date_from,
            date_to=date_to,
        )
        return PaginatedInspectionResponse(
            total=total,
            current_page=page,
            total_pages=math.ceil(total / self.page_size) if total else 0,
            data=[InspectionResponse.model_validate(row) for row in rows],
        )

    # -------------------------
    # Delete
    # -------------------------
    def delete_inspections(self, inspection_ids: Sequence[str]) -> int:
        """Delete by inspectionID; returns the number of deleted inspections."""
        deleted = self.repository.delete_many(inspection_ids)
        self._cache_delete(inspection_ids)
        logger.info("Deleted %d of %d requested inspections", deleted, len(inspection_ids))
        return deleted

    # -------------------------
    # Helpers
    # -------------------------
    @staticmethod
    def _to_document(inspection: InspectionResponse) -> dict:
        """Repository document; scored criteria keep their camelCase JSON shape."""
        document = inspection.model_dump(exclude={"standard_data"})
        document["standard_data"] = [
            c.model_dump(mode="json", by_alias=True) for c in inspection.standard_data
        ]
        return document

    def _cache_get(self, inspection_id: str) -> Optional[InspectionResponse]:
        if not self.cache:
            return None
        try:
            return self.cache.get(get_inspection_cache_key(inspection_id), InspectionResponse)
        except redis.RedisError as e:
            logger.warning("Cache read failed for inspection %s: %s", inspection_id, e)
            return None

    def _cache_set(self, inspection: InspectionResponse) -> None:
        if not self.cache:
            return
        try:
            self.cache.set(
                get_inspection_cache_key(inspection.inspection_id), inspection, TTL_INSPECTION
            )
        except redis.RedisError as e:
            logger.warning("Cache write failed for inspection %s: %s", inspection.inspection_id, e)

    def _cache_delete(self, inspection_ids: Sequence[str]) -> None:
        if not self.cache:
            return
        try:
            self.cache.delete_many([get_inspection_cache_key(i) for i in inspection_ids])
        except redis.RedisError as e:
            logger.warning("Cache invalidation failed: %s", e)


def build_result_view(inspection: InspectionResponse) -> InspectionResultResponse:
    """Shape a stored inspection for the result page."""
    composition = [
        CompositionItem(
            name=criterion.name,
            standard=format_bound_label(criterion),
            actual=format_percentage(criterion.value),
        )
        for criterion in inspection.standard_data
    ]

    # Documents stored without a defect breakdown still show every row
    defects = {item.name: item.actual for item in inspection.defect_rice}
    defect_rows = [
        DefectRiceRow(name=name, actual=format_percentage(defects.get(name, 0.0)))
        for name in [d.value for d in DefectType] + [TOTAL_ROW]
    ]

    return InspectionResultResponse(
        inspection_id=inspection.inspection_id,
        name=inspection.name,
        standard=inspection.standard_name,
        create_date=inspection.create_date,
        image_link=inspection.image_link,
        total_sample=inspection.total_sample,
        note=inspection.note,
        price=inspection.price,
        sampling_date=inspection.sampling_date,
        sampling_point=inspection.sampling_point,
        composition=composition,
        defect_rice=defect_rows,
    )
