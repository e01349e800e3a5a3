"""
Standards Router - Rice Inspection Grading API
app/routers/standards.py

Serves the grading standards catalog to the inspection form.
"""

from fastapi import APIRouter, Depends

from app.core.dependencies import get_catalog
from app.grading.catalog import StandardsCatalog
from app.models.standard import StandardListResponse

router = APIRouter(prefix="/api/v1", tags=["Standards"])


@router.get(
    "/standard",
    response_model=StandardListResponse,
    summary="List grading standards",
    description="Returns every grading standard with its sub-criteria. "
                "An empty list means the catalog failed to load (see server logs).",
)
async def list_standards(
    catalog: StandardsCatalog = Depends(get_catalog),
) -> StandardListResponse:
    return StandardListResponse(data=list(catalog.standards))
