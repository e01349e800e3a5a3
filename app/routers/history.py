"""
History Router - Rice Inspection Grading API
app/routers/history.py

Inspection history: create (grades the batch), list, read, result view, batch delete.
"""

import logging
from datetime import datetime, timezone
from typing import NoReturn, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse

from app.config import settings
from app.core.dependencies import get_inspection_service
from app.core.exceptions import (
    DatabaseConnectionException,
    EmptyBatchError,
    InvalidMeasurementError,
    RepositoryException,
    StandardNotFoundError,
)
from app.models.errors import ErrorResponse
from app.models.inspection import (
    InspectionCreate,
    InspectionDeleteRequest,
    InspectionDeleteResponse,
    InspectionResponse,
    InspectionResultResponse,
    PaginatedInspectionResponse,
)
from app.services.inspection_service import InspectionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["History"])



#  Validation Error Messages


FIELD_MESSAGES = {
    "name": {
        "missing": "Inspection name is required",
        "string_too_short": "Inspection name cannot be empty",
        "string_too_long": "Inspection name must not exceed 255 characters",
        "value_error": "Inspection name cannot be blank",
    },
    "standardName": {
        "missing": "Standard name is required",
        "string_too_short": "Standard name cannot be empty",
        "value_error": "Standard name cannot be blank",
    },
    "raw": {
        "missing": "Raw grain data is required",
        "model_type": "Raw grain data must be a JSON object",
    },
    "price": {
        "less_than_equal": "Price must be between 0 and 100000",
        "greater_than_equal": "Price must be between 0 and 100000",
        "float_parsing": "Price must be a valid number",
    },
    "samplingDate": {
        "datetime": "Sampling date must be a valid date-time (ISO 8601)",
    },
    "inspectionID": {
        "missing": "inspectionID list is required",
        "too_short": "inspectionID list must contain at least one ID",
    },
    "page": {
        "greater_than_equal": "Page must be greater than or equal to 1",
        "int_parsing": "Page must be a valid integer",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "string_type": "Field '{field}' must be a string",
    "float_type": "Field '{field}' must be a number",
    "float_parsing": "Field '{field}' must be a valid number",
    "finite_number": "Field '{field}' must be a finite number",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "enum": "Field '{field}' has an invalid value",
    "datetime": "Field '{field}' must be a valid date-time",
    "list_type": "Field '{field}' must be a list",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    if field in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[field]:
            if key in error_type:
                return FIELD_MESSAGES[field][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error_code": "INVALID_REQUEST",
                "message": "Malformed JSON request body",
                "details": None,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )
    field = ".".join(str(l) for l in loc if l not in ("body", "query", "path"))
    message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "VALIDATION_ERROR",
            "message": message,
            "details": {"field": field, "type": error_type} if field else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )



#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str, details: Optional[dict] = None) -> NoReturn:
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message, details=details).model_dump(mode="json"),
    )

def raise_inspection_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "INSPECTION_NOT_FOUND", "Inspection not found")

def raise_repository_error(e: RepositoryException):
    if isinstance(e, DatabaseConnectionException):
        logger.error("Inspection store unavailable: %s", e)
        raise_error(status.HTTP_503_SERVICE_UNAVAILABLE, "DATABASE_UNAVAILABLE", "Inspection store is unavailable")
    logger.error("Inspection store error: %s", e)
    raise_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", "Unexpected server error")



#  Routes


@router.post(
    "/history",
    response_model=InspectionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponse, "description": "Standard not found"},
        413: {"model": ErrorResponse, "description": "Grain batch too large"},
        422: {"model": ErrorResponse, "description": "Empty batch, invalid measurement or validation error"},
        503: {"model": ErrorResponse, "description": "Inspection store unavailable"},
    },
    summary="Create an inspection",
    description="Grades the raw grain batch against the named standard and stores the scored inspection.",
)
async def create_inspection(
    inspection: InspectionCreate,
    service: InspectionService = Depends(get_inspection_service),
) -> InspectionResponse:
    grain_count = len(inspection.raw.grains)
    if grain_count > settings.MAX_GRAINS_PER_BATCH:
        raise_error(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            "BATCH_TOO_LARGE",
            f"Grain batch exceeds {settings.MAX_GRAINS_PER_BATCH} grains",
            {"grains": grain_count},
        )

    try:
        return service.create_inspection(inspection)
    except StandardNotFoundError as e:
        raise_error(
            status.HTTP_404_NOT_FOUND, "STANDARD_NOT_FOUND", str(e),
            {"standardName": e.standard_name},
        )
    except EmptyBatchError as e:
        raise_error(status.HTTP_422_UNPROCESSABLE_ENTITY, "EMPTY_BATCH", str(e))
    except InvalidMeasurementError as e:
        raise_error(
            status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_MEASUREMENT", str(e),
            {"field": e.field},
        )
    except RepositoryException as e:
        raise_repository_error(e)


@router.get(
    "/history",
    response_model=PaginatedInspectionResponse,
    summary="List inspections",
    description="Paginated inspection history. Filter by exact inspectionID and/or "
                "creation date range (both 'from' and 'to' required for the range).",
)
async def list_inspections(
    page: int = Query(1, ge=1),
    inspection_id: Optional[str] = Query(None, alias="id"),
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    service: InspectionService = Depends(get_inspection_service),
) -> PaginatedInspectionResponse:
    try:
        return service.list_inspections(
            page=page,
            inspection_id=inspection_id or None,
            date_from=date_from,
            date_to=date_to,
        )
    except RepositoryException as e:
        raise_repository_error(e)


@router.get(
    "/history/{inspection_id}",
    response_model=InspectionResponse,
    responses={404: {"model": ErrorResponse, "description": "Inspection not found"}},
    summary="Get inspection by inspectionID",
)
async def get_inspection(
    inspection_id: str,
    service: InspectionService = Depends(get_inspection_service),
) -> InspectionResponse:
    try:
        inspection = service.get_inspection(inspection_id)
    except RepositoryException as e:
        raise_repository_error(e)
    if inspection is None:
        raise_inspection_not_found()
    return inspection


@router.get(
    "/history/{inspection_id}/result",
    response_model=InspectionResultResponse,
    responses={404: {"model": ErrorResponse, "description": "Inspection not found"}},
    summary="Get inspection result view",
    description="Stored scores rendered for display: bound labels and percentage strings.",
)
async def get_inspection_result(
    inspection_id: str,
    service: InspectionService = Depends(get_inspection_service),
) -> InspectionResultResponse:
    try:
        result = service.get_inspection_result(inspection_id)
    except RepositoryException as e:
        raise_repository_error(e)
    except InvalidMeasurementError as e:
        logger.error("Stored inspection %s has unusable bounds: %s", inspection_id, e)
        raise_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "INVALID_STORED_INSPECTION", str(e))
    if result is None:
        raise_inspection_not_found()
    return result


@router.delete(
    "/history",
    response_model=InspectionDeleteResponse,
    responses={404: {"model": ErrorResponse, "description": "No matching inspections"}},
    summary="Delete inspections",
    description="Deletes every inspection whose inspectionID is in the request body.",
)
async def delete_inspections(
    request: InspectionDeleteRequest,
    service: InspectionService = Depends(get_inspection_service),
) -> InspectionDeleteResponse:
    try:
        deleted = service.delete_inspections(request.inspection_ids)
    except RepositoryException as e:
        raise_repository_error(e)
    if deleted == 0:
        raise_inspection_not_found()
    return InspectionDeleteResponse(message="Inspections deleted", deleted_count=deleted)
