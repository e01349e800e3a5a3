"""
Health Check Router - Rice Inspection Grading API
app/routers/health.py

Returns health status of the inspection store, the cache and the standards catalog.
"""
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime, timezone

import redis
import snowflake.connector

from app.config import settings
from app.core.exceptions import DatabaseConnectionException
from app.grading.catalog import get_standards_catalog
from app.services.snowflake import get_snowflake_connection

router = APIRouter(tags=["Health"])



#  Schemas


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    dependencies: Dict[str, str]


class CatalogStandard(BaseModel):
    id: int
    name: str


class CatalogHealthResponse(BaseModel):
    source: str
    loaded: bool
    standards: List[CatalogStandard]



#  Dependency Health Checks


def _short(e: Exception) -> str:
    msg = str(e)
    return msg[:100] + "..." if len(msg) > 100 else msg


async def check_snowflake() -> str:
    """Check Snowflake connection health."""
    try:
        conn = get_snowflake_connection()
    except DatabaseConnectionException as e:
        return f"unhealthy: {_short(e)}"
    except snowflake.connector.errors.Error as e:
        return f"unhealthy: {_short(e)}"

    try:
        cursor = conn.cursor()
        cursor.execute("SELECT CURRENT_USER()")
        result = cursor.fetchone()
        cursor.close()
        return f"healthy (User: {result[0]})"
    except snowflake.connector.errors.Error as e:
        return f"unhealthy: {_short(e)}"
    finally:
        conn.close()


async def check_redis() -> str:
    """Check Redis connection health."""
    try:
        client = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )
        client.ping()
        client.close()
        return "healthy"
    except redis.RedisError as e:
        return f"unhealthy: {_short(e)}"


async def check_catalog() -> str:
    """An empty catalog means the standards file failed to load."""
    catalog = get_standards_catalog()
    if len(catalog) == 0:
        return f"unhealthy: no standards loaded from {settings.STANDARDS_FILE.name}"
    return f"healthy ({len(catalog)} standards)"



#  Main Health Check Route


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={
        200: {"description": "All dependencies healthy"},
        503: {"description": "One or more dependencies unhealthy"},
    },
    summary="Health check",
    description="Check health of all dependencies.",
)
async def health_check():
    dependencies = {
        "snowflake": await check_snowflake(),
        "redis": await check_redis(),
        "standards_catalog": await check_catalog(),
    }

    all_healthy = all(v.startswith("healthy") for v in dependencies.values())

    response = HealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        dependencies=dependencies,
    )

    if all_healthy:
        return response
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=response.model_dump(mode="json"),
    )



#  Individual Checks


@router.get("/health/snowflake", summary="Check Snowflake connection")
async def health_snowflake():
    result = await check_snowflake()
    return {
        "service": "snowflake",
        "status": result,
        "is_healthy": result.startswith("healthy"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/redis", summary="Check Redis connection")
async def health_redis():
    result = await check_redis()
    return {
        "service": "redis",
        "status": result,
        "is_healthy": result.startswith("healthy"),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get(
    "/health/catalog",
    response_model=CatalogHealthResponse,
    summary="Standards catalog status",
    description="Lists the loaded standards by id and name.",
)
async def health_catalog() -> CatalogHealthResponse:
    catalog = get_standards_catalog()
    return CatalogHealthResponse(
        source=str(settings.STANDARDS_FILE),
        loaded=len(catalog) > 0,
        standards=[CatalogStandard(id=i, name=n) for i, n in catalog.names()],
    )
