from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Optional


class ErrorResponse(BaseModel):
    """
    Error body returned by every endpoint.
    """

    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
