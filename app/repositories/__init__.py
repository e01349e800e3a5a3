"""
Repositories Package - Rice Inspection Grading API
app/repositories/__init__.py

Data access layer for Snowflake database operations.
"""

from app.repositories.base import BaseRepository
from app.repositories.inspection_repository import InspectionRepository

__all__ = [
    "BaseRepository",
    "InspectionRepository",
]
