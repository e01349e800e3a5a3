"""
Core Package - Rice Inspection Grading API
app/core/__init__.py

Core infrastructure: dependencies (app.core.dependencies), exceptions.
"""

from app.core.exceptions import (
    CatalogLoadError,
    DatabaseConnectionException,
    DuplicateEntityException,
    EmptyBatchError,
    GradingError,
    InvalidMeasurementError,
    RepositoryException,
    StandardNotFoundError,
)

__all__ = [
    "CatalogLoadError",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EmptyBatchError",
    "GradingError",
    "InvalidMeasurementError",
    "RepositoryException",
    "StandardNotFoundError",
]
