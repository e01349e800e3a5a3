"""
Custom Exceptions - Rice Inspection Grading API
app/core/exceptions.py

Custom exception classes for repository and grading operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Database connection failure."""

    def __init__(self, message: str = "Database connection failed"):
        self.message = message
        super().__init__(message)


class GradingError(Exception):
    """Base exception for grading operations."""

    pass


class CatalogLoadError(GradingError):
    """Standards catalog source is missing or malformed."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to load standards catalog from {source}: {reason}")


class StandardNotFoundError(GradingError):
    """No top-level standard with the requested name."""

    def __init__(self, standard_name: str):
        self.standard_name = standard_name
        super().__init__(f"Standard '{standard_name}' not found")


class InvalidMeasurementError(GradingError):
    """A grain length or criterion bound is missing, non-numeric or out of range."""

    def __init__(self, field: str, value: object, message: str = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value for {field}: {value!r}")


class EmptyBatchError(GradingError):
    """No grains were submitted for grading."""

    def __init__(self, message: str = "Grain batch must contain at least one grain"):
        self.message = message
        super().__init__(message)
