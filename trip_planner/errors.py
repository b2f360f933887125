"""
Error taxonomy shared by the record store adapters, services and API.
"""
from typing import Optional


class TripPlannerError(Exception):
    """Base class for all trip planner errors."""
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TripPlannerError):
    """Requested identifier is absent from the record store."""


class ValidationError(TripPlannerError):
    """A field is missing, malformed or outside its allowed range."""
    
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StoreError(TripPlannerError):
    """The record store reported a failure or could not be reached."""


class PartialBatchError(StoreError):
    """A multi-record write where some records failed. Treated as a full failure."""
    
    def __init__(self, message: str, failures: Optional[list[str]] = None):
        super().__init__(message)
        self.failures = failures or []
