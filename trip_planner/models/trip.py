"""
Trip models - The top-level planning unit.
"""
from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import date, datetime

from .base import CamelModel, reject_null


class Trip(CamelModel):
    """A stored trip."""
    id: int = Field(..., description="Record identifier")
    name: str = Field(..., description="Trip name")
    destination: str = Field(..., description="Where the trip goes")
    start_date: date = Field(..., description="First day of the trip")
    end_date: date = Field(..., description="Last day of the trip (inclusive)")
    cover_image: Optional[str] = Field(
        None,
        description="Cover image URL"
    )
    created_at: Optional[datetime] = Field(
        None,
        description="When the trip was created"
    )


class TripCreate(CamelModel):
    """Fields accepted when creating a trip."""
    name: str = Field(..., min_length=1, description="Trip name")
    destination: str = Field(..., min_length=1, description="Where the trip goes")
    start_date: date = Field(..., description="First day of the trip")
    end_date: date = Field(..., description="Last day of the trip (inclusive)")
    cover_image: Optional[str] = Field(None, description="Cover image URL")
    
    @model_validator(mode="after")
    def check_date_order(self) -> "TripCreate":
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self


class TripUpdate(CamelModel):
    """Partial update of a trip. Only the fields sent are written."""
    name: Optional[str] = Field(None, min_length=1)
    destination: Optional[str] = Field(None, min_length=1)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    cover_image: Optional[str] = None
    
    check_required = field_validator("name", "destination", "start_date", "end_date")(reject_null)
    
    @model_validator(mode="after")
    def check_date_order(self) -> "TripUpdate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("End date must not be before start date")
        return self
