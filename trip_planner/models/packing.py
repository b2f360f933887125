"""
Packing models - Checklist entries for a trip.
"""
from pydantic import Field, field_validator
from typing import Optional
from enum import Enum

from .base import CamelModel, reject_null


class PackingCategory(str, Enum):
    """Packing checklist categories."""
    CLOTHING = "clothing"
    TOILETRIES = "toiletries"
    DOCUMENTS = "documents"
    ELECTRONICS = "electronics"
    ACCESSORIES = "accessories"
    MEDICATIONS = "medications"
    OTHER = "other"


class PackingItem(CamelModel):
    """A stored packing checklist entry."""
    id: int = Field(..., description="Record identifier")
    trip_id: int = Field(..., description="Owning trip")
    category: PackingCategory = Field(
        default=PackingCategory.OTHER,
        description="Checklist category"
    )
    name: str = Field(..., description="Item name")
    quantity: int = Field(default=1, ge=1, description="How many to pack")
    packed: bool = Field(default=False, description="Whether it is packed")


class PackingItemCreate(CamelModel):
    """Fields accepted when adding a packing item. New items start unpacked."""
    trip_id: Optional[int] = None
    category: PackingCategory = PackingCategory.OTHER
    name: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)


class PackingItemUpdate(CamelModel):
    """Partial update of a packing item."""
    category: Optional[PackingCategory] = None
    name: Optional[str] = Field(None, min_length=1)
    quantity: Optional[int] = Field(None, ge=1)
    packed: Optional[bool] = None
    
    check_required = field_validator("category", "name", "quantity", "packed")(reject_null)
