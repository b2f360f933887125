"""
Shared model configuration.
The API speaks camelCase (startDate, tripId); Python code uses snake_case.
"""
from datetime import time
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


# Time-of-day serialized as "HH:MM", the format the record store holds
TimeOfDay = Annotated[
    time,
    PlainSerializer(lambda t: t.strftime("%H:%M"), return_type=str, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model accepting both camelCase and snake_case field names."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def reject_null(value):
    """Partial updates may omit a required field but not blank it out."""
    if value is None:
        raise ValueError("must not be null")
    return value
