"""
Pydantic schemas for group members.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime, timezone


class CamelModel(BaseModel):
    """Base schema speaking camelCase on the wire and snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


def as_utc(v: Optional[datetime]) -> Optional[datetime]:
    """Read naive timestamps as UTC so they compare with aware ones."""
    if v is not None and v.tzinfo is None:
        return v.replace(tzinfo=timezone.utc)
    return v


class Member(CamelModel):
    """A member of the roster an aggregation runs against."""
    id: str = Field(min_length=1)
    name: str
    joined_at: Optional[datetime] = None  # Only read by the as_recorded roster policy

    @field_validator("joined_at")
    @classmethod
    def joined_at_utc(cls, v):
        return as_utc(v)
