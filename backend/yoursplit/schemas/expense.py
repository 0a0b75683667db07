"""
Pydantic schemas for Expense entity.
"""
from pydantic import Field, field_validator
from typing import List, Literal, Optional
from datetime import datetime
from decimal import Decimal
from yoursplit.core.money import MAX_DIGITS
from yoursplit.schemas.member import CamelModel, Member, as_utc


class Expense(CamelModel):
    """A single equally-split expense paid by one member."""
    id: str
    description: str = Field(min_length=1)
    amount: Decimal = Field(max_digits=MAX_DIGITS)  # Positivity is enforced by the ledger, not here
    paid_by_id: str
    group_id: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, v):
        return as_utc(v)


class LedgerRequest(CamelModel):
    """Roster snapshot plus the expenses to aggregate against it."""
    members: List[Member]
    expenses: List[Expense] = []
    roster_policy: Optional[Literal["current", "as_recorded"]] = None  # Falls back to settings.ROSTER_POLICY
