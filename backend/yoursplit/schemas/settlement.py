"""
Pydantic schemas for balances and settlement plans.
"""
from pydantic import Field, PlainSerializer
from typing import Annotated, Dict, List
from decimal import Decimal
from yoursplit.core.money import MAX_DIGITS
from yoursplit.schemas.member import CamelModel

# Decimal in Python, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class Balance(CamelModel):
    """Net position of one member (positive = is owed, negative = owes)."""
    user_id: str
    name: str
    balance: Money = Field(max_digits=MAX_DIGITS, decimal_places=2)  # Whole cents only


class GroupBalancesResponse(CamelModel):
    """Schema for the balances of a group."""
    group_id: str
    total_expenses: Money
    per_person_share: Money
    balances: List[Balance]


class Settlement(CamelModel):
    """A single transfer in a settlement plan, between member ids."""
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    amount: Money


class SettlementRequest(CamelModel):
    """Schema for planning settlements from precomputed balances."""
    balances: List[Balance]


class GroupSettlementsResponse(CamelModel):
    """Schema for a settlement plan response."""
    group_id: str
    settlements: List[Settlement]
    members: Dict[str, str] = {}  # member id -> display name


class GroupSummaryResponse(GroupBalancesResponse):
    """Balances, settlement plan and a printable summary in one response."""
    settlements: List[Settlement]
    summary: str
