"""
Group balance and settlement routes.

These endpoints are stateless: the caller sends the roster and expenses it
holds, and gets the computed balances and settlement plan back.
"""
from fastapi import APIRouter, HTTPException, status
from typing import List
from yoursplit.core.config import settings
from yoursplit.core.money import to_minor_units
from yoursplit.schemas.expense import Expense, LedgerRequest
from yoursplit.schemas.settlement import (
    Balance, GroupBalancesResponse, GroupSettlementsResponse,
    GroupSummaryResponse, Settlement, SettlementRequest
)
from yoursplit.services.balance_service import LedgerSummary, MemberBalance, compute_balances
from yoursplit.services.settlement_service import Transfer, build_summary, compute_settlements

router = APIRouter(prefix="/groups", tags=["groups"])


def check_group_expenses(group_id: str, expenses: List[Expense]) -> None:
    """Reject expenses recorded against another group."""
    for expense in expenses:
        if expense.group_id != group_id:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Expense {expense.id} belongs to group {expense.group_id}, not {group_id}"
            )


def _balances(ledger: LedgerSummary) -> List[Balance]:
    return [
        Balance(user_id=b.user_id, name=b.name, balance=b.balance)
        for b in ledger.balances
    ]


def _settlements(transfers: List[Transfer]) -> List[Settlement]:
    return [
        Settlement(from_id=t.from_user_id, to_id=t.to_user_id, amount=t.amount)
        for t in transfers
    ]


@router.post("/{group_id}/balances", response_model=GroupBalancesResponse)
async def get_group_balances(group_id: str, payload: LedgerRequest):
    """Compute each member's net balance for a group."""
    check_group_expenses(group_id, payload.expenses)

    ledger = compute_balances(payload.members, payload.expenses, payload.roster_policy)

    return GroupBalancesResponse(
        group_id=group_id,
        total_expenses=ledger.total_expenses,
        per_person_share=ledger.per_person_share,
        balances=_balances(ledger),
    )


@router.post("/{group_id}/settlements", response_model=GroupSettlementsResponse)
async def get_group_settlements(group_id: str, payload: SettlementRequest):
    """Plan the transfers that settle a set of balances."""
    balances = [
        MemberBalance(b.user_id, b.name, to_minor_units(b.balance))
        for b in payload.balances
    ]
    transfers = compute_settlements(balances)

    return GroupSettlementsResponse(
        group_id=group_id,
        settlements=_settlements(transfers),
        members={b.user_id: b.name for b in payload.balances},
    )


@router.post("/{group_id}/summary", response_model=GroupSummaryResponse)
async def get_group_summary(group_id: str, payload: LedgerRequest):
    """Compute balances and the settlement plan in one call."""
    check_group_expenses(group_id, payload.expenses)

    ledger = compute_balances(payload.members, payload.expenses, payload.roster_policy)
    transfers = compute_settlements(ledger.balances)
    names = {m.id: m.name for m in payload.members}

    return GroupSummaryResponse(
        group_id=group_id,
        total_expenses=ledger.total_expenses,
        per_person_share=ledger.per_person_share,
        balances=_balances(ledger),
        settlements=_settlements(transfers),
        summary=build_summary(ledger, transfers, names, settings.CURRENCY_SYMBOL),
    )
