"""
Balance service: aggregates a group's expenses into per-member net balances.
"""
import enum
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional, Union
from yoursplit.core.config import settings
from yoursplit.core.exceptions import (
    DuplicateMember, EmptyRoster, InvalidAmount, LedgerError, UnknownPayer
)
from yoursplit.core.money import MINOR_UNITS_PER_MAJOR, from_minor_units, qround, split_evenly, to_minor_units
from yoursplit.schemas.expense import Expense
from yoursplit.schemas.member import Member

logger = logging.getLogger(__name__)


class RosterPolicy(str, enum.Enum):
    """Which roster members share a given expense."""
    CURRENT = "current"  # Everyone in the roster today, including late joiners
    AS_RECORDED = "as_recorded"  # Only members who had joined when the expense was recorded


class MemberBalance:
    """Net position of one member, kept in integer minor units."""
    def __init__(self, user_id: str, name: str, balance_minor: int):
        self.user_id = user_id
        self.name = name
        self.balance_minor = balance_minor

    @property
    def balance(self) -> Decimal:
        return from_minor_units(self.balance_minor)

    def __repr__(self):
        return f"MemberBalance({self.user_id!r}, {self.name!r}, {self.balance_minor})"


class LedgerSummary:
    """Result of aggregating one group's expenses."""
    def __init__(self, total_minor: int, per_person_share: Decimal, balances: List[MemberBalance]):
        self.total_minor = total_minor
        self.per_person_share = per_person_share
        self.balances = balances

    @property
    def total_expenses(self) -> Decimal:
        return from_minor_units(self.total_minor)


def compute_balances(
    roster: Iterable[Member],
    expenses: Iterable[Expense],
    policy: Optional[Union[RosterPolicy, str]] = None,
) -> LedgerSummary:
    """
    Compute every member's net balance for a group.

    Each expense is split equally in integer minor units. The remainder of
    the split goes one unit at a time to the sharers in ascending member id
    order, so the shares of every expense add up to its amount and the
    balances of the whole group sum to exactly zero.

    Balances are returned in roster order.

    Raises:
        DuplicateMember: a member id appears twice in the roster.
        EmptyRoster: there are expenses but nobody to split them among.
        InvalidAmount: an expense amount is not positive.
        UnknownPayer: an expense is paid by someone outside the roster.
    """
    policy = RosterPolicy(policy or settings.ROSTER_POLICY)
    members = list(roster)
    expenses = list(expenses)

    names = _index_roster(members)

    if not members:
        if expenses:
            logger.warning(f"Refusing to split {len(expenses)} expense(s) across an empty roster")
            raise EmptyRoster()
        return LedgerSummary(0, Decimal("0.00"), [])

    amounts = [_validated_amount(expense, names) for expense in expenses]

    # Remainder cents go to the lowest member ids first
    ordered = sorted(members, key=lambda m: m.id)
    net: Dict[str, int] = {member.id: 0 for member in members}

    for expense, amount in zip(expenses, amounts):
        sharers = _sharers_for(expense, ordered, policy)
        if not sharers:
            logger.warning(f"No member had joined when expense {expense.id} was recorded")
            raise EmptyRoster(f"No roster member shares expense {expense.id}")

        net[expense.paid_by_id] += amount
        for member_id, share in split_evenly(amount, [m.id for m in sharers]):
            net[member_id] -= share

    drift = sum(net.values())
    if drift != 0:
        raise LedgerError(f"Balances drifted by {drift} minor units")

    total_minor = sum(amounts)
    per_person_share = qround(Decimal(total_minor) / (MINOR_UNITS_PER_MAJOR * len(members)))

    logger.debug(
        f"Aggregated {len(expenses)} expense(s) over {len(members)} member(s) "
        f"with policy {policy.value}: total={total_minor}"
    )

    return LedgerSummary(
        total_minor,
        per_person_share,
        [MemberBalance(m.id, m.name, net[m.id]) for m in members],
    )


def _index_roster(members: List[Member]) -> Dict[str, str]:
    """Map member id to name, rejecting duplicate ids."""
    names: Dict[str, str] = {}
    for member in members:
        if member.id in names:
            logger.warning(f"Duplicate member id {member.id} in roster")
            raise DuplicateMember(member.id)
        names[member.id] = member.name
    return names


def _validated_amount(expense: Expense, names: Dict[str, str]) -> int:
    """Return the expense amount in minor units after checking it can be aggregated."""
    try:
        amount = to_minor_units(expense.amount)
    except InvalidOperation:
        logger.warning(f"Expense {expense.id} rejected: amount {expense.amount} out of range")
        raise InvalidAmount(expense.id, expense.amount)
    if amount <= 0:
        logger.warning(f"Expense {expense.id} rejected: amount {expense.amount}")
        raise InvalidAmount(expense.id, expense.amount)
    if expense.paid_by_id not in names:
        logger.warning(f"Expense {expense.id} rejected: unknown payer {expense.paid_by_id}")
        raise UnknownPayer(expense.id, expense.paid_by_id)
    return amount


def _sharers_for(expense: Expense, ordered: List[Member], policy: RosterPolicy) -> List[Member]:
    if policy is RosterPolicy.CURRENT:
        return ordered
    return [
        m for m in ordered
        if m.joined_at is None or m.joined_at <= expense.created_at
    ]
