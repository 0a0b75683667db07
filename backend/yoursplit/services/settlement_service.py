"""
Settlement service for turning net balances into a minimal set of transfers.
"""
import heapq
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple
from yoursplit.core.exceptions import DuplicateMember, UnbalancedInput
from yoursplit.core.money import from_minor_units
from yoursplit.services.balance_service import LedgerSummary, MemberBalance

logger = logging.getLogger(__name__)


class Transfer:
    """Represents a single transfer between members."""
    def __init__(self, from_user_id: str, to_user_id: str, amount_minor: int):
        self.from_user_id = from_user_id
        self.to_user_id = to_user_id
        self.amount_minor = amount_minor

    @property
    def amount(self) -> Decimal:
        return from_minor_units(self.amount_minor)

    def __eq__(self, other):
        if not isinstance(other, Transfer):
            return NotImplemented
        return (self.from_user_id, self.to_user_id, self.amount_minor) == (
            other.from_user_id, other.to_user_id, other.amount_minor
        )

    def __repr__(self):
        return f"Transfer({self.from_user_id!r} -> {self.to_user_id!r}: {self.amount_minor})"


def compute_settlements(balances: Iterable[MemberBalance]) -> List[Transfer]:
    """
    Minimize the number of transfers needed to settle debts.

    Greedy matching: the member who owes the most pays the member who is
    owed the most, for the smaller of the two amounts, until everyone is at
    zero. Each round clears at least one side, so k members with a non-zero
    balance never need more than k - 1 transfers. Ties on amount are broken
    by ascending member id, which makes the plan reproducible.

    Raises:
        DuplicateMember: the same user id appears twice.
        UnbalancedInput: balances do not sum to zero.
    """
    balances = list(balances)

    seen = set()
    for b in balances:
        if b.user_id in seen:
            logger.warning(f"Duplicate user id {b.user_id} in balances")
            raise DuplicateMember(b.user_id)
        seen.add(b.user_id)

    total = sum(b.balance_minor for b in balances)
    if total != 0:
        logger.warning(f"Balances for {len(balances)} member(s) sum to {total}, refusing to plan")
        raise UnbalancedInput(total)

    # Heaps of (-remaining, user_id): largest amount first, then lowest id
    creditors: List[Tuple[int, str]] = [(-b.balance_minor, b.user_id) for b in balances if b.balance_minor > 0]
    debtors: List[Tuple[int, str]] = [(b.balance_minor, b.user_id) for b in balances if b.balance_minor < 0]
    heapq.heapify(creditors)
    heapq.heapify(debtors)

    transfers = []
    while creditors and debtors:
        neg_cred, creditor_id = heapq.heappop(creditors)
        neg_debt, debtor_id = heapq.heappop(debtors)
        cred_amount, debt_amount = -neg_cred, -neg_debt

        # Transfer the minimum of what's owed and what's needed
        amount = min(cred_amount, debt_amount)
        transfers.append(Transfer(debtor_id, creditor_id, amount))

        if cred_amount > amount:
            heapq.heappush(creditors, (amount - cred_amount, creditor_id))
        if debt_amount > amount:
            heapq.heappush(debtors, (amount - debt_amount, debtor_id))

    logger.debug(f"Planned {len(transfers)} transfer(s) for {len(balances)} balance(s)")
    return transfers


def build_summary(
    ledger: LedgerSummary,
    transfers: List[Transfer],
    names: Dict[str, str],
    currency: str = "",
) -> str:
    """Render a plain-text report of balances and the settlement plan."""
    lines = [
        f"Total expenses: {currency}{ledger.total_expenses:.2f}",
        f"Per person: {currency}{ledger.per_person_share:.2f}",
        "",
        "Net balances:",
    ]
    for b in ledger.balances:
        sign = "-" if b.balance_minor < 0 else "+"
        lines.append(f"  {b.name}: {sign}{currency}{abs(b.balance):.2f}")

    lines.append("")
    lines.append("Transfers:")
    if not transfers:
        lines.append("  All settled up")
    for t in transfers:
        lines.append(
            f"  {names.get(t.from_user_id, t.from_user_id)} -> "
            f"{names.get(t.to_user_id, t.to_user_id)}: {currency}{t.amount:.2f}"
        )
    return "\n".join(lines)
