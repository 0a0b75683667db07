"""
Domain exceptions for ledger aggregation and settlement planning.

Every error carries a stable ``code`` and the HTTP status the API layer
should answer with. The core never retries or partially computes: it raises
one of these and the caller decides what to show.
"""
from typing import Any


class LedgerError(Exception):
    """Base exception for ledger computation errors."""
    code = "ledger_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidAmount(LedgerError):
    """Raised when an expense amount is not positive or cannot be represented."""
    code = "invalid_amount"
    status_code = 422

    def __init__(self, expense_id: Any, amount: Any):
        super().__init__(f"Expense {expense_id} has invalid amount {amount}")
        self.expense_id = expense_id
        self.amount = amount


class UnknownPayer(LedgerError):
    """Raised when an expense is paid by someone outside the roster."""
    code = "unknown_payer"
    status_code = 422

    def __init__(self, expense_id: Any, payer_id: Any):
        super().__init__(f"Expense {expense_id} is paid by {payer_id}, who is not in the roster")
        self.expense_id = expense_id
        self.payer_id = payer_id


class EmptyRoster(LedgerError):
    """Raised when expenses have nobody to be split among."""
    code = "empty_roster"
    status_code = 400

    def __init__(self, message: str = "Cannot split expenses across an empty roster"):
        super().__init__(message)


class DuplicateMember(LedgerError):
    """Raised when the same member id appears twice in a roster or balance set."""
    code = "duplicate_member"
    status_code = 422

    def __init__(self, member_id: Any):
        super().__init__(f"Member {member_id} appears more than once")
        self.member_id = member_id


class UnbalancedInput(LedgerError):
    """Raised when balances handed to the planner do not sum to zero."""
    code = "unbalanced_input"
    status_code = 400

    def __init__(self, total_minor: int):
        super().__init__(f"Balances must sum to zero, got {total_minor} minor units")
        self.total_minor = total_minor
