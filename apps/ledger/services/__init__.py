"""
Ledger app services layer.

Services contain the ledger's business logic. Every write runs in a
transaction with row locks on the affected entry and splits.
"""

from .access import (
    resolve_caller,
    require_role,
)

from .entry_management import (
    create_entry,
    get_entry,
    list_entries,
    cancel_entry,
    delete_entry,
)

from .split_assignment import (
    assign_splits,
    calculate_equal_splits,
)

from .payment_recording import (
    record_payment,
)

from .balance_aggregation import (
    member_balances,
    member_balance,
)


__all__ = [
    # Access checks
    'resolve_caller',
    'require_role',

    # Entry lifecycle
    'create_entry',
    'get_entry',
    'list_entries',
    'cancel_entry',
    'delete_entry',

    # Split assignment
    'assign_splits',
    'calculate_equal_splits',

    # Payments
    'record_payment',

    # Balances
    'member_balances',
    'member_balance',
]
