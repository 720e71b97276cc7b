"""
Payment recording service.

Applies payments against splits and rolls the owning entry's status
forward. Concurrent payments against the same split are serialised by
row locks on the entry and then the split, in that order, the same order
split assignment locks in.
"""

import logging
from uuid import UUID

from django.conf import settings
from django.db import transaction

from apps.accounts.models import User
from apps.rooms.models import RoomRole
from apps.ledger.models import LedgerEntryStatus, LedgerSplit
from apps.ledger.money import to_positive_money
from apps.ledger.exceptions import (
    SplitNotFoundError,
    InsufficientRoleError,
    EntryLockedError,
    OverpaymentError,
)

from .access import resolve_caller
from .entry_management import lock_entry

logger = logging.getLogger(__name__)


def _lock_split(split_id: UUID) -> LedgerSplit:
    try:
        split = LedgerSplit.objects.only('id', 'entry_id').get(id=split_id)
    except LedgerSplit.DoesNotExist:
        raise SplitNotFoundError("Split not found")

    entry = lock_entry(split.entry_id)

    # splits may have been replaced while waiting for the entry lock
    try:
        split = (
            LedgerSplit.objects
            .select_for_update()
            .select_related('member__user')
            .get(id=split_id, entry_id=entry.id)
        )
    except LedgerSplit.DoesNotExist:
        raise SplitNotFoundError("Split not found")
    split.entry = entry
    return split


@transaction.atomic
def record_payment(
    *,
    split_id: UUID,
    user: User,
    amount,
    notes: str = ''
) -> LedgerSplit:
    """
    Record a payment against a split.

    The payment accumulates onto ``amount_paid``; it never replaces it.
    The split's status becomes PARTIAL or PAID, and the owning entry
    becomes PARTIALLY_PAID or PAID from the sum over all its splits.

    Overpayment is accepted unless ``LEDGER_ALLOW_OVERPAYMENT`` is False.

    Args:
        split_id: UUID of the split
        user: User recording the payment (split owner or head roommate)
        amount: Payment amount, must be > 0
        notes: Optional note; replaces the split's notes when non-empty

    Returns:
        The updated LedgerSplit

    Raises:
        SplitNotFoundError: If split doesn't exist
        NotRoomMemberError: If user is not a room member
        InsufficientRoleError: If user is neither the split owner nor head roommate
        InvalidAmountError: If amount is not a positive two-place decimal
        EntryLockedError: If the entry is cancelled
        OverpaymentError: If overpayment is disabled and amount exceeds what is owed
    """
    split = _lock_split(split_id)
    entry = split.entry

    caller = resolve_caller(room_id=entry.room_id, user=user)

    is_own_split = split.member_id == caller.id
    is_head_roommate = caller.role == RoomRole.HEAD_ROOMMATE

    if not is_own_split and not is_head_roommate:
        raise InsufficientRoleError("You can only record your own payments")

    amount = to_positive_money(amount)

    if entry.status == LedgerEntryStatus.CANCELLED:
        raise EntryLockedError("Payments cannot be recorded on a cancelled entry")

    if not getattr(settings, 'LEDGER_ALLOW_OVERPAYMENT', True):
        remaining = split.get_remaining_balance()
        if amount > remaining:
            logger.warning(
                "Rejected overpayment of %s on split %s (remaining %s)",
                amount, split.id, remaining
            )
            raise OverpaymentError(
                f"Payment of {amount} exceeds the remaining balance of {remaining}"
            )

    if notes:
        split.notes = notes

    split.apply_payment(amount)
    entry.update_payment_status()

    logger.info(
        "Recorded payment of %s on split %s by member %s (split %s, entry %s)",
        amount, split.id, caller.id, split.payment_status, entry.status
    )
    return split
