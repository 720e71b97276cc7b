"""
Split assignment service.

Computes or validates the per-member breakdown of a ledger entry.

Both assignment modes replace (never merge) the entry's existing splits.
The old splits are deleted and the new ones inserted inside the same
transaction that holds the entry's row lock, so no reader ever observes
an entry that had splits with an empty split set.
"""

import logging
from typing import Iterable, List, Mapping, Tuple
from uuid import UUID

from django.db import transaction

from apps.accounts.models import User
from apps.rooms.models import RoomMembership, RoomRole
from apps.rooms.services import get_member, list_members
from apps.ledger.models import (
    LedgerEntry,
    LedgerEntryStatus,
    LedgerSplit,
    SplitType,
)
from apps.ledger.money import ZERO, to_positive_money, split_equally
from apps.ledger.exceptions import (
    MemberNotFoundError,
    MissingFieldError,
    DuplicateSplitMemberError,
    SplitTotalMismatchError,
    NoEligibleMembersError,
    EntryLockedError,
)

from .access import resolve_caller, require_role
from .entry_management import lock_entry, load_entry

logger = logging.getLogger(__name__)


SPLIT_ASSIGNER_ROLES = (RoomRole.HEAD_ROOMMATE,)

# Landlords collect rather than owe; guests are never charged.
EQUAL_SPLIT_EXCLUDED_ROLES = (RoomRole.LANDLORD, RoomRole.GUEST)

LOCKED_STATUSES = (
    LedgerEntryStatus.CANCELLED,
    LedgerEntryStatus.PARTIALLY_PAID,
    LedgerEntryStatus.PAID,
)


def _authorize_assignment(entry: LedgerEntry, user: User) -> RoomMembership:
    member = resolve_caller(room_id=entry.room_id, user=user)
    return require_role(
        member,
        SPLIT_ASSIGNER_ROLES,
        "Only head roommates can assign expense splits"
    )


def _ensure_reassignable(entry: LedgerEntry) -> None:
    if entry.status in LOCKED_STATUSES or entry.splits.filter(amount_paid__gt=ZERO).exists():
        raise EntryLockedError(
            f"Splits cannot be reassigned on a {entry.get_status_display().lower()} entry"
        )


def _replace_splits(
    entry: LedgerEntry,
    shares: Iterable[Tuple[RoomMembership, object, str]]
) -> List[LedgerSplit]:
    entry.splits.all().delete()

    return LedgerSplit.objects.bulk_create([
        LedgerSplit(entry=entry, member=member, amount_owed=amount, notes=notes or '')
        for member, amount, notes in shares
    ])


@transaction.atomic
def assign_splits(
    *,
    entry_id: UUID,
    user: User,
    assignments: Iterable[Mapping]
) -> LedgerEntry:
    """
    Replace an entry's splits with a manual breakdown.

    Each assignment is a mapping with ``member_id``, ``amount`` and an
    optional ``notes``. Everything is validated before the existing
    splits are touched, so a rejected call leaves them as they were.

    Args:
        entry_id: UUID of the ledger entry
        user: User assigning the splits (must be head roommate)
        assignments: Per-member amounts

    Returns:
        The entry, reloaded with its new splits, in APPROVED status

    Raises:
        EntryNotFoundError: If entry doesn't exist
        NotRoomMemberError: If user is not a room member
        InsufficientRoleError: If user is not the head roommate
        EntryLockedError: If entry is cancelled or already has payments
        MissingFieldError: If no assignments were given
        MemberNotFoundError: If a member_id is not in the entry's room
        DuplicateSplitMemberError: If a member appears more than once
        InvalidAmountError: If an amount is not a positive two-place decimal
        SplitTotalMismatchError: If amounts don't sum to the entry total
    """
    entry = lock_entry(entry_id)
    caller = _authorize_assignment(entry, user)
    _ensure_reassignable(entry)

    assignments = list(assignments or [])
    if not assignments:
        raise MissingFieldError("At least one split assignment is required")

    shares = []
    seen_members = set()
    total_assigned = ZERO

    for assignment in assignments:
        member_id = assignment.get('member_id')
        if not member_id:
            raise MissingFieldError("Member ID is required")

        try:
            member_uuid = UUID(str(member_id))
        except ValueError:
            raise MemberNotFoundError(member_id)

        member = get_member(room_id=entry.room_id, member_id=member_uuid)
        if member is None:
            raise MemberNotFoundError(member_id)

        if member.id in seen_members:
            raise DuplicateSplitMemberError(f"Member {member_id} is assigned more than once")
        seen_members.add(member.id)

        amount = to_positive_money(assignment.get('amount'))
        total_assigned += amount
        shares.append((member, amount, assignment.get('notes') or ''))

    if total_assigned != entry.total_amount:
        logger.warning(
            "Rejected split assignment for entry %s: expected %s, got %s",
            entry.id, entry.total_amount, total_assigned
        )
        raise SplitTotalMismatchError(entry.total_amount, total_assigned)

    _replace_splits(entry, shares)

    entry.status = LedgerEntryStatus.APPROVED
    entry.save(update_fields=['status', 'updated_at'])

    logger.info(
        "Assigned %d manual splits to entry %s (member %s)",
        len(shares), entry.id, caller.id
    )
    return load_entry(entry.id)


@transaction.atomic
def calculate_equal_splits(*, entry_id: UUID, user: User) -> LedgerEntry:
    """
    Split an entry's total evenly among the room's eligible members.

    Eligible members are all members except landlords and guests, in the
    room's enumeration order. The rounding residual goes to the first
    eligible member so the splits always sum exactly to the total.

    Example:
        100.00 among 3 roommates gives 33.34, 33.33, 33.33.

    Returns:
        The entry, reloaded with its new splits, with split type EQUAL
        and status APPROVED

    Raises:
        EntryNotFoundError: If entry doesn't exist
        NotRoomMemberError: If user is not a room member
        InsufficientRoleError: If user is not the head roommate
        EntryLockedError: If entry is cancelled or already has payments
        NoEligibleMembersError: If nobody in the room can be charged
        InvalidAmountError: If the total is too small to split
    """
    entry = lock_entry(entry_id)
    caller = _authorize_assignment(entry, user)
    _ensure_reassignable(entry)

    members = [
        m for m in list_members(room_id=entry.room_id)
        if m.role not in EQUAL_SPLIT_EXCLUDED_ROLES
    ]

    if not members:
        raise NoEligibleMembersError("No members available to split the expense")

    amounts = split_equally(entry.total_amount, len(members))
    _replace_splits(entry, [(m, a, '') for m, a in zip(members, amounts)])

    entry.split_type = SplitType.EQUAL
    entry.status = LedgerEntryStatus.APPROVED
    entry.save(update_fields=['split_type', 'status', 'updated_at'])

    logger.info(
        "Split entry %s equally among %d members (member %s)",
        entry.id, len(members), caller.id
    )
    return load_entry(entry.id)
