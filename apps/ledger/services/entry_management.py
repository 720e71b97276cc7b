"""
Ledger entry management service.

Handles creating, reading, cancelling and deleting ledger entries.
"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.models import User
from apps.rooms.models import RoomRole
from apps.ledger.models import LedgerEntry, LedgerEntryStatus
from apps.ledger.money import to_positive_money
from apps.ledger.exceptions import (
    EntryNotFoundError,
    MissingFieldError,
    InsufficientRoleError,
)

from .access import resolve_caller, require_role

logger = logging.getLogger(__name__)


ENTRY_CREATOR_ROLES = (RoomRole.LANDLORD, RoomRole.HEAD_ROOMMATE)


def _entries_with_splits() -> QuerySet[LedgerEntry]:
    return (
        LedgerEntry.objects
        .select_related('room', 'created_by__user')
        .prefetch_related('splits__member__user')
    )


def lock_entry(entry_id: UUID) -> LedgerEntry:
    """Fetch an entry with a row lock. Must run inside a transaction."""
    try:
        return LedgerEntry.objects.select_for_update().get(id=entry_id)
    except LedgerEntry.DoesNotExist:
        raise EntryNotFoundError("Ledger entry not found")


def load_entry(entry_id: UUID) -> LedgerEntry:
    """Fetch an entry together with its splits and their members."""
    try:
        return _entries_with_splits().get(id=entry_id)
    except LedgerEntry.DoesNotExist:
        raise EntryNotFoundError("Ledger entry not found")


@transaction.atomic
def create_entry(
    *,
    room_id: UUID,
    user: User,
    title: str,
    total_amount,
    entry_type: str,
    split_type: str,
    description: str = '',
    due_date: Optional[date] = None
) -> LedgerEntry:
    """
    Create a new ledger entry in PENDING status with no splits.

    Only landlords and head roommates can create entries.

    Args:
        room_id: UUID of the room
        user: User creating the entry
        title: Short title (e.g. "March rent")
        total_amount: Total to be split, must be > 0
        entry_type: Expense category
        split_type: Intended split type
        description: Optional longer description
        due_date: Optional due date

    Returns:
        Created LedgerEntry instance

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoomMemberError: If user is not a room member
        InsufficientRoleError: If user is not landlord or head roommate
        InvalidAmountError: If total_amount is not a positive two-place decimal
        MissingFieldError: If title is blank
    """
    member = resolve_caller(room_id=room_id, user=user)
    require_role(
        member,
        ENTRY_CREATOR_ROLES,
        "Only landlords and head roommates can create ledger entries"
    )

    if not title or not title.strip():
        raise MissingFieldError("Title is required")

    amount = to_positive_money(total_amount, field='total_amount')

    entry = LedgerEntry.objects.create(
        room_id=room_id,
        created_by=member,
        title=title.strip(),
        description=description or '',
        entry_type=entry_type,
        total_amount=amount,
        split_type=split_type,
        due_date=due_date,
        status=LedgerEntryStatus.PENDING,
    )

    logger.info(
        "Ledger entry %s created in room %s by member %s: %s %s",
        entry.id, room_id, member.id, entry.title, entry.total_amount
    )
    return entry


def get_entry(*, entry_id: UUID, user: User) -> LedgerEntry:
    """
    Get a ledger entry with its splits.

    Any member of the entry's room may read it.

    Raises:
        EntryNotFoundError: If entry doesn't exist
        NotRoomMemberError: If user is not a member of the entry's room
    """
    entry = load_entry(entry_id)
    resolve_caller(room_id=entry.room_id, user=user)
    return entry


def list_entries(
    *,
    room_id: UUID,
    user: User,
    status: Optional[str] = None,
    include_cancelled: bool = False
) -> QuerySet[LedgerEntry]:
    """
    List a room's ledger entries, newest first.

    Cancelled entries are hidden unless ``include_cancelled`` is set or
    they are asked for explicitly through ``status``.

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoomMemberError: If user is not a room member
    """
    resolve_caller(room_id=room_id, user=user)

    queryset = _entries_with_splits().filter(room_id=room_id)

    if status:
        queryset = queryset.filter(status=status)
    elif not include_cancelled:
        queryset = queryset.exclude(status=LedgerEntryStatus.CANCELLED)

    return queryset.order_by('-created_at')


@transaction.atomic
def cancel_entry(*, entry_id: UUID, user: User) -> LedgerEntry:
    """
    Cancel a ledger entry.

    Allowed in any status. Only the head roommate or the entry's
    creator may cancel.

    Raises:
        EntryNotFoundError: If entry doesn't exist
        NotRoomMemberError: If user is not a room member
        InsufficientRoleError: If user is neither head roommate nor creator
    """
    entry = lock_entry(entry_id)
    member = resolve_caller(room_id=entry.room_id, user=user)

    is_head_roommate = member.role == RoomRole.HEAD_ROOMMATE
    is_creator = entry.created_by_id is not None and entry.created_by_id == member.id

    if not is_head_roommate and not is_creator:
        raise InsufficientRoleError("You don't have permission to cancel this entry")

    entry.status = LedgerEntryStatus.CANCELLED
    entry.save(update_fields=['status', 'updated_at'])

    logger.info("Ledger entry %s cancelled by member %s", entry.id, member.id)
    return entry


@transaction.atomic
def delete_entry(*, entry_id: UUID, user: User) -> None:
    """
    Delete a ledger entry and all of its splits.

    Raises:
        EntryNotFoundError: If entry doesn't exist
        NotRoomMemberError: If user is not a room member
        InsufficientRoleError: If user is not the head roommate
    """
    entry = lock_entry(entry_id)
    member = resolve_caller(room_id=entry.room_id, user=user)
    require_role(
        member,
        (RoomRole.HEAD_ROOMMATE,),
        "Only head roommates can delete ledger entries"
    )

    entry_pk = entry.id
    entry.delete()

    logger.info("Ledger entry %s deleted by member %s", entry_pk, member.id)
