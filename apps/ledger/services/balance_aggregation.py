"""
Balance aggregation service.

Read-only per-member summaries of what is owed and paid across a room's
ledger. Nothing here writes, so repeated calls with no intervening
payments return identical results.
"""

from typing import Dict, List
from uuid import UUID

from django.conf import settings
from django.db.models import Count, Q, Sum

from apps.accounts.models import User
from apps.rooms.models import RoomMembership, RoomRole
from apps.rooms.services import get_member, list_members
from apps.ledger.models import LedgerEntryStatus, LedgerSplit, PaymentStatus
from apps.ledger.money import ZERO
from apps.ledger.exceptions import MemberNotFoundError

from .access import resolve_caller


def _room_splits(room_id: UUID):
    splits = LedgerSplit.objects.filter(entry__room_id=room_id)

    if not getattr(settings, 'LEDGER_BALANCES_INCLUDE_CANCELLED', True):
        splits = splits.exclude(entry__status=LedgerEntryStatus.CANCELLED)

    return splits


def _balance_for(member: RoomMembership, totals: Dict) -> Dict:
    total_owed = totals.get('total_owed') or ZERO
    total_paid = totals.get('total_paid') or ZERO

    return {
        'member_id': member.id,
        'member': member,
        'total_owed': total_owed,
        'total_paid': total_paid,
        'outstanding_balance': total_owed - total_paid,
        'unpaid_splits_count': totals.get('unpaid_splits_count') or 0,
    }


def _aggregate(splits) -> Dict:
    return splits.aggregate(
        total_owed=Sum('amount_owed'),
        total_paid=Sum('amount_paid'),
        unpaid_splits_count=Count('id', filter=~Q(payment_status=PaymentStatus.PAID)),
    )


def member_balances(*, room_id: UUID, user: User) -> List[Dict]:
    """
    Get balances for every member of a room except landlords.

    Landlords receive money rather than owe it, so they are left out.
    Results follow the room's member enumeration order.

    Args:
        room_id: UUID of the room
        user: Calling user (any room member)

    Returns:
        list[dict]: One dict per member with keys ``member_id``,
        ``member``, ``total_owed``, ``total_paid``,
        ``outstanding_balance`` and ``unpaid_splits_count``.

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoomMemberError: If user is not a room member
    """
    resolve_caller(room_id=room_id, user=user)

    members = [
        m for m in list_members(room_id=room_id)
        if m.role != RoomRole.LANDLORD
    ]

    rows = (
        _room_splits(room_id)
        .values('member_id')
        .annotate(
            total_owed=Sum('amount_owed'),
            total_paid=Sum('amount_paid'),
            unpaid_splits_count=Count('id', filter=~Q(payment_status=PaymentStatus.PAID)),
        )
        .order_by()
    )
    totals_by_member = {row['member_id']: row for row in rows}

    return [
        _balance_for(member, totals_by_member.get(member.id, {}))
        for member in members
    ]


def member_balance(*, room_id: UUID, member_id: UUID, user: User) -> Dict:
    """
    Get the balance of a single room member.

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoomMemberError: If user is not a room member
        MemberNotFoundError: If member_id is not a member of the room
    """
    resolve_caller(room_id=room_id, user=user)

    member = get_member(room_id=room_id, member_id=member_id)
    if member is None:
        raise MemberNotFoundError(member_id)

    totals = _aggregate(_room_splits(room_id).filter(member=member))
    return _balance_for(member, totals)
