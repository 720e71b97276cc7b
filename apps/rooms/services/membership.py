"""
Membership lookup service.

Read-only answers about who belongs to a room and with which role.
Other apps use these functions instead of querying memberships directly.
"""

from typing import Optional
from uuid import UUID

from django.db.models import QuerySet

from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership

from .exceptions import RoomNotFoundError


def get_room(*, room_id: UUID) -> Room:
    """
    Get a room by ID.

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    try:
        return Room.objects.get(id=room_id)
    except Room.DoesNotExist:
        raise RoomNotFoundError(f"Room with ID {room_id} not found")


def resolve_member(*, room_id: UUID, user: User) -> Optional[RoomMembership]:
    """
    Resolve the caller's membership (and therefore role) in a room.

    Args:
        room_id: UUID of the room
        user: User to look up

    Returns:
        RoomMembership instance, or None if the user is not a member

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    room = get_room(room_id=room_id)

    return (
        RoomMembership.objects
        .select_related('user', 'room')
        .filter(room=room, user=user)
        .first()
    )


def get_member(*, room_id: UUID, member_id: UUID) -> Optional[RoomMembership]:
    """Return the membership with this ID if it belongs to the room."""
    return (
        RoomMembership.objects
        .select_related('user')
        .filter(room_id=room_id, id=member_id)
        .first()
    )


def list_members(*, room_id: UUID) -> QuerySet[RoomMembership]:
    """
    List all members of a room in enumeration order (oldest first).

    Raises:
        RoomNotFoundError: If room doesn't exist
    """
    if not Room.objects.filter(id=room_id).exists():
        raise RoomNotFoundError(f"Room with ID {room_id} not found")

    return (
        RoomMembership.objects
        .filter(room_id=room_id)
        .select_related('user')
        .order_by('joined_at')
    )
