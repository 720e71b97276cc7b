"""
Caller resolution and role checks.

Every ledger operation starts by resolving the caller to a room
membership and, where the operation is restricted, requiring a role.
"""

from typing import Iterable
from uuid import UUID

from apps.accounts.models import User
from apps.rooms.models import RoomMembership
from apps.rooms.services import resolve_member, RoomNotFoundError as RoomLookupError

from apps.ledger.exceptions import (
    RoomNotFoundError,
    NotRoomMemberError,
    InsufficientRoleError,
)


def resolve_caller(*, room_id: UUID, user: User) -> RoomMembership:
    """
    Resolve the calling user to their membership in a room.

    Raises:
        RoomNotFoundError: If room doesn't exist
        NotRoomMemberError: If user is not a member of the room
    """
    try:
        membership = resolve_member(room_id=room_id, user=user)
    except RoomLookupError as e:
        raise RoomNotFoundError(str(e))

    if membership is None:
        raise NotRoomMemberError("You are not a member of this room")

    return membership


def require_role(
    membership: RoomMembership,
    allowed_roles: Iterable[str],
    message: str = "You do not have permission to perform this action"
) -> RoomMembership:
    """
    Ensure the member holds one of the allowed roles.

    Raises:
        InsufficientRoleError: If the member's role is not allowed
    """
    if membership.role not in allowed_roles:
        raise InsufficientRoleError(message)
    return membership
