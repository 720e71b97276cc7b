"""
Rooms app services layer.

The ledger consumes rooms only through these lookups.
"""

from .exceptions import (
    RoomsServiceError,
    RoomNotFoundError,
)

from .membership import (
    get_room,
    resolve_member,
    get_member,
    list_members,
)


__all__ = [
    # Exceptions
    'RoomsServiceError',
    'RoomNotFoundError',

    # Membership lookups
    'get_room',
    'resolve_member',
    'get_member',
    'list_members',
]
