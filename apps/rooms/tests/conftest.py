import pytest
from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership, RoomRole


@pytest.fixture
def resident(db):
    """Create and return a user who lives in the room."""
    return User.objects.create_user(
        email='resident@example.com',
        password='TestPass123!',
        first_name='Rosa',
    )


@pytest.fixture
def stranger(db):
    """Create and return a user with no memberships."""
    return User.objects.create_user(
        email='stranger@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def room(db):
    return Room.objects.create(name='Flat 2A')


@pytest.fixture
def resident_membership(room, resident):
    return RoomMembership.objects.create(user=resident, room=room, role=RoomRole.HEAD_ROOMMATE)
