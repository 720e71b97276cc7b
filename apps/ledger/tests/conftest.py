import pytest
from datetime import timedelta
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.rooms.models import Room, RoomMembership, RoomRole
from apps.ledger.models import LedgerEntry, LedgerEntryType, SplitType
from apps.ledger.services import calculate_equal_splits


def make_client(user):
    """Return an API client authenticated as the given user."""
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def head_user(db):
    """Create and return the head roommate user."""
    return User.objects.create_user(
        email='head@example.com',
        password='TestPass123!',
        first_name='Hana',
        last_name='Head',
    )


@pytest.fixture
def landlord_user(db):
    """Create and return the landlord user."""
    return User.objects.create_user(
        email='landlord@example.com',
        password='TestPass123!',
        first_name='Leo',
        last_name='Landlord',
    )


@pytest.fixture
def roommate_user(db):
    """Create and return a roommate user."""
    return User.objects.create_user(
        email='roommate@example.com',
        password='TestPass123!',
        first_name='Rita',
    )


@pytest.fixture
def other_roommate_user(db):
    """Create and return a second roommate user."""
    return User.objects.create_user(
        email='roommate2@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def guest_user(db):
    """Create and return a guest user."""
    return User.objects.create_user(
        email='guest@example.com',
        password='TestPass123!',
    )


@pytest.fixture
def outsider_user(db):
    """Create and return a user who is not in the room."""
    return User.objects.create_user(
        email='outsider@example.com',
        password='TestPass123!',
    )


# =============================================================================
# Room and memberships
# =============================================================================

@pytest.fixture
def room(db):
    """Create and return an empty room."""
    return Room.objects.create(name='Flat 4B', address='12 Elm Street')


@pytest.fixture
def head_member(room, head_user):
    return RoomMembership.objects.create(user=head_user, room=room, role=RoomRole.HEAD_ROOMMATE)


@pytest.fixture
def landlord_member(room, landlord_user):
    return RoomMembership.objects.create(user=landlord_user, room=room, role=RoomRole.LANDLORD)


@pytest.fixture
def roommate_member(room, roommate_user):
    return RoomMembership.objects.create(user=roommate_user, room=room, role=RoomRole.ROOMMATE)


@pytest.fixture
def other_roommate_member(room, other_roommate_user):
    return RoomMembership.objects.create(user=other_roommate_user, room=room, role=RoomRole.ROOMMATE)


@pytest.fixture
def guest_member(room, guest_user):
    return RoomMembership.objects.create(user=guest_user, room=room, role=RoomRole.GUEST)


@pytest.fixture
def household(room, head_member, landlord_member, roommate_member, other_roommate_member, guest_member):
    """
    Room with one member of each role used by the ledger.

    Head roommate and both roommates are charged by equal splits;
    the landlord and the guest are not. Join times are spread out so
    enumeration order is head, landlord, roommate, other roommate, guest.
    """
    base = timezone.now() - timedelta(days=30)
    members = [head_member, landlord_member, roommate_member, other_roommate_member, guest_member]
    for offset, member in enumerate(members):
        RoomMembership.objects.filter(id=member.id).update(joined_at=base + timedelta(hours=offset))
    return room


@pytest.fixture
def other_room(db, outsider_user):
    """A second room, headed by the outsider."""
    other = Room.objects.create(name='Flat 9C')
    RoomMembership.objects.create(user=outsider_user, room=other, role=RoomRole.HEAD_ROOMMATE)
    return other


@pytest.fixture
def outsider_member(other_room, outsider_user):
    return RoomMembership.objects.get(room=other_room, user=outsider_user)


# =============================================================================
# Ledger entries
# =============================================================================

@pytest.fixture
def entry(household, head_member):
    """A pending 100.00 entry with no splits."""
    return LedgerEntry.objects.create(
        room=household,
        created_by=head_member,
        title='March internet',
        entry_type=LedgerEntryType.INTERNET,
        total_amount=Decimal('100.00'),
        split_type=SplitType.MANUAL,
    )


@pytest.fixture
def approved_entry(entry, head_user):
    """The 100.00 entry split equally among head and both roommates."""
    return calculate_equal_splits(entry_id=entry.id, user=head_user)


@pytest.fixture
def roommate_split(approved_entry, roommate_member):
    return approved_entry.splits.get(member=roommate_member)


# =============================================================================
# API clients
# =============================================================================

@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def head_client(head_user):
    return make_client(head_user)


@pytest.fixture
def landlord_client(landlord_user):
    return make_client(landlord_user)


@pytest.fixture
def roommate_client(roommate_user):
    return make_client(roommate_user)


@pytest.fixture
def other_roommate_client(other_roommate_user):
    return make_client(other_roommate_user)


@pytest.fixture
def outsider_client(outsider_user):
    return make_client(outsider_user)
