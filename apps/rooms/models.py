# ==========================================
# apps/rooms/models.py
# ==========================================

from django.db import models
import uuid


class RoomRole(models.TextChoices):
    LANDLORD = 'landlord', 'Landlord'
    HEAD_ROOMMATE = 'head_roommate', 'Head Roommate'
    ROOMMATE = 'roommate', 'Roommate'
    ASSISTANT = 'assistant', 'Assistant'
    GUEST = 'guest', 'Guest'


class Room(models.Model):
    """Shared household whose members split expenses."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    address = models.CharField(max_length=300, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'rooms'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def has_member(self, user):
        return self.memberships.filter(user=user).exists()

    def get_user_role(self, user):
        try:
            return self.memberships.get(user=user).role
        except RoomMembership.DoesNotExist:
            return None


class RoomMembership(models.Model):
    """User membership in a room with role."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='room_memberships')
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=RoomRole.choices, default=RoomRole.ROOMMATE)
    joined_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'room_memberships'
        unique_together = [['user', 'room']]
        indexes = [
            models.Index(fields=['room', 'role'], name='room_member_room_role_idx'),
            models.Index(fields=['user', 'joined_at'], name='room_member_user_joined_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.room.name} ({self.role})"
