from decimal import Decimal
from rest_framework import serializers
from .models import (
    LedgerEntry,
    LedgerSplit,
    LedgerEntryType,
    LedgerEntryStatus,
    SplitType,
)
from apps.rooms.models import RoomMembership


MONEY_FIELD_KWARGS = {'max_digits': 10, 'decimal_places': 2}


def money_repr(value):
    """Render a Decimal the way DecimalField does (a two-place string)."""
    return serializers.DecimalField(**MONEY_FIELD_KWARGS).to_representation(value)


# =============================================================================
# Input Serializers
# =============================================================================

class LedgerEntryFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for ledger entry listing.

    Query Parameters:
        status (str): Filter by entry status
        include_cancelled (bool): Also list cancelled entries
    """

    status = serializers.ChoiceField(
        choices=LedgerEntryStatus.choices,
        required=False
    )
    include_cancelled = serializers.BooleanField(required=False, default=False)


class LedgerEntryCreateSerializer(serializers.Serializer):
    """Validate input for creating a ledger entry."""

    title = serializers.CharField(max_length=200)
    description = serializers.CharField(max_length=1000, required=False, allow_blank=True, default='')
    entry_type = serializers.ChoiceField(choices=LedgerEntryType.choices)
    total_amount = serializers.DecimalField(
        min_value=Decimal('0.01'),
        **MONEY_FIELD_KWARGS
    )
    split_type = serializers.ChoiceField(choices=SplitType.choices)
    due_date = serializers.DateField(required=False, allow_null=True, default=None)


class SplitAssignmentSerializer(serializers.Serializer):
    """One member's amount in a manual split assignment."""

    member_id = serializers.UUIDField()
    amount = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')


class AssignSplitsInputSerializer(serializers.Serializer):
    """
    Validate input for manual split assignment.

    Fields:
        assignments (list): Member ID, amount and optional notes per split
    """

    assignments = SplitAssignmentSerializer(many=True, allow_empty=False)


class RecordPaymentInputSerializer(serializers.Serializer):
    """
    Validate input for recording a payment.

    Fields:
        amount (Decimal): Amount paid, must be positive
        notes (str): Optional note stored on the split
    """

    amount = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    notes = serializers.CharField(max_length=500, required=False, allow_blank=True, default='')

    def validate_amount(self, value):
        if value <= 0:
            raise serializers.ValidationError('Amount must be positive')
        return value


# =============================================================================
# Output Serializers
# =============================================================================

class RoomMemberMinimalSerializer(serializers.ModelSerializer):
    """Minimal room member info for nested serialization."""

    user_id = serializers.UUIDField(source='user.id', read_only=True)
    email = serializers.EmailField(source='user.email', read_only=True)
    name = serializers.SerializerMethodField()

    class Meta:
        model = RoomMembership
        fields = ['id', 'user_id', 'name', 'email', 'role']
        read_only_fields = fields

    def get_name(self, obj):
        return obj.user.get_display_name()


class LedgerSplitSerializer(serializers.ModelSerializer):
    """Serializer for ledger splits."""

    member = RoomMemberMinimalSerializer(read_only=True)
    entry_status = serializers.CharField(source='entry.status', read_only=True)
    remaining_balance = serializers.SerializerMethodField()

    class Meta:
        model = LedgerSplit
        fields = [
            'id',
            'entry',
            'entry_status',
            'member',
            'amount_owed',
            'amount_paid',
            'payment_status',
            'paid_at',
            'notes',
            'remaining_balance',
        ]
        read_only_fields = fields

    def get_remaining_balance(self, obj):
        return money_repr(obj.get_remaining_balance())


class LedgerEntrySerializer(serializers.ModelSerializer):
    """Main serializer for ledger entries, with splits and payment totals."""

    created_by = RoomMemberMinimalSerializer(read_only=True)
    splits = LedgerSplitSerializer(many=True, read_only=True)
    total_paid = serializers.SerializerMethodField()
    remaining_balance = serializers.SerializerMethodField()

    class Meta:
        model = LedgerEntry
        fields = [
            'id',
            'room',
            'created_by',
            'title',
            'description',
            'entry_type',
            'total_amount',
            'split_type',
            'status',
            'due_date',
            'splits',
            'total_paid',
            'remaining_balance',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields

    def _total_paid(self, obj):
        # splits are prefetched by the services
        return sum((s.amount_paid for s in obj.splits.all()), Decimal('0.00'))

    def get_total_paid(self, obj):
        return money_repr(self._total_paid(obj))

    def get_remaining_balance(self, obj):
        return money_repr(obj.total_amount - self._total_paid(obj))


class MemberBalanceSerializer(serializers.Serializer):
    """Serializer for a member's ledger balance."""

    member_id = serializers.UUIDField()
    member = RoomMemberMinimalSerializer()
    total_owed = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    total_paid = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    outstanding_balance = serializers.DecimalField(**MONEY_FIELD_KWARGS)
    unpaid_splits_count = serializers.IntegerField()
