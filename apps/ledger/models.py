from django.db import models
from django.db.models import Sum
from django.core.validators import MinValueValidator
from django.utils import timezone
from decimal import Decimal
import uuid


class LedgerEntryType(models.TextChoices):
    RENT = 'rent', 'Rent'
    UTILITY = 'utility', 'Utility'
    INTERNET = 'internet', 'Internet'
    GROCERIES = 'groceries', 'Groceries'
    MAINTENANCE = 'maintenance', 'Maintenance'
    OTHER = 'other', 'Other'


class SplitType(models.TextChoices):
    EQUAL = 'equal', 'Equal'
    MANUAL = 'manual', 'Manual'
    PERCENTAGE = 'percentage', 'Percentage'


class LedgerEntryStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    APPROVED = 'approved', 'Approved'
    PARTIALLY_PAID = 'partially_paid', 'Partially Paid'
    PAID = 'paid', 'Paid'
    CANCELLED = 'cancelled', 'Cancelled'


class PaymentStatus(models.TextChoices):
    UNPAID = 'unpaid', 'Unpaid'
    PARTIAL = 'partial', 'Partial'
    PAID = 'paid', 'Paid'


class LedgerEntry(models.Model):
    """Shared expense recorded for a room."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    room = models.ForeignKey(
        'rooms.Room',
        on_delete=models.CASCADE,
        related_name='ledger_entries'
    )
    created_by = models.ForeignKey(
        'rooms.RoomMembership',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_ledger_entries'
    )

    title = models.CharField(max_length=200)
    description = models.TextField(max_length=1000, blank=True)
    entry_type = models.CharField(
        max_length=20,
        choices=LedgerEntryType.choices,
        default=LedgerEntryType.OTHER
    )

    # Financial details
    total_amount = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))]
    )
    split_type = models.CharField(
        max_length=20,
        choices=SplitType.choices,
        default=SplitType.EQUAL
    )
    status = models.CharField(
        max_length=20,
        choices=LedgerEntryStatus.choices,
        default=LedgerEntryStatus.PENDING
    )
    due_date = models.DateField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ledger_entries'
        indexes = [
            models.Index(fields=['room', 'created_at'], name='ledger_entry_room_created_idx'),
            models.Index(fields=['room', 'status'], name='ledger_entry_room_status_idx'),
        ]
        ordering = ['-created_at']
        verbose_name_plural = 'ledger entries'

    def __str__(self):
        return f"{self.title} - {self.total_amount} ({self.get_status_display()})"

    def get_total_paid(self):
        """Sum of payments recorded across all splits."""
        return self.splits.aggregate(
            total=Sum('amount_paid')
        )['total'] or Decimal('0.00')

    def get_remaining_balance(self):
        return self.total_amount - self.get_total_paid()

    def is_fully_paid(self):
        return self.get_total_paid() >= self.total_amount

    def update_payment_status(self):
        """Roll status forward from the splits' aggregate payment."""
        total_paid = self.get_total_paid()

        if total_paid >= self.total_amount:
            self.status = LedgerEntryStatus.PAID
        elif total_paid > Decimal('0.00'):
            self.status = LedgerEntryStatus.PARTIALLY_PAID
        else:
            return

        self.save(update_fields=['status', 'updated_at'])


class LedgerSplit(models.Model):
    """One member's portion of a ledger entry."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    entry = models.ForeignKey(
        LedgerEntry,
        on_delete=models.CASCADE,
        related_name='splits'
    )
    member = models.ForeignKey(
        'rooms.RoomMembership',
        on_delete=models.CASCADE,
        related_name='ledger_splits'
    )

    amount_owed = models.DecimalField(max_digits=10, decimal_places=2)
    amount_paid = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=Decimal('0.00')
    )

    # Payment tracking
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID
    )
    paid_at = models.DateTimeField(null=True, blank=True)
    notes = models.CharField(max_length=500, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'ledger_splits'
        unique_together = [['entry', 'member']]
        indexes = [
            models.Index(fields=['member', 'payment_status'], name='ledger_split_member_status_idx'),
            models.Index(fields=['entry', 'payment_status'], name='ledger_split_entry_status_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        return f"{self.member.user.get_display_name()} owes {self.amount_owed} ({self.payment_status})"

    def get_remaining_balance(self):
        return self.amount_owed - self.amount_paid

    def is_fully_paid(self):
        return self.amount_paid >= self.amount_owed

    def apply_payment(self, amount):
        """
        Add a payment and recompute the payment status.

        ``paid_at`` is stamped only when the split first reaches PAID;
        later payments on an already paid split keep the original time.
        """
        self.amount_paid = self.amount_paid + amount

        if self.amount_paid == Decimal('0.00'):
            self.payment_status = PaymentStatus.UNPAID
        elif self.amount_paid >= self.amount_owed:
            if self.paid_at is None:
                self.paid_at = timezone.now()
            self.payment_status = PaymentStatus.PAID
        else:
            self.payment_status = PaymentStatus.PARTIAL

        self.save(update_fields=[
            'amount_paid', 'payment_status', 'paid_at', 'notes', 'updated_at'
        ])
