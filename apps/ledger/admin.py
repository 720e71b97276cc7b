# ==========================================
# apps/ledger/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import LedgerEntry, LedgerSplit, LedgerEntryStatus, PaymentStatus


ENTRY_STATUS_COLORS = {
    LedgerEntryStatus.PENDING: ('#E5C49A', '#2C1810'),
    LedgerEntryStatus.APPROVED: ('#7A9CC6', 'white'),
    LedgerEntryStatus.PARTIALLY_PAID: ('#A47449', 'white'),
    LedgerEntryStatus.PAID: ('#6B8E5E', 'white'),
    LedgerEntryStatus.CANCELLED: ('#B85C5C', 'white'),
}

SPLIT_STATUS_COLORS = {
    PaymentStatus.UNPAID: ('#E5C49A', '#2C1810'),
    PaymentStatus.PARTIAL: ('#A47449', 'white'),
    PaymentStatus.PAID: ('#6B8E5E', 'white'),
}


def badge(label, colors):
    bg, fg = colors
    return format_html(
        '<span style="background: {}; color: {}; padding: 3px 8px; '
        'border-radius: 10px; font-size: 11px;">{}</span>',
        bg, fg, label
    )


class LedgerSplitInline(admin.TabularInline):
    """Inline admin for splits within an entry."""
    model = LedgerSplit
    extra = 0
    fields = [
        'member',
        'amount_owed',
        'amount_paid',
        'status_badge',
        'paid_at',
        'notes',
    ]
    readonly_fields = [
        'member',
        'amount_owed',
        'amount_paid',
        'status_badge',
        'paid_at',
        'notes',
    ]

    def status_badge(self, obj):
        return badge(
            obj.get_payment_status_display(),
            SPLIT_STATUS_COLORS.get(obj.payment_status, ('#ccc', '#666'))
        )
    status_badge.short_description = 'Status'

    def has_add_permission(self, request, obj=None):
        """Splits are created by the assignment services."""
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """
    Admin interface for Ledger Entries.

    Lists entries with their payment progress and shows the splits
    inline. Amounts, membership and status are read-only: entries are
    created, split, paid and cancelled through the API services.
    """

    list_display = [
        'title',
        'room',
        'entry_type',
        'total_amount',
        'get_paid_display',
        'status_badge',
        'due_date',
        'created_at',
    ]

    list_filter = [
        'status',
        'entry_type',
        'split_type',
        'created_at',
    ]

    search_fields = [
        'title',
        'description',
        'room__name',
        'created_by__user__email',
    ]

    readonly_fields = [
        'room',
        'created_by',
        'total_amount',
        'split_type',
        'status',
        'created_at',
        'updated_at',
    ]
    inlines = [LedgerSplitInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    fieldsets = (
        ('Entry Information', {
            'fields': (
                'room',
                'created_by',
                'title',
                'description',
                'entry_type',
            )
        }),
        ('Financial Details', {
            'fields': (
                'total_amount',
                'split_type',
                'status',
                'due_date',
            )
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def has_add_permission(self, request):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('room', 'created_by__user')

    def get_paid_display(self, obj):
        return f"{obj.get_total_paid()} / {obj.total_amount}"
    get_paid_display.short_description = 'Paid'

    def status_badge(self, obj):
        return badge(
            obj.get_status_display(),
            ENTRY_STATUS_COLORS.get(obj.status, ('#ccc', '#666'))
        )
    status_badge.short_description = 'Status'


@admin.register(LedgerSplit)
class LedgerSplitAdmin(admin.ModelAdmin):
    """Read-only admin for Ledger Splits. Splits change only through the services."""

    list_display = [
        'entry',
        'member',
        'amount_owed',
        'amount_paid',
        'payment_status',
        'paid_at',
    ]
    list_filter = ['payment_status', 'paid_at']
    search_fields = ['entry__title', 'member__user__email', 'notes']
    readonly_fields = [
        'entry',
        'member',
        'amount_owed',
        'amount_paid',
        'payment_status',
        'paid_at',
        'notes',
        'created_at',
        'updated_at',
    ]
    ordering = ['-created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('entry', 'member__user')
