# Generated manually for the ledger app

import uuid
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('rooms', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='LedgerEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, max_length=1000)),
                ('entry_type', models.CharField(choices=[('rent', 'Rent'), ('utility', 'Utility'), ('internet', 'Internet'), ('groceries', 'Groceries'), ('maintenance', 'Maintenance'), ('other', 'Other')], default='other', max_length=20)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('split_type', models.CharField(choices=[('equal', 'Equal'), ('manual', 'Manual'), ('percentage', 'Percentage')], default='equal', max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('partially_paid', 'Partially Paid'), ('paid', 'Paid'), ('cancelled', 'Cancelled')], default='pending', max_length=20)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_ledger_entries', to='rooms.roommembership')),
                ('room', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_entries', to='rooms.room')),
            ],
            options={
                'db_table': 'ledger_entries',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'ledger entries',
                'indexes': [
                    models.Index(fields=['room', 'created_at'], name='ledger_entry_room_created_idx'),
                    models.Index(fields=['room', 'status'], name='ledger_entry_room_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LedgerSplit',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount_owed', models.DecimalField(decimal_places=2, max_digits=10)),
                ('amount_paid', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('payment_status', models.CharField(choices=[('unpaid', 'Unpaid'), ('partial', 'Partial'), ('paid', 'Paid')], default='unpaid', max_length=20)),
                ('paid_at', models.DateTimeField(blank=True, null=True)),
                ('notes', models.CharField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('entry', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='splits', to='ledger.ledgerentry')),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='ledger_splits', to='rooms.roommembership')),
            ],
            options={
                'db_table': 'ledger_splits',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['member', 'payment_status'], name='ledger_split_member_status_idx'),
                    models.Index(fields=['entry', 'payment_status'], name='ledger_split_entry_status_idx'),
                ],
                'unique_together': {('entry', 'member')},
            },
        ),
    ]
