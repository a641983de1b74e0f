# ledger/models/transaction.py

from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from ledger.models.querysets import AllRowsManager, LiveManager


class TransactionKind(models.TextChoices):
    INCOME = "INCOME", "Income"
    EXPENSE = "EXPENSE", "Expense"


class Transaction(models.Model):
    """
    A single income or expense record.

    A transaction is COUNTED (contributes to its cash account's balance) iff:
        cash_account is set AND is_paid AND NOT is_deleted

    Invoice-linked transactions (invoice is set) are the auto-generated payables
    of an invoice. Only cash_account and is_paid may change on them.

    Deletion is a tombstone (is_deleted=True). Tombstones are hidden by the
    default manager; use Transaction.all_objects to see them.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="transactions",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ledger_transactions",
    )

    kind = models.CharField(max_length=10, choices=TransactionKind.choices)
    category = models.CharField(max_length=120)

    amount = models.DecimalField(max_digits=14, decimal_places=2)

    description = models.TextField(blank=True, default="")
    date = models.DateField(default=timezone.localdate)

    cash_account = models.ForeignKey(
        "ledger.CashAccount",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="transactions",
    )

    invoice = models.OneToOneField(
        "ledger.Invoice",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="payable_transaction",
    )

    is_paid = models.BooleanField(default=False)

    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LiveManager()
    all_objects = AllRowsManager()

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(
                fields=["company", "is_deleted", "date"],
                name="ledger_tran_company_3f9a1c_idx",
            ),
            models.Index(
                fields=["cash_account", "is_paid", "is_deleted"],
                name="ledger_tran_cash_ac_7d2e4b_idx",
            ),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(amount__gt=0),
                name="chk_transaction_amount_positive",
            ),
        ]

    def __str__(self):
        return f"{self.kind} {self.amount} - {self.category} ({self.date})"

    @property
    def is_invoice_linked(self) -> bool:
        return self.invoice_id is not None

    @property
    def is_counted(self) -> bool:
        return bool(self.cash_account_id and self.is_paid and not self.is_deleted)
