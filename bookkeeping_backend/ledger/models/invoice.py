# ledger/models/invoice.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from ledger.models.querysets import AllRowsManager, LiveManager


class InvoiceStatus(models.TextChoices):
    DRAFT = "DRAFT", "Draft"
    SENT = "SENT", "Sent"
    UNPAID = "UNPAID", "Unpaid"
    PAID = "PAID", "Paid"
    OVERDUE = "OVERDUE", "Overdue"


class Invoice(models.Model):
    """
    Supplier invoice with line items and one companion payable transaction.

    - number: INV-YYYYMM-NNNN, unique per company (see invoice_numbering)
    - total_amount: derived sum of item line totals (never client-supplied)
    - status: maintained by ledger.services.invoice_status
    - soft-deleted together with its payable transaction
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="invoices",
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="ledger_invoices",
    )

    client = models.ForeignKey(
        "ledger.Client",
        on_delete=models.PROTECT,
        related_name="invoices",
    )

    number = models.CharField(max_length=32)

    issue_date = models.DateField(default=timezone.localdate)
    due_date = models.DateField()

    status = models.CharField(
        max_length=10,
        choices=InvoiceStatus.choices,
        default=InvoiceStatus.UNPAID,
    )

    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    notes = models.TextField(blank=True, default="")

    is_deleted = models.BooleanField(default=False)
    deleted_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = LiveManager()
    all_objects = AllRowsManager()

    class Meta:
        ordering = ["-issue_date", "-number"]
        indexes = [
            models.Index(
                fields=["company", "is_deleted", "status"],
                name="ledger_invo_company_0c4d9e_idx",
            ),
            models.Index(fields=["due_date"], name="ledger_invo_due_dat_6a1b3f_idx"),
        ]
        constraints = [
            # Tombstones keep their number, so numbers are never reused.
            models.UniqueConstraint(
                fields=["company", "number"],
                name="uniq_invoice_number_per_company",
            ),
        ]

    def __str__(self):
        return f"{self.number} ({self.status})"


class InvoiceItem(models.Model):
    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name="items",
    )

    description = models.CharField(max_length=255)

    quantity = models.DecimalField(max_digits=12, decimal_places=2)
    unit_price = models.DecimalField(max_digits=14, decimal_places=2)
    line_total = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=Q(quantity__gt=0),
                name="chk_invoice_item_quantity_positive",
            ),
            models.CheckConstraint(
                condition=Q(unit_price__gt=0),
                name="chk_invoice_item_unit_price_positive",
            ),
        ]

    def __str__(self):
        return f"{self.description} x {self.quantity}"
