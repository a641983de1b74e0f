# ledger/models/client.py

import uuid

from django.db import models

from ledger.models.querysets import TenantQuerySet


class Client(models.Model):
    """
    Counterparty named on invoices (tenant-scoped master data).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="clients",
    )

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50, blank=True, default="")
    address = models.TextField(blank=True, default="")
    tax_id = models.CharField(max_length=50, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    objects = TenantQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["company", "name"], name="ledger_clie_company_5e1c0d_idx"),
        ]

    def __str__(self):
        return self.name
