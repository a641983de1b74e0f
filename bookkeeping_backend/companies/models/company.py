# companies/models/company.py

import uuid

from django.db import models
from django.db.models import Q


class Company(models.Model):
    """
    A tenant: an isolated company / organization.

    Every ledger record (cash account, transaction, invoice, client) belongs to
    exactly one company, and every engine operation is scoped to one company.

    - tax_number is optional, but if provided it must be unique
    - deactivating a company blocks its users from the API (see tenancy.py)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)

    tax_number = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="Tax registration number (optional). If set, must be unique.",
        db_index=True,
    )

    address = models.TextField(blank=True)
    phone = models.CharField(max_length=50, blank=True)

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "Companies"
        constraints = [
            models.UniqueConstraint(
                fields=["tax_number"],
                condition=Q(tax_number__isnull=False) & ~Q(tax_number=""),
                name="uniq_company_tax_number_when_present",
            ),
        ]

    def __str__(self):
        t = (self.tax_number or "").strip()
        if t:
            return f"{self.name} ({t})"
        return self.name
