# ledger/models/cash_account.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.db import models
from django.db.models import Q
from django.db.models.functions import Lower

from ledger.models.querysets import TenantQuerySet


class CashAccountKind(models.TextChoices):
    CASH = "CASH", "Cash"
    CREDIT_CARD = "CREDIT_CARD", "Credit card"
    BANK_ACCOUNT = "BANK_ACCOUNT", "Bank account"


class CashAccountQuerySet(TenantQuerySet):
    def active(self):
        return self.filter(is_active=True)


class CashAccount(models.Model):
    """
    A place money sits in (till, bank account, credit card).

    Rules:
    - balance starts equal to initial_balance
    - balance is maintained ONLY by ledger.services.balance_service
      (atomic F() increments); no other code path writes it
    - name is unique among the company's ACTIVE accounts
    - "deleting" an account with history deactivates it (see cascade_service)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="cash_accounts",
    )

    name = models.CharField(max_length=120)

    kind = models.CharField(
        max_length=20,
        choices=CashAccountKind.choices,
        default=CashAccountKind.CASH,
    )

    initial_balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )

    balance = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
        editable=False,
    )

    is_active = models.BooleanField(default=True)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CashAccountQuerySet.as_manager()

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["company", "is_active"], name="ledger_cash_company_8b7f2a_idx"),
        ]
        constraints = [
            models.UniqueConstraint(
                "company",
                Lower("name"),
                condition=Q(is_active=True),
                name="uniq_active_cash_account_lower_name_per_company",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.get_kind_display()})"
