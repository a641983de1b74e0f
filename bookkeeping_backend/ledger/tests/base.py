# ledger/tests/base.py

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.utils import timezone

from companies.models import Company
from ledger.models import CashAccount, Client, InvoiceStatus
from ledger.services.balance_service import expected_balance
from ledger.services.cash_account_service import create_cash_account
from ledger.services.invoice_service import create_invoice
from ledger.services.transaction_service import create_transaction


class LedgerFixturesMixin:
    """
    Shared fixtures: one tenant with a user, a client and a 1000.00 cash account,
    plus a second tenant for isolation checks.
    """

    def setUp(self):
        super().setUp()
        User = get_user_model()

        self.company = Company.objects.create(name="Acme Ltd")
        self.other_company = Company.objects.create(name="Other Co")

        self.user = User.objects.create_user(
            email="owner@acme.test",
            password="pass12345",
            company=self.company,
        )
        self.client_record = Client.objects.create(company=self.company, name="Globex Supplies")
        self.account = create_cash_account(
            company=self.company,
            name="Main Till",
            kind="CASH",
            initial_balance="1000.00",
        )

    # -------------------------
    # helpers
    # -------------------------
    def today(self):
        return timezone.localdate()

    def balance(self, account=None) -> Decimal:
        account = account or self.account
        return CashAccount.objects.get(pk=account.pk).balance

    def assertInvariant(self, account=None):
        account = CashAccount.objects.get(pk=(account or self.account).pk)
        self.assertEqual(account.balance, expected_balance(account))

    def add_txn(self, *, kind="INCOME", amount="100.00", paid=True, account=None, **extra):
        account = self.account if account is None else account
        return create_transaction(
            company=self.company,
            user=self.user,
            kind=kind,
            category=extra.pop("category", "Sales"),
            amount=amount,
            cash_account_id=account.pk if account else None,
            is_paid=paid,
            **extra,
        )

    def add_invoice(self, *, due_in_days=10, items=None, **extra):
        if items is None:
            items = [
                {"description": "Paper", "quantity": "2", "unit_price": "50.00"},
                {"description": "Toner", "quantity": "1", "unit_price": "150.00"},
            ]
        return create_invoice(
            company=self.company,
            user=self.user,
            client_id=self.client_record.pk,
            due_date=self.today() + timedelta(days=due_in_days),
            items=items,
            **extra,
        )

    def assertStatus(self, invoice, expected: InvoiceStatus):
        invoice.refresh_from_db()
        self.assertEqual(invoice.status, expected)
