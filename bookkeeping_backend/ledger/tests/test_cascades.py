# ledger/tests/test_cascades.py

from __future__ import annotations

import uuid
from decimal import Decimal

from django.test import TestCase

from ledger.models import CashAccount, Invoice, Transaction
from ledger.services.cascade_service import delete_cash_account, delete_invoice
from ledger.services.exceptions import NotFoundError
from ledger.services.transaction_service import delete_transaction, edit_transaction
from ledger.tests.base import LedgerFixturesMixin


class InvoiceDeleteTests(LedgerFixturesMixin, TestCase):
    """
    GUARANTEES:
    - invoice + payable are tombstoned together
    - a counted payable's effect is reversed in the same unit of work
    """

    def test_delete_unpaid_invoice(self):
        invoice = self.add_invoice()
        payable_id = Transaction.objects.get(invoice=invoice).pk

        delete_invoice(company=self.company, invoice_id=invoice.pk)

        self.assertFalse(Invoice.objects.filter(pk=invoice.pk).exists())
        self.assertFalse(Transaction.objects.filter(pk=payable_id).exists())
        self.assertTrue(Transaction.all_objects.get(pk=payable_id).is_deleted)
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_delete_paid_invoice_reverses_payment(self):
        invoice = self.add_invoice()
        payable = Transaction.objects.get(invoice=invoice)
        edit_transaction(
            company=self.company,
            transaction_id=payable.pk,
            patch={"is_paid": True, "cash_account_id": self.account.pk},
        )
        self.assertEqual(self.balance(), Decimal("750.00"))

        delete_invoice(company=self.company, invoice_id=invoice.pk)

        self.assertEqual(self.balance(), Decimal("1000.00"))
        self.assertInvariant()

    def test_second_delete_is_not_found(self):
        invoice = self.add_invoice()
        delete_invoice(company=self.company, invoice_id=invoice.pk)

        with self.assertRaises(NotFoundError):
            delete_invoice(company=self.company, invoice_id=invoice.pk)

    def test_other_tenant_cannot_delete(self):
        invoice = self.add_invoice()
        with self.assertRaises(NotFoundError):
            delete_invoice(company=self.other_company, invoice_id=invoice.pk)
        self.assertTrue(Invoice.objects.filter(pk=invoice.pk).exists())


class CashAccountDeleteTests(LedgerFixturesMixin, TestCase):
    def test_scenario_f_account_with_history_is_deactivated(self):
        paid = self.add_txn(kind="INCOME", amount="500.00")
        unpaid = self.add_txn(kind="EXPENSE", amount="80.00", paid=False)
        self.assertEqual(self.balance(), Decimal("1500.00"))

        result = delete_cash_account(company=self.company, cash_account_id=self.account.pk)

        self.assertFalse(result.hard_deleted)
        self.assertEqual(result.orphaned_transaction_count, 2)

        account = CashAccount.objects.get(pk=self.account.pk)
        self.assertFalse(account.is_active)

        for txn in (paid, unpaid):
            txn.refresh_from_db()
            self.assertIsNone(txn.cash_account_id)
            self.assertFalse(txn.is_paid)

        # Prior contributions are not reversed on the abandoned account.
        self.assertEqual(account.balance, Decimal("1500.00"))

    def test_account_without_history_is_hard_deleted(self):
        spare = self.account
        result = delete_cash_account(company=self.company, cash_account_id=spare.pk)

        self.assertTrue(result.hard_deleted)
        self.assertEqual(result.orphaned_transaction_count, 0)
        self.assertFalse(CashAccount.objects.filter(pk=spare.pk).exists())

    def test_soft_deleted_history_keeps_account_row(self):
        txn = self.add_txn(kind="INCOME", amount="100.00")
        delete_transaction(company=self.company, transaction_id=txn.pk)

        result = delete_cash_account(company=self.company, cash_account_id=self.account.pk)

        self.assertFalse(result.hard_deleted)
        self.assertEqual(result.orphaned_transaction_count, 1)
        account = CashAccount.objects.get(pk=self.account.pk)
        self.assertFalse(account.is_active)
        tombstone = Transaction.all_objects.get(pk=txn.pk)
        self.assertTrue(tombstone.is_deleted)
        self.assertIsNone(tombstone.cash_account_id)
        self.assertFalse(tombstone.is_paid)

    def test_name_is_reusable_after_deactivation(self):
        from ledger.services.cash_account_service import create_cash_account

        self.add_txn()
        delete_cash_account(company=self.company, cash_account_id=self.account.pk)

        fresh = create_cash_account(company=self.company, name="Main Till")
        self.assertTrue(fresh.is_active)

    def test_unknown_or_foreign_account(self):
        with self.assertRaises(NotFoundError):
            delete_cash_account(company=self.company, cash_account_id=uuid.uuid4())
        with self.assertRaises(NotFoundError):
            delete_cash_account(company=self.other_company, cash_account_id=self.account.pk)
