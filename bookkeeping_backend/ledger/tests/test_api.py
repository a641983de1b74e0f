# ledger/tests/test_api.py

from __future__ import annotations

import uuid
from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from ledger.models import Invoice, InvoiceStatus, Transaction
from ledger.services.exceptions import TransientError
from ledger.tests.base import LedgerFixturesMixin

BASE = "/api/ledger"


class LedgerAPITestCase(LedgerFixturesMixin, TestCase):
    def setUp(self):
        super().setUp()
        self.api = APIClient()
        self.api.force_authenticate(user=self.user)


class AccessTests(LedgerAPITestCase):
    def test_requires_authentication(self):
        res = APIClient().get(f"{BASE}/transactions/")
        self.assertEqual(res.status_code, 401)

    def test_user_without_company_is_forbidden(self):
        loner = get_user_model().objects.create_user(email="loner@example.test", password="pass12345")
        api = APIClient()
        api.force_authenticate(user=loner)

        res = api.get(f"{BASE}/cash-accounts/")
        self.assertEqual(res.status_code, 403)

    def test_deactivated_company_is_forbidden(self):
        self.company.is_active = False
        self.company.save(update_fields=["is_active"])

        res = self.api.get(f"{BASE}/invoices/")
        self.assertEqual(res.status_code, 403)


class CashAccountAPITests(LedgerAPITestCase):
    def test_create_and_list(self):
        res = self.api.post(
            f"{BASE}/cash-accounts/",
            {"name": "Bank", "kind": "BANK_ACCOUNT", "initial_balance": "250.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(Decimal(res.data["balance"]), Decimal("250.00"))

        res = self.api.get(f"{BASE}/cash-accounts/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual({a["name"] for a in res.data}, {"Main Till", "Bank"})

    def test_duplicate_name(self):
        res = self.api.post(f"{BASE}/cash-accounts/", {"name": "Main Till"}, format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "DUPLICATE_NAME")

    def test_patch_ignores_balance(self):
        res = self.api.patch(
            f"{BASE}/cash-accounts/{self.account.pk}/",
            {"description": "front desk", "balance": "999999.00"},
            format="json",
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(Decimal(res.data["balance"]), Decimal("1000.00"))
        self.assertEqual(res.data["description"], "front desk")

    def test_detail_includes_live_transactions(self):
        keep = self.add_txn(amount="5.00")
        gone = self.add_txn(amount="6.00")
        self.api.delete(f"{BASE}/transactions/{gone.pk}/")

        res = self.api.get(f"{BASE}/cash-accounts/{self.account.pk}/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual([t["id"] for t in res.data["transactions"]], [str(keep.pk)])

    def test_delete_reports_cascade(self):
        self.add_txn()
        self.add_txn(paid=False)

        res = self.api.delete(f"{BASE}/cash-accounts/{self.account.pk}/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"hard_deleted": False, "orphaned_transaction_count": 2})


class TransactionAPITests(LedgerAPITestCase):
    def _create(self, **overrides):
        payload = {
            "kind": "INCOME",
            "category": "Sales",
            "amount": "500.00",
            "cash_account_id": str(self.account.pk),
            "is_paid": True,
        }
        payload.update(overrides)
        return self.api.post(f"{BASE}/transactions/", payload, format="json")

    def test_create_edit_delete_roundtrip(self):
        res = self._create()
        self.assertEqual(res.status_code, 201, res.data)
        txn_id = res.data["id"]
        self.assertEqual(self.balance(), Decimal("1500.00"))

        res = self.api.patch(f"{BASE}/transactions/{txn_id}/", {"amount": "200.00"}, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(self.balance(), Decimal("1200.00"))

        res = self.api.delete(f"{BASE}/transactions/{txn_id}/")
        self.assertEqual(res.status_code, 204)
        self.assertEqual(self.balance(), Decimal("1000.00"))

        res = self.api.delete(f"{BASE}/transactions/{txn_id}/")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["code"], "NOT_FOUND")

    def test_invalid_amount_code(self):
        res = self._create(amount="0.00")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "INVALID_AMOUNT")
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_invalid_reference_code(self):
        res = self._create(cash_account_id=str(uuid.uuid4()))
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "INVALID_REFERENCE")

    def test_inactive_account_code(self):
        self.api.patch(f"{BASE}/cash-accounts/{self.account.pk}/", {"is_active": False}, format="json")
        res = self._create()
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "INACTIVE_ACCOUNT")

    def test_immutable_field_is_conflict(self):
        invoice = self.add_invoice()
        payable = Transaction.objects.get(invoice=invoice)

        res = self.api.patch(f"{BASE}/transactions/{payable.pk}/", {"amount": "1.00"}, format="json")

        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["code"], "IMMUTABLE_FIELD")
        self.assertEqual(res.data["field"], "amount")

    def test_transient_is_503_with_retry_after(self):
        with mock.patch(
            "ledger.api.views.transactions.create_transaction",
            side_effect=TransientError("transaction.create could not complete"),
        ):
            res = self._create()

        self.assertEqual(res.status_code, 503)
        self.assertEqual(res.data["code"], "TRANSIENT")
        self.assertEqual(res["Retry-After"], "1")

    def test_list_filters(self):
        self._create(kind="INCOME", amount="10.00")
        self._create(kind="EXPENSE", amount="3.00", is_paid=False)

        res = self.api.get(f"{BASE}/transactions/", {"kind": "EXPENSE"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual([t["amount"] for t in res.data], ["3.00"])

        res = self.api.get(f"{BASE}/transactions/", {"is_paid": "true"})
        self.assertEqual([t["amount"] for t in res.data], ["10.00"])

    def test_other_tenant_transaction_is_404(self):
        other_user = get_user_model().objects.create_user(
            email="intruder@other.test", password="pass12345", company=self.other_company
        )
        txn = self.add_txn()
        api = APIClient()
        api.force_authenticate(user=other_user)

        self.assertEqual(api.get(f"{BASE}/transactions/{txn.pk}/").status_code, 404)
        self.assertEqual(api.get(f"{BASE}/transactions/").data, [])


class InvoiceAPITests(LedgerAPITestCase):
    def _payload(self, **overrides):
        payload = {
            "client_id": str(self.client_record.pk),
            "due_date": str(self.today() + timedelta(days=10)),
            "items": [{"description": "Consulting", "quantity": "2", "unit_price": "125.00"}],
        }
        payload.update(overrides)
        return payload

    def test_create_returns_invoice_with_payable(self):
        res = self.api.post(f"{BASE}/invoices/", self._payload(), format="json")

        self.assertEqual(res.status_code, 201, res.data)
        self.assertEqual(res.data["status"], InvoiceStatus.UNPAID)
        self.assertEqual(res.data["total_amount"], "250.00")
        self.assertFalse(res.data["is_paid"])
        self.assertIsNotNone(res.data["payable_transaction_id"])
        self.assertTrue(res.data["number"].startswith("INV-"))

    def test_empty_items_code(self):
        res = self.api.post(f"{BASE}/invoices/", self._payload(items=[]), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "EMPTY_ITEMS")

    def test_unknown_client_code(self):
        res = self.api.post(f"{BASE}/invoices/", self._payload(client_id=str(uuid.uuid4())), format="json")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "INVALID_REFERENCE")

    def test_list_applies_lazy_overdue_correction(self):
        invoice = self.add_invoice()
        Invoice.objects.filter(pk=invoice.pk).update(due_date=self.today() - timedelta(days=1))

        res = self.api.get(f"{BASE}/invoices/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data[0]["status"], InvoiceStatus.OVERDUE)

    def test_detail_applies_lazy_overdue_correction(self):
        invoice = self.add_invoice()
        Invoice.objects.filter(pk=invoice.pk).update(due_date=self.today() - timedelta(days=1))

        res = self.api.get(f"{BASE}/invoices/{invoice.pk}/")
        self.assertEqual(res.data["status"], InvoiceStatus.OVERDUE)

    def test_put_replaces_content(self):
        invoice = self.add_invoice()
        res = self.api.put(
            f"{BASE}/invoices/{invoice.pk}/",
            self._payload(items=[{"description": "Audit", "quantity": "1", "unit_price": "90.00"}]),
            format="json",
        )
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["total_amount"], "90.00")
        self.assertEqual(len(res.data["items"]), 1)

    def test_patch_notes(self):
        invoice = self.add_invoice()
        res = self.api.patch(f"{BASE}/invoices/{invoice.pk}/", {"notes": "net 30"}, format="json")
        self.assertEqual(res.status_code, 200, res.data)
        self.assertEqual(res.data["notes"], "net 30")

    def test_delete_then_404(self):
        invoice = self.add_invoice()
        self.assertEqual(self.api.delete(f"{BASE}/invoices/{invoice.pk}/").status_code, 204)
        self.assertEqual(self.api.get(f"{BASE}/invoices/{invoice.pk}/").status_code, 404)
        self.assertEqual(self.api.get(f"{BASE}/invoices/not-a-uuid/").status_code, 404)

    def test_update_overdue_endpoint(self):
        invoice = self.add_invoice()
        Invoice.objects.filter(pk=invoice.pk).update(due_date=self.today() - timedelta(days=2))

        res = self.api.post(f"{BASE}/invoices/update-overdue/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data, {"updated": 1})


class ClientAPITests(LedgerAPITestCase):
    def test_create_and_list_scoped(self):
        res = self.api.post(f"{BASE}/clients/", {"name": "Umbrella Corp", "email": "ap@umbrella.test"}, format="json")
        self.assertEqual(res.status_code, 201, res.data)

        names = [c["name"] for c in self.api.get(f"{BASE}/clients/").data]
        self.assertEqual(names, ["Globex Supplies", "Umbrella Corp"])
