# ledger/tests/test_cash_accounts.py

from decimal import Decimal
from unittest import mock

from django.db import IntegrityError, transaction
from django.test import TestCase

from ledger.models import CashAccount

from ledger.services.balance_service import apply_delta, audit_cash_balances
from ledger.services.cash_account_service import (
    create_cash_account,
    list_cash_accounts,
    update_cash_account,
)
from ledger.services.exceptions import DuplicateNameError, LedgerValidationError
from ledger.tests.base import LedgerFixturesMixin


class CashAccountServiceTests(LedgerFixturesMixin, TestCase):
    def test_balance_starts_at_initial_balance(self):
        account = create_cash_account(company=self.company, name="Card", kind="CREDIT_CARD", initial_balance="-200")
        self.assertEqual(account.initial_balance, Decimal("-200.00"))
        self.assertEqual(self.balance(account), Decimal("-200.00"))

    def test_duplicate_active_name_rejected(self):
        with self.assertRaises(DuplicateNameError):
            create_cash_account(company=self.company, name="main till")

    def test_same_name_allowed_in_other_company(self):
        create_cash_account(company=self.other_company, name="Main Till")

    def test_invalid_kind(self):
        with self.assertRaises(LedgerValidationError):
            create_cash_account(company=self.company, name="Wallet", kind="CRYPTO")

    def test_update_never_touches_balance(self):
        self.add_txn(kind="INCOME", amount="50.00")

        update_cash_account(
            company=self.company,
            cash_account_id=self.account.pk,
            patch={"name": "Front Till", "kind": "BANK_ACCOUNT", "description": "renamed"},
        )

        self.assertEqual(self.balance(), Decimal("1050.00"))
        self.assertInvariant()

    def test_balance_is_not_a_patchable_field(self):
        with self.assertRaises(LedgerValidationError):
            update_cash_account(
                company=self.company,
                cash_account_id=self.account.pk,
                patch={"balance": "1.00"},
            )

    def test_reactivation_checks_name_uniqueness(self):
        update_cash_account(company=self.company, cash_account_id=self.account.pk, patch={"is_active": False})
        create_cash_account(company=self.company, name="Main Till")

        with self.assertRaises(DuplicateNameError):
            update_cash_account(company=self.company, cash_account_id=self.account.pk, patch={"is_active": True})

    def test_list_hides_inactive_by_default(self):
        update_cash_account(company=self.company, cash_account_id=self.account.pk, patch={"is_active": False})
        self.assertEqual(list(list_cash_accounts(company=self.company)), [])
        self.assertEqual(len(list_cash_accounts(company=self.company, include_inactive=True)), 1)


class CashAccountNameConstraintTests(LedgerFixturesMixin, TestCase):
    """The database rejects active names that differ only by case."""

    def test_case_variant_rejected_by_database(self):
        with self.assertRaises(IntegrityError):
            with transaction.atomic():
                CashAccount.objects.create(company=self.company, name="MAIN TILL")

    def test_inactive_case_variant_allowed(self):
        CashAccount.objects.create(company=self.company, name="MAIN TILL", is_active=False)
        self.assertEqual(CashAccount.objects.for_company(self.company).count(), 2)

    def test_race_past_service_check_reports_duplicate_name(self):
        with mock.patch("ledger.services.cash_account_service._ensure_unique_name"):
            with self.assertRaises(DuplicateNameError):
                create_cash_account(company=self.company, name="main TILL")


class BalanceAuditTests(LedgerFixturesMixin, TestCase):
    def test_consistent_ledger_has_no_drift(self):
        self.add_txn(kind="INCOME", amount="10.00")
        self.add_txn(kind="EXPENSE", amount="4.00")
        self.assertEqual(audit_cash_balances(company=self.company), [])

    def test_drift_is_reported(self):
        self.add_txn(kind="INCOME", amount="10.00")
        apply_delta(cash_account_id=self.account.pk, delta="5.00")

        drifts = audit_cash_balances(company=self.company)

        self.assertEqual(len(drifts), 1)
        self.assertEqual(drifts[0].stored, Decimal("1015.00"))
        self.assertEqual(drifts[0].expected, Decimal("1010.00"))
        self.assertEqual(drifts[0].difference, Decimal("5.00"))
