# ledger/tests/test_unit_of_work.py

from decimal import Decimal

from django.db import OperationalError
from django.test import TestCase

from ledger.models import CashAccount
from ledger.services.balance_service import apply_delta
from ledger.services.exceptions import NotFoundError, TransientError
from ledger.services.unit_of_work import _timeout_ms, unit_of_work
from ledger.tests.base import LedgerFixturesMixin


class UnitOfWorkTests(LedgerFixturesMixin, TestCase):
    def test_commits_all_steps(self):
        with unit_of_work(name="test.commit"):
            apply_delta(cash_account_id=self.account.pk, delta="10.00")
            apply_delta(cash_account_id=self.account.pk, delta="-4.00")

        self.assertEqual(self.balance(), Decimal("1006.00"))

    def test_rolls_back_every_step_on_failure(self):
        with self.assertRaises(ValueError):
            with unit_of_work(name="test.rollback"):
                apply_delta(cash_account_id=self.account.pk, delta="10.00")
                raise ValueError("later step failed")

        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_operational_error_becomes_transient(self):
        with self.assertRaises(TransientError) as ctx:
            with unit_of_work(name="test.timeout"):
                apply_delta(cash_account_id=self.account.pk, delta="10.00")
                raise OperationalError("could not obtain lock")

        self.assertIsInstance(ctx.exception.__cause__, OperationalError)
        self.assertEqual(ctx.exception.code, "TRANSIENT")
        self.assertEqual(self.balance(), Decimal("1000.00"))

    def test_usable_as_decorator(self):
        @unit_of_work(name="test.decorated")
        def bump():
            apply_delta(cash_account_id=self.account.pk, delta="1.00")

        bump()
        bump()
        self.assertEqual(self.balance(), Decimal("1002.00"))

    def test_timeout_comes_from_settings(self):
        with self.settings(LEDGER_ATOMIC_TIMEOUT_SECONDS=2.5):
            self.assertEqual(_timeout_ms(None), 2500)
        self.assertEqual(_timeout_ms(0.25), 250)


class ApplyDeltaTests(LedgerFixturesMixin, TestCase):
    def test_increment_is_relative_to_stored_value(self):
        stale = CashAccount.objects.get(pk=self.account.pk)

        apply_delta(cash_account_id=self.account.pk, delta="100.00")
        # A stale in-memory copy must not matter: the update is balance = balance + delta.
        apply_delta(cash_account_id=stale.pk, delta="-30.00")

        self.assertEqual(self.balance(), Decimal("1070.00"))

    def test_unknown_account(self):
        import uuid

        with self.assertRaises(NotFoundError):
            apply_delta(cash_account_id=uuid.uuid4(), delta="1.00")

    def test_zero_delta_is_noop(self):
        apply_delta(cash_account_id=self.account.pk, delta="0")
        self.assertEqual(self.balance(), Decimal("1000.00"))
