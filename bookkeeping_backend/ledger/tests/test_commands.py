# ledger/tests/test_commands.py

from datetime import timedelta
from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from ledger.models import InvoiceStatus
from ledger.services.balance_service import apply_delta
from ledger.tests.base import LedgerFixturesMixin


class CheckCashBalancesCommandTests(LedgerFixturesMixin, TestCase):
    def test_clean_ledger_passes(self):
        self.add_txn(kind="INCOME", amount="20.00")
        out = StringIO()

        call_command("check_cash_balances", "--strict", stdout=out)

        self.assertIn("[OK]", out.getvalue())

    def test_drift_fails_in_strict_mode(self):
        apply_delta(cash_account_id=self.account.pk, delta="1.00")
        err = StringIO()

        with self.assertRaises(SystemExit):
            call_command("check_cash_balances", "--strict", stdout=StringIO(), stderr=err)

        self.assertIn("Main Till", err.getvalue())

    def test_drift_without_strict_only_reports(self):
        apply_delta(cash_account_id=self.account.pk, delta="1.00")
        err = StringIO()

        call_command("check_cash_balances", stdout=StringIO(), stderr=err)

        self.assertIn("[FAIL]", err.getvalue())


class UpdateOverdueInvoicesCommandTests(LedgerFixturesMixin, TestCase):
    def test_marks_overdue_as_of_date(self):
        invoice = self.add_invoice(due_in_days=3)
        as_of = (self.today() + timedelta(days=4)).isoformat()
        out = StringIO()

        call_command("update_overdue_invoices", "--company", str(self.company.pk), "--date", as_of, stdout=out)

        self.assertIn("1 invoice(s)", out.getvalue())
        self.assertStatus(invoice, InvoiceStatus.OVERDUE)

    def test_bad_arguments(self):
        with self.assertRaises(CommandError):
            call_command("update_overdue_invoices", "--date", "yesterday", stdout=StringIO())
        with self.assertRaises(CommandError):
            call_command("update_overdue_invoices", "--company", "nope", stdout=StringIO())
