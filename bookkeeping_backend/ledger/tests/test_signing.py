# ledger/tests/test_signing.py

from decimal import Decimal

from django.test import SimpleTestCase

from ledger.models import TransactionKind
from ledger.services.exceptions import InvalidAmountError, LedgerValidationError
from ledger.services.signing import normalize_kind, positive_money, signed_amount


class SignedAmountTests(SimpleTestCase):
    def test_income_is_positive(self):
        self.assertEqual(signed_amount(TransactionKind.INCOME, Decimal("500")), Decimal("500.00"))

    def test_expense_is_negative(self):
        self.assertEqual(signed_amount("EXPENSE", "300.00"), Decimal("-300.00"))

    def test_unknown_kind_is_rejected(self):
        with self.assertRaises(ValueError):
            signed_amount("TRANSFER", "10.00")

    def test_amount_is_quantized_half_up(self):
        self.assertEqual(signed_amount("INCOME", "10.005"), Decimal("10.01"))


class InputNormalizationTests(SimpleTestCase):
    def test_non_positive_amounts_are_rejected(self):
        for raw in ("0", "0.00", "-5", "-0.01"):
            with self.subTest(raw=raw), self.assertRaises(InvalidAmountError):
                positive_money(raw)

    def test_garbage_amount_is_rejected(self):
        with self.assertRaises(InvalidAmountError):
            positive_money("ten")

    def test_kind_is_case_insensitive(self):
        self.assertEqual(normalize_kind(" income "), TransactionKind.INCOME)

    def test_invalid_kind(self):
        with self.assertRaises(LedgerValidationError):
            normalize_kind("refund")
