# ledger/services/signing.py

"""
AMOUNT SIGNING RULE

signed_amount(kind, amount):
- INCOME  -> +amount
- EXPENSE -> -amount

Pure. Callers reject non-positive amounts before calling.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from ledger.models.transaction import TransactionKind
from ledger.services.exceptions import InvalidAmountError, LedgerValidationError

TWOPLACES = Decimal("0.01")


def to_money(v) -> Decimal:
    try:
        return Decimal(str(v if v is not None else "0.00")).quantize(
            TWOPLACES, rounding=ROUND_HALF_UP
        )
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError(f"Invalid amount: {v!r}") from exc


def positive_money(v, *, field: str = "amount") -> Decimal:
    amount = to_money(v)
    if amount <= 0:
        raise InvalidAmountError(f"{field} must be greater than zero.", field=field)
    return amount


def normalize_kind(kind) -> TransactionKind:
    raw = str(kind or "").strip().upper()
    try:
        return TransactionKind(raw)
    except ValueError as exc:
        raise LedgerValidationError(
            f"Invalid kind {kind!r}. Use INCOME or EXPENSE.", field="kind"
        ) from exc


def signed_amount(kind, amount) -> Decimal:
    kind = TransactionKind(kind)
    amount = to_money(amount)

    if kind == TransactionKind.INCOME:
        return amount
    if kind == TransactionKind.EXPENSE:
        return -amount

    raise AssertionError(f"Unhandled transaction kind: {kind}")
