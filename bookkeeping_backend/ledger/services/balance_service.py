# ledger/services/balance_service.py

"""
BALANCE INVARIANT MAINTAINER (AUTHORITATIVE)

The ONLY code allowed to write CashAccount.balance.

Invariant (after every committed unit of work):

    balance == initial_balance + SUM(signed_amount(t))
               for t in transactions of the account
               where t.is_paid AND NOT t.is_deleted

RULES:
- Increments are single UPDATE ... SET balance = balance + delta statements
  (F() expressions). Never fetch-then-save.
- apply_effect / reverse_effect are no-ops for transactions that are not
  counted (no account, unpaid, or deleted).
- Callers run inside ledger.services.unit_of_work.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Case, DecimalField, F, Sum, Value, When
from django.db.models.functions import Coalesce
from django.utils import timezone

from ledger.models.cash_account import CashAccount
from ledger.models.transaction import Transaction, TransactionKind
from ledger.services.exceptions import NotFoundError
from ledger.services.signing import signed_amount, to_money

logger = logging.getLogger(__name__)

ZERO = Decimal("0.00")


@dataclass(frozen=True)
class TransactionEffect:
    """What a transaction contributes to a balance at one point in time."""

    cash_account_id: object
    kind: str
    amount: Decimal
    is_paid: bool
    is_deleted: bool

    @property
    def is_counted(self) -> bool:
        return bool(self.cash_account_id and self.is_paid and not self.is_deleted)

    @property
    def signed_amount(self) -> Decimal:
        return signed_amount(self.kind, self.amount)


def snapshot(txn: Transaction) -> TransactionEffect:
    return TransactionEffect(
        cash_account_id=txn.cash_account_id,
        kind=txn.kind,
        amount=to_money(txn.amount),
        is_paid=bool(txn.is_paid),
        is_deleted=bool(txn.is_deleted),
    )


def apply_delta(*, cash_account_id, delta) -> None:
    delta = to_money(delta)
    if delta == ZERO:
        return

    updated = CashAccount.objects.filter(pk=cash_account_id).update(
        balance=F("balance") + delta,
        updated_at=timezone.now(),
    )
    if updated != 1:
        raise NotFoundError(f"Cash account {cash_account_id} not found.")

    logger.debug(
        "Cash balance adjusted",
        extra={"account_id": str(cash_account_id), "delta": str(delta)},
    )


def apply_effect(effect: TransactionEffect) -> bool:
    if not effect.is_counted:
        return False
    apply_delta(cash_account_id=effect.cash_account_id, delta=effect.signed_amount)
    return True


def reverse_effect(effect: TransactionEffect) -> bool:
    if not effect.is_counted:
        return False
    apply_delta(cash_account_id=effect.cash_account_id, delta=-effect.signed_amount)
    return True


# =========================================================
# AUDIT (read-only)
# =========================================================
def counted_sum(account: CashAccount) -> Decimal:
    money = DecimalField(max_digits=14, decimal_places=2)
    agg = Transaction.objects.filter(
        cash_account=account,
        is_paid=True,
    ).aggregate(
        total=Coalesce(
            Sum(
                Case(
                    When(kind=TransactionKind.INCOME, then=F("amount")),
                    When(kind=TransactionKind.EXPENSE, then=-F("amount")),
                    default=Value(ZERO),
                    output_field=money,
                )
            ),
            Value(ZERO),
            output_field=money,
        )
    )
    return to_money(agg["total"])


def expected_balance(account: CashAccount) -> Decimal:
    return to_money(account.initial_balance) + counted_sum(account)


@dataclass(frozen=True)
class BalanceDrift:
    account_id: object
    account_name: str
    stored: Decimal
    expected: Decimal

    @property
    def difference(self) -> Decimal:
        return self.stored - self.expected


def audit_cash_balances(*, company=None) -> list[BalanceDrift]:
    """
    Recompute every active account's balance from the transaction log and
    return the accounts whose stored balance disagrees.
    """
    qs = CashAccount.objects.active()
    if company is not None:
        qs = qs.for_company(company)

    drifts: list[BalanceDrift] = []
    for account in qs.order_by("company_id", "name"):
        expected = expected_balance(account)
        stored = to_money(account.balance)
        if stored != expected:
            drifts.append(
                BalanceDrift(
                    account_id=account.id,
                    account_name=account.name,
                    stored=stored,
                    expected=expected,
                )
            )

    if drifts:
        logger.warning("Cash balance drift detected", extra={"accounts": len(drifts)})
    return drifts
