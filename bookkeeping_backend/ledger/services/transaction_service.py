# ledger/services/transaction_service.py

"""
TRANSACTION LIFECYCLE MANAGER

create / edit / soft-delete of income and expense records.

Every mutation is one unit of work:
- edit:   reverse old effect -> apply changes -> apply new effect
          -> sync invoice status (invoice-linked only)
- delete: reverse effect (if counted) -> tombstone
          -> tombstone parent invoice (invoice-linked only)

Invoice-linked transactions (the payable of an invoice):
- only cash_account_id and is_paid may change
- kind / category / amount / description / date are locked
"""

from __future__ import annotations

import logging

from django.utils import timezone

from ledger.models.invoice import Invoice
from ledger.models.transaction import Transaction
from ledger.services.balance_service import apply_effect, reverse_effect, snapshot
from ledger.services.exceptions import (
    ImmutableFieldError,
    LedgerValidationError,
    NotFoundError,
)
from ledger.services.invoice_status import sync_invoice_status
from ledger.services.lookups import as_date, as_uuid, usable_cash_account
from ledger.services.signing import normalize_kind, positive_money
from ledger.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset(
    {"kind", "category", "amount", "description", "date", "cash_account_id", "is_paid"}
)
LOCKED_ON_INVOICE = frozenset({"kind", "category", "amount", "description", "date"})


def _category(value) -> str:
    category = str(value or "").strip()
    if not category:
        raise LedgerValidationError("category is required.", field="category")
    return category


def _normalize_patch(patch: dict) -> dict:
    unknown = set(patch) - EDITABLE_FIELDS
    if unknown:
        raise LedgerValidationError(
            f"Unknown or read-only fields: {', '.join(sorted(unknown))}."
        )

    clean = {}
    for field, value in patch.items():
        if field == "kind":
            clean[field] = normalize_kind(value).value
        elif field == "category":
            clean[field] = _category(value)
        elif field == "amount":
            clean[field] = positive_money(value)
        elif field == "description":
            clean[field] = str(value or "").strip()
        elif field == "date":
            clean[field] = as_date(value, field="date")
        elif field == "cash_account_id":
            clean[field] = value if value not in ("", None) else None
        elif field == "is_paid":
            clean[field] = bool(value)
    return clean


# =========================================================
# READS
# =========================================================
def list_transactions(*, company):
    return Transaction.objects.for_company(company).select_related("cash_account", "invoice")


def get_transaction(*, company, transaction_id, for_update: bool = False) -> Transaction:
    pk = as_uuid(transaction_id)
    qs = Transaction.objects.for_company(company)
    if for_update:
        qs = qs.select_for_update()

    txn = qs.filter(pk=pk).first() if pk else None
    if txn is None:
        raise NotFoundError(f"Transaction {transaction_id} not found.")
    return txn


# =========================================================
# CREATE
# =========================================================
def create_transaction(
    *,
    company,
    user,
    kind,
    category,
    amount,
    description: str = "",
    date=None,
    cash_account_id=None,
    is_paid: bool = False,
) -> Transaction:
    amount = positive_money(amount)
    kind = normalize_kind(kind)
    category = _category(category)
    txn_date = as_date(date, field="date") if date is not None else timezone.localdate()

    with unit_of_work(name="transaction.create"):
        account = None
        if cash_account_id not in (None, ""):
            account = usable_cash_account(company=company, cash_account_id=cash_account_id)

        txn = Transaction.objects.create(
            company=company,
            user=user,
            kind=kind,
            category=category,
            amount=amount,
            description=str(description or "").strip(),
            date=txn_date,
            cash_account=account,
            is_paid=bool(is_paid),
        )
        apply_effect(snapshot(txn))

    logger.info(
        "Transaction created",
        extra={
            "transaction_id": str(txn.id),
            "company_id": str(company.pk),
            "kind": txn.kind,
            "amount": str(txn.amount),
            "counted": txn.is_counted,
        },
    )
    return txn


# =========================================================
# EDIT
# =========================================================
def edit_transaction(*, company, transaction_id, patch: dict) -> Transaction:
    changes = _normalize_patch(dict(patch or {}))

    with unit_of_work(name="transaction.edit"):
        txn = get_transaction(company=company, transaction_id=transaction_id, for_update=True)

        if txn.is_invoice_linked:
            for field in LOCKED_ON_INVOICE & set(changes):
                if changes[field] != getattr(txn, field):
                    raise ImmutableFieldError(
                        f"'{field}' cannot be changed on an invoice transaction. "
                        "Edit the invoice instead.",
                        field=field,
                    )

        new_account_id = changes.get("cash_account_id", txn.cash_account_id)
        new_is_paid = changes.get("is_paid", txn.is_paid)
        new_account_pk = as_uuid(new_account_id)
        # An unparseable id counts as a change so it reaches the lookup and fails there.
        account_changed = new_account_pk != txn.cash_account_id or (
            new_account_id is not None and new_account_pk is None
        )
        becomes_paid = new_is_paid and not txn.is_paid

        if new_account_id is not None and (account_changed or becomes_paid):
            new_account_id = usable_cash_account(
                company=company, cash_account_id=new_account_id
            ).pk
        elif not account_changed:
            new_account_id = txn.cash_account_id

        old_effect = snapshot(txn)
        reverse_effect(old_effect)

        for field, value in changes.items():
            if field == "cash_account_id":
                txn.cash_account_id = new_account_id
            else:
                setattr(txn, field, value)
        txn.save()

        apply_effect(snapshot(txn))

        if txn.is_invoice_linked:
            invoice = Invoice.all_objects.select_for_update().get(pk=txn.invoice_id)
            sync_invoice_status(invoice=invoice, is_paid=txn.is_paid)

    logger.info(
        "Transaction edited",
        extra={
            "transaction_id": str(txn.id),
            "fields": sorted(changes),
            "was_counted": old_effect.is_counted,
            "counted": txn.is_counted,
        },
    )
    return txn


# =========================================================
# DELETE (soft)
# =========================================================
def delete_transaction(*, company, transaction_id) -> None:
    with unit_of_work(name="transaction.delete"):
        txn = get_transaction(company=company, transaction_id=transaction_id, for_update=True)

        reverse_effect(snapshot(txn))

        now = timezone.now()
        txn.is_deleted = True
        txn.deleted_at = now
        txn.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

        if txn.is_invoice_linked:
            Invoice.all_objects.filter(pk=txn.invoice_id, is_deleted=False).update(
                is_deleted=True, deleted_at=now, updated_at=now
            )

    logger.info(
        "Transaction deleted",
        extra={"transaction_id": str(txn.id), "invoice_id": str(txn.invoice_id or "")},
    )
