# ledger/services/cascade_service.py

"""
CASCADING DELETION COORDINATOR

Deletes that span invoice <-> transaction <-> cash account.

Invoice delete (one unit of work):
- reverse the payable's effect if it was counted
- tombstone the payable
- tombstone the invoice

Cash account delete:
- no transaction (live or tombstoned) references it -> hard delete
- otherwise: every referencing transaction gets cash_account=NULL and
  is_paid=False, and the account is deactivated (never removed)

  The orphaned transactions' past contributions are NOT reversed; the
  stored balance of the inactive account is left exactly as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.utils import timezone

from ledger.models.cash_account import CashAccount
from ledger.models.transaction import Transaction
from ledger.services.balance_service import reverse_effect, snapshot
from ledger.services.exceptions import NotFoundError
from ledger.services.invoice_service import get_invoice
from ledger.services.lookups import as_uuid
from ledger.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CashAccountDeletion:
    hard_deleted: bool
    orphaned_transaction_count: int


def delete_invoice(*, company, invoice_id) -> None:
    with unit_of_work(name="invoice.delete"):
        invoice = get_invoice(company=company, invoice_id=invoice_id, for_update=True)
        now = timezone.now()

        payable = Transaction.objects.select_for_update().filter(invoice=invoice).first()
        if payable is not None:
            reverse_effect(snapshot(payable))
            payable.is_deleted = True
            payable.deleted_at = now
            payable.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

        invoice.is_deleted = True
        invoice.deleted_at = now
        invoice.save(update_fields=["is_deleted", "deleted_at", "updated_at"])

    logger.info(
        "Invoice deleted",
        extra={
            "invoice_id": str(invoice.id),
            "number": invoice.number,
            "payable_id": str(payable.id) if payable is not None else "",
        },
    )


def delete_cash_account(*, company, cash_account_id) -> CashAccountDeletion:
    pk = as_uuid(cash_account_id)

    with unit_of_work(name="cash_account.delete"):
        account = (
            CashAccount.objects.for_company(company).select_for_update().filter(pk=pk).first()
            if pk
            else None
        )
        if account is None:
            raise NotFoundError(f"Cash account {cash_account_id} not found.")

        # Soft-deleted rows are history too: any reference keeps the account row.
        refs = Transaction.all_objects.filter(cash_account=account)
        orphaned = refs.count()
        refs.update(
            cash_account=None,
            is_paid=False,
            updated_at=timezone.now(),
        )

        if orphaned == 0:
            account.delete()
        else:
            account.is_active = False
            account.save(update_fields=["is_active", "updated_at"])

    result = CashAccountDeletion(hard_deleted=orphaned == 0, orphaned_transaction_count=orphaned)
    logger.info(
        "Cash account deleted",
        extra={
            "account_id": str(pk),
            "hard_deleted": result.hard_deleted,
            "orphaned_transactions": orphaned,
        },
    )
    return result
