# ledger/services/invoice_status.py

"""
INVOICE STATUS SYNCHRONIZER

States: DRAFT, SENT, UNPAID, PAID, OVERDUE

Transition after a payable-transaction change (next_status):
- payment made           -> PAID
- else due_date < today  -> OVERDUE
- else                   -> unchanged
  (a PAID invoice whose payment was revoked falls back to UNPAID)

OVERDUE is sticky: nothing here moves OVERDUE back to SENT/UNPAID. Only a
full invoice edit recomputes the status from the (possibly new) due date
via recompute_status().

Lazy correction (correct_overdue_invoices):
- on reads, every live invoice NOT IN (PAID, OVERDUE) with due_date < today
  is bulk-updated to OVERDUE before the caller sees it
"""

from __future__ import annotations

import logging
from datetime import date

from django.utils import timezone

from ledger.models.invoice import Invoice, InvoiceStatus
from ledger.services.exceptions import LedgerValidationError

logger = logging.getLogger(__name__)

# Statuses a caller may request explicitly; PAID/OVERDUE are derived.
REQUESTABLE_STATUSES = (InvoiceStatus.DRAFT, InvoiceStatus.SENT, InvoiceStatus.UNPAID)
SETTLED_OR_LATE = (InvoiceStatus.PAID, InvoiceStatus.OVERDUE)


def _today(today: date | None) -> date:
    return today or timezone.localdate()


def normalize_requested_status(value, *, default=InvoiceStatus.UNPAID) -> InvoiceStatus:
    if value in (None, ""):
        return InvoiceStatus(default)

    raw = str(value).strip().upper()
    try:
        status = InvoiceStatus(raw)
    except ValueError as exc:
        raise LedgerValidationError(f"Invalid invoice status {value!r}.", field="status") from exc

    if status not in REQUESTABLE_STATUSES:
        raise LedgerValidationError(
            f"Status {status} is derived and cannot be set directly. Use DRAFT, SENT or UNPAID.",
            field="status",
        )
    return status


def next_status(*, current, is_paid: bool, due_date: date, today: date | None = None) -> InvoiceStatus:
    current = InvoiceStatus(current)

    if is_paid:
        return InvoiceStatus.PAID
    if due_date < _today(today):
        return InvoiceStatus.OVERDUE
    if current == InvoiceStatus.PAID:
        return InvoiceStatus.UNPAID
    return current


def recompute_status(*, requested, is_paid: bool, due_date: date, today: date | None = None) -> InvoiceStatus:
    """
    Status for a freshly created or fully edited invoice.

    `requested` is the caller's base state (DRAFT/SENT/UNPAID); payment and
    due date override it.
    """
    base = InvoiceStatus(requested)
    if base in SETTLED_OR_LATE:
        base = InvoiceStatus.UNPAID

    if is_paid:
        return InvoiceStatus.PAID
    if due_date < _today(today):
        return InvoiceStatus.OVERDUE
    return base


def sync_invoice_status(*, invoice: Invoice, is_paid: bool, today: date | None = None) -> InvoiceStatus:
    new_status = next_status(
        current=invoice.status,
        is_paid=is_paid,
        due_date=invoice.due_date,
        today=today,
    )
    if new_status != invoice.status:
        old_status = invoice.status
        Invoice.all_objects.filter(pk=invoice.pk).update(status=new_status, updated_at=timezone.now())
        invoice.status = new_status
        logger.info(
            "Invoice status synchronized",
            extra={"invoice_id": str(invoice.pk), "from_status": old_status, "to_status": str(new_status)},
        )
    return new_status


def correct_overdue_invoices(*, company=None, invoice_ids=None, today: date | None = None) -> int:
    """Bulk lazy correction. Returns how many invoices became OVERDUE."""
    qs = Invoice.objects.exclude(status__in=SETTLED_OR_LATE).filter(due_date__lt=_today(today))
    if company is not None:
        qs = qs.for_company(company)
    if invoice_ids is not None:
        qs = qs.filter(pk__in=list(invoice_ids))

    updated = qs.update(status=InvoiceStatus.OVERDUE, updated_at=timezone.now())
    if updated:
        logger.info(
            "Invoices marked overdue",
            extra={"count": updated, "company_id": str(getattr(company, "pk", "") or "")},
        )
    return updated


def update_overdue_invoices(*, company=None, today: date | None = None) -> int:
    """On-demand sweep (API endpoint + management command)."""
    return correct_overdue_invoices(company=company, today=today)
