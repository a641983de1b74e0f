# ledger/services/invoice_service.py

"""
INVOICE SERVICE

Responsibilities:
- create invoice + items + companion payable transaction (one unit of work)
- full edit: replace items, recompute total and status, re-sync the payable's
  amount/description/date (never its is_paid / cash_account)
- reads apply the lazy OVERDUE correction before returning

Payable transaction:
- kind EXPENSE, category LEDGER_INVOICE_EXPENSE_CATEGORY
- amount = invoice total, date = issue date
- description "<client name> - Invoice No: <number>"
- created unpaid: no balance effect until someone pays it
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from ledger.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from ledger.models.transaction import Transaction, TransactionKind
from ledger.services.balance_service import apply_effect, reverse_effect, snapshot
from ledger.services.exceptions import (
    EmptyItemsError,
    LedgerValidationError,
    NotFoundError,
    TransientError,
)
from ledger.services.invoice_numbering import next_invoice_number
from ledger.services.invoice_status import (
    REQUESTABLE_STATUSES,
    correct_overdue_invoices,
    normalize_requested_status,
    recompute_status,
)
from ledger.services.lookups import as_date, as_uuid, client_for_company
from ledger.services.signing import positive_money, to_money
from ledger.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"client_id", "issue_date", "due_date", "items", "notes", "status"})
CONTENT_FIELDS = EDITABLE_FIELDS - {"notes"}


@dataclass(frozen=True)
class ItemLine:
    description: str
    quantity: Decimal
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return to_money(self.quantity * self.unit_price)


def _clean_items(items) -> list[ItemLine]:
    if not items:
        raise EmptyItemsError("Invoice must have at least one item.", field="items")

    lines: list[ItemLine] = []
    for idx, raw in enumerate(items):
        description = str(raw.get("description") or "").strip()
        if not description:
            raise LedgerValidationError(
                f"items[{idx}].description is required.", field="items"
            )
        lines.append(
            ItemLine(
                description=description,
                quantity=positive_money(raw.get("quantity"), field=f"items[{idx}].quantity"),
                unit_price=positive_money(raw.get("unit_price"), field=f"items[{idx}].unit_price"),
            )
        )
    return lines


def _total(lines: list[ItemLine]) -> Decimal:
    return to_money(sum((line.line_total for line in lines), Decimal("0.00")))


def _write_items(invoice: Invoice, lines: list[ItemLine]) -> None:
    InvoiceItem.objects.bulk_create(
        [
            InvoiceItem(
                invoice=invoice,
                description=line.description,
                quantity=line.quantity,
                unit_price=line.unit_price,
                line_total=line.line_total,
            )
            for line in lines
        ]
    )


def payable_description(invoice: Invoice) -> str:
    return f"{invoice.client.name} - Invoice No: {invoice.number}"


def _insert_numbered_invoice(*, company, now: datetime | None, **fields) -> Invoice:
    retries = max(int(getattr(settings, "LEDGER_INVOICE_NUMBER_RETRIES", 5)), 1)

    for attempt in range(1, retries + 1):
        number = next_invoice_number(company=company, now=now)
        try:
            with transaction.atomic():
                return Invoice.objects.create(company=company, number=number, **fields)
        except IntegrityError:
            logger.warning(
                "Invoice number collision, retrying",
                extra={"company_id": str(company.pk), "number": number, "attempt": attempt},
            )

    raise TransientError("Could not allocate an invoice number. Please retry.")


# =========================================================
# READS
# =========================================================
def list_invoices(*, company, today: date | None = None):
    correct_overdue_invoices(company=company, today=today)
    return (
        Invoice.objects.for_company(company)
        .select_related("client")
        .prefetch_related("items")
    )


def get_invoice(*, company, invoice_id, today: date | None = None, for_update: bool = False) -> Invoice:
    pk = as_uuid(invoice_id)
    if pk is None:
        raise NotFoundError(f"Invoice {invoice_id} not found.")

    correct_overdue_invoices(company=company, invoice_ids=[pk], today=today)

    qs = Invoice.objects.for_company(company).select_related("client")
    if for_update:
        qs = qs.select_for_update(of=("self",))
    invoice = qs.filter(pk=pk).first()
    if invoice is None:
        raise NotFoundError(f"Invoice {invoice_id} not found.")
    return invoice


# =========================================================
# CREATE
# =========================================================
def create_invoice(
    *,
    company,
    user,
    client_id,
    due_date,
    items,
    issue_date=None,
    notes: str = "",
    status=None,
    today: date | None = None,
    now: datetime | None = None,
) -> Invoice:
    lines = _clean_items(items)
    issue = as_date(issue_date, field="issue_date") if issue_date else timezone.localdate()
    due = as_date(due_date, field="due_date")
    requested = normalize_requested_status(status)
    total = _total(lines)

    with unit_of_work(name="invoice.create"):
        client = client_for_company(company=company, client_id=client_id)

        invoice = _insert_numbered_invoice(
            company=company,
            now=now,
            user=user,
            client=client,
            issue_date=issue,
            due_date=due,
            status=recompute_status(requested=requested, is_paid=False, due_date=due, today=today),
            total_amount=total,
            notes=str(notes or "").strip(),
        )
        _write_items(invoice, lines)

        Transaction.objects.create(
            company=company,
            user=user,
            kind=TransactionKind.EXPENSE,
            category=settings.LEDGER_INVOICE_EXPENSE_CATEGORY,
            amount=total,
            description=payable_description(invoice),
            date=issue,
            invoice=invoice,
            is_paid=False,
        )

    logger.info(
        "Invoice created",
        extra={
            "invoice_id": str(invoice.id),
            "number": invoice.number,
            "company_id": str(company.pk),
            "total": str(total),
            "status": invoice.status,
        },
    )
    return invoice


# =========================================================
# EDIT
# =========================================================
def edit_invoice(*, company, invoice_id, patch: dict, today: date | None = None) -> Invoice:
    patch = dict(patch or {})
    unknown = set(patch) - EDITABLE_FIELDS
    if unknown:
        raise LedgerValidationError(
            f"Unknown or read-only fields: {', '.join(sorted(unknown))}."
        )

    lines = _clean_items(patch["items"]) if "items" in patch else None
    full_edit = bool(CONTENT_FIELDS & set(patch))

    with unit_of_work(name="invoice.edit"):
        invoice = get_invoice(company=company, invoice_id=invoice_id, today=today, for_update=True)

        if "client_id" in patch:
            invoice.client = client_for_company(company=company, client_id=patch["client_id"])
        if "issue_date" in patch:
            invoice.issue_date = as_date(patch["issue_date"], field="issue_date")
        if "due_date" in patch:
            invoice.due_date = as_date(patch["due_date"], field="due_date")
        if "notes" in patch:
            invoice.notes = str(patch["notes"] or "").strip()

        if lines is not None:
            invoice.items.all().delete()
            _write_items(invoice, lines)
            invoice.total_amount = _total(lines)

        payable = Transaction.objects.select_for_update().filter(invoice=invoice).first()

        if full_edit:
            current = invoice.status if invoice.status in REQUESTABLE_STATUSES else InvoiceStatus.UNPAID
            invoice.status = recompute_status(
                requested=normalize_requested_status(patch.get("status"), default=current),
                is_paid=bool(payable and payable.is_paid),
                due_date=invoice.due_date,
                today=today,
            )

        invoice.save()

        if payable is not None and full_edit:
            old_effect = snapshot(payable)
            reverse_effect(old_effect)

            payable.amount = invoice.total_amount
            payable.date = invoice.issue_date
            payable.description = payable_description(invoice)
            payable.save(update_fields=["amount", "date", "description", "updated_at"])

            apply_effect(snapshot(payable))

    logger.info(
        "Invoice edited",
        extra={
            "invoice_id": str(invoice.id),
            "fields": sorted(patch),
            "status": invoice.status,
            "total": str(invoice.total_amount),
        },
    )
    return invoice
