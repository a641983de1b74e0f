# ledger/services/invoice_numbering.py

"""
INVOICE NUMBERING SEQUENCER

Format: INV-{YYYY}{MM}-{NNNN}, sequence restarts every calendar month and is
scoped per company.

next_invoice_number() is read-then-compute. Two concurrent creations can
compute the same number; the (company, number) unique constraint rejects the
loser, and invoice_service retries inside a savepoint.

Tombstoned invoices keep their numbers, so they take part in the scan and a
number is never handed out twice.
"""

from __future__ import annotations

import re
from datetime import datetime

from django.utils import timezone

from ledger.models.invoice import Invoice

PREFIX = "INV"
SEQUENCE_WIDTH = 4

_SEQ_RE = re.compile(r"-(\d+)$")


def month_prefix(now: datetime | None = None) -> str:
    now = now or timezone.now()
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    return f"{PREFIX}-{now.year:04d}{now.month:02d}-"


def parse_sequence(number: str) -> int:
    m = _SEQ_RE.search(number or "")
    return int(m.group(1)) if m else 0


def next_invoice_number(*, company, now: datetime | None = None) -> str:
    prefix = month_prefix(now)

    last = (
        Invoice.all_objects.filter(company=company, number__startswith=prefix)
        .order_by("-number")
        .values_list("number", flat=True)
        .first()
    )

    seq = parse_sequence(last) + 1 if last else 1
    return f"{prefix}{seq:0{SEQUENCE_WIDTH}d}"
