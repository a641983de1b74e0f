# ledger/services/lookups.py

"""
Tenant-scoped lookups and input normalization shared by engine services.

A record of another company is treated exactly like a missing one.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from django.utils.dateparse import parse_date

from ledger.models.cash_account import CashAccount
from ledger.models.client import Client
from ledger.services.exceptions import (
    InactiveAccountError,
    InvalidReferenceError,
    LedgerValidationError,
)


def as_uuid(value) -> uuid.UUID | None:
    if value is None or value == "":
        return None
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def as_date(value, *, field: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    parsed = None
    if isinstance(value, str):
        try:
            parsed = parse_date(value.strip())
        except ValueError:
            parsed = None
    if parsed is None:
        raise LedgerValidationError(f"{field} must be a date (YYYY-MM-DD).", field=field)
    return parsed


def usable_cash_account(*, company, cash_account_id) -> CashAccount:
    """Cash account that a transaction may point at: same company, active."""
    pk = as_uuid(cash_account_id)
    account = None
    if pk is not None:
        account = CashAccount.objects.for_company(company).filter(pk=pk).first()

    if account is None:
        raise InvalidReferenceError(
            f"Cash account {cash_account_id} not found.", field="cash_account_id"
        )
    if not account.is_active:
        raise InactiveAccountError(
            f"Cash account '{account.name}' is inactive.", field="cash_account_id"
        )
    return account


def client_for_company(*, company, client_id) -> Client:
    pk = as_uuid(client_id)
    client = Client.objects.for_company(company).filter(pk=pk).first() if pk else None
    if client is None:
        raise InvalidReferenceError(f"Client {client_id} not found.", field="client_id")
    return client
