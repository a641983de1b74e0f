# ledger/services/cash_account_service.py

"""
CASH ACCOUNT SERVICE

- create: balance starts at initial_balance
- update: name / kind / description / is_active only
  (balance and initial_balance are owned by the ledger)
- name must be unique among the company's active accounts
"""

from __future__ import annotations

import logging

from django.db import IntegrityError, transaction

from ledger.models.cash_account import CashAccount, CashAccountKind
from ledger.services.exceptions import (
    DuplicateNameError,
    LedgerValidationError,
    NotFoundError,
)
from ledger.services.lookups import as_uuid
from ledger.services.signing import to_money
from ledger.services.unit_of_work import unit_of_work

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({"name", "kind", "description", "is_active"})


def _kind(value) -> str:
    raw = str(value or "").strip().upper()
    if raw not in CashAccountKind.values:
        raise LedgerValidationError(
            f"Invalid kind {value!r}. Use CASH, CREDIT_CARD or BANK_ACCOUNT.", field="kind"
        )
    return raw


def _name(value) -> str:
    name = str(value or "").strip()
    if not name:
        raise LedgerValidationError("name is required.", field="name")
    return name


def _ensure_unique_name(*, company, name: str, exclude_pk=None) -> None:
    qs = CashAccount.objects.for_company(company).active().filter(name__iexact=name)
    if exclude_pk is not None:
        qs = qs.exclude(pk=exclude_pk)
    if qs.exists():
        raise DuplicateNameError(f"An active cash account named '{name}' already exists.", field="name")


def _save(account: CashAccount, **kwargs) -> None:
    # The partial unique index is the last word when two requests race.
    try:
        with transaction.atomic():
            account.save(**kwargs)
    except IntegrityError as exc:
        raise DuplicateNameError(
            f"An active cash account named '{account.name}' already exists.", field="name"
        ) from exc


def list_cash_accounts(*, company, include_inactive: bool = False):
    qs = CashAccount.objects.for_company(company)
    return qs if include_inactive else qs.active()


def get_cash_account(*, company, cash_account_id) -> CashAccount:
    pk = as_uuid(cash_account_id)
    account = CashAccount.objects.for_company(company).filter(pk=pk).first() if pk else None
    if account is None:
        raise NotFoundError(f"Cash account {cash_account_id} not found.")
    return account


def create_cash_account(
    *,
    company,
    name,
    kind=CashAccountKind.CASH,
    initial_balance=0,
    description: str = "",
) -> CashAccount:
    name = _name(name)
    kind = _kind(kind)
    opening = to_money(initial_balance)

    with unit_of_work(name="cash_account.create"):
        _ensure_unique_name(company=company, name=name)
        account = CashAccount(
            company=company,
            name=name,
            kind=kind,
            initial_balance=opening,
            balance=opening,
            description=str(description or "").strip(),
        )
        _save(account)

    logger.info(
        "Cash account created",
        extra={"account_id": str(account.id), "company_id": str(company.pk), "kind": kind},
    )
    return account


def update_cash_account(*, company, cash_account_id, patch: dict) -> CashAccount:
    patch = dict(patch or {})
    unknown = set(patch) - EDITABLE_FIELDS
    if unknown:
        raise LedgerValidationError(
            f"Unknown or read-only fields: {', '.join(sorted(unknown))}."
        )

    with unit_of_work(name="cash_account.update"):
        account = get_cash_account(company=company, cash_account_id=cash_account_id)

        if "name" in patch:
            account.name = _name(patch["name"])
        if "kind" in patch:
            account.kind = _kind(patch["kind"])
        if "description" in patch:
            account.description = str(patch["description"] or "").strip()
        if "is_active" in patch:
            account.is_active = bool(patch["is_active"])

        if account.is_active and ("name" in patch or "is_active" in patch):
            _ensure_unique_name(company=company, name=account.name, exclude_pk=account.pk)

        _save(account, update_fields=["name", "kind", "description", "is_active", "updated_at"])

    logger.info(
        "Cash account updated",
        extra={"account_id": str(account.id), "fields": sorted(patch)},
    )
    return account
