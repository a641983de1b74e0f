# ledger/models/querysets.py

"""
TENANT + SOFT-DELETE QUERY PREDICATES

Soft-deleted rows (is_deleted=True) are tombstones. They must be invisible to
every read path, so the filter lives in the default manager rather than at
call sites:

    Transaction.objects      -> live rows only (is_deleted=False)
    Transaction.all_objects  -> everything, tombstones included

Only the engine itself uses all_objects (numbering, cascades, audits).
"""

from __future__ import annotations

from django.db import models


class TenantQuerySet(models.QuerySet):
    def for_company(self, company):
        return self.filter(company=company)


class SoftDeleteQuerySet(TenantQuerySet):
    def live(self):
        return self.filter(is_deleted=False)

    def tombstones(self):
        return self.filter(is_deleted=True)


class LiveManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """Default manager: hides tombstones."""

    def get_queryset(self):
        return super().get_queryset().filter(is_deleted=False)


class AllRowsManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    pass
