# ledger/services/unit_of_work.py

"""
UNIT OF WORK (explicit atomic scope)

Every multi-step engine operation runs inside exactly one unit of work:

    with unit_of_work(name="transaction.edit"):
        reverse old effect
        apply changes
        apply new effect
        sync invoice status

Guarantees:
- all writes (including balance deltas) commit together or not at all
- on PostgreSQL, lock waits and statements are bounded by
  LEDGER_ATOMIC_TIMEOUT_SECONDS (SET LOCAL semantics, reset at commit)
- lock timeouts / serialization failures surface as TransientError,
  after the atomic block has rolled back

Nested units of work join the outer one (Django savepoint semantics).
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, OperationalError, connections, transaction

from ledger.services.exceptions import TransientError

logger = logging.getLogger(__name__)


def _timeout_ms(timeout_seconds: float | None) -> int:
    if timeout_seconds is None:
        timeout_seconds = getattr(settings, "LEDGER_ATOMIC_TIMEOUT_SECONDS", 5.0)
    return max(int(float(timeout_seconds) * 1000), 0)


def _apply_timeouts(*, using: str, timeout_ms: int) -> None:
    connection = connections[using]
    if connection.vendor != "postgresql" or timeout_ms <= 0:
        return

    with connection.cursor() as cursor:
        cursor.execute("SELECT set_config('lock_timeout', %s, true)", [f"{timeout_ms}ms"])
        cursor.execute("SELECT set_config('statement_timeout', %s, true)", [f"{timeout_ms}ms"])


@contextmanager
def unit_of_work(*, name: str, timeout_seconds: float | None = None, using: str | None = None):
    using = using or DEFAULT_DB_ALIAS
    outermost = not connections[using].in_atomic_block

    try:
        with transaction.atomic(using=using):
            if outermost:
                _apply_timeouts(using=using, timeout_ms=_timeout_ms(timeout_seconds))
            yield
    except OperationalError as exc:
        logger.warning(
            "Unit of work aborted by database",
            extra={"unit_of_work": name, "db_error": str(exc)},
        )
        raise TransientError(
            f"{name} could not complete due to a temporary database conflict. Please retry."
        ) from exc
