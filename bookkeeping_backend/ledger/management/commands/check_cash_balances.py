# ledger/management/commands/check_cash_balances.py

from __future__ import annotations

from django.core.management.base import BaseCommand

from ledger.management.commands._options import resolve_company_option
from ledger.services.balance_service import audit_cash_balances


class Command(BaseCommand):
    help = "Verify balance == initial_balance + counted transactions for every active cash account."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            dest="company",
            help="Company UUID (optional, default: all companies)",
        )
        parser.add_argument(
            "--strict",
            action="store_true",
            help="Fail (non-zero exit) if any drift is found.",
        )

    def handle(self, *args, **options):
        company = resolve_company_option(options.get("company"))
        strict = bool(options.get("strict"))

        self.stdout.write(self.style.MIGRATE_HEADING("Cash balance audit"))

        drifts = audit_cash_balances(company=company)

        if not drifts:
            self.stdout.write(self.style.SUCCESS("[OK] All active cash account balances match the ledger"))
            return None

        self.stderr.write(self.style.ERROR(f"[FAIL] Balance drift on {len(drifts)} account(s)"))
        for d in drifts:
            self.stderr.write(
                f"  account={d.account_id} name={d.account_name!r} "
                f"stored={d.stored} expected={d.expected} diff={d.difference}"
            )

        return self._exit(strict)

    def _exit(self, fail: bool):
        if fail:
            raise SystemExit(1)
        return None
