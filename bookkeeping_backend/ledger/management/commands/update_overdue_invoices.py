# ledger/management/commands/update_overdue_invoices.py

from __future__ import annotations

from datetime import datetime

from django.core.management.base import BaseCommand, CommandError

from ledger.management.commands._options import resolve_company_option
from ledger.services.invoice_status import update_overdue_invoices


class Command(BaseCommand):
    help = "Mark live invoices past their due date as OVERDUE (skips PAID/OVERDUE)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--company",
            dest="company",
            help="Company UUID (optional, default: all companies)",
        )
        parser.add_argument(
            "--date",
            dest="as_of",
            help="Treat this YYYY-MM-DD as today (optional)",
        )

    def handle(self, *args, **options):
        company = resolve_company_option(options.get("company"))

        today = None
        if options.get("as_of"):
            try:
                today = datetime.strptime(options["as_of"], "%Y-%m-%d").date()
            except ValueError as exc:
                raise CommandError("Invalid --date. Use YYYY-MM-DD") from exc

        updated = update_overdue_invoices(company=company, today=today)

        scope = company.name if company else "all companies"
        self.stdout.write(self.style.SUCCESS(f"[OK] {updated} invoice(s) marked OVERDUE ({scope})"))
