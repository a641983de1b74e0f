# companies/management/commands/bootstrap_company.py

"""
PATH: companies/management/commands/bootstrap_company.py

Tenant bootstrap (there is no public sign-up endpoint).

- Creates the company if no company with that name exists.
- Creates its first user (role=admin) or re-attaches an existing one.
- Password comes from --password or BOOTSTRAP_PASSWORD; it is never printed.
- Idempotent: safe to run on every deploy.
"""

from __future__ import annotations

import os

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from companies.models import Company


class Command(BaseCommand):
    help = "Create (or update) a company and its first admin user (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument("--company", required=True, help="Company name")
        parser.add_argument("--email", required=True, help="Admin user email")
        parser.add_argument("--password", help="Admin password (default: BOOTSTRAP_PASSWORD env)")
        parser.add_argument("--tax-number", dest="tax_number", default="", help="Optional tax number")

    def handle(self, *args, **options):
        name = (options.get("company") or "").strip()
        email = (options.get("email") or "").strip()
        password = (options.get("password") or os.environ.get("BOOTSTRAP_PASSWORD") or "").strip()

        if not name:
            raise CommandError("--company must not be blank")
        if not email:
            raise CommandError("--email must not be blank")

        User = get_user_model()

        with transaction.atomic():
            company = Company.objects.filter(name=name).first()
            created_company = company is None
            if created_company:
                company = Company.objects.create(
                    name=name,
                    tax_number=(options.get("tax_number") or "").strip() or None,
                )

            user = User.objects.filter(email__iexact=email).first()
            if user is None:
                if not password:
                    raise CommandError("A password is required to create the user (--password or BOOTSTRAP_PASSWORD).")
                user = User.objects.create_user(
                    email=email,
                    password=password,
                    company=company,
                    role=User.ROLE_ADMIN,
                )
                user_state = "created"
            else:
                if user.company_id not in (None, company.pk):
                    raise CommandError(f"{email} already belongs to another company.")
                user.company = company
                user.role = User.ROLE_ADMIN
                user.is_active = True
                if password:
                    user.set_password(password)
                user.save()
                user_state = "updated"

        company_state = "created" if created_company else "existing"
        self.stdout.write(
            self.style.SUCCESS(f"Company ensured: {company.name} ({company_state}); admin {email} ({user_state})")
        )
