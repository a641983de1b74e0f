# ledger/management/commands/_options.py

from django.core.management.base import CommandError

from companies.models import Company
from ledger.services.lookups import as_uuid


def resolve_company_option(value):
    """--company <uuid> -> Company, or None when omitted."""
    if not value:
        return None
    pk = as_uuid(value)
    company = Company.objects.filter(pk=pk).first() if pk else None
    if company is None:
        raise CommandError(f"Company {value} not found.")
    return company
