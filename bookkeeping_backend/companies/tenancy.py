# companies/tenancy.py

"""
TENANT RESOLUTION

The ledger engine never decides who the caller is. Views resolve the
authenticated user's company here and pass it to the services, which
scope every query by it.

Rules:
- A user without a company (or with a deactivated one) gets 403
- Superusers are NOT given cross-tenant access through the API
"""

from __future__ import annotations

from rest_framework.exceptions import PermissionDenied
from rest_framework.permissions import BasePermission

from companies.models import Company


def get_request_company(request) -> Company | None:
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None

    company = getattr(user, "company", None)
    if company is None or not company.is_active:
        return None
    return company


def resolve_company(request) -> Company:
    company = get_request_company(request)
    if company is None:
        raise PermissionDenied("No active company is linked to this account.")
    return company


class HasActiveCompany(BasePermission):
    """
    Authenticated AND attached to an active company.
    """

    message = "No active company is linked to this account."

    def has_permission(self, request, view):
        return get_request_company(request) is not None
