# ledger/api/views/base.py

from rest_framework.generics import GenericAPIView
from rest_framework.permissions import IsAuthenticated

from companies.tenancy import HasActiveCompany, resolve_company


class LedgerAPIView(GenericAPIView):
    """
    Thin adapter over ledger.services.

    - caller must be authenticated and attached to an active company
    - every service call receives that company (tenant scope)
    - service errors are translated by ledger.api.errors
    """

    permission_classes = [IsAuthenticated, HasActiveCompany]

    @property
    def company(self):
        return resolve_company(self.request)
