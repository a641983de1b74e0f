# ledger/api/views/cash_accounts.py

"""
CASH ACCOUNTS API

GET    /api/ledger/cash-accounts/          active accounts (?include_inactive=true)
POST   /api/ledger/cash-accounts/          create (balance = initial_balance)
GET    /api/ledger/cash-accounts/<id>/     detail + live transactions
PATCH  /api/ledger/cash-accounts/<id>/     name / kind / description / is_active
DELETE /api/ledger/cash-accounts/<id>/     hard delete, or deactivate + orphan
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.response import Response

from ledger.api.errors import ledger_error_response
from ledger.api.serializers import (
    CashAccountCreateSerializer,
    CashAccountDeletionSerializer,
    CashAccountDetailSerializer,
    CashAccountSerializer,
    CashAccountUpdateSerializer,
)
from ledger.api.views.base import LedgerAPIView
from ledger.services.cascade_service import delete_cash_account
from ledger.services.cash_account_service import (
    create_cash_account,
    get_cash_account,
    list_cash_accounts,
    update_cash_account,
)
from ledger.services.exceptions import LedgerServiceError


def _truthy(value) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes"}


class CashAccountListCreateView(LedgerAPIView):
    serializer_class = CashAccountCreateSerializer

    @extend_schema(
        tags=["ledger"],
        parameters=[OpenApiParameter("include_inactive", bool, required=False)],
        responses=CashAccountSerializer(many=True),
    )
    def get(self, request, *args, **kwargs):
        qs = list_cash_accounts(
            company=self.company,
            include_inactive=_truthy(request.query_params.get("include_inactive")),
        )
        return Response(CashAccountSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["ledger"],
        request=CashAccountCreateSerializer,
        responses={201: CashAccountSerializer, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            account = create_cash_account(company=self.company, **s.validated_data)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(CashAccountSerializer(account).data, status=status.HTTP_201_CREATED)


class CashAccountDetailView(LedgerAPIView):
    serializer_class = CashAccountUpdateSerializer

    @extend_schema(tags=["ledger"], responses={200: CashAccountDetailSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        try:
            account = get_cash_account(company=self.company, cash_account_id=pk)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(CashAccountDetailSerializer(account).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["ledger"],
        request=CashAccountUpdateSerializer,
        responses={200: CashAccountSerializer, 400: dict, 404: dict},
    )
    def patch(self, request, pk, *args, **kwargs):
        s = self.get_serializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        try:
            account = update_cash_account(
                company=self.company,
                cash_account_id=pk,
                patch=dict(s.validated_data),
            )
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(CashAccountSerializer(account).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["ledger"], responses={200: CashAccountDeletionSerializer, 404: dict})
    def delete(self, request, pk, *args, **kwargs):
        try:
            result = delete_cash_account(company=self.company, cash_account_id=pk)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(
            CashAccountDeletionSerializer(result).data,
            status=status.HTTP_200_OK,
        )
