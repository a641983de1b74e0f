# ledger/api/views/transactions.py

"""
TRANSACTIONS API

GET    /api/ledger/transactions/        live transactions (filterable)
POST   /api/ledger/transactions/        create
GET    /api/ledger/transactions/<id>/   detail
PATCH  /api/ledger/transactions/<id>/   edit (balance re-derived atomically)
DELETE /api/ledger/transactions/<id>/   soft delete (+ parent invoice)
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from ledger.api.errors import ledger_error_response
from ledger.api.filters import TransactionFilter
from ledger.api.serializers import TransactionSerializer, TransactionWriteSerializer
from ledger.api.views.base import LedgerAPIView
from ledger.models import Transaction
from ledger.services.exceptions import LedgerServiceError
from ledger.services.transaction_service import (
    create_transaction,
    delete_transaction,
    edit_transaction,
    get_transaction,
    list_transactions,
)


class TransactionListCreateView(LedgerAPIView):
    serializer_class = TransactionWriteSerializer
    filterset_class = TransactionFilter

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Transaction.objects.none()
        return list_transactions(company=self.company)

    @extend_schema(tags=["ledger"], responses=TransactionSerializer(many=True))
    def get(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        return Response(TransactionSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["ledger"],
        request=TransactionWriteSerializer,
        responses={201: TransactionSerializer, 400: dict, 503: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            txn = create_transaction(
                company=self.company,
                user=request.user,
                **s.validated_data,
            )
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(TransactionSerializer(txn).data, status=status.HTTP_201_CREATED)


class TransactionDetailView(LedgerAPIView):
    serializer_class = TransactionWriteSerializer

    @extend_schema(tags=["ledger"], responses={200: TransactionSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        try:
            txn = get_transaction(company=self.company, transaction_id=pk)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(TransactionSerializer(txn).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["ledger"],
        request=TransactionWriteSerializer,
        responses={200: TransactionSerializer, 400: dict, 404: dict, 409: dict, 503: dict},
    )
    def patch(self, request, pk, *args, **kwargs):
        s = self.get_serializer(data=request.data, partial=True)
        s.is_valid(raise_exception=True)

        try:
            txn = edit_transaction(
                company=self.company,
                transaction_id=pk,
                patch=dict(s.validated_data),
            )
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(TransactionSerializer(txn).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["ledger"], responses={204: None, 404: dict, 503: dict})
    def delete(self, request, pk, *args, **kwargs):
        try:
            delete_transaction(company=self.company, transaction_id=pk)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(status=status.HTTP_204_NO_CONTENT)
