# ledger/api/views/invoices.py

"""
INVOICES API

GET    /api/ledger/invoices/                  list (lazy OVERDUE correction first)
POST   /api/ledger/invoices/                  create invoice + items + payable
GET    /api/ledger/invoices/<id>/             detail (lazy OVERDUE correction first)
PUT    /api/ledger/invoices/<id>/             full edit
PATCH  /api/ledger/invoices/<id>/             partial edit (notes-only keeps status)
DELETE /api/ledger/invoices/<id>/             soft delete invoice + payable
POST   /api/ledger/invoices/update-overdue/   on-demand overdue sweep
"""

from drf_spectacular.utils import extend_schema
from rest_framework import serializers, status
from rest_framework.response import Response

from ledger.api.errors import ledger_error_response
from ledger.api.filters import InvoiceFilter
from ledger.api.serializers import InvoiceSerializer, InvoiceWriteSerializer
from ledger.api.views.base import LedgerAPIView
from ledger.models import Invoice
from ledger.services.cascade_service import delete_invoice
from ledger.services.exceptions import LedgerServiceError
from ledger.services.invoice_service import (
    create_invoice,
    edit_invoice,
    get_invoice,
    list_invoices,
)
from ledger.services.invoice_status import update_overdue_invoices


class OverdueSweepSerializer(serializers.Serializer):
    updated = serializers.IntegerField()


class InvoiceListCreateView(LedgerAPIView):
    serializer_class = InvoiceWriteSerializer
    filterset_class = InvoiceFilter

    def get_queryset(self):
        if getattr(self, "swagger_fake_view", False):
            return Invoice.objects.none()
        return list_invoices(company=self.company)

    @extend_schema(tags=["ledger"], responses=InvoiceSerializer(many=True))
    def get(self, request, *args, **kwargs):
        qs = self.filter_queryset(self.get_queryset())
        return Response(InvoiceSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["ledger"],
        request=InvoiceWriteSerializer,
        responses={201: InvoiceSerializer, 400: dict, 503: dict},
    )
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)

        try:
            invoice = create_invoice(
                company=self.company,
                user=request.user,
                **s.validated_data,
            )
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)


class InvoiceDetailView(LedgerAPIView):
    serializer_class = InvoiceWriteSerializer

    @extend_schema(tags=["ledger"], responses={200: InvoiceSerializer, 404: dict})
    def get(self, request, pk, *args, **kwargs):
        try:
            invoice = get_invoice(company=self.company, invoice_id=pk)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_200_OK)

    def _edit(self, request, pk, *, partial: bool):
        s = self.get_serializer(data=request.data, partial=partial)
        s.is_valid(raise_exception=True)

        try:
            invoice = edit_invoice(
                company=self.company,
                invoice_id=pk,
                patch=dict(s.validated_data),
            )
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_200_OK)

    @extend_schema(
        tags=["ledger"],
        request=InvoiceWriteSerializer,
        responses={200: InvoiceSerializer, 400: dict, 404: dict, 503: dict},
    )
    def put(self, request, pk, *args, **kwargs):
        return self._edit(request, pk, partial=False)

    @extend_schema(
        tags=["ledger"],
        request=InvoiceWriteSerializer,
        responses={200: InvoiceSerializer, 400: dict, 404: dict, 503: dict},
    )
    def patch(self, request, pk, *args, **kwargs):
        return self._edit(request, pk, partial=True)

    @extend_schema(tags=["ledger"], responses={204: None, 404: dict, 503: dict})
    def delete(self, request, pk, *args, **kwargs):
        try:
            delete_invoice(company=self.company, invoice_id=pk)
        except LedgerServiceError as exc:
            return ledger_error_response(exc)

        return Response(status=status.HTTP_204_NO_CONTENT)


class InvoiceUpdateOverdueView(LedgerAPIView):
    serializer_class = OverdueSweepSerializer

    @extend_schema(tags=["ledger"], request=None, responses={200: OverdueSweepSerializer})
    def post(self, request, *args, **kwargs):
        updated = update_overdue_invoices(company=self.company)
        return Response({"updated": updated}, status=status.HTTP_200_OK)
