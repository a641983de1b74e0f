# ledger/api/serializers/invoices.py

from rest_framework import serializers

from ledger.models import Invoice, InvoiceItem, InvoiceStatus
from ledger.services.invoice_status import REQUESTABLE_STATUSES


class InvoiceItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = InvoiceItem
        fields = ["id", "description", "quantity", "unit_price", "line_total"]
        read_only_fields = fields


class InvoiceSerializer(serializers.ModelSerializer):
    """
    Output serializer. Payment state is read from the payable transaction.
    """

    client_id = serializers.UUIDField(read_only=True)
    client_name = serializers.CharField(source="client.name", read_only=True)
    items = InvoiceItemSerializer(many=True, read_only=True)
    payable_transaction_id = serializers.SerializerMethodField()
    is_paid = serializers.SerializerMethodField()

    class Meta:
        model = Invoice
        fields = [
            "id",
            "number",
            "client_id",
            "client_name",
            "issue_date",
            "due_date",
            "status",
            "total_amount",
            "notes",
            "items",
            "payable_transaction_id",
            "is_paid",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def _payable(self, obj):
        try:
            return obj.payable_transaction
        except Invoice.payable_transaction.RelatedObjectDoesNotExist:
            return None

    def get_payable_transaction_id(self, obj) -> str | None:
        payable = self._payable(obj)
        return str(payable.id) if payable is not None else None

    def get_is_paid(self, obj) -> bool:
        payable = self._payable(obj)
        return bool(payable is not None and payable.is_paid)


class InvoiceItemInputSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=255)
    quantity = serializers.DecimalField(max_digits=12, decimal_places=2)
    unit_price = serializers.DecimalField(max_digits=14, decimal_places=2)


class InvoiceWriteSerializer(serializers.Serializer):
    """
    Input serializer for create / PUT (full) and PATCH (partial=True).

    An empty items list is passed through so the engine reports EMPTY_ITEMS.
    """

    client_id = serializers.UUIDField()
    issue_date = serializers.DateField(required=False)
    due_date = serializers.DateField()
    items = InvoiceItemInputSerializer(many=True, allow_empty=True)
    notes = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(
        choices=[(s.value, s.label) for s in REQUESTABLE_STATUSES],
        required=False,
    )

    def validate_status(self, value):
        return InvoiceStatus(value).value
