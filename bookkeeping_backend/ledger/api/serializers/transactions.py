# ledger/api/serializers/transactions.py

from rest_framework import serializers

from ledger.models import Transaction, TransactionKind


class TransactionSerializer(serializers.ModelSerializer):
    """
    Output serializer (DB truth).
    """

    cash_account_id = serializers.UUIDField(read_only=True, allow_null=True)
    cash_account_name = serializers.CharField(
        source="cash_account.name", read_only=True, default=None
    )
    invoice_id = serializers.UUIDField(read_only=True, allow_null=True)
    invoice_number = serializers.CharField(source="invoice.number", read_only=True, default=None)

    class Meta:
        model = Transaction
        fields = [
            "id",
            "kind",
            "category",
            "amount",
            "description",
            "date",
            "is_paid",
            "cash_account_id",
            "cash_account_name",
            "invoice_id",
            "invoice_number",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TransactionWriteSerializer(serializers.Serializer):
    """
    Input serializer for create (full) and edit (partial=True).

    Amount sign/positivity and account usability are enforced by the
    engine, so they come back with stable error codes.
    """

    kind = serializers.ChoiceField(choices=TransactionKind.choices)
    category = serializers.CharField(max_length=120)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    date = serializers.DateField(required=False)
    cash_account_id = serializers.UUIDField(required=False, allow_null=True)
    is_paid = serializers.BooleanField(required=False, default=False)

    def validate_category(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("category is required")
        return v
