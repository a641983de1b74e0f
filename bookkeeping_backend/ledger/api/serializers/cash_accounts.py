# ledger/api/serializers/cash_accounts.py

from decimal import Decimal

from rest_framework import serializers

from ledger.api.serializers.transactions import TransactionSerializer
from ledger.models import CashAccount, CashAccountKind


class CashAccountSerializer(serializers.ModelSerializer):
    class Meta:
        model = CashAccount
        fields = [
            "id",
            "name",
            "kind",
            "initial_balance",
            "balance",
            "is_active",
            "description",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class CashAccountDetailSerializer(CashAccountSerializer):
    transactions = TransactionSerializer(many=True, read_only=True)

    class Meta(CashAccountSerializer.Meta):
        fields = CashAccountSerializer.Meta.fields + ["transactions"]
        read_only_fields = fields


class CashAccountCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=120)
    kind = serializers.ChoiceField(choices=CashAccountKind.choices, default=CashAccountKind.CASH)
    initial_balance = serializers.DecimalField(
        max_digits=14, decimal_places=2, required=False, default=Decimal("0.00")
    )
    description = serializers.CharField(required=False, allow_blank=True, default="")


class CashAccountUpdateSerializer(serializers.Serializer):
    """
    balance / initial_balance are deliberately absent: the ledger owns them.
    """

    name = serializers.CharField(max_length=120, required=False)
    kind = serializers.ChoiceField(choices=CashAccountKind.choices, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class CashAccountDeletionSerializer(serializers.Serializer):
    hard_deleted = serializers.BooleanField()
    orphaned_transaction_count = serializers.IntegerField()
