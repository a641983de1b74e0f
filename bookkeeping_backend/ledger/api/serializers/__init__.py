# ledger/api/serializers/__init__.py

from ledger.api.serializers.cash_accounts import (
    CashAccountCreateSerializer,
    CashAccountDeletionSerializer,
    CashAccountDetailSerializer,
    CashAccountSerializer,
    CashAccountUpdateSerializer,
)
from ledger.api.serializers.clients import ClientSerializer
from ledger.api.serializers.invoices import (
    InvoiceItemInputSerializer,
    InvoiceItemSerializer,
    InvoiceSerializer,
    InvoiceWriteSerializer,
)
from ledger.api.serializers.transactions import (
    TransactionSerializer,
    TransactionWriteSerializer,
)

__all__ = [
    "CashAccountCreateSerializer",
    "CashAccountDeletionSerializer",
    "CashAccountDetailSerializer",
    "CashAccountSerializer",
    "CashAccountUpdateSerializer",
    "ClientSerializer",
    "InvoiceItemInputSerializer",
    "InvoiceItemSerializer",
    "InvoiceSerializer",
    "InvoiceWriteSerializer",
    "TransactionSerializer",
    "TransactionWriteSerializer",
]
