# ledger/api/views/__init__.py

from ledger.api.views.cash_accounts import CashAccountDetailView, CashAccountListCreateView
from ledger.api.views.clients import ClientListCreateView
from ledger.api.views.invoices import (
    InvoiceDetailView,
    InvoiceListCreateView,
    InvoiceUpdateOverdueView,
)
from ledger.api.views.transactions import TransactionDetailView, TransactionListCreateView

__all__ = [
    "CashAccountDetailView",
    "CashAccountListCreateView",
    "ClientListCreateView",
    "InvoiceDetailView",
    "InvoiceListCreateView",
    "InvoiceUpdateOverdueView",
    "TransactionDetailView",
    "TransactionListCreateView",
]
