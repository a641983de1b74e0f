# ledger/models/__init__.py

"""
LEDGER MODELS PACKAGE EXPORTS

Note:
- Keep this file *imports-only* (no business logic).
- Do NOT import services from models (models must stay pure).
"""

from ledger.models.cash_account import CashAccount, CashAccountKind
from ledger.models.client import Client
from ledger.models.invoice import Invoice, InvoiceItem, InvoiceStatus
from ledger.models.transaction import Transaction, TransactionKind

__all__ = [
    "CashAccount",
    "CashAccountKind",
    "Client",
    "Invoice",
    "InvoiceItem",
    "InvoiceStatus",
    "Transaction",
    "TransactionKind",
]
