# ledger/api/urls.py

from django.urls import path

from ledger.api.views import (
    CashAccountDetailView,
    CashAccountListCreateView,
    ClientListCreateView,
    InvoiceDetailView,
    InvoiceListCreateView,
    InvoiceUpdateOverdueView,
    TransactionDetailView,
    TransactionListCreateView,
)

urlpatterns = [
    # Cash accounts
    path("cash-accounts/", CashAccountListCreateView.as_view(), name="cash-account-list"),
    path("cash-accounts/<str:pk>/", CashAccountDetailView.as_view(), name="cash-account-detail"),
    # Transactions
    path("transactions/", TransactionListCreateView.as_view(), name="transaction-list"),
    path("transactions/<str:pk>/", TransactionDetailView.as_view(), name="transaction-detail"),
    # Invoices (update-overdue must precede the detail route)
    path("invoices/", InvoiceListCreateView.as_view(), name="invoice-list"),
    path(
        "invoices/update-overdue/",
        InvoiceUpdateOverdueView.as_view(),
        name="invoice-update-overdue",
    ),
    path("invoices/<str:pk>/", InvoiceDetailView.as_view(), name="invoice-detail"),
    # Master data
    path("clients/", ClientListCreateView.as_view(), name="client-list"),
]
