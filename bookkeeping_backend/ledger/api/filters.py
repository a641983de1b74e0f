# ledger/api/filters.py

import django_filters

from ledger.models import Invoice, InvoiceStatus, Transaction, TransactionKind


class TransactionFilter(django_filters.FilterSet):
    kind = django_filters.ChoiceFilter(choices=TransactionKind.choices)
    cash_account = django_filters.UUIDFilter(field_name="cash_account_id")
    is_paid = django_filters.BooleanFilter()
    category = django_filters.CharFilter(lookup_expr="icontains")
    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")

    class Meta:
        model = Transaction
        fields = ["kind", "cash_account", "is_paid", "category", "date_from", "date_to"]


class InvoiceFilter(django_filters.FilterSet):
    status = django_filters.ChoiceFilter(choices=InvoiceStatus.choices)
    client = django_filters.UUIDFilter(field_name="client_id")
    number = django_filters.CharFilter(lookup_expr="icontains")
    issued_from = django_filters.DateFilter(field_name="issue_date", lookup_expr="gte")
    issued_to = django_filters.DateFilter(field_name="issue_date", lookup_expr="lte")
    due_before = django_filters.DateFilter(field_name="due_date", lookup_expr="lt")

    class Meta:
        model = Invoice
        fields = ["status", "client", "number", "issued_from", "issued_to", "due_before"]
