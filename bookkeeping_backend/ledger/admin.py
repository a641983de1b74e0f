# ledger/admin.py

from django.contrib import admin

from ledger.models import CashAccount, Client, Invoice, InvoiceItem, Transaction

# ============================================================
# CLIENT
# ============================================================


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "email", "phone", "created_at")
    list_filter = ("company",)
    search_fields = ("name", "email", "tax_id")
    ordering = ("company", "name")
    readonly_fields = ("created_at",)


# ============================================================
# CASH ACCOUNT (balance is ledger-maintained)
# ============================================================


@admin.register(CashAccount)
class CashAccountAdmin(admin.ModelAdmin):
    list_display = ("name", "company", "kind", "balance", "initial_balance", "is_active")
    list_filter = ("kind", "is_active", "company")
    search_fields = ("name",)
    ordering = ("company", "name")
    readonly_fields = ("balance", "initial_balance", "created_at", "updated_at")

    def has_delete_permission(self, request, obj=None):
        # Deletion must go through the cascade (orphan + deactivate).
        return False


# ============================================================
# TRANSACTION (READ-ONLY: edits must go through the engine)
# ============================================================


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "company",
        "kind",
        "category",
        "amount",
        "date",
        "cash_account",
        "is_paid",
        "is_deleted",
    )
    list_filter = ("kind", "is_paid", "is_deleted", "company")
    search_fields = ("category", "description")
    ordering = ("-date",)

    def get_queryset(self, request):
        return Transaction.all_objects.select_related("company", "cash_account")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# INVOICE (READ-ONLY)
# ============================================================


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    can_delete = False
    readonly_fields = ("description", "quantity", "unit_price", "line_total")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ("number", "company", "client", "status", "total_amount", "due_date", "is_deleted")
    list_filter = ("status", "is_deleted", "company")
    search_fields = ("number", "client__name")
    ordering = ("-issue_date",)
    inlines = [InvoiceItemInline]

    def get_queryset(self, request):
        return Invoice.all_objects.select_related("company", "client")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
