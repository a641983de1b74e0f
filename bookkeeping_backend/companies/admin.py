# companies/admin.py

from django.contrib import admin

from companies.models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ("name", "tax_number", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "tax_number")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("name",)
