# users/admin.py

"""
USERS ADMIN REGISTRATION

Registers the custom User model so it appears in Django Admin, including the
company (tenant) assignment.
"""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

User = get_user_model()


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("email",)
    list_display = ("email", "company", "role", "is_staff", "is_active", "is_superuser")
    list_filter = ("role", "company", "is_staff", "is_active", "is_superuser")
    search_fields = ("email", "first_name", "last_name")
    list_select_related = ("company",)

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("first_name", "last_name", "role", "company")}),
        (
            "Permissions",
            {
                "fields": (
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                )
            },
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "password1",
                    "password2",
                    "company",
                    "role",
                    "is_staff",
                    "is_active",
                ),
            },
        ),
    )
