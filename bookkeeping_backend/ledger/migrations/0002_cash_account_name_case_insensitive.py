# ledger/migrations/0002_cash_account_name_case_insensitive.py

from __future__ import annotations

import django.db.models.functions.text
from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("ledger", "0001_initial"),
    ]

    operations = [
        migrations.RemoveConstraint(
            model_name="cashaccount",
            name="uniq_active_cash_account_name_per_company",
        ),
        migrations.AddConstraint(
            model_name="cashaccount",
            constraint=models.UniqueConstraint(
                models.F("company"),
                django.db.models.functions.text.Lower("name"),
                condition=models.Q(("is_active", True)),
                name="uniq_active_cash_account_lower_name_per_company",
            ),
        ),
    ]
