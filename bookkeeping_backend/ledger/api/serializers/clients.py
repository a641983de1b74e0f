# ledger/api/serializers/clients.py

from rest_framework import serializers

from ledger.models import Client


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = ["id", "name", "email", "phone", "address", "tax_id", "created_at"]
        read_only_fields = ("id", "created_at")

    def validate_name(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name is required")
        return v
