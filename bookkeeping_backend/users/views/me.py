# users/views/me.py

from drf_spectacular.utils import extend_schema
from rest_framework import serializers
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView


class MeSerializer(serializers.Serializer):
    """Caller profile plus the tenant every ledger request is scoped to."""

    id = serializers.UUIDField(read_only=True)
    email = serializers.EmailField(read_only=True)
    first_name = serializers.CharField(read_only=True)
    last_name = serializers.CharField(read_only=True)
    role = serializers.CharField(read_only=True)
    company_id = serializers.UUIDField(read_only=True, allow_null=True)
    company_name = serializers.CharField(source="company.name", read_only=True, allow_null=True)
    company_active = serializers.SerializerMethodField()

    def get_company_active(self, user) -> bool:
        company = user.company
        return bool(company and company.is_active)


class MeView(APIView):
    permission_classes = [IsAuthenticated]
    serializer_class = MeSerializer

    @extend_schema(
        responses={200: MeSerializer},
        description="Current user and tenant. company_active=false means ledger endpoints will answer 403.",
    )
    def get(self, request):
        return Response(MeSerializer(request.user).data)
