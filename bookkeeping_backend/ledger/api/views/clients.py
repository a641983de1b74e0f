# ledger/api/views/clients.py

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.response import Response

from ledger.api.serializers import ClientSerializer
from ledger.api.views.base import LedgerAPIView
from ledger.models import Client


class ClientListCreateView(LedgerAPIView):
    serializer_class = ClientSerializer

    @extend_schema(tags=["ledger"], responses=ClientSerializer(many=True))
    def get(self, request, *args, **kwargs):
        qs = Client.objects.for_company(self.company)
        return Response(ClientSerializer(qs, many=True).data, status=status.HTTP_200_OK)

    @extend_schema(tags=["ledger"], request=ClientSerializer, responses={201: ClientSerializer})
    def post(self, request, *args, **kwargs):
        s = self.get_serializer(data=request.data)
        s.is_valid(raise_exception=True)
        client = s.save(company=self.company)
        return Response(ClientSerializer(client).data, status=status.HTTP_201_CREATED)
