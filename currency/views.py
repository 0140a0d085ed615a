# currency/views.py

from rest_framework import viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import PolicyPermission
from accounts.policy import Operation
from accounts.profiles import get_current_user
from core.constants import destination_currency, source_currency
from .serializers import ConversionSerializer, QuoteRequestSerializer, RateEntrySerializer, RateUpdateSerializer
from .services import RateTable


class RateViewSet(viewsets.ViewSet):
    """Rates are addressed by country name: /rates/Somalia/."""

    permission_classes = [PolicyPermission]
    lookup_field = "country"
    policy_operations = {
        "list": Operation.READ_RATE,
        "retrieve": Operation.READ_RATE,
        "update": Operation.UPDATE_RATE,
    }

    def list(self, request):
        rates = RateTable().list_rates()
        return Response(RateEntrySerializer(rates, many=True).data)

    def retrieve(self, request, country=None):
        entry = RateTable().get_active_rate(country)
        return Response(RateEntrySerializer(entry).data)

    def update(self, request, country=None):
        serializer = RateUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = RateTable().update_rate(
            country,
            serializer.validated_data["exchange_rate"],
            serializer.validated_data["fee_percentage"],
            caller=get_current_user(request),
        )
        return Response(RateEntrySerializer(entry).data)


class QuoteView(APIView):
    """Live conversion preview for the send form; never writes anything."""

    permission_classes = [PolicyPermission]
    policy_operation = Operation.READ_RATE

    def get(self, request):
        params = QuoteRequestSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        country = params.validated_data["country"]

        conversion = RateTable().quote(country, params.validated_data["amount"])
        data = {
            "country": country,
            "source_currency": source_currency(),
            "destination_currency": destination_currency(country),
            "source_amount": conversion.source_amount,
            "destination_amount": conversion.destination_amount,
            "fee": conversion.fee,
            "total_charge": conversion.total_charge,
            "exchange_rate": conversion.exchange_rate,
            "is_ready": conversion.is_ready,
            "error": " ".join(str(message) for message in conversion.error.detail) if conversion.error else None,
        }
        return Response(ConversionSerializer(data).data)
