# transfers/views.py

from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from accounts.permissions import PolicyPermission
from accounts.policy import Operation
from accounts.profiles import get_current_user
from .serializers import (
    AdminTransactionSerializer,
    TransactionCreateSerializer,
    TransactionFilterSerializer,
    TransactionSerializer,
    TransactionStateSerializer,
)
from .services import TransactionStore


class TransactionViewSet(viewsets.ViewSet):
    permission_classes = [PolicyPermission]
    policy_operations = {
        "list": Operation.READ_OWN_TRANSACTIONS,
        "create": Operation.CREATE_TRANSACTION,
        "retrieve": Operation.READ_TRANSACTION,
        "all": Operation.READ_ALL_TRANSACTIONS,
        "state": Operation.SET_TRANSACTION_STATE,
    }

    def list(self, request):
        caller = get_current_user(request)
        transactions = TransactionStore().list_by_owner(caller.user_id, caller=caller)
        return Response(TransactionSerializer(transactions, many=True).data)

    def create(self, request):
        serializer = TransactionCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        validated = serializer.validated_data

        caller = get_current_user(request)
        tx = TransactionStore().create(
            caller=caller,
            owner_id=caller.user_id,
            source_amount=validated["source_amount"],
            recipient_name=validated["recipient_name"],
            recipient_mobile=validated["recipient_mobile"],
            country=validated["country"],
            payment_method=validated.get("payment_method") or None,
        )
        return Response(TransactionSerializer(tx).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        caller = get_current_user(request)
        tx = TransactionStore().get(pk, caller=caller)
        serializer_class = AdminTransactionSerializer if caller.is_admin else TransactionSerializer
        return Response(serializer_class(tx).data)

    @action(detail=False, methods=["get"])
    def all(self, request):
        filters = TransactionFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        transactions = TransactionStore().list_all(caller=get_current_user(request), **filters.validated_data)
        return Response(AdminTransactionSerializer(transactions, many=True).data)

    @action(detail=True, methods=["post", "patch"])
    def state(self, request, pk=None):
        serializer = TransactionStateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = TransactionStore().update(
            pk,
            caller=get_current_user(request),
            status=serializer.validated_data.get("status"),
            stage=serializer.validated_data.get("stage"),
        )
        return Response(AdminTransactionSerializer(result.transaction).data)
