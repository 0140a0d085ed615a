# analytics/views.py
from rest_framework import viewsets
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.permissions import PolicyPermission
from accounts.policy import Operation
from accounts.profiles import get_current_user
from .models import EventLog
from .serializers import EventLogSerializer, SummarySerializer
from .services import summarize


class EventLogViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = EventLogSerializer
    permission_classes = [PolicyPermission]
    policy_operation = Operation.VIEW_STATISTICS

    def get_queryset(self):
        queryset = EventLog.objects.all()
        resource_type = self.request.query_params.get("resource_type")
        resource_id = self.request.query_params.get("resource_id")
        if resource_type:
            queryset = queryset.filter(resource_type=resource_type)
        if resource_id:
            queryset = queryset.filter(resource_id=resource_id)
        return queryset


class SummaryView(APIView):
    permission_classes = [PolicyPermission]
    policy_operation = Operation.VIEW_STATISTICS

    def get(self, request):
        data = summarize(get_current_user(request))
        return Response(SummarySerializer(data).data)
