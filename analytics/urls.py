# analytics/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import EventLogViewSet, SummaryView

router = DefaultRouter()
router.register(r'events', EventLogViewSet, basename='event')

urlpatterns = [
    path('summary/', SummaryView.as_view(), name='analytics-summary'),
    path('', include(router.urls)),
]
