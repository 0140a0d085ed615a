# currency/urls.py

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import QuoteView, RateViewSet

router = DefaultRouter()
router.register(r'rates', RateViewSet, basename='rate')

urlpatterns = [
    path('', include(router.urls)),
    path('quote/', QuoteView.as_view(), name='rate-quote'),
]
