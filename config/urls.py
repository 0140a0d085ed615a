from django.contrib import admin
from django.urls import path, include
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

schema_view = get_schema_view(
    openapi.Info(
        title="AlahdalPay API",
        default_version="v1",
        description="GBP remittances to Somalia and Kenya",
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),

    # Authentication and accounts
    path("api/auth/", include(("accounts.urls", "accounts"), namespace="accounts")),

    # Exchange rates and quotes
    path("api/currency/", include("currency.urls")),

    # Transfers
    path("api/transfers/", include("transfers.urls")),

    # Statistics and audit trail
    path("api/analytics/", include("analytics.urls")),

    path("api/docs/", schema_view.with_ui("swagger", cache_timeout=0), name="schema-swagger-ui"),
]
