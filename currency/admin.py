from django.contrib import admin

from .models import RateEntry


@admin.register(RateEntry)
class RateEntryAdmin(admin.ModelAdmin):
    list_display = ("country", "exchange_rate", "fee_percentage", "version", "updated_by", "updated_at")
    ordering = ("country",)
    # Rates are edited through RateTable only.
    readonly_fields = ("country", "exchange_rate", "fee_percentage", "version", "updated_by", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
