# transfers/admin.py

from django.contrib import admin
from .models import Transaction


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    list_display = ("id", "owner", "source_amount", "destination_amount", "country", "status", "stage", "created_at")
    list_filter = ("country", "status", "stage")
    search_fields = ("owner__email", "recipient_name", "recipient_mobile")
    ordering = ("-created_at",)
    # Status and stage change through the state endpoint only.
    readonly_fields = [field.name for field in Transaction._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
