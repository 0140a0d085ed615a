from django.contrib import admin
from .models import EventLog


@admin.register(EventLog)
class EventLogAdmin(admin.ModelAdmin):
    list_display = ('event_type', 'resource_type', 'resource_id', 'actor', 'created_at')
    list_filter = ('event_type', 'resource_type')
    ordering = ('-created_at',)
    search_fields = ('resource_id', 'event_type', 'actor__email')
    readonly_fields = ('event_type', 'resource_type', 'resource_id', 'actor', 'payload', 'created_at')

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
