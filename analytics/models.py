# analytics/models.py
from django.conf import settings
from django.db import models


class EventLog(models.Model):
    """Append-only audit trail of rate and transaction changes."""

    event_type = models.CharField(max_length=80)
    resource_type = models.CharField(max_length=80)
    resource_id = models.CharField(max_length=64)
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="events",
    )
    payload = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ("-created_at", "-id")
        indexes = [
            models.Index(fields=("event_type", "created_at"), name="event_type_created_idx"),
            models.Index(fields=("resource_type", "resource_id"), name="event_resource_idx"),
        ]

    def __str__(self):
        return f"{self.event_type} {self.resource_type}:{self.resource_id}"
