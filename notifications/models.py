import uuid

from django.db import models

from accounts.models import Account


class Notification(models.Model):
    """In-app notification addressed to a single account."""

    SERVICE_ASSIGNED = 'service_assigned'
    MECHANIC_ASSIGNED = 'mechanic_assigned'

    TYPE_CHOICES = [
        (SERVICE_ASSIGNED, 'Service Assigned'),
        (MECHANIC_ASSIGNED, 'Mechanic Assigned'),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='notifications')
    type = models.CharField(max_length=50, choices=TYPE_CHOICES)
    title = models.CharField(max_length=200)
    message = models.TextField()
    action_url = models.CharField(max_length=255, blank=True, null=True)
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['account', 'is_read'], name='notification_unread_idx'),
        ]

    def __str__(self):
        read_indicator = "✓" if self.is_read else "•"
        return f"{read_indicator} {self.title} → {self.account.name}"
