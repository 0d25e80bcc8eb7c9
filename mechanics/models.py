import uuid

from django.core.exceptions import ValidationError
from django.db import models

from accounts.models import Account

DEFAULT_SERVICE_RADIUS_KM = 10


def validate_service_radius(value):
    if value is None or value <= 0:
        raise ValidationError('Service radius must be greater than zero.')


class Mechanic(models.Model):
    """Mechanic profile attached to an account. Position comes from the account."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account = models.OneToOneField(Account, on_delete=models.CASCADE, related_name='mechanic')

    expertise = models.JSONField(default=list, blank=True)
    specialization = models.CharField(max_length=100, blank=True)
    experience_years = models.PositiveIntegerField(default=0)
    hourly_rate = models.DecimalField(max_digits=8, decimal_places=2, default=0)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    total_services = models.PositiveIntegerField(default=0)

    service_radius_km = models.FloatField(
        default=DEFAULT_SERVICE_RADIUS_KM,
        validators=[validate_service_radius]
    )
    is_available = models.BooleanField(default=True)
    is_approved = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['id']
        indexes = [
            models.Index(fields=['is_available', 'is_approved'], name='mechanic_availability_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(service_radius_km__gt=0),
                name='mechanic_service_radius_positive',
            ),
        ]

    def __str__(self):
        return f"{self.account.name} ({self.service_radius_km:g} km)"

    @property
    def position(self):
        return self.account.position
