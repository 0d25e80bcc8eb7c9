import uuid

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from accounts.models import Account
from mechanics.models import Mechanic
from service_requests.utils.geo import Coordinate


class ServiceRequest(models.Model):
    """Customer request for on-site vehicle service."""

    PENDING = 'pending'
    ASSIGNED = 'assigned'
    IN_PROGRESS = 'in_progress'
    PARTS_RECOMMENDED = 'parts_recommended'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (ASSIGNED, 'Assigned'),
        (IN_PROGRESS, 'In Progress'),
        (PARTS_RECOMMENDED, 'Parts Recommended'),
        (COMPLETED, 'Completed'),
        (CANCELLED, 'Cancelled'),
    ]

    # Generated client-side so deep links can be built before the insert
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    customer = models.ForeignKey(Account, on_delete=models.CASCADE, related_name='service_requests')

    # Vehicle details
    vehicle_type = models.CharField(max_length=50)
    vehicle_make = models.CharField(max_length=50, blank=True)
    vehicle_model = models.CharField(max_length=50, blank=True)
    vehicle_year = models.PositiveIntegerField(null=True, blank=True)
    issue_description = models.TextField()

    # Location
    latitude = models.FloatField(validators=[MinValueValidator(-90.0), MaxValueValidator(90.0)])
    longitude = models.FloatField(validators=[MinValueValidator(-180.0), MaxValueValidator(180.0)])
    address = models.TextField()

    # Assignment
    mechanic = models.ForeignKey(
        Mechanic,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='service_requests'
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=PENDING
    )

    # Scheduling and cost
    scheduled_date = models.DateTimeField(null=True, blank=True)
    completed_date = models.DateTimeField(null=True, blank=True)
    estimated_cost = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    final_cost = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Service Request'
        verbose_name_plural = 'Service Requests'
        indexes = [
            models.Index(fields=['status'], name='service_request_status_idx'),
            models.Index(fields=['latitude', 'longitude'], name='service_request_location_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(status='assigned') | models.Q(mechanic__isnull=False),
                name='service_request_assigned_has_mechanic',
            ),
        ]

    def __str__(self):
        mechanic_info = f" → {self.mechanic.account.name}" if self.mechanic else ""
        return f"{self.customer.name} - {self.vehicle_type} ({self.status}){mechanic_info}"

    @property
    def location(self):
        return Coordinate(self.latitude, self.longitude)

    @property
    def mechanic_url(self):
        return f'/mechanic/services/{self.id}'

    @property
    def customer_url(self):
        return f'/customer/services/{self.id}'
