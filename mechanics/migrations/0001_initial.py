import uuid

import django.db.models.deletion
from django.db import migrations, models

import mechanics.models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Mechanic",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("expertise", models.JSONField(blank=True, default=list)),
                ("specialization", models.CharField(blank=True, max_length=100)),
                ("experience_years", models.PositiveIntegerField(default=0)),
                ("hourly_rate", models.DecimalField(decimal_places=2, default=0, max_digits=8)),
                ("rating", models.DecimalField(decimal_places=2, default=0, max_digits=3)),
                ("total_services", models.PositiveIntegerField(default=0)),
                (
                    "service_radius_km",
                    models.FloatField(default=10, validators=[mechanics.models.validate_service_radius]),
                ),
                ("is_available", models.BooleanField(default=True)),
                ("is_approved", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "account",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="mechanic",
                        to="accounts.account",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["is_available", "is_approved"], name="mechanic_availability_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("service_radius_km__gt", 0)),
                        name="mechanic_service_radius_positive",
                    ),
                ],
            },
        ),
    ]
