import math

import pytest
from rest_framework.test import APIClient

from accounts.models import Account
from mechanics.models import Mechanic
from service_requests.utils.geo import EARTH_RADIUS_KM

BANGALORE = (12.9716, 77.5946)


def north_of(origin, km):
    """Point km kilometres due north of origin (lat, lng)."""
    lat, lng = origin
    return lat + math.degrees(km / EARTH_RADIUS_KM), lng


@pytest.fixture
def customer(db):
    return Account.objects.create(
        name='Asha Rao',
        role='customer',
        phone='+919800000001',
        city='Bengaluru',
        latitude=BANGALORE[0],
        longitude=BANGALORE[1],
    )


@pytest.fixture
def make_mechanic(db):
    counter = {'n': 0}

    def _make(
        position=BANGALORE,
        service_radius_km=10,
        is_available=True,
        is_approved=True,
        is_active=True,
        name=None,
    ):
        counter['n'] += 1
        latitude, longitude = position if position is not None else (None, None)
        account = Account.objects.create(
            name=name or f"Mechanic {counter['n']}",
            role='mechanic',
            latitude=latitude,
            longitude=longitude,
            is_active=is_active,
        )
        return Mechanic.objects.create(
            account=account,
            service_radius_km=service_radius_km,
            is_available=is_available,
            is_approved=is_approved,
        )

    return _make


@pytest.fixture
def api_client():
    return APIClient()
