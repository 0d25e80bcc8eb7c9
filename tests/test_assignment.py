from unittest import mock

import pytest
from django.contrib import admin
from django.db import DatabaseError

from notifications.models import Notification
from service_requests.admin import ServiceRequestAdmin
from service_requests.models import ServiceRequest
from service_requests.services.assignment import (
    assign_mechanic,
    create_service_request,
    save_new_service_request,
)
from service_requests.services.selector import MechanicCandidate
from tests.conftest import BANGALORE, north_of

pytestmark = pytest.mark.django_db


def request_fields(position=BANGALORE, **overrides):
    fields = {
        'vehicle_type': 'car',
        'vehicle_make': 'Maruti',
        'vehicle_model': 'Swift',
        'issue_description': 'Engine will not start',
        'latitude': position[0],
        'longitude': position[1],
        'address': 'MG Road, Bengaluru',
    }
    fields.update(overrides)
    return fields


def test_assigns_single_eligible_mechanic(customer, make_mechanic):
    mechanic = make_mechanic(position=(12.9816, 77.6046), service_radius_km=15)

    service_request = create_service_request(customer, **request_fields())
    service_request.refresh_from_db()

    assert service_request.status == ServiceRequest.ASSIGNED
    assert service_request.mechanic_id == mechanic.id

    notifications = Notification.objects.all()
    assert notifications.count() == 2

    to_mechanic = notifications.get(account=mechanic.account)
    assert to_mechanic.type == Notification.SERVICE_ASSIGNED
    assert to_mechanic.title == 'New Service Request'
    assert to_mechanic.action_url == f'/mechanic/services/{service_request.id}'

    to_customer = notifications.get(account=customer)
    assert to_customer.type == Notification.MECHANIC_ASSIGNED
    assert to_customer.title == 'Mechanic Assigned'
    assert to_customer.action_url == f'/customer/services/{service_request.id}'


def test_no_mechanics_leaves_request_pending(customer):
    service_request = create_service_request(customer, **request_fields())
    service_request.refresh_from_db()

    assert service_request.status == ServiceRequest.PENDING
    assert service_request.mechanic_id is None
    assert Notification.objects.count() == 0


def test_only_ineligible_mechanics_leaves_request_pending(customer, make_mechanic):
    make_mechanic(is_available=False)
    make_mechanic(is_approved=False)
    make_mechanic(is_active=False)
    make_mechanic(position=None)
    make_mechanic(position=north_of(BANGALORE, 12), service_radius_km=10)

    service_request = create_service_request(customer, **request_fields())

    assert service_request.status == ServiceRequest.PENDING
    assert service_request.mechanic_id is None
    assert Notification.objects.count() == 0


def test_nearest_of_several_is_assigned(customer, make_mechanic):
    make_mechanic(position=north_of(BANGALORE, 5))
    nearest = make_mechanic(position=north_of(BANGALORE, 2))
    make_mechanic(position=north_of(BANGALORE, 8))

    service_request = create_service_request(customer, **request_fields())

    assert service_request.mechanic_id == nearest.id


def test_second_run_on_assigned_request_is_noop(customer, make_mechanic):
    first = make_mechanic(position=north_of(BANGALORE, 5))
    service_request = create_service_request(customer, **request_fields())
    assert service_request.mechanic_id == first.id

    # A closer mechanic appearing later must not steal the request
    make_mechanic(position=north_of(BANGALORE, 1))
    notifications = assign_mechanic(service_request)

    assert notifications == []
    assert service_request.mechanic_id == first.id
    assert service_request.status == ServiceRequest.ASSIGNED
    assert Notification.objects.count() == 2


def test_non_pending_request_is_not_assigned(customer, make_mechanic):
    make_mechanic()
    service_request = ServiceRequest(
        customer=customer,
        status=ServiceRequest.IN_PROGRESS,
        **request_fields()
    )

    save_new_service_request(service_request)
    service_request.refresh_from_db()

    assert service_request.status == ServiceRequest.IN_PROGRESS
    assert service_request.mechanic_id is None
    assert Notification.objects.count() == 0


def test_pre_assigned_request_is_left_alone(customer, make_mechanic):
    chosen = make_mechanic(position=north_of(BANGALORE, 9))
    make_mechanic(position=north_of(BANGALORE, 1))
    service_request = ServiceRequest(customer=customer, mechanic=chosen, **request_fields())

    assert assign_mechanic(service_request) == []
    assert service_request.mechanic_id == chosen.id
    assert service_request.status == ServiceRequest.PENDING


def test_create_ignores_caller_supplied_assignment(customer, make_mechanic):
    other = make_mechanic(position=north_of(BANGALORE, 9))
    nearest = make_mechanic(position=north_of(BANGALORE, 1))

    service_request = create_service_request(
        customer,
        status=ServiceRequest.COMPLETED,
        mechanic=other,
        **request_fields()
    )

    assert service_request.status == ServiceRequest.ASSIGNED
    assert service_request.mechanic_id == nearest.id


def test_notification_failure_rolls_back_request(customer, make_mechanic):
    make_mechanic()

    with mock.patch.object(Notification.objects, 'bulk_create', side_effect=DatabaseError('disk full')):
        with pytest.raises(DatabaseError):
            create_service_request(customer, **request_fields())

    assert ServiceRequest.objects.count() == 0
    assert Notification.objects.count() == 0


def test_retry_after_rollback_assigns_again(customer, make_mechanic):
    mechanic = make_mechanic()
    service_request = ServiceRequest(customer=customer, **request_fields())

    with mock.patch.object(Notification.objects, 'bulk_create', side_effect=DatabaseError('disk full')):
        with pytest.raises(DatabaseError):
            save_new_service_request(service_request)

    assert service_request.status == ServiceRequest.PENDING
    assert service_request.mechanic_id is None
    assert service_request._state.adding is True

    save_new_service_request(service_request)
    service_request.refresh_from_db()

    assert service_request.status == ServiceRequest.ASSIGNED
    assert service_request.mechanic_id == mechanic.id
    assert Notification.objects.filter(account=mechanic.account).count() == 1
    assert Notification.objects.count() == 2


def test_request_insert_failure_propagates(customer, make_mechanic):
    make_mechanic()

    with mock.patch.object(ServiceRequest, 'save', side_effect=DatabaseError('connection lost')):
        with pytest.raises(DatabaseError):
            create_service_request(customer, **request_fields())

    assert ServiceRequest.objects.count() == 0
    assert Notification.objects.count() == 0


def test_explicit_candidate_snapshot(customer, make_mechanic):
    from service_requests.services.selector import load_candidates

    snapshot = load_candidates()
    late = make_mechanic(position=north_of(BANGALORE, 1))

    service_request = ServiceRequest(customer=customer, **request_fields())
    assert assign_mechanic(service_request, snapshot) == []
    assert service_request.status == ServiceRequest.PENDING

    assert assign_mechanic(service_request, load_candidates())
    assert service_request.mechanic_id == late.id


def test_admin_creation_runs_assignment(customer, make_mechanic):
    mechanic = make_mechanic(position=north_of(BANGALORE, 3))
    model_admin = ServiceRequestAdmin(ServiceRequest, admin.site)
    service_request = ServiceRequest(customer=customer, **request_fields())

    model_admin.save_model(request=None, obj=service_request, form=None, change=False)
    service_request.refresh_from_db()

    assert service_request.status == ServiceRequest.ASSIGNED
    assert service_request.mechanic_id == mechanic.id
    assert Notification.objects.count() == 2


def test_mechanic_account_comes_from_snapshot(customer, make_mechanic, django_assert_num_queries):
    mechanic = make_mechanic(position=north_of(BANGALORE, 2))
    candidate = MechanicCandidate(
        id=mechanic.id,
        account_id=mechanic.account_id,
        position=mechanic.account.position,
        service_radius_km=mechanic.service_radius_km,
    )
    service_request = ServiceRequest(customer=customer, **request_fields())

    with django_assert_num_queries(0):
        notifications = assign_mechanic(service_request, [candidate])

    assert service_request.mechanic_id == mechanic.id
    assert [n.account_id for n in notifications] == [mechanic.account_id, customer.id]
