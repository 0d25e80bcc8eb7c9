"""
Automatic mechanic assignment for new service requests.

A new request is matched to the nearest eligible mechanic as part of the
same transaction that inserts it. When a mechanic is found the request is
marked assigned and both parties are notified; otherwise it stays pending.
"""
import logging
from typing import Iterable, List, Optional

from django.db import transaction

from notifications.models import Notification
from service_requests.models import ServiceRequest
from service_requests.services.selector import MechanicCandidate, find_nearest_candidate

logger = logging.getLogger(__name__)


def assign_mechanic(
    service_request: ServiceRequest,
    candidates: Optional[Iterable[MechanicCandidate]] = None
) -> List[Notification]:
    """
    Assign the nearest eligible mechanic to an unsaved, unassigned request.

    The request is mutated in place. Requests that are not pending, or that
    already have a mechanic, are left untouched.

    Returns:
        Unsaved notifications for the mechanic and the customer, or an empty
        list when nothing was assigned
    """
    if service_request.status != ServiceRequest.PENDING or service_request.mechanic_id is not None:
        return []

    nearest = find_nearest_candidate(service_request.location, candidates)
    if nearest is None:
        logger.info(f"No mechanic available for service request {service_request.id}; left pending")
        return []

    service_request.mechanic_id = nearest.id
    service_request.status = ServiceRequest.ASSIGNED

    logger.info(f"Service request {service_request.id} assigned to mechanic {nearest.id}")

    return [
        Notification(
            account_id=nearest.account_id,
            type=Notification.SERVICE_ASSIGNED,
            title='New Service Request',
            message='You have been assigned a new service request',
            action_url=service_request.mechanic_url,
        ),
        Notification(
            account_id=service_request.customer_id,
            type=Notification.MECHANIC_ASSIGNED,
            title='Mechanic Assigned',
            message='A mechanic has been assigned to your service request',
            action_url=service_request.customer_url,
        ),
    ]


def save_new_service_request(
    service_request: ServiceRequest,
    candidates: Optional[Iterable[MechanicCandidate]] = None
) -> ServiceRequest:
    """
    Insert a new service request, running mechanic assignment first.

    The insert and any notifications commit together. Database errors
    propagate and roll the whole unit back; the in-memory request is reset
    to its pre-assignment state so a retry runs assignment again.
    """
    original_status = service_request.status
    original_mechanic_id = service_request.mechanic_id
    original_adding = service_request._state.adding

    try:
        with transaction.atomic():
            notifications = assign_mechanic(service_request, candidates)
            service_request.save(force_insert=True)
            if notifications:
                Notification.objects.bulk_create(notifications)
    except Exception:
        service_request.status = original_status
        service_request.mechanic_id = original_mechanic_id
        service_request._state.adding = original_adding
        raise

    return service_request


def create_service_request(customer, **fields) -> ServiceRequest:
    """
    Create a pending service request for a customer and try to assign it.

    Args:
        customer: Account placing the request
        **fields: ServiceRequest fields (location, vehicle details, address...)

    Returns:
        The saved ServiceRequest, assigned or pending
    """
    fields.pop('status', None)
    fields.pop('mechanic', None)
    fields.pop('mechanic_id', None)

    service_request = ServiceRequest(
        customer=customer,
        status=ServiceRequest.PENDING,
        mechanic=None,
        **fields
    )
    return save_new_service_request(service_request)
