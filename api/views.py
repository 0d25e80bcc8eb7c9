import logging
import uuid

from django.utils.dateparse import parse_datetime
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.models import Account
from mechanics.models import Mechanic
from notifications.models import Notification
from service_requests.models import ServiceRequest
from service_requests.services.assignment import create_service_request

logger = logging.getLogger(__name__)


def _parse_uuid(value):
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError, AttributeError):
        return None


def _service_request_payload(service_request):
    mechanic = service_request.mechanic
    return {
        'id': str(service_request.id),
        'customer_id': str(service_request.customer_id),
        'status': service_request.status,
        'mechanic': {
            'id': str(mechanic.id),
            'name': mechanic.account.name,
            'phone': mechanic.account.phone,
        } if mechanic else None,
        'vehicle_type': service_request.vehicle_type,
        'vehicle_make': service_request.vehicle_make,
        'vehicle_model': service_request.vehicle_model,
        'vehicle_year': service_request.vehicle_year,
        'issue_description': service_request.issue_description,
        'latitude': service_request.latitude,
        'longitude': service_request.longitude,
        'address': service_request.address,
        'scheduled_date': service_request.scheduled_date.isoformat() if service_request.scheduled_date else None,
        'created_at': service_request.created_at.isoformat() if service_request.created_at else None,
    }


def _notification_payload(notification):
    return {
        'id': str(notification.id),
        'type': notification.type,
        'title': notification.title,
        'message': notification.message,
        'action_url': notification.action_url,
        'is_read': notification.is_read,
        'created_at': notification.created_at.isoformat(),
    }


class ServiceRequestCreateView(APIView):
    """
    API endpoint to create a service request with automatic mechanic assignment.

    Request body (JSON):
        - customer_id (required): Customer account UUID
        - vehicle_type (required): e.g. "car", "bike"
        - issue_description (required): What is wrong
        - latitude, longitude (required): Request location in decimal degrees
        - address (required): Street address
        - vehicle_make, vehicle_model, vehicle_year, scheduled_date (optional)

    Returns:
        JSON with the created request; status is "assigned" with the mechanic
        when one was in range, otherwise "pending" with mechanic null
    """

    def post(self, request):
        data = request.data

        if not isinstance(data, dict):
            return Response(
                {'error': 'Request body must be a JSON object'},
                status=status.HTTP_400_BAD_REQUEST
            )

        # Validate required fields
        required_fields = ['customer_id', 'vehicle_type', 'issue_description', 'latitude', 'longitude', 'address']
        missing_fields = [field for field in required_fields if data.get(field) in (None, '')]

        if missing_fields:
            return Response(
                {'error': f'Missing required fields: {", ".join(missing_fields)}'},
                status=status.HTTP_400_BAD_REQUEST
            )

        # Parse coordinates
        try:
            latitude = float(data.get('latitude'))
            longitude = float(data.get('longitude'))
        except (TypeError, ValueError):
            return Response(
                {'error': 'latitude and longitude must be numbers in decimal degrees'},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            return Response(
                {'error': 'latitude must be within [-90, 90] and longitude within [-180, 180]'},
                status=status.HTTP_400_BAD_REQUEST
            )

        # Optional fields
        vehicle_year = data.get('vehicle_year')
        if vehicle_year not in (None, ''):
            try:
                vehicle_year = int(vehicle_year)
            except (TypeError, ValueError):
                return Response(
                    {'error': f'Invalid vehicle_year: "{vehicle_year}"'},
                    status=status.HTTP_400_BAD_REQUEST
                )
        else:
            vehicle_year = None

        scheduled_date = None
        scheduled_str = data.get('scheduled_date')
        if scheduled_str:
            try:
                scheduled_date = parse_datetime(str(scheduled_str))
                if scheduled_date is None:
                    raise ValueError("Invalid datetime format")
            except (ValueError, TypeError):
                return Response(
                    {'error': f'Invalid scheduled_date: "{scheduled_str}". Please use ISO 8601 format.'},
                    status=status.HTTP_400_BAD_REQUEST
                )

        # Resolve customer
        customer_id = _parse_uuid(data.get('customer_id'))
        if customer_id is None:
            return Response(
                {'error': f'Invalid customer_id: "{data.get("customer_id")}"'},
                status=status.HTTP_400_BAD_REQUEST
            )

        customer = Account.objects.filter(pk=customer_id, is_active=True).first()
        if customer is None:
            return Response(
                {'error': 'Customer not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        # Create request; assignment and notifications share its transaction
        try:
            service_request = create_service_request(
                customer,
                vehicle_type=data.get('vehicle_type'),
                vehicle_make=data.get('vehicle_make') or '',
                vehicle_model=data.get('vehicle_model') or '',
                vehicle_year=vehicle_year,
                issue_description=data.get('issue_description'),
                latitude=latitude,
                longitude=longitude,
                address=data.get('address'),
                scheduled_date=scheduled_date,
            )
        except Exception as e:
            logger.error(f"Error creating service request: {e}", exc_info=True)
            return Response(
                {'error': 'Error creating service request'},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

        return Response(_service_request_payload(service_request), status=status.HTTP_201_CREATED)


class ServiceRequestDetailView(APIView):
    """API endpoint to fetch a single service request."""

    def get(self, request, pk):
        service_request = ServiceRequest.objects.select_related('mechanic__account').filter(pk=pk).first()
        if service_request is None:
            return Response(
                {'error': 'Service request not found'},
                status=status.HTTP_404_NOT_FOUND
            )
        return Response(_service_request_payload(service_request))


class MechanicAvailabilityView(APIView):
    """
    API endpoint for a mechanic to start or stop accepting work.

    Request body (JSON):
        - is_available (required): true or false
    """

    def patch(self, request, pk):
        is_available = request.data.get('is_available')
        if not isinstance(is_available, bool):
            return Response(
                {'error': 'is_available must be true or false'},
                status=status.HTTP_400_BAD_REQUEST
            )

        mechanic = Mechanic.objects.filter(pk=pk).first()
        if mechanic is None:
            return Response(
                {'error': 'Mechanic not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        mechanic.is_available = is_available
        mechanic.save(update_fields=['is_available', 'updated_at'])
        logger.info(f"Mechanic {mechanic.id} availability set to {is_available}")

        return Response({
            'id': str(mechanic.id),
            'is_available': mechanic.is_available,
            'is_approved': mechanic.is_approved,
        })


class AccountNotificationsView(APIView):
    """
    API endpoint listing an account's notifications, newest first.

    Query parameters:
        - unread (optional): "true" to only return unread notifications
    """

    def get(self, request, pk):
        if not Account.objects.filter(pk=pk).exists():
            return Response(
                {'error': 'Account not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        notifications = Notification.objects.filter(account_id=pk)
        if request.query_params.get('unread', '').lower() == 'true':
            notifications = notifications.filter(is_read=False)

        return Response({
            'account_id': str(pk),
            'notifications': [_notification_payload(n) for n in notifications]
        })


class NotificationReadView(APIView):
    """API endpoint to mark a notification as read."""

    def post(self, request, pk):
        notification = Notification.objects.filter(pk=pk).first()
        if notification is None:
            return Response(
                {'error': 'Notification not found'},
                status=status.HTTP_404_NOT_FOUND
            )

        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=['is_read'])

        return Response(_notification_payload(notification))
