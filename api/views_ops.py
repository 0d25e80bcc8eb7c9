"""
Operations views for staff-only assignment diagnostics.
"""
import json
import logging

from django.contrib.admin.views.decorators import staff_member_required
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_protect
from django.views.decorators.http import require_http_methods

from mechanics.models import Mechanic
from service_requests.services.selector import load_candidates, rank_mechanics
from service_requests.utils.geo import Coordinate

logger = logging.getLogger(__name__)


@staff_member_required
@csrf_protect
@require_http_methods(["POST"])
def nearest_preview_api(request):
    """API endpoint ranking in-range mechanics for a location without assigning."""
    try:
        data = json.loads(request.body)
        latitude = data.get('latitude')
        longitude = data.get('longitude')

        if latitude is None or longitude is None:
            return JsonResponse({'error': 'latitude and longitude are required'}, status=400)

        try:
            location = Coordinate(float(latitude), float(longitude))
        except (TypeError, ValueError):
            return JsonResponse({'error': 'Invalid coordinates'}, status=400)

        candidates = load_candidates()
        ranked = rank_mechanics(location, candidates)

        names = dict(
            Mechanic.objects.filter(
                id__in=[r.candidate.id for r in ranked]
            ).values_list('id', 'account__name')
        )

        return JsonResponse({
            'latitude': location.latitude,
            'longitude': location.longitude,
            'candidates_checked': len(candidates),
            'nearest_mechanic_id': str(ranked[0].candidate.id) if ranked else None,
            'ranking': [
                {
                    'mechanic_id': str(entry.candidate.id),
                    'name': names.get(entry.candidate.id),
                    'distance_km': entry.distance_km,
                    'service_radius_km': entry.candidate.service_radius_km,
                }
                for entry in ranked
            ]
        })

    except json.JSONDecodeError:
        return JsonResponse({'error': 'Invalid JSON'}, status=400)
    except Exception as e:
        logger.error(f"Error in nearest_preview_api: {e}", exc_info=True)
        return JsonResponse({'error': str(e)}, status=500)
