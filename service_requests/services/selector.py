"""
Nearest-mechanic selection.

Ranks a snapshot of mechanic candidates against a request location: only
available, approved mechanics with an active account and a known position
are considered, and only when the request falls inside their own service
radius. The nearest one wins; equal distances are settled by mechanic id.
"""
import logging
import uuid
from dataclasses import dataclass
from typing import Iterable, List, Optional

from mechanics.models import Mechanic
from service_requests.conf import assignment_setting
from service_requests.services.spatial import CandidateIndex
from service_requests.utils.geo import Coordinate, distance_km

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MechanicCandidate:
    """Read-only view of a mechanic as the selector sees it."""

    id: uuid.UUID
    account_id: uuid.UUID
    position: Coordinate
    service_radius_km: float
    is_available: bool = True
    is_approved: bool = True
    account_is_active: bool = True

    @property
    def is_eligible(self) -> bool:
        return (
            self.is_available
            and self.is_approved
            and self.account_is_active
            and self.position.is_complete
        )


@dataclass(frozen=True)
class RankedMechanic:
    candidate: MechanicCandidate
    distance_km: float


def load_candidates() -> List[MechanicCandidate]:
    """
    Snapshot the mechanic registry.

    Only available, approved mechanics whose account is active are read;
    positionless ones are kept here and dropped during ranking.
    """
    rows = Mechanic.objects.filter(
        is_available=True,
        is_approved=True,
        account__is_active=True
    ).order_by('id').values(
        'id',
        'account_id',
        'service_radius_km',
        'is_available',
        'is_approved',
        'account__is_active',
        'account__latitude',
        'account__longitude',
    )

    return [
        MechanicCandidate(
            id=row['id'],
            account_id=row['account_id'],
            position=Coordinate(row['account__latitude'], row['account__longitude']),
            service_radius_km=row['service_radius_km'],
            is_available=row['is_available'],
            is_approved=row['is_approved'],
            account_is_active=row['account__is_active'],
        )
        for row in rows
    ]


def rank_mechanics(
    request_location: Coordinate,
    candidates: Iterable[MechanicCandidate]
) -> List[RankedMechanic]:
    """
    Rank eligible, in-range candidates by distance to the request.

    Returns:
        List of RankedMechanic, nearest first, ties ordered by mechanic id.
        Empty when the request location is incomplete.
    """
    if not request_location.is_complete:
        logger.warning(f"Request location {request_location} is incomplete; no mechanic can be ranked")
        return []

    eligible = [c for c in candidates if c.is_eligible]

    threshold = assignment_setting('SPATIAL_INDEX_THRESHOLD')
    if threshold is not None and len(eligible) >= threshold:
        index = CandidateIndex(eligible)
        eligible = index.nearby(request_location)
        logger.debug(f"Spatial prefilter kept {len(eligible)} of {len(index)} candidates")

    ranked = []
    for candidate in eligible:
        distance = distance_km(candidate.position, request_location)
        if distance is None or distance > candidate.service_radius_km:
            continue
        ranked.append(RankedMechanic(candidate, distance))

    ranked.sort(key=lambda r: (r.distance_km, str(r.candidate.id)))
    return ranked


def find_nearest_candidate(
    request_location: Coordinate,
    candidates: Optional[Iterable[MechanicCandidate]] = None
) -> Optional[MechanicCandidate]:
    """
    Find the nearest eligible candidate whose service radius covers the location.

    Args:
        request_location: Where the service is needed
        candidates: Snapshot to rank; read from the registry when omitted

    Returns:
        The winning MechanicCandidate, or None if no mechanic qualifies
    """
    if candidates is None:
        candidates = load_candidates()

    ranked = rank_mechanics(request_location, candidates)
    if not ranked:
        logger.debug(f"No mechanic in range of {request_location}")
        return None

    nearest = ranked[0]
    logger.debug(
        f"Nearest mechanic {nearest.candidate.id} at {nearest.distance_km:.2f} km "
        f"({len(ranked)} in range)"
    )
    return nearest.candidate


def find_nearest_mechanic(
    request_location: Coordinate,
    candidates: Optional[Iterable[MechanicCandidate]] = None
) -> Optional[uuid.UUID]:
    """Id of the nearest eligible, in-range mechanic, or None."""
    nearest = find_nearest_candidate(request_location, candidates)
    return nearest.id if nearest else None
