"""
Django management command to preview mechanic ranking for a location.

Usage:
    python manage.py nearest_mechanic LAT LNG [--limit N]

Example:
    python manage.py nearest_mechanic 12.9716 77.5946
    python manage.py nearest_mechanic 12.9716 77.5946 --limit 3
"""
from django.core.management.base import BaseCommand, CommandError

from mechanics.models import Mechanic
from service_requests.services.selector import load_candidates, rank_mechanics
from service_requests.utils.geo import Coordinate


class Command(BaseCommand):
    help = 'Rank eligible in-range mechanics for a location without assigning anything'

    def add_arguments(self, parser):
        parser.add_argument(
            'latitude',
            type=str,
            help='Latitude in decimal degrees (e.g., 12.9716)'
        )
        parser.add_argument(
            'longitude',
            type=str,
            help='Longitude in decimal degrees (e.g., 77.5946)'
        )
        parser.add_argument(
            '--limit',
            type=int,
            default=10,
            help='Optional: Maximum number of mechanics to list (default 10)'
        )

    def handle(self, *args, **options):
        lat_str = options['latitude']
        lng_str = options['longitude']
        limit = options['limit']

        try:
            latitude = float(lat_str)
            longitude = float(lng_str)
        except (TypeError, ValueError):
            raise CommandError(
                f'Invalid coordinates: "{lat_str}, {lng_str}". '
                f'Please use decimal degrees (e.g., 12.9716 77.5946).'
            )

        if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
            raise CommandError(
                f'Coordinates out of range: {latitude}, {longitude}. '
                f'Latitude must be within [-90, 90] and longitude within [-180, 180].'
            )

        if limit < 1:
            raise CommandError('--limit must be at least 1')

        candidates = load_candidates()
        ranked = rank_mechanics(Coordinate(latitude, longitude), candidates)

        self.stdout.write(
            self.style.WARNING(
                f'Ranking mechanics for ({latitude}, {longitude})...\n'
                f'{len(candidates)} available mechanic(s) checked\n'
            )
        )

        if not ranked:
            self.stdout.write(
                self.style.WARNING('No mechanic in range; a request here would stay pending.')
            )
            return

        names = dict(
            Mechanic.objects.filter(
                id__in=[r.candidate.id for r in ranked[:limit]]
            ).values_list('id', 'account__name')
        )

        self.stdout.write(
            f'{"#":<4} {"Mechanic":<30} {"Distance (km)":<15} {"Radius (km)":<12}'
        )
        self.stdout.write('-' * 64)

        for position, entry in enumerate(ranked[:limit], start=1):
            self.stdout.write(
                f'{position:<4} '
                f'{names.get(entry.candidate.id, str(entry.candidate.id)):<30} '
                f'{entry.distance_km:>13.2f}  '
                f'{entry.candidate.service_radius_km:>10.2f}'
            )

        self.stdout.write('-' * 64)
        self.stdout.write(
            self.style.SUCCESS(
                f'\nWould assign: {names.get(ranked[0].candidate.id, ranked[0].candidate.id)}\n'
                f'Mechanics in range: {len(ranked)}'
            )
        )
