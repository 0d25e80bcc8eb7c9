"""
Django management command to toggle whether a mechanic accepts new work.

Usage:
    python manage.py set_availability MECHANIC_ID {on,off}

Example:
    python manage.py set_availability 3f1c2a9e-8d7b-4c55-a0a1-2f6e9b1d4c10 off
"""
import logging
import uuid

from django.core.management.base import BaseCommand, CommandError

from mechanics.models import Mechanic

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Mark a mechanic as available or unavailable for automatic assignment'

    def add_arguments(self, parser):
        parser.add_argument(
            'mechanic_id',
            type=str,
            help='Mechanic UUID'
        )
        parser.add_argument(
            'state',
            choices=['on', 'off'],
            help='"on" to accept new service requests, "off" to stop'
        )

    def handle(self, *args, **options):
        mechanic_id = options['mechanic_id']

        try:
            mechanic_uuid = uuid.UUID(mechanic_id)
        except ValueError:
            raise CommandError(f'Invalid mechanic id: "{mechanic_id}"')

        mechanic = Mechanic.objects.select_related('account').filter(pk=mechanic_uuid).first()
        if mechanic is None:
            raise CommandError(f'Mechanic "{mechanic_id}" not found')

        is_available = options['state'] == 'on'
        mechanic.is_available = is_available
        mechanic.save(update_fields=['is_available', 'updated_at'])
        logger.info(f"Mechanic {mechanic.id} availability set to {is_available}")

        self.stdout.write(
            self.style.SUCCESS(
                f'{mechanic.account.name} is now {"available" if is_available else "unavailable"}'
            )
        )

        if is_available and not mechanic.is_approved:
            self.stdout.write(
                self.style.WARNING('  - Not approved yet: will not be assigned until approved')
            )
