"""
Management command to assign short codes to events and guests missing them.
"""
from django.core.management.base import BaseCommand, CommandError

from apps.events.models import Event
from apps.events.services import find_event_by_code, generate_missing_codes


class Command(BaseCommand):
    help = 'Generate short codes for events and guests that have none'

    def add_arguments(self, parser):
        parser.add_argument(
            '--event',
            type=str,
            help='Event short code or id (if not specified with --all, will error)'
        )
        parser.add_argument(
            '--all',
            action='store_true',
            help='Generate for all events'
        )

    def handle(self, *args, **options):
        if options['all']:
            events = Event.objects.all()
        elif options['event']:
            event = find_event_by_code(options['event'])
            if event is None:
                raise CommandError(f'Event "{options["event"]}" does not exist')
            events = [event]
        else:
            raise CommandError('Please specify --event <code> or --all')

        event_count, guest_count = generate_missing_codes(events)

        self.stdout.write(self.style.SUCCESS(
            f'Done! Created {event_count} event code(s) and {guest_count} guest code(s).'
        ))
