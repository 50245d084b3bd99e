"""
Management command: warp_calendar

Moves upcoming Google Calendar events earlier by a random amount, within a
given threshold. Every warped event is backed up to SavedEvent first, and
events already in SavedEvent are never warped again.

Usage:
    python manage.py warp_calendar
    python manage.py warp_calendar --max-warp=45 --warp-days=14

Any failure while fetching, backing up or updating events aborts the run
with a non-zero exit status. Events warped before the failure stay warped.
"""
import logging

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

# Imported at module level so tests can patch
# apps.calendar_warp.management.commands.warp_calendar.get_calendar_service
from apps.calendar_warp.calendar_service import CalendarNotConnected, get_calendar_service
from apps.calendar_warp.warp import backup_events, fetch_candidate_events, warp_events

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Modifies your Google Calendar event times by a random amount, within a given threshold.'

    def add_arguments(self, parser):
        parser.add_argument(
            '--max-warp',
            type=int,
            default=getattr(settings, 'CALENDAR_WARP_MAX_MINUTES', 30),
            help='Maximum amount to shift events, in minutes (default: 30).',
        )
        parser.add_argument(
            '--warp-days',
            type=int,
            default=getattr(settings, 'CALENDAR_WARP_DAYS', 7),
            help='Number of days ahead to fetch events to warp (default: 7).',
        )
        parser.add_argument(
            '--account',
            type=str,
            default=None,
            help='Google account email to use (default: the most recently connected one).',
        )

    def handle(self, *args, **options):
        max_warp = options['max_warp']
        warp_days = options['warp_days']
        min_warp = getattr(settings, 'CALENDAR_WARP_MIN_MINUTES', 5)

        if min_warp <= 0:
            raise CommandError(f'CALENDAR_WARP_MIN_MINUTES must be positive, got {min_warp}.')
        if max_warp < min_warp:
            raise CommandError(f'--max-warp must be at least {min_warp} minutes, got {max_warp}.')
        if warp_days < 0:
            raise CommandError(f'--warp-days must not be negative, got {warp_days}.')

        self.stdout.write(self.style.SUCCESS('Starting calendar warp...'))
        self.stdout.write(' | '.join([
            f'Max warp: {max_warp} min',
            f'Min warp: {min_warp} min',
            f'Events to warp: {warp_days} days',
        ]))

        try:
            service = get_calendar_service(options['account'])
        except CalendarNotConnected as exc:
            raise CommandError(
                f'{exc} Visit /calendar/auth/start/ to connect a Google account.'
            ) from exc

        try:
            self.stdout.write(self.style.SUCCESS('Fetching events from your calendar...'))
            events = fetch_candidate_events(service, warp_days)

            self.stdout.write(self.style.SUCCESS('Backing up events...'))
            backup_events(events)

            self.stdout.write(self.style.SUCCESS('Warping events now...'))
            if not events:
                self.stdout.write(self.style.SUCCESS('No events found.'))
                return

            total = len(events)
            self.stdout.write(self.style.SUCCESS(f'Found {total} events to warp.'))

            progress = {'done': 0}

            def report(result):
                progress['done'] += 1
                self.stdout.write('')
                self.stdout.write(self.style.SUCCESS(result.event['name']))
                self.stdout.write(f'Before: {result.before}')
                self.stdout.write(f'After: {result.after}')
                self.stdout.write(f"[{progress['done']}/{total}]")

            warp_events(service, events, min_warp, max_warp, on_warped=report)
        except Exception as exc:
            logger.exception('warp_calendar: run aborted: %s', exc)
            self.stderr.write(self.style.ERROR(f'\n✗ Error: {type(exc).__name__}: {exc}'))
            raise

        self.stdout.write('')
        self.stdout.write(self.style.SUCCESS(f'Done. Warped {total} events.'))
