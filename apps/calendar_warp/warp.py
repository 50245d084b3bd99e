"""
Warp flow: fetch upcoming events, drop the ones already warped, back up
the rest, then move each one earlier by a random offset.

Steps run strictly in that order. Nothing is retried and nothing is
rolled back: a failed backup stops the run before any event is touched,
and a failed update stops it with earlier events already warped (their
backups stay in place).
"""
import datetime
import logging
from collections import namedtuple

from django.utils import timezone

from .calendar_service import list_events, update_event_start
from .jitter import compute_offset
from .models import SavedEvent

logger = logging.getLogger(__name__)

WarpResult = namedtuple('WarpResult', ['event', 'before', 'after', 'offset'])


def fetch_candidate_events(service, warp_days, now=None, calendar_id=None):
    """
    Return the events starting within the next warp_days days that have
    never been warped. warp_days=0 means every event from now on.
    """
    if isinstance(warp_days, bool) or not isinstance(warp_days, int) or warp_days < 0:
        raise ValueError(f'warp_days must be a non-negative integer, got {warp_days!r}')

    now = now or timezone.now()
    time_max = now + datetime.timedelta(days=warp_days) if warp_days else None

    events = list_events(service, now, time_max, calendar_id=calendar_id)
    return filter_warped_events(events)


def filter_warped_events(events):
    """Drop events whose id is already in the backup table. Keeps order."""
    if not events:
        return []

    warped_ids = set(
        SavedEvent.objects.filter(
            remote_id__in=[event['id'] for event in events],
        ).values_list('remote_id', flat=True)
    )
    candidates = [event for event in events if event['id'] not in warped_ids]

    logger.info(
        'filter_warped_events: fetched=%d already_warped=%d candidates=%d',
        len(events),
        len(events) - len(candidates),
        len(candidates),
    )
    return candidates


def backup_events(events):
    """Store one SavedEvent per event in a single bulk insert."""
    if not events:
        return []

    saved = SavedEvent.objects.bulk_create([
        SavedEvent(
            name=event['name'],
            remote_id=event['id'],
            original_start=event['start'],
        )
        for event in events
    ])
    logger.info('backup_events: saved %d event(s)', len(saved))
    return saved


def warp_event(service, event, min_warp, max_warp, calendar_id=None):
    """Move a single event earlier by a random offset."""
    before = event['start']
    offset = compute_offset(min_warp, max_warp)
    new_start = before - datetime.timedelta(minutes=offset)

    updated = update_event_start(service, event, new_start, calendar_id=calendar_id)

    logger.info(
        'warp_event: event_id=%s offset=%d before=%s after=%s',
        event['id'],
        offset,
        before.isoformat(),
        updated['start'].isoformat(),
    )
    return WarpResult(event=event, before=before, after=updated['start'], offset=offset)


def warp_events(service, events, min_warp, max_warp, calendar_id=None, on_warped=None):
    """
    Warp events one at a time, in order. on_warped(result) is called after
    each successful update. The first failure propagates and the
    remaining events are left untouched.
    """
    results = []
    for event in events:
        try:
            result = warp_event(service, event, min_warp, max_warp, calendar_id=calendar_id)
        except Exception:
            logger.error(
                'warp_events: update failed for event_id=%s after %d of %d warped',
                event['id'],
                len(results),
                len(events),
            )
            raise
        results.append(result)
        if on_warped is not None:
            on_warped(result)
    return results
