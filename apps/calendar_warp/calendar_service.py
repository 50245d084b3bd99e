import datetime
import logging

import pytz
from django.conf import settings
from google.oauth2.credentials import Credentials
from google.auth.transport.requests import Request
from googleapiclient.discovery import build

from .models import CalendarToken

logger = logging.getLogger(__name__)


class CalendarNotConnected(Exception):
    """No stored Google credentials to reach the calendar with."""


def get_calendar_service(account_email=None):
    """
    Load the CalendarToken (the given account, or the most recently
    connected one), refresh it if expired, and return a Google Calendar
    API service client.
    """
    qs = CalendarToken.objects.order_by('-updated_at')
    if account_email:
        qs = qs.filter(account_email=account_email)
    token = qs.first()
    if token is None:
        raise CalendarNotConnected(
            f'No Google Calendar connected for {account_email}.'
            if account_email else 'No Google Calendar connected.'
        )

    creds = Credentials(
        token=token.access_token,
        refresh_token=token.refresh_token,
        token_uri='https://oauth2.googleapis.com/token',
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
    )

    # Refresh if token is not valid (handles token_expiry=None safely)
    if not creds.valid:
        if creds.expired and creds.refresh_token:
            logger.info('Refreshing Google access token for %s', token.account_email)
            creds.refresh(Request())
            token.access_token = creds.token
            if creds.expiry:
                token.token_expiry = creds.expiry.replace(tzinfo=pytz.UTC)
            token.save()

    return build('calendar', 'v3', credentials=creds, cache_discovery=False)


def list_events(service, time_min, time_max=None, calendar_id=None):
    """
    Fetch timed events starting between time_min and time_max (unbounded
    when time_max is None), in the calendar's start-time order.

    Returns a list of event dicts with 'id', 'name', 'start', 'raw' keys.
    All-day events are skipped: they have no start time to warp.
    """
    calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
    params = {
        'calendarId': calendar_id,
        'timeMin': time_min.isoformat(),
        'singleEvents': True,
        'orderBy': 'startTime',
    }
    if time_max is not None:
        params['timeMax'] = time_max.isoformat()

    events = []
    page_token = None
    while True:
        if page_token:
            params['pageToken'] = page_token
        events_result = service.events().list(**params).execute()

        for item in events_result.get('items', []):
            event = _parse_event(item)
            if event is None:
                continue
            # Google also returns events already in progress at timeMin
            if event['start'] < time_min:
                continue
            events.append(event)

        page_token = events_result.get('nextPageToken')
        if not page_token:
            break

    logger.info(
        'list_events: calendar=%s time_min=%s time_max=%s found=%d',
        calendar_id,
        time_min.isoformat(),
        time_max.isoformat() if time_max else None,
        len(events),
    )
    return events


def update_event_start(service, event, new_start, calendar_id=None):
    """
    Move the event's start to new_start, leaving everything else as is.
    Returns the updated event dict. API errors propagate.
    """
    calendar_id = calendar_id or settings.GOOGLE_CALENDAR_ID
    start_body = {'dateTime': new_start.isoformat()}
    time_zone = event.get('raw', {}).get('start', {}).get('timeZone')
    if time_zone:
        start_body['timeZone'] = time_zone

    updated = service.events().patch(
        calendarId=calendar_id,
        eventId=event['id'],
        body={'start': start_body},
    ).execute()

    logger.info(
        'update_event_start: event_id=%s new_start=%s',
        event['id'],
        new_start.isoformat(),
    )
    return _parse_event(updated) or {
        'id': event['id'],
        'name': event['name'],
        'start': new_start,
        'raw': updated,
    }


def _parse_event(item):
    event_id = item.get('id')
    start_raw = item.get('start', {})
    if not event_id or 'dateTime' not in start_raw:
        return None

    start_dt = datetime.datetime.fromisoformat(start_raw['dateTime'].replace('Z', '+00:00'))
    if start_dt.tzinfo is None:
        start_dt = pytz.UTC.localize(start_dt)

    return {
        'id': event_id,
        'name': item.get('summary', '(No title)'),
        'start': start_dt,
        'raw': item,
    }
