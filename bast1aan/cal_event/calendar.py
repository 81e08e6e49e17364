""" Calendar domain logic """
import logging
from datetime import datetime, timezone
from typing import Mapping

import icalendar

from bast1aan.cal_event import settings
from bast1aan.cal_event.adapters import datetime as datetime_adapter
from bast1aan.cal_event.entities import Attendee, EventInput, EventRecord, Person, ValidationError
from bast1aan.cal_event.json_mapper import JsonMapper, DecodingError, into

logger = logging.getLogger(__name__)

EVENT_MAPPING = {
    'dtstamp': into(EventInput).dtstamp,
    'dtstart': into(EventInput).dtstart,
    'dtend': into(EventInput).dtend,
    'eventName': into(EventInput).event_name,
    'description': into(EventInput).description,
    'location': into(EventInput).location,
    'organizer': {
        'name': into(EventInput).organizer_name,
        'email': into(EventInput).organizer_email,
    },
    'attendees': [{
        'name': into(Attendee).name,
        'email': into(Attendee).email,
        'rsvp': into(Attendee).rsvp,
    }, into(EventInput).attendees],
}

def events_from_options(options: Mapping | None) -> list[EventRecord]:
    """
    Derives the event records from caller options, `{'events': ..., 'filename': ...}`.
    `events` is one event object or a list of them.

    Raises: ValidationError
    """
    if options is None:
        options = {}
    if not isinstance(options, Mapping):
        raise ValidationError(f'options must be an object, got {type(options).__name__}')
    events = options.get('events')
    if isinstance(events, Mapping):
        events = [events]
    if not events:
        raise ValidationError('No events given')
    if not isinstance(events, (list, tuple)):
        raise ValidationError(f'events must be an object or a list, got {type(events).__name__}')

    now = datetime_adapter.now()
    records = []
    for index, event in enumerate(events):
        try:
            records.append(event_record(JsonMapper(EventInput, EVENT_MAPPING)(event), now))
        except (DecodingError, ValidationError) as e:
            raise ValidationError(f'event {index}: {e}') from e
    logger.debug('Derived %d event record(s)', len(records))
    return records

def event_record(event: EventInput, now: datetime) -> EventRecord:
    """ Raises: ValidationError """
    start = event.dtstart or now
    if event.dtend:
        end = event.dtend
    else:
        try:
            end = start + settings.DEFAULT_DURATION
        except OverflowError as e:
            raise ValidationError('dtend: date out of range') from e
    return EventRecord(
        dtstamp=_timestamp('dtstamp', event.dtstamp or now),
        dtstart=_timestamp('dtstart', start),
        dtend=_timestamp('dtend', end),
        summary=event.event_name or settings.DEFAULT_SUMMARY,
        description=event.description or None,
        location=event.location or None,
        organizer=_get_organizer(event),
        attendees=_get_attendees(event),
    )

def format_timestamp(value: datetime) -> str:
    """ UTC timestamp truncated to the hour, like 20240101T090000Z. Naive values are taken as UTC. """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc).replace(minute=0, second=0, microsecond=0)
    return icalendar.vDatetime(value).to_ical().decode('ascii')


def _timestamp(field: str, value: datetime) -> str:
    try:
        return format_timestamp(value)
    except OverflowError as e:
        raise ValidationError(f'{field}: date out of range') from e


def _get_organizer(event: EventInput) -> Person | None:
    if event.organizer_name and event.organizer_email:
        return Person(name=event.organizer_name, email=event.organizer_email)
    return None

def _get_attendees(event: EventInput) -> tuple[Attendee, ...] | None:
    # only the first attendee is checked, it decides for the whole list
    attendees = event.attendees
    if attendees and attendees[0].name and attendees[0].email:
        return tuple(attendees)
    return None
