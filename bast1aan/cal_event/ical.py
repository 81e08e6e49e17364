""" implementation to create ical text from event records """
import re
from typing import Iterable, Iterator

import icalendar

from bast1aan.cal_event import settings
from bast1aan.cal_event.entities import Attendee, EventRecord

CRLF = '\r\n'

_LINE_BREAK = re.compile(r'\r\n?|\n')
# characters that need a quoted parameter value
_QUOTABLE = re.compile(r'[,;:]')

def render(records: Iterable[EventRecord]) -> str:
    lines = ['BEGIN:VCALENDAR', 'VERSION:' + settings.CALENDAR_VERSION]
    for record in records:
        lines.extend(_event_lines(record))
    lines.append('END:VCALENDAR')
    return CRLF.join(lines)

def to_ical(records: Iterable[EventRecord]) -> bytes:
    return render(records).encode('utf-8')

def _event_lines(record: EventRecord) -> Iterator[str]:
    yield 'BEGIN:VEVENT'
    yield 'DTSTAMP:' + record.dtstamp
    if record.organizer:
        yield 'ORGANIZER;CN=%s:MAILTO:%s' % (_param(record.organizer.name), _address(record.organizer.email))
    for attendee in record.attendees or ():
        yield _attendee_line(attendee)
    yield 'DTSTART:' + record.dtstart
    yield 'DTEND:' + record.dtend
    if record.location:
        yield 'LOCATION:' + _text(record.location)
    if record.description:
        yield 'DESCRIPTION:' + _text(record.description)
    yield 'SUMMARY:' + _text(record.summary)
    yield 'END:VEVENT'

def _attendee_line(attendee: Attendee) -> str:
    name = _param(attendee.name or '', quoted=True)
    rsvp = 'TRUE' if attendee.rsvp else 'FALSE'
    return 'ATTENDEE;CN=%s;RSVP=%s:mailto:%s' % (name, rsvp, _address(attendee.email or ''))

def _text(value: str) -> str:
    # vText escapes backslashes, commas, semicolons and newlines
    return icalendar.vText(_LINE_BREAK.sub('\n', value)).to_ical().decode('utf-8')

def _param(value: str, quoted: bool = False) -> str:
    # a parameter value can't contain line breaks or double quotes
    value = _LINE_BREAK.sub(' ', value).replace('"', '')
    if quoted or _QUOTABLE.search(value):
        return '"%s"' % value
    return value

def _address(value: str) -> str:
    return _LINE_BREAK.sub('', value)
