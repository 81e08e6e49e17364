from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime


class ValidationError(ValueError): pass

@dataclass(frozen=True)
class Person:
    name: str
    email: str

@dataclass(frozen=True)
class Attendee:
    name: str | None
    email: str | None
    rsvp: bool | None = None

@dataclass
class EventInput:
    """ Event as given by the caller, every field optional """
    dtstamp: datetime | None = None
    dtstart: datetime | None = None
    dtend: datetime | None = None
    event_name: str | None = None
    description: str | None = None
    location: str | None = None
    organizer_name: str | None = None
    organizer_email: str | None = None
    attendees: list[Attendee] | None = None

@dataclass(frozen=True)
class EventRecord:
    """ Event ready for rendering, timestamps already formatted """
    dtstamp: str
    dtstart: str
    dtend: str
    summary: str
    description: str | None = None
    location: str | None = None
    organizer: Person | None = None
    attendees: tuple[Attendee, ...] | None = None
