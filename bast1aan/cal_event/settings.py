from datetime import timedelta

DEFAULT_SUMMARY = 'New Event'
DEFAULT_DURATION = timedelta(hours=2)
DEFAULT_FILENAME = 'calendar-event.ics'
FILE_EXTENSION = '.ics'
CALENDAR_VERSION = '2.0'

# None means the platform temp directory
TMPDIR: str | None = None
