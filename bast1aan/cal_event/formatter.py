""" Entry points: render options to an ical document, or write it to a file """
import os
from typing import Mapping

from bast1aan.cal_event import calendar, ical
from bast1aan.cal_event.adapters.filesystem import LocalFileSystemAdapter
from bast1aan.cal_event.writer import Writer


def render_document(options: Mapping | None) -> str:
    """ Raises: ValidationError """
    return ical.render(calendar.events_from_options(options))

async def write_event_file(options: Mapping | None, directory: str | os.PathLike | None = None) -> str:
    """ Raises: ValidationError, OSError """
    write = Writer(LocalFileSystemAdapter())
    return await write(options, directory)
