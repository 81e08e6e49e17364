import logging
import os
import tempfile
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Mapping

from bast1aan.cal_event import calendar, ical, settings
from bast1aan.cal_event.entities import ValidationError

logger = logging.getLogger(__name__)


class FileSystemAdapter(ABC):
    @abstractmethod
    async def write(self, path: str, data: bytes) -> None:
        """ Writes data to path, replacing an existing file. Raises: OSError """


def tmpdir() -> str:
    return settings.TMPDIR or tempfile.gettempdir()

def with_extension(filename: str) -> str:
    if filename.endswith(settings.FILE_EXTENSION):
        return filename
    return filename + settings.FILE_EXTENSION

def destination(filename: str | None, directory: str | os.PathLike | None = None) -> str:
    """
    Absolute path to write to:
    - `directory`/`filename` when a directory is given, a filename is then required.
    - temp dir/`filename`, with the .ics extension appended when missing.
    - temp dir/calendar-event.ics otherwise.

    The path always stays inside its directory.

    Raises: ValidationError
    """
    if filename is not None and not isinstance(filename, str):
        raise ValidationError(f'filename must be a string, got {type(filename).__name__}')
    if directory:
        if not filename:
            raise ValidationError('A filename is required when a directory is given')
        return _inside(directory, filename)
    if filename:
        return _inside(tmpdir(), with_extension(filename))
    return _inside(tmpdir(), settings.DEFAULT_FILENAME)

def _inside(directory: str | os.PathLike, filename: str) -> str:
    directory = os.path.abspath(directory)
    path = os.path.abspath(os.path.join(directory, filename))
    if os.path.isabs(filename) or path == directory or os.path.commonpath([directory, path]) != directory:
        raise ValidationError(f'filename {filename!r} points outside {directory}')
    return path


@dataclass
class Writer:
    adapter: FileSystemAdapter

    async def __call__(self, options: Mapping | None, directory: str | os.PathLike | None = None) -> str:
        """
        Renders options and writes the result in a single write, returns the path written to.
        Nothing is written when options don't validate.

        Raises: ValidationError, OSError
        """
        data = ical.to_ical(calendar.events_from_options(options))
        path = destination(options.get('filename'), directory)
        try:
            await self.adapter.write(path, data)
        except OSError as e:
            logger.error('Could not write calendar to %s: %s', path, e)
            raise
        logger.info('Wrote calendar to %s', path)
        return path
