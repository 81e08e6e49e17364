import datetime
import os


def now() -> datetime.datetime:
    if 'DATETIME_NOW' in os.environ:
        return datetime.datetime.fromisoformat(os.environ['DATETIME_NOW'])
    return datetime.datetime.now(datetime.timezone.utc)
