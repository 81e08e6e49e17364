import json
import os
from typing import Mapping

from flask import Flask, Response, request

from bast1aan.cal_event import calendar, ical, json_mapper, settings, writer
from bast1aan.cal_event.entities import ValidationError

app = Flask(__name__)

@app.post("/api/cal-event/ics")
def ics() -> Response:
    options = request.get_json(silent=True)
    if options is None:
        return _error_response('Request body must be json')
    try:
        ical_body = ical.to_ical(calendar.events_from_options(options))
        filename = _attachment_name(options)
    except ValidationError as e:
        return _error_response(str(e))

    return app.response_class(
        response=ical_body,
        mimetype="text/calendar",
        headers={'Content-Disposition': 'attachment; filename="{}"'.format(filename)}
    )

@app.post("/api/cal-event/events")
def events() -> Response:
    options = request.get_json(silent=True)
    if options is None:
        return _error_response('Request body must be json')
    try:
        records = calendar.events_from_options(options)
    except ValidationError as e:
        return _error_response(str(e))
    return app.response_class(json_mapper.dumps({'results': records}), mimetype="application/json")

def _error_response(error: str, status: int = 400) -> Response:
    return app.response_class(json.dumps({"error": error}), mimetype="application/json", status=status)

def _attachment_name(options: Mapping) -> str:
    filename = options.get('filename') or settings.DEFAULT_FILENAME
    if not isinstance(filename, str):
        raise ValidationError(f'filename must be a string, got {type(filename).__name__}')
    return os.path.basename(writer.with_extension(filename)).replace('"', '')
