"""
Structured logging configuration.

Called once from create_app(). LOG_LEVEL (default INFO) and LOG_FORMAT
("text" or "json") are read at that point unless passed explicitly. Records
emitted while a request is being served carry its method and path, so a
store failure logged by the listing service can be tied to the page request
that hit it.
"""
import json
import logging
import os
import sys
from datetime import datetime, timezone

from flask import has_request_context, request

# Third-party loggers that are noisy at INFO
_NOISY_LOGGERS = ('urllib3', 'werkzeug', 'sqlalchemy.engine', 'alembic')

_TEXT_FORMAT = '[%(asctime)s] %(levelname)s %(name)s: %(message)s'


class RequestContextFilter(logging.Filter):
    """Tag records with the current request's method and path, if any."""

    def filter(self, record):
        if has_request_context():
            record.http_method = request.method
            record.http_path = request.full_path.rstrip('?')
        return True


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(_TEXT_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')

    def format(self, record):
        line = super().format(record)
        method = getattr(record, 'http_method', None)
        if method:
            line = f'{line} [{method} {record.http_path}]'
        return line


class JSONFormatter(logging.Formatter):
    """Single-line JSON log formatter for production log aggregators."""

    def format(self, record):
        entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        method = getattr(record, 'http_method', None)
        if method:
            entry['request'] = {'method': method, 'path': record.http_path}
        if record.exc_info and record.exc_info[0] is not None:
            entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(entry)


def resolve_level(name):
    """Log level for a name like 'debug'; INFO for anything unknown."""
    level = logging.getLevelName(str(name or 'INFO').upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(app=None, level=None, log_format=None):
    """
    Install a single stderr handler on the root logger.

    level and log_format override LOG_LEVEL and LOG_FORMAT. The Flask app
    logger, when given, follows the same level.
    """
    level = resolve_level(level or os.getenv('LOG_LEVEL'))
    log_format = (log_format or os.getenv('LOG_FORMAT') or 'text').lower()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.addFilter(RequestContextFilter())
    handler.setFormatter(JSONFormatter() if log_format == 'json' else TextFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if app is not None:
        app.logger.setLevel(level)
