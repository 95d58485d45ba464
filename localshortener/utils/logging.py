"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` once when the application starts,
before the registry or any controller logs anything.

Every line written to stdout is a single JSON object. Fields passed through
`extra={...}` are merged into it, so structured events stay greppable:
{
    "timestamp": "2025-10-15T12:00:00.000Z",
    "level": "INFO",
    "logger": "localshortener.registry.shortcode_registry",
    "message": "Created short URL http://localhost:3000/abc123.",
    "shortcode": "abc123",
    "event": "SHORT_URL_CREATED"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from localshortener.constants import ENV


# Attributes every LogRecord carries; anything else on a record came from `extra`
_RECORD_ATTRS = frozenset(vars(logging.LogRecord('', logging.NOTSET, '', 0, '', (), None))) | {'message', 'asctime'}


class JsonFormatter(logging.Formatter):
    """Render a LogRecord, its `extra` fields and any traceback as one JSON line"""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=UTC)
        log = {
            'timestamp': created.isoformat(timespec='milliseconds').replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        log.update((key, value) for key, value in vars(record).items() if key not in _RECORD_ATTRS)

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Extras such as enums, datetimes or callbacks are rendered via str()
        return json.dumps(log, default=str)


def initialize_logging(level: str | None = None) -> None:
    """Route all loggers to stdout through JsonFormatter

    Args:
        level (str | None):
            Root log level. Read from LOG_LEVEL (default 'INFO') when None.
    """
    level = (level or os.getenv(ENV.App.LOG_LEVEL, 'INFO')).upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {'json': {'()': JsonFormatter}},
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                },
            },
            'root': {'level': level, 'handlers': ['stdout']},
        }
    )
