"""
Diagnostic logging for jsonlogfmt.

Two formatters are provided: LogfmtFormatter renders records with the
package's own logfmt renderer, and JSONFormatter emits single-line JSON
records in exactly the shape the converter consumes.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, TextIO

from jsonlogfmt.config import RenderConfig
from jsonlogfmt.render import Renderer


def _jsonable(value: Any) -> Any:
    """Coerce a value into the JSON value model, stringifying unknown types"""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    return str(value)


def _timestamp(record: logging.LogRecord) -> str:
    created = datetime.fromtimestamp(record.created, tz=timezone.utc)
    return created.strftime('%Y-%m-%dT%H:%M:%S.%fZ')


def build_log_data(record: logging.LogRecord, formatter: logging.Formatter) -> Dict[str, Any]:
    """
    Build the structured form of a log record.

    Output shape:
    {
        "at": "2026-02-08T20:30:00.123456Z",
        "level": "info",
        "logger": "jsonlogfmt.stream",
        "msg": "Passing through undecodable line",
        "context": {...}  # Optional extra fields
    }
    """
    log_data = {
        'at': _timestamp(record),
        'level': record.levelname.lower(),
        'logger': record.name,
        'msg': record.getMessage(),
    }

    # From logger.info(..., extra={'context': {...}})
    context = getattr(record, 'context', None)
    if context:
        log_data['context'] = _jsonable(context)

    if record.exc_info:
        log_data['exception'] = {
            'type': record.exc_info[0].__name__,
            'message': str(record.exc_info[1]),
            'traceback': formatter.formatException(record.exc_info)
        }

    return log_data


class JSONFormatter(logging.Formatter):
    """Formatter that outputs one JSON object per record"""

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(build_log_data(record, self), default=str)


class LogfmtFormatter(logging.Formatter):
    """Formatter that outputs one logfmt line per record"""

    def __init__(self, config: Optional[RenderConfig] = None):
        super().__init__()
        self.renderer = Renderer(config)

    def format(self, record: logging.LogRecord) -> str:
        return self.renderer.render_record(build_log_data(record, self)) or ''


def get_logger(
    name: str,
    level: int = logging.INFO,
    stream: Optional[TextIO] = None,
    use_logfmt: bool = True
) -> logging.Logger:
    """
    Get a configured logger writing to stderr (or stream).

    Args:
        name: Logger name (typically 'jsonlogfmt')
        level: Logging level (default: INFO)
        stream: Output stream for the handler (default: sys.stderr)
        use_logfmt: Use LogfmtFormatter, else JSONFormatter (default: True)

    Returns:
        Configured logger instance

    Example:
        logger = get_logger('jsonlogfmt', level=logging.DEBUG)
        logger.debug("Run finished", extra={'context': {'lines': 10}})
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reuse an existing console handler to avoid duplicates
    handler = next(
        (h for h in logger.handlers
         if isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)),
        None
    )

    if handler is None:
        handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    handler.setLevel(level)
    handler.setFormatter(LogfmtFormatter() if use_logfmt else JSONFormatter())

    return logger
