import os
import logging
import json

# Attributes every LogRecord carries; anything else was passed via extra=
_RECORD_ATTRIBUTES = {
    'args', 'asctime', 'created', 'exc_info', 'exc_text', 'filename',
    'funcName', 'id', 'levelname', 'levelno', 'lineno', 'module',
    'msecs', 'message', 'msg', 'name', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'thread', 'threadName',
    'taskName'
}


def setup_logging(level=None, json_format=None):
    """
    Set up logging for the worker scaler.

    Args:
        level: Optional log level override (default: uses LOG_LEVEL env var or INFO)
        json_format: Optional override for JSON output (default: LOG_FORMAT env var is 'json')
    """
    if level is None:
        level = os.environ.get('LOG_LEVEL', 'INFO')
    numeric_level = getattr(logging, str(level).upper(), logging.INFO)

    if json_format is None:
        json_format = os.environ.get('LOG_FORMAT', 'text').lower() == 'json'

    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s [%(levelname)s] %(name)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # One JSON object per line for log shippers
    if json_format:
        for handler in logging.getLogger().handlers:
            handler.setFormatter(JsonFormatter())

    logging.getLogger('asyncio').setLevel(logging.WARNING)

    logging.debug("Logging initialized")


class JsonFormatter(logging.Formatter):
    """
    Format log records as single-line JSON objects.
    """

    def format(self, record):
        log_record = {
            'timestamp': self.formatTime(record, self.datefmt),
            'level': record.levelname,
            'name': record.name,
            'message': record.getMessage(),
            'file': record.pathname,
            'line': record.lineno,
            'function': record.funcName
        }

        if record.exc_info:
            log_record['exception'] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_ATTRIBUTES:
                log_record[key] = value

        return json.dumps(log_record, default=str)
