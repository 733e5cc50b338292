"""Logging configuration for bivgeo.

Library modules only ask for loggers under the ``bivgeo`` namespace and
never attach handlers themselves. Applications, and the CLI, call
``setup_logging`` once at start-up.
"""

import functools
import json
import logging
import logging.config
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

ROOT_LOGGER = 'bivgeo'

# Record attributes copied into structured output when present
CONTEXT_FIELDS = ('component', 'operation', 'n_samples', 'method')

FILE_MAX_BYTES = 10 * 1024 * 1024
FILE_BACKUPS = 5


class BivGeoFormatter(logging.Formatter):
    """Render each record as one JSON object."""

    def __init__(self, include_elapsed: bool = True):
        super().__init__()
        self.include_elapsed = include_elapsed
        self.created_at = time.time()

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if self.include_elapsed:
            payload['elapsed'] = f"{record.created - self.created_at:.3f}s"

        payload.update(
            {field: getattr(record, field) for field in CONTEXT_FIELDS if hasattr(record, field)}
        )
        if record.exc_info:
            payload['exception'] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def _formatters() -> Dict[str, Dict[str, Any]]:
    return {
        'plain': {'format': '%(levelname)s: %(message)s'},
        'verbose': {'format': '%(asctime)s %(levelname)-8s %(name)s: %(message)s'},
        'json': {'()': BivGeoFormatter},
    }


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    enable_structured: bool = False
) -> logging.Logger:
    """Configure the ``bivgeo`` logger.

    Console output goes to stderr so that command output on stdout stays
    clean. A log file, when given, is rotated at 10 MB.

    Args:
        log_level: Name of the threshold level, case-insensitive
        log_file: Optional path of a rotating log file
        enable_structured: Write JSON lines instead of plain text

    Returns:
        The configured ``bivgeo`` logger
    """
    level = log_level.upper()

    handlers: Dict[str, Dict[str, Any]] = {
        'console': {
            'class': 'logging.StreamHandler',
            'stream': sys.stderr,
            'formatter': 'json' if enable_structured else 'plain',
            'level': level,
        }
    }
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(log_file),
            'maxBytes': FILE_MAX_BYTES,
            'backupCount': FILE_BACKUPS,
            'formatter': 'json' if enable_structured else 'verbose',
            'level': level,
        }

    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': _formatters(),
        'handlers': handlers,
        'loggers': {
            ROOT_LOGGER: {
                'level': level,
                'handlers': list(handlers),
                'propagate': False,
            }
        },
    })

    logger = logging.getLogger(ROOT_LOGGER)
    logger.debug("Logging configured", extra={'component': 'logging', 'operation': 'setup'})
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger below the ``bivgeo`` namespace.

    Module names inside the package are used unchanged; any other name is
    prefixed with ``bivgeo.``.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


class LoggingContext:
    """Attach fields to every record created while the context is active."""

    def __init__(self, logger: logging.Logger, **fields):
        self.logger = logger
        self.fields = fields
        self._previous_factory = logging.getLogRecordFactory()

    def __enter__(self):
        previous = self._previous_factory
        fields = self.fields

        def factory(*args, **kwargs):
            record = previous(*args, **kwargs)
            record.__dict__.update(fields)
            return record

        logging.setLogRecordFactory(factory)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        logging.setLogRecordFactory(self._previous_factory)


def log_performance(func):
    """Log the wall time of each call at DEBUG level."""
    @functools.wraps(func)
    def timed(*args, **kwargs):
        logger = get_logger(func.__module__)
        started = time.perf_counter()
        with LoggingContext(logger, component=func.__module__, operation=func.__name__):
            try:
                result = func(*args, **kwargs)
            except Exception as exc:
                logger.debug(f"{func.__name__} failed after {time.perf_counter() - started:.3f}s: {exc}")
                raise
            logger.debug(f"{func.__name__} finished in {time.perf_counter() - started:.3f}s")
        return result

    return timed
