"""
Logging configuration for the subparse command line.

The library modules only create loggers; handlers are installed here.
"""
import logging
import sys

_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class ContextFormatter(logging.Formatter):
    """Formatter that appends ``extra={...}`` fields to the message.

    Format: timestamp [LEVEL] logger_name: message | key1=value1 key2=value2
    """

    def format(self, record: logging.LogRecord) -> str:
        base_msg = super().format(record)
        extra_fields = [
            f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and value is not None
        ]
        if extra_fields:
            return f"{base_msg} | {' '.join(extra_fields)}"
        return base_msg


def setup_logging(level: str = "WARNING") -> None:
    """Configure the ``subparse`` logger hierarchy.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               DEBUG shows every parser attempt made by the dispatcher.
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextFormatter(
        fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))

    root_logger = logging.getLogger('subparse')
    root_logger.setLevel(numeric_level)
    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.propagate = False
