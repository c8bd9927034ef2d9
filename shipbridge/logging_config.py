"""Logging setup for applications embedding shipbridge.

The library itself only creates module loggers; this helper wires them
to stdout for scripts and services that want a ready-made setup.
"""

import json
import logging
import sys

TEXT_FORMAT = "%(levelname)s:%(name)s:%(message)s"
LOG_FORMATS = ("text", "json")


class JsonFormatter(logging.Formatter):
    """One JSON object per log record."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Handler:
    """Send shipbridge logs to stdout.

    Args:
        level: Level name for the ``shipbridge`` logger ("debug", "info"...).
        fmt: "text" or "json".

    Returns:
        The installed handler.

    Raises:
        ValueError: For an unknown level or format.
    """
    if fmt not in LOG_FORMATS:
        raise ValueError(f"Unknown log format '{fmt}', expected one of {LOG_FORMATS}")
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level '{level}'")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT))

    logger = logging.getLogger("shipbridge")
    for existing in list(logger.handlers):
        if getattr(existing, "_shipbridge_handler", False):
            logger.removeHandler(existing)
    handler._shipbridge_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(numeric_level)
    # Keep transport chatter out of debug output
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    return handler
