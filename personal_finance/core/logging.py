"""Logging setup for the finance service.

Two output styles: JSON lines for log shippers and a column format for
local runs. Bearer tokens never reach the output; a filter on the root
handler masks them, since an unexpired token is as good as a password.
"""

import json
import logging
import re
import sys
from typing import Literal

LOGGER_PREFIX = "personal_finance"

DEV_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DEV_DATEFMT = "%H:%M:%S"

# Loggers whose INFO output is request noise
NOISY_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

_BEARER_RE = re.compile(r"(Bearer\s+)[A-Za-z0-9._~+/=-]+")
_JWT_RE = re.compile(r"\beyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*")
REDACTED = "***"

# Attributes every LogRecord has; anything else came in through ``extra=``
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


def redact(text: str) -> str:
    """Mask bearer tokens and bare JWTs in a string."""
    text = _BEARER_RE.sub(rf"\g<1>{REDACTED}", text)
    return _JWT_RE.sub(REDACTED, text)


class TokenRedactingFilter(logging.Filter):
    """Rewrites records so no session token is ever written out."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        cleaned = redact(message)
        if cleaned != message:
            record.msg = cleaned
            record.args = None
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record, including any ``extra=`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS and not key.startswith("_"):
                entry[key] = value
        if record.exc_info and record.exc_info[0] is not None:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def setup_logging(
    level: str = "INFO",
    format_type: Literal["structured", "dev"] = "dev",
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Log level name for the application loggers.
        format_type: ``structured`` for JSON lines, ``dev`` for columns.
    """
    level = level.upper()
    handler = logging.StreamHandler(sys.stdout)
    if format_type == "structured":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(DEV_FORMAT, datefmt=DEV_DATEFMT))
    handler.addFilter(TokenRedactingFilter())

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level == "DEBUG" else logging.WARNING
    )

    get_logger("logging").debug(f"Logging ready ({format_type}, {level})")


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")
