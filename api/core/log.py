"""
Process-wide logging setup (stdlib `logging`).

Modules log through `logging.getLogger(__name__)` with key=value messages;
this module only decides where records go and what every record carries.
"""

from __future__ import annotations

import logging
import re
import sys

from . import settings

LOG_FORMAT = "%(levelname)s %(asctime)s %(name)s service=%(service)s version=%(version)s env=%(env)s %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

REDACTED_KEYS = ("password", "token", "authorization")
REDACTED = "[Redacted]"

# Quoted values are consumed whole; bare values stop at the next delimiter.
_REDACT_RE = re.compile(
    r"(?P<key>\b\w*(?:" + "|".join(REDACTED_KEYS) + r")\w*)"
    r"(?P<sep>[\"']?(?:\s*[=:]\s*|\s+))"
    r"(?P<value>\"[^\"]*\"|'[^']*'|(?:bearer\s+)?[^\s,\"'}&]+)",
    re.IGNORECASE,
)

_configured = False


def _mask(match: re.Match) -> str:
    value = match.group("value")
    quote = value[0] if value[0] in "\"'" else ""
    return f"{match.group('key')}{match.group('sep')}{quote}{REDACTED}{quote}"


def redact(text: str) -> str:
    return _REDACT_RE.sub(_mask, text)


class ContextFilter(logging.Filter):
    """
    Stamp service metadata on each record and scrub secrets from the message.
    """

    def __init__(self, *, env: str) -> None:
        super().__init__()
        self.env = env

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = settings.SERVICE_NAME
        record.version = settings.SERVICE_VERSION
        record.env = self.env

        message = record.getMessage()
        scrubbed = redact(message)
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


def configure_logging(level: str | None = None) -> None:
    global _configured
    if _configured:
        return None

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler.addFilter(ContextFilter(env=settings.app_env()))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level or settings.log_level())

    # asyncpg is chatty at DEBUG.
    logging.getLogger("asyncpg").setLevel(logging.INFO)
    _configured = True
