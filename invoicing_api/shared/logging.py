"""
Logging setup and request-scoped loggers.

One pipe-separated line per record on stdout. Request loggers append
bound key=value fields (request id, endpoint) to every message.
Invoice bodies and DSNs are never logged.
"""

import logging
import sys
from typing import Any, MutableMapping

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Install the root handler and quiet chatty libraries.

    Args:
        level: Root log level name, e.g. ``INFO``. Unknown names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Third-party loggers stay at WARNING
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def render_fields(fields: MutableMapping[str, Any]) -> str:
    """Render key/value fields as ``key=value`` pairs in insertion order."""
    return " ".join(f"{key}={value}" for key, value in fields.items())


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that appends bound fields to every message.

    Extra per-call fields can be passed with the ``fields`` keyword:

        log.warning("invoice not found", fields={"invoice_id": invoice_id})
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        fields = {**self.extra, **(kwargs.pop("fields", None) or {})}
        kwargs.setdefault("extra", {})["fields"] = fields
        return msg, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        if not self.isEnabledFor(level):
            return
        msg, kwargs = self.process(msg, kwargs)
        fields = kwargs["extra"]["fields"]
        if fields:
            if not args:
                # Without args the message is not %-formatted, keep it literal.
                msg = str(msg).replace("%", "%%")
            msg = f"{msg} | %s"
            args = (*args, render_fields(fields))
        self.logger.log(level, msg, *args, **kwargs)

    def bind(self, **fields: Any) -> "ContextLogger":
        """Return a new adapter with additional bound fields."""
        return ContextLogger(self.logger, {**self.extra, **fields})


def get_context_logger(name: str, **fields: Any) -> ContextLogger:
    """Return a ContextLogger for ``name`` with ``fields`` bound."""
    return ContextLogger(logging.getLogger(name), fields)
