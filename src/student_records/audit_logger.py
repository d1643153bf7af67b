"""JSON event log for the record store.

Each store operation reports its outcome as one JSON object per line on
stderr.  Shell and API callers pass an ``operation_id`` so the events of
one menu action or HTTP request can be grouped together.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_LOGGER_NAME = "student_records.audit"


class _JsonFormatter(logging.Formatter):
    """Serialise a record and its event fields as one JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, "_structured", None) or {})
        return json.dumps(payload, default=str)


def get_audit_logger(name: str = _LOGGER_NAME) -> "AuditLogger":
    """Wrap the named logger; the JSON handler is only ever attached once."""
    return AuditLogger(name)


class AuditLogger:
    """Event logger used by :class:`~student_records.store.RecordStore`.

    Parameters
    ----------
    name : str
        Name of the :mod:`logging` logger to write to.
    level : int
        Initial threshold, applied only when this call attaches the handler.
    """

    def __init__(self, name: str = _LOGGER_NAME, level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        if not self._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(_JsonFormatter())
            self._logger.addHandler(handler)
            self._logger.setLevel(level)

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def log_event(
        self,
        event: str,
        *,
        operation_id: Optional[str] = None,
        level: int = logging.INFO,
        **fields: Any,
    ) -> Dict[str, Any]:
        """Log *event* with *fields* and return the event dict.

        The dict holds ``event``, ``operation_id`` when given, and *fields*.
        It is returned whether or not *level* passes the threshold.
        """
        event_fields: Dict[str, Any] = {"event": event}
        if operation_id is not None:
            event_fields["operation_id"] = operation_id
        event_fields.update(fields)

        if self._logger.isEnabledFor(level):
            record = self._logger.makeRecord(
                self._logger.name, level, "(store)", 0, event, (), None,
            )
            record._structured = event_fields  # type: ignore[attr-defined]
            self._logger.handle(record)
        return event_fields
