import json
from pathlib import Path
import contextvars
from typing import Any, Dict

from ..config import get_settings

# Path to the log file; can be overridden via EVENT_LOG_PATH env var or set_log_path.
_LOG_PATH = Path(get_settings().event_log_path)

_current_session_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "current_session_id", default=None
)


def set_log_path(path: str | Path) -> None:
    """Override the log file path (useful for tests)."""
    global _LOG_PATH
    _LOG_PATH = Path(path)


def get_log_path() -> Path:
    """Return the current log file path."""
    return _LOG_PATH


def set_session_id(session_id: str | None) -> None:
    """Set the active wizard session for subsequent events."""
    _current_session_id.set(session_id)


def log_event(event: str, data: Dict[str, Any], *, session_id: str | None = None) -> None:
    """Append an event to the log as a JSON line.

    Parameters
    ----------
    event:
        Type of the event (e.g., "step_transition", "booking_created").
    data:
        JSON-serializable payload; dates and enums are stringified.
    session_id:
        Optional explicit session identifier. If omitted, the previously set
        session id (via :func:`set_session_id`) is used.
    """
    sid = session_id if session_id is not None else _current_session_id.get()
    record = {"session_id": sid, "event": event, **data}
    _LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    with _LOG_PATH.open("a", encoding="utf-8") as f:
        json.dump(record, f, ensure_ascii=False, default=str)
        f.write("\n")
