import json

from tour_booking.utils.event_log import get_log_path, log_event, set_log_path, set_session_id


def _read(path):
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def test_events_use_current_session(tmp_path):
    log_file = tmp_path / "nested" / "events.jsonl"
    set_log_path(log_file)
    set_session_id("sess-9")

    log_event("date_selected", {"date": "2025-11-16"})
    log_event("step_transition", {"from": 1, "to": 2}, session_id="other")

    assert get_log_path() == log_file
    events = _read(log_file)
    assert events[0] == {"session_id": "sess-9", "event": "date_selected", "date": "2025-11-16"}
    assert events[1]["session_id"] == "other"
    set_session_id(None)


def test_non_json_values_are_stringified(event_log_file):
    from datetime import date

    log_event("booking_created", {"date": date(2025, 11, 16)})
    assert _read(event_log_file)[0]["date"] == "2025-11-16"
