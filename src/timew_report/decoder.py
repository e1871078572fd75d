from __future__ import annotations

import json
import logging
from datetime import datetime, tzinfo
from typing import Any

from timew_report.errors import DecodeError
from timew_report.models import Session
from timew_report.utils import parse_timestamp

logger = logging.getLogger(__name__)


def _field_error(index: int, name: str, problem: str) -> DecodeError:
    return DecodeError(f"session {index}: field {name!r}: {problem}")


def _decode_timestamp(value: Any, tz: tzinfo | str | None, index: int, name: str) -> datetime:
    if not isinstance(value, str):
        raise _field_error(index, name, f"expected a timestamp string, got {value!r}")
    try:
        return parse_timestamp(value, tz)
    except ValueError as exc:
        raise _field_error(index, name, str(exc)) from exc


def decode_session(record: Any, tz: tzinfo | str | None = None, index: int = 0) -> Session:
    if not isinstance(record, dict):
        raise DecodeError(f"session {index}: expected a JSON object, got {record!r}")

    for required in ("id", "start", "tags"):
        if required not in record:
            raise _field_error(index, required, "missing field")

    session_id = record["id"]
    if isinstance(session_id, bool) or not isinstance(session_id, int):
        raise _field_error(index, "id", f"expected an integer, got {session_id!r}")
    if session_id < 0:
        raise _field_error(index, "id", f"expected a non-negative integer, got {session_id!r}")

    start = _decode_timestamp(record["start"], tz, index, "start")
    end = None
    if "end" in record:
        end = _decode_timestamp(record["end"], tz, index, "end")

    tags = record["tags"]
    if not isinstance(tags, list) or not all(isinstance(tag, str) for tag in tags):
        raise _field_error(index, "tags", f"expected a list of strings, got {tags!r}")

    annotation = record.get("annotation")
    if annotation is not None and not isinstance(annotation, str):
        raise _field_error(index, "annotation", f"expected a string or null, got {annotation!r}")

    return Session(
        id=session_id,
        start=start,
        end=end,
        tags=tuple(tags),
        annotation=annotation,
    )


def decode_sessions(body: str, tz: tzinfo | str | None = None) -> list[Session]:
    """Decode the JSON array of intervals that follows the config header."""
    try:
        raw = json.loads(body)
    except json.JSONDecodeError as exc:
        raise DecodeError(str(exc)) from exc
    if not isinstance(raw, list):
        raise DecodeError(f"expected a JSON array of sessions, got {type(raw).__name__}")
    sessions = [decode_session(record, tz, index) for index, record in enumerate(raw)]
    logger.debug("decoded %d sessions (%d open)", len(sessions), sum(s.is_open for s in sessions))
    return sessions
