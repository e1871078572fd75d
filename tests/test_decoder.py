from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from timew_report.decoder import decode_session, decode_sessions
from timew_report.errors import DecodeError
from timew_report.utils import TIMESTAMP_FORMAT, parse_timestamp, resolve_timezone

BERLIN = ZoneInfo("Europe/Berlin")


def test_timestamp_format_constant() -> None:
    assert TIMESTAMP_FORMAT == "%Y%m%dT%H%M%SZ"


def test_parse_timestamp_converts_utc_to_zone() -> None:
    value = parse_timestamp("20210711T103400Z", BERLIN)
    assert value == datetime(2021, 7, 11, 10, 34, tzinfo=timezone.utc)
    assert value.tzinfo is BERLIN
    assert (value.hour, value.minute) == (12, 34)


def test_parse_timestamp_defaults_to_local_zone() -> None:
    value = parse_timestamp("20210711T103400Z")
    assert value.tzinfo is not None
    assert value == datetime(2021, 7, 11, 10, 34, tzinfo=timezone.utc)


def test_parse_timestamp_accepts_zone_name() -> None:
    value = parse_timestamp("20210101T000000Z", "America/New_York")
    assert value.utcoffset() == timedelta(hours=-5)
    assert value.day == 31


@pytest.mark.parametrize(
    "value",
    [
        "2021071T103400Z",
        "20210711T103400",
        "2021071XT103400Z",
        "2021-07-11T10:34:00Z",
        "20211311T103400Z",
        "",
        "\u0662\u0660\u0662\u06610711T103400Z",
        "20210711T103400Z\n",
    ],
)
def test_parse_timestamp_rejects_bad_values(value: str) -> None:
    with pytest.raises(ValueError):
        parse_timestamp(value)


def test_resolve_timezone_unknown_name() -> None:
    with pytest.raises(ValueError):
        resolve_timezone("Not/AZone")


def test_open_session_has_no_end() -> None:
    session = decode_session({"id": 1, "start": "20210711T103400Z", "tags": []}, timezone.utc)
    assert session.end is None
    assert session.is_open
    assert session.start == datetime(2021, 7, 11, 10, 34, tzinfo=timezone.utc)
    assert session.annotation is None


def test_closed_session_decodes_both_timestamps() -> None:
    session = decode_session(
        {
            "id": 2,
            "start": "20210711T103400Z",
            "end": "20210711T113400Z",
            "tags": ["t1", "t2"],
            "annotation": "note",
        },
        BERLIN,
    )
    assert session.start == datetime(2021, 7, 11, 10, 34, tzinfo=timezone.utc)
    assert session.end == datetime(2021, 7, 11, 11, 34, tzinfo=timezone.utc)
    assert session.end > session.start
    assert session.end.tzinfo is BERLIN
    assert session.tags == ("t1", "t2")
    assert session.annotation == "note"


def test_null_annotation_and_unknown_keys() -> None:
    session = decode_session(
        {"id": 0, "start": "20210711T103400Z", "tags": [], "annotation": None, "extra": 1}
    )
    assert session.id == 0
    assert session.annotation is None


def test_invalid_timestamp_names_value() -> None:
    body = '[{"id": 1, "start": "2021071T10340Z", "tags": []}]'
    with pytest.raises(DecodeError) as excinfo:
        decode_sessions(body)
    assert excinfo.value.kind == "decode"
    assert "'start'" in excinfo.value.message
    assert "2021071T10340Z" in excinfo.value.message


def test_non_numeric_end_timestamp() -> None:
    body = '[{"id": 1, "start": "20210711T103400Z", "end": "2021O711T113400Z", "tags": []}]'
    with pytest.raises(DecodeError) as excinfo:
        decode_sessions(body)
    assert "2021O711T113400Z" in str(excinfo.value)


@pytest.mark.parametrize(
    "record, field",
    [
        ({"start": "20210711T103400Z", "tags": []}, "id"),
        ({"id": 1, "tags": []}, "start"),
        ({"id": 1, "start": "20210711T103400Z"}, "tags"),
        ({"id": -1, "start": "20210711T103400Z", "tags": []}, "id"),
        ({"id": True, "start": "20210711T103400Z", "tags": []}, "id"),
        ({"id": "1", "start": "20210711T103400Z", "tags": []}, "id"),
        ({"id": 1, "start": 20210711, "tags": []}, "start"),
        ({"id": 1, "start": "20210711T103400Z", "end": None, "tags": []}, "end"),
        ({"id": 1, "start": "20210711T103400Z", "tags": "t1"}, "tags"),
        ({"id": 1, "start": "20210711T103400Z", "tags": [1]}, "tags"),
        ({"id": 1, "start": "20210711T103400Z", "tags": [], "annotation": 5}, "annotation"),
    ],
)
def test_shape_errors(record: dict, field: str) -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode_session(record, index=3)
    assert "session 3" in excinfo.value.message
    assert repr(field) in excinfo.value.message


def test_record_must_be_object() -> None:
    with pytest.raises(DecodeError):
        decode_sessions("[1]")


def test_body_must_be_array() -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode_sessions('{"id": 1}')
    assert "array" in excinfo.value.message


def test_json_syntax_error_carries_parser_message() -> None:
    with pytest.raises(DecodeError) as excinfo:
        decode_sessions("[{")
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "line 1" in excinfo.value.message


def test_sessions_keep_input_order() -> None:
    body = (
        '[{"id": 2, "start": "20210711T103400Z", "tags": []},'
        ' {"id": 1, "start": "20210710T103400Z", "end": "20210710T113400Z", "tags": ["a"]}]'
    )
    sessions = decode_sessions(body, timezone.utc)
    assert [session.id for session in sessions] == [2, 1]
