from __future__ import annotations

import re
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Wire format Timewarrior uses for interval and report range timestamps.
TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"

_TIMESTAMP_RE = re.compile(r"^[0-9]{8}T[0-9]{6}Z\Z")


def resolve_timezone(tz: tzinfo | str | None) -> tzinfo | None:
    """Return a tzinfo for ``tz``; ``None`` means the process local zone."""
    if tz is None or isinstance(tz, tzinfo):
        return tz
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown time zone: {tz!r}") from exc


def parse_timestamp(value: str, tz: tzinfo | str | None = None) -> datetime:
    if not isinstance(value, str) or not _TIMESTAMP_RE.match(value):
        raise ValueError(f"timestamp {value!r} does not match YYYYMMDDTHHMMSSZ")
    try:
        parsed = datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp {value!r}: {exc}") from exc
    return parsed.replace(tzinfo=timezone.utc).astimezone(resolve_timezone(tz))


def format_timestamp(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
