from __future__ import annotations

import logging
import sys
from datetime import tzinfo
from typing import IO

from timew_report.decoder import decode_sessions
from timew_report.errors import InputReadError
from timew_report.models import TimewarriorReport
from timew_report.splitter import parse_config, split_input
from timew_report.utils import resolve_timezone

logger = logging.getLogger(__name__)


def read_input(stream: IO[str] | None = None) -> str:
    """Read the whole report from ``stream`` (stdin by default)."""
    if stream is None:
        stream = sys.stdin
    try:
        lines = [line.rstrip("\r\n") for line in stream]
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(str(exc)) from exc
    return "\n".join(lines).strip()


def parse_report(text: str, tz: tzinfo | str | None = None) -> TimewarriorReport:
    """Build a report from the full text Timewarrior passes to an extension.

    Raises ``MalformedInputError`` or ``DecodeError``; nothing partial is
    returned. ``tz`` picks the zone sessions are converted into, defaulting
    to the process local zone.
    """
    zone = resolve_timezone(tz)
    header, body = split_input(text.strip())
    config = parse_config(header)
    sessions = decode_sessions(body, zone)
    logger.debug(
        "assembled report: %d config entries, %d sessions, zone=%s",
        len(config),
        len(sessions),
        zone or "local",
    )
    return TimewarriorReport(config=config, sessions=tuple(sessions), tz=zone)


def read_report(stream: IO[str] | None = None, tz: tzinfo | str | None = None) -> TimewarriorReport:
    return parse_report(read_input(stream), tz)
