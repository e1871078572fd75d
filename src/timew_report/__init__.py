from __future__ import annotations

from timew_report.engine import parse_report, read_input, read_report
from timew_report.errors import DecodeError, InputReadError, MalformedInputError, ReportError
from timew_report.models import Session, TimewarriorReport, compare_sessions
from timew_report.utils import TIMESTAMP_FORMAT

__all__ = [
    "DecodeError",
    "InputReadError",
    "MalformedInputError",
    "ReportError",
    "Session",
    "TIMESTAMP_FORMAT",
    "TimewarriorReport",
    "compare_sessions",
    "parse_report",
    "read_input",
    "read_report",
]
