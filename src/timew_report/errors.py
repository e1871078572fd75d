from __future__ import annotations


class ReportError(Exception):
    """Base class for every failure while building a report."""

    kind = "other"
    label = "Other Error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"


class InputReadError(ReportError):
    """The input stream could not be read to the end."""

    kind = "io"
    label = "IOError"


class DecodeError(ReportError):
    """The session body is not the expected JSON shape."""

    kind = "decode"
    label = "DecodeError"


class MalformedInputError(ReportError):
    """The header/body separator or a header key/value separator is missing."""

    kind = "malformed_input"
    label = "MalformedInput"
