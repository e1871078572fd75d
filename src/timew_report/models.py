from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from types import MappingProxyType
from typing import Any, Mapping

from timew_report.utils import parse_timestamp

_TRUE_VALUES = {"on", "1", "yes", "y", "true"}
_FALSE_VALUES = {"off", "0", "no", "n", "false"}


@dataclass(frozen=True)
class Session:
    """One tracked interval from a Timewarrior report.

    Equality compares every field. Ordering compares ``id`` only, so two
    sessions can sort as equivalent and still be unequal.
    """

    id: int
    start: datetime
    end: datetime | None = None
    tags: tuple[str, ...] = ()
    annotation: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.tags, tuple):
            object.__setattr__(self, "tags", tuple(self.tags))

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return self.id < other.id

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return self.id <= other.id

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return self.id > other.id

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Session):
            return NotImplemented
        return self.id >= other.id

    @property
    def is_open(self) -> bool:
        return self.end is None

    def duration(self, now: datetime | None = None) -> timedelta:
        # end > start is not checked; a negative duration is returned as-is
        if self.end is not None:
            return self.end - self.start
        if now is None:
            now = datetime.now(tz=self.start.tzinfo)
        return now - self.start


def compare_sessions(a: Session, b: Session) -> int:
    """Three-way comparison by id: -1, 0 or 1."""
    return (a.id > b.id) - (a.id < b.id)


@dataclass(frozen=True, eq=False)
class TimewarriorReport:
    config: Mapping[str, str] = field(default_factory=dict)
    sessions: tuple[Session, ...] = ()
    # zone the sessions were decoded into; not part of equality
    tz: tzinfo | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "config", MappingProxyType(dict(self.config)))
        if not isinstance(self.sessions, tuple):
            object.__setattr__(self, "sessions", tuple(self.sessions))

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, TimewarriorReport):
            return NotImplemented
        return dict(self.config) == dict(other.config) and self.sessions == other.sessions

    __hash__ = None  # type: ignore[assignment]

    def _config_timestamp(self, key: str) -> datetime | None:
        value = self.config.get(key, "").strip()
        if not value:
            return None
        return parse_timestamp(value, self.tz)

    @property
    def report_start(self) -> datetime | None:
        return self._config_timestamp("temp.report.start")

    @property
    def report_end(self) -> datetime | None:
        return self._config_timestamp("temp.report.end")

    @property
    def report_tags(self) -> tuple[str, ...]:
        raw = self.config.get("temp.report.tags", "")
        return tuple(tag.strip() for tag in raw.split(",") if tag.strip())

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.config.get(key)
        if value is None:
            return default
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        return default

    def open_sessions(self) -> list[Session]:
        return [session for session in self.sessions if session.is_open]
