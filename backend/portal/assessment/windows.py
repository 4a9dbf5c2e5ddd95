"""Time-bounded windows and point-in-time queries over them."""

import enum
from datetime import datetime, timedelta, UTC
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from ..models.enums import AssessmentType, ProjectType, WindowType


def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes (e.g. read back from SQLite) as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class WindowState(enum.Enum):
    upcoming = "upcoming"
    open = "open"
    closed = "closed"


class WindowRecord(BaseModel):
    """Read-only view of a window row."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: Optional[str] = None
    window_type: WindowType
    project_type: ProjectType
    assessment_type: Optional[AssessmentType] = None
    start_date: datetime
    end_date: datetime

    @field_validator("start_date", "end_date")
    @classmethod
    def normalize_timezone(cls, v: datetime) -> datetime:
        return as_utc(v)

    @model_validator(mode="after")
    def check_bounds(self):
        if self.start_date > self.end_date:
            raise ValueError("Window end date must not be before its start date")
        return self

    def contains(self, now: datetime) -> bool:
        now = as_utc(now)
        return self.start_date <= now <= self.end_date

    def state(self, now: datetime) -> WindowState:
        now = as_utc(now)
        if now < self.start_date:
            return WindowState.upcoming
        if now > self.end_date:
            return WindowState.closed
        return WindowState.open

    def time_remaining(self, now: datetime) -> Optional[timedelta]:
        """Time left before the window closes, or None if it is not open."""
        if not self.contains(now):
            return None
        return self.end_date - as_utc(now)


class WindowCatalog:
    """Immutable collection of windows for the current context."""

    def __init__(self, windows: Iterable[WindowRecord] = ()):
        # Stable sort: insertion order breaks ties left by the dates.
        self._windows = tuple(
            sorted(windows, key=lambda w: (w.start_date, w.end_date))
        )

    @classmethod
    def from_rows(cls, rows: Iterable) -> "WindowCatalog":
        """Build a catalog from ORM rows or plain dicts."""
        records = []
        for row in rows:
            if isinstance(row, WindowRecord):
                records.append(row)
            elif isinstance(row, dict):
                records.append(WindowRecord.model_validate(row))
            else:
                records.append(WindowRecord.model_validate(row, from_attributes=True))
        return cls(records)

    def __len__(self) -> int:
        return len(self._windows)

    def __iter__(self):
        return iter(self._windows)

    def windows_for(self, window_type: WindowType, project_type: ProjectType) -> list[WindowRecord]:
        return [
            w for w in self._windows
            if w.window_type == window_type and w.project_type == project_type
        ]

    def active_windows(
        self,
        now: datetime,
        window_type: WindowType,
        project_type: ProjectType,
    ) -> list[WindowRecord]:
        """Windows of the given type open at ``now``, earliest-opened first."""
        return [w for w in self.windows_for(window_type, project_type) if w.contains(now)]

    def window_state(self, window: WindowRecord, now: datetime) -> WindowState:
        return window.state(now)

    def time_remaining(self, window: WindowRecord, now: datetime) -> Optional[timedelta]:
        return window.time_remaining(now)
