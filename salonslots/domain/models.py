"""
Domain models for schedules, appointments and bookable slots.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional, Tuple

from pendulum import Date, DateTime


@dataclass(frozen=True)
class TimeRange:
    """
    Represents an immutable half-open time range ``[start, end)``.

    Invariant: start must be before end.
    """
    start: DateTime
    end: DateTime

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(f"Start time {self.start} must be before end time {self.end}")

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps(self, other: "TimeRange") -> bool:
        """Check if this range overlaps with another. Touching endpoints do not overlap."""
        return self.start < other.end and self.end > other.start

    def __str__(self) -> str:
        return f"{self.start.format('DD/MM/YYYY HH:mm')} - {self.end.format('HH:mm')}"


@dataclass(frozen=True)
class WorkingHours:
    """
    A professional's configured hours for one day, as stored (``HH:MM`` strings).

    Any field may be missing. Blank strings count as missing.
    """
    start: Optional[str] = None
    end: Optional[str] = None
    lunch_start: Optional[str] = None
    lunch_end: Optional[str] = None

    @staticmethod
    def _present(value: Optional[str]) -> bool:
        return value is not None and value.strip() != ""

    def has_schedule(self) -> bool:
        """True when both start and end are filled in."""
        return self._present(self.start) and self._present(self.end)

    def has_lunch(self) -> bool:
        """True when both lunch fields are filled in."""
        return self._present(self.lunch_start) and self._present(self.lunch_end)


@dataclass(frozen=True)
class Professional:
    """
    A salon professional and everything needed to resolve their day.

    ``weekly_schedule`` is keyed by weekday (0=Monday, 6=Sunday) and takes
    precedence over the flat ``working_hours``.
    """
    id: int
    name: str
    working_hours: WorkingHours = field(default_factory=WorkingHours)
    weekly_schedule: Mapping[int, WorkingHours] = field(default_factory=dict)
    absences: FrozenSet[Date] = frozenset()
    time_off: Tuple["TimeOff", ...] = ()

    def hours_for(self, day: Date) -> WorkingHours:
        """Working hours that apply on a given date."""
        return self.weekly_schedule.get(day.weekday(), self.working_hours)

    def is_absent(self, day: Date) -> bool:
        return day in self.absences

    def time_off_on(self, day: Date) -> Optional["TimeOff"]:
        """The first time-off period covering ``day``, if any."""
        return next((period for period in self.time_off if period.covers(day)), None)


@dataclass(frozen=True)
class TimeOff:
    """
    A stretch of days off (vacation, course, sick leave), both ends inclusive.
    """
    start_date: Date
    end_date: Date
    description: str = ""

    def __post_init__(self):
        if self.start_date > self.end_date:
            raise ValueError(
                f"Time off start {self.start_date} must not be after its end {self.end_date}"
            )

    def covers(self, day: Date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class Appointment:
    """
    An existing (or proposed) booking.

    Only ``professional_id``, ``start`` and ``end`` matter for availability;
    the rest is display metadata.
    """
    professional_id: int
    start: DateTime
    end: DateTime
    id: Optional[int] = None
    client_name: str = ""
    service: str = ""
    price: int = 0  # cents

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Appointment start {self.start} must be before its end {self.end}"
            )

    @property
    def time_range(self) -> TimeRange:
        return TimeRange(start=self.start, end=self.end)

    def duration_minutes(self) -> int:
        return self.time_range.duration_minutes()


@dataclass(frozen=True)
class Service:
    """A bookable service; its duration drives slot computation."""
    id: int
    name: str
    duration_minutes: int
    price: int = 0  # cents


@dataclass(frozen=True)
class Slot:
    """
    A bookable start time on the target date.
    """
    label: str
    start: DateTime

    @classmethod
    def at(cls, start: DateTime) -> "Slot":
        """Build a slot labelled with the zero-padded 24h time of ``start``."""
        return cls(label=start.format("HH:mm"), start=start)

    def time_range(self, duration_minutes: int) -> TimeRange:
        """The interval occupied by a service of the given length starting here."""
        return TimeRange(start=self.start, end=self.start.add(minutes=duration_minutes))


@dataclass(frozen=True)
class ScheduleWindow:
    """
    Concrete instants for a professional's day.

    ``work_start >= work_end`` is allowed and simply yields no candidates.
    """
    work_start: DateTime
    work_end: DateTime
    lunch: Optional["LunchBreak"] = None


@dataclass(frozen=True)
class LunchBreak:
    """
    The lunch break as anchored on the target date.

    Unlike ``TimeRange`` the end may equal or precede the start. Such a break
    only blocks services that are running when it starts.
    """
    start: DateTime
    end: DateTime

    def blocks(self, occupied: TimeRange) -> bool:
        """True when a service occupying ``occupied`` begins inside or runs across the break."""
        begins_inside = self.start <= occupied.start < self.end
        runs_across = occupied.start < self.start < occupied.end
        return begins_inside or runs_across
