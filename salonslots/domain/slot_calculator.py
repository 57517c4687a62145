"""
Core business logic for calculating bookable appointment start times.

Pure domain logic without any external dependencies (no API calls, no
database, no I/O, no ambient clock: ``now`` is always passed in).
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidDurationError
from .models import Appointment, Professional, ScheduleWindow, Slot, TimeRange
from .results import (
    AvailabilityIssue,
    AvailabilityResult,
    NoSchedule,
    NoSlotsAvailable,
    RejectionReason,
    SlotsAvailable,
)
from .schedule_resolver import ScheduleResolver

logger = logging.getLogger(__name__)

DEFAULT_SLOT_INTERVAL_MINUTES = 30


@dataclass(frozen=True)
class FilterOutcome:
    """Surviving slots plus how many candidates each rule rejected."""
    slots: Tuple[Slot, ...]
    rejections: Counter


def validate_duration(service_duration_minutes: int) -> int:
    """Reject anything that is not a positive whole number of minutes."""
    if (
        isinstance(service_duration_minutes, bool)
        or not isinstance(service_duration_minutes, int)
        or service_duration_minutes <= 0
    ):
        raise InvalidDurationError(
            f"Service duration must be a positive number of minutes, got {service_duration_minutes!r}"
        )
    return service_duration_minutes


class SlotCalculator:
    """
    Calculates bookable start times for one professional on one day.

    Algorithm:
    1. Resolve the professional's working hours into a work window and lunch
    2. Generate fixed-interval candidates from work start up to work end
    3. Drop candidates that are in the past, overrun the work window,
       overlap an existing booking or collide with lunch
    4. Return a tagged result so "no schedule" never looks like "fully booked"
    """

    def __init__(
        self,
        resolver: Optional[ScheduleResolver] = None,
        interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
    ):
        if interval_minutes <= 0:
            raise ValueError(f"Slot interval must be positive, got {interval_minutes}")
        self.resolver = resolver or ScheduleResolver()
        self.interval_minutes = interval_minutes

    @property
    def timezone(self) -> str:
        return self.resolver.timezone

    def find_available_slots(
        self,
        professional: Professional,
        target_date: Date,
        service_duration_minutes: int,
        appointments: Iterable[Appointment],
        now: DateTime,
    ) -> AvailabilityResult:
        """
        Compute the bookable slots for a professional on a date.

        Args:
            professional: Professional whose schedule is used
            target_date: Calendar date to compute slots for
            service_duration_minutes: Length of the requested service
            appointments: All visible appointments (any professional, any day)
            now: Evaluation instant, used to hide past slots on today's date

        Returns:
            NoSchedule, NoSlotsAvailable or SlotsAvailable

        Raises:
            InvalidDurationError: If the duration is not a positive integer
        """
        validate_duration(service_duration_minutes)

        window = self.resolver.resolve(professional, target_date)
        if isinstance(window, NoSchedule):
            logger.debug(
                "No schedule for professional %s on %s: %s",
                professional.id, target_date, window.issue.value,
            )
            return window

        candidates = self.generate_candidates(window.work_start, window.work_end)
        if not candidates:
            return NoSlotsAvailable(reason=AvailabilityIssue.EMPTY_WINDOW)

        bookings = self._bookings_on(professional.id, target_date, appointments)
        outcome = self.filter_candidates(
            candidates=candidates,
            window=window,
            target_date=target_date,
            service_duration_minutes=service_duration_minutes,
            bookings=bookings,
            now=now,
        )

        logger.debug(
            "Professional %s on %s: %d of %d candidates bookable, rejected %s",
            professional.id, target_date, len(outcome.slots), len(candidates),
            dict(outcome.rejections),
        )

        if not outcome.slots:
            return NoSlotsAvailable(
                reason=AvailabilityIssue.ALL_REJECTED,
                rejections=outcome.rejections,
            )
        return SlotsAvailable(slots=outcome.slots)

    def generate_candidates(self, work_start: DateTime, work_end: DateTime) -> List[DateTime]:
        """
        Enumerate start times from ``work_start`` (inclusive) to ``work_end`` (exclusive).
        """
        candidates: List[DateTime] = []
        current = work_start

        while current < work_end:
            candidates.append(current)
            current = current.add(minutes=self.interval_minutes)

        return candidates

    def filter_candidates(
        self,
        *,
        candidates: Sequence[DateTime],
        window: ScheduleWindow,
        target_date: Date,
        service_duration_minutes: int,
        bookings: Sequence[TimeRange],
        now: DateTime,
    ) -> FilterOutcome:
        """
        Keep only candidates that are genuinely bookable.

        ``bookings`` must already be restricted to the professional and day.
        """
        now = pendulum.instance(now, tz=self.timezone).in_timezone(self.timezone)
        is_today = now.date() == target_date

        slots: List[Slot] = []
        rejections: Counter = Counter()

        for start in candidates:
            reason = self._rejection_for(
                start=start,
                end=start.add(minutes=service_duration_minutes),
                window=window,
                bookings=bookings,
                now=now if is_today else None,
            )
            if reason is None:
                slots.append(Slot.at(start))
            else:
                rejections[reason] += 1

        return FilterOutcome(slots=tuple(slots), rejections=rejections)

    @staticmethod
    def _rejection_for(
        *,
        start: DateTime,
        end: DateTime,
        window: ScheduleWindow,
        bookings: Sequence[TimeRange],
        now: Optional[DateTime],
    ) -> Optional[RejectionReason]:
        if now is not None and start < now:
            return RejectionReason.PAST

        if end > window.work_end:
            return RejectionReason.OVERRUN

        occupied = TimeRange(start=start, end=end)

        if any(occupied.overlaps(booking) for booking in bookings):
            return RejectionReason.BOOKED

        if window.lunch is not None and window.lunch.blocks(occupied):
            return RejectionReason.LUNCH

        return None

    def _bookings_on(
        self,
        professional_id: int,
        target_date: Date,
        appointments: Iterable[Appointment],
    ) -> List[TimeRange]:
        """Time ranges of the professional's appointments starting on ``target_date``."""
        return [
            appointment.time_range
            for appointment in appointments
            if appointment.professional_id == professional_id
            and appointment.start.in_timezone(self.timezone).date() == target_date
        ]


def compute_available_slots(
    professional: Professional,
    target_date: Date,
    service_duration_minutes: int,
    appointments: Iterable[Appointment],
    now: DateTime,
    *,
    timezone: str = "America/Sao_Paulo",
    interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
) -> List[Slot]:
    """
    Convenience wrapper returning just the list of bookable slots.

    Use ``SlotCalculator.find_available_slots`` when the reason for an empty
    list matters.
    """
    calculator = SlotCalculator(
        resolver=ScheduleResolver(timezone=timezone),
        interval_minutes=interval_minutes,
    )
    result = calculator.find_available_slots(
        professional=professional,
        target_date=target_date,
        service_duration_minutes=service_duration_minutes,
        appointments=appointments,
        now=now,
    )
    return list(result.slots)
