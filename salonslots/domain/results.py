"""
Tagged results of an availability computation.

Callers must be able to tell "this professional has no schedule for the day"
apart from "the day is fully booked", so each outcome is its own type.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from .models import Slot


class ScheduleIssue(str, Enum):
    """Why the schedule resolver produced no working window."""
    NOT_CONFIGURED = "not_configured"
    INVALID_TIME = "invalid_time"
    ABSENT = "absent"
    ON_LEAVE = "on_leave"


class AvailabilityIssue(str, Enum):
    """Why a resolved working window produced no bookable slot."""
    EMPTY_WINDOW = "empty_window"
    ALL_REJECTED = "all_rejected"


class RejectionReason(str, Enum):
    """Filter rule that discarded a candidate start time."""
    PAST = "past"
    OVERRUN = "overrun"
    BOOKED = "booked"
    LUNCH = "lunch"


@dataclass(frozen=True)
class NoSchedule:
    issue: ScheduleIssue

    @property
    def slots(self) -> Tuple[Slot, ...]:
        return ()


@dataclass(frozen=True)
class NoSlotsAvailable:
    reason: AvailabilityIssue
    rejections: Counter = field(default_factory=Counter)

    @property
    def slots(self) -> Tuple[Slot, ...]:
        return ()


@dataclass(frozen=True)
class SlotsAvailable:
    slots: Tuple[Slot, ...]


AvailabilityResult = Union[NoSchedule, NoSlotsAvailable, SlotsAvailable]
