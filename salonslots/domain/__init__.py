"""
Domain layer - Pure business logic without external dependencies.
"""

from .conflict_checker import find_conflict, has_conflict
from .models import (
    Appointment,
    LunchBreak,
    Professional,
    ScheduleWindow,
    Service,
    Slot,
    TimeOff,
    TimeRange,
    WorkingHours,
)
from .results import (
    AvailabilityIssue,
    AvailabilityResult,
    NoSchedule,
    NoSlotsAvailable,
    RejectionReason,
    ScheduleIssue,
    SlotsAvailable,
)
from .schedule_resolver import ScheduleResolver, parse_time_of_day
from .slot_calculator import SlotCalculator, compute_available_slots

__all__ = [
    "Appointment",
    "AvailabilityIssue",
    "AvailabilityResult",
    "LunchBreak",
    "NoSchedule",
    "NoSlotsAvailable",
    "Professional",
    "RejectionReason",
    "ScheduleIssue",
    "ScheduleResolver",
    "ScheduleWindow",
    "Service",
    "Slot",
    "SlotCalculator",
    "SlotsAvailable",
    "TimeOff",
    "TimeRange",
    "WorkingHours",
    "compute_available_slots",
    "find_conflict",
    "has_conflict",
    "parse_time_of_day",
]
