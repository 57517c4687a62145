"""
Booking conflict detection used when a booking is submitted or edited.
"""

from typing import Iterable, Optional

from .models import Appointment


def find_conflict(
    candidate: Appointment,
    appointments: Iterable[Appointment],
    exclude_appointment_id: Optional[int] = None,
) -> Optional[Appointment]:
    """
    Return the first existing appointment that overlaps ``candidate``.

    Only appointments of the same professional are considered, and the one
    being edited (``exclude_appointment_id``) never conflicts with itself.
    Ranges are half-open, so back-to-back bookings are fine.
    """
    candidate_range = candidate.time_range

    for existing in appointments:
        if exclude_appointment_id is not None and existing.id == exclude_appointment_id:
            continue
        if existing.professional_id != candidate.professional_id:
            continue
        if candidate_range.overlaps(existing.time_range):
            return existing

    return None


def has_conflict(
    candidate: Appointment,
    appointments: Iterable[Appointment],
    exclude_appointment_id: Optional[int] = None,
) -> bool:
    """Check whether ``candidate`` overlaps any booking of the same professional."""
    return find_conflict(candidate, appointments, exclude_appointment_id) is not None
