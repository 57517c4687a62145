"""
Tests for booking conflict detection.
"""

import pendulum

from salonslots.domain.conflict_checker import find_conflict, has_conflict
from salonslots.domain.models import Appointment

TZ = "America/Sao_Paulo"


def appointment(start: str, end: str, professional_id: int = 1, appointment_id=None) -> Appointment:
    return Appointment(
        id=appointment_id,
        professional_id=professional_id,
        start=pendulum.parse(f"2025-03-14 {start}", tz=TZ),
        end=pendulum.parse(f"2025-03-14 {end}", tz=TZ),
    )


EXISTING = [appointment("10:00", "10:30", appointment_id=1)]


class TestHasConflict:
    """Tests for has_conflict."""

    def test_partial_overlap_conflicts(self):
        assert has_conflict(appointment("10:15", "10:45"), EXISTING)

    def test_touching_boundary_does_not_conflict(self):
        assert not has_conflict(appointment("10:30", "11:00"), EXISTING)
        assert not has_conflict(appointment("09:30", "10:00"), EXISTING)

    def test_enclosing_and_enclosed_ranges_conflict(self):
        assert has_conflict(appointment("09:00", "12:00"), EXISTING)
        assert has_conflict(appointment("10:05", "10:10"), EXISTING)

    def test_other_professional_never_conflicts(self):
        assert not has_conflict(appointment("10:00", "10:30", professional_id=2), EXISTING)

    def test_edited_appointment_does_not_conflict_with_itself(self):
        """Moving a booking by 15 minutes overlaps its old slot only."""
        edited = appointment("10:15", "10:45", appointment_id=1)

        assert not has_conflict(edited, EXISTING, exclude_appointment_id=1)
        assert has_conflict(edited, EXISTING, exclude_appointment_id=99)

    def test_no_appointments(self):
        assert not has_conflict(appointment("10:00", "10:30"), [])


class TestFindConflict:
    """Tests for find_conflict."""

    def test_returns_first_conflicting_appointment(self):
        agenda = [
            appointment("08:00", "09:00", appointment_id=1),
            appointment("10:00", "11:00", professional_id=2, appointment_id=2),
            appointment("10:30", "11:00", appointment_id=3),
            appointment("10:45", "11:30", appointment_id=4),
        ]

        conflicting = find_conflict(appointment("10:00", "11:00"), agenda)

        assert conflicting is not None
        assert conflicting.id == 3

    def test_returns_none_without_conflict(self):
        assert find_conflict(appointment("11:00", "11:30"), EXISTING) is None
