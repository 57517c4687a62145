"""
Application service for slot listing and booking validation.

The service fetches records through a store adapter and delegates the actual
computation to the domain-level ``SlotCalculator`` and conflict checker. The
store dependency is a protocol, so the JSON adapter or a stub can be plugged
in.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Union

import pendulum
from pendulum import Date, DateTime

from ..domain.conflict_checker import find_conflict
from ..domain.exceptions import AppointmentConflictError
from ..domain.models import Appointment, Professional, Service
from ..domain.results import AvailabilityResult
from ..domain.slot_calculator import SlotCalculator

logger = logging.getLogger(__name__)


class SalonStoreProtocol(Protocol):
    """Protocol describing the data access needed by the service."""

    async def get_professional(self, professional_id: int) -> Professional:
        """Return a professional or raise ``NotFoundError``."""

    async def get_service(self, identifier: Union[int, str]) -> Service:
        """Return a service by id or name or raise ``NotFoundError``."""

    async def list_appointments(self) -> List[Appointment]:
        """Return every appointment visible to the current user."""


class AvailabilityService:
    """
    Orchestrates record retrieval, slot calculation and conflict checks.
    """

    def __init__(
        self,
        store: SalonStoreProtocol,
        slot_calculator: SlotCalculator,
    ) -> None:
        self._store = store
        self._slot_calculator = slot_calculator

    @property
    def timezone(self) -> str:
        return self._slot_calculator.timezone

    async def available_slots(
        self,
        *,
        professional_id: int,
        target_date: Date,
        service_duration_minutes: int,
        now: Optional[DateTime] = None,
    ) -> AvailabilityResult:
        """
        Load the professional and agenda, then compute bookable slots.

        ``now`` defaults to the current time in the configured timezone.
        """
        professional = await self._store.get_professional(professional_id)
        appointments = await self._store.list_appointments()

        return self._slot_calculator.find_available_slots(
            professional=professional,
            target_date=target_date,
            service_duration_minutes=service_duration_minutes,
            appointments=appointments,
            now=now or pendulum.now(self.timezone),
        )

    async def service_duration(self, identifier: Union[int, str]) -> int:
        """Duration in minutes of a service looked up by id or name."""
        service = await self._store.get_service(identifier)
        return service.duration_minutes

    async def check_booking(
        self,
        candidate: Appointment,
        exclude_appointment_id: Optional[int] = None,
    ) -> None:
        """
        Validate a new or edited booking against the professional's agenda.

        Raises:
            AppointmentConflictError: If the booking overlaps another one
        """
        await self._store.get_professional(candidate.professional_id)
        appointments = await self._store.list_appointments()

        conflicting = find_conflict(candidate, appointments, exclude_appointment_id)
        if conflicting is not None:
            logger.info(
                "Booking %s for professional %s conflicts with appointment %s",
                candidate.time_range, candidate.professional_id, conflicting.id,
            )
            raise AppointmentConflictError(conflicting)
