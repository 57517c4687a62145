"""
Domain-specific exception hierarchy for the salon slot calculator.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Appointment


class SalonSlotsError(Exception):
    """Base class for all application-level errors."""


class InvalidDurationError(SalonSlotsError, ValueError):
    """Raised when a service duration is not a positive number of minutes."""


class ConfigError(SalonSlotsError):
    """Raised when the configuration file cannot be used."""


class DataStoreError(SalonSlotsError):
    """Raised when salon records cannot be loaded or parsed."""


class NotFoundError(SalonSlotsError):
    """Raised when a professional or service does not exist in the store."""


class AppointmentConflictError(SalonSlotsError):
    """Raised when a booking overlaps an existing appointment of the same professional."""

    def __init__(self, conflicting: "Appointment"):
        self.conflicting = conflicting
        super().__init__(
            f"Professional {conflicting.professional_id} already has an appointment "
            f"at {conflicting.time_range}"
        )
