"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .availability import AvailabilityService, SalonStoreProtocol

__all__ = ["AvailabilityService", "SalonStoreProtocol"]
