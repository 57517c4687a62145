"""
Adapters layer - Access to salon records exported from the hosted database.
"""

from .json_store import JsonSalonStore

__all__ = ["JsonSalonStore"]
