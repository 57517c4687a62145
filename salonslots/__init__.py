"""
salonslots - appointment slot availability for salon professionals.
"""

__version__ = "0.1.0"
