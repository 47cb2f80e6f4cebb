# backend/storefront/services/slots/__init__.py
"""
Pickup slots module.

store     : durable time-slot configuration
calculator: pure availability functions
booking   : capacity-checked order placement
"""

from .booking import BookingService
from .calculator import (
    available_dates_from,
    available_slots_for_date,
    candidate_dates,
)
from .dates import now_in, parse_pickup_date
from .store import TimeSlotStore, default_config

__all__ = [
    "BookingService",
    "TimeSlotStore",
    "default_config",
    "available_dates_from",
    "available_slots_for_date",
    "candidate_dates",
    "now_in",
    "parse_pickup_date",
]
