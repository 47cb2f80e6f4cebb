# backend/storefront/schemas/time_slots.py
"""
Pydantic schemas for pickup time slots.

Stored and wire format is camelCase (startTime, maxOrders, ...).
"""

from typing import Literal
from uuid import uuid4

from pydantic import BaseModel, Field, PositiveInt, field_validator, model_validator
from pydantic.alias_generators import to_camel

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"

# Index matches date.weekday(): 0 = Monday
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

Weekday = Literal["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def time_str_to_minutes(time_str: str) -> int:
    """Convert "HH:MM" to minutes since midnight."""
    hour, minute = time_str.split(":")
    return int(hour) * 60 + int(minute)


def minutes_to_time_str(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class TimeSlot(BaseModel):
    """A daily pickup window with a per-day order capacity."""
    id: str = Field(default_factory=lambda: uuid4().hex, min_length=1)
    start_time: str = Field(pattern=TIME_PATTERN)
    end_time: str = Field(pattern=TIME_PATTERN)
    max_orders: PositiveInt

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @model_validator(mode="after")
    def _start_before_end(self):
        if time_str_to_minutes(self.start_time) >= time_str_to_minutes(self.end_time):
            raise ValueError(
                f"startTime {self.start_time} must be earlier than endTime {self.end_time}"
            )
        return self

    @property
    def start_minutes(self) -> int:
        return time_str_to_minutes(self.start_time)


class TimeSlotUpdate(BaseModel):
    """Partial slot update. id is ignored."""
    start_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    end_time: str | None = Field(default=None, pattern=TIME_PATTERN)
    max_orders: PositiveInt | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class TimeSlotConfig(BaseModel):
    available_days: list[Weekday]
    time_slots: list[TimeSlot] = []
    lead_time: int = Field(default=1, ge=0)
    max_advance_booking_days: int = Field(default=14, ge=0)

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @field_validator("available_days")
    @classmethod
    def _dedupe_days(cls, days: list[str]) -> list[str]:
        return list(dict.fromkeys(days))

    @model_validator(mode="after")
    def _sorted_unique_slots(self):
        slots = sorted(self.time_slots, key=lambda s: s.start_minutes)
        seen: set[str] = set()
        for slot in slots:
            if slot.start_time in seen:
                raise ValueError(f"Duplicate time slot startTime {slot.start_time}")
            seen.add(slot.start_time)
        ids = [s.id for s in slots]
        if len(set(ids)) != len(ids):
            raise ValueError("Duplicate time slot id")
        self.time_slots = slots
        return self


class AvailableSlotView(TimeSlot):
    """Slot annotated with capacity left on one date."""
    order_count: int
    available_count: int
    is_available: bool


# ── API envelopes ────────────────────────────────────────────────────────


class TimeSlotConfigResponse(BaseModel):
    success: bool = True
    config: TimeSlotConfig


class AvailableForDateRequest(BaseModel):
    date: str


class AvailableSlotsResponse(BaseModel):
    success: bool = True
    date: str
    available_slots: list[AvailableSlotView]

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class AvailableDatesResponse(BaseModel):
    success: bool = True
    dates: list[str]
