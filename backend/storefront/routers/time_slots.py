# backend/storefront/routers/time_slots.py
"""
Pickup time slot endpoints.

Public:  availability per date, bookable dates
Admin:   config read / replace, slot add / update / delete
"""

from datetime import datetime

from fastapi import APIRouter, Depends, status

from ..auth import require_admin
from ..dependencies import get_booking_service, get_now, get_time_slot_store
from ..schemas.time_slots import (
    AvailableDatesResponse,
    AvailableForDateRequest,
    AvailableSlotsResponse,
    TimeSlot,
    TimeSlotConfig,
    TimeSlotConfigResponse,
    TimeSlotUpdate,
)
from ..services.slots import BookingService, TimeSlotStore, parse_pickup_date

router = APIRouter(prefix="/time-slots", tags=["time_slots"])


# ── Availability ─────────────────────────────────────────────────────────


@router.get("/available-dates", response_model=AvailableDatesResponse)
def get_available_dates(
    booking: BookingService = Depends(get_booking_service),
    now: datetime = Depends(get_now),
):
    return AvailableDatesResponse(dates=booking.available_dates(now))


@router.get("/available/{date}", response_model=AvailableSlotsResponse)
def get_available_slots(
    date: str,
    booking: BookingService = Depends(get_booking_service),
):
    target = parse_pickup_date(date)
    return AvailableSlotsResponse(
        date=target.isoformat(),
        available_slots=booking.available_slots(target),
    )


@router.post("/available-for-date", response_model=AvailableSlotsResponse)
def post_available_slots(
    data: AvailableForDateRequest,
    booking: BookingService = Depends(get_booking_service),
):
    target = parse_pickup_date(data.date)
    return AvailableSlotsResponse(
        date=target.isoformat(),
        available_slots=booking.available_slots(target),
    )


# ── Configuration ────────────────────────────────────────────────────────


@router.get(
    "/config",
    response_model=TimeSlotConfigResponse,
    dependencies=[Depends(require_admin)],
)
def get_time_slot_config(slots: TimeSlotStore = Depends(get_time_slot_store)):
    return TimeSlotConfigResponse(config=slots.get_config())


@router.put(
    "/config",
    response_model=TimeSlotConfigResponse,
    dependencies=[Depends(require_admin)],
)
def replace_time_slot_config(
    data: TimeSlotConfig,
    slots: TimeSlotStore = Depends(get_time_slot_store),
):
    return TimeSlotConfigResponse(config=slots.replace_config(data))


@router.post(
    "",
    response_model=TimeSlotConfigResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def add_time_slot(
    data: TimeSlot,
    slots: TimeSlotStore = Depends(get_time_slot_store),
):
    return TimeSlotConfigResponse(config=slots.add_slot(data))


@router.put(
    "/{id}",
    response_model=TimeSlotConfigResponse,
    dependencies=[Depends(require_admin)],
)
def update_time_slot(
    id: str,
    data: TimeSlotUpdate,
    slots: TimeSlotStore = Depends(get_time_slot_store),
):
    return TimeSlotConfigResponse(config=slots.update_slot(id, data))


@router.delete(
    "/{id}",
    response_model=TimeSlotConfigResponse,
    dependencies=[Depends(require_admin)],
)
def delete_time_slot(id: str, slots: TimeSlotStore = Depends(get_time_slot_store)):
    return TimeSlotConfigResponse(config=slots.delete_slot(id))
