# backend/storefront/routers/orders.py

from datetime import datetime

from fastapi import APIRouter, Depends, status

from ..auth import require_admin
from ..dependencies import get_booking_service, get_now, get_order_ledger
from ..schemas.orders import (
    OrderCreate,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
)
from ..services.orders import OrderLedger
from ..services.slots import BookingService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderListResponse, dependencies=[Depends(require_admin)])
def list_orders(ledger: OrderLedger = Depends(get_order_ledger)):
    return OrderListResponse(orders=ledger.all_orders())


@router.get("/{id}", response_model=OrderResponse)
def get_order(id: str, ledger: OrderLedger = Depends(get_order_ledger)):
    return OrderResponse(order=ledger.get_order(id))


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(
    data: OrderCreate,
    booking: BookingService = Depends(get_booking_service),
    now: datetime = Depends(get_now),
):
    order = booking.place_order(data, now)
    return OrderResponse(message="Order created successfully", order=order)


@router.put(
    "/{id}/status",
    response_model=OrderResponse,
    dependencies=[Depends(require_admin)],
)
def update_order_status(
    id: str,
    data: OrderStatusUpdate,
    booking: BookingService = Depends(get_booking_service),
):
    order = booking.update_status(id, data.status)
    return OrderResponse(message="Order status updated successfully", order=order)
