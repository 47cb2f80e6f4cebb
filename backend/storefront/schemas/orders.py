# backend/storefront/schemas/orders.py

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

CAMEL = {"alias_generator": to_camel, "populate_by_name": True}


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    PENDING_PAYMENT = "Pending Venmo Payment"


class Customer(BaseModel):
    name: str = Field(min_length=1)
    email: str = ""
    phone: str = ""


class Pickup(BaseModel):
    date: str  # YYYY-MM-DD
    time: str  # slot startTime, HH:MM


class OrderItem(BaseModel):
    id: int | str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, ge=1)
    special_instructions: str | None = None

    model_config = CAMEL


class OrderCreate(BaseModel):
    customer: Customer
    pickup: Pickup
    items: list[OrderItem] = Field(min_length=1)
    special_instructions: str | None = None
    total: float = Field(default=0, ge=0)
    order_status: OrderStatus | None = None
    status: OrderStatus | None = None

    model_config = CAMEL

    @property
    def initial_status(self) -> OrderStatus:
        return self.order_status or self.status or OrderStatus.PENDING


class Order(BaseModel):
    id: str
    customer: Customer
    pickup: Pickup
    items: list[OrderItem]
    special_instructions: str | None = None
    total: float = 0
    status: OrderStatus = OrderStatus.PENDING
    date: str  # creation timestamp, ISO 8601

    model_config = CAMEL


class OrderLedgerDocument(BaseModel):
    orders: list[Order] = []


class OrderStatusUpdate(BaseModel):
    status: str


# ── API envelopes ────────────────────────────────────────────────────────


class OrderResponse(BaseModel):
    success: bool = True
    message: str | None = None
    order: Order


class OrderListResponse(BaseModel):
    success: bool = True
    orders: list[Order]
