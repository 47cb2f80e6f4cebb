# backend/storefront/services/orders.py
"""
Order ledger: durable CRUD over orders.json.

Orders are never deleted through the normal flow; only their status
changes. Capacity checks read counts from here (see slots.booking).
"""

import logging
import time
from collections import Counter
from collections.abc import Iterable
from uuid import uuid4

from pydantic import ValidationError as SchemaValidationError

from ..errors import CorruptStateError, NotFoundError, ValidationError, format_validation_errors
from ..locks import LockManager, document_lock_key
from ..schemas.orders import Order, OrderLedgerDocument, OrderStatus
from ..storage import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENT = "orders"


def parse_status(value: str | OrderStatus) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        valid = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status. Must be one of: {valid}") from None


def new_order_id() -> str:
    """ORD- followed by the low millisecond digits and a random suffix."""
    millis = str(int(time.time() * 1000))
    return f"ORD-{millis[-6:]}-{uuid4().hex[:6].upper()}"


class OrderLedger:

    def __init__(self, store: DocumentStore, locks: LockManager):
        self.store = store
        self.locks = locks
        self.lock_key = document_lock_key(DOCUMENT)

    # ── Read ─────────────────────────────────────────────────────────────

    def all_orders(self) -> list[Order]:
        return self._load()

    def get_order(self, order_id: str) -> Order:
        for order in self._load():
            if order.id == order_id:
                return order
        raise NotFoundError(f"Order with ID {order_id} not found")

    def orders_for_date(self, pickup_date: str) -> list[Order]:
        return [o for o in self._load() if o.pickup.date == pickup_date]

    def count_by_start_time(
        self,
        pickup_date: str,
        exclude_statuses: Iterable[OrderStatus] = (),
    ) -> dict[str, int]:
        """Number of orders per pickup time on pickup_date."""
        excluded = set(exclude_statuses)
        return dict(Counter(
            o.pickup.time
            for o in self.orders_for_date(pickup_date)
            if o.status not in excluded
        ))

    # ── Write ────────────────────────────────────────────────────────────

    def append(self, order: Order) -> Order:
        with self.locks.hold(self.lock_key):
            orders = self._load()
            if any(o.id == order.id for o in orders):
                raise ValidationError(f"Order with ID {order.id} already exists")
            orders.append(order)
            self._save(orders)
        return order

    def update_status(self, order_id: str, status: str | OrderStatus) -> Order:
        new_status = parse_status(status)

        with self.locks.hold(self.lock_key):
            orders = self._load()
            for i, order in enumerate(orders):
                if order.id == order_id:
                    updated = order.model_copy(update={"status": new_status})
                    orders[i] = updated
                    self._save(orders)
                    break
            else:
                raise NotFoundError(f"Order with ID {order_id} not found")

        logger.info("Order %s status %s -> %s", order_id, order.status.value, new_status.value)
        return updated

    # ── Helpers ──────────────────────────────────────────────────────────

    def _load(self) -> list[Order]:
        raw = self.store.load(DOCUMENT)
        if raw is None:
            return []
        try:
            return OrderLedgerDocument.model_validate(raw).orders
        except SchemaValidationError as e:
            raise CorruptStateError(
                f"{DOCUMENT}.json is invalid: {format_validation_errors(e.errors())}"
            ) from e

    def _save(self, orders: list[Order]) -> None:
        doc = OrderLedgerDocument(orders=orders)
        self.store.save(DOCUMENT, doc.model_dump(mode="json", by_alias=True))
