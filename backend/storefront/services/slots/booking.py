# backend/storefront/services/slots/booking.py
"""
Pickup booking.

Reads combine the slot config with ledger counts through the calculator.
Order placement holds the (date, start time) lock across the capacity
check and the ledger append, so for any slot at most max_orders orders
are ever admitted, however many requests race for it. Status changes
hold the same lock, and reactivating a cancelled order is checked like a
new one.
"""

import logging
from datetime import date, datetime

from ...errors import CapacityError, ValidationError
from ...locks import LockManager, slot_lock_key
from ...schemas.orders import Order, OrderCreate, OrderStatus, Pickup
from ...schemas.time_slots import AvailableSlotView, TimeSlot, TimeSlotConfig
from ..orders import OrderLedger, new_order_id, parse_status
from .calculator import available_dates_from, available_slots_for_date
from .dates import parse_pickup_date
from .store import TimeSlotStore

logger = logging.getLogger(__name__)


class BookingService:

    def __init__(
        self,
        slots: TimeSlotStore,
        ledger: OrderLedger,
        locks: LockManager,
        count_cancelled_orders: bool = False,
    ):
        self.slots = slots
        self.ledger = ledger
        self.locks = locks
        self.count_cancelled_orders = count_cancelled_orders

    @property
    def excluded_statuses(self) -> tuple[OrderStatus, ...]:
        if self.count_cancelled_orders:
            return ()
        return (OrderStatus.CANCELLED,)

    # ── Availability ─────────────────────────────────────────────────────

    def available_slots(self, target_date: date) -> list[AvailableSlotView]:
        config = self.slots.get_config()
        counts = self.ledger.count_by_start_time(
            target_date.isoformat(), self.excluded_statuses
        )
        return available_slots_for_date(config, counts, target_date)

    def available_dates(self, now: datetime) -> list[str]:
        return list(available_dates_from(self.slots.get_config(), now))

    # ── Placement ────────────────────────────────────────────────────────

    def place_order(self, data: OrderCreate, now: datetime) -> Order:
        pickup_date = parse_pickup_date(data.pickup.date).isoformat()

        config = self.slots.get_config()
        if pickup_date not in set(available_dates_from(config, now)):
            raise ValidationError(f"Pickup date {pickup_date} is not available for ordering")
        start_time = self._find_slot(config, data.pickup.time).start_time

        with self.locks.hold(slot_lock_key(pickup_date, start_time)):
            # Config may have changed while waiting for the lock
            slot = self._find_slot(self.slots.get_config(), start_time)
            taken = self.ledger.count_by_start_time(
                pickup_date, self.excluded_statuses
            ).get(start_time, 0)

            if taken >= slot.max_orders:
                logger.warning(
                    "Rejected order for %s %s: %d/%d taken",
                    pickup_date, start_time, taken, slot.max_orders,
                )
                raise CapacityError(
                    f"Pickup time {start_time} on {pickup_date} is fully booked"
                )

            order = Order(
                id=new_order_id(),
                customer=data.customer,
                pickup=Pickup(date=pickup_date, time=start_time),
                items=data.items,
                special_instructions=data.special_instructions,
                total=data.total,
                status=data.initial_status,
                date=now.isoformat(),
            )
            self.ledger.append(order)

        logger.info(
            "Placed order %s for %s %s (%d/%d)",
            order.id, pickup_date, start_time, taken + 1, slot.max_orders,
        )
        return order

    # ── Status changes ───────────────────────────────────────────────────

    def update_status(self, order_id: str, status: str) -> Order:
        """
        Change an order's status.

        An order moving from an uncounted status (cancelled) back to a
        counted one takes a place in its slot again, so that move gets the
        same locked capacity check as a new order.
        """
        new_status = parse_status(status)
        pickup = self.ledger.get_order(order_id).pickup
        pickup_date, start_time = pickup.date, pickup.time

        # Every status change of an order holds its slot lock, so a cancel
        # cannot interleave with a reactivation check
        with self.locks.hold(slot_lock_key(pickup_date, start_time)):
            order = self.ledger.get_order(order_id)
            if self._reactivates(order.status, new_status):
                slot = self._find_slot(self.slots.get_config(), start_time)
                taken = self.ledger.count_by_start_time(
                    pickup_date, self.excluded_statuses
                ).get(start_time, 0)
                if taken >= slot.max_orders:
                    logger.warning(
                        "Rejected reactivation of %s for %s %s: %d/%d taken",
                        order_id, pickup_date, start_time, taken, slot.max_orders,
                    )
                    raise CapacityError(
                        f"Pickup time {start_time} on {pickup_date} is fully booked"
                    )
            return self.ledger.update_status(order_id, new_status)

    def _reactivates(self, old: OrderStatus, new: OrderStatus) -> bool:
        excluded = self.excluded_statuses
        return old in excluded and new not in excluded

    @staticmethod
    def _find_slot(config: TimeSlotConfig, start_time: str) -> TimeSlot:
        for slot in config.time_slots:
            if slot.start_time == start_time:
                return slot
        raise ValidationError(f"Pickup time {start_time} is not a configured time slot")
