from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from storefront.config import Settings
from storefront.dependencies import get_now
from storefront.locks import LocalLockManager
from storefront.main import create_app
from storefront.schemas.orders import Customer, OrderCreate, OrderItem, Pickup
from storefront.schemas.time_slots import WEEKDAYS, TimeSlot, TimeSlotConfig
from storefront.services.orders import OrderLedger
from storefront.services.slots import BookingService, TimeSlotStore
from storefront.storage import MemoryStore

# Monday
NOW = datetime(2024, 1, 1, 12, 0)


def make_config(**overrides) -> TimeSlotConfig:
    values = {
        "available_days": WEEKDAYS[:6],
        "time_slots": [
            TimeSlot(id="slot-9", start_time="09:00", end_time="10:00", max_orders=5),
            TimeSlot(id="slot-10", start_time="10:00", end_time="11:00", max_orders=5),
        ],
        "lead_time": 1,
        "max_advance_booking_days": 14,
    }
    values.update(overrides)
    return TimeSlotConfig(**values)


def make_order_request(date="2024-01-02", time="09:00", **overrides) -> OrderCreate:
    values = {
        "customer": Customer(name="Ada", email="ada@example.com", phone="555-0100"),
        "pickup": Pickup(date=date, time=time),
        "items": [OrderItem(id=1, name="Green Bowl", price=12.5, quantity=1)],
        "total": 12.5,
    }
    values.update(overrides)
    return OrderCreate(**values)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def locks():
    return LocalLockManager(timeout=5)


@pytest.fixture
def slot_store(store, locks):
    return TimeSlotStore(store, locks)


@pytest.fixture
def ledger(store, locks):
    return OrderLedger(store, locks)


@pytest.fixture
def booking(slot_store, ledger, locks):
    return BookingService(slot_store, ledger, locks)


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        data_dir=tmp_path / "data",
        images_dir=tmp_path / "images",
        public_base_url="http://testserver",
        backup_scheduler_enabled=False,
        redis_url=None,
    )


@pytest.fixture
def app(settings, store, locks):
    app = create_app(settings, store, locks)
    app.dependency_overrides[get_now] = lambda: NOW
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
