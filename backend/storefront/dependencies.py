# backend/storefront/dependencies.py
"""
FastAPI dependencies.

The document store, lock manager and settings are app-scoped (set up in
create_app and kept on app.state); repositories and services are built
per request on top of them.
"""

from datetime import datetime

from fastapi import Depends, Request

from .config import Settings
from .locks import LocalLockManager, LockManager, RedisLockManager
from .redis_client import create_redis_client
from .services.backups import BackupService
from .services.images import ImageStorage
from .services.menu import MenuRepository
from .services.menu_import import MenuImporter
from .services.orders import OrderLedger
from .services.payment_settings import PaymentSettingsRepository
from .services.slots import BookingService, TimeSlotStore, now_in
from .storage import DocumentStore


def build_lock_manager(settings: Settings) -> LockManager:
    if settings.redis_url:
        return RedisLockManager(
            create_redis_client(settings.redis_url),
            timeout=settings.lock_timeout_seconds,
            lease=settings.lock_lease_seconds,
        )
    return LocalLockManager(settings.lock_timeout_seconds)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


def get_locks(request: Request) -> LockManager:
    return request.app.state.locks


def get_now(settings: Settings = Depends(get_settings)) -> datetime:
    return now_in(settings.timezone)


def get_time_slot_store(
    store: DocumentStore = Depends(get_store),
    locks: LockManager = Depends(get_locks),
) -> TimeSlotStore:
    return TimeSlotStore(store, locks)


def get_order_ledger(
    store: DocumentStore = Depends(get_store),
    locks: LockManager = Depends(get_locks),
) -> OrderLedger:
    return OrderLedger(store, locks)


def get_booking_service(
    slots: TimeSlotStore = Depends(get_time_slot_store),
    ledger: OrderLedger = Depends(get_order_ledger),
    locks: LockManager = Depends(get_locks),
    settings: Settings = Depends(get_settings),
) -> BookingService:
    return BookingService(slots, ledger, locks, settings.count_cancelled_orders)


def get_menu_repository(
    store: DocumentStore = Depends(get_store),
    locks: LockManager = Depends(get_locks),
) -> MenuRepository:
    return MenuRepository(store, locks)


def get_menu_importer(
    menu: MenuRepository = Depends(get_menu_repository),
    settings: Settings = Depends(get_settings),
) -> MenuImporter:
    return MenuImporter(menu, settings.google_sheet_id, settings.google_credentials_file)


def get_payment_settings_repository(
    store: DocumentStore = Depends(get_store),
    locks: LockManager = Depends(get_locks),
) -> PaymentSettingsRepository:
    return PaymentSettingsRepository(store, locks)


def get_backup_service(
    store: DocumentStore = Depends(get_store),
    locks: LockManager = Depends(get_locks),
    settings: Settings = Depends(get_settings),
) -> BackupService:
    return BackupService(store, settings.backups_dir, locks)


def get_image_storage(settings: Settings = Depends(get_settings)) -> ImageStorage:
    return ImageStorage(settings.images_dir, settings.public_base_url, settings.max_image_bytes)
