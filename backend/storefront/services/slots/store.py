# backend/storefront/services/slots/store.py
"""
Durable CRUD over the pickup time-slot configuration.

Every mutation is a read-modify-write of timeSlots.json held under the
document lock; the slots are re-sorted by start time before each save.
"""

import logging

from pydantic import ValidationError as SchemaValidationError

from ...errors import CorruptStateError, NotFoundError, ValidationError, format_validation_errors
from ...locks import LockManager, document_lock_key
from ...schemas.time_slots import (
    WEEKDAYS,
    TimeSlot,
    TimeSlotConfig,
    TimeSlotUpdate,
    minutes_to_time_str,
)
from ...storage import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENT = "timeSlots"


def default_config() -> TimeSlotConfig:
    """Monday–Saturday, eight one-hour slots 09:00–17:00, five orders each."""
    return TimeSlotConfig(
        available_days=WEEKDAYS[:6],
        time_slots=[
            TimeSlot(
                start_time=minutes_to_time_str(hour * 60),
                end_time=minutes_to_time_str((hour + 1) * 60),
                max_orders=5,
            )
            for hour in range(9, 17)
        ],
        lead_time=1,
        max_advance_booking_days=14,
    )


class TimeSlotStore:

    def __init__(self, store: DocumentStore, locks: LockManager):
        self.store = store
        self.locks = locks
        self.lock_key = document_lock_key(DOCUMENT)

    # ── Read ─────────────────────────────────────────────────────────────

    def get_config(self) -> TimeSlotConfig:
        """Current config; the default one is created on first read."""
        config = self._load()
        if config is not None:
            return config

        with self.locks.hold(self.lock_key):
            return self._load_or_create()

    # ── Write ────────────────────────────────────────────────────────────

    def replace_config(self, config: TimeSlotConfig | None) -> TimeSlotConfig:
        if config is None:
            raise ValidationError("Time slot configuration is required")

        with self.locks.hold(self.lock_key):
            self._save(config)

        logger.info(
            "Replaced time slot config: %d slots, days=%s",
            len(config.time_slots), ",".join(config.available_days),
        )
        return config

    def add_slot(self, slot: TimeSlot) -> TimeSlotConfig:
        with self.locks.hold(self.lock_key):
            config = self._load_or_create()
            updated = self._with_slots(config, [*config.time_slots, slot])
            self._save(updated)

        logger.info("Added time slot %s %s-%s", slot.id, slot.start_time, slot.end_time)
        return updated

    def update_slot(self, slot_id: str, changes: TimeSlotUpdate) -> TimeSlotConfig:
        with self.locks.hold(self.lock_key):
            config = self._load_or_create()
            index = self._index_of(config, slot_id)

            merged = {
                **config.time_slots[index].model_dump(),
                **changes.model_dump(exclude_unset=True, exclude_none=True),
                "id": slot_id,
            }
            try:
                slot = TimeSlot.model_validate(merged)
            except SchemaValidationError as e:
                raise ValidationError(format_validation_errors(e.errors())) from e

            slots = list(config.time_slots)
            slots[index] = slot
            updated = self._with_slots(config, slots)
            self._save(updated)

        logger.info("Updated time slot %s", slot_id)
        return updated

    def delete_slot(self, slot_id: str) -> TimeSlotConfig:
        with self.locks.hold(self.lock_key):
            config = self._load_or_create()
            self._index_of(config, slot_id)
            updated = self._with_slots(
                config, [s for s in config.time_slots if s.id != slot_id]
            )
            self._save(updated)

        logger.info("Deleted time slot %s", slot_id)
        return updated

    # ── Helpers ──────────────────────────────────────────────────────────

    def _load(self) -> TimeSlotConfig | None:
        raw = self.store.load(DOCUMENT)
        if raw is None:
            return None
        try:
            return TimeSlotConfig.model_validate(raw)
        except SchemaValidationError as e:
            raise CorruptStateError(
                f"{DOCUMENT}.json is invalid: {format_validation_errors(e.errors())}"
            ) from e

    def _load_or_create(self) -> TimeSlotConfig:
        """Caller must hold the document lock."""
        config = self._load()
        if config is None:
            config = default_config()
            self._save(config)
            logger.info("Created default time slot config")
        return config

    def _save(self, config: TimeSlotConfig) -> None:
        self.store.save(DOCUMENT, config.model_dump(by_alias=True))

    @staticmethod
    def _index_of(config: TimeSlotConfig, slot_id: str) -> int:
        for i, slot in enumerate(config.time_slots):
            if slot.id == slot_id:
                return i
        raise NotFoundError(f"Time slot with ID {slot_id} not found")

    @staticmethod
    def _with_slots(config: TimeSlotConfig, slots: list[TimeSlot]) -> TimeSlotConfig:
        """Rebuild the config so ordering and uniqueness are re-checked."""
        try:
            return TimeSlotConfig(
                available_days=config.available_days,
                time_slots=slots,
                lead_time=config.lead_time,
                max_advance_booking_days=config.max_advance_booking_days,
            )
        except SchemaValidationError as e:
            raise ValidationError(format_validation_errors(e.errors())) from e
