# backend/storefront/services/payment_settings.py

import logging

from pydantic import ValidationError as SchemaValidationError

from ..errors import CorruptStateError, ValidationError, format_validation_errors
from ..locks import LockManager, document_lock_key
from ..schemas.common import PaymentSettings
from ..storage import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENT = "paymentSettings"

DEFAULT_SETTINGS = PaymentSettings(
    venmo_username="@YourVenmoHandle",
    venmo_qr_code_url="https://via.placeholder.com/150?text=Venmo+QR",
)


class PaymentSettingsRepository:

    def __init__(self, store: DocumentStore, locks: LockManager):
        self.store = store
        self.locks = locks
        self.lock_key = document_lock_key(DOCUMENT)

    def get(self) -> PaymentSettings:
        settings = self._load()
        if settings is not None:
            return settings

        with self.locks.hold(self.lock_key):
            settings = self._load()
            if settings is None:
                settings = DEFAULT_SETTINGS
                self._save(settings)
                logger.info("Created default payment settings")
        return settings

    def update(self, settings: PaymentSettings) -> PaymentSettings:
        if not settings.venmo_username.strip():
            raise ValidationError("Venmo username is required")

        with self.locks.hold(self.lock_key):
            self._save(settings)
        logger.info("Updated payment settings (venmo=%s)", settings.venmo_username)
        return settings

    def _load(self) -> PaymentSettings | None:
        raw = self.store.load(DOCUMENT)
        if raw is None:
            return None
        try:
            return PaymentSettings.model_validate(raw)
        except SchemaValidationError as e:
            raise CorruptStateError(
                f"{DOCUMENT}.json is invalid: {format_validation_errors(e.errors())}"
            ) from e

    def _save(self, settings: PaymentSettings) -> None:
        self.store.save(DOCUMENT, settings.model_dump(by_alias=True))
