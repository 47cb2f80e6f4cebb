# backend/storefront/services/backups.py
"""
JSON snapshots of every persisted document.

A backup is {backups_dir}/{millis}-{hex8}.json containing
{"timestamp": ISO, "data": {"menu": ..., "orders": ..., ...}}.
Restoring takes a fresh snapshot first, so a restore can itself be undone.
"""

import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from pydantic import BaseModel
from pydantic import ValidationError as SchemaValidationError

from ..errors import CorruptStateError, NotFoundError, StorageError, ValidationError
from ..locks import LockManager, document_lock_key
from ..schemas.common import BackupInfo, PaymentSettings
from ..schemas.menu import MenuDocument
from ..schemas.orders import OrderLedgerDocument
from ..schemas.time_slots import TimeSlotConfig
from ..storage import DocumentStore, JsonFileStore

logger = logging.getLogger(__name__)

DOCUMENT_SCHEMAS: dict[str, type[BaseModel]] = {
    "menu": MenuDocument,
    "orders": OrderLedgerDocument,
    "timeSlots": TimeSlotConfig,
    "paymentSettings": PaymentSettings,
}

BACKUP_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class BackupService:

    def __init__(self, store: DocumentStore, backups_dir: Path, locks: LockManager):
        self.store = store
        self.backups_dir = Path(backups_dir)
        self.locks = locks
        self._files = JsonFileStore(self.backups_dir)

    def create(self) -> str:
        data = {name: self.store.load(name) for name in DOCUMENT_SCHEMAS}
        backup_id = f"{int(time.time() * 1000)}-{uuid4().hex[:8]}"
        self._files.save(backup_id, {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "data": data,
        })
        logger.info("Created backup %s", backup_id)
        return backup_id

    def list_backups(self) -> list[BackupInfo]:
        if not self.backups_dir.exists():
            return []

        backups = []
        for path in self.backups_dir.glob("*.json"):
            if path.name.startswith("."):
                continue
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            backups.append(BackupInfo(
                id=path.stem,
                name=path.name,
                created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                size=stat.st_size,
            ))
        # Ids start with a millisecond timestamp, so they break mtime ties
        backups.sort(key=lambda b: (b.created_at, b.id), reverse=True)
        return backups

    def restore(self, backup_id: str) -> None:
        self._check_exists(backup_id)
        documents = self._validated_documents(backup_id)

        safety_id = self.create()
        for name, data in documents.items():
            with self.locks.hold(document_lock_key(name)):
                self.store.save(name, data)

        logger.info(
            "Restored backup %s (%s); previous state saved as %s",
            backup_id, ", ".join(documents), safety_id,
        )

    def delete(self, backup_id: str) -> None:
        path = self._check_exists(backup_id)
        try:
            path.unlink()
        except OSError as e:
            raise StorageError(f"Failed to delete backup {backup_id}: {e}") from e
        logger.info("Deleted backup %s", backup_id)

    def prune(self, keep: int) -> int:
        """Delete all but the newest `keep` backups."""
        removed = 0
        for info in self.list_backups()[keep:]:
            try:
                (self.backups_dir / info.name).unlink()
                removed += 1
            except FileNotFoundError:
                continue
            except OSError as e:
                raise StorageError(f"Failed to prune backup {info.id}: {e}") from e
        if removed:
            logger.info("Pruned %d old backups", removed)
        return removed

    # ── Helpers ──────────────────────────────────────────────────────────

    def _check_exists(self, backup_id: str) -> Path:
        if not BACKUP_ID_RE.match(backup_id):
            raise ValidationError(f"Invalid backup ID {backup_id}")
        path = self._files.path_for(backup_id)
        if not path.is_file():
            raise NotFoundError(f"Backup with ID {backup_id} not found")
        return path

    def _validated_documents(self, backup_id: str) -> dict[str, object]:
        raw = self._files.load(backup_id)
        data = raw.get("data") if isinstance(raw, dict) else None
        if not isinstance(data, dict):
            raise CorruptStateError(f"Backup {backup_id} has no data section")

        # Menu-only backups store the menu document directly under "data"
        if "items" in data and "menu" not in data:
            data = {"menu": data}

        documents = {}
        for name, schema in DOCUMENT_SCHEMAS.items():
            if data.get(name) is None:
                continue
            try:
                schema.model_validate(data[name])
            except SchemaValidationError as e:
                raise CorruptStateError(
                    f"Backup {backup_id} contains an invalid {name} document"
                ) from e
            documents[name] = data[name]
        return documents
