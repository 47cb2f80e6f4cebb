# backend/storefront/storage.py
"""
JSON document persistence.

Each piece of state (menu, orders, time slots, payment settings) is one
named JSON document. Stores return None for an absent document and raise
CorruptStateError for one that exists but cannot be parsed, so callers can
create defaults only when nothing was ever written.

JsonFileStore writes to a temp file in the same directory and renames it
into place; readers always see either the old or the new document.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from .errors import CorruptStateError, StorageError

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    def load(self, name: str) -> Any | None: ...

    def save(self, name: str, data: Any) -> None: ...


class JsonFileStore:
    """Documents stored as {root}/{name}.json."""

    def __init__(self, root: Path):
        self.root = Path(root)

    def path_for(self, name: str) -> Path:
        return self.root / f"{name}.json"

    def load(self, name: str) -> Any | None:
        path = self.path_for(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Failed to read {path.name}: {e}") from e

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"{path.name} is not valid JSON: {e}") from e

    def save(self, name: str, data: Any) -> None:
        path = self.path_for(name)
        tmp_name = None
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.root, prefix=f".{name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {path.name}: {e}") from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    logger.warning("Could not remove temp file %s", tmp_name)


class MemoryStore:
    """In-process store with the same copy semantics as the file store."""

    def __init__(self, documents: dict[str, Any] | None = None):
        self._documents: dict[str, str] = {}
        for name, data in (documents or {}).items():
            self.save(name, data)

    def load(self, name: str) -> Any | None:
        raw = self._documents.get(name)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptStateError(f"{name} is not valid JSON: {e}") from e

    def save(self, name: str, data: Any) -> None:
        try:
            self._documents[name] = json.dumps(data)
        except (TypeError, ValueError) as e:
            raise StorageError(f"Failed to write {name}: {e}") from e

    def put_raw(self, name: str, raw: str) -> None:
        self._documents[name] = raw
