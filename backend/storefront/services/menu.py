# backend/storefront/services/menu.py

import logging

from pydantic import ValidationError as SchemaValidationError

from ..errors import CorruptStateError, NotFoundError, format_validation_errors
from ..locks import LockManager, document_lock_key
from ..schemas.menu import MenuDocument, MenuItem, MenuItemIn
from ..storage import DocumentStore

logger = logging.getLogger(__name__)

DOCUMENT = "menu"


class MenuRepository:

    def __init__(self, store: DocumentStore, locks: LockManager):
        self.store = store
        self.locks = locks
        self.lock_key = document_lock_key(DOCUMENT)

    def list_items(self) -> list[MenuItem]:
        return self._load()

    def get_item(self, item_id: int) -> MenuItem:
        for item in self._load():
            if item.id == item_id:
                return item
        raise NotFoundError(f"Menu item with ID {item_id} not found")

    def items_in_category(self, category: str) -> list[MenuItem]:
        wanted = category.lower()
        return [i for i in self._load() if i.category.lower() == wanted]

    def categories(self) -> list[str]:
        """Unique categories in first-seen order."""
        return list(dict.fromkeys(i.category for i in self._load()))

    def add_item(self, data: MenuItemIn) -> MenuItem:
        with self.locks.hold(self.lock_key):
            items = self._load()
            next_id = max((i.id for i in items), default=0) + 1
            item = MenuItem(**data.model_dump(), id=next_id)
            items.append(item)
            self._save(items)

        logger.info("Added menu item %d (%s)", item.id, item.name)
        return item

    def update_item(self, item_id: int, data: MenuItemIn) -> MenuItem:
        with self.locks.hold(self.lock_key):
            items = self._load()
            for i, existing in enumerate(items):
                if existing.id == item_id:
                    items[i] = MenuItem(**data.model_dump(), id=item_id)
                    self._save(items)
                    break
            else:
                raise NotFoundError(f"Menu item with ID {item_id} not found")

        logger.info("Updated menu item %d", item_id)
        return items[i]

    def delete_item(self, item_id: int) -> None:
        with self.locks.hold(self.lock_key):
            items = self._load()
            remaining = [i for i in items if i.id != item_id]
            if len(remaining) == len(items):
                raise NotFoundError(f"Menu item with ID {item_id} not found")
            self._save(remaining)

        logger.info("Deleted menu item %d", item_id)

    def replace_all(self, items: list[MenuItem]) -> int:
        with self.locks.hold(self.lock_key):
            self._save(items)
        logger.info("Replaced menu with %d items", len(items))
        return len(items)

    def _load(self) -> list[MenuItem]:
        raw = self.store.load(DOCUMENT)
        if raw is None:
            return []
        try:
            return MenuDocument.model_validate(raw).items
        except SchemaValidationError as e:
            raise CorruptStateError(
                f"{DOCUMENT}.json is invalid: {format_validation_errors(e.errors())}"
            ) from e

    def _save(self, items: list[MenuItem]) -> None:
        self.store.save(DOCUMENT, MenuDocument(items=items).model_dump(by_alias=True))
