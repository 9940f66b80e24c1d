import json
import logging
import os
from typing import Any, Optional

logger = logging.getLogger(__name__)

STORAGE_KEYS = {
    "CART": "biomarket_cart",
    "USER": "biomarket_user",
    "USER_ROLE": "biomarket_user_role",
    "TOKEN": "biomarket_token",
    "SELECTED_PLAN": "biomarket_selected_plan",
    "FARMER_PRODUCTS": "biomarket_farmer_products",
    "FARMER_DELIVERIES": "biomarket_farmer_deliveries",
}


class MemoryBackend:
    """Raw string key/value store, the shape of browser localStorage."""

    def __init__(self):
        self._data = {}

    def get_item(self, key):
        return self._data.get(key)

    def set_item(self, key, value):
        self._data[key] = value

    def remove_item(self, key):
        self._data.pop(key, None)

    def clear(self):
        self._data.clear()


class FileBackend(MemoryBackend):
    """Same contract as MemoryBackend, persisted to a JSON file on every write."""

    def __init__(self, path):
        super().__init__()
        self.path = path
        if os.path.exists(path):
            try:
                with open(path, encoding="utf-8") as fh:
                    data = json.load(fh)
            except (OSError, ValueError) as e:
                logger.warning("Ignoring unreadable storage file %s: %s", path, e)
                return
            if isinstance(data, dict):
                self._data = data
            else:
                logger.warning("Ignoring storage file %s: expected an object", path)

    def _flush(self):
        with open(self.path, "w", encoding="utf-8") as fh:
            json.dump(self._data, fh)

    def set_item(self, key, value):
        super().set_item(key, value)
        self._flush()

    def remove_item(self, key):
        super().remove_item(key)
        self._flush()

    def clear(self):
        super().clear()
        self._flush()


class Storage:
    """JSON (de)serialising wrapper; read errors count as missing data."""

    def __init__(self, backend=None):
        self.backend = backend if backend is not None else MemoryBackend()

    def get(self, key: str) -> Optional[Any]:
        try:
            raw = self.backend.get_item(key)
            return json.loads(raw) if raw else None
        except Exception as e:
            logger.warning("Error reading from storage [%s]: %s", key, e)
            return None

    def set(self, key: str, value: Any) -> bool:
        try:
            self.backend.set_item(key, json.dumps(value))
            return True
        except Exception as e:
            logger.error("Error writing to storage [%s]: %s", key, e)
            return False

    def remove(self, key: str) -> None:
        try:
            self.backend.remove_item(key)
        except Exception as e:
            logger.error("Error removing from storage [%s]: %s", key, e)

    def clear(self) -> None:
        try:
            self.backend.clear()
        except Exception as e:
            logger.error("Error clearing storage: %s", e)
