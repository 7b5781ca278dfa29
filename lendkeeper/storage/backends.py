"""Key-value storage backends for the ledger archive."""

import json
from pathlib import Path
from typing import Protocol

from lendkeeper.exceptions import StorageError
from lendkeeper.logging import get_logger

logger = get_logger(__name__)


class KeyValueStorage(Protocol):
    """String-to-string store with the shape of browser ``localStorage``."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    """Dictionary-backed storage, lost when the process exits."""

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """Storage backed by a single JSON object file.

    Every key maps to a string value. The whole file is rewritten on each
    ``set_item``/``remove_item``. A file that is not a readable JSON object
    makes ``get_item`` raise, but the next write replaces it.
    """

    def __init__(self, path: str | Path) -> None:
        """Initialize JSON file storage.

        Parameters
        ----------
        path : str | Path
            File holding the JSON object. Created on first write.
        """
        self.path = Path(path)

    def get_item(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read_for_update()
        items[key] = value
        self._write(items)

    def remove_item(self, key: str) -> None:
        items = self._read_for_update()
        items.pop(key, None)
        if self.path.exists():
            self._write(items)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def _read_for_update(self) -> dict:
        # Writes start over from an empty object rather than failing forever
        try:
            return self._read()
        except StorageError as exc:
            logger.warning(
                "Overwriting unreadable storage file: %s",
                exc,
                extra={"extra": {"path": str(self.path)}},
            )
            return {}

    def _write(self, items: dict) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(items, f, ensure_ascii=False, indent=2)
        except OSError as exc:
            raise StorageError(f"Cannot write {self.path}: {exc}") from exc
        logger.debug("Wrote %d keys to %s", len(items), self.path)
