"""
Key-value storage areas.

A storage area holds JSON-serialisable values under string keys and is read
and written whole-value at a time, the same way the browser extension uses
``chrome.storage.local``: ``get`` takes a mapping of keys to defaults and
``set`` takes a mapping of keys to new values.
"""

import copy
import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import anyio
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlmodel import select

from ytmarks.core.exceptions import PersistenceError
from ytmarks.models.storage_item import StorageItem

logger = logging.getLogger(__name__)


def _copy_value(value: Any) -> Any:
    try:
        return json.loads(json.dumps(value))
    except (TypeError, ValueError) as e:
        raise PersistenceError(f"Value is not JSON serializable: {e}")


class StorageArea(ABC):
    """Async key-value storage area."""

    @abstractmethod
    async def get(self, defaults: Dict[str, Any]) -> Dict[str, Any]:
        """Return the stored value for every key in ``defaults``, or its default."""

    @abstractmethod
    async def set(self, items: Dict[str, Any]) -> None:
        """Store every key/value pair in ``items``."""

    @abstractmethod
    async def remove(self, keys: Iterable[str]) -> None:
        """Delete the given keys; unknown keys are ignored."""


class MemoryStorageArea(StorageArea):
    """Process-local storage area, mainly for tests and throwaway runs."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._items: Dict[str, Any] = _copy_value(initial or {})

    async def get(self, defaults: Dict[str, Any]) -> Dict[str, Any]:
        return {
            key: copy.deepcopy(self._items[key]) if key in self._items else copy.deepcopy(default)
            for key, default in defaults.items()
        }

    async def set(self, items: Dict[str, Any]) -> None:
        for key, value in items.items():
            self._items[key] = _copy_value(value)

    async def remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._items.pop(key, None)


class JsonFileStorageArea(StorageArea):
    """Whole storage area kept as one pretty-printed JSON object on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = anyio.Path(path)

    async def _read(self) -> Dict[str, Any]:
        try:
            data = await self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read storage file {self.path}: {e}")
            raise PersistenceError(f"Failed to read storage file: {e}")

        try:
            items = json.loads(data)
        except ValueError as e:
            raise PersistenceError(f"Storage file {self.path} is not valid JSON: {e}")
        if not isinstance(items, dict):
            raise PersistenceError(f"Storage file {self.path} does not hold a JSON object")
        return items

    async def _write(self, items: Dict[str, Any]) -> None:
        try:
            await self.path.write_text(json.dumps(items, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write storage file {self.path}: {e}")
            raise PersistenceError(f"Failed to write storage file: {e}")

    async def get(self, defaults: Dict[str, Any]) -> Dict[str, Any]:
        items = await self._read()
        return {key: items.get(key, copy.deepcopy(default)) for key, default in defaults.items()}

    async def set(self, items: Dict[str, Any]) -> None:
        current = await self._read()
        current.update(_copy_value(items))
        await self._write(current)

    async def remove(self, keys: Iterable[str]) -> None:
        current = await self._read()
        for key in keys:
            current.pop(key, None)
        await self._write(current)


class DatabaseStorageArea(StorageArea):
    """Storage area backed by the ``storage_item`` table, one row per key."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def get(self, defaults: Dict[str, Any]) -> Dict[str, Any]:
        result = {key: copy.deepcopy(default) for key, default in defaults.items()}
        if not defaults:
            return result
        try:
            async with self.session_factory() as session:
                rows = await session.exec(
                    select(StorageItem).where(StorageItem.key.in_(list(defaults)))
                )
                items = rows.all()
        except SQLAlchemyError as e:
            logger.error(f"Storage read failed: {e}", exc_info=True)
            raise PersistenceError(f"Failed to read from storage: {e}")

        for item in items:
            try:
                result[item.key] = json.loads(item.value)
            except ValueError as e:
                raise PersistenceError(f"Stored value for '{item.key}' is not valid JSON: {e}")
        return result

    async def set(self, items: Dict[str, Any]) -> None:
        encoded = {key: json.dumps(_copy_value(value)) for key, value in items.items()}
        try:
            async with self.session_factory() as session:
                for key, value in encoded.items():
                    item = await session.get(StorageItem, key)
                    if item is None:
                        item = StorageItem(key=key, value=value)
                    else:
                        item.value = value
                        item.updated_at = datetime.now(timezone.utc)
                    session.add(item)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Storage write failed: {e}", exc_info=True)
            raise PersistenceError(f"Failed to write to storage: {e}")

    async def remove(self, keys: Iterable[str]) -> None:
        try:
            async with self.session_factory() as session:
                for key in keys:
                    item = await session.get(StorageItem, key)
                    if item is not None:
                        await session.delete(item)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Storage delete failed: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete from storage: {e}")
