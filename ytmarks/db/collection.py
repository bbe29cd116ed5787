"""
Persistence backends for the bookmark collection.

The collection is always loaded and saved as a whole list of plain dicts.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Union

import anyio

from ytmarks.core.exceptions import PersistenceError
from ytmarks.db.storage import StorageArea

logger = logging.getLogger(__name__)

BOOKMARKS_KEY = "bookmarks"


class CollectionBackend(ABC):

    @abstractmethod
    async def load(self) -> List[Dict[str, Any]]:
        """Return the full persisted collection."""

    @abstractmethod
    async def save(self, records: List[Dict[str, Any]]) -> None:
        """Replace the persisted collection with ``records``."""

    def describe(self) -> str:
        return type(self).__name__


class JsonFileCollection(CollectionBackend):
    """A single pretty-printed JSON array of bookmark objects at a fixed path."""

    def __init__(self, path: Union[str, Path]):
        self.path = anyio.Path(path)

    async def load(self) -> List[Dict[str, Any]]:
        try:
            data = await self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            # Nothing saved yet
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read bookmarks file {self.path}: {e}")
            raise PersistenceError(f"Failed to read bookmarks file: {e}")

        try:
            records = json.loads(data)
        except ValueError as e:
            logger.error(f"Bookmarks file {self.path} is not valid JSON: {e}")
            raise PersistenceError(f"Bookmarks file is not valid JSON: {e}")

        if not isinstance(records, list):
            raise PersistenceError("Bookmarks file does not hold a JSON array")
        return records

    async def save(self, records: List[Dict[str, Any]]) -> None:
        try:
            await self.path.write_text(json.dumps(records, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write bookmarks file {self.path}: {e}")
            raise PersistenceError(f"Failed to write bookmarks file: {e}")

    def describe(self) -> str:
        return f"file:{self.path}"


class StorageAreaCollection(CollectionBackend):
    """The collection stored as one array value under a storage area key."""

    def __init__(self, area: StorageArea, key: str = BOOKMARKS_KEY):
        self.area = area
        self.key = key

    async def load(self) -> List[Dict[str, Any]]:
        result = await self.area.get({self.key: []})
        records = result[self.key]
        if not isinstance(records, list):
            raise PersistenceError(f"Storage key '{self.key}' does not hold an array")
        return records

    async def save(self, records: List[Dict[str, Any]]) -> None:
        await self.area.set({self.key: records})

    def describe(self) -> str:
        return f"{type(self.area).__name__}:{self.key}"
