"""
Bookmark store: create/list/update/delete over the whole bookmark collection.

Every operation loads the full collection from its backend, changes it in
memory and saves the full collection back. There is no locking, so two
overlapping writers can lose one another's change; the collection is expected
to stay small (one person's bookmarks).
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, NamedTuple, Optional, Union

from pydantic import ValidationError as SchemaError

from ytmarks.core.exceptions import NotFoundError, PersistenceError, ValidationError
from ytmarks.crud.video_title import VideoTitleCache, fallback_title
from ytmarks.db.collection import CollectionBackend
from ytmarks.models.bookmark import Bookmark

logger = logging.getLogger(__name__)


class VideoGroup(NamedTuple):
    video_id: str
    video_title: str
    bookmarks: List[Bookmark]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _isoformat(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _by_timestamp(bookmarks: List[Bookmark]) -> List[Bookmark]:
    return sorted(bookmarks, key=lambda b: b.timestamp)


class BookmarkStore:
    def __init__(
        self,
        backend: CollectionBackend,
        titles: Optional[VideoTitleCache] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.backend = backend
        self.titles = titles
        self.clock = clock

    async def _load(self) -> List[Bookmark]:
        records = await self.backend.load()
        try:
            return [Bookmark.model_validate(record) for record in records]
        except SchemaError as e:
            logger.error(f"Persisted bookmark collection is malformed: {e}")
            raise PersistenceError(f"Persisted bookmark collection is malformed: {e}")

    async def _save(self, bookmarks: List[Bookmark]) -> None:
        await self.backend.save([bookmark.to_record() for bookmark in bookmarks])

    def _next_id(self, bookmarks: List[Bookmark], now: datetime) -> int:
        # Millisecond clock, bumped past the highest id so rapid creates never collide
        candidate = int(now.timestamp() * 1000)
        highest = max((bookmark.id for bookmark in bookmarks), default=0)
        return candidate if candidate > highest else highest + 1

    @staticmethod
    def _index_of(bookmarks: List[Bookmark], bookmark_id: int) -> int:
        for index, bookmark in enumerate(bookmarks):
            if bookmark.id == bookmark_id:
                return index
        raise NotFoundError("Bookmark not found.")

    async def list(self, video_id: str) -> List[Bookmark]:
        """Bookmarks of one video, ordered by timestamp."""
        bookmarks = await self._load()
        return _by_timestamp([b for b in bookmarks if b.video_id == video_id])

    async def list_all(self) -> List[Bookmark]:
        bookmarks = await self._load()
        return sorted(bookmarks, key=lambda b: (b.video_id, b.timestamp))

    async def group_by_video(self) -> List[VideoGroup]:
        """Bookmarks grouped per video, groups in order of first appearance."""
        grouped = {}
        for bookmark in await self._load():
            grouped.setdefault(bookmark.video_id, []).append(bookmark)

        cached_titles = await self.titles.all() if self.titles else {}
        groups = []
        for video_id, bookmarks in grouped.items():
            bookmarks = _by_timestamp(bookmarks)
            title = (
                bookmarks[0].video_title
                or cached_titles.get(video_id)
                or fallback_title(video_id)
            )
            groups.append(VideoGroup(video_id, title, bookmarks))
        return groups

    async def get(self, bookmark_id: int) -> Bookmark:
        bookmarks = await self._load()
        return bookmarks[self._index_of(bookmarks, bookmark_id)]

    async def create(
        self,
        video_id: Optional[str],
        timestamp: Optional[Union[int, float]],
        description: Optional[str] = None,
    ) -> Bookmark:
        if not video_id or timestamp is None:
            raise ValidationError("videoId and timestamp are required.")

        bookmarks = await self._load()
        now = self.clock()
        video_title = await self.titles.get(video_id) if self.titles else None

        try:
            bookmark = Bookmark(
                id=self._next_id(bookmarks, now),
                video_id=video_id,
                timestamp=timestamp,
                description=description or "",
                created_at=_isoformat(now),
                video_title=video_title,
            )
        except SchemaError as e:
            raise ValidationError(f"Invalid bookmark: {e}")
        bookmarks.append(bookmark)
        await self._save(bookmarks)

        logger.info(f"Created bookmark {bookmark.id} for video {video_id} at {timestamp}s")
        return bookmark

    async def update(self, bookmark_id: int, description: Optional[str]) -> Bookmark:
        """Overwrite the description of a bookmark; no other field changes."""
        if description is not None and not isinstance(description, str):
            raise ValidationError("description must be a string.")

        bookmarks = await self._load()
        bookmark = bookmarks[self._index_of(bookmarks, bookmark_id)]
        bookmark.description = description
        await self._save(bookmarks)

        logger.info(f"Updated bookmark {bookmark_id}")
        return bookmark

    async def delete(self, bookmark_id: int) -> Bookmark:
        bookmarks = await self._load()
        removed = bookmarks.pop(self._index_of(bookmarks, bookmark_id))
        await self._save(bookmarks)

        logger.info(f"Deleted bookmark {bookmark_id}")
        return removed

    async def merge(self, incoming: List[Bookmark]) -> List[Bookmark]:
        """Append already-identified bookmarks whose ids are not in the collection yet."""
        bookmarks = await self._load()
        known = {bookmark.id for bookmark in bookmarks}
        added = []
        for bookmark in incoming:
            if bookmark.id in known:
                continue
            known.add(bookmark.id)
            added.append(bookmark)

        if added:
            await self._save(bookmarks + added)
        return added
