"""Repositories for the studio's persisted collections.

Each repository owns one collection under a fixed store key and keeps it in
memory; every mutation writes the whole collection back through the store.
A failed write is logged and the in-memory copy stays authoritative for the
rest of the process. A payload that cannot be decoded is copied aside under
"<key>.corrupt" before the repository starts empty.
"""

import json
import logging
from typing import Callable, Generic, Optional, TypeVar

from mythos.config import STORAGE_KEYS, STUDIO_CONSTANTS
from mythos.core.errors import StorageError
from mythos.core.types import (
    ChatMessage,
    ChatSession,
    HistoryItem,
    ImageHistoryItem,
    PublishingConfig,
    new_id,
    now_ms,
)

from .migrations import envelope, migrate
from .store import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class VersionedCollection(Generic[T]):
    """A list of records persisted as a versioned JSON envelope."""

    def __init__(
        self,
        store: KeyValueStore,
        key: str,
        from_dict: Callable[[dict], T],
        to_dict: Callable[[T], dict],
    ):
        self.store = store
        self.key = key
        self._from_dict = from_dict
        self._to_dict = to_dict
        self.items: list[T] = self._load()

    def _preserve_corrupt(self, raw: str) -> None:
        try:
            self.store.set(f"{self.key}.corrupt", raw)
            logger.warning("Preserved unreadable %s payload as %s.corrupt", self.key, self.key)
        except StorageError as e:
            logger.error("Could not preserve unreadable %s payload: %s", self.key, e)

    def _load(self) -> list[T]:
        try:
            raw = self.store.get(self.key)
        except StorageError as e:
            logger.error("Failed to read %s, continuing in memory: %s", self.key, e)
            return []
        if raw is None:
            return []

        try:
            payload = migrate(json.loads(raw))
        except (json.JSONDecodeError, StorageError) as e:
            logger.error("Failed to parse %s: %s", self.key, e)
            self._preserve_corrupt(raw)
            return []

        items = []
        for entry in payload["items"]:
            try:
                items.append(self._from_dict(entry))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Skipping malformed %s entry: %s", self.key, e)
        return items

    def save(self) -> bool:
        """Write the collection back. Returns False if the store rejected it."""
        payload = json.dumps(envelope([self._to_dict(item) for item in self.items]))
        try:
            self.store.set(self.key, payload)
        except StorageError as e:
            logger.error("Failed to persist %s, continuing in memory: %s", self.key, e)
            return False
        return True


class StoryHistoryRepository:
    """Finished stories, newest first. Only removed by explicit delete."""

    def __init__(self, store: KeyValueStore):
        self.collection = VersionedCollection(
            store, STORAGE_KEYS["story_history"], HistoryItem.from_dict, HistoryItem.to_dict
        )

    def list(self) -> list[HistoryItem]:
        return list(self.collection.items)

    def get(self, story_id: str) -> Optional[HistoryItem]:
        for item in self.collection.items:
            if item.id == story_id:
                return item
        return None

    def add(self, item: HistoryItem) -> HistoryItem:
        self.collection.items.insert(0, item)
        self.collection.save()
        return item

    def update_content(self, story_id: str, content: str) -> Optional[HistoryItem]:
        item = self.get(story_id)
        if item is None:
            return None
        item.with_content(content)
        self.collection.save()
        return item

    def update_publishing(self, story_id: str, config: PublishingConfig) -> Optional[HistoryItem]:
        item = self.get(story_id)
        if item is None:
            return None
        item.publishing_config = config
        self.collection.save()
        return item

    def delete(self, story_id: str) -> bool:
        before = len(self.collection.items)
        self.collection.items = [i for i in self.collection.items if i.id != story_id]
        if len(self.collection.items) == before:
            return False
        self.collection.save()
        return True


class ImageHistoryRepository:
    """Generated images, newest first, capped with the oldest evicted."""

    def __init__(self, store: KeyValueStore, limit: int = STUDIO_CONSTANTS["image_history_limit"]):
        self.limit = limit
        self.collection = VersionedCollection(
            store, STORAGE_KEYS["image_history"], ImageHistoryItem.from_dict, ImageHistoryItem.to_dict
        )
        if len(self.collection.items) > limit:
            del self.collection.items[limit:]

    def list(self) -> list[ImageHistoryItem]:
        return list(self.collection.items)

    def get(self, image_id: str) -> Optional[ImageHistoryItem]:
        return next((i for i in self.collection.items if i.id == image_id), None)

    def add(self, prompt: str, image_data: str, mode: str = "create", aspect_ratio: str = "1:1") -> ImageHistoryItem:
        ts = now_ms()
        item = ImageHistoryItem(
            id=new_id("img-"),
            timestamp=ts,
            prompt=prompt,
            image_data=image_data,
            mode=mode,
            aspect_ratio=aspect_ratio,
        )
        self.collection.items.insert(0, item)
        del self.collection.items[self.limit:]
        self.collection.save()
        return item

    def delete(self, image_id: str) -> bool:
        before = len(self.collection.items)
        self.collection.items = [i for i in self.collection.items if i.id != image_id]
        if len(self.collection.items) == before:
            return False
        self.collection.save()
        return True

    def clear(self) -> None:
        self.collection.items = []
        self.collection.save()


class ChatSessionRepository:
    """Chat sessions, most recently active first, plus the last-open session id."""

    def __init__(self, store: KeyValueStore):
        self.store = store
        self.collection = VersionedCollection(
            store, STORAGE_KEYS["chat_history"], ChatSession.from_dict, ChatSession.to_dict
        )

    def list(self) -> list[ChatSession]:
        return list(self.collection.items)

    def get(self, session_id: str) -> Optional[ChatSession]:
        return next((s for s in self.collection.items if s.id == session_id), None)

    def create(self, first_message: ChatMessage) -> ChatSession:
        ts = now_ms()
        session = ChatSession(
            id=new_id(),
            title=ChatSession.title_for(first_message),
            timestamp=ts,
            messages=[first_message],
        )
        self.collection.items.insert(0, session)
        self.collection.save()
        self.set_last_session_id(session.id)
        return session

    def append(self, session_id: str, *messages: ChatMessage) -> Optional[ChatSession]:
        """Add messages and move the session to the front."""
        session = self.get(session_id)
        if session is None:
            return None
        session.messages.extend(messages)
        session.timestamp = now_ms()
        self.collection.items.remove(session)
        self.collection.items.insert(0, session)
        self.collection.save()
        return session

    def replace_last_reply(self, session_id: str, message: ChatMessage) -> Optional[ChatSession]:
        """Swap everything after the last user message for a new reply."""
        session = self.get(session_id)
        if session is None:
            return None
        while session.messages and session.messages[-1].role != "user":
            session.messages.pop()
        return self.append(session_id, message)

    def delete(self, session_id: str) -> bool:
        before = len(self.collection.items)
        self.collection.items = [s for s in self.collection.items if s.id != session_id]
        if len(self.collection.items) == before:
            return False
        self.collection.save()
        if self.get_last_session_id() == session_id:
            self.clear_last_session_id()
        return True

    def get_last_session_id(self) -> Optional[str]:
        try:
            raw = self.store.get(STORAGE_KEYS["last_session"])
        except StorageError as e:
            logger.error("Failed to read last session id: %s", e)
            return None
        try:
            return json.loads(raw) if raw is not None else None
        except json.JSONDecodeError:
            return raw

    def set_last_session_id(self, session_id: str) -> None:
        try:
            self.store.set(STORAGE_KEYS["last_session"], json.dumps(session_id))
        except StorageError as e:
            logger.error("Failed to persist last session id: %s", e)

    def clear_last_session_id(self) -> None:
        try:
            self.store.delete(STORAGE_KEYS["last_session"])
        except StorageError as e:
            logger.error("Failed to clear last session id: %s", e)
