from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from threading import Lock, RLock
from typing import Any, Dict, List, Sequence

from .models import (
    DEFAULT_TOPIC_STATUS,
    CategoryEntity,
    ChecklistItemEntity,
    ScheduleItemEntity,
    TopicEntity,
)
from .schemas import ScheduleItemIn
from .seed import initial_checklist, initial_schedules
from .settings import Settings

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Base class for failures raised by a storage backend."""


class NotFoundError(StoreError):
    """The targeted document does not exist."""


class DuplicateError(StoreError):
    """A unique key would be violated."""


class TransactionAbortedError(StoreError):
    """An atomic multi-step write was rolled back; prior data is intact."""


# PUBLIC_INTERFACE
class Repository(ABC):
    """
    Store handle owning the topic, checklist, category and schedule collections.

    A handle is opened once per process and closed on shutdown. Seeding of the
    schedule and the category -> topic cascade are implemented here on top of
    backend primitives; everything else is backend specific.
    """

    def __init__(self) -> None:
        self._seed_lock = Lock()
        self._seed_checked = False

    # Schedules

    def ensure_schedule_seeded(self) -> bool:
        """
        Insert the default schedule when the schedule collection is empty.

        The emptiness check spans every schedule type, so once any schedule item
        exists no seeding happens again. Returns True if the seed was inserted.
        """
        with self._seed_lock:
            docs = initial_schedules()
            seeded = self._seed_schedule_if_empty(docs)
            self._seed_checked = True
            if seeded:
                logger.info("Seeded empty schedule store with %d default items", len(docs))
            return seeded

    def list_schedule(self, schedule_type: str) -> List[ScheduleItemEntity]:
        """Return the items of `schedule_type` sorted by `order`."""
        if not self._seed_checked:
            self.ensure_schedule_seeded()
        return self._find_schedule(schedule_type)

    @abstractmethod
    def replace_schedule(self, schedule_type: str, items: Sequence[ScheduleItemIn]) -> List[ScheduleItemEntity]:
        """
        Atomically replace every item of `schedule_type` with `items`.
        Orders are assigned from list positions; the type is forced.
        Raises TransactionAbortedError and leaves prior data intact on failure.
        """

    @abstractmethod
    def _seed_schedule_if_empty(self, docs: List[Dict[str, Any]]) -> bool:
        """
        Insert `docs` if no schedule item of any type exists. The check and the
        insert form one unit with respect to replace_schedule.
        """

    @abstractmethod
    def _find_schedule(self, schedule_type: str) -> List[ScheduleItemEntity]:
        """Return the items of one type sorted by order."""

    @staticmethod
    def _schedule_document(schedule_type: str, index: int, item: ScheduleItemIn) -> Dict[str, Any]:
        return {
            "type": schedule_type,
            "time": item.time,
            "description": item.description,
            "category": item.category,
            "isWarning": item.is_warning,
            "isSuccess": item.is_success,
            "order": index,
        }

    # Categories

    @abstractmethod
    def list_categories(self) -> List[CategoryEntity]:
        """Return all categories."""

    @abstractmethod
    def get_category(self, category_id: str) -> CategoryEntity:
        """Return a category by id or raise NotFoundError."""

    @abstractmethod
    def create_category(self, name: str) -> CategoryEntity:
        """Create a category. Raises DuplicateError if the name is taken."""

    @abstractmethod
    def _delete_category_document(self, category_id: str) -> None:
        """Remove the category document itself."""

    def delete_category(self, category_id: str) -> int:
        """
        Delete a category and every topic filed under its name.

        Topics are removed first; if that step fails the category is left in
        place and the error propagates. Returns the number of topics removed.
        """
        category = self.get_category(category_id)
        removed = self.delete_topics_by_category(category["name"])
        self._delete_category_document(category_id)
        logger.info("Deleted category %r and %d associated topics", category["name"], removed)
        return removed

    # Topics

    @abstractmethod
    def list_topics(self) -> List[TopicEntity]:
        """Return all topics."""

    @abstractmethod
    def create_topic(self, title: str, category: str) -> TopicEntity:
        """Create a topic with status "Not Started"."""

    @abstractmethod
    def update_topic_status(self, topic_id: str, status: str) -> TopicEntity:
        """Set a topic's status. Raises NotFoundError if absent."""

    @abstractmethod
    def delete_topic(self, topic_id: str) -> None:
        """Delete a topic. Raises NotFoundError if absent."""

    @abstractmethod
    def delete_topics_by_category(self, category_name: str) -> int:
        """Delete every topic whose category equals `category_name`. Returns the count."""

    # Checklist

    @abstractmethod
    def list_checklist(self) -> List[ChecklistItemEntity]:
        """Return all checklist items."""

    @abstractmethod
    def update_checklist_completed(self, item_id: str, completed: bool) -> ChecklistItemEntity:
        """Set the completed flag. Raises NotFoundError if absent."""

    @abstractmethod
    def delete_checklist_item(self, item_id: str) -> None:
        """Delete a checklist item. Raises NotFoundError if absent."""

    @abstractmethod
    def reset_checklist(self) -> List[ChecklistItemEntity]:
        """Wipe the checklist and insert the default items."""

    # Lifecycle

    def close(self) -> None:
        """Release backend resources. Safe to call more than once."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository suitable for testing and default runtime.

    Readers and writers share one lock, so a schedule replacement is never
    observed half done.
    """

    def __init__(self) -> None:
        super().__init__()
        self._lock = RLock()
        self._topics: Dict[str, TopicEntity] = {}
        self._checklist: Dict[str, ChecklistItemEntity] = {}
        self._categories: Dict[str, CategoryEntity] = {}
        self._schedule: Dict[str, ScheduleItemEntity] = {}

    def _allocate_id(self) -> str:
        return uuid.uuid4().hex

    # Schedules

    def _count_schedule_items(self) -> int:
        with self._lock:
            return len(self._schedule)

    def _seed_schedule_if_empty(self, docs: List[Dict[str, Any]]) -> bool:
        with self._lock:
            if self._count_schedule_items() > 0:
                return False
            self._insert_schedule_items(docs)
            return True

    def _insert_schedule_items(self, docs: List[Dict[str, Any]]) -> None:
        with self._lock:
            for doc in docs:
                entity: ScheduleItemEntity = {"id": self._allocate_id(), **doc}  # type: ignore[typeddict-item]
                self._schedule[entity["id"]] = entity

    def _find_schedule(self, schedule_type: str) -> List[ScheduleItemEntity]:
        with self._lock:
            items = [s for s in self._schedule.values() if s["type"] == schedule_type]
            return [s.copy() for s in sorted(items, key=lambda s: s["order"])]

    def replace_schedule(self, schedule_type: str, items: Sequence[ScheduleItemIn]) -> List[ScheduleItemEntity]:
        with self._lock:
            snapshot = dict(self._schedule)
            try:
                self._schedule = {k: v for k, v in self._schedule.items() if v["type"] != schedule_type}
                self._insert_schedule_items(
                    [self._schedule_document(schedule_type, i, item) for i, item in enumerate(items)]
                )
            except Exception as exc:
                # Roll back to the state before the delete
                self._schedule = snapshot
                raise TransactionAbortedError(f"Schedule replace aborted: {exc}") from exc
            logger.info("Replaced %s schedule with %d items", schedule_type, len(items))
            return self._find_schedule(schedule_type)

    # Categories

    def list_categories(self) -> List[CategoryEntity]:
        with self._lock:
            return [c.copy() for c in self._categories.values()]

    def get_category(self, category_id: str) -> CategoryEntity:
        with self._lock:
            category = self._categories.get(category_id)
            if category is None:
                raise NotFoundError("Category not found")
            return category.copy()

    def create_category(self, name: str) -> CategoryEntity:
        with self._lock:
            if any(c["name"] == name for c in self._categories.values()):
                raise DuplicateError(f"Category {name!r} already exists")
            entity: CategoryEntity = {"id": self._allocate_id(), "name": name}
            self._categories[entity["id"]] = entity
            return entity.copy()

    def _delete_category_document(self, category_id: str) -> None:
        with self._lock:
            if self._categories.pop(category_id, None) is None:
                raise NotFoundError("Category not found")

    # Topics

    def list_topics(self) -> List[TopicEntity]:
        with self._lock:
            return [t.copy() for t in self._topics.values()]

    def create_topic(self, title: str, category: str) -> TopicEntity:
        entity: TopicEntity = {
            "id": self._allocate_id(),
            "title": title,
            "category": category,
            "status": DEFAULT_TOPIC_STATUS,
        }
        with self._lock:
            self._topics[entity["id"]] = entity
        return entity.copy()

    def update_topic_status(self, topic_id: str, status: str) -> TopicEntity:
        with self._lock:
            existing = self._topics.get(topic_id)
            if existing is None:
                raise NotFoundError("Topic not found")
            updated = existing.copy()
            updated["status"] = status
            self._topics[topic_id] = updated
            return updated.copy()

    def delete_topic(self, topic_id: str) -> None:
        with self._lock:
            if self._topics.pop(topic_id, None) is None:
                raise NotFoundError("Topic not found")

    def delete_topics_by_category(self, category_name: str) -> int:
        with self._lock:
            doomed = [k for k, t in self._topics.items() if t["category"] == category_name]
            for k in doomed:
                del self._topics[k]
            return len(doomed)

    # Checklist

    def list_checklist(self) -> List[ChecklistItemEntity]:
        with self._lock:
            return [c.copy() for c in self._checklist.values()]

    def update_checklist_completed(self, item_id: str, completed: bool) -> ChecklistItemEntity:
        with self._lock:
            existing = self._checklist.get(item_id)
            if existing is None:
                raise NotFoundError("Checklist item not found")
            updated = existing.copy()
            updated["completed"] = completed
            self._checklist[item_id] = updated
            return updated.copy()

    def delete_checklist_item(self, item_id: str) -> None:
        with self._lock:
            if self._checklist.pop(item_id, None) is None:
                raise NotFoundError("Checklist item not found")

    def reset_checklist(self) -> List[ChecklistItemEntity]:
        with self._lock:
            self._checklist = {}
            for doc in initial_checklist():
                entity: ChecklistItemEntity = {"id": self._allocate_id(), **doc}  # type: ignore[typeddict-item]
                self._checklist[entity["id"]] = entity
            logger.info("Checklist reset to %d default items", len(self._checklist))
            return self.list_checklist()


# PUBLIC_INTERFACE
def open_repository(settings: Settings) -> Repository:
    """
    Open the repository configured in settings.
    - memory: InMemoryRepository
    - mongo: MongoRepository connected to settings.mongo_uri
    """
    if settings.persistence_backend == "mongo":
        from .db import MongoRepository

        return MongoRepository(settings.mongo_uri)
    return InMemoryRepository()
