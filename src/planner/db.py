from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from bson.errors import InvalidId
from pymongo import ASCENDING, MongoClient, ReturnDocument
from pymongo.client_session import ClientSession
from pymongo.errors import DuplicateKeyError, PyMongoError

from .models import (
    DEFAULT_TOPIC_STATUS,
    CategoryEntity,
    ChecklistItemEntity,
    ScheduleItemEntity,
    TopicEntity,
)
from .repositories import (
    DuplicateError,
    NotFoundError,
    Repository,
    StoreError,
    TransactionAbortedError,
)
from .schemas import ScheduleItemIn
from .seed import initial_checklist
from .settings import DEFAULT_DATABASE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Collections:
    topics: str = "topics"
    checklist: str = "checklistitems"
    categories: str = "categories"
    schedule: str = "scheduleitems"
    locks: str = "locks"


_COLS = _Collections()


def _object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def _to_entity(doc: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in doc.items() if k != "_id"}
    out["id"] = str(doc["_id"])
    return out


class MongoRepository(Repository):
    """
    MongoDB repository implementing the Repository interface.

    Schedule replacement runs in a multi-document transaction, which requires
    the server to be a replica set or sharded cluster.
    """

    def __init__(self, uri: str, client: Optional[MongoClient] = None) -> None:
        super().__init__()
        self._client = client if client is not None else MongoClient(uri)
        self._db = self._client.get_default_database(default=DEFAULT_DATABASE)
        self._topics = self._db[_COLS.topics]
        self._checklist = self._db[_COLS.checklist]
        self._categories = self._db[_COLS.categories]
        self._schedule = self._db[_COLS.schedule]
        self._locks = self._db[_COLS.locks]
        self._closed = False
        self._init_db()
        logger.info("Connected to MongoDB database %r", self._db.name)

    def _init_db(self) -> None:
        try:
            self._categories.create_index([("name", ASCENDING)], unique=True)
            self._schedule.create_index([("type", ASCENDING), ("order", ASCENDING)])
        except PyMongoError as exc:
            raise StoreError(f"Failed to prepare indexes: {exc}") from exc

    # Schedules

    def _touch_schedule_guard(self, session: ClientSession) -> None:
        # Every schedule write updates this document, so concurrent seed/replace
        # transactions conflict and are retried instead of interleaving
        self._locks.update_one(
            {"_id": _COLS.schedule}, {"$inc": {"version": 1}}, upsert=True, session=session
        )

    def _seed_schedule_if_empty(self, docs: List[Dict[str, Any]]) -> bool:
        def _seed(session: ClientSession) -> bool:
            self._touch_schedule_guard(session)
            if self._schedule.count_documents({}, session=session) > 0:
                return False
            self._schedule.insert_many(docs, session=session)
            return True

        try:
            with self._client.start_session() as session:
                return session.with_transaction(_seed)
        except PyMongoError as exc:
            raise StoreError(f"Schedule seeding failed: {exc}") from exc

    def _find_schedule(self, schedule_type: str) -> List[ScheduleItemEntity]:
        try:
            cursor = self._schedule.find({"type": schedule_type}).sort("order", ASCENDING)
            return [_to_entity(d) for d in cursor]  # type: ignore[misc]
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def replace_schedule(self, schedule_type: str, items: Sequence[ScheduleItemIn]) -> List[ScheduleItemEntity]:
        docs = [self._schedule_document(schedule_type, i, item) for i, item in enumerate(items)]

        def _swap(session: ClientSession) -> None:
            self._touch_schedule_guard(session)
            self._schedule.delete_many({"type": schedule_type}, session=session)
            if docs:
                self._schedule.insert_many(docs, session=session)

        try:
            with self._client.start_session() as session:
                session.with_transaction(_swap)
        except PyMongoError as exc:
            raise TransactionAbortedError(f"Schedule replace aborted: {exc}") from exc
        logger.info("Replaced %s schedule with %d items", schedule_type, len(docs))
        return self._find_schedule(schedule_type)

    # Categories

    def list_categories(self) -> List[CategoryEntity]:
        try:
            return [_to_entity(d) for d in self._categories.find()]  # type: ignore[misc]
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def get_category(self, category_id: str) -> CategoryEntity:
        oid = _object_id(category_id)
        try:
            doc = self._categories.find_one({"_id": oid}) if oid is not None else None
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        if doc is None:
            raise NotFoundError("Category not found")
        return _to_entity(doc)  # type: ignore[return-value]

    def create_category(self, name: str) -> CategoryEntity:
        doc: Dict[str, Any] = {"name": name}
        try:
            self._categories.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateError(f"Category {name!r} already exists") from exc
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return _to_entity(doc)  # type: ignore[return-value]

    def _delete_category_document(self, category_id: str) -> None:
        oid = _object_id(category_id)
        try:
            deleted = self._categories.delete_one({"_id": oid}).deleted_count if oid is not None else 0
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        if not deleted:
            raise NotFoundError("Category not found")

    # Topics

    def list_topics(self) -> List[TopicEntity]:
        try:
            return [_to_entity(d) for d in self._topics.find()]  # type: ignore[misc]
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def create_topic(self, title: str, category: str) -> TopicEntity:
        doc: Dict[str, Any] = {"title": title, "category": category, "status": DEFAULT_TOPIC_STATUS}
        try:
            self._topics.insert_one(doc)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return _to_entity(doc)  # type: ignore[return-value]

    def update_topic_status(self, topic_id: str, status: str) -> TopicEntity:
        doc = self._find_and_set(self._topics, topic_id, {"status": status})
        if doc is None:
            raise NotFoundError("Topic not found")
        return _to_entity(doc)  # type: ignore[return-value]

    def delete_topic(self, topic_id: str) -> None:
        if not self._delete_by_id(self._topics, topic_id):
            raise NotFoundError("Topic not found")

    def delete_topics_by_category(self, category_name: str) -> int:
        try:
            return self._topics.delete_many({"category": category_name}).deleted_count
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    # Checklist

    def list_checklist(self) -> List[ChecklistItemEntity]:
        try:
            return [_to_entity(d) for d in self._checklist.find()]  # type: ignore[misc]
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def update_checklist_completed(self, item_id: str, completed: bool) -> ChecklistItemEntity:
        doc = self._find_and_set(self._checklist, item_id, {"completed": completed})
        if doc is None:
            raise NotFoundError("Checklist item not found")
        return _to_entity(doc)  # type: ignore[return-value]

    def delete_checklist_item(self, item_id: str) -> None:
        if not self._delete_by_id(self._checklist, item_id):
            raise NotFoundError("Checklist item not found")

    def reset_checklist(self) -> List[ChecklistItemEntity]:
        try:
            self._checklist.delete_many({})
            self._checklist.insert_many(initial_checklist())
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        logger.info("Checklist reset to default items")
        return self.list_checklist()

    # Helpers

    def _find_and_set(self, collection, doc_id: str, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        oid = _object_id(doc_id)
        if oid is None:
            return None
        try:
            return collection.find_one_and_update(
                {"_id": oid}, {"$set": fields}, return_document=ReturnDocument.AFTER
            )
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def _delete_by_id(self, collection, doc_id: str) -> bool:
        oid = _object_id(doc_id)
        if oid is None:
            return False
        try:
            return collection.delete_one({"_id": oid}).deleted_count > 0
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._client.close()
        logger.info("MongoDB connection closed")
