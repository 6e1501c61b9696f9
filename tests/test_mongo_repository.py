from unittest.mock import MagicMock

import pytest
from pymongo.errors import DuplicateKeyError, PyMongoError

from src.planner.db import MongoRepository
from src.planner.repositories import DuplicateError, NotFoundError, StoreError, TransactionAbortedError
from src.planner.schemas import ScheduleItemIn


@pytest.fixture
def mongo():
    """A MongoRepository wired to mocked collections, one mock per collection name."""
    client = MagicMock()
    db = client.get_default_database.return_value
    db.name = "studyDashboard"
    collections = {}
    db.__getitem__.side_effect = lambda name: collections.setdefault(name, MagicMock(name=name))

    session = client.start_session.return_value.__enter__.return_value
    session.with_transaction.side_effect = lambda callback: callback(session)

    repo = MongoRepository("mongodb://localhost:27017/studyDashboard", client=client)
    return repo, client, collections, session


def item(description):
    return ScheduleItemIn(time="9:00", description=description, category="dev")


class TestMongoRepository:
    def test_indexes_created(self, mongo):
        _, client, collections, _ = mongo
        client.get_default_database.assert_called_once_with(default="studyDashboard")
        collections["categories"].create_index.assert_called_once()
        assert collections["categories"].create_index.call_args.kwargs == {"unique": True}

    def test_replace_runs_in_one_transaction(self, mongo):
        repo, _, collections, session = mongo
        schedule = collections["scheduleitems"]

        repo.replace_schedule("weekend", [item("A"), item("B")])

        session.with_transaction.assert_called_once()
        schedule.delete_many.assert_called_once_with({"type": "weekend"}, session=session)
        docs = schedule.insert_many.call_args.args[0]
        assert schedule.insert_many.call_args.kwargs == {"session": session}
        assert [(d["type"], d["description"], d["order"]) for d in docs] == [
            ("weekend", "A", 0),
            ("weekend", "B", 1),
        ]

    def test_replace_abort_raises(self, mongo):
        repo, _, _, session = mongo
        session.with_transaction.side_effect = PyMongoError("write conflict")
        with pytest.raises(TransactionAbortedError):
            repo.replace_schedule("weekday", [item("A")])

    def test_seed_only_when_collection_empty(self, mongo):
        repo, _, collections, session = mongo
        schedule = collections["scheduleitems"]

        schedule.count_documents.return_value = 3
        assert repo.ensure_schedule_seeded() is False
        schedule.insert_many.assert_not_called()

        schedule.count_documents.return_value = 0
        assert repo.ensure_schedule_seeded() is True
        schedule.count_documents.assert_called_with({}, session=session)
        assert len(schedule.insert_many.call_args.args[0]) == 16
        assert schedule.insert_many.call_args.kwargs == {"session": session}

    def test_seed_and_replace_touch_the_same_guard(self, mongo):
        repo, _, collections, session = mongo
        locks = collections["locks"]
        collections["scheduleitems"].count_documents.return_value = 0

        repo.ensure_schedule_seeded()
        repo.replace_schedule("weekday", [item("A")])

        assert locks.update_one.call_count == 2
        for call in locks.update_one.call_args_list:
            assert call.args[0] == {"_id": "scheduleitems"}
            assert call.kwargs == {"upsert": True, "session": session}

    def test_seed_failure_is_store_error(self, mongo):
        repo, _, _, session = mongo
        session.with_transaction.side_effect = PyMongoError("no primary")
        with pytest.raises(StoreError):
            repo.ensure_schedule_seeded()
        assert repo._seed_checked is False

    def test_duplicate_category(self, mongo):
        repo, _, collections, _ = mongo
        collections["categories"].insert_one.side_effect = DuplicateKeyError("dup")
        with pytest.raises(DuplicateError):
            repo.create_category("dsa")

    def test_invalid_id_is_not_found(self, mongo):
        repo, _, collections, _ = mongo
        with pytest.raises(NotFoundError):
            repo.delete_topic("not-an-object-id")
        collections["topics"].delete_one.assert_not_called()

        with pytest.raises(NotFoundError):
            repo.update_checklist_completed("zzz", True)
        collections["checklistitems"].find_one_and_update.assert_not_called()

    def test_missing_topic_update_is_not_found(self, mongo):
        repo, _, collections, _ = mongo
        collections["topics"].find_one_and_update.return_value = None
        with pytest.raises(NotFoundError):
            repo.update_topic_status("65a1b2c3d4e5f60718293a4b", "Done")

    def test_close_is_idempotent(self, mongo):
        repo, client, _, _ = mongo
        repo.close()
        repo.close()
        client.close.assert_called_once()
