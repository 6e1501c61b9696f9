import os

import pytest
from fastapi.testclient import TestClient

# Ensure we default to memory backend for tests to avoid needing a MongoDB server
os.environ.setdefault("PERSISTENCE_BACKEND", "memory")

from src.planner.main import create_app  # noqa: E402
from src.planner.repositories import InMemoryRepository  # noqa: E402


@pytest.fixture
def repo():
    """A fresh, empty in-memory store for each test."""
    return InMemoryRepository()


@pytest.fixture
def client(repo):
    """Client for an app whose startup has run against `repo`."""
    with TestClient(create_app(repository=repo)) as c:
        yield c
