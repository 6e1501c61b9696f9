from __future__ import annotations

from typing import Literal, TypedDict

ScheduleType = Literal["weekday", "weekend"]
SCHEDULE_TYPES = ("weekday", "weekend")

DEFAULT_TOPIC_STATUS = "Not Started"


# PUBLIC_INTERFACE
class TopicEntity(TypedDict):
    """
    A study topic as stored in the document store.

    Fields:
    - id: Unique string identifier
    - title: Topic title
    - category: Name of the owning category (joined by value, not by id)
    - status: Free-form study status, "Not Started" on creation
    """

    id: str
    title: str
    category: str
    status: str


# PUBLIC_INTERFACE
class ChecklistItemEntity(TypedDict):
    """A daily checklist entry."""

    id: str
    text: str
    completed: bool


# PUBLIC_INTERFACE
class CategoryEntity(TypedDict):
    """A topic category. `name` is unique across the collection."""

    id: str
    name: str


# PUBLIC_INTERFACE
class ScheduleItemEntity(TypedDict):
    """
    One block of the daily schedule.

    `order` is the 0-based display position within its `type`; the set for a
    type is always replaced wholesale, so orders stay contiguous.
    """

    id: str
    type: str
    time: str
    description: str
    category: str
    isWarning: bool
    isSuccess: bool
    order: int
