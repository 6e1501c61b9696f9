from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ..deps import get_repository
from ..repositories import Repository
from ..schemas import MessageOut, TopicCreate, TopicOut, TopicStatusUpdate

router = APIRouter(
    prefix="/api/topics",
    tags=["topics"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TopicOut],
    summary="List Topics",
)
def list_topics(repo: Repository = Depends(get_repository)) -> List[TopicOut]:
    """Return all topics."""
    return [TopicOut(**t) for t in repo.list_topics()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TopicOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Topic",
    description="Create a topic. New topics always start with status 'Not Started'.",
    responses={
        201: {"description": "Topic created"},
        422: {"description": "Validation error"},
    },
)
def create_topic(payload: TopicCreate, repo: Repository = Depends(get_repository)) -> TopicOut:
    """Create a topic."""
    return TopicOut(**repo.create_topic(payload.title, payload.category))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.patch(
    "/{topic_id}",
    response_model=TopicOut,
    summary="Update Topic Status",
    responses={
        200: {"description": "Topic updated"},
        404: {"description": "Topic not found"},
    },
)
def update_topic_status(
    topic_id: str, payload: TopicStatusUpdate, repo: Repository = Depends(get_repository)
) -> TopicOut:
    """Set the study status of a topic."""
    return TopicOut(**repo.update_topic_status(topic_id, payload.status))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{topic_id}",
    response_model=MessageOut,
    summary="Delete Topic",
    responses={
        200: {"description": "Topic deleted"},
        404: {"description": "Topic not found"},
    },
)
def delete_topic(topic_id: str, repo: Repository = Depends(get_repository)) -> MessageOut:
    """Delete a topic by ID."""
    repo.delete_topic(topic_id)
    return MessageOut(message="Topic deleted successfully")
