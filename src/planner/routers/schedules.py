from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_repository
from ..models import ScheduleType
from ..repositories import Repository
from ..schemas import ScheduleItemIn, ScheduleItemOut

router = APIRouter(
    prefix="/api/schedules",
    tags=["schedules"],
)


# PUBLIC_INTERFACE
@router.get(
    "/{schedule_type}",
    response_model=List[ScheduleItemOut],
    summary="Get Schedule",
    description=(
        "Return the weekday or weekend schedule ordered by position. "
        "If no schedule item exists at all, the default schedule for both types is stored first."
    ),
    responses={
        200: {"description": "Schedule retrieved"},
        422: {"description": "Unknown schedule type"},
    },
)
def get_schedule(schedule_type: ScheduleType, repo: Repository = Depends(get_repository)) -> List[ScheduleItemOut]:
    """
    Read one schedule type in display order.
    """
    return [ScheduleItemOut(**item) for item in repo.list_schedule(schedule_type)]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{schedule_type}",
    response_model=List[ScheduleItemOut],
    summary="Replace Schedule",
    description=(
        "Atomically replace every item of the schedule type with the submitted list. "
        "Each item's order is its position in the list; any type or order in the body is ignored."
    ),
    responses={
        200: {"description": "Schedule replaced"},
        400: {"description": "Replacement aborted; previous schedule kept"},
        422: {"description": "Validation error"},
    },
)
def replace_schedule(
    schedule_type: ScheduleType,
    payload: List[ScheduleItemIn],
    repo: Repository = Depends(get_repository),
) -> List[ScheduleItemOut]:
    """
    Replace one schedule type wholesale.
    """
    items = repo.replace_schedule(schedule_type, payload)
    return [ScheduleItemOut(**item) for item in items]  # type: ignore[arg-type]
