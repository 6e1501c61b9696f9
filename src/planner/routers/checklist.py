from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from ..deps import get_repository
from ..repositories import Repository
from ..schemas import ChecklistCompletedUpdate, ChecklistItemOut, MessageOut

router = APIRouter(
    prefix="/api/checklist",
    tags=["checklist"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[ChecklistItemOut],
    summary="List Checklist",
)
def list_checklist(repo: Repository = Depends(get_repository)) -> List[ChecklistItemOut]:
    """Return all checklist items."""
    return [ChecklistItemOut(**c) for c in repo.list_checklist()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "/reset",
    response_model=MessageOut,
    summary="Reset Checklist",
    description="Discard every checklist item and store the default daily tasks, all uncompleted.",
)
def reset_checklist(repo: Repository = Depends(get_repository)) -> MessageOut:
    """Wipe and reseed the checklist."""
    repo.reset_checklist()
    return MessageOut(message="Checklist reset successfully")


# PUBLIC_INTERFACE
@router.patch(
    "/{item_id}",
    response_model=ChecklistItemOut,
    summary="Update Checklist Item",
    responses={
        200: {"description": "Checklist item updated"},
        404: {"description": "Checklist item not found"},
    },
)
def update_checklist_item(
    item_id: str, payload: ChecklistCompletedUpdate, repo: Repository = Depends(get_repository)
) -> ChecklistItemOut:
    """Set the completed flag of a checklist item."""
    return ChecklistItemOut(**repo.update_checklist_completed(item_id, payload.completed))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{item_id}",
    response_model=MessageOut,
    summary="Delete Checklist Item",
    responses={
        200: {"description": "Checklist item deleted"},
        404: {"description": "Checklist item not found"},
    },
)
def delete_checklist_item(item_id: str, repo: Repository = Depends(get_repository)) -> MessageOut:
    """Delete a checklist item by ID."""
    repo.delete_checklist_item(item_id)
    return MessageOut(message="Checklist item deleted")
