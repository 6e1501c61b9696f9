from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status

from ..deps import get_repository
from ..repositories import Repository
from ..schemas import CategoryCreate, CategoryOut, MessageOut

router = APIRouter(
    prefix="/api/categories",
    tags=["categories"],
)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[CategoryOut],
    summary="List Categories",
)
def list_categories(repo: Repository = Depends(get_repository)) -> List[CategoryOut]:
    """Return all categories."""
    return [CategoryOut(**c) for c in repo.list_categories()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=CategoryOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Category",
    responses={
        201: {"description": "Category created"},
        400: {"description": "A category with this name already exists"},
        422: {"description": "Validation error"},
    },
)
def create_category(payload: CategoryCreate, repo: Repository = Depends(get_repository)) -> CategoryOut:
    """Create a category with a unique name."""
    return CategoryOut(**repo.create_category(payload.name))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{category_id}",
    response_model=MessageOut,
    summary="Delete Category",
    description="Delete a category together with every topic filed under its name.",
    responses={
        200: {"description": "Category and its topics deleted"},
        404: {"description": "Category not found"},
    },
)
def delete_category(category_id: str, repo: Repository = Depends(get_repository)) -> MessageOut:
    """
    Cascade delete: topics first, then the category.
    """
    repo.delete_category(category_id)
    return MessageOut(message="Category and associated topics deleted")
