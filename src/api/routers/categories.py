"""Wishlist category endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.base import SuccessResponse
from schemas.category import (
    CategoryCreate,
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdate,
)
from schemas.validators import validate_category_fields
from services import category_service
from services.exceptions import LastCategoryError

router = APIRouter(prefix="/api/wishlist/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[CategoryResponse]:
    """List the user's categories, oldest first."""
    categories = await category_service.get_user_categories(db, current_user.id)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreateRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CategoryResponse:
    """Create a category. The name is trimmed and must not be blank or too long."""
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name is required",
        )
    try:
        validate_category_fields(name, data.color)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    category = await category_service.create_category(
        db, current_user.id, CategoryCreate(name=name, color=data.color),
    )
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CategoryResponse:
    """
    Rename or recolor a category.

    Only string values are applied. Returns 400 for a blank name or when nothing
    applicable was sent, 404 if the category does not exist for this user.
    """
    updates: dict[str, str] = {}
    if data.name is not None:
        name = data.name.strip()
        if not name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name cannot be empty",
            )
        updates["name"] = name
    if data.color is not None:
        updates["color"] = data.color

    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields to update",
        )

    category = await category_service.update_category(
        db, current_user.id, category_id, CategoryUpdate(**updates),
    )
    if category is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", response_model=SuccessResponse)
async def delete_category(
    category_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """
    Delete a category, moving its items to the user's oldest other category.

    Returns 400 when it is the user's last category, 404 if it does not exist.
    """
    try:
        deleted = await category_service.delete_category(db, current_user.id, category_id)
    except LastCategoryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return SuccessResponse()
