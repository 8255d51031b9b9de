# finance_tracker/api/routes/categories.py
import logging
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from finance_tracker.schemas.category import (
    CategoryCreate,
    CategoryDeleted,
    CategoryRead,
    CategoryUpdate,
    clean_new_color,
    clean_new_name,
)
from finance_tracker.schemas.common import reject_owner_id
from finance_tracker.crud.category import (
    category_name_taken,
    create_category_for_user,
    get_categories_for_user,
    get_category_by_id,
    update_category,
    delete_category,
)
from finance_tracker.core.database import get_async_session
from finance_tracker.core.errors import ConflictError, NotFoundError
from finance_tracker.core.security import TokenIdentity
from finance_tracker.api.deps import clamp_limit, get_current_identity, parse_resource_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/categories", tags=["categories"])


def _not_found(category_id: int, user_id: int) -> NotFoundError:
    logger.info(f"Category {category_id} not found for user {user_id}")
    return NotFoundError("CATEGORY_NOT_FOUND", "Category not found")


@router.get("", response_model=List[CategoryRead])
async def read_categories(
    limit: int = 10,
    offset: int = 0,
    search: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Newest first; ``search`` is a case-insensitive substring match on the name."""
    return await get_categories_for_user(
        identity.user_id,
        db,
        limit=clamp_limit(limit),
        offset=max(0, offset),
        search=search,
    )

@router.post("", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    reject_owner_id(payload)
    cat_in = CategoryCreate.from_payload(payload)

    if await category_name_taken(cat_in.name, identity.user_id, db):
        raise ConflictError("DUPLICATE_CATEGORY_NAME", "Category name already exists")

    try:
        return await create_category_for_user(identity.user_id, cat_in, db)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("DUPLICATE_CATEGORY_NAME", "Category name already exists")

@router.get("/{category_id}", response_model=CategoryRead)
async def read_category(
    category_id: str,
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    cat_id = parse_resource_id(category_id)
    category = await get_category_by_id(cat_id, identity.user_id, db)
    if not category:
        raise _not_found(cat_id, identity.user_id)
    return category

@router.patch("/{category_id}", response_model=CategoryRead)
async def update_category_endpoint(
    category_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    cat_id = parse_resource_id(category_id)
    reject_owner_id(payload)

    if not await get_category_by_id(cat_id, identity.user_id, db):
        raise _not_found(cat_id, identity.user_id)

    # Name, then its uniqueness, then colour
    fields = {}
    if "name" in payload:
        fields["name"] = clean_new_name(payload["name"])
        if await category_name_taken(fields["name"], identity.user_id, db, exclude_id=cat_id):
            raise ConflictError("DUPLICATE_NAME", "Category name already exists")
    if "color" in payload:
        fields["color"] = clean_new_color(payload["color"])
    cat_in = CategoryUpdate(**fields)

    try:
        category = await update_category(cat_id, identity.user_id, cat_in, db)
    except IntegrityError:
        await db.rollback()
        raise ConflictError("DUPLICATE_NAME", "Category name already exists")
    if category is None:
        # Deleted between the existence check and the update
        raise _not_found(cat_id, identity.user_id)
    return category

@router.delete("/{category_id}", response_model=CategoryDeleted)
async def delete_category_endpoint(
    category_id: str,
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """Transactions that use this category's name are left as they are."""
    cat_id = parse_resource_id(category_id)
    if not await get_category_by_id(cat_id, identity.user_id, db):
        raise _not_found(cat_id, identity.user_id)

    category = await delete_category(cat_id, identity.user_id, db)
    if category is None:
        raise _not_found(cat_id, identity.user_id)
    return CategoryDeleted(
        message="Category deleted successfully",
        deleted_category=CategoryRead.model_validate(category),
    )
