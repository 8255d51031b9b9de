# finance_tracker/crud/category.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import delete, desc, update
from finance_tracker.models.category import Category
from finance_tracker.models.user import utcnow
from typing import List, Optional
from finance_tracker.schemas.category import CategoryCreate, CategoryUpdate

async def get_categories_for_user(
    user_id: int,
    db: AsyncSession,
    limit: int = 10,
    offset: int = 0,
    search: Optional[str] = None,
) -> List[Category]:
    query = select(Category).where(Category.user_id == user_id)
    if search:
        query = query.where(Category.name.icontains(search, autoescape=True))
    query = (
        query.order_by(desc(Category.created_at), desc(Category.id))
        .limit(limit)
        .offset(offset)
    )
    result = await db.execute(query)
    return list(result.scalars().all())

async def get_category_by_id(category_id: int, user_id: int, db: AsyncSession) -> Optional[Category]:
    result = await db.execute(
        select(Category).where(Category.id == category_id, Category.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def category_name_taken(
    name: str,
    user_id: int,
    db: AsyncSession,
    exclude_id: Optional[int] = None,
) -> bool:
    """Exact-match lookup of ``name`` among the user's categories."""
    query = select(Category.id).where(Category.user_id == user_id, Category.name == name)
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.first() is not None

async def create_category_for_user(user_id: int, cat_in: CategoryCreate, db: AsyncSession) -> Category:
    now = utcnow()
    new_cat = Category(**cat_in.model_dump(), user_id=user_id, created_at=now, updated_at=now)
    db.add(new_cat)
    await db.commit()
    await db.refresh(new_cat)
    return new_cat

async def update_category(
    category_id: int,
    user_id: int,
    cat_in: CategoryUpdate,
    db: AsyncSession,
) -> Optional[Category]:
    """
    Apply the fields set on ``cat_in`` and refresh ``updated_at``.

    The statement is keyed on both id and owner, so a row deleted (or never
    owned) since the caller's existence check yields None instead of a write.
    """
    values = cat_in.model_dump(exclude_unset=True)
    values["updated_at"] = utcnow()
    result = await db.execute(
        update(Category)
        .where(Category.id == category_id, Category.user_id == user_id)
        .values(**values)
        .returning(Category)
        .execution_options(synchronize_session="fetch", populate_existing=True)
    )
    category = result.scalar_one_or_none()
    await db.commit()
    return category

async def delete_category(category_id: int, user_id: int, db: AsyncSession) -> Optional[Category]:
    """Delete the owned row and return its last state, or None if it was already gone."""
    result = await db.execute(
        delete(Category)
        .where(Category.id == category_id, Category.user_id == user_id)
        .returning(Category)
        .execution_options(synchronize_session="fetch")
    )
    category = result.scalar_one_or_none()
    await db.commit()
    return category
