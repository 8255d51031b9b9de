# finance_tracker/crud/user.py
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from finance_tracker.core.security import get_password_hash
from finance_tracker.models.user import User, utcnow
from typing import Optional

async def get_user_by_email(email: str, db: AsyncSession) -> Optional[User]:
    """``email`` must already be normalized (trimmed, lower-cased)."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()

async def get_user_by_id(user_id: int, db: AsyncSession) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()

async def create_user(name: str, email: str, password: str, db: AsyncSession) -> User:
    now = utcnow()
    user = User(
        name=name,
        email=email,
        hashed_password=await run_in_threadpool(get_password_hash, password),
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
