# finance_tracker/crud/transaction.py
import enum
from dataclasses import dataclass
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import asc, delete, desc, update
from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.models.user import utcnow
from typing import List, Optional
from finance_tracker.schemas.transaction import TransactionCreate, TransactionUpdate


class TransactionSortField(str, enum.Enum):
    date = "date"
    amount = "amount"
    title = "title"
    created_at = "createdAt"


class SortOrder(str, enum.Enum):
    asc = "asc"
    desc = "desc"


# Closed set of sortable columns; client input never names a column directly
_SORT_COLUMNS = {
    TransactionSortField.date: Transaction.date,
    TransactionSortField.amount: Transaction.amount,
    TransactionSortField.title: Transaction.title,
    TransactionSortField.created_at: Transaction.created_at,
}


@dataclass
class TransactionFilters:
    search: Optional[str] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    sort: TransactionSortField = TransactionSortField.date
    order: SortOrder = SortOrder.desc


def build_transactions_query(user_id: int, filters: TransactionFilters, limit: int, offset: int):
    query = select(Transaction).where(Transaction.user_id == user_id)

    if filters.search:
        query = query.where(Transaction.title.icontains(filters.search, autoescape=True))
    if filters.type is not None:
        query = query.where(Transaction.type == filters.type.value)
    if filters.category:
        query = query.where(Transaction.category == filters.category)
    if filters.start_date is not None:
        query = query.where(Transaction.date >= filters.start_date)
    if filters.end_date is not None:
        query = query.where(Transaction.date <= filters.end_date)

    direction = asc if filters.order == SortOrder.asc else desc
    return (
        query.order_by(direction(_SORT_COLUMNS[filters.sort]), direction(Transaction.id))
        .limit(limit)
        .offset(offset)
    )

async def get_transactions_for_user(
    user_id: int,
    db: AsyncSession,
    filters: Optional[TransactionFilters] = None,
    limit: int = 10,
    offset: int = 0,
) -> List[Transaction]:
    query = build_transactions_query(user_id, filters or TransactionFilters(), limit, offset)
    result = await db.execute(query)
    return list(result.scalars().all())

async def get_transaction_by_id(transaction_id: int, user_id: int, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()

async def create_transaction_for_user(user_id: int, tx_in: TransactionCreate, db: AsyncSession) -> Transaction:
    now = utcnow()
    new_tx = Transaction(**tx_in.to_values(), user_id=user_id, created_at=now, updated_at=now)
    db.add(new_tx)
    await db.commit()
    await db.refresh(new_tx)
    return new_tx

async def update_transaction(
    transaction_id: int,
    user_id: int,
    tx_in: TransactionUpdate,
    db: AsyncSession,
) -> Optional[Transaction]:
    """Owner-conditional partial update; None when the row is gone or not owned."""
    values = tx_in.to_values()
    values["updated_at"] = utcnow()
    result = await db.execute(
        update(Transaction)
        .where(Transaction.id == transaction_id, Transaction.user_id == user_id)
        .values(**values)
        .returning(Transaction)
        .execution_options(synchronize_session="fetch", populate_existing=True)
    )
    tx = result.scalar_one_or_none()
    await db.commit()
    return tx

async def delete_transaction(transaction_id: int, user_id: int, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        delete(Transaction)
        .where(Transaction.id == transaction_id, Transaction.user_id == user_id)
        .returning(Transaction)
        .execution_options(synchronize_session="fetch")
    )
    tx = result.scalar_one_or_none()
    await db.commit()
    return tx
