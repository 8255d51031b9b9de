# finance_tracker/crud/summary.py
from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.schemas.summary import SummaryRead


async def _sum_amounts(
    user_id: int,
    tx_type: TransactionType,
    db: AsyncSession,
    start_date: Optional[date],
    end_date: Optional[date],
) -> float:
    query = select(func.coalesce(func.sum(Transaction.amount), 0.0)).where(
        Transaction.user_id == user_id,
        Transaction.type == tx_type.value,
    )
    if start_date is not None:
        query = query.where(Transaction.date >= start_date)
    if end_date is not None:
        query = query.where(Transaction.date <= end_date)
    result = await db.execute(query)
    return float(result.scalar_one())


async def get_summary_for_user(
    user_id: int,
    db: AsyncSession,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> SummaryRead:
    """Income and expense totals for the user, optionally within [start_date, end_date]."""
    total_income = await _sum_amounts(user_id, TransactionType.income, db, start_date, end_date)
    total_expenses = await _sum_amounts(user_id, TransactionType.expense, db, start_date, end_date)
    return SummaryRead(
        total_income=total_income,
        total_expenses=total_expenses,
        current_balance=total_income - total_expenses,
    )
