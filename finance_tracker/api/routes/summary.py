# finance_tracker/api/routes/summary.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from finance_tracker.api.deps import get_current_identity
from finance_tracker.core.database import get_async_session
from finance_tracker.core.security import TokenIdentity
from finance_tracker.crud.summary import get_summary_for_user
from finance_tracker.schemas.common import parse_date_bound
from finance_tracker.schemas.summary import SummaryRead

router = APIRouter(prefix="/summary", tags=["summary"])

@router.get("", response_model=SummaryRead)
async def get_summary(
    start_date: Optional[str] = Query(None, alias="startDate", description="Inclusive, YYYY-MM-DD"),
    end_date: Optional[str] = Query(None, alias="endDate", description="Inclusive, YYYY-MM-DD"),
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """
    Totals of the caller's income and expenses, optionally bounded by date:
    - totalIncome / totalExpenses: 0 when nothing matches
    - currentBalance: totalIncome - totalExpenses
    """
    return await get_summary_for_user(
        identity.user_id,
        db,
        start_date=parse_date_bound(start_date, "startDate"),
        end_date=parse_date_bound(end_date, "endDate"),
    )
