# finance_tracker/api/routes/transactions.py
import logging
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from finance_tracker.schemas.transaction import (
    TransactionCreate,
    TransactionDeleted,
    TransactionRead,
    TransactionUpdate,
)
from finance_tracker.schemas.common import parse_date_bound, reject_owner_id
from finance_tracker.crud.transaction import (
    SortOrder,
    TransactionFilters,
    TransactionSortField,
    create_transaction_for_user,
    get_transactions_for_user,
    get_transaction_by_id,
    update_transaction,
    delete_transaction,
)
from finance_tracker.core.database import get_async_session
from finance_tracker.core.errors import NotFoundError
from finance_tracker.core.security import TokenIdentity
from finance_tracker.models.transaction import TransactionType
from finance_tracker.api.deps import clamp_limit, get_current_identity, parse_resource_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["transactions"])


def _not_found(transaction_id: int, user_id: int) -> NotFoundError:
    logger.info(f"Transaction {transaction_id} not found for user {user_id}")
    return NotFoundError("TRANSACTION_NOT_FOUND", "Transaction not found")


def _enum_or_default(enum_cls, value: Optional[str], default=None):
    """Unknown filter/sort values are ignored rather than rejected."""
    try:
        return enum_cls(value)
    except ValueError:
        return default


@router.get("", response_model=List[TransactionRead])
async def read_transactions(
    limit: int = 10,
    offset: int = 0,
    search: Optional[str] = None,
    type: Optional[str] = None,
    category: Optional[str] = None,
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    sort: Optional[str] = None,
    order: Optional[str] = None,
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    filters = TransactionFilters(
        search=search,
        type=_enum_or_default(TransactionType, type),
        category=category,
        start_date=parse_date_bound(start_date, "startDate"),
        end_date=parse_date_bound(end_date, "endDate"),
        sort=_enum_or_default(TransactionSortField, sort, TransactionSortField.date),
        order=SortOrder.asc if order == SortOrder.asc.value else SortOrder.desc,
    )
    return await get_transactions_for_user(
        identity.user_id,
        db,
        filters=filters,
        limit=clamp_limit(limit),
        offset=max(0, offset),
    )

@router.post("", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    """The category is free text and is not checked against the user's categories."""
    reject_owner_id(payload)
    tx_in = TransactionCreate.from_payload(payload)
    return await create_transaction_for_user(identity.user_id, tx_in, db)

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    tx_id = parse_resource_id(transaction_id)
    tx = await get_transaction_by_id(tx_id, identity.user_id, db)
    if not tx:
        raise _not_found(tx_id, identity.user_id)
    return tx

@router.patch("/{transaction_id}", response_model=TransactionRead)
async def update_transaction_endpoint(
    transaction_id: str,
    payload: Dict[str, Any] = Body(...),
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    tx_id = parse_resource_id(transaction_id)
    reject_owner_id(payload)
    tx_in = TransactionUpdate.from_payload(payload)

    if not await get_transaction_by_id(tx_id, identity.user_id, db):
        raise _not_found(tx_id, identity.user_id)

    tx = await update_transaction(tx_id, identity.user_id, tx_in, db)
    if tx is None:
        raise _not_found(tx_id, identity.user_id)
    return tx

@router.delete("/{transaction_id}", response_model=TransactionDeleted)
async def delete_transaction_endpoint(
    transaction_id: str,
    db: AsyncSession = Depends(get_async_session),
    identity: TokenIdentity = Depends(get_current_identity),
):
    tx_id = parse_resource_id(transaction_id)
    if not await get_transaction_by_id(tx_id, identity.user_id, db):
        raise _not_found(tx_id, identity.user_id)

    tx = await delete_transaction(tx_id, identity.user_id, db)
    if tx is None:
        raise _not_found(tx_id, identity.user_id)
    return TransactionDeleted(
        message="Transaction deleted successfully",
        transaction=TransactionRead.model_validate(tx),
    )
