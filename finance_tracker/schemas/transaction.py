# finance_tracker/schemas/transaction.py
import math
import datetime as dt
from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, Field

from finance_tracker.core.errors import BadRequestError
from finance_tracker.models.transaction import TransactionType
from finance_tracker.schemas.common import CamelModel, is_blank, parse_calendar_date


def _clean_title(value: Any) -> str:
    if is_blank(value):
        raise BadRequestError("INVALID_TITLE", "Title is required and must be a non-empty string")
    return value.strip()


def _clean_amount(value: Any) -> float:
    invalid = BadRequestError("INVALID_AMOUNT", "Amount is required and must be a positive number")
    # JSON true/false arrive as bool, which is an int subclass
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise invalid
    try:
        amount = float(value)
    except OverflowError:
        # JSON integers are unbounded; past ~1e308 there is no float for them
        raise invalid
    if not math.isfinite(amount) or amount <= 0:
        raise invalid
    return amount


def _clean_type(value: Any) -> TransactionType:
    try:
        return TransactionType(value)
    except ValueError:
        raise BadRequestError("INVALID_TYPE", "Type must be either 'income' or 'expense'")


def _clean_category(value: Any) -> str:
    if is_blank(value):
        raise BadRequestError("INVALID_CATEGORY", "Category is required and must be a non-empty string")
    return value.strip()


def _clean_date(value: Any) -> dt.date:
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise BadRequestError("INVALID_DATE", "Date is required and must be a valid date")
    return parsed


_CLEANERS = {
    "title": _clean_title,
    "amount": _clean_amount,
    "type": _clean_type,
    "category": _clean_category,
    "date": _clean_date,
}


class TransactionCreate(BaseModel):
    title: str = Field(..., description="E.g. Grocery at Costco")
    amount: float
    type: TransactionType
    category: str
    date: dt.date

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TransactionCreate":
        return cls(**{field: clean(payload.get(field)) for field, clean in _CLEANERS.items()})

    def to_values(self) -> Dict[str, Any]:
        values = self.model_dump()
        values["type"] = self.type.value
        return values


class TransactionUpdate(BaseModel):
    title: Optional[str] = None
    amount: Optional[float] = None
    type: Optional[TransactionType] = None
    category: Optional[str] = None
    date: Optional[dt.date] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TransactionUpdate":
        """Validate only the keys present; absent fields stay unset."""
        return cls(**{
            field: clean(payload[field])
            for field, clean in _CLEANERS.items()
            if field in payload
        })

    def to_values(self) -> Dict[str, Any]:
        values = self.model_dump(exclude_unset=True)
        if "type" in values:
            values["type"] = values["type"].value
        return values


class TransactionRead(CamelModel):
    id: int
    user_id: int
    title: str
    amount: float
    type: TransactionType
    category: str
    date: dt.date
    created_at: dt.datetime
    updated_at: dt.datetime


class TransactionDeleted(BaseModel):
    message: str
    transaction: TransactionRead
