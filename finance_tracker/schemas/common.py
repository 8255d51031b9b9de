# finance_tracker/schemas/common.py
import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from finance_tracker.core.errors import BadRequestError

# Keys a client might use to claim ownership of a row
OWNER_ID_KEYS = ("userId", "user_id")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
HEX_COLOR_PATTERN = re.compile(r"^#[0-9A-Fa-f]{6}$")


class CamelModel(BaseModel):
    """Response models: snake_case attributes, camelCase JSON."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def reject_owner_id(payload: Mapping[str, Any]) -> None:
    if any(key in payload for key in OWNER_ID_KEYS):
        raise BadRequestError("USER_ID_NOT_ALLOWED", "User ID cannot be provided in request body")


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def is_valid_email(value: Any) -> bool:
    return isinstance(value, str) and EMAIL_PATTERN.match(value.strip()) is not None


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and HEX_COLOR_PATTERN.match(value) is not None


def parse_calendar_date(value: Any) -> Optional[date]:
    """Accept "YYYY-MM-DD" or a full ISO 8601 timestamp; anything else is None."""
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_date_bound(value: Optional[str], name: str) -> Optional[date]:
    """Optional query-string date bound; present but unparseable is a client error."""
    if value is None or value == "":
        return None
    parsed = parse_calendar_date(value)
    if parsed is None:
        raise BadRequestError("INVALID_DATE", f"{name} must be a valid date (YYYY-MM-DD)")
    return parsed


class MessageResponse(BaseModel):
    message: str
