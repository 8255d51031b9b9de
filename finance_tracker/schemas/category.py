# finance_tracker/schemas/category.py
from datetime import datetime
from typing import Any, Mapping, Optional
from pydantic import BaseModel

from finance_tracker.core.errors import BadRequestError
from finance_tracker.schemas.common import CamelModel, is_blank, is_hex_color


class CategoryCreate(BaseModel):
    name: str
    color: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CategoryCreate":
        name = payload.get("name")
        color = payload.get("color")

        if is_blank(name):
            raise BadRequestError("MISSING_NAME", "Name is required and cannot be empty")
        if not isinstance(color, str) or color == "":
            raise BadRequestError("MISSING_COLOR", "Color is required")
        if not is_hex_color(color):
            raise BadRequestError("INVALID_COLOR_FORMAT", "Color must be in hex format (#rrggbb)")

        return cls(name=name.strip(), color=color)


def clean_new_name(value: Any) -> str:
    if is_blank(value):
        raise BadRequestError("INVALID_NAME", "Category name is required and must be a non-empty string")
    return value.strip()


def clean_new_color(value: Any) -> str:
    if not is_hex_color(value):
        raise BadRequestError("INVALID_COLOR", "Color must be a valid hex format #rrggbb")
    return value


class CategoryUpdate(BaseModel):
    name: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CategoryUpdate":
        """Only keys present in ``payload`` end up set on the model."""
        fields = {}
        if "name" in payload:
            fields["name"] = clean_new_name(payload["name"])
        if "color" in payload:
            fields["color"] = clean_new_color(payload["color"])
        return cls(**fields)


class CategoryRead(CamelModel):
    id: int
    user_id: int
    name: str
    color: str
    created_at: datetime
    updated_at: datetime


class CategoryDeleted(CamelModel):
    message: str
    deleted_category: CategoryRead
