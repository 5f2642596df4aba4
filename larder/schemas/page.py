"""Pagination query parameters and the pagination block returned with list endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

TAG_ORDER_FIELDS = ("name", "slug", "meals_count", "drinks_count", "updated_at")


class PaginationParams(BaseModel):
    page: int = Field(default=1, ge=1)
    size: int = Field(default=10, ge=1)
    order_by: str = "updated_at"
    order_dir: Literal["asc", "desc"] = "desc"
    search: str | None = None

    @field_validator("order_by", mode="before")
    @classmethod
    def normalize_order_by(cls, v: object) -> object:
        # Unknown columns fall back to the default ordering.
        if v is None or v not in TAG_ORDER_FIELDS:
            return "updated_at"
        return v

    @field_validator("order_dir", mode="before")
    @classmethod
    def normalize_order_dir(cls, v: object) -> object:
        if v is None or v == "":
            return "desc"
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("search")
    @classmethod
    def normalize_search(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v.strip()


class Pagination(BaseModel):
    total_items: int
    total_pages: int
    current_page: int
    next_page: int | None
    prev_page: int | None
    size: int
