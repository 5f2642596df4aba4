"""Request/response schemas for admin tag management."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from larder.schemas.page import Pagination

TAG_NAME_MAX_LEN = 255


class CreateTagsRequest(BaseModel):
    """One name or a list of names; each becomes a tag."""

    names: str | list[str]

    @field_validator("names")
    @classmethod
    def validate_names(cls, v: str | list[str]) -> list[str]:
        names = [v] if isinstance(v, str) else v
        if not names:
            raise ValueError("Oops, tag name can't be empty")
        cleaned = [name.strip() for name in names]
        if any(not name for name in cleaned):
            raise ValueError("Oops, tag name can't be empty")
        if any(len(name) > TAG_NAME_MAX_LEN for name in cleaned):
            raise ValueError("Oops, tag name must be at most 255 characters long")
        return cleaned


class UpdateTagRequest(BaseModel):
    name: str = Field(..., max_length=TAG_NAME_MAX_LEN)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Oops, tag name can't be empty")
        return v.strip()


class DeleteTagsRequest(BaseModel):
    ids: list[str]

    @field_validator("ids")
    @classmethod
    def validate_ids(cls, v: list[str]) -> list[str]:
        if not v or any(not tag_id.strip() for tag_id in v):
            raise ValueError("Oops, tag ID can't be empty")
        return [tag_id.strip() for tag_id in v]


class UserRef(BaseModel):
    """Creator or last updater of a tag."""

    id: str
    name: str


class TagSummary(BaseModel):
    """Tag as returned right after creation."""

    id: str
    name: str
    slug: str
    creator: UserRef | None
    updater: UserRef | None


class TagOut(TagSummary):
    meals_count: int
    drinks_count: int
    created_at: datetime
    updated_at: datetime


class TagsPage(BaseModel):
    tags: list[TagOut]
    pagination: Pagination


class TagsData(BaseModel):
    tags: list[TagSummary]


class TagData(BaseModel):
    tag: TagOut
