"""Admin tag management: paginated listing, batch create, rename, delete."""

import logging
from datetime import UTC, datetime, timedelta

from sqlalchemy.orm import Session

from larder.core.errors import NotFoundError
from larder.models import Tag
from larder.repositories import tags as tag_store
from larder.repositories.tags import TagRecord
from larder.schemas.page import PaginationParams
from larder.schemas.tag import (
    CreateTagsRequest,
    DeleteTagsRequest,
    TagOut,
    TagsPage,
    TagSummary,
    UpdateTagRequest,
    UserRef,
)
from larder.utils.pagination import page_offset, paginate
from larder.utils.strings import slugify, unique_slug

logger = logging.getLogger(__name__)

TAG_NOT_FOUND_MESSAGE = "Oops, tag not found"
# Leaves room in the 255-character slug column for a "-N" suffix.
SLUG_BASE_MAX_LEN = 245


def _user_ref(ref) -> UserRef | None:
    return UserRef(id=ref.id, name=ref.name) if ref is not None else None


def to_tag_out(record: TagRecord) -> TagOut:
    return TagOut(
        id=record.id,
        name=record.name,
        slug=record.slug,
        meals_count=record.meals_count,
        drinks_count=record.drinks_count,
        created_at=record.created_at,
        updated_at=record.updated_at,
        creator=_user_ref(record.creator),
        updater=_user_ref(record.updater),
    )


def to_tag_summary(record: TagRecord) -> TagSummary:
    return TagSummary(
        id=record.id,
        name=record.name,
        slug=record.slug,
        creator=_user_ref(record.creator),
        updater=_user_ref(record.updater),
    )


def list_tags(db: Session, params: PaginationParams) -> TagsPage:
    records = tag_store.list_tags(
        db,
        offset=page_offset(params.page, params.size),
        limit=params.size,
        order_by=params.order_by,
        order_dir=params.order_dir,
        search=params.search,
    )
    total = tag_store.count_tags(db, params.search)
    return TagsPage(
        tags=[to_tag_out(record) for record in records],
        pagination=paginate(total, params.page, params.size),
    )


def create_tags(db: Session, user_id: str, body: CreateTagsRequest) -> list[TagSummary]:
    """
    Create one tag per name in a single transaction. Slugs that collide with existing
    tags, or with earlier names in the same batch, get the smallest free -N suffix.
    """
    now = datetime.now(UTC)
    assigned: set[str] = set()
    created: list[Tag] = []
    try:
        for i, name in enumerate(body.names):
            base = slugify(name, SLUG_BASE_MAX_LEN)
            slug = unique_slug(base, tag_store.slugs_with_prefix(db, base) | assigned)
            assigned.add(slug)
            # Offset timestamps so a batch keeps its input order under updated_at sorting.
            stamp = now + timedelta(milliseconds=i)
            tag = Tag(
                name=name,
                slug=slug,
                created_by=user_id,
                updated_by=user_id,
                created_at=stamp,
                updated_at=stamp,
            )
            db.add(tag)
            created.append(tag)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info("Created %s tag(s) by user_id=%s", len(created), user_id)
    records = [tag_store.get_tag_record(db, tag.id) for tag in created]
    return [to_tag_summary(record) for record in records if record is not None]


def find_tag_id(db: Session, tag_id: str) -> str:
    """Return tag_id if the tag exists; a missing tag is caller input error (400)."""
    tag = tag_store.get_tag(db, tag_id.strip()) if tag_id.strip() else None
    if tag is None:
        raise NotFoundError(TAG_NOT_FOUND_MESSAGE, status_code=400)
    return tag.id


def get_tag(db: Session, tag_id: str) -> TagOut:
    record = tag_store.get_tag_record(db, tag_id)
    if record is None:
        raise NotFoundError(TAG_NOT_FOUND_MESSAGE, status_code=400)
    return to_tag_out(record)


def update_tag(db: Session, tag_id: str, user_id: str, body: UpdateTagRequest) -> TagOut:
    """Rename a tag and recompute its slug, ignoring the tag's own current slug."""
    tag = tag_store.get_tag(db, tag_id)
    if tag is None:
        raise NotFoundError(TAG_NOT_FOUND_MESSAGE, status_code=400)
    base = slugify(body.name, SLUG_BASE_MAX_LEN)
    try:
        tag.name = body.name
        tag.slug = unique_slug(base, tag_store.slugs_with_prefix(db, base, exclude_id=tag.id))
        tag.updated_by = user_id
        tag.updated_at = datetime.now(UTC)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Updated tag_id=%s by user_id=%s", tag_id, user_id)
    return get_tag(db, tag_id)


def delete_tag(db: Session, tag_id: str) -> None:
    try:
        tag_store.delete_tags(db, [tag_id])
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted tag_id=%s", tag_id)


def delete_tags(db: Session, body: DeleteTagsRequest) -> int:
    """Delete every listed tag that exists; unknown ids are ignored. Returns the count."""
    try:
        deleted = tag_store.delete_tags(db, body.ids)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Batch deleted %s tag(s)", deleted)
    return deleted
