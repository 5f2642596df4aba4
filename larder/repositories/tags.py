"""Tag queries: filtered/ordered pages with meal and drink counts, slug lookups, deletes."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, asc, delete, desc, func, or_, select
from sqlalchemy.orm import Session, aliased

from larder.models import DrinkTag, MealTag, Tag, User


@dataclass(frozen=True)
class UserRefRecord:
    id: str
    name: str


@dataclass(frozen=True)
class TagRecord:
    id: str
    name: str
    slug: str
    meals_count: int
    drinks_count: int
    created_at: datetime
    updated_at: datetime
    creator: UserRefRecord | None
    updater: UserRefRecord | None


_meals_count = (
    select(func.count(MealTag.meal_id))
    .where(MealTag.tag_id == Tag.id)
    .correlate(Tag)
    .scalar_subquery()
    .label("meals_count")
)
_drinks_count = (
    select(func.count(DrinkTag.drink_id))
    .where(DrinkTag.tag_id == Tag.id)
    .correlate(Tag)
    .scalar_subquery()
    .label("drinks_count")
)

_ORDER_COLUMNS = {
    "name": Tag.name,
    "slug": Tag.slug,
    "meals_count": _meals_count,
    "drinks_count": _drinks_count,
    "updated_at": Tag.updated_at,
}


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _search_filter(search: str | None):
    """Case-insensitive substring match on name or slug; % and _ match literally."""
    if not search:
        return None
    pattern = f"%{_escape_like(search)}%"
    return or_(
        Tag.name.ilike(pattern, escape="\\"),
        Tag.slug.ilike(pattern, escape="\\"),
    )


def _tag_select() -> Select:
    creator = aliased(User)
    updater = aliased(User)
    return (
        select(
            Tag,
            _meals_count,
            _drinks_count,
            creator.id,
            creator.name,
            updater.id,
            updater.name,
        )
        .outerjoin(creator, creator.id == Tag.created_by)
        .outerjoin(updater, updater.id == Tag.updated_by)
    )


def _to_record(row) -> TagRecord:
    tag, meals_count, drinks_count, c_id, c_name, u_id, u_name = row
    return TagRecord(
        id=tag.id,
        name=tag.name,
        slug=tag.slug,
        meals_count=meals_count or 0,
        drinks_count=drinks_count or 0,
        created_at=tag.created_at,
        updated_at=tag.updated_at,
        creator=UserRefRecord(id=c_id, name=c_name) if c_id else None,
        updater=UserRefRecord(id=u_id, name=u_name) if u_id else None,
    )


def list_tags(
    db: Session,
    offset: int,
    limit: int,
    order_by: str,
    order_dir: str,
    search: str | None,
) -> list[TagRecord]:
    column = _ORDER_COLUMNS.get(order_by, Tag.updated_at)
    direction = asc if order_dir == "asc" else desc
    stmt = _tag_select()
    condition = _search_filter(search)
    if condition is not None:
        stmt = stmt.where(condition)
    # Tag.id breaks ties so pages never overlap.
    stmt = stmt.order_by(direction(column), direction(Tag.id)).offset(offset).limit(limit)
    return [_to_record(row) for row in db.execute(stmt).all()]


def count_tags(db: Session, search: str | None) -> int:
    stmt = select(func.count(Tag.id))
    condition = _search_filter(search)
    if condition is not None:
        stmt = stmt.where(condition)
    return db.execute(stmt).scalar_one()


def get_tag_record(db: Session, tag_id: str) -> TagRecord | None:
    row = db.execute(_tag_select().where(Tag.id == tag_id)).first()
    return _to_record(row) if row is not None else None


def get_tag(db: Session, tag_id: str) -> Tag | None:
    return db.get(Tag, tag_id)


def slugs_with_prefix(db: Session, base_slug: str, exclude_id: str | None = None) -> set[str]:
    """Existing slugs equal to base_slug or of the form base_slug-<suffix>."""
    stmt = select(Tag.slug).where(
        or_(Tag.slug == base_slug, Tag.slug.like(f"{base_slug}-%"))
    )
    if exclude_id is not None:
        stmt = stmt.where(Tag.id != exclude_id)
    return set(db.execute(stmt).scalars())


def delete_tags(db: Session, tag_ids: list[str]) -> int:
    """Remove tags and their meal/drink links; returns the number of tags deleted."""
    db.execute(delete(MealTag).where(MealTag.tag_id.in_(tag_ids)))
    db.execute(delete(DrinkTag).where(DrinkTag.tag_id.in_(tag_ids)))
    result = db.execute(delete(Tag).where(Tag.id.in_(tag_ids)))
    return result.rowcount or 0
