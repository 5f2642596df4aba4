"""
Seed a development database: roles, an admin and demo users, the general API key,
100 numbered tags and a few meals/drinks linked to them. Safe to run repeatedly.

  python -m larder.scripts.seed
"""

import logging
import sys
from datetime import UTC, datetime, timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session

from larder.core.database import session_scope
from larder.core.logging import configure_logging
from larder.core.security import hash_password
from larder.models import ROLE_ADMIN, ROLE_USER, Drink, DrinkTag, Meal, MealTag, Tag, User
from larder.repositories import api_keys as api_key_store
from larder.repositories import roles as role_store
from larder.repositories import users as user_store

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "qwerty12345"
GENERAL_API_KEY = "general_api_key"
ADMIN_EMAIL = "admin@example.com"

DEMO_USERS = (
    ("John Doe", "johndoe@example.com"),
    ("Jane Doe", "janedoe@example.com"),
    ("Thomas Doe", "thomasdoe@example.com"),
)
MEALS = ("Nasi Goreng", "Chicken Satay", "Beef Rendang")
DRINKS = ("Iced Tea", "Lemonade")
TAG_COUNT = 100


def _ensure_user(db: Session, name: str, email: str, role_id: str) -> User:
    user = user_store.get_by_email(db, email)
    if user is None:
        user = user_store.create_user(
            db,
            name=name,
            email=email,
            password_hash=hash_password(DEFAULT_PASSWORD),
            role_ids=[role_id],
        )
    return user


def seed_users(db: Session) -> User:
    """Create roles, the admin account and demo users; return the admin."""
    admin_role = role_store.upsert_role(db, ROLE_ADMIN)
    user_role = role_store.upsert_role(db, ROLE_USER)
    admin = _ensure_user(db, "Admin", ADMIN_EMAIL, admin_role.id)
    for name, email in DEMO_USERS:
        _ensure_user(db, name, email, user_role.id)
    return admin


def seed_catalog(db: Session, admin_id: str) -> None:
    """Numbered tags, plus meals and drinks tagged with the first few of them."""
    existing = set(db.execute(select(Tag.slug)).scalars())
    now = datetime.now(UTC)
    for i in range(TAG_COUNT):
        slug = f"tag-{i + 1}"
        if slug in existing:
            continue
        stamp = now + timedelta(milliseconds=i)
        db.add(
            Tag(
                name=f"Tag {i + 1}",
                slug=slug,
                created_by=admin_id,
                updated_by=admin_id,
                created_at=stamp,
                updated_at=stamp,
            )
        )
    db.flush()

    tags = db.execute(select(Tag).where(Tag.slug.in_(["tag-1", "tag-2", "tag-3"]))).scalars().all()
    meal_slugs = set(db.execute(select(Meal.slug)).scalars())
    for name in MEALS:
        slug = name.lower().replace(" ", "-")
        if slug in meal_slugs:
            continue
        meal = Meal(name=name, slug=slug)
        db.add(meal)
        db.flush()
        db.add_all(MealTag(meal_id=meal.id, tag_id=tag.id) for tag in tags)
    drink_slugs = set(db.execute(select(Drink.slug)).scalars())
    for name in DRINKS:
        slug = name.lower().replace(" ", "-")
        if slug in drink_slugs:
            continue
        drink = Drink(name=name, slug=slug)
        db.add(drink)
        db.flush()
        db.add_all(DrinkTag(drink_id=drink.id, tag_id=tag.id) for tag in tags[:1])


def seed(db: Session) -> None:
    admin = seed_users(db)
    api_key_store.upsert_api_key(
        db,
        user_id=admin.id,
        name="General API Key",
        slug="general-api-key",
        key=GENERAL_API_KEY,
    )
    seed_catalog(db, admin.id)
    db.commit()


def main() -> int:
    configure_logging()
    try:
        with session_scope() as db:
            seed(db)
    except Exception as e:
        logger.exception("Seeding failed: %s", e)
        return 1
    logger.info("Seed complete; API key '%s', admin '%s'", GENERAL_API_KEY, ADMIN_EMAIL)
    return 0


if __name__ == "__main__":
    sys.exit(main())
