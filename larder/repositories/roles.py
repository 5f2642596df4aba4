"""Role lookups and idempotent role creation."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from larder.models import Role


def get_role_by_name(db: Session, name: str) -> Role | None:
    return db.execute(select(Role).where(Role.name == name)).scalar_one_or_none()


def upsert_role(db: Session, name: str) -> Role:
    """
    Return the role called name, creating it if absent. Safe under concurrent
    callers: a losing insert rolls back to its savepoint and re-reads the winner.
    """
    role = get_role_by_name(db, name)
    if role is not None:
        return role
    try:
        with db.begin_nested():
            role = Role(name=name)
            db.add(role)
    except IntegrityError:
        role = get_role_by_name(db, name)
        if role is None:
            raise
    return role
