"""User lookups returning typed aggregates instead of lazily loaded relations."""

from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from larder.models import Role, User, UserRole


@dataclass(frozen=True)
class RoleRecord:
    id: str
    name: str


@dataclass(frozen=True)
class UserWithRoles:
    id: str
    name: str
    email: str
    roles: list[RoleRecord] = field(default_factory=list)

    @property
    def role_names(self) -> set[str]:
        return {role.name for role in self.roles}


def get_by_email(db: Session, email: str) -> User | None:
    return db.execute(select(User).where(User.email == email)).scalar_one_or_none()


def get_user_with_roles(db: Session, user_id: str) -> UserWithRoles | None:
    """Load a user and its roles with one outer join."""
    rows = db.execute(
        select(User.id, User.name, User.email, Role.id, Role.name)
        .outerjoin(UserRole, UserRole.user_id == User.id)
        .outerjoin(Role, Role.id == UserRole.role_id)
        .where(User.id == user_id)
        .order_by(Role.name)
    ).all()
    if not rows:
        return None
    uid, name, email = rows[0][0], rows[0][1], rows[0][2]
    roles = [RoleRecord(id=row[3], name=row[4]) for row in rows if row[3] is not None]
    return UserWithRoles(id=uid, name=name, email=email, roles=roles)


def create_user(
    db: Session,
    name: str,
    email: str,
    password_hash: str,
    role_ids: list[str],
) -> User:
    """Add the user and its role links to the session; the caller commits."""
    user = User(name=name, email=email, password_hash=password_hash)
    db.add(user)
    db.flush()
    for role_id in role_ids:
        db.add(UserRole(user_id=user.id, role_id=role_id))
    db.flush()
    return user
