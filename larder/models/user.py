"""ORM models for accounts and their roles."""

from sqlalchemy import Column, ForeignKey, String

from larder.models.base import Base, id_column, timestamp_column

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USER"


class User(Base):
    """Account that signs in with email and password."""

    __tablename__ = "users"

    id = id_column()
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = timestamp_column()
    updated_at = timestamp_column()


class Role(Base):
    """Static reference data (ADMIN, USER); upserted by name."""

    __tablename__ = "roles"

    id = id_column()
    name = Column(String(64), nullable=False, unique=True)
    created_at = timestamp_column()
    updated_at = timestamp_column()


class UserRole(Base):
    """Many-to-many link between users and roles."""

    __tablename__ = "user_roles"

    user_id = Column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True
    )
    role_id = Column(
        String(36), ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True
    )
