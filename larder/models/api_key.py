"""ORM model for application API keys."""

import enum

from sqlalchemy import Column, Enum, ForeignKey, String

from larder.models.base import Base, id_column, timestamp_column


class ApiKeyStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class ApiKey(Base):
    """Application-level credential checked on every request; read-only for the API."""

    __tablename__ = "api_keys"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False)
    key = Column(String(255), nullable=False, unique=True, index=True)
    status = Column(
        Enum(ApiKeyStatus, name="api_key_status"),
        nullable=False,
        default=ApiKeyStatus.ACTIVE,
    )
    created_at = timestamp_column()
    updated_at = timestamp_column()
