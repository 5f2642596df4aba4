"""ORM model for issued access/refresh tokens (the token store)."""

import enum

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, Text, UniqueConstraint

from larder.models.base import Base, id_column, timestamp_column


class TokenType(str, enum.Enum):
    ACCESS = "ACCESS"
    REFRESH = "REFRESH"


class UserToken(Base):
    """
    One row per issued token. A token is live while its row exists and
    expired_at is in the future; deleting the row revokes it.
    """

    __tablename__ = "user_tokens"
    __table_args__ = (
        UniqueConstraint("user_id", "type", "token", name="uq_user_tokens_user_type_token"),
    )

    id = id_column()
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type = Column(Enum(TokenType, name="token_type"), nullable=False)
    token = Column(Text, nullable=False)
    expired_at = Column(DateTime(timezone=True), nullable=False, index=True)
    created_at = timestamp_column()
