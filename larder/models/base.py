"""SQLAlchemy declarative Base and shared column helpers."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


def new_id() -> str:
    """Primary keys are opaque UUID strings."""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(UTC)


def id_column() -> Column:
    return Column(String(36), primary_key=True, default=new_id)


def timestamp_column() -> Column:
    return Column(DateTime(timezone=True), nullable=False, default=utcnow)
