"""ORM models for the tag catalogue and the meals/drinks tags attach to."""

from sqlalchemy import Column, ForeignKey, String

from larder.models.base import Base, id_column, timestamp_column


class Tag(Base):
    __tablename__ = "tags"

    id = id_column()
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    updated_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = timestamp_column()
    updated_at = timestamp_column()


class Meal(Base):
    __tablename__ = "meals"

    id = id_column()
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    created_at = timestamp_column()
    updated_at = timestamp_column()


class Drink(Base):
    __tablename__ = "drinks"

    id = id_column()
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    created_at = timestamp_column()
    updated_at = timestamp_column()


class MealTag(Base):
    __tablename__ = "meal_tags"

    meal_id = Column(String(36), ForeignKey("meals.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)


class DrinkTag(Base):
    __tablename__ = "drink_tags"

    drink_id = Column(String(36), ForeignKey("drinks.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)
