"""SQLAlchemy ORM models."""

from larder.models.api_key import ApiKey, ApiKeyStatus
from larder.models.base import Base
from larder.models.catalog import Drink, DrinkTag, Meal, MealTag, Tag
from larder.models.token import TokenType, UserToken
from larder.models.user import ROLE_ADMIN, ROLE_USER, Role, User, UserRole

__all__ = [
    "ApiKey",
    "ApiKeyStatus",
    "Base",
    "Drink",
    "DrinkTag",
    "Meal",
    "MealTag",
    "ROLE_ADMIN",
    "ROLE_USER",
    "Role",
    "Tag",
    "TokenType",
    "User",
    "UserRole",
    "UserToken",
]
