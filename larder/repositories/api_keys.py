"""API key lookups."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from larder.models import ApiKey, ApiKeyStatus


def is_active_key(db: Session, key: str) -> bool:
    found = db.execute(
        select(ApiKey.id).where(ApiKey.key == key, ApiKey.status == ApiKeyStatus.ACTIVE)
    ).first()
    return found is not None


def upsert_api_key(
    db: Session,
    user_id: str,
    name: str,
    slug: str,
    key: str,
    status: ApiKeyStatus = ApiKeyStatus.ACTIVE,
) -> ApiKey:
    """Create the key if absent; an existing key is returned unchanged."""
    existing = db.execute(select(ApiKey).where(ApiKey.key == key)).scalar_one_or_none()
    if existing is not None:
        return existing
    api_key = ApiKey(user_id=user_id, name=name, slug=slug, key=key, status=status)
    db.add(api_key)
    db.flush()
    return api_key
