"""String helpers for slugs."""

import re

_WHITESPACE = re.compile(r"\s+")


def slugify(name: str, max_length: int | None = None) -> str:
    """Lowercase, trim and join whitespace-separated words with '-'; cut to max_length."""
    slug = _WHITESPACE.sub("-", name.strip().lower())
    if max_length is not None:
        slug = slug[:max_length]
    return slug


def unique_slug(base_slug: str, taken: set[str]) -> str:
    """
    Return base_slug if free, else base_slug-N with the smallest N >= 1 not in taken.
    """
    if base_slug not in taken:
        return base_slug
    suffix = 1
    while f"{base_slug}-{suffix}" in taken:
        suffix += 1
    return f"{base_slug}-{suffix}"
