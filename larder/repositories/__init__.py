"""Explicit query functions over the ORM models. Callers own the transaction."""
