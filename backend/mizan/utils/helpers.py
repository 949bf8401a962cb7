"""
Utility helper functions
"""
from typing import Iterable, TypeVar

T = TypeVar("T")


def index_by_id(records: Iterable[T]) -> dict:
    """Map record id -> record. The first record with a given id wins."""
    index: dict = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def contains_text(haystack: str, needle: str) -> bool:
    """Case-insensitive substring match; an empty needle always matches"""
    if not needle:
        return True
    return needle.lower() in (haystack or "").lower()
