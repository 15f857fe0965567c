"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


def utc_now() -> datetime:
    return datetime.now(UTC)


def title_case(name: str) -> str:
    """Capitalise each space-separated word, lower-casing the rest."""
    return " ".join(word[:1].upper() + word[1:] for word in name.lower().split(" "))
