"""Title validation, the only input check in the app."""
from typing import Any


class ValidationError(ValueError):
    """Raised when a task title is empty after trimming."""


def normalize_title(raw: Any) -> str:
    """Strip surrounding whitespace (newlines included) from a raw title.

    Raises ValidationError for non-string input or when nothing is left.
    """
    if not isinstance(raw, str):
        raise ValidationError("Title must be text.")
    title = raw.strip()
    if not title:
        raise ValidationError("Title required.")
    return title
