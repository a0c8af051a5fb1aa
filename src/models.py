"""Data models for the terminal to-do list.

Exposes the Task dataclass plus the Priority and TodoFilter enums. Enum
values are the user-facing labels ("Medium", "Completed") so rendering
never needs a separate lookup table.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict
from uuid import uuid4


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def icon(self) -> str:
        return PRIORITY_ICONS[self]

    @classmethod
    def parse(cls, raw: str) -> "Priority":
        """Resolve a name or single-letter alias (l/m/h), case-insensitive."""
        key = raw.strip().lower()
        for p in cls:
            if key in (p.value.lower(), p.value[0].lower()):
                return p
        raise ValueError(f"Unknown priority: {raw!r}")


PRIORITY_ICONS: Dict[Priority, str] = {
    Priority.LOW: "↓",
    Priority.MEDIUM: "=",
    Priority.HIGH: "⚠",
}


class TodoFilter(str, Enum):
    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str) -> "TodoFilter":
        key = raw.strip().lower()
        alias = FILTER_ALIASES.get(key)
        if alias is not None:
            return alias
        for f in cls:
            if key == f.value.lower():
                return f
        raise ValueError(f"Unknown filter: {raw!r}")


FILTER_ALIASES: Dict[str, TodoFilter] = {
    'a': TodoFilter.ALL,
    'ac': TodoFilter.ACTIVE,
    'c': TodoFilter.COMPLETED,
}


def _new_id() -> str:
    return uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Task:
    """A single to-do entry.

    Fields:
        title: Trimmed, non-empty title (checked once, at creation).
        is_done: Completion flag; the only field mutated after creation.
        priority: One of Priority.LOW / MEDIUM / HIGH.
        id: Opaque hex string, never reused or reassigned.
        created_at: Timezone-aware creation time.
    """
    title: str
    is_done: bool = False
    priority: Priority = Priority.MEDIUM
    id: str = field(default_factory=_new_id)
    created_at: datetime = field(default_factory=_now)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id[:8]}, title={self.title}, done={self.is_done}, priority={self.priority.value})"
