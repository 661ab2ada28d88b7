"""Core data models for Hacker News content."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Category(Enum):
    """A standing sort order under which post ids are listed upstream."""

    NEW = "new"
    BEST = "best"
    TOP = "top"

    @property
    def route(self) -> str:
        """Path of the upstream list endpoint for this category."""
        return f"/{self.value}stories.json"


@dataclass(frozen=True)
class Post:
    """A story, as shown on a front page."""

    id: int
    by: str
    title: str
    time: int
    children: tuple[int, ...] = field(default_factory=tuple)
    url: Optional[str] = None
    text: Optional[str] = None
    descendants: int = 0

    @property
    def is_self_post(self) -> bool:
        """Ask HN style posts carry text and no external link."""
        return self.url is None


@dataclass(frozen=True)
class Comment:
    """A comment. ``parent`` and ``children`` are ids, resolved against the store."""

    id: int
    by: str
    parent: int
    text: str
    time: int
    children: tuple[int, ...] = field(default_factory=tuple)
