"""Decode raw upstream item records into typed variants.

Items are defined by https://github.com/HackerNews/API#items. Every record
carries a ``type`` tag naming one of five kinds; only stories and comments
are projected into the domain models the rest of the package works with.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Optional, Union, assert_never

from hnr.core.models import Comment, Post

MAX_ITEM_ID = 2**32 - 1


class ItemDecodeError(ValueError):
    """Raised when a payload is not a well-formed item record."""

    def __init__(self, message: str, item_id: Optional[int] = None):
        self.item_id = item_id
        super().__init__(message)


class ItemType(StrEnum):
    JOB = "job"
    STORY = "story"
    COMMENT = "comment"
    POLL = "poll"
    POLLOPT = "pollopt"


@dataclass(frozen=True)
class Job:
    id: int
    by: str
    score: int
    time: int
    title: str
    text: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class Story:
    # A story with ``text`` and no ``url`` is an Ask HN post
    id: int
    by: str
    descendants: int
    score: int
    time: int
    title: str
    kids: tuple[int, ...] = field(default_factory=tuple)
    text: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class CommentItem:
    id: int
    by: str
    parent: int
    text: str
    time: int
    kids: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Poll:
    id: int
    by: Optional[str] = None
    time: Optional[int] = None
    title: Optional[str] = None
    text: Optional[str] = None
    score: Optional[int] = None
    descendants: Optional[int] = None
    parts: tuple[int, ...] = field(default_factory=tuple)
    kids: tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PollOption:
    id: int
    by: Optional[str] = None
    time: Optional[int] = None
    poll: Optional[int] = None
    score: Optional[int] = None
    text: Optional[str] = None


Item = Union[Job, Story, CommentItem, Poll, PollOption]


def decode_item(raw: bytes | str) -> Item:
    """Parse one JSON item record into its typed variant.

    Raises :class:`ItemDecodeError` for invalid JSON, a non-object payload
    (the API answers ``null`` for unknown ids), an unrecognised ``type`` tag,
    or a record missing a required field of its variant.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ItemDecodeError(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ItemDecodeError(f"Expected an item object, got {type(data).__name__}")

    return decode_record(data)


def decode_record(data: dict[str, Any]) -> Item:
    """Build the typed variant for an already-parsed record."""
    item_id = data.get("id") if _is_int(data.get("id")) else None
    tag = data.get("type")
    try:
        item_type = ItemType(tag)
    except ValueError:
        raise ItemDecodeError(f"Unknown item type: {tag!r}", item_id=item_id) from None

    fields = _Fields(data, item_id)
    match item_type:
        case ItemType.STORY:
            return Story(
                id=fields.item_id("id"),
                by=fields.text("by"),
                descendants=fields.integer("descendants"),
                score=fields.integer("score"),
                time=fields.integer("time"),
                title=fields.text("title"),
                kids=fields.ids("kids"),
                text=fields.text("text", required=False),
                url=fields.text("url", required=False),
            )
        case ItemType.COMMENT:
            return CommentItem(
                id=fields.item_id("id"),
                by=fields.text("by"),
                parent=fields.item_id("parent"),
                text=fields.text("text"),
                time=fields.integer("time"),
                kids=fields.ids("kids"),
            )
        case ItemType.JOB:
            return Job(
                id=fields.item_id("id"),
                by=fields.text("by"),
                score=fields.integer("score"),
                time=fields.integer("time"),
                title=fields.text("title"),
                text=fields.text("text", required=False),
                url=fields.text("url", required=False),
            )
        case ItemType.POLL:
            return Poll(
                id=fields.item_id("id"),
                by=fields.text("by", required=False),
                time=fields.integer("time", required=False),
                title=fields.text("title", required=False),
                text=fields.text("text", required=False),
                score=fields.integer("score", required=False),
                descendants=fields.integer("descendants", required=False),
                parts=fields.ids("parts"),
                kids=fields.ids("kids"),
            )
        case ItemType.POLLOPT:
            return PollOption(
                id=fields.item_id("id"),
                by=fields.text("by", required=False),
                time=fields.integer("time", required=False),
                poll=fields.integer("poll", required=False),
                score=fields.integer("score", required=False),
                text=fields.text("text", required=False),
            )
        case _:
            assert_never(item_type)


def to_post(story: Story) -> Post:
    """Coerce a story item into the public-facing Post."""
    return Post(
        id=story.id,
        by=story.by,
        children=story.kids,
        title=story.title,
        time=story.time,
        url=story.url,
        text=story.text,
        descendants=story.descendants,
    )


def to_comment(comment: CommentItem) -> Comment:
    """Coerce a comment item into the public-facing Comment."""
    return Comment(
        id=comment.id,
        by=comment.by,
        children=comment.kids,
        parent=comment.parent,
        text=comment.text,
        time=comment.time,
    )


def project(item: Item) -> Post | Comment | None:
    """Project an item into the domain model; kinds the reader does not show map to None."""
    match item:
        case Story():
            return to_post(item)
        case CommentItem():
            return to_comment(item)
        case Job() | Poll() | PollOption():
            return None
        case _:
            assert_never(item)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class _Fields:
    """Typed accessors over one raw record, raising ItemDecodeError on mismatch."""

    def __init__(self, data: dict[str, Any], item_id: Optional[int]):
        self._data = data
        self._item_id = item_id

    def _fail(self, name: str, expected: str) -> ItemDecodeError:
        if name not in self._data:
            return ItemDecodeError(f"Missing required field {name!r}", item_id=self._item_id)
        got = type(self._data[name]).__name__
        return ItemDecodeError(
            f"Field {name!r} should be {expected}, got {got}", item_id=self._item_id
        )

    def integer(self, name: str, *, required: bool = True) -> Optional[int]:
        value = self._data.get(name)
        if value is None and not required:
            return None
        if not _is_int(value):
            raise self._fail(name, "an integer")
        return value

    def item_id(self, name: str) -> int:
        value = self.integer(name)
        if not 0 <= value <= MAX_ITEM_ID:
            raise ItemDecodeError(f"Field {name!r} out of id range: {value}", item_id=self._item_id)
        return value

    def text(self, name: str, *, required: bool = True) -> Optional[str]:
        value = self._data.get(name)
        if value is None and not required:
            return None
        if not isinstance(value, str):
            raise self._fail(name, "a string")
        return value

    def ids(self, name: str) -> tuple[int, ...]:
        # Absent child lists are normal for leaves
        value = self._data.get(name)
        if value is None:
            return ()
        if not isinstance(value, list) or not all(
            _is_int(v) and 0 <= v <= MAX_ITEM_ID for v in value
        ):
            raise self._fail(name, "a list of ids")
        return tuple(value)
