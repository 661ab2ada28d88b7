"""Flatten a post's cached comment tree into display order."""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from hnr.core.store import DataStore


@dataclass(frozen=True)
class ThreadEntry:
    """One row of a flattened thread. Depth 0 is a direct reply to the post."""

    comment_id: int
    depth: int


class CommentThread:
    """Pre-order view over the comments of one post.

    Each iteration walks the store as it is at that moment, so a thread can
    be iterated again after more comments have been hydrated. Comments that
    are not cached yet appear by id and are treated as leaves. The upstream
    data is a tree; a cycle in the cache would not terminate.
    """

    def __init__(self, store: DataStore, post_id: int):
        self._store = store
        self.post_id = post_id

    def __iter__(self) -> Iterator[int]:
        for entry in self.with_depth():
            yield entry.comment_id

    def with_depth(self) -> Iterator[ThreadEntry]:
        post = self._store.get_post(self.post_id)
        if post is None:
            return

        stack = [ThreadEntry(child, 0) for child in reversed(post.children)]
        while stack:
            entry = stack.pop()
            yield entry
            comment = self._store.get_comment(entry.comment_id)
            if comment is None:
                continue
            stack.extend(
                ThreadEntry(child, entry.depth + 1) for child in reversed(comment.children)
            )

    def __len__(self) -> int:
        return sum(1 for _ in self.with_depth())


def flatten_comments(store: DataStore, post_id: int) -> CommentThread:
    """Return the restartable pre-order sequence of comment ids under ``post_id``."""
    return CommentThread(store, post_id)
