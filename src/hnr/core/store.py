"""Process-lifetime cache of category lists, posts and comments."""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

from hnr.core.models import Category, Comment, Post

logger = logging.getLogger(__name__)


class DataStore:
    """Holds per-category id lists and id -> entity maps.

    Nothing is ever evicted. A post's ``children`` and a comment's ``parent``
    are plain ids; an id with no entry in the comment map is simply not
    fetched yet.
    """

    def __init__(self) -> None:
        self._category_ids: dict[Category, list[int]] = {c: [] for c in Category}
        self._hydrated: set[Category] = set()
        self._posts: dict[int, Post] = {}
        self._comments: dict[int, Comment] = {}

    # -- category lists ----------------------------------------------------

    def has_category_list(self, category: Category) -> bool:
        """True once the list for ``category`` has been hydrated, even if it was empty."""
        return category in self._hydrated

    def get_category_list(self, category: Category) -> list[int]:
        return list(self._category_ids[category])

    def hydrate_category_list(self, category: Category, post_ids: Iterable[int]) -> None:
        """Replace the category's list wholesale."""
        self._category_ids[category] = list(post_ids)
        self._hydrated.add(category)
        logger.debug("Hydrated %s list with %d ids", category.value, len(self._category_ids[category]))

    # -- entities ----------------------------------------------------------

    def get_post(self, post_id: int) -> Optional[Post]:
        return self._posts.get(post_id)

    def get_comment(self, comment_id: int) -> Optional[Comment]:
        return self._comments.get(comment_id)

    def hydrate_posts(self, posts: Iterable[Post]) -> None:
        for post in posts:
            self._posts[post.id] = post

    def hydrate_comments(self, comments: Iterable[Comment]) -> None:
        for comment in comments:
            self._comments[comment.id] = comment

    def missing_post_ids(self, post_ids: Sequence[int]) -> list[int]:
        """Ids from ``post_ids`` with no cached post, in their original order."""
        return [post_id for post_id in post_ids if post_id not in self._posts]

    def missing_comment_ids(self, comment_ids: Sequence[int]) -> list[int]:
        """Ids from ``comment_ids`` with no cached comment, in their original order."""
        return [comment_id for comment_id in comment_ids if comment_id not in self._comments]

    @property
    def post_count(self) -> int:
        return len(self._posts)

    @property
    def comment_count(self) -> int:
        return len(self._comments)
