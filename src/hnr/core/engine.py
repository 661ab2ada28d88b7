"""Reader engine -- orchestrates DataStore + HNClient for the UI layer."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from hnr.core.client import HNClient
from hnr.core.models import Category, Post
from hnr.core.store import DataStore
from hnr.core.threads import flatten_comments

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Posts for one page window, in list order.

    ``skipped`` holds window ids that are not stories (job postings show up
    in the top list); they are left out of ``posts`` without degrading it.
    """

    category: Category
    skip: int
    posts: list[Post]
    dropped: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def degraded(self) -> bool:
        """True when some posts in the window could not be loaded."""
        return bool(self.dropped)


@dataclass
class ThreadResult:
    """A post with its comment ids flattened in display order."""

    post: Post
    comment_ids: list[int]
    dropped: list[int] = field(default_factory=list)


class ReaderEngine:
    """Fetch-or-get access to pages and threads, fetching only what the store lacks.

    Each "find missing ids, fetch them, hydrate" sequence runs under one lock,
    so concurrent page or thread loads never request the same id twice.
    """

    def __init__(self, store: DataStore, client: HNClient, page_size: int = 30):
        self.store = store
        self._client = client
        self.page_size = page_size
        self._lock = asyncio.Lock()
        # Ids that decoded as some other kind of item; never worth refetching
        self._skipped: set[int] = set()

    def page_ids(self, category: Category, skip: int = 0, limit: Optional[int] = None) -> list[int]:
        """Slice the cached list for ``category``; the window is clamped to the list."""
        if skip < 0:
            raise ValueError(f"skip must be non-negative, got {skip}")
        limit = self.page_size if limit is None else limit
        return self.store.get_category_list(category)[skip:skip + max(limit, 0)]

    async def load_category(self, category: Category) -> list[int]:
        """Return the id list for ``category``, fetching it only the first time."""
        async with self._lock:
            if not self.store.has_category_list(category):
                return await self._fetch_category(category)
        return self.store.get_category_list(category)

    async def refresh_category(self, category: Category) -> list[int]:
        async with self._lock:
            return await self._fetch_category(category)

    async def _fetch_category(self, category: Category) -> list[int]:
        post_ids = await self._client.fetch_category_ids(category)
        self.store.hydrate_category_list(category, post_ids)
        return post_ids

    def _unskipped(self, ids: Sequence[int]) -> list[int]:
        return [i for i in ids if i not in self._skipped]

    async def load_page(
        self, category: Category, skip: int = 0, limit: Optional[int] = None
    ) -> PageResult:
        await self.load_category(category)
        window = self.page_ids(category, skip, limit)

        dropped: list[int] = []
        async with self._lock:
            missing = self._unskipped(self.store.missing_post_ids(window))
            if missing:
                logger.debug("Page %s[%d:] needs %d of %d posts", category.value, skip, len(missing), len(window))
                result = await self._client.fetch_posts(missing)
                self.store.hydrate_posts(result.items)
                self._skipped.update(result.skipped)
                dropped = result.dropped

        posts = [post for post in map(self.store.get_post, window) if post is not None]
        skipped = [post_id for post_id in window if post_id in self._skipped]
        return PageResult(category=category, skip=skip, posts=posts, dropped=dropped, skipped=skipped)

    async def load_post(self, post_id: int) -> Post:
        """Return the cached post, or fetch it. Fetch failures propagate."""
        async with self._lock:
            post = self.store.get_post(post_id)
            if post is None:
                post = await self._client.fetch_post(post_id)
                self.store.hydrate_posts([post])
        return post

    async def load_thread(self, post_id: int, max_depth: Optional[int] = None) -> ThreadResult:
        """Hydrate a post's comment tree one level at a time, then flatten it.

        ``max_depth`` limits how many levels of replies are fetched; 1 loads
        only direct replies to the post.
        """
        post = await self.load_post(post_id)
        dropped: list[int] = []
        level = list(post.children)
        depth = 0

        while level and (max_depth is None or depth < max_depth):
            async with self._lock:
                missing = self._unskipped(self.store.missing_comment_ids(level))
                if missing:
                    result = await self._client.fetch_comments(missing)
                    self.store.hydrate_comments(result.items)
                    self._skipped.update(result.skipped)
                    dropped.extend(result.dropped)

            level = [
                child
                for comment in map(self.store.get_comment, level)
                if comment is not None
                for child in comment.children
            ]
            depth += 1

        return ThreadResult(
            post=post,
            comment_ids=list(flatten_comments(self.store, post_id)),
            dropped=dropped,
        )
