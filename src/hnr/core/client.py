"""Async Hacker News API client with a bounded fetch window."""
from __future__ import annotations

import asyncio
import json
import logging
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from hnr.config import DEFAULT_API_BASE_URL, Settings
from hnr.core.items import CommentItem, Item, ItemDecodeError, Story, decode_item, to_comment, to_post
from hnr.core.models import Category, Post

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 5


class HNClientError(Exception):
    """A single-shot request failed: transport, HTTP status or payload shape."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.message = message
        self.url = url
        super().__init__(self.message)


@dataclass
class FetchResult:
    """Outcome of a batch fetch.

    ``items`` is in completion order, not request order; re-key by id.
    ``dropped`` lists the ids whose fetch or decode failed. ``skipped``
    lists ids that decoded fine but are not the kind that was asked for,
    such as a job in a story list.
    """

    items: list[Any] = field(default_factory=list)
    dropped: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.dropped


class HNClient:
    """Read-only client for the list and item endpoints.

    Use as an async context manager, or pass in an ``httpx.AsyncClient``
    whose lifetime the caller manages.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        concurrency: int = DEFAULT_CONCURRENCY,
        timeout: float = 10.0,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")
        self._base_url = base_url.rstrip("/")
        self._concurrency = concurrency
        self._timeout = timeout
        self._http = http
        self._owns_http = http is None

    @classmethod
    def from_settings(cls, settings: Settings, http: Optional[httpx.AsyncClient] = None) -> "HNClient":
        return cls(
            base_url=settings.api_base_url,
            concurrency=settings.concurrency,
            timeout=settings.request_timeout,
            http=http,
        )

    @property
    def concurrency(self) -> int:
        return self._concurrency

    async def __aenter__(self) -> "HNClient":
        self._client()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http and self._http is not None:
            await self._http.aclose()
            self._http = None

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=self._timeout)
        return self._http

    # -- routes ------------------------------------------------------------

    def category_url(self, category: Category) -> str:
        return f"{self._base_url}{category.route}"

    def item_url(self, item_id: int) -> str:
        return f"{self._base_url}/item/{item_id}.json"

    # -- transport ---------------------------------------------------------

    async def _get(self, url: str) -> bytes:
        """GET ``url`` and return the body. The timeout covers the whole exchange."""
        async with asyncio.timeout(self._timeout):
            response = await self._client().get(url)
            response.raise_for_status()
            return response.content

    # -- single-shot calls -------------------------------------------------

    async def fetch_category_ids(self, category: Category) -> list[int]:
        """Fetch the full ordered id list for ``category``. Failures raise HNClientError."""
        url = self.category_url(category)
        try:
            ids = json.loads(await self._get(url))
        except (httpx.HTTPError, TimeoutError, ValueError, RecursionError) as exc:
            raise HNClientError(f"Failed to fetch {category.value} stories: {exc!r}", url=url) from exc

        if not isinstance(ids, list) or not all(
            isinstance(i, int) and not isinstance(i, bool) for i in ids
        ):
            raise HNClientError(f"Unexpected {category.value} stories payload", url=url)

        logger.info("Fetched %d %s story ids", len(ids), category.value)
        return ids

    async def fetch_item(self, item_id: int) -> Item:
        url = self.item_url(item_id)
        try:
            return decode_item(await self._get(url))
        except (httpx.HTTPError, TimeoutError, ItemDecodeError) as exc:
            raise HNClientError(f"Failed to fetch item {item_id}: {exc!r}", url=url) from exc

    async def fetch_post(self, post_id: int) -> Post:
        """Fetch one post's details. A non-story item is an error."""
        item = await self.fetch_item(post_id)
        if not isinstance(item, Story):
            raise HNClientError(
                f"Item {post_id} is a {type(item).__name__}, not a story",
                url=self.item_url(post_id),
            )
        return to_post(item)

    # -- batch dispatch ----------------------------------------------------

    async def _fetch_or_drop(self, item_id: int) -> Optional[Item]:
        try:
            return decode_item(await self._get(self.item_url(item_id)))
        except (httpx.HTTPError, TimeoutError, ItemDecodeError) as exc:
            logger.warning("Dropping item %d (%s): %s", item_id, type(exc).__name__, exc)
            return None

    async def fetch_items(self, ids: Iterable[int]) -> FetchResult:
        """Fetch many items with at most ``concurrency`` requests in flight.

        As soon as one fetch settles its slot goes to the next pending id.
        Failed or undecodable ids end up in ``dropped``; nothing is raised
        for them. Cancelling the caller cancels every in-flight fetch.
        """
        pending = deque(dict.fromkeys(ids))
        in_flight: dict[asyncio.Task, int] = {}
        result = FetchResult()

        try:
            while pending or in_flight:
                while pending and len(in_flight) < self._concurrency:
                    item_id = pending.popleft()
                    in_flight[asyncio.create_task(self._fetch_or_drop(item_id))] = item_id

                done, _ = await asyncio.wait(in_flight, return_when=asyncio.FIRST_COMPLETED)
                for task in done:
                    item_id = in_flight.pop(task)
                    item = task.result()
                    if item is None:
                        result.dropped.append(item_id)
                    else:
                        result.items.append(item)
        finally:
            for task in in_flight:
                task.cancel()
            if in_flight:
                await asyncio.gather(*in_flight, return_exceptions=True)

        if result.dropped:
            logger.warning(
                "Fetched %d of %d items, dropped %d",
                len(result.items), len(result.items) + len(result.dropped), len(result.dropped),
            )
        return result

    async def fetch_posts(self, ids: Iterable[int]) -> FetchResult:
        """Batch fetch, keeping only stories projected to Post."""
        result = await self.fetch_items(ids)
        result.skipped = [item.id for item in result.items if not isinstance(item, Story)]
        result.items = [to_post(item) for item in result.items if isinstance(item, Story)]
        return result

    async def fetch_comments(self, ids: Iterable[int]) -> FetchResult:
        """Batch fetch, keeping only comments projected to Comment."""
        result = await self.fetch_items(ids)
        result.skipped = [item.id for item in result.items if not isinstance(item, CommentItem)]
        result.items = [to_comment(item) for item in result.items if isinstance(item, CommentItem)]
        return result
