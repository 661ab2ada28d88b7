"""Cursor and scroll state for the post list and post details pages.

Rendering is done elsewhere; this module only decides which row the cursor
is on and which row the viewport starts at.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from hnr.core.models import Category

PAGE_SIZE = 30
# Each post is drawn as title line, byline and a blank spacer
POST_ROW_SIZE = 3
STATUS_ROWS = 1


class ScrollDirection(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class PostListPage:
    offset: int = 0
    cursor_index: int = 0
    category: Category = Category.TOP


@dataclass(frozen=True)
class PostDetailsPage:
    post_id: int
    cursor_index: int = 0
    # List the post was opened from, restored by back()
    category: Category = Category.TOP


Page = Union[PostListPage, PostDetailsPage]


def visible_post_count(rows: int) -> int:
    """Posts that fit in ``rows`` terminal rows without cropping (at least one)."""
    return max((rows - STATUS_ROWS) // POST_ROW_SIZE, 1)


def _visible_comment_count(rows: int) -> int:
    return max(rows - STATUS_ROWS, 1)


@dataclass
class ViewState:
    page: Page
    scroll_offset: int = 0
    page_size: int = PAGE_SIZE

    @classmethod
    def init(cls, category: Category = Category.TOP) -> "ViewState":
        return cls(page=PostListPage(category=category))

    def scroll(self, rows: int, direction: ScrollDirection, length: int = 0) -> None:
        """Move the cursor one row and keep it inside the viewport.

        ``length`` is the number of comments on a details page; the post
        list is bounded by ``page_size``.
        """
        page = self.page
        if isinstance(page, PostListPage):
            last = self.page_size - 1
            visible = visible_post_count(rows)
        else:
            last = max(length - 1, 0)
            visible = _visible_comment_count(rows)

        cursor = page.cursor_index
        if direction is ScrollDirection.UP:
            cursor = max(cursor - 1, 0)
            if cursor < self.scroll_offset:
                self.scroll_offset = cursor
        else:
            cursor = min(cursor + 1, last)
            if cursor >= self.scroll_offset + visible:
                self.scroll_offset = cursor - visible + 1

        if isinstance(page, PostListPage):
            self.page = PostListPage(offset=page.offset, cursor_index=cursor, category=page.category)
        else:
            self.page = PostDetailsPage(post_id=page.post_id, cursor_index=cursor, category=page.category)

    def select_category(self, category: Category) -> None:
        self.page = PostListPage(category=category)
        self.scroll_offset = 0

    def open_post(self, post_id: int) -> None:
        self.page = PostDetailsPage(post_id=post_id, category=self.page.category)
        self.scroll_offset = 0

    def back(self) -> None:
        """Return to the list the post was opened from; a no-op when already there."""
        if isinstance(self.page, PostDetailsPage):
            self.select_category(self.page.category)

    def selected_post_id(self, post_ids: list[int]) -> int | None:
        """Id under the cursor on the post list, given the ids of the current page."""
        page = self.page
        if not isinstance(page, PostListPage):
            return None
        if 0 <= page.cursor_index < len(post_ids):
            return post_ids[page.cursor_index]
        return None
