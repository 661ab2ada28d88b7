"""Tests for cursor and scroll state."""
import unittest


class TestVisiblePostCount(unittest.TestCase):
    def test_rows_to_posts(self):
        from hnr.ui.view import visible_post_count

        self.assertEqual(visible_post_count(10), 3)
        self.assertEqual(visible_post_count(31), 10)

    def test_tiny_terminal_shows_one(self):
        from hnr.ui.view import visible_post_count

        self.assertEqual(visible_post_count(2), 1)


class TestPostListScroll(unittest.TestCase):
    def test_initial_state(self):
        from hnr.core.models import Category
        from hnr.ui.view import PostListPage, ViewState

        view = ViewState.init()
        self.assertEqual(view.page, PostListPage(offset=0, cursor_index=0, category=Category.TOP))
        self.assertEqual(view.scroll_offset, 0)

    def test_up_at_top_stays(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        view.scroll(rows=10, direction=ScrollDirection.UP)
        self.assertEqual(view.page.cursor_index, 0)
        self.assertEqual(view.scroll_offset, 0)

    def test_down_scrolls_when_cursor_leaves_viewport(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        for _ in range(2):
            view.scroll(rows=10, direction=ScrollDirection.DOWN)
        self.assertEqual(view.page.cursor_index, 2)
        self.assertEqual(view.scroll_offset, 0)

        view.scroll(rows=10, direction=ScrollDirection.DOWN)
        self.assertEqual(view.page.cursor_index, 3)
        self.assertEqual(view.scroll_offset, 1)

    def test_up_scrolls_back(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        for _ in range(5):
            view.scroll(rows=10, direction=ScrollDirection.DOWN)
        self.assertEqual(view.scroll_offset, 3)
        for _ in range(3):
            view.scroll(rows=10, direction=ScrollDirection.UP)
        self.assertEqual(view.page.cursor_index, 2)
        self.assertEqual(view.scroll_offset, 2)

    def test_cursor_clamped_to_page_size(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        view.page_size = 4
        for _ in range(10):
            view.scroll(rows=100, direction=ScrollDirection.DOWN)
        self.assertEqual(view.page.cursor_index, 3)

    def test_scroll_keeps_category(self):
        from hnr.core.models import Category
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init(Category.NEW)
        view.scroll(rows=10, direction=ScrollDirection.DOWN)
        self.assertIs(view.page.category, Category.NEW)

    def test_selected_post_id(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        view.scroll(rows=10, direction=ScrollDirection.DOWN)
        self.assertEqual(view.selected_post_id([10, 11, 12]), 11)
        self.assertIsNone(view.selected_post_id([10]))


class TestDetailsPage(unittest.TestCase):
    def test_open_and_back(self):
        from hnr.core.models import Category
        from hnr.ui.view import PostDetailsPage, PostListPage, ViewState

        view = ViewState.init(Category.BEST)
        view.open_post(8863)
        self.assertEqual(view.page, PostDetailsPage(post_id=8863, category=Category.BEST))
        self.assertIsNone(view.selected_post_id([1, 2]))

        view.back()
        self.assertEqual(view.page, PostListPage(category=Category.BEST))

    def test_back_keeps_category_after_scrolling(self):
        from hnr.core.models import Category
        from hnr.ui.view import PostListPage, ScrollDirection, ViewState

        view = ViewState.init(Category.NEW)
        view.open_post(1)
        view.scroll(rows=5, direction=ScrollDirection.DOWN, length=3)
        view.back()
        self.assertEqual(view.page, PostListPage(category=Category.NEW))

    def test_back_on_list_is_noop(self):
        from hnr.core.models import Category
        from hnr.ui.view import PostListPage, ViewState

        view = ViewState.init(Category.BEST)
        view.back()
        self.assertEqual(view.page, PostListPage(category=Category.BEST))

    def test_cursor_clamped_to_thread_length(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        view.open_post(1)
        for _ in range(10):
            view.scroll(rows=5, direction=ScrollDirection.DOWN, length=6)
        self.assertEqual(view.page.cursor_index, 5)
        # 4 comment rows fit in 5 terminal rows
        self.assertEqual(view.scroll_offset, 2)

    def test_empty_thread_does_not_move(self):
        from hnr.ui.view import ScrollDirection, ViewState

        view = ViewState.init()
        view.open_post(1)
        view.scroll(rows=5, direction=ScrollDirection.DOWN, length=0)
        self.assertEqual(view.page.cursor_index, 0)


if __name__ == "__main__":
    unittest.main()
