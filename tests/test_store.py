"""Tests for the DataStore cache."""
import unittest


def make_post(post_id, children=()):
    from hnr.core.models import Post

    return Post(
        id=post_id,
        by=f"author{post_id}",
        title=f"Post {post_id}",
        time=1700000000 + post_id,
        children=tuple(children),
        url=f"https://example.com/{post_id}",
        descendants=len(children),
    )


def make_comment(comment_id, parent=0, children=()):
    from hnr.core.models import Comment

    return Comment(
        id=comment_id,
        by=f"commenter{comment_id}",
        parent=parent,
        text=f"Comment {comment_id}",
        time=1700000000 + comment_id,
        children=tuple(children),
    )


class TestCategoryLists(unittest.TestCase):
    def test_new_store_has_no_lists(self):
        from hnr.core.models import Category
        from hnr.core.store import DataStore

        store = DataStore()
        for category in Category:
            self.assertFalse(store.has_category_list(category))
            self.assertEqual(store.get_category_list(category), [])

    def test_hydrate_list(self):
        from hnr.core.models import Category
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_category_list(Category.BEST, [5, 3, 9])
        self.assertTrue(store.has_category_list(Category.BEST))
        self.assertEqual(store.get_category_list(Category.BEST), [5, 3, 9])
        self.assertFalse(store.has_category_list(Category.TOP))

    def test_hydrate_replaces_not_merges(self):
        from hnr.core.models import Category
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_category_list(Category.TOP, [1, 2, 3])
        store.hydrate_category_list(Category.TOP, [4, 5])
        self.assertEqual(store.get_category_list(Category.TOP), [4, 5])

    def test_empty_list_counts_as_hydrated(self):
        from hnr.core.models import Category
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_category_list(Category.NEW, [])
        self.assertTrue(store.has_category_list(Category.NEW))

    def test_returned_list_is_a_copy(self):
        from hnr.core.models import Category
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_category_list(Category.TOP, [1, 2])
        store.get_category_list(Category.TOP).append(3)
        self.assertEqual(store.get_category_list(Category.TOP), [1, 2])


class TestEntities(unittest.TestCase):
    def test_hydrate_and_get_posts(self):
        from hnr.core.store import DataStore

        store = DataStore()
        posts = [make_post(i) for i in range(5)]
        store.hydrate_posts(posts)
        for post in posts:
            self.assertEqual(store.get_post(post.id), post)
        self.assertEqual(store.post_count, 5)

    def test_hydrate_and_get_comments(self):
        from hnr.core.store import DataStore

        store = DataStore()
        comments = [make_comment(i) for i in range(5)]
        store.hydrate_comments(comments)
        for comment in comments:
            self.assertEqual(store.get_comment(comment.id), comment)
        self.assertEqual(store.comment_count, 5)

    def test_lookup_of_absent_id_is_none(self):
        from hnr.core.store import DataStore

        store = DataStore()
        self.assertIsNone(store.get_post(42))
        self.assertIsNone(store.get_comment(42))

    def test_posts_and_comments_are_separate_maps(self):
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_posts([make_post(7)])
        self.assertIsNone(store.get_comment(7))

    def test_hydration_is_idempotent(self):
        from hnr.core.store import DataStore

        once, twice = DataStore(), DataStore()
        post, comment = make_post(1, children=[2]), make_comment(2, parent=1)
        once.hydrate_posts([post])
        once.hydrate_comments([comment])
        twice.hydrate_posts([post])
        twice.hydrate_posts([post])
        twice.hydrate_comments([comment, comment])

        self.assertEqual(once.get_post(1), twice.get_post(1))
        self.assertEqual(once.get_comment(2), twice.get_comment(2))
        self.assertEqual(once.post_count, twice.post_count)
        self.assertEqual(once.comment_count, twice.comment_count)

    def test_input_order_does_not_matter(self):
        from hnr.core.store import DataStore

        posts = [make_post(i) for i in range(10)]
        forward, backward = DataStore(), DataStore()
        forward.hydrate_posts(posts)
        backward.hydrate_posts(reversed(posts))
        for i in range(10):
            self.assertEqual(forward.get_post(i), backward.get_post(i))

    def test_later_hydration_replaces(self):
        from dataclasses import replace

        from hnr.core.store import DataStore

        store = DataStore()
        post = make_post(1)
        store.hydrate_posts([post])
        store.hydrate_posts([replace(post, descendants=99)])
        self.assertEqual(store.get_post(1).descendants, 99)

    def test_keys_match_entity_ids(self):
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_posts([make_post(3), make_post(8)])
        for post_id in (3, 8):
            self.assertEqual(store.get_post(post_id).id, post_id)


class TestMissingIds(unittest.TestCase):
    def test_missing_post_and_comment_ids(self):
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_posts([make_post(i) for i in range(5)])
        store.hydrate_comments([make_comment(i) for i in range(6, 10)])

        self.assertEqual(store.missing_post_ids(list(range(6))), [5])
        self.assertEqual(store.missing_comment_ids(list(range(6, 11))), [10])

    def test_missing_ids_preserve_input_order(self):
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_posts([make_post(4), make_post(1)])
        self.assertEqual(store.missing_post_ids([9, 4, 7, 1, 2]), [9, 7, 2])

    def test_missing_ids_empty_after_hydrating_them(self):
        from hnr.core.store import DataStore

        store = DataStore()
        candidates = [12, 3, 40, 7]
        missing = store.missing_post_ids(candidates)
        self.assertEqual(missing, candidates)
        store.hydrate_posts(make_post(i) for i in missing)
        self.assertEqual(store.missing_post_ids(candidates), [])

    def test_missing_comment_ids_ignore_posts(self):
        from hnr.core.store import DataStore

        store = DataStore()
        store.hydrate_posts([make_post(1)])
        self.assertEqual(store.missing_comment_ids([1]), [1])


if __name__ == "__main__":
    unittest.main()
