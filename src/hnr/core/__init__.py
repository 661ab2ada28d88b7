"""Fetch pipeline, local store and comment-thread traversal."""
from hnr.core.client import FetchResult, HNClient, HNClientError
from hnr.core.engine import PageResult, ReaderEngine, ThreadResult
from hnr.core.models import Category, Comment, Post
from hnr.core.store import DataStore
from hnr.core.threads import CommentThread, flatten_comments

__all__ = [
    "Category",
    "Comment",
    "CommentThread",
    "DataStore",
    "FetchResult",
    "HNClient",
    "HNClientError",
    "PageResult",
    "Post",
    "ReaderEngine",
    "ThreadResult",
    "flatten_comments",
]
