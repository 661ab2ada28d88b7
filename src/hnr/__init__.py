"""hn-terminal-reader: a cached, paginated Hacker News reader."""

__version__ = "0.1.0"
