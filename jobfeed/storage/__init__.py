import sqlite3

from .base import BookmarkStore
from .json_store import JsonBookmarkStore
from .sqlite_store import SqliteBookmarkStore

from jobfeed.config import FeedConfig
from jobfeed.log import get_logger

log = get_logger(__name__)

__all__ = [
    "BookmarkStore", "JsonBookmarkStore", "SqliteBookmarkStore",
    "open_store",
]


def open_store(config: FeedConfig) -> BookmarkStore:
    """Pick the bookmark backend once, at startup.

    ``auto`` probes SQLite by opening the database and creating the table;
    if that fails the flat JSON file is used for the rest of the process.
    """
    backend = config.storage_backend

    if backend in ("auto", "sqlite"):
        try:
            store = SqliteBookmarkStore(config.sqlite_path)
            log.info("Using SQLite for bookmark storage (%s)", config.sqlite_path)
            return store
        except (sqlite3.Error, OSError) as exc:
            if backend == "sqlite":
                raise
            log.warning("SQLite not available, using JSON file fallback: %s", exc)

    log.info("Using JSON file for bookmark storage (%s)", config.json_path)
    return JsonBookmarkStore(config.json_path)
