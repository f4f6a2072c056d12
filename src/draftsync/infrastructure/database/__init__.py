"""SQLite-backed content store and translation directory via SQLAlchemy Core."""

from draftsync.infrastructure.database.engine import create_db_engine, init_database
from draftsync.infrastructure.database.schema import metadata, post_translations, posts
from draftsync.infrastructure.database.store import SqlContentStore, SqlTranslationDirectory

__all__ = [
    "SqlContentStore",
    "SqlTranslationDirectory",
    "create_db_engine",
    "init_database",
    "metadata",
    "post_translations",
    "posts",
]
