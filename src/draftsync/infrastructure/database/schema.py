"""SQLAlchemy Core table definitions for the reference post store.

``posts`` mirrors the columns of the host's post table that draftsync
touches. ``post_translations`` links posts into translation groups: one
row per member, at most one member per language in a group.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, Text, UniqueConstraint

metadata = MetaData()

# Matches the host's post_status column width.
STATUS_MAX_LENGTH = 20

posts = Table(
    "posts",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("post_type", String(20), nullable=False, default="post", server_default="post"),
    Column("status", String(STATUS_MAX_LENGTH), nullable=False),
    Column("language", Text),
    Column("title", Text, nullable=False, default="", server_default=""),
    Column("modified", Text),
)

post_translations = Table(
    "post_translations",
    metadata,
    Column("group_id", Integer, nullable=False),
    Column("language", Text, nullable=False),
    Column("post_id", Integer, ForeignKey("posts.id"), nullable=False, unique=True),
    UniqueConstraint("group_id", "language"),
)
