"""SQL implementations of the content store and translation directory."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime

from sqlalchemy import delete, func, insert, inspect, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from draftsync.domain.content import ContentItem
from draftsync.infrastructure.database.schema import STATUS_MAX_LENGTH, post_translations, posts
from draftsync.services.result import UpdateResult

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class SqlContentStore:
    """:class:`~draftsync.services.contracts.ContentStore` over the ``posts`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def add_item(self, item: ContentItem) -> None:
        """Insert *item* (used to seed a database)."""
        with self._engine.begin() as conn:
            conn.execute(
                insert(posts).values(
                    id=item.id,
                    post_type=item.post_type,
                    status=item.status,
                    language=item.language,
                    title=item.title,
                    modified=_now_iso(),
                )
            )

    def get_item(self, item_id: int) -> ContentItem | None:
        with self._engine.connect() as conn:
            row = conn.execute(select(posts).where(posts.c.id == item_id)).first()
        if row is None:
            return None
        return ContentItem(
            id=row.id,
            status=row.status,
            language=row.language,
            post_type=row.post_type,
            title=row.title,
        )

    def update_status(self, item_id: int, new_status: str) -> UpdateResult:
        item = self.get_item(item_id)
        if item is None:
            return UpdateResult.not_found(item_id, new_status)
        if item.status == new_status:
            return UpdateResult.noop(item)
        if not new_status or len(new_status) > STATUS_MAX_LENGTH:
            reason = f"Invalid post status: {new_status!r}"
            return UpdateResult.rejected(item_id, new_status, reason)

        try:
            with self._engine.begin() as conn:
                conn.execute(
                    update(posts)
                    .where(posts.c.id == item_id)
                    .values(status=new_status, modified=_now_iso())
                )
        except SQLAlchemyError as exc:
            logger.debug("Status write failed for post %s", item_id, exc_info=True)
            return UpdateResult.rejected(item_id, new_status, str(exc))

        return UpdateResult.updated(item.model_copy(update={"status": new_status}))


class SqlTranslationDirectory:
    """:class:`~draftsync.services.contracts.TranslationDirectory` over ``post_translations``."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def is_available(self) -> bool:
        """Whether the translations table exists in the connected database."""
        return inspect(self._engine).has_table(post_translations.name)

    def link(self, group: Mapping[str, int]) -> int:
        """Link *group* as one translation group. Returns the new group id.

        Members are first removed from whatever group they belonged to.
        """
        member_ids = list(group.values())
        with self._engine.begin() as conn:
            conn.execute(
                delete(post_translations).where(post_translations.c.post_id.in_(member_ids))
            )
            current = conn.execute(select(func.max(post_translations.c.group_id))).scalar()
            group_id = (current or 0) + 1
            for language, post_id in group.items():
                conn.execute(
                    insert(post_translations).values(
                        group_id=group_id,
                        language=language,
                        post_id=post_id,
                    )
                )
        return group_id

    def get_group(self, item_id: int) -> dict[str, int]:
        with self._engine.connect() as conn:
            group_id = conn.execute(
                select(post_translations.c.group_id).where(post_translations.c.post_id == item_id)
            ).scalar()
            if group_id is None:
                return {}
            rows = conn.execute(
                select(post_translations.c.language, post_translations.c.post_id).where(
                    post_translations.c.group_id == group_id
                )
            ).fetchall()
        return {row.language: row.post_id for row in rows}
