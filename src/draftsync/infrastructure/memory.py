"""In-process content store and translation directory.

Useful for embedding in hosts that already hold posts in memory, and as
the fixture backend for tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping

from draftsync.domain.content import ContentItem
from draftsync.services.result import UpdateResult

# (item, requested_status) -> rejection reason, or None to allow the write.
RejectHook = Callable[[ContentItem, str], str | None]


class InMemoryContentStore:
    """Dict-backed :class:`~draftsync.services.contracts.ContentStore`.

    Every attempted write (including rejected ones) is recorded in
    :attr:`writes` as ``(item_id, status)``; no-ops and misses are not.
    """

    def __init__(
        self,
        items: Iterable[ContentItem] = (),
        *,
        reject: RejectHook | None = None,
    ) -> None:
        self._items: dict[int, ContentItem] = {item.id: item for item in items}
        self._reject = reject
        self.writes: list[tuple[int, str]] = []

    def add(self, item: ContentItem) -> None:
        self._items[item.id] = item

    def get_item(self, item_id: int) -> ContentItem | None:
        return self._items.get(item_id)

    def update_status(self, item_id: int, new_status: str) -> UpdateResult:
        item = self.get_item(item_id)
        if item is None:
            return UpdateResult.not_found(item_id, new_status)
        if item.status == new_status:
            return UpdateResult.noop(item)

        self.writes.append((item_id, new_status))
        if self._reject is not None:
            reason = self._reject(item, new_status)
            if reason:
                return UpdateResult.rejected(item_id, new_status, reason)

        updated = item.model_copy(update={"status": new_status})
        self._items[item_id] = updated
        return UpdateResult.updated(updated)


class InMemoryTranslationDirectory:
    """Dict-backed :class:`~draftsync.services.contracts.TranslationDirectory`.

    Each linked group is shared by all of its members, so looking up any
    member returns the whole group, the member itself included.
    """

    def __init__(
        self,
        groups: Iterable[Mapping[str, int]] = (),
        *,
        available: bool = True,
    ) -> None:
        self._groups: dict[int, dict[str, int]] = {}
        self._available = available
        for group in groups:
            self.link(group)

    def link(self, group: Mapping[str, int]) -> None:
        """Link *group* (language -> item id) as translations of one another."""
        shared = dict(group)
        for item_id in shared.values():
            previous = self._groups.get(item_id)
            if previous is not None and previous is not shared:
                # An item belongs to one group; drop it from the old one.
                for lang, member in list(previous.items()):
                    if member == item_id:
                        del previous[lang]
            self._groups[item_id] = shared

    def unlink(self, item_id: int) -> None:
        group = self._groups.pop(item_id, None)
        if group is None:
            return
        for lang, member in list(group.items()):
            if member == item_id:
                del group[lang]

    def get_group(self, item_id: int) -> dict[str, int]:
        return dict(self._groups.get(item_id, {}))

    def is_available(self) -> bool:
        return self._available
