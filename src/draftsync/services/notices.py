"""User-facing notice queue.

Producers push during a request; a later consumer drains the whole list.
Notices have no identity of their own.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

NoticeLevel = Literal["success", "error"]


class Notice(BaseModel):
    """A message to show the user once."""

    model_config = {"frozen": True}

    message: str
    level: NoticeLevel = "success"


class NoticeQueue:
    """Explicit append-only notice list with drain-and-clear."""

    def __init__(self, notices: list[Notice] | None = None) -> None:
        self._notices: list[Notice] = list(notices or [])

    def push(self, message: str, level: NoticeLevel = "success") -> Notice:
        notice = Notice(message=message, level=level)
        self._notices.append(notice)
        return notice

    def peek(self) -> list[Notice]:
        """Current notices, without clearing."""
        return list(self._notices)

    def drain(self) -> list[Notice]:
        """Return every queued notice and empty the queue."""
        drained = self._notices
        self._notices = []
        return drained

    def __len__(self) -> int:
        return len(self._notices)
