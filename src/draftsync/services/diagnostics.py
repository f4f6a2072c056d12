"""Request-scoped diagnostic accumulator.

Every propagation step records a line here instead of raising. The owning
request flushes the whole batch as one combined log record when it ends.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum

from pydantic import BaseModel

logger = logging.getLogger("draftsync")

FLUSH_HEADER = "Draft sync diagnostics:"


class DiagnosticCode(StrEnum):
    """Classification of a diagnostic line."""

    TRANSLATION_GROUP_EMPTY = "TRANSLATION_GROUP_EMPTY"
    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    ALREADY_IN_TARGET_STATUS = "ALREADY_IN_TARGET_STATUS"
    UPDATE_REJECTED = "UPDATE_REJECTED"
    # Informational: a sibling was written successfully.
    UPDATED = "UPDATED"


class Diagnostic(BaseModel):
    """One diagnostic line."""

    model_config = {"frozen": True}

    code: DiagnosticCode
    message: str
    item_id: int | None = None

    @property
    def is_error(self) -> bool:
        return self.code is not DiagnosticCode.UPDATED


class DiagnosticLog:
    """Append-only diagnostics for the lifetime of one request."""

    def __init__(self) -> None:
        self._entries: list[Diagnostic] = []

    def record(
        self,
        code: DiagnosticCode,
        message: str,
        *,
        item_id: int | None = None,
    ) -> Diagnostic:
        entry = Diagnostic(code=code, message=message, item_id=item_id)
        self._entries.append(entry)
        logger.debug("Recorded %s: %s", code, message)
        return entry

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> list[Diagnostic]:
        return list(self._entries)

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self._entries]

    @property
    def has_errors(self) -> bool:
        """Whether anything other than a successful update was recorded."""
        return any(e.is_error for e in self._entries)

    def codes(self) -> list[DiagnosticCode]:
        return [e.code for e in self._entries]

    def flush(self, sink: logging.Logger | None = None) -> str | None:
        """Write all entries as one combined record, then clear.

        Returns the text written, or ``None`` when there was nothing to flush.
        """
        if not self._entries:
            return None
        target = sink or logger
        level = logging.WARNING if self.has_errors else logging.INFO
        text = "\n".join([FLUSH_HEADER, *self.messages])
        target.log(level, text)
        self._entries.clear()
        return text
