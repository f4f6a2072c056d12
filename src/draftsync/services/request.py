"""RequestContext — the state one host request owns.

Diagnostics live and die with the request. The notice queue may be handed
to the next request so notices queued during a redirecting save still
reach the user.
"""

from __future__ import annotations

import logging

from draftsync.services.diagnostics import DiagnosticLog
from draftsync.services.notices import Notice, NoticeQueue

ERRORS_OCCURRED_MESSAGE = "Draft sync encountered errors. Please check the error log for details."


class RequestContext:
    """Diagnostics and notices for a single request."""

    def __init__(
        self,
        notices: NoticeQueue | None = None,
        *,
        errors_message: str = ERRORS_OCCURRED_MESSAGE,
        errors_only: bool = False,
    ) -> None:
        self.diagnostics = DiagnosticLog()
        self.notices = notices if notices is not None else NoticeQueue()
        self._errors_message = errors_message
        self._errors_only = errors_only
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def render_notices(self) -> list[Notice]:
        """Drain queued notices, adding one error notice when diagnostics exist.

        Successful updates count as diagnostics too, unless *errors_only*
        was set.
        """
        rendered = self.notices.drain()
        if self._should_warn():
            rendered.append(Notice(message=self._errors_message, level="error"))
        return rendered

    def _should_warn(self) -> bool:
        if self._errors_only:
            return self.diagnostics.has_errors
        return len(self.diagnostics) > 0

    def close(self, sink: logging.Logger | None = None) -> str | None:
        """Flush diagnostics once. Later calls are no-ops."""
        if self._closed:
            return None
        self._closed = True
        return self.diagnostics.flush(sink)
