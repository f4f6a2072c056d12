"""Built-in plugin that keeps draft status in step across translations.

Hooks the host's status transitions into :class:`StatusPropagator`,
surfaces queued notices on admin pages, and flushes the request's
diagnostics when the request shuts down.

The plugin only activates when a translation directory is available.
Without one it stays registered but inert, and asks the admin to install
one.
"""

from __future__ import annotations

import logging

import pluggy

from draftsync.config.models import NoticesConfig, SyncConfig
from draftsync.domain.content import ContentItem
from draftsync.services.notices import Notice
from draftsync.services.propagator import StatusPropagator
from draftsync.services.request import RequestContext

hookimpl = pluggy.HookimplMarker("draftsync")

logger = logging.getLogger(__name__)


def is_directory_available(directory: object | None) -> bool:
    """Whether a translation directory is present and reports itself usable.

    Directories without an ``is_available`` method are assumed usable.
    """
    if directory is None:
        return False
    check = getattr(directory, "is_available", None)
    if check is None:
        return True
    try:
        return bool(check())
    except Exception:
        logger.warning("Translation directory availability check failed", exc_info=True)
        return False


class DraftSyncPlugin:
    """Hook implementations for draft synchronization."""

    def __init__(
        self,
        propagator: StatusPropagator,
        config: SyncConfig | None = None,
        notices: NoticesConfig | None = None,
    ) -> None:
        self._propagator = propagator
        self._config = config or SyncConfig()
        self._notices = notices or NoticesConfig()
        self._active = is_directory_available(propagator.directory)
        if not self._active:
            logger.warning("No translation directory available; draft sync is inactive")

    @property
    def active(self) -> bool:
        return self._active

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    @hookimpl
    def transition_post_status(
        self,
        new_status: str,
        old_status: str,
        item: ContentItem,
        request: RequestContext,
    ) -> None:
        """Propagate draft entry or exit to the item's translations."""
        if not (self._active and self._config.enabled):
            return
        self._propagator.on_transition(
            item.id,
            old_status,
            new_status,
            diagnostics=request.diagnostics,
            notices=request.notices,
        )

    @hookimpl
    def admin_notices(self, request: RequestContext) -> list[Notice]:
        """Drain queued notices, or explain why the plugin is inactive."""
        if not self._active:
            return [Notice(message=self._notices.backend_missing, level="error")]
        return request.render_notices()

    @hookimpl
    def request_shutdown(self, request: RequestContext) -> None:
        """Write the request's diagnostics as one log record."""
        request.close()
