"""DraftSyncHost — wires draftsync into a host's event dispatch.

The host constructs one DraftSyncHost at setup, then for each request::

    with host.request() as request:
        host.notify_transition("draft", "publish", item, request)
        notices = host.collect_notices(request)

Leaving the block fires ``request_shutdown``, which flushes that
request's diagnostics as one log record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from draftsync.config.logging import configure_logging
from draftsync.config.settings import DraftSyncSettings
from draftsync.domain.content import ContentItem
from draftsync.infrastructure.database import (
    SqlContentStore,
    SqlTranslationDirectory,
    init_database,
)
from draftsync.plugins.builtins.draft_sync import DraftSyncPlugin
from draftsync.plugins.event_bus import EventBus
from draftsync.plugins.manager import PluginManager
from draftsync.services.contracts import ContentStore, TranslationDirectory
from draftsync.services.notices import Notice, NoticeQueue
from draftsync.services.propagator import StatusPropagator
from draftsync.services.request import RequestContext
from draftsync.services.result import ServiceResult

logger = logging.getLogger(__name__)

BUILTIN_PLUGIN_NAME = "draft-sync"


class DraftSyncHost:
    """Explicit draftsync instance owned by the host's dispatch setup."""

    def __init__(
        self,
        store: ContentStore,
        directory: TranslationDirectory | None,
        settings: DraftSyncSettings | None = None,
    ) -> None:
        self._settings = settings or DraftSyncSettings()
        sync = self._settings.sync
        messages = self._settings.notices

        self._propagator = StatusPropagator(
            store,
            directory,
            draft_status=sync.draft_status,
            restore=sync.restore,
            notify=sync.notify,
            entered_message=messages.entered_draft,
            restored_message=messages.restored_from_draft,
        )
        self._plugin = DraftSyncPlugin(self._propagator, config=sync, notices=messages)

        self._pm = PluginManager()
        self._pm.register_plugin(self._plugin, name=BUILTIN_PLUGIN_NAME)
        if self._settings.plugins.discover:
            names = self._pm.discover_and_load()
            logger.debug("Loaded plugins: %s", ", ".join(names))
        self._bus = EventBus(self._pm)

    @classmethod
    def from_settings(
        cls,
        settings: DraftSyncSettings | None = None,
        *,
        configure_logs: bool = True,
    ) -> DraftSyncHost:
        """Build a host backed by the reference SQLite store.

        ``[database] path`` selects the file; without one the database
        lives in memory for the life of the process.
        """
        settings = settings or DraftSyncSettings.load()
        if configure_logs:
            configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        db_path = Path(settings.database.path) if settings.database.path else None
        engine = init_database(db_path)
        return cls(SqlContentStore(engine), SqlTranslationDirectory(engine), settings)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def settings(self) -> DraftSyncSettings:
        return self._settings

    @property
    def propagator(self) -> StatusPropagator:
        return self._propagator

    @property
    def plugin(self) -> DraftSyncPlugin:
        return self._plugin

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    @property
    def event_bus(self) -> EventBus:
        return self._bus

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------

    def begin_request(self, notices: NoticeQueue | None = None) -> RequestContext:
        """Start a request, optionally carrying over an earlier notice queue."""
        messages = self._settings.notices
        return RequestContext(
            notices,
            errors_message=messages.errors_occurred,
            errors_only=messages.errors_only,
        )

    def notify_transition(
        self,
        new_status: str,
        old_status: str,
        item: ContentItem,
        request: RequestContext,
    ) -> ServiceResult:
        """Forward one host status change to all plugins."""
        return self._bus.dispatch(
            "transition_post_status",
            {
                "new_status": new_status,
                "old_status": old_status,
                "item": item,
                "request": request,
            },
        )

    def collect_notices(self, request: RequestContext) -> list[Notice]:
        """Gather notices from every plugin, flattened in hook call order."""
        result = self._bus.dispatch("admin_notices", {"request": request})
        notices: list[Notice] = []
        for batch in result.data.get("results", []):
            notices.extend(batch)
        return notices

    def end_request(self, request: RequestContext) -> ServiceResult:
        """Fire ``request_shutdown`` for *request*."""
        return self._bus.dispatch("request_shutdown", {"request": request})

    @contextmanager
    def request(self, notices: NoticeQueue | None = None) -> Iterator[RequestContext]:
        """Scope one request; shutdown hooks fire even if the body raises."""
        ctx = self.begin_request(notices)
        try:
            yield ctx
        finally:
            self.end_request(ctx)
