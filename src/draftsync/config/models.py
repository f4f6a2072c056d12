"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, draftsync.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from draftsync.domain.status import DRAFT, RestoreMode
from draftsync.services.propagator import ENTERED_DRAFT_MESSAGE, RESTORED_MESSAGE
from draftsync.services.request import ERRORS_OCCURRED_MESSAGE

BACKEND_MISSING_MESSAGE = (
    "Draft sync requires a translation directory to be installed and activated."
)


class SyncConfig(BaseModel):
    """[sync] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    draft_status: str = DRAFT
    restore: RestoreMode = RestoreMode.OLD_STATUS
    notify: bool = True


class NoticesConfig(BaseModel):
    """[notices] section. ``{item_id}`` is substituted where present."""

    model_config = {"frozen": True}

    entered_draft: str = ENTERED_DRAFT_MESSAGE
    restored_from_draft: str = RESTORED_MESSAGE
    errors_occurred: str = ERRORS_OCCURRED_MESSAGE
    backend_missing: str = BACKEND_MISSING_MESSAGE
    # Only show errors_occurred when something other than a successful
    # update was recorded.
    errors_only: bool = False


class DatabaseConfig(BaseModel):
    """[database] section for the reference SQLite store."""

    model_config = {"frozen": True}

    path: str | None = None


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    discover: bool = False


class DraftSyncConfig(BaseModel):
    """Root configuration composing all file sections."""

    model_config = {"frozen": True}

    sync: SyncConfig = Field(default_factory=SyncConfig)
    notices: NoticesConfig = Field(default_factory=NoticesConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
