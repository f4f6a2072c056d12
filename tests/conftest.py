"""Shared pytest fixtures and test helpers for draftsync tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from draftsync.domain.content import ContentItem
from draftsync.infrastructure.database.engine import init_database
from draftsync.infrastructure.memory import InMemoryContentStore, InMemoryTranslationDirectory
from draftsync.services.diagnostics import DiagnosticLog
from draftsync.services.notices import NoticeQueue
from draftsync.services.propagator import StatusPropagator


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep a developer's draftsync.toml or DRAFTSYNC_* env out of tests."""
    for name in ("DRAFTSYNC_CONFIG", "DRAFTSYNC_VERBOSE", "DRAFTSYNC_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store() -> InMemoryContentStore:
    """English post 1 and French post 2, both published."""
    return InMemoryContentStore(
        [
            ContentItem(id=1, status="publish", language="en", title="Hello"),
            ContentItem(id=2, status="publish", language="fr", title="Bonjour"),
        ]
    )


@pytest.fixture
def directory() -> InMemoryTranslationDirectory:
    """Posts 1 and 2 linked as translations of each other."""
    return InMemoryTranslationDirectory([{"en": 1, "fr": 2}])


@pytest.fixture
def propagator(
    store: InMemoryContentStore,
    directory: InMemoryTranslationDirectory,
) -> StatusPropagator:
    return StatusPropagator(store, directory)


@pytest.fixture
def diagnostics() -> DiagnosticLog:
    return DiagnosticLog()


@pytest.fixture
def notices() -> NoticeQueue:
    return NoticeQueue()


@pytest.fixture
def db_engine() -> Iterator[Engine]:
    """In-memory SQLite engine with the schema created."""
    engine = init_database()
    try:
        yield engine
    finally:
        engine.dispose()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_group(
    store: InMemoryContentStore,
    directory: InMemoryTranslationDirectory,
    statuses: dict[str, tuple[int, str]],
) -> None:
    """Add posts to *store* and link them as one group.

    *statuses* maps language -> (item id, status).
    """
    for language, (item_id, status) in statuses.items():
        store.add(ContentItem(id=item_id, status=status, language=language))
    directory.link({language: item_id for language, (item_id, _) in statuses.items()})
