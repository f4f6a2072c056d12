"""Tests for the SQLAlchemy-backed store and directory."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect
from sqlalchemy.engine import Engine

from draftsync.domain.content import ContentItem
from draftsync.domain.status import RestoreMode
from draftsync.infrastructure.database import (
    SqlContentStore,
    SqlTranslationDirectory,
    create_db_engine,
    init_database,
)
from draftsync.services.diagnostics import DiagnosticCode, DiagnosticLog
from draftsync.services.propagator import StatusPropagator
from draftsync.services.result import UpdateOutcome


@pytest.fixture
def sql_store(db_engine: Engine) -> SqlContentStore:
    store = SqlContentStore(db_engine)
    store.add_item(ContentItem(id=1, status="publish", language="en", title="Hello"))
    store.add_item(ContentItem(id=2, status="publish", language="fr", title="Bonjour"))
    store.add_item(ContentItem(id=3, status="pending", language="de"))
    return store


@pytest.fixture
def sql_directory(db_engine: Engine, sql_store: SqlContentStore) -> SqlTranslationDirectory:
    directory = SqlTranslationDirectory(db_engine)
    directory.link({"en": 1, "fr": 2, "de": 3})
    return directory


class TestInitDatabase:
    def test_creates_tables(self, db_engine: Engine) -> None:
        tables = set(inspect(db_engine).get_table_names())
        assert {"posts", "post_translations"} <= tables

    def test_file_database_is_idempotent(self, tmp_path: Path) -> None:
        db_path = tmp_path / "data" / "posts.db"
        init_database(db_path).dispose()
        engine = init_database(db_path)
        try:
            assert db_path.is_file()
            assert inspect(engine).has_table("posts")
        finally:
            engine.dispose()


class TestSqlContentStore:
    def test_get_item(self, sql_store: SqlContentStore) -> None:
        item = sql_store.get_item(1)
        assert item == ContentItem(id=1, status="publish", language="en", title="Hello")
        assert sql_store.get_item(404) is None

    def test_update(self, sql_store: SqlContentStore) -> None:
        result = sql_store.update_status(2, "draft")
        assert result.outcome is UpdateOutcome.UPDATED
        assert sql_store.get_item(2).status == "draft"

    def test_noop(self, sql_store: SqlContentStore) -> None:
        assert sql_store.update_status(2, "publish").outcome is UpdateOutcome.NOOP

    def test_not_found(self, sql_store: SqlContentStore) -> None:
        assert sql_store.update_status(404, "draft").outcome is UpdateOutcome.NOT_FOUND

    @pytest.mark.parametrize("status", ["", "x" * 21])
    def test_rejects_invalid_status(self, sql_store: SqlContentStore, status: str) -> None:
        result = sql_store.update_status(2, status)
        assert result.outcome is UpdateOutcome.REJECTED
        assert sql_store.get_item(2).status == "publish"


class TestSqlTranslationDirectory:
    def test_available(self, sql_directory: SqlTranslationDirectory) -> None:
        assert sql_directory.is_available()

    def test_unavailable_without_schema(self) -> None:
        engine = create_db_engine()
        try:
            assert not SqlTranslationDirectory(engine).is_available()
        finally:
            engine.dispose()

    def test_get_group(self, sql_directory: SqlTranslationDirectory) -> None:
        expected = {"en": 1, "fr": 2, "de": 3}
        assert sql_directory.get_group(1) == expected
        assert sql_directory.get_group(3) == expected

    def test_unlinked_item(self, sql_directory: SqlTranslationDirectory) -> None:
        assert sql_directory.get_group(404) == {}

    def test_relink(self, sql_directory: SqlTranslationDirectory) -> None:
        first = sql_directory.get_group(1)
        group_id = sql_directory.link({"de": 3})
        assert group_id > 0
        assert sql_directory.get_group(3) == {"de": 3}
        assert sql_directory.get_group(1) == {key: first[key] for key in ("en", "fr")}


class TestPropagationOverSql:
    def test_enter_and_leave_draft(
        self,
        sql_store: SqlContentStore,
        sql_directory: SqlTranslationDirectory,
    ) -> None:
        propagator = StatusPropagator(sql_store, sql_directory)

        entering = DiagnosticLog()
        propagator.on_transition(1, "publish", "draft", diagnostics=entering)
        assert sql_store.get_item(2).status == "draft"
        assert sql_store.get_item(3).status == "draft"
        assert entering.codes() == [DiagnosticCode.UPDATED, DiagnosticCode.UPDATED]

        leaving = DiagnosticLog()
        propagator.on_transition(1, "draft", "publish", diagnostics=leaving)
        assert sql_store.get_item(2).status == "draft"
        assert sql_store.get_item(3).status == "draft"
        assert leaving.codes() == [DiagnosticCode.ALREADY_IN_TARGET_STATUS] * 2

    def test_leave_draft_in_origin_mode(
        self,
        sql_store: SqlContentStore,
        sql_directory: SqlTranslationDirectory,
    ) -> None:
        propagator = StatusPropagator(sql_store, sql_directory, restore=RestoreMode.ORIGIN)

        propagator.on_transition(1, "publish", "draft", diagnostics=DiagnosticLog())
        propagator.on_transition(1, "draft", "publish", diagnostics=DiagnosticLog())

        assert sql_store.get_item(2).status == "publish"
        assert sql_store.get_item(3).status == "publish"
