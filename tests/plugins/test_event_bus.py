"""Tests for EventBus — synchronous dispatch with failure isolation."""

from __future__ import annotations

import logging

import pluggy
import pytest

from draftsync.plugins.event_bus import EventBus
from draftsync.plugins.manager import PluginManager
from draftsync.services.notices import Notice
from draftsync.services.request import RequestContext

hookimpl = pluggy.HookimplMarker("draftsync")


class _NoticePlugin:
    @hookimpl
    def admin_notices(self, request: RequestContext) -> list[Notice]:
        return [Notice(message="from plugin")]


class _BrokenPlugin:
    @hookimpl
    def request_shutdown(self, request: RequestContext) -> None:
        raise RuntimeError("plugin crashed")


@pytest.fixture
def pm() -> PluginManager:
    return PluginManager()


class TestEventBus:
    def test_dispatch_collects_results(self, pm: PluginManager) -> None:
        pm.register_plugin(_NoticePlugin())
        bus = EventBus(pm)

        result = bus.dispatch("admin_notices", {"request": RequestContext()})

        assert result.ok
        assert result.op == "admin_notices"
        assert result.data["results"] == [[Notice(message="from plugin")]]

    def test_dispatch_without_implementations(self, pm: PluginManager) -> None:
        result = EventBus(pm).dispatch("request_shutdown", {"request": RequestContext()})
        assert result.ok
        assert result.data["results"] == []

    def test_unknown_hook_is_noop(self, pm: PluginManager) -> None:
        result = EventBus(pm).dispatch("no_such_hook", {})
        assert result.ok
        assert result.data == {"results": []}

    def test_plugin_failure_becomes_warning(
        self,
        pm: PluginManager,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        pm.register_plugin(_BrokenPlugin())
        bus = EventBus(pm)

        with caplog.at_level(logging.WARNING, logger="draftsync"):
            result = bus.dispatch("request_shutdown", {"request": RequestContext()})

        assert not result.ok
        assert result.warnings == ["Event dispatch failed for request_shutdown"]
        assert result.error is not None
        assert result.error.code == "HOOK_FAILED"
        assert "plugin crashed" in result.error.message
        assert any("request_shutdown" in r.getMessage() for r in caplog.records)

    def test_exposes_plugin_manager(self, pm: PluginManager) -> None:
        assert EventBus(pm).plugin_manager is pm
