"""Synchronous hook dispatch via pluggy.

Hooks run to completion inside the host's request, in pluggy's call order,
with no queue and no background work.

INVARIANT: Plugin failures are warnings, never errors. A failing hook is
logged and reported in the result; the host's own flow carries on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from draftsync.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from draftsync.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class EventBus:
    """Dispatch named hooks to every registered plugin.

    Parameters:
        plugin_manager: PluginManager whose hook relay is called.
    """

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> ServiceResult:
        """Call *hook_name* with *payload* as keyword arguments.

        ``data["results"]`` holds the list of non-None hook return values.
        An unknown hook name is a successful no-op.
        """
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            return ServiceResult(ok=True, op=hook_name, data={"results": []})

        try:
            results = hook_fn(**payload)
        except Exception as exc:
            logger.warning("Hook %s failed: %s", hook_name, exc, exc_info=True)
            return ServiceResult(
                ok=False,
                op=hook_name,
                warnings=[f"Event dispatch failed for {hook_name}"],
                error=ServiceError(code="HOOK_FAILED", message=str(exc)),
            )

        return ServiceResult(ok=True, op=hook_name, data={"results": list(results or [])})
