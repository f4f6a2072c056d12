"""Pluggy hook specifications for the host request lifecycle.

The host fires ``transition_post_status`` for every status change of every
post type, collects ``admin_notices`` when rendering an admin page, and
fires ``request_shutdown`` once at the end of the request. Every hook
receives the request's :class:`RequestContext`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from draftsync.domain.content import ContentItem
    from draftsync.services.notices import Notice
    from draftsync.services.request import RequestContext

hookspec = pluggy.HookspecMarker("draftsync")


class DraftSyncHookSpec:
    """Hook specifications for the draftsync plugin system."""

    @hookspec
    def transition_post_status(
        self,
        new_status: str,
        old_status: str,
        item: ContentItem,
        request: RequestContext,
    ) -> None:
        """Called after a post's status changed from *old_status* to *new_status*."""

    @hookspec
    def admin_notices(self, request: RequestContext) -> list[Notice] | None:
        """Return notices to display; results from all plugins are concatenated."""

    @hookspec
    def request_shutdown(self, request: RequestContext) -> None:
        """Called once when the request ends."""
