"""Post status values and the draft propagation rule.

The host's status set is open: plugins and themes register their own
statuses, so any string is accepted. Only the draft status carries meaning
for synchronization.
"""

from __future__ import annotations

from enum import StrEnum


class PostStatus(StrEnum):
    """Built-in post statuses of the host content system."""

    PUBLISH = "publish"
    FUTURE = "future"
    DRAFT = "draft"
    PENDING = "pending"
    PRIVATE = "private"
    TRASH = "trash"
    AUTO_DRAFT = "auto-draft"
    INHERIT = "inherit"


class SyncDirection(StrEnum):
    """Which way a transition crosses the draft boundary."""

    ENTERED_DRAFT = "entered_draft"
    LEFT_DRAFT = "left_draft"


class RestoreMode(StrEnum):
    """Where siblings go when the origin leaves draft."""

    # Siblings take the transition's old status verbatim. On this path that
    # is always draft, so siblings already in draft stay there.
    OLD_STATUS = "old_status"
    # Siblings take the status the origin moved to.
    ORIGIN = "origin"


DRAFT = str(PostStatus.DRAFT)


def sync_direction(
    old_status: str,
    new_status: str,
    *,
    draft: str = DRAFT,
) -> SyncDirection | None:
    """Classify a transition, or ``None`` when draft is not involved.

    A draft -> draft transition counts as entering draft.
    """
    if new_status == draft:
        return SyncDirection.ENTERED_DRAFT
    if old_status == draft:
        return SyncDirection.LEFT_DRAFT
    return None


def compute_target_status(
    old_status: str,
    new_status: str,
    *,
    draft: str = DRAFT,
    restore: RestoreMode = RestoreMode.OLD_STATUS,
) -> str:
    """Status every sibling translation is forced to.

    Entering draft pulls siblings into draft. Leaving draft sends every
    sibling the transition's ``old_status`` by default, or the origin's
    new status with :attr:`RestoreMode.ORIGIN`. A sibling's own prior
    status is never tracked, so it is never restored.
    """
    if new_status == draft:
        return draft
    if restore is RestoreMode.ORIGIN:
        return new_status
    return old_status
