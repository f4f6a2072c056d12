"""Content items and the transition events that carry them."""

from __future__ import annotations

from pydantic import BaseModel


class ContentItem(BaseModel):
    """One language-specific version of a post.

    The host owns the item's lifecycle; draftsync only reads and
    updates ``status``.
    """

    model_config = {"frozen": True}

    id: int
    status: str
    language: str | None = None
    post_type: str = "post"
    title: str = ""


class TransitionEvent(BaseModel):
    """A single status change as reported by the host."""

    model_config = {"frozen": True}

    item_id: int
    old_status: str
    new_status: str
