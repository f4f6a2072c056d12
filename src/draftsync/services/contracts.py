"""Collaborator protocols and typed payload contracts.

The propagator depends on two host-provided collaborators, described here
as structural protocols so any object with the right methods plugs in.
The payload models validate the shape of ``ServiceResult.data`` before it
leaves the service layer.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from draftsync.domain.content import ContentItem
from draftsync.services.result import UpdateResult

T = TypeVar("T", bound=BaseModel)


@runtime_checkable
class ContentStore(Protocol):
    """Fetches and updates a post's status."""

    def get_item(self, item_id: int) -> ContentItem | None: ...

    def update_status(self, item_id: int, new_status: str) -> UpdateResult: ...


@runtime_checkable
class TranslationDirectory(Protocol):
    """Maps a post to its linked translations, keyed by language code."""

    def get_group(self, item_id: int) -> Mapping[str, int]: ...


def dump_validated(model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class SiblingUpdate(BaseModel):
    """One attempted sibling update."""

    item_id: int
    language: str
    outcome: Literal["updated", "noop", "not_found", "rejected"]


class PropagationResultData(BaseModel):
    """Payload contract for ``StatusPropagator.propagate``."""

    item_id: int
    target_status: str
    direction: Literal["entered_draft", "left_draft"]
    updates: list[SiblingUpdate]
