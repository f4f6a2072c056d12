"""ServiceResult, ServiceError, and the content-store UpdateResult.

INVARIANT: Propagation never raises. Every failure is represented by one
of these types and routed to a diagnostic.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field

from draftsync.domain.content import ContentItem


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult or UpdateResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for service operations.

    Attributes:
        ok: Whether the operation ran to completion.
        op: Name of the operation (e.g. ``"propagate"``).
        data: Operation-specific payload.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


class UpdateOutcome(StrEnum):
    """The four things a content-store status update can report."""

    UPDATED = "updated"
    NOOP = "noop"
    NOT_FOUND = "not_found"
    REJECTED = "rejected"


class UpdateResult(BaseModel):
    """Outcome of ``ContentStore.update_status``."""

    model_config = {"frozen": True}

    outcome: UpdateOutcome
    item_id: int
    status: str
    item: ContentItem | None = None
    error: ServiceError | None = None

    @classmethod
    def updated(cls, item: ContentItem) -> UpdateResult:
        return cls(outcome=UpdateOutcome.UPDATED, item_id=item.id, status=item.status, item=item)

    @classmethod
    def noop(cls, item: ContentItem) -> UpdateResult:
        return cls(outcome=UpdateOutcome.NOOP, item_id=item.id, status=item.status, item=item)

    @classmethod
    def not_found(cls, item_id: int, status: str) -> UpdateResult:
        return cls(
            outcome=UpdateOutcome.NOT_FOUND,
            item_id=item_id,
            status=status,
            error=ServiceError(code="NOT_FOUND", message=f"Post {item_id} not found"),
        )

    @classmethod
    def rejected(cls, item_id: int, status: str, reason: str) -> UpdateResult:
        return cls(
            outcome=UpdateOutcome.REJECTED,
            item_id=item_id,
            status=status,
            error=ServiceError(code="UPDATE_REJECTED", message=reason),
        )
