"""StatusPropagator — keep draft status in step across a translation group.

Pipeline: FILTER → RESOLVE → TARGET → FAN OUT → NOTIFY

INVARIANT: Nothing raises out of propagation. Empty groups, missing
siblings, no-op updates and rejected writes all become diagnostics, and
the loop moves on to the next sibling.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from draftsync.domain.content import TransitionEvent
from draftsync.domain.status import (
    DRAFT,
    RestoreMode,
    SyncDirection,
    compute_target_status,
    sync_direction,
)
from draftsync.services.contracts import (
    ContentStore,
    PropagationResultData,
    TranslationDirectory,
    dump_validated,
)
from draftsync.services.diagnostics import DiagnosticCode, DiagnosticLog
from draftsync.services.notices import NoticeQueue
from draftsync.services.result import ServiceError, ServiceResult, UpdateOutcome, UpdateResult

logger = logging.getLogger(__name__)

ENTERED_DRAFT_MESSAGE = "All translations of post {item_id} have been set to draft."
RESTORED_MESSAGE = "All translations of post {item_id} have been restored from draft."

_OUTCOME_CODES: dict[UpdateOutcome, DiagnosticCode] = {
    UpdateOutcome.UPDATED: DiagnosticCode.UPDATED,
    UpdateOutcome.NOOP: DiagnosticCode.ALREADY_IN_TARGET_STATUS,
    UpdateOutcome.NOT_FOUND: DiagnosticCode.ITEM_NOT_FOUND,
    UpdateOutcome.REJECTED: DiagnosticCode.UPDATE_REJECTED,
}


class StatusPropagator:
    """Applies one origin's draft transition to all of its translations.

    Stateless between calls: every transition does a fresh directory
    lookup, and the caller supplies the request's diagnostics and notices.
    """

    def __init__(
        self,
        store: ContentStore,
        directory: TranslationDirectory | None,
        *,
        draft_status: str = DRAFT,
        restore: RestoreMode = RestoreMode.OLD_STATUS,
        notify: bool = True,
        entered_message: str = ENTERED_DRAFT_MESSAGE,
        restored_message: str = RESTORED_MESSAGE,
    ) -> None:
        self._store = store
        self._directory = directory
        self._draft = draft_status
        self._restore = restore
        self._notify = notify
        self._entered_message = entered_message
        self._restored_message = restored_message

    @property
    def store(self) -> ContentStore:
        return self._store

    @property
    def directory(self) -> TranslationDirectory | None:
        return self._directory

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def on_transition(
        self,
        item_id: int,
        old_status: str,
        new_status: str,
        *,
        diagnostics: DiagnosticLog,
        notices: NoticeQueue | None = None,
    ) -> None:
        """Handle one status-change notification. Never raises."""
        try:
            event = TransitionEvent(
                item_id=item_id, old_status=old_status, new_status=new_status
            )
        except ValidationError:
            logger.debug("Malformed transition for post %r", item_id, exc_info=True)
            if sync_direction(old_status, new_status, draft=self._draft) is not None:
                diagnostics.record(DiagnosticCode.ITEM_NOT_FOUND, f"Post {item_id} not found")
            return
        self.propagate(event, diagnostics=diagnostics, notices=notices)

    def propagate(
        self,
        event: TransitionEvent,
        *,
        diagnostics: DiagnosticLog,
        notices: NoticeQueue | None = None,
    ) -> ServiceResult:
        """Propagate *event* and report what happened to each sibling."""
        op = "propagate"

        # ── FILTER ───────────────────────────────────────────
        direction = sync_direction(event.old_status, event.new_status, draft=self._draft)
        if direction is None:
            return ServiceResult(ok=True, op=op, data={"item_id": event.item_id, "skipped": True})

        # ── RESOLVE ──────────────────────────────────────────
        group = self._resolve_group(event.item_id, diagnostics)
        if not group:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code=str(DiagnosticCode.TRANSLATION_GROUP_EMPTY),
                    message=f"No translations found for post {event.item_id}",
                ),
            )

        # ── TARGET ───────────────────────────────────────────
        target = compute_target_status(
            event.old_status,
            event.new_status,
            draft=self._draft,
            restore=self._restore,
        )

        # ── FAN OUT ──────────────────────────────────────────
        updates: list[dict[str, Any]] = []
        warnings: list[str] = []
        for language, translation_id in group.items():
            if _same_item(translation_id, event.item_id):
                continue
            sibling_id = _as_item_id(translation_id)
            if sibling_id is None:
                diagnostics.record(
                    DiagnosticCode.ITEM_NOT_FOUND,
                    f"Post {translation_id} not found",
                )
                warnings.append(f"Post {translation_id} not found")
                continue
            result = self._update_sibling(sibling_id, target, diagnostics)
            updates.append(
                {
                    "item_id": sibling_id,
                    "language": language,
                    "outcome": str(result.outcome),
                }
            )
            if result.outcome is not UpdateOutcome.UPDATED:
                warnings.append(_describe(result))

        # ── NOTIFY ───────────────────────────────────────────
        if self._notify and notices is not None:
            template = (
                self._entered_message
                if direction is SyncDirection.ENTERED_DRAFT
                else self._restored_message
            )
            notices.push(template.format(item_id=event.item_id))

        data = dump_validated(
            PropagationResultData,
            {
                "item_id": event.item_id,
                "target_status": target,
                "direction": str(direction),
                "updates": updates,
            },
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _resolve_group(self, item_id: int, diagnostics: DiagnosticLog) -> Mapping[str, int]:
        """Look up the translation group; any failure counts as empty."""
        try:
            group = self._directory.get_group(item_id) if self._directory else {}
        except Exception as exc:
            logger.debug("Translation lookup failed for post %s", item_id, exc_info=True)
            diagnostics.record(
                DiagnosticCode.TRANSLATION_GROUP_EMPTY,
                f"No translations found for post {item_id} (lookup failed: {exc})",
                item_id=item_id,
            )
            return {}

        if not group:
            diagnostics.record(
                DiagnosticCode.TRANSLATION_GROUP_EMPTY,
                f"No translations found for post {item_id}",
                item_id=item_id,
            )
            return {}
        return group

    def _update_sibling(
        self,
        item_id: int,
        target: str,
        diagnostics: DiagnosticLog,
    ) -> UpdateResult:
        try:
            result = self._store.update_status(item_id, target)
        except Exception as exc:
            logger.debug("Status update raised for post %s", item_id, exc_info=True)
            result = UpdateResult.rejected(item_id, target, str(exc))

        diagnostics.record(_OUTCOME_CODES[result.outcome], _describe(result), item_id=item_id)
        return result


def _same_item(a: object, b: object) -> bool:
    """Hosts hand ids around as ints or numeric strings; compare loosely."""
    return str(a) == str(b)


def _describe(result: UpdateResult) -> str:
    """Diagnostic line for one update outcome."""
    item_id, status = result.item_id, result.status
    if result.outcome is UpdateOutcome.UPDATED:
        return f"Successfully updated post {item_id} to status {status}"
    if result.outcome is UpdateOutcome.NOOP:
        return f"Post {item_id} is already in {status} status"
    if result.outcome is UpdateOutcome.NOT_FOUND:
        return f"Post {item_id} not found"
    reason = result.error.message if result.error else "unknown error"
    return f"Failed to update post {item_id} to status {status}. Error: {reason}"


def _as_item_id(value: object) -> int | None:
    """Coerce a directory entry to an item id, or ``None`` if it is not one."""
    try:
        return int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return None
