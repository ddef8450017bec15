"""Persistence of reconcile outcomes into resource status."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import IncompleteStatusError
from .model import Condition
from .outcome import CONVERGED_ACTIONS, Action, ServiceOutcome, TeamOutcome

if TYPE_CHECKING:
    from .model import ResourceKey, ServiceStatus
    from .ports.store import ResourceStore

log = getLogger(__name__)

READY_CONDITION = "Ready"

_READY_REASONS = {
    Action.ACQUIRE: "Acquired",
    Action.CREATE: "Created",
    Action.UPDATE: "Updated",
}


def _utcnow() -> datetime:
    return datetime.now(UTC)


def set_condition(
    conditions: tuple[Condition, ...],
    *,
    condition_type: str,
    status: str,
    reason: str = "",
    message: str = "",
    now: datetime,
) -> tuple[Condition, ...]:
    """Return ``conditions`` with ``condition_type`` inserted or replaced.

    The transition time only moves when the condition's status flips.
    """

    timestamp = now.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
    updated: list[Condition] = []
    found = False
    for condition in conditions:
        if condition.type != condition_type:
            updated.append(condition)
            continue
        found = True
        transition = (
            condition.last_transition_time if condition.status == status else timestamp
        )
        updated.append(
            Condition(
                type=condition_type,
                status=status,
                reason=reason,
                message=message,
                last_transition_time=transition,
            )
        )
    if not found:
        updated.append(
            Condition(
                type=condition_type,
                status=status,
                reason=reason,
                message=message,
                last_transition_time=timestamp,
            )
        )
    return tuple(updated)


@dataclass(slots=True)
class StatusProjector:
    """Apply outcomes to the store, one status write per terminal path."""

    store: ResourceStore
    clock: Callable[[], datetime] = field(default=_utcnow)

    def project_service(self, key: ResourceKey, outcome: ServiceOutcome) -> bool:
        """Persist the outcome's service status; return whether a write happened."""

        if outcome.status is None:
            return False

        status = outcome.status
        if status.id and not status.revision:
            raise IncompleteStatusError(
                f"refusing to persist status of {key} with id {status.id!r} but no revision"
            )
        if outcome.action in CONVERGED_ACTIONS:
            status = self._mark_ready(status, outcome.action)

        self.store.update_service_status(key, status)
        log.debug("Persisted %s status for service %s", outcome.action, key)
        return True

    def project_team(self, key: ResourceKey, outcome: TeamOutcome) -> bool:
        if outcome.status is None:
            return False
        self.store.update_team_status(key, outcome.status)
        log.debug("Persisted team status for %s (id=%s)", key, outcome.team_id)
        return True

    def _mark_ready(self, status: ServiceStatus, action: Action) -> ServiceStatus:
        conditions = set_condition(
            status.conditions,
            condition_type=READY_CONDITION,
            status="True",
            reason=_READY_REASONS[action],
            message=f"Catalog service {status.id} at revision {status.revision}",
            now=self.clock(),
        )
        return replace(status, conditions=conditions)
