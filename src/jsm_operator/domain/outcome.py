"""Result values produced by the convergence engine and the reconcilers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import ServiceStatus, TeamStatus


class Action(StrEnum):
    """What a single reconcile decided to do."""

    NOT_FOUND = "not_found"
    SKIP_NO_TEAM_REF = "skip_no_team_ref"
    WAIT_FOR_TEAM = "wait_for_team"
    INVALID_SPEC = "invalid_spec"
    UP_TO_DATE = "up_to_date"
    ACQUIRE = "acquire"
    CREATE = "create"
    UPDATE = "update"
    REFRESH_REVISION = "refresh_revision"
    TEAM_RESOLVED = "team_resolved"


CONVERGED_ACTIONS = frozenset({Action.ACQUIRE, Action.CREATE, Action.UPDATE})


@dataclass(frozen=True, slots=True)
class ServiceOutcome:
    """Decision of one service convergence pass.

    ``status`` is the complete status to persist, or ``None`` when nothing changes.
    ``requeue`` asks the scheduler for an explicit retry.
    """

    action: Action
    status: ServiceStatus | None = None
    requeue: bool = False


@dataclass(frozen=True, slots=True)
class TeamOutcome:
    action: Action
    team_id: str
    status: TeamStatus | None = None


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """What the runtime needs to know after a reconcile returned normally."""

    action: Action
    requeue_after: float | None = None

    @property
    def requeue(self) -> bool:
        return self.requeue_after is not None
