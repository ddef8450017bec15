"""Per-key reconcile flow: load, resolve the team, converge, project."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .convergence import ServiceConvergenceEngine
from .errors import ResourceNotFoundError
from .model import ResourceKey
from .outcome import Action, ReconcileResult
from .projector import StatusProjector
from .team_resolution import converge_team

if TYPE_CHECKING:
    from .model import ServiceResource
    from .ports.catalog import CatalogGateway
    from .ports.store import ResourceStore

log = getLogger(__name__)

DEFAULT_CONFLICT_RETRY_DELAY = 1.0


@dataclass(slots=True)
class ServiceReconciler:
    store: ResourceStore
    gateway: CatalogGateway
    conflict_retry_delay: float = DEFAULT_CONFLICT_RETRY_DELAY

    def reconcile(self, key: ResourceKey) -> ReconcileResult:
        log.info("Reconciling service %s", key)
        try:
            service = self.store.get_service(key)
        except ResourceNotFoundError:
            log.debug("Service %s no longer exists, ignoring", key)
            return ReconcileResult(action=Action.NOT_FOUND)

        team_id = self._referenced_team_id(service)
        engine = ServiceConvergenceEngine(self.gateway)
        outcome = engine.converge(service, team_id)
        StatusProjector(self.store).project_service(key, outcome)

        if outcome.requeue:
            return ReconcileResult(action=outcome.action, requeue_after=self.conflict_retry_delay)
        return ReconcileResult(action=outcome.action)

    def _referenced_team_id(self, service: ServiceResource) -> str | None:
        team_name = service.spec.team_name
        if not team_name:
            return None
        # A missing team is an error here, unlike a missing service.
        team = self.store.get_team(ResourceKey(service.key.namespace, team_name))
        return team.status.id


@dataclass(slots=True)
class TeamReconciler:
    store: ResourceStore
    gateway: CatalogGateway
    wake_annotation: str | None = None

    def reconcile(self, key: ResourceKey) -> ReconcileResult:
        log.info("Reconciling team %s", key)
        try:
            team = self.store.get_team(key)
        except ResourceNotFoundError:
            log.debug("Team %s no longer exists, ignoring", key)
            return ReconcileResult(action=Action.NOT_FOUND)

        previous_id = team.status.id
        outcome = converge_team(team, self.gateway)
        StatusProjector(self.store).project_team(key, outcome)
        log.info("Team %s resolved to %s", key, outcome.team_id)

        if self.wake_annotation and outcome.team_id != previous_id:
            self._wake_dependent_services(key, outcome.team_id, self.wake_annotation)
        return ReconcileResult(action=outcome.action)

    def _wake_dependent_services(self, key: ResourceKey, team_id: str, annotation: str) -> None:
        """Stamp dependants so the runtime re-delivers services waiting on this team."""

        for service_key in self.store.list_services_for_team(key.namespace, key.name):
            log.info("Notifying service %s of team %s id %s", service_key, key, team_id)
            self.store.touch_service(service_key, annotation, team_id)
