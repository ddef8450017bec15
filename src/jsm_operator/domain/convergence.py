"""Convergence of a service resource onto the remote catalog.

The engine talks to the catalog but never to the resource store: every pass ends in
a ``ServiceOutcome`` carrying the complete status to persist (or none), which the
projector applies in a single write.

States, checked in order:

* no team reference            -> skip
* team has no resolved ID yet  -> wait for the team reconciler
* bound and generation current -> up to date
* tier level outside 1-4       -> skip until the resource is corrected
* unbound                      -> acquire a same-named catalog service, else create
* bound and generation stale   -> update; a revision conflict refreshes the revision
                                  and asks for a retry

A conflict refresh that finds the catalog still at the revision we sent cannot make
progress. It raises ``RemoteFailureError`` and the reconcile falls back to the
runtime's error backoff instead of an explicit retry.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import (
    CatalogError,
    RemoteFailureError,
    RemoteNotFoundError,
    RevisionConflictError,
)
from .model import MAX_TIER_LEVEL, MIN_TIER_LEVEL, CreateServiceRequest, UpdateServiceRequest
from .outcome import Action, ServiceOutcome

if TYPE_CHECKING:
    from .model import RemoteService, ServiceResource, ServiceStatus
    from .ports.catalog import CatalogGateway

log = getLogger(__name__)


def ensure_team_relationship(
    gateway: CatalogGateway,
    status: ServiceStatus,
    team_id: str,
) -> ServiceStatus:
    """Link the bound service to ``team_id`` and record the new relationship.

    Always creates a relationship. Callers only invoke this for a newly bound service
    or a changed team.
    """

    relationship_id = gateway.create_team_relationship(status.id, team_id)
    return replace(status, team_relationship_id=relationship_id, resolved_team_arn=team_id)


@dataclass(slots=True)
class ServiceConvergenceEngine:
    """Run one convergence step per call; see the module docstring for the states."""

    gateway: CatalogGateway

    def converge(self, service: ServiceResource, team_id: str | None) -> ServiceOutcome:
        """Decide and execute one convergence step for ``service``.

        ``team_id`` is ``None`` when the service references no team, and an empty
        string when the referenced team has not been resolved yet.
        """

        if team_id is None:
            log.info("No team specified for service %s, skipping", service.key)
            return ServiceOutcome(action=Action.SKIP_NO_TEAM_REF)

        if not team_id:
            log.info(
                "Team %s of service %s has no ID yet, waiting for it",
                service.spec.team_name,
                service.key,
            )
            return ServiceOutcome(action=Action.WAIT_FOR_TEAM)

        if service.is_up_to_date:
            log.debug("Service %s is up to date (id=%s)", service.key, service.status.id)
            return ServiceOutcome(action=Action.UP_TO_DATE)

        if not service.spec.has_valid_tier_level:
            log.warning(
                "Service %s has tier level %s outside %s-%s, skipping",
                service.key,
                service.spec.tier_level,
                MIN_TIER_LEVEL,
                MAX_TIER_LEVEL,
            )
            return ServiceOutcome(action=Action.INVALID_SPEC)

        if not service.status.is_bound:
            return self._bind(service, team_id)
        return self._update(service, team_id)

    def _bind(self, service: ServiceResource, team_id: str) -> ServiceOutcome:
        remote = self.gateway.find_service_by_name(service.remote_name)
        if remote is not None:
            return self._acquire(service, team_id, remote)
        return self._create(service, team_id)

    def _acquire(
        self,
        service: ServiceResource,
        team_id: str,
        remote: RemoteService,
    ) -> ServiceOutcome:
        status = replace(
            service.status,
            id=remote.id,
            revision=remote.revision,
            observed_generation=service.generation,
            tier_id=remote.tier_id,
            tier_level=remote.tier_level,
        )
        status = ensure_team_relationship(self.gateway, status, team_id)
        log.info("Acquired existing catalog service %s for %s", remote.id, service.key)
        return ServiceOutcome(action=Action.ACQUIRE, status=status)

    def _create(self, service: ServiceResource, team_id: str) -> ServiceOutcome:
        request = CreateServiceRequest(
            name=service.remote_name,
            description=service.spec.description,
            tier_level=service.spec.tier_level,
            service_type_key=service.spec.service_type_key,
            team_ids=(team_id,),
        )
        created = self.gateway.create_service(request)
        status = replace(
            service.status,
            id=created.id,
            revision=created.revision,
            observed_generation=service.generation,
            tier_id=created.tier_id,
            tier_level=service.spec.tier_level,
        )
        status = ensure_team_relationship(self.gateway, status, team_id)
        log.info("Created catalog service %s for %s", created.id, service.key)
        return ServiceOutcome(action=Action.CREATE, status=status)

    def _update(self, service: ServiceResource, team_id: str) -> ServiceOutcome:
        current = service.status
        request = UpdateServiceRequest(
            id=current.id,
            revision=current.revision,
            name=service.remote_name,
            description=service.spec.description,
            tier_id=self._resolve_tier_id(service),
            service_type_key=service.spec.service_type_key,
            team_ids=(team_id,),
        )
        try:
            updated = self.gateway.update_service(request)
        except RevisionConflictError:
            log.info("Revision conflict for service %s, refreshing revision", service.key)
            return self._refresh_revision(service)

        if updated.id and updated.id != current.id:
            raise RemoteFailureError(
                f"update of {current.id} returned a different service {updated.id}"
            )

        status = replace(
            current,
            id=updated.id or current.id,
            revision=updated.revision,
            observed_generation=service.generation,
            tier_id=updated.tier_id,
            tier_level=updated.tier_level,
        )
        if current.resolved_team_arn != team_id:
            log.info(
                "Team of service %s changed from %r to %r, relinking",
                service.key,
                current.resolved_team_arn,
                team_id,
            )
            status = ensure_team_relationship(self.gateway, status, team_id)

        log.info("Updated catalog service %s for %s", status.id, service.key)
        return ServiceOutcome(action=Action.UPDATE, status=status)

    def _resolve_tier_id(self, service: ServiceResource) -> str:
        current = service.status
        if service.spec.tier_level == current.tier_level:
            return current.tier_id

        log.info(
            "Tier level of service %s changed from %s to %s",
            service.key,
            current.tier_level,
            service.spec.tier_level,
        )
        try:
            return self.gateway.get_tier_id_by_level(service.spec.tier_level)
        except CatalogError:
            # The update payload carries only the tier ID, so keeping the old one
            # leaves the tier unchanged.
            log.warning(
                "Could not resolve tier level %s, keeping tier id %r",
                service.spec.tier_level,
                current.tier_id,
                exc_info=True,
            )
            return current.tier_id

    def _refresh_revision(self, service: ServiceResource) -> ServiceOutcome:
        current = service.status
        latest = self.gateway.find_service_by_name(service.remote_name)
        if latest is None:
            raise RemoteNotFoundError(
                f"service {service.remote_name!r} vanished while refreshing its revision"
            )
        if latest.id != current.id:
            raise RemoteFailureError(
                f"service {service.remote_name!r} now resolves to {latest.id}, "
                f"expected {current.id}"
            )
        if latest.revision == current.revision:
            raise RemoteFailureError(
                f"revision conflict on {current.id} but the catalog still reports "
                f"revision {current.revision!r}"
            )
        return ServiceOutcome(
            action=Action.REFRESH_REVISION,
            status=replace(current, revision=latest.revision),
            requeue=True,
        )
