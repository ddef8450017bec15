"""Mapping between custom resource manifests and domain resources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsm_operator.domain.model import (
    Condition,
    ResourceKey,
    ServiceResource,
    ServiceSpec,
    ServiceStatus,
    TeamRef,
    TeamResource,
    TeamSpec,
    TeamStatus,
)

from .schema import (
    ConditionManifest,
    ServiceManifest,
    ServiceStatusManifest,
    TeamManifest,
    TeamStatusManifest,
)

if TYPE_CHECKING:
    from collections.abc import Mapping


def service_from_manifest(manifest: Mapping[str, object]) -> ServiceResource:
    parsed = ServiceManifest.model_validate(manifest)
    spec = parsed.spec
    status = parsed.status
    team_ref = TeamRef(spec.team_ref.name) if spec.team_ref and spec.team_ref.name else None
    return ServiceResource(
        key=ResourceKey(parsed.metadata.namespace, parsed.metadata.name),
        generation=parsed.metadata.generation,
        spec=ServiceSpec(
            name=spec.name,
            description=spec.description,
            tier_level=spec.tier_level,
            service_type_key=spec.service_type_key,
            team_ref=team_ref,
        ),
        status=ServiceStatus(
            id=status.id,
            revision=status.revision,
            observed_generation=status.observed_generation,
            tier_id=status.tier_id,
            tier_level=status.tier_level,
            team_relationship_id=status.team_relationship_id,
            resolved_team_arn=status.resolved_team_arn,
            conditions=tuple(
                Condition(
                    type=condition.type,
                    status=condition.status,
                    reason=condition.reason,
                    message=condition.message,
                    last_transition_time=condition.last_transition_time,
                )
                for condition in status.conditions
            ),
        ),
    )


def service_status_to_manifest(status: ServiceStatus) -> dict[str, object]:
    manifest = ServiceStatusManifest(
        conditions=[
            ConditionManifest(
                type=condition.type,
                status=condition.status,
                reason=condition.reason,
                message=condition.message,
                last_transition_time=condition.last_transition_time,
            )
            for condition in status.conditions
        ],
        id=status.id,
        revision=status.revision,
        observed_generation=status.observed_generation,
        tier_id=status.tier_id,
        tier_level=status.tier_level,
        team_relationship_id=status.team_relationship_id,
        resolved_team_arn=status.resolved_team_arn,
    )
    return manifest.model_dump(by_alias=True)


def team_from_manifest(manifest: Mapping[str, object]) -> TeamResource:
    parsed = TeamManifest.model_validate(manifest)
    return TeamResource(
        key=ResourceKey(parsed.metadata.namespace, parsed.metadata.name),
        generation=parsed.metadata.generation,
        spec=TeamSpec(name=parsed.spec.name, id=parsed.spec.id),
        status=TeamStatus(
            id=parsed.status.id,
            observed_generation=parsed.status.observed_generation,
        ),
    )


def team_status_to_manifest(status: TeamStatus) -> dict[str, object]:
    manifest = TeamStatusManifest(id=status.id, observed_generation=status.observed_generation)
    return manifest.model_dump(by_alias=True)
