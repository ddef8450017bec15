"""Translation between catalog payloads and domain values."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jsm_operator.domain.model import RemoteService

from .schema import (
    CreateServiceInput,
    ResponderValue,
    ServiceNode,
    ServicePayload,
    ServiceProperty,
    ServiceTierInput,
    ServiceTypeInput,
    UpdateServiceInput,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from jsm_operator.domain.model import CreateServiceRequest, UpdateServiceRequest


def _responders(team_ids: Iterable[str]) -> list[ServiceProperty]:
    return [ServiceProperty(key="responders", value=ResponderValue(teams=list(team_ids)))]


def build_create_input(request: CreateServiceRequest, *, cloud_id: str) -> dict[str, object]:
    payload = CreateServiceInput(
        name=request.name,
        cloud_id=cloud_id,
        description=request.description,
        service_tier=ServiceTierInput(level=request.tier_level),
        service_type=ServiceTypeInput(key=request.service_type_key),
        properties=_responders(request.team_ids),
    )
    return payload.model_dump(by_alias=True)


def build_update_input(request: UpdateServiceRequest) -> dict[str, object]:
    payload = UpdateServiceInput(
        id=request.id,
        description=request.description,
        name=request.name,
        revision=request.revision,
        service_tier=request.tier_id,
        properties=_responders(request.team_ids),
    )
    return payload.model_dump(by_alias=True)


def service_from_node(node: ServiceNode) -> RemoteService:
    return RemoteService(id=node.id, name=node.name, revision=node.revision)


def service_from_payload(payload: ServicePayload) -> RemoteService:
    tier = payload.service_tier
    service_type = payload.service_type
    return RemoteService(
        id=payload.id,
        name=payload.name,
        revision=payload.revision,
        tier_id=tier.id if tier else "",
        tier_level=tier.level if tier else 0,
        service_type_key=service_type.key if service_type else "",
    )
