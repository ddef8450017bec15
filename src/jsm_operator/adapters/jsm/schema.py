"""Pydantic models describing the catalog GraphQL payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class JsmBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def _none_to_empty(value: object) -> object:
    return "" if value is None else value


class GraphQLError(JsmBaseModel):
    message: str


class GraphQLResponse(JsmBaseModel):
    data: dict[str, object] | None = None
    errors: list[GraphQLError] = Field(default_factory=list)


# Queries


class ServiceNode(JsmBaseModel):
    id: str
    name: str
    revision: str = ""

    _normalize_revision = field_validator("revision", mode="before")(_none_to_empty)


class ServiceEdge(JsmBaseModel):
    node: ServiceNode


class ServiceConnection(JsmBaseModel):
    edges: list[ServiceEdge] = Field(default_factory=list)


class ServicesByNameData(JsmBaseModel):
    dev_ops_services: ServiceConnection = Field(alias="devOpsServices")


class ServiceTierPayload(JsmBaseModel):
    id: str = ""
    level: int = 0


class ServiceTiersData(JsmBaseModel):
    dev_ops_service_tiers: list[ServiceTierPayload] = Field(
        default_factory=list, alias="devOpsServiceTiers"
    )


class TeamNode(JsmBaseModel):
    id: str
    name: str


class TeamEdge(JsmBaseModel):
    node: TeamNode


class TeamConnection(JsmBaseModel):
    edges: list[TeamEdge] = Field(default_factory=list)


class OpsgenieTeams(JsmBaseModel):
    all_opsgenie_teams: TeamConnection = Field(alias="allOpsgenieTeams")


class TeamsData(JsmBaseModel):
    opsgenie: OpsgenieTeams


# Mutations


class MutationError(JsmBaseModel):
    message: str


class ServiceTypePayload(JsmBaseModel):
    key: str = ""


class ServicePayload(JsmBaseModel):
    id: str
    name: str
    revision: str
    service_tier: ServiceTierPayload | None = Field(default=None, alias="serviceTier")
    service_type: ServiceTypePayload | None = Field(default=None, alias="serviceType")


class ServiceMutationPayload(JsmBaseModel):
    success: bool
    errors: list[MutationError] | None = None
    service: ServicePayload | None = None

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors or ()]


class CreateServiceData(JsmBaseModel):
    result: ServiceMutationPayload = Field(alias="createDevOpsService")


class UpdateServiceData(JsmBaseModel):
    result: ServiceMutationPayload = Field(alias="updateDevOpsService")


class RelationshipPayload(JsmBaseModel):
    id: str


class RelationshipMutationPayload(JsmBaseModel):
    success: bool
    errors: list[MutationError] | None = None
    relationship: RelationshipPayload | None = Field(
        default=None, alias="serviceAndOpsgenieTeamRelationship"
    )

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors or ()]


class CreateRelationshipData(JsmBaseModel):
    result: RelationshipMutationPayload = Field(
        alias="createDevOpsServiceAndOpsgenieTeamRelationship"
    )


# Inputs


class ResponderValue(JsmBaseModel):
    teams: list[str]


class ServiceProperty(JsmBaseModel):
    key: str = "responders"
    value: ResponderValue


class ServiceTierInput(JsmBaseModel):
    level: int


class ServiceTypeInput(JsmBaseModel):
    key: str


class CreateServiceInput(JsmBaseModel):
    name: str
    cloud_id: str = Field(alias="cloudId")
    description: str
    service_tier: ServiceTierInput = Field(alias="serviceTier")
    service_type: ServiceTypeInput = Field(alias="serviceType")
    properties: list[ServiceProperty]


class UpdateServiceInput(JsmBaseModel):
    id: str
    description: str
    name: str
    revision: str
    service_tier: str = Field(alias="serviceTier")
    properties: list[ServiceProperty]
