"""Pydantic models for the JSMService and JSMTeam custom resource manifests."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ManifestModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ObjectMeta(ManifestModel):
    name: str
    namespace: str
    generation: int = 0
    annotations: dict[str, str] = Field(default_factory=dict)


class ConditionManifest(ManifestModel):
    type: str
    status: str
    reason: str = ""
    message: str = ""
    last_transition_time: str = Field(default="", alias="lastTransitionTime")


class TeamRefManifest(ManifestModel):
    name: str = ""


class ServiceSpecManifest(ManifestModel):
    name: str = ""
    description: str = ""
    tier_level: int = Field(alias="tierLevel")
    service_type_key: str = Field(default="", alias="serviceTypeKey")
    team_ref: TeamRefManifest | None = Field(default=None, alias="teamRef")


class ServiceStatusManifest(ManifestModel):
    conditions: list[ConditionManifest] = Field(default_factory=list)
    id: str = ""
    revision: str = ""
    observed_generation: int = Field(default=0, alias="observedGeneration")
    tier_id: str = Field(default="", alias="tierID")
    tier_level: int = Field(default=0, alias="tierLevel")
    team_relationship_id: str = Field(default="", alias="teamRelationshipID")
    resolved_team_arn: str = Field(default="", alias="resolvedTeamARN")


class ServiceManifest(ManifestModel):
    metadata: ObjectMeta
    spec: ServiceSpecManifest
    status: ServiceStatusManifest = Field(default_factory=ServiceStatusManifest)


class TeamSpecManifest(ManifestModel):
    name: str
    id: str = ""


class TeamStatusManifest(ManifestModel):
    id: str = ""
    observed_generation: int = Field(default=0, alias="observedGeneration")


class TeamManifest(ManifestModel):
    metadata: ObjectMeta
    spec: TeamSpecManifest
    status: TeamStatusManifest = Field(default_factory=TeamStatusManifest)
