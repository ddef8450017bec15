"""Domain model for the service catalog resources.

Resources are immutable snapshots. A reconcile works on its own copy of spec and
status and produces a new status value instead of mutating the one it loaded.
"""

from __future__ import annotations

from dataclasses import dataclass, field

MIN_TIER_LEVEL = 1
MAX_TIER_LEVEL = 4


@dataclass(frozen=True, slots=True)
class ResourceKey:
    """Namespace/name pair the watch runtime delivers to a reconciler."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass(frozen=True, slots=True, kw_only=True)
class Condition:
    type: str
    status: str
    reason: str = ""
    message: str = ""
    last_transition_time: str = ""


@dataclass(frozen=True, slots=True)
class TeamRef:
    name: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ServiceSpec:
    name: str = ""
    description: str = ""
    tier_level: int = MIN_TIER_LEVEL
    service_type_key: str = ""
    team_ref: TeamRef | None = None

    @property
    def has_valid_tier_level(self) -> bool:
        return MIN_TIER_LEVEL <= self.tier_level <= MAX_TIER_LEVEL

    @property
    def team_name(self) -> str:
        return self.team_ref.name if self.team_ref is not None else ""


@dataclass(frozen=True, slots=True, kw_only=True)
class ServiceStatus:
    id: str = ""
    revision: str = ""
    observed_generation: int = 0
    tier_id: str = ""
    tier_level: int = 0
    team_relationship_id: str = ""
    resolved_team_arn: str = ""
    conditions: tuple[Condition, ...] = field(default_factory=tuple)

    @property
    def is_bound(self) -> bool:
        return bool(self.id)


@dataclass(frozen=True, slots=True, kw_only=True)
class ServiceResource:
    key: ResourceKey
    generation: int
    spec: ServiceSpec
    status: ServiceStatus = field(default_factory=ServiceStatus)

    @property
    def remote_name(self) -> str:
        """Name the service carries in the catalog; defaults to the resource name."""

        return self.spec.name or self.key.name

    @property
    def is_up_to_date(self) -> bool:
        return self.status.is_bound and self.status.observed_generation == self.generation


@dataclass(frozen=True, slots=True, kw_only=True)
class TeamSpec:
    name: str
    id: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class TeamStatus:
    id: str = ""
    observed_generation: int = 0


@dataclass(frozen=True, slots=True, kw_only=True)
class TeamResource:
    key: ResourceKey
    generation: int
    spec: TeamSpec
    status: TeamStatus = field(default_factory=TeamStatus)

    @property
    def lookup_name(self) -> str:
        return self.spec.name or self.key.name


@dataclass(frozen=True, slots=True, kw_only=True)
class RemoteService:
    """Projection of a catalog service; the catalog owns the entity."""

    id: str
    name: str
    revision: str
    tier_id: str = ""
    tier_level: int = 0
    service_type_key: str = ""


@dataclass(frozen=True, slots=True, kw_only=True)
class CreateServiceRequest:
    name: str
    description: str
    tier_level: int
    service_type_key: str
    team_ids: tuple[str, ...]


@dataclass(frozen=True, slots=True, kw_only=True)
class UpdateServiceRequest:
    id: str
    revision: str
    name: str
    description: str
    tier_id: str
    service_type_key: str
    team_ids: tuple[str, ...]
