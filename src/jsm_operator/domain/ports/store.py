"""Port for the declarative store holding resource specs and status."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from jsm_operator.domain.model import (
        ResourceKey,
        ServiceResource,
        ServiceStatus,
        TeamResource,
        TeamStatus,
    )


@runtime_checkable
class ResourceStore(Protocol):
    """Get/update access to persisted resources.

    ``get_*`` raise ``ResourceNotFoundError`` for absent resources; status writes are
    last-writer-wins.
    """

    def get_service(self, key: ResourceKey) -> ServiceResource: ...

    def get_team(self, key: ResourceKey) -> TeamResource: ...

    def update_service_status(self, key: ResourceKey, status: ServiceStatus) -> None: ...

    def update_team_status(self, key: ResourceKey, status: TeamStatus) -> None: ...

    def list_services_for_team(self, namespace: str, team_name: str) -> list[ResourceKey]: ...

    def touch_service(self, key: ResourceKey, annotation: str, value: str) -> None: ...


__all__ = ["ResourceStore"]
