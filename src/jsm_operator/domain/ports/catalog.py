"""Port for the remote service catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from jsm_operator.domain.model import (
        CreateServiceRequest,
        RemoteService,
        UpdateServiceRequest,
    )


@runtime_checkable
class CatalogGateway(Protocol):
    """Typed operations against the remote catalog.

    Failures are raised as ``CatalogError`` subclasses: ``RemoteNotFoundError``,
    ``RevisionConflictError`` or ``RemoteFailureError``.
    """

    def find_service_by_name(self, name: str) -> RemoteService | None: ...

    def create_service(self, request: CreateServiceRequest) -> RemoteService: ...

    def update_service(self, request: UpdateServiceRequest) -> RemoteService: ...

    def get_tier_id_by_level(self, level: int) -> str: ...

    def create_team_relationship(self, service_id: str, team_id: str) -> str: ...

    def find_team_id_by_name(self, name: str) -> str: ...


__all__ = ["CatalogGateway"]
