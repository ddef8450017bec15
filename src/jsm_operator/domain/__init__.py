"""Domain core: resources, convergence engine and status projection."""

from __future__ import annotations

from .convergence import ServiceConvergenceEngine, ensure_team_relationship
from .errors import (
    REVISION_CONFLICT_MESSAGE,
    CatalogError,
    IncompleteStatusError,
    RemoteErrorKind,
    RemoteFailureError,
    RemoteNotFoundError,
    ResourceNotFoundError,
    RevisionConflictError,
    StatusWriteError,
    TeamNotFoundError,
    TierNotFoundError,
    is_revision_conflict,
)
from .model import (
    Condition,
    CreateServiceRequest,
    RemoteService,
    ResourceKey,
    ServiceResource,
    ServiceSpec,
    ServiceStatus,
    TeamRef,
    TeamResource,
    TeamSpec,
    TeamStatus,
    UpdateServiceRequest,
)
from .outcome import Action, ReconcileResult, ServiceOutcome, TeamOutcome
from .projector import StatusProjector
from .reconciler import ServiceReconciler, TeamReconciler
from .team_resolution import converge_team, resolve_team_id

__all__ = [
    "REVISION_CONFLICT_MESSAGE",
    "Action",
    "CatalogError",
    "Condition",
    "CreateServiceRequest",
    "IncompleteStatusError",
    "ReconcileResult",
    "RemoteErrorKind",
    "RemoteFailureError",
    "RemoteNotFoundError",
    "RemoteService",
    "ResourceKey",
    "ResourceNotFoundError",
    "RevisionConflictError",
    "ServiceConvergenceEngine",
    "ServiceOutcome",
    "ServiceReconciler",
    "ServiceResource",
    "ServiceSpec",
    "ServiceStatus",
    "StatusProjector",
    "StatusWriteError",
    "TeamNotFoundError",
    "TeamOutcome",
    "TeamReconciler",
    "TeamRef",
    "TeamResource",
    "TeamSpec",
    "TeamStatus",
    "TierNotFoundError",
    "UpdateServiceRequest",
    "converge_team",
    "ensure_team_relationship",
    "is_revision_conflict",
    "resolve_team_id",
]
