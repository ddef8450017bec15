"""Application orchestration entry points."""

from __future__ import annotations

from functools import lru_cache
from logging import getLogger
from typing import TYPE_CHECKING

from jsm_operator.adapters.jsm import JsmCatalogClient
from jsm_operator.adapters.kubernetes import KubernetesResourceStore
from jsm_operator.config import RESOLVED_TEAM_ANNOTATION, OperatorConfig, get_operator_config
from jsm_operator.domain.model import ResourceKey
from jsm_operator.domain.reconciler import ServiceReconciler, TeamReconciler

if TYPE_CHECKING:
    from jsm_operator.domain.outcome import ReconcileResult
    from jsm_operator.domain.ports.catalog import CatalogGateway
    from jsm_operator.domain.ports.store import ResourceStore

log = getLogger(__name__)


@lru_cache(maxsize=1)
def _default_operator_config() -> OperatorConfig:
    return get_operator_config()


@lru_cache(maxsize=1)
def _default_gateway() -> JsmCatalogClient:
    return JsmCatalogClient()


def close_default_gateway() -> None:
    """Stop the shared catalog client if this process created one."""

    if _default_gateway.cache_info().currsize:
        _default_gateway().close()
        _default_gateway.cache_clear()


@lru_cache(maxsize=1)
def _default_store() -> ResourceStore:
    return KubernetesResourceStore(operator_config=_default_operator_config())


def build_service_reconciler(
    *,
    store: ResourceStore | None = None,
    gateway: CatalogGateway | None = None,
    operator_config: OperatorConfig | None = None,
) -> ServiceReconciler:
    settings = operator_config or _default_operator_config()
    return ServiceReconciler(
        store=store or _default_store(),
        gateway=gateway or _default_gateway(),
        conflict_retry_delay=settings.conflict_retry_delay,
    )


def build_team_reconciler(
    *,
    store: ResourceStore | None = None,
    gateway: CatalogGateway | None = None,
) -> TeamReconciler:
    return TeamReconciler(
        store=store or _default_store(),
        gateway=gateway or _default_gateway(),
        wake_annotation=RESOLVED_TEAM_ANNOTATION,
    )


def reconcile_service(
    namespace: str,
    name: str,
    *,
    store: ResourceStore | None = None,
    gateway: CatalogGateway | None = None,
    operator_config: OperatorConfig | None = None,
) -> ReconcileResult:
    """Run one reconcile of the JSMService ``namespace/name``."""

    reconciler = build_service_reconciler(
        store=store, gateway=gateway, operator_config=operator_config
    )
    result = reconciler.reconcile(ResourceKey(namespace, name))
    log.info(
        "Service %s/%s reconciled: action=%s, requeue_after=%s",
        namespace,
        name,
        result.action,
        result.requeue_after,
    )
    return result


def reconcile_team(
    namespace: str,
    name: str,
    *,
    store: ResourceStore | None = None,
    gateway: CatalogGateway | None = None,
) -> ReconcileResult:
    """Run one reconcile of the JSMTeam ``namespace/name``."""

    result = build_team_reconciler(store=store, gateway=gateway).reconcile(
        ResourceKey(namespace, name)
    )
    log.info("Team %s/%s reconciled: action=%s", namespace, name, result.action)
    return result
