"""kopf handlers binding the watch runtime to the reconcilers.

kopf delivers at most one handler call per resource at a time and owns retry
scheduling: a requeue becomes a ``kopf.TemporaryError`` with the configured delay,
every other exception falls through to kopf's backoff.
"""

from __future__ import annotations

import logging
from typing import Any

import kopf

from jsm_operator.app import close_default_gateway, reconcile_service, reconcile_team
from jsm_operator.config import (
    API_GROUP,
    API_VERSION,
    SERVICE_PLURAL,
    TEAM_PLURAL,
    configure_logging,
    get_operator_config,
)

log = logging.getLogger(__name__)


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure operator settings on startup."""
    configure_logging()
    settings.posting.level = logging.WARNING
    operator_config = get_operator_config()
    if operator_config.clusterwide:
        settings.watching.clusterwide = True
    else:
        settings.watching.namespaces = [operator_config.watch_namespace]


@kopf.on.cleanup()
def cleanup(**_: Any) -> None:
    log.info("Operator shutting down, closing catalog client")
    close_default_gateway()


@kopf.on.resume(API_GROUP, API_VERSION, TEAM_PLURAL)
@kopf.on.create(API_GROUP, API_VERSION, TEAM_PLURAL)
@kopf.on.update(API_GROUP, API_VERSION, TEAM_PLURAL)
def team_handler(name: str, namespace: str, **_: Any) -> None:
    reconcile_team(namespace, name)


@kopf.on.resume(API_GROUP, API_VERSION, SERVICE_PLURAL)
@kopf.on.create(API_GROUP, API_VERSION, SERVICE_PLURAL)
@kopf.on.update(API_GROUP, API_VERSION, SERVICE_PLURAL)
def service_handler(name: str, namespace: str, **_: Any) -> None:
    result = reconcile_service(namespace, name)
    if result.requeue_after is not None:
        raise kopf.TemporaryError(
            f"revision of {namespace}/{name} refreshed, retrying",
            delay=result.requeue_after,
        )
