"""Resource store backed by the Kubernetes custom objects API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException

from jsm_operator.config.operator import OperatorConfig
from jsm_operator.domain.errors import ResourceNotFoundError, StatusWriteError
from jsm_operator.domain.model import ResourceKey
from jsm_operator.domain.ports.store import ResourceStore

from .translator import (
    service_from_manifest,
    service_status_to_manifest,
    team_from_manifest,
    team_status_to_manifest,
)

if TYPE_CHECKING:
    from jsm_operator.domain.model import (
        ServiceResource,
        ServiceStatus,
        TeamResource,
        TeamStatus,
    )

log = getLogger(__name__)

_NOT_FOUND = 404


def build_custom_objects_api() -> client.CustomObjectsApi:
    """Load in-cluster credentials, falling back to the local kubeconfig."""

    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()
    return client.CustomObjectsApi()


class KubernetesResourceStore:
    def __init__(
        self,
        *,
        api: Any | None = None,
        operator_config: OperatorConfig | None = None,
    ) -> None:
        self._api = api if api is not None else build_custom_objects_api()
        self._config = operator_config or OperatorConfig()

    def get_service(self, key: ResourceKey) -> ServiceResource:
        return service_from_manifest(self._get(self._config.service_plural, key))

    def get_team(self, key: ResourceKey) -> TeamResource:
        return team_from_manifest(self._get(self._config.team_plural, key))

    def update_service_status(self, key: ResourceKey, status: ServiceStatus) -> None:
        body = {"status": service_status_to_manifest(status)}
        self._patch_status(self._config.service_plural, key, body)

    def update_team_status(self, key: ResourceKey, status: TeamStatus) -> None:
        body = {"status": team_status_to_manifest(status)}
        self._patch_status(self._config.team_plural, key, body)

    def list_services_for_team(self, namespace: str, team_name: str) -> list[ResourceKey]:
        response = self._api.list_namespaced_custom_object(
            self._config.group,
            self._config.version,
            namespace,
            self._config.service_plural,
        )
        keys: list[ResourceKey] = []
        for item in cast(dict[str, Any], response).get("items", []):
            team_ref = (item.get("spec") or {}).get("teamRef") or {}
            if team_ref.get("name") == team_name:
                keys.append(ResourceKey(namespace, item["metadata"]["name"]))
        return keys

    def touch_service(self, key: ResourceKey, annotation: str, value: str) -> None:
        body = {"metadata": {"annotations": {annotation: value}}}
        try:
            self._api.patch_namespaced_custom_object(
                self._config.group,
                self._config.version,
                key.namespace,
                self._config.service_plural,
                key.name,
                body,
            )
        except ApiException as exc:
            if exc.status == _NOT_FOUND:
                log.debug("Service %s disappeared before it could be annotated", key)
                return
            raise

    def _get(self, plural: str, key: ResourceKey) -> dict[str, Any]:
        try:
            return self._api.get_namespaced_custom_object(
                self._config.group,
                self._config.version,
                key.namespace,
                plural,
                key.name,
            )
        except ApiException as exc:
            if exc.status == _NOT_FOUND:
                raise ResourceNotFoundError(f"{plural} {key} not found") from exc
            raise

    def _patch_status(self, plural: str, key: ResourceKey, body: dict[str, object]) -> None:
        try:
            self._api.patch_namespaced_custom_object_status(
                self._config.group,
                self._config.version,
                key.namespace,
                plural,
                key.name,
                body,
            )
        except ApiException as exc:
            if exc.status == _NOT_FOUND:
                raise ResourceNotFoundError(f"{plural} {key} not found") from exc
            raise StatusWriteError(
                f"failed to update status of {plural} {key}: {exc.status} {exc.reason}"
            ) from exc


if TYPE_CHECKING:
    _store_check: ResourceStore = KubernetesResourceStore()
