"""GraphQL client for the Jira Service Management service catalog."""

from __future__ import annotations

import asyncio
import threading
from logging import getLogger
from typing import TYPE_CHECKING, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from jsm_operator.adapters.http_resilience import ResilientClient
from jsm_operator.config.jsm import JsmConfig, get_jsm_config
from jsm_operator.domain.errors import (
    RemoteFailureError,
    TeamNotFoundError,
    TierNotFoundError,
    classify_failure,
)
from jsm_operator.domain.ports.catalog import CatalogGateway

from . import queries
from .schema import (
    CreateRelationshipData,
    CreateServiceData,
    GraphQLResponse,
    ServicesByNameData,
    ServiceTiersData,
    TeamsData,
    UpdateServiceData,
)
from .translator import (
    build_create_input,
    build_update_input,
    service_from_node,
    service_from_payload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine
    from types import TracebackType

    from jsm_operator.config.http_resilience import ResilienceConfig
    from jsm_operator.domain.model import (
        CreateServiceRequest,
        RemoteService,
        UpdateServiceRequest,
    )

log = getLogger(__name__)

T = TypeVar("T")
TData = TypeVar("TData", bound=BaseModel)


class JsmCatalogClient:
    """Catalog gateway over the GraphQL API.

    Public calls block the calling thread. They are executed on one event loop owned
    by the gateway, running in a background thread, through one long-lived resilient
    client. Reconciles running in parallel worker threads therefore share a single
    rate limiter. Call ``close`` (or use the gateway as a context manager) to stop
    the loop.
    """

    def __init__(
        self,
        *,
        config: JsmConfig | None = None,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config or get_jsm_config()
        self._client_factory = client_factory or ResilientClient
        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._session: ResilientClient | None = None

    def __enter__(self) -> JsmCatalogClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP session and stop the background loop."""

        with self._lock:
            loop, thread = self._loop, self._thread
            self._loop = self._thread = None
        if loop is None or thread is None:
            return
        asyncio.run_coroutine_threadsafe(self._close_session(), loop).result()
        loop.call_soon_threadsafe(loop.stop)
        thread.join()
        loop.close()
        log.debug("Catalog client loop stopped")

    @property
    def cloud_id(self) -> str:
        return self._config.cloud_id

    def find_service_by_name(self, name: str) -> RemoteService | None:
        data = self._execute(
            queries.GET_SERVICE_BY_NAME,
            queries.GET_SERVICE_BY_NAME_QUERY,
            {"cloudId": self.cloud_id, "name": name},
            ServicesByNameData,
        )
        # The filter matches substrings; only an exact name identifies the service.
        for edge in data.dev_ops_services.edges:
            if edge.node.name == name:
                return service_from_node(edge.node)
        if data.dev_ops_services.edges:
            log.debug(
                "Catalog has %d services containing %r but none named exactly so",
                len(data.dev_ops_services.edges),
                name,
            )
        return None

    def create_service(self, request: CreateServiceRequest) -> RemoteService:
        data = self._execute(
            queries.CREATE_SERVICE,
            queries.CREATE_SERVICE_MUTATION,
            {"input": build_create_input(request, cloud_id=self.cloud_id)},
            CreateServiceData,
        )
        result = data.result
        if not result.success or result.service is None:
            raise classify_failure("service creation", result.messages)
        return service_from_payload(result.service)

    def update_service(self, request: UpdateServiceRequest) -> RemoteService:
        data = self._execute(
            queries.UPDATE_SERVICE,
            queries.UPDATE_SERVICE_MUTATION,
            {"input": build_update_input(request)},
            UpdateServiceData,
        )
        result = data.result
        if not result.success or result.service is None:
            raise classify_failure("service update", result.messages)
        return service_from_payload(result.service)

    def get_tier_id_by_level(self, level: int) -> str:
        data = self._execute(
            queries.GET_TIER_ID_BY_LEVEL,
            queries.GET_TIER_ID_BY_LEVEL_QUERY,
            {"cloudId": self.cloud_id},
            ServiceTiersData,
        )
        for tier in data.dev_ops_service_tiers:
            if tier.level == level:
                return tier.id
        raise TierNotFoundError(f"no service tier found for level {level}")

    def create_team_relationship(self, service_id: str, team_id: str) -> str:
        data = self._execute(
            queries.CREATE_TEAM_RELATIONSHIP,
            queries.CREATE_TEAM_RELATIONSHIP_MUTATION,
            {"cloudId": self.cloud_id, "serviceId": service_id, "teamId": team_id},
            CreateRelationshipData,
        )
        result = data.result
        if not result.success or result.relationship is None:
            raise classify_failure("team relationship creation", result.messages)
        return result.relationship.id

    def find_team_id_by_name(self, name: str) -> str:
        data = self._execute(
            queries.RESOLVE_TEAM_ID_BY_NAME,
            queries.RESOLVE_TEAM_ID_BY_NAME_QUERY,
            {"cloudId": self.cloud_id},
            TeamsData,
        )
        for edge in data.opsgenie.all_opsgenie_teams.edges:
            if edge.node.name == name:
                return edge.node.id
        raise TeamNotFoundError(f"opsgenie team with name {name!r} not found")

    def _execute(
        self,
        operation: str,
        document: str,
        variables: dict[str, object],
        model: type[TData],
    ) -> TData:
        return self._run(self._execute_async(operation, document, variables, model))

    def _run(self, coro: Coroutine[object, object, T]) -> T:
        return asyncio.run_coroutine_threadsafe(coro, self._ensure_loop()).result()

    def _ensure_loop(self) -> asyncio.AbstractEventLoop:
        with self._lock:
            if self._loop is None:
                loop = asyncio.new_event_loop()
                thread = threading.Thread(
                    target=loop.run_forever, name="jsm-catalog-loop", daemon=True
                )
                thread.start()
                self._loop, self._thread = loop, thread
                log.debug("Catalog client loop started")
            return self._loop

    def _get_session(self) -> ResilientClient:
        # Only called on the loop thread.
        if self._session is None:
            self._session = self._client_factory(self._config.resilience)
        return self._session

    async def _close_session(self) -> None:
        session, self._session = self._session, None
        if session is not None:
            await session.aclose()

    async def _execute_async(
        self,
        operation: str,
        document: str,
        variables: dict[str, object],
        model: type[TData],
    ) -> TData:
        body = {"query": document, "variables": variables, "operationName": operation}
        log.debug("Sending %s to %s", operation, self._config.graphql_url)
        client = self._get_session()
        try:
            response = await client.post(self._config.graphql_url, json=body)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPError as exc:
            log.error(f"{operation} request failed: {exc}")
            raise RemoteFailureError(f"{operation} request failed: {exc}") from exc
        except ValueError as exc:
            raise RemoteFailureError(f"{operation} returned a non-JSON body") from exc

        try:
            envelope = GraphQLResponse.model_validate(payload)
        except ValidationError as exc:
            raise RemoteFailureError(f"{operation} returned an unexpected payload") from exc

        if envelope.errors:
            raise classify_failure(operation, (error.message for error in envelope.errors))
        if envelope.data is None:
            raise RemoteFailureError(f"{operation} returned no data")

        try:
            return model.model_validate(envelope.data)
        except ValidationError as exc:
            raise RemoteFailureError(f"{operation} returned an unexpected payload") from exc


if TYPE_CHECKING:
    _gateway_check: CatalogGateway = JsmCatalogClient()
