from __future__ import annotations

import pytest

from jsm_operator import app
from jsm_operator.config import RESOLVED_TEAM_ANNOTATION, OperatorConfig
from jsm_operator.domain.outcome import Action
from tests.helpers.catalog import (
    NAMESPACE,
    FakeCatalogGateway,
    InMemoryResourceStore,
    make_service,
    make_team,
)


def test_reconcile_team_then_service_converges() -> None:
    store = InMemoryResourceStore(services=[make_service()], teams=[make_team()])
    gateway = FakeCatalogGateway(teams={"team-a": "T1"})

    team_result = app.reconcile_team(NAMESPACE, "team-a", store=store, gateway=gateway)
    service_result = app.reconcile_service(
        NAMESPACE,
        "svc-a",
        store=store,
        gateway=gateway,
        operator_config=OperatorConfig(),
    )

    assert team_result.action is Action.TEAM_RESOLVED
    assert service_result.action is Action.CREATE
    assert next(iter(store.annotations.values())) == {RESOLVED_TEAM_ANNOTATION: "T1"}


def test_service_reconciler_uses_configured_retry_delay() -> None:
    reconciler = app.build_service_reconciler(
        store=InMemoryResourceStore(),
        gateway=FakeCatalogGateway(),
        operator_config=OperatorConfig(conflict_retry_delay=4.0),
    )

    assert reconciler.conflict_retry_delay == 4.0


def test_close_default_gateway_closes_shared_client(monkeypatch: pytest.MonkeyPatch) -> None:
    closed: list[str] = []

    class RecordingClient(FakeCatalogGateway):
        def close(self) -> None:
            closed.append("closed")

    monkeypatch.setattr(app, "JsmCatalogClient", RecordingClient)
    app.close_default_gateway()

    first = app._default_gateway()  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    app.close_default_gateway()
    second = app._default_gateway()  # noqa: SLF001  # type: ignore[reportPrivateUsage]
    app.close_default_gateway()

    assert first is not second
    assert closed == ["closed", "closed"]
