from __future__ import annotations

import pytest

from jsm_operator.domain.errors import (
    REVISION_CONFLICT_MESSAGE,
    RemoteFailureError,
    ResourceNotFoundError,
    RevisionConflictError,
    TeamNotFoundError,
)
from jsm_operator.domain.model import RemoteService, ResourceKey
from jsm_operator.domain.outcome import Action
from jsm_operator.domain.reconciler import ServiceReconciler, TeamReconciler
from tests.helpers.catalog import (
    NAMESPACE,
    FakeCatalogGateway,
    InMemoryResourceStore,
    bound_status,
    make_service,
    make_team,
)

WAKE = "jsm.macpaw.dev/resolved-team-id"


def test_vanished_service_is_ignored() -> None:
    store = InMemoryResourceStore()
    gateway = FakeCatalogGateway()

    result = ServiceReconciler(store, gateway).reconcile(ResourceKey(NAMESPACE, "gone"))

    assert result.action is Action.NOT_FOUND
    assert result.requeue is False
    assert gateway.calls == []


def test_missing_team_resource_propagates() -> None:
    service = make_service(team="absent")
    store = InMemoryResourceStore(services=[service])

    with pytest.raises(ResourceNotFoundError):
        ServiceReconciler(store, FakeCatalogGateway()).reconcile(service.key)


def test_service_without_team_ref_skips_team_fetch() -> None:
    service = make_service(team=None)
    store = InMemoryResourceStore(services=[service])

    result = ServiceReconciler(store, FakeCatalogGateway()).reconcile(service.key)

    assert result.action is Action.SKIP_NO_TEAM_REF
    assert store.service_status_writes == []


def test_draft_service_with_invalid_tier_and_no_team_is_skipped() -> None:
    service = make_service(team=None, tier_level=7)
    store = InMemoryResourceStore(services=[service])
    gateway = FakeCatalogGateway()

    result = ServiceReconciler(store, gateway).reconcile(service.key)

    assert result.action is Action.SKIP_NO_TEAM_REF
    assert result.requeue is False
    assert gateway.calls == []


def test_service_waits_for_unresolved_team() -> None:
    service = make_service()
    store = InMemoryResourceStore(services=[service], teams=[make_team()])
    gateway = FakeCatalogGateway()

    result = ServiceReconciler(store, gateway).reconcile(service.key)

    assert result.action is Action.WAIT_FOR_TEAM
    assert gateway.calls == []
    assert store.service_status_writes == []


def test_create_then_second_reconcile_is_idempotent() -> None:
    service = make_service("svc-a", tier_level=2)
    store = InMemoryResourceStore(services=[service], teams=[make_team(status_id="T1")])
    gateway = FakeCatalogGateway()
    reconciler = ServiceReconciler(store, gateway)

    first = reconciler.reconcile(service.key)

    assert first.action is Action.CREATE
    status = store.services[service.key].status
    assert status.id
    assert status.revision
    assert status.tier_level == 2
    assert gateway.calls_to("create_team_relationship") == [(status.id, "T1")]
    assert len(store.service_status_writes) == 1

    gateway.calls.clear()
    second = reconciler.reconcile(service.key)

    assert second.action is Action.UP_TO_DATE
    assert gateway.calls == []
    assert len(store.service_status_writes) == 1


def test_spec_change_after_create_updates_remote_service() -> None:
    service = make_service("svc-a", tier_level=2)
    store = InMemoryResourceStore(services=[service], teams=[make_team(status_id="T1")])
    gateway = FakeCatalogGateway()
    reconciler = ServiceReconciler(store, gateway)
    reconciler.reconcile(service.key)
    store.bump_generation(service.key, description="Changed")
    gateway.calls.clear()

    result = reconciler.reconcile(service.key)

    assert result.action is Action.UPDATE
    assert gateway.calls_to("create_team_relationship") == []
    assert store.services[service.key].status.observed_generation == 2


def test_revision_conflict_requests_retry_with_configured_delay() -> None:
    service = make_service(generation=2, status=bound_status())
    store = InMemoryResourceStore(services=[service], teams=[make_team(status_id="T1")])
    gateway = FakeCatalogGateway()
    gateway.update_errors.append(
        RevisionConflictError("conflict", messages=[REVISION_CONFLICT_MESSAGE])
    )
    gateway.on_update_error["svc-a"] = RemoteService(
        id="ari:service/1", name="svc-a", revision="rev-5"
    )

    result = ServiceReconciler(store, gateway, conflict_retry_delay=2.5).reconcile(service.key)

    assert result.action is Action.REFRESH_REVISION
    assert result.requeue_after == 2.5
    [(_, written)] = store.service_status_writes
    assert written == bound_status(revision="rev-5")

    retry = ServiceReconciler(store, gateway).reconcile(service.key)

    assert retry.action is Action.UPDATE
    assert gateway.calls_to("update_service")[-1].revision == "rev-5"  # type: ignore[attr-defined]


def test_remote_failure_leaves_status_untouched() -> None:
    service = make_service()
    store = InMemoryResourceStore(services=[service], teams=[make_team(status_id="T1")])
    gateway = FakeCatalogGateway()
    gateway.relationship_error = RemoteFailureError("failed to create relationship: nope")

    with pytest.raises(RemoteFailureError):
        ServiceReconciler(store, gateway).reconcile(service.key)

    assert store.service_status_writes == []
    assert store.services[service.key].status.id == ""


def test_team_reconcile_resolves_and_wakes_dependent_services() -> None:
    team = make_team()
    waiting = make_service("svc-a")
    unrelated = make_service("svc-b", team="team-b")
    store = InMemoryResourceStore(services=[waiting, unrelated], teams=[team])
    gateway = FakeCatalogGateway(teams={"team-a": "T1"})

    result = TeamReconciler(store, gateway, wake_annotation=WAKE).reconcile(team.key)

    assert result.action is Action.TEAM_RESOLVED
    assert store.teams[team.key].status.id == "T1"
    assert store.annotations == {waiting.key: {WAKE: "T1"}}


def test_team_reconcile_is_idempotent() -> None:
    team = make_team(status_id="T1", generation=1, observed_generation=1)
    store = InMemoryResourceStore(services=[make_service()], teams=[team])
    gateway = FakeCatalogGateway()

    result = TeamReconciler(store, gateway, wake_annotation=WAKE).reconcile(team.key)

    assert result.action is Action.UP_TO_DATE
    assert store.team_status_writes == []
    assert store.annotations == {}
    assert gateway.calls == []


def test_team_lookup_failure_propagates() -> None:
    team = make_team()
    store = InMemoryResourceStore(teams=[team])

    with pytest.raises(TeamNotFoundError):
        TeamReconciler(store, FakeCatalogGateway()).reconcile(team.key)

    assert store.team_status_writes == []


def test_vanished_team_is_ignored() -> None:
    result = TeamReconciler(InMemoryResourceStore(), FakeCatalogGateway()).reconcile(
        ResourceKey(NAMESPACE, "gone")
    )

    assert result.action is Action.NOT_FOUND
