from __future__ import annotations

import kopf
import pytest

from jsm_operator.domain.outcome import Action, ReconcileResult
from jsm_operator.ui import handlers


def test_service_handler_requeues_with_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_reconcile(namespace: str, name: str) -> ReconcileResult:
        return ReconcileResult(action=Action.REFRESH_REVISION, requeue_after=2.0)

    monkeypatch.setattr(handlers, "reconcile_service", fake_reconcile)

    with pytest.raises(kopf.TemporaryError) as excinfo:
        handlers.service_handler(name="svc-a", namespace="payments")

    assert excinfo.value.delay == 2.0


def test_service_handler_completes_without_requeue(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []

    def fake_reconcile(namespace: str, name: str) -> ReconcileResult:
        calls.append((namespace, name))
        return ReconcileResult(action=Action.UPDATE)

    monkeypatch.setattr(handlers, "reconcile_service", fake_reconcile)

    handlers.service_handler(name="svc-a", namespace="payments")

    assert calls == [("payments", "svc-a")]


def test_team_handler_delegates(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []

    def fake_reconcile(namespace: str, name: str) -> ReconcileResult:
        calls.append((namespace, name))
        return ReconcileResult(action=Action.TEAM_RESOLVED)

    monkeypatch.setattr(handlers, "reconcile_team", fake_reconcile)

    handlers.team_handler(name="team-a", namespace="payments")

    assert calls == [("payments", "team-a")]


def test_service_handler_propagates_failures(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_reconcile(namespace: str, name: str) -> ReconcileResult:
        raise RuntimeError("boom")

    monkeypatch.setattr(handlers, "reconcile_service", fake_reconcile)

    with pytest.raises(RuntimeError, match="boom"):
        handlers.service_handler(name="svc-a", namespace="payments")


def test_cleanup_closes_catalog_client(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    monkeypatch.setattr(handlers, "close_default_gateway", lambda: calls.append("close"))

    handlers.cleanup()

    assert calls == ["close"]
