from __future__ import annotations

import pytest
from pydantic import ValidationError

from jsm_operator.adapters.kubernetes.translator import (
    service_from_manifest,
    service_status_to_manifest,
    team_from_manifest,
    team_status_to_manifest,
)
from jsm_operator.domain.model import Condition, ResourceKey, ServiceStatus, TeamStatus


def _service_manifest(**spec: object) -> dict[str, object]:
    return {
        "apiVersion": "jsm.macpaw.dev/v1beta1",
        "kind": "JSMService",
        "metadata": {"name": "svc-a", "namespace": "payments", "generation": 3},
        "spec": {"tierLevel": 2, "serviceTypeKey": "APPLICATIONS", **spec},
    }


def test_service_manifest_maps_spec_and_status() -> None:
    manifest = _service_manifest(description="Payments API", teamRef={"name": "team-a"})
    manifest["status"] = {
        "id": "ari:service/1",
        "revision": "rev-1",
        "observedGeneration": 2,
        "tierID": "tier-2",
        "tierLevel": 2,
        "teamRelationshipID": "rel-1",
        "resolvedTeamARN": "T1",
        "conditions": [
            {"type": "Ready", "status": "True", "lastTransitionTime": "2025-01-01T00:00:00Z"}
        ],
    }

    service = service_from_manifest(manifest)

    assert service.key == ResourceKey("payments", "svc-a")
    assert service.generation == 3
    assert service.remote_name == "svc-a"
    assert service.spec.team_name == "team-a"
    assert service.status.observed_generation == 2
    assert service.status.resolved_team_arn == "T1"
    assert service.status.conditions[0].last_transition_time == "2025-01-01T00:00:00Z"
    assert service.is_up_to_date is False


def test_service_manifest_without_status_or_team() -> None:
    service = service_from_manifest(_service_manifest(name="Payments"))

    assert service.spec.team_ref is None
    assert service.remote_name == "Payments"
    assert service.status == ServiceStatus()


def test_service_manifest_loads_tier_out_of_range() -> None:
    service = service_from_manifest(_service_manifest(tierLevel=7))

    assert service.spec.tier_level == 7
    assert service.spec.has_valid_tier_level is False


def test_service_manifest_requires_tier_level() -> None:
    manifest = _service_manifest()
    del manifest["spec"]["tierLevel"]  # type: ignore[index]

    with pytest.raises(ValidationError):
        service_from_manifest(manifest)


def test_service_status_uses_camel_case_keys() -> None:
    status = ServiceStatus(
        id="ari:service/1",
        revision="rev-1",
        observed_generation=1,
        tier_id="tier-2",
        tier_level=2,
        team_relationship_id="rel-1",
        resolved_team_arn="T1",
        conditions=(Condition(type="Ready", status="True", reason="Created"),),
    )

    body = service_status_to_manifest(status)

    assert body["observedGeneration"] == 1
    assert body["tierID"] == "tier-2"
    assert body["teamRelationshipID"] == "rel-1"
    assert body["resolvedTeamARN"] == "T1"
    assert body["conditions"] == [
        {
            "type": "Ready",
            "status": "True",
            "reason": "Created",
            "message": "",
            "lastTransitionTime": "",
        }
    ]


def test_team_manifest_round_trip_fields() -> None:
    team = team_from_manifest(
        {
            "metadata": {"name": "team-a", "namespace": "payments", "generation": 2},
            "spec": {"name": "Team A", "id": "T-explicit"},
            "status": {"id": "T1", "observedGeneration": 1},
        }
    )

    assert team.lookup_name == "Team A"
    assert team.spec.id == "T-explicit"
    assert team.status == TeamStatus(id="T1", observed_generation=1)
    assert team_status_to_manifest(team.status) == {"id": "T1", "observedGeneration": 1}
