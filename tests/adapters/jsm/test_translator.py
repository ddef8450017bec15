from __future__ import annotations

from jsm_operator.adapters.jsm.schema import (
    CreateServiceData,
    ServicePayload,
    ServicesByNameData,
)
from jsm_operator.adapters.jsm.translator import (
    build_update_input,
    service_from_node,
    service_from_payload,
)
from jsm_operator.domain.model import UpdateServiceRequest


def test_update_input_uses_catalog_field_names() -> None:
    request = UpdateServiceRequest(
        id="ari:service/1",
        revision="rev-4",
        name="svc-a",
        description="Example",
        tier_id="tier-3",
        service_type_key="APPLICATIONS",
        team_ids=("T1",),
    )

    assert build_update_input(request) == {
        "id": "ari:service/1",
        "description": "Example",
        "name": "svc-a",
        "revision": "rev-4",
        "serviceTier": "tier-3",
        "properties": [{"key": "responders", "value": {"teams": ["T1"]}}],
    }


def test_service_from_payload_reads_tier_and_type() -> None:
    payload = ServicePayload.model_validate(
        {
            "id": "ari:service/1",
            "name": "svc-a",
            "revision": "rev-2",
            "serviceTier": {"id": "tier-3", "level": 3},
            "serviceType": {"key": "BUSINESS_SERVICES"},
        }
    )

    service = service_from_payload(payload)

    assert service.tier_id == "tier-3"
    assert service.tier_level == 3
    assert service.service_type_key == "BUSINESS_SERVICES"


def test_service_from_payload_tolerates_missing_tier() -> None:
    payload = ServicePayload.model_validate({"id": "x", "name": "svc-a", "revision": "r"})

    service = service_from_payload(payload)

    assert service.tier_id == ""
    assert service.tier_level == 0


def test_service_node_with_null_revision() -> None:
    data = ServicesByNameData.model_validate(
        {"devOpsServices": {"edges": [{"node": {"id": "x", "name": "svc-a", "revision": None}}]}}
    )

    service = service_from_node(data.dev_ops_services.edges[0].node)

    assert service.revision == ""


def test_mutation_messages_ignore_missing_errors() -> None:
    data = CreateServiceData.model_validate(
        {"createDevOpsService": {"success": False, "errors": None, "service": None}}
    )

    assert data.result.messages == []
