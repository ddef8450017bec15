"""Public interface for the service catalog adapter."""

from __future__ import annotations

from .client import JsmCatalogClient
from .schema import GraphQLResponse, ServiceMutationPayload
from .translator import build_create_input, build_update_input

__all__ = [
    "GraphQLResponse",
    "JsmCatalogClient",
    "ServiceMutationPayload",
    "build_create_input",
    "build_update_input",
]
