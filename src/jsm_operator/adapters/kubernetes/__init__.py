"""Public interface for the Kubernetes resource store adapter."""

from __future__ import annotations

from .store import KubernetesResourceStore, build_custom_objects_api
from .translator import service_from_manifest, team_from_manifest

__all__ = [
    "KubernetesResourceStore",
    "build_custom_objects_api",
    "service_from_manifest",
    "team_from_manifest",
]
