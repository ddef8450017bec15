"""Runtime settings for the operator process."""

from __future__ import annotations

from dataclasses import dataclass

from .env import float_env_var, optional_env_var

API_GROUP = "jsm.macpaw.dev"
API_VERSION = "v1beta1"
SERVICE_PLURAL = "jsmservices"
TEAM_PLURAL = "jsmteams"
RESOLVED_TEAM_ANNOTATION = f"{API_GROUP}/resolved-team-id"

DEFAULT_CONFLICT_RETRY_DELAY = 1.0


@dataclass(frozen=True, slots=True)
class OperatorConfig:
    watch_namespace: str = ""
    conflict_retry_delay: float = DEFAULT_CONFLICT_RETRY_DELAY
    group: str = API_GROUP
    version: str = API_VERSION
    service_plural: str = SERVICE_PLURAL
    team_plural: str = TEAM_PLURAL

    @property
    def clusterwide(self) -> bool:
        return not self.watch_namespace


def get_operator_config() -> OperatorConfig:
    return OperatorConfig(
        watch_namespace=optional_env_var("WATCH_NAMESPACE"),
        conflict_retry_delay=float_env_var(
            "JSM_CONFLICT_RETRY_DELAY", DEFAULT_CONFLICT_RETRY_DELAY
        ),
    )
