"""Jira Service Management (service catalog) configuration values."""

from __future__ import annotations

import base64
from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

JSM_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True, slots=True)
class JsmConfig:
    """Holds the catalog endpoint, credentials and HTTP behaviour."""

    graphql_url: str
    username: str
    token: str
    cloud_id: str
    resilience: ResilienceConfig


def basic_auth_header(username: str, token: str) -> str:
    encoded = base64.b64encode(f"{username}:{token}".encode()).decode("ascii")
    return f"Basic {encoded}"


def get_jsm_config(*, resilience: ResilienceConfig | None = None) -> JsmConfig:
    values = require_env_vars(("JSM_GRAPHQL_URL", "JSM_USERNAME", "JSM_TOKEN", "JSM_CLOUD_ID"))
    graphql_url = values["JSM_GRAPHQL_URL"]
    username = values["JSM_USERNAME"]
    token = values["JSM_TOKEN"]
    return JsmConfig(
        graphql_url=graphql_url,
        username=username,
        token=token,
        cloud_id=values["JSM_CLOUD_ID"],
        resilience=resilience
        or ResilienceConfig(
            name="jsm",
            base_url=graphql_url,
            timeout_seconds=JSM_TIMEOUT_SECONDS,
            retry=RetryPolicy(),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Authorization": basic_auth_header(username, token),
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        ),
    )
