"""Application configuration helpers."""

from __future__ import annotations

from .env import float_env_var, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .jsm import JsmConfig, basic_auth_header, get_jsm_config
from .logging import configure_logging
from .operator import (
    API_GROUP,
    API_VERSION,
    RESOLVED_TEAM_ANNOTATION,
    SERVICE_PLURAL,
    TEAM_PLURAL,
    OperatorConfig,
    get_operator_config,
)

__all__ = [
    "API_GROUP",
    "API_VERSION",
    "RESOLVED_TEAM_ANNOTATION",
    "SERVICE_PLURAL",
    "TEAM_PLURAL",
    "ConfigurationError",
    "JsmConfig",
    "MissingConfigurationError",
    "OperatorConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "basic_auth_header",
    "configure_logging",
    "float_env_var",
    "get_jsm_config",
    "get_operator_config",
    "optional_env_var",
    "require_env_vars",
]
