"""Replicate provider configuration for the Flux Schnell server.

Architectural role:
    Centralizes credential lookup and endpoint settings consumed by
    `flux_mcp.image.client` and the process bootstrap in `flux_mcp.api.server`.

Resolution:
    - `.env` is loaded at import time (existing environment wins).
    - `REPLICATE_API_TOKEN` is required; there is no default credential.
    - `REPLICATE_API_BASE` optionally overrides the API base URL.

Determinism:
    Deterministic for a fixed process environment. The resulting
    `ReplicateConfig` is immutable and built once at startup.

Failure behavior:
    A missing or blank token raises `ConfigError`; the bootstrap treats this as
    fatal and exits before opening the transport.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


TOKEN_ENV_VAR = "REPLICATE_API_TOKEN"
BASE_URL_ENV_VAR = "REPLICATE_API_BASE"

DEFAULT_BASE_URL = "https://api.replicate.com/v1"

# Endpoint paths relative to the base URL.
FLUX_SCHNELL_PREDICTIONS_PATH = "/models/black-forest-labs/flux-schnell/predictions"
PREDICTION_STATUS_PATH = "/predictions/{prediction_id}"


class ConfigError(Exception):
    """Raised when required process configuration is missing or invalid."""


@dataclass(frozen=True)
class ReplicateConfig:
    """Immutable Replicate connection settings.

    Attributes:
        api_token: Bearer token sent on every request.
        base_url: API root without trailing slash.
    """

    api_token: str
    base_url: str = DEFAULT_BASE_URL

    def __repr__(self) -> str:
        return f"ReplicateConfig(api_token='***', base_url={self.base_url!r})"


def load_config(environ=None) -> ReplicateConfig:
    """Build the process configuration from environment variables.

    Args:
        environ: Mapping to read from; defaults to `os.environ`.

    Returns:
        `ReplicateConfig` with the token and normalized base URL.

    Raises:
        ConfigError: when `REPLICATE_API_TOKEN` is unset or blank.
    """
    env = os.environ if environ is None else environ

    api_token = (env.get(TOKEN_ENV_VAR) or "").strip()
    if not api_token:
        raise ConfigError(f"{TOKEN_ENV_VAR} environment variable is required")

    base_url = (env.get(BASE_URL_ENV_VAR) or "").strip() or DEFAULT_BASE_URL

    return ReplicateConfig(api_token=api_token, base_url=base_url.rstrip("/"))
