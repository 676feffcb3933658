"""Replicate HTTP client for the Flux Schnell model.

Processing flow:
    1. Receive an immutable `ReplicateConfig` at construction.
    2. Build bearer-auth headers once, including the `Prefer: wait` hint.
    3. Send exactly one request per operation.
    4. Return the decoded JSON body unchanged, or raise `RemoteFailureError`.

Error handling strategy:
    - Any `requests` failure (connection, non-2xx, undecodable body) becomes a
      `RemoteFailureError` whose message prefers the remote `detail` field.

Retry behavior:
    No retry loop and no explicit timeout; `requests` defaults apply.

Security considerations:
    - The API token is never logged.
    - Error messages may include remote-provided detail text.
"""

import logging

import requests

from flux_mcp.config.provider_config import (
    FLUX_SCHNELL_PREDICTIONS_PATH,
    PREDICTION_STATUS_PATH,
    ReplicateConfig,
)
from flux_mcp.core.errors import InvalidInputError, RemoteFailureError


logger = logging.getLogger(__name__)

ERROR_PREFIX = "Replicate API error"


def _extract_error_detail(err: requests.exceptions.RequestException) -> str:
    """Return the remote `detail` message when present, else the exception text."""
    response = getattr(err, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = body.get("detail")
            if detail:
                return str(detail)
    return str(err)


class ReplicateClient:
    """Thin client over the two Replicate prediction endpoints."""

    def __init__(self, config: ReplicateConfig):
        self.config = config
        self.headers = {
            "Authorization": f"Bearer {config.api_token}",
            "Content-Type": "application/json",
            "Prefer": "wait",
        }

    def submit(self, prompt: str) -> dict:
        """Create a Flux Schnell prediction for `prompt`.

        Args:
            prompt: Non-empty text prompt, forwarded verbatim.

        Returns:
            Prediction descriptor as returned by Replicate (id, status, and
            output URLs once succeeded).

        Raises:
            InvalidInputError: empty prompt.
            RemoteFailureError: transport or HTTP failure.
        """
        if not prompt:
            raise InvalidInputError("Prompt is required")

        payload = {"input": {"prompt": prompt}}
        return self._send("POST", FLUX_SCHNELL_PREDICTIONS_PATH, requests.post, json=payload)

    def fetch_status(self, prediction_id: str) -> dict:
        """Look up an existing prediction by id.

        Raises:
            InvalidInputError: empty prediction id.
            RemoteFailureError: transport or HTTP failure.
        """
        if not prediction_id:
            raise InvalidInputError("Prediction ID is required")

        path = PREDICTION_STATUS_PATH.format(prediction_id=prediction_id)
        return self._send("GET", path, requests.get)

    def _send(self, method: str, path: str, send, **kwargs) -> dict:
        """Run one `requests` call and normalize its failures.

        `send` is the bound `requests` verb function (`requests.post`,
        `requests.get`); `method` is only used for log lines.
        """
        url = f"{self.config.base_url}{path}"
        logger.debug("Replicate %s %s", method, path)

        try:
            response = send(url, headers=self.headers, **kwargs)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as err:
            detail = _extract_error_detail(err)
            logger.warning("Replicate %s %s failed: %s", method, path, detail)
            raise RemoteFailureError(f"{ERROR_PREFIX}: {detail}") from err
