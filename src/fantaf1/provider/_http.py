"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from fantaf1.call_logging import get_logger
from fantaf1.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderTimeoutError,
)

DEFAULT_BASE_URL = "https://api.openf1.org/v1"
DEFAULT_TIMEOUT = 30.0


def _handle_response(response: httpx.Response) -> list[dict[str, Any]]:
    """Validate response status and return parsed JSON."""
    if response.status_code >= 400:
        raise ProviderAPIError(
            status_code=response.status_code,
            message=response.text,
        )
    return response.json()  # type: ignore[no-any-return]


class SyncTransport:
    """Synchronous HTTP transport using httpx.Client.

    Connection failures and timeouts are retried ``max_retries`` times;
    HTTP error responses are not.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = 0,
    ) -> None:
        self._max_retries = max(0, max_retries)
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def get(self, endpoint: str, params: list[tuple[str, str]]) -> list[dict[str, Any]]:
        """Perform a GET request and return parsed JSON."""
        attempts = self._max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._client.get(endpoint, params=params)
            except httpx.ConnectError as exc:
                if attempt == attempts:
                    raise ProviderConnectionError(str(exc)) from exc
            except httpx.TimeoutException as exc:
                if attempt == attempts:
                    raise ProviderTimeoutError(str(exc)) from exc
            else:
                return _handle_response(response)
            get_logger().warning(
                "Retrying %s after transport error (attempt %d/%d)",
                endpoint, attempt, attempts,
            )
        raise ProviderConnectionError(f"No response from {endpoint}")

    def close(self) -> None:
        self._client.close()
