"""HTTP transport for the Nexus API."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from nexus_sdk._internal.config import DEFAULT_TIMEOUT, ClientConfig
from nexus_sdk._internal.log import get_logger
from nexus_sdk._version import __version__
from nexus_sdk.exceptions import (
    NexusAPIError,
    NexusConfigError,
    NexusConnectionError,
    NexusValidationError,
)

logger = get_logger(__name__)


def create_http_client(*, timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Create configured HTTP client.

    The base URL is not baked in: it is read from the client configuration
    on every request so it can change after construction.

    Args:
        timeout: Request timeout in seconds.

    Returns:
        Configured httpx.AsyncClient instance.
    """
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": f"nexus-sdk/{__version__}"},
    )


class HttpTransport:
    """Authenticated JSON requests against the configured Nexus endpoint.

    Every request reads the base URL and bearer token from the shared
    ClientConfig at send time.
    """

    def __init__(self, config: ClientConfig, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._client = client or create_http_client(timeout=config.timeout)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    def url(self, path: str) -> str:
        """Resolve an API path against the configured base URL."""
        base_url = self._config.base_url
        if not base_url:
            raise NexusConfigError("No base URL configured")
        return f"{base_url.rstrip('/')}/{path.lstrip('/')}"

    def headers(self, *, accept: str = "application/json") -> dict[str, str]:
        headers = {"Accept": accept}
        token = self._config.access_token
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def get(self, path: str) -> Any:
        return await self.request("GET", path)

    async def put(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self.request("PUT", path, body=body)

    async def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        return await self.request("POST", path, body=body)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Raises:
            NexusConnectionError: On network failure or timeout.
            NexusAPIError: On a non-2xx response.
            NexusValidationError: If a 2xx body is not valid JSON.
        """
        url = self.url(path)
        headers = self.headers()
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(method, url, json=body, headers=headers)
        except httpx.TimeoutException as e:
            logger.debug("%s %s timed out", method, url)
            raise NexusConnectionError(f"Request timed out: {method} {url}") from e
        except httpx.TransportError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise NexusConnectionError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return self.decode(response)

    @staticmethod
    def decode(response: httpx.Response) -> Any:
        """Decode a response body, raising for non-2xx statuses."""
        if not response.is_success:
            body: Any
            try:
                body = response.json()
            except ValueError:
                body = response.text
            message = _error_message(body) or response.reason_phrase
            raise NexusAPIError(
                f"{response.status_code} {message}",
                status_code=response.status_code,
                body=body,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise NexusValidationError(
                f"Invalid JSON in response from {response.request.url}"
            ) from e

    @asynccontextmanager
    async def stream(self, path: str) -> AsyncIterator[httpx.Response]:
        """Open a server-sent event stream.

        The response is yielded whatever its status; callers check it.
        """
        url = self.url(path)
        headers = self.headers(accept="text/event-stream")
        headers["Cache-Control"] = "no-cache"
        logger.debug("STREAM %s", url)
        async with self._client.stream("GET", url, headers=headers, timeout=None) as response:
            yield response


def _error_message(body: Any) -> str | None:
    if isinstance(body, dict):
        for key in ("reason", "message", "code"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    elif isinstance(body, str) and body:
        return body
    return None
