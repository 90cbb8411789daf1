"""User-facing client for the Nexus API.

Example usage:
    from nexus_sdk import Nexus

    async with Nexus("https://nexus.example.org/v1", token="...") as nexus:
        org = await nexus.organizations.create("my-org", {"description": "Mine"})
        orgs = await nexus.list_organizations()
"""

import asyncio
import os

import httpx

from nexus_sdk._internal.config import DEFAULT_TIMEOUT, ClientConfig
from nexus_sdk._internal.http import HttpTransport
from nexus_sdk._internal.log import enable_debug_logging, get_logger
from nexus_sdk.exceptions import ListOrganizationsError, NexusConfigError, NexusError
from nexus_sdk.models.organization import Organization
from nexus_sdk.resources.organizations import OrganizationsResource
from nexus_sdk.resources.projects import ProjectsResource

logger = get_logger(__name__)


class Nexus:
    """Client for one Nexus instance.

    Configuration (endpoint, token) belongs to the instance, so several
    clients with different endpoints can live in one process.
    """

    def __init__(
        self,
        environment: str | None,
        token: str | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        debug: bool = False,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            environment: Base URL of the Nexus instance.
            token: Optional bearer token.
            timeout: Request timeout in seconds.
            debug: Enable debug logging to stderr.
            http_client: Optional preconfigured httpx.AsyncClient.

        Raises:
            NexusConfigError: If no environment is provided.
        """
        if not environment:
            raise NexusConfigError(
                "No environment provided. Please specify your Nexus instance endpoint."
            )
        if debug:
            enable_debug_logging()

        self._config = ClientConfig(
            base_url=environment,
            access_token=token or None,
            timeout=timeout,
            debug=debug,
        )
        self._transport = HttpTransport(self._config, http_client)
        self.organizations = OrganizationsResource(self._transport)
        self.projects = ProjectsResource(self._transport)

    @classmethod
    def from_env(cls) -> "Nexus":
        """Create a client from environment variables.

        Required environment variables:
            NEXUS_ENVIRONMENT: Base URL of the Nexus instance.

        Optional environment variables:
            NEXUS_TOKEN: Bearer token.
            NEXUS_TIMEOUT: Request timeout in seconds.
            NEXUS_DEBUG: Set to "1" to enable debug logging.

        Raises:
            NexusConfigError: If NEXUS_ENVIRONMENT is missing or NEXUS_TIMEOUT
                is not a number.
        """
        raw_timeout = os.environ.get("NEXUS_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise NexusConfigError(f"NEXUS_TIMEOUT must be a number, got {raw_timeout!r}") from None

        return cls(
            os.environ.get("NEXUS_ENVIRONMENT"),
            os.environ.get("NEXUS_TOKEN"),
            timeout=timeout,
            debug=os.environ.get("NEXUS_DEBUG", "") == "1",
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def set_token(self, token: str) -> None:
        """Authenticate subsequent requests with the given bearer token."""
        self._config.set_access_token(token)

    def remove_token(self) -> None:
        """Send subsequent requests without authentication."""
        self._config.set_access_token(None)

    async def get_organization(self, name: str) -> Organization:
        """Fetch one organization by label."""
        return await self.organizations.get(name)

    async def list_organizations(self) -> list[Organization]:
        """List organizations that have projects visible to the caller.

        There is no endpoint for this, so the organization names are read
        from the project ids and each organization is fetched on its own,
        concurrently. A single failed fetch fails the whole call.

        Raises:
            ListOrganizationsError: If any request fails.
        """
        try:
            projects = await self.projects.list()
            names: list[str] = []
            for project in projects.results:
                name = project.organization_name
                if name is None:
                    logger.warning("Skipping project with unexpected id: %r", project.id)
                    continue
                if name not in names:
                    names.append(name)

            logger.debug("Fetching %d organizations", len(names))
            return list(await asyncio.gather(*(self.get_organization(name) for name in names)))
        except NexusError as e:
            raise ListOrganizationsError.wrap(e) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._transport.aclose()

    async def __aenter__(self) -> "Nexus":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
