"""Project operations for the Nexus API."""

from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from nexus_sdk._internal.http import HttpTransport
from nexus_sdk._internal.log import get_logger
from nexus_sdk._internal.query import build_query_params
from nexus_sdk.models.common import ListResponse, PaginatedList
from nexus_sdk.models.project import Project

logger = get_logger(__name__)

PROJECTS_PATH = "/projects"


class ProjectsResource:
    """Fetch and list projects."""

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def get(self, org_label: str, label: str, *, revision: int | None = None) -> Project:
        """Fetch a project of an organization, optionally at a revision."""
        path = f"{PROJECTS_PATH}/{quote(org_label, safe='')}/{quote(label, safe='')}"
        response = await self._transport.get(f"{path}{build_query_params({'rev': revision})}")
        return Project.from_response(response)

    async def list(self, options: Mapping[str, Any] | None = None) -> PaginatedList[Project]:
        """List projects visible to the caller.

        Same empty-page rule as organization listing.
        """
        query_options = dict(options or {})
        response = ListResponse.from_response(
            await self._transport.get(f"{PROJECTS_PATH}{build_query_params(query_options)}")
        )
        if response.is_empty:
            logger.debug("Project listing returned no results (code=%s)", response.code)
            return PaginatedList[Project].empty()

        return PaginatedList[Project](
            total=response.total,
            index=query_options.get("from") or 1,
            results=[Project.from_response(result) for result in response.results or []],
        )
