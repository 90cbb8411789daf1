"""Project models."""

from typing import Any

from pydantic import Field

from nexus_sdk.models.common import ResourceMetadata


class Project(ResourceMetadata):
    """Project as returned by the Nexus API."""

    label: str | None = Field(default=None, alias="_label")
    description: str | None = None
    organization_label: str | None = Field(default=None, alias="_organizationLabel")
    organization_uuid: str | None = Field(default=None, alias="_organizationUuid")
    base: str | None = None
    vocab: str | None = None
    api_mappings: list[dict[str, Any]] = Field(default_factory=list, alias="apiMappings")

    @property
    def organization_name(self) -> str | None:
        """Organization name taken from the project id.

        Assumes ids end in ".../<org>/<project>". Nothing in the API
        guarantees that layout; it is only what the server returns today.
        """
        if not self.id:
            return None
        segments = self.id.split("/")
        if len(segments) < 2:
            return None
        return segments[-2]
