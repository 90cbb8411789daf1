"""Resource model."""

from typing import Any

from pydantic import Field

from nexus_sdk.models.common import ResourceMetadata


class Resource(ResourceMetadata):
    """Resource as returned by the Nexus API.

    User payload fields are kept as extra fields; `data` returns them.
    """

    self_url: str | None = Field(default=None, alias="_self")
    constrained_by: str | None = Field(default=None, alias="_constrainedBy")
    project: str | None = Field(default=None, alias="_project")
    incoming: str | None = Field(default=None, alias="_incoming")
    outgoing: str | None = Field(default=None, alias="_outgoing")

    @property
    def data(self) -> dict[str, Any]:
        return dict(self.model_extra or {})
