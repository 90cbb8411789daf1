"""Organization models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from nexus_sdk.models.common import NexusModel, ResourceMetadata


class Organization(ResourceMetadata):
    """Organization as returned by the Nexus API.

    Top-level namespace entity: identified by its label, versioned by
    revision, soft-deleted by deprecation.
    """

    label: str = Field(alias="_label")
    description: str | None = None

    @property
    def name(self) -> str:
        return self.label


class CreateOrgPayload(BaseModel):
    """Body sent when creating or updating an organization."""

    model_config = ConfigDict(extra="allow")

    description: str | None = None

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class ListOrgOptions(BaseModel):
    """Query options for listing organizations."""

    model_config = ConfigDict(populate_by_name=True)

    from_: int | None = Field(default=None, alias="from")
    size: int | None = None
    deprecated: bool | None = None
    rev: int | None = None
    created_by: str | None = Field(default=None, alias="createdBy")
    updated_by: str | None = Field(default=None, alias="updatedBy")
    label: str | None = None

    def to_query(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


OrgEventType = Literal["OrgCreated", "OrgUpdated", "OrgDeprecated"]

ORG_CREATED: OrgEventType = "OrgCreated"
ORG_UPDATED: OrgEventType = "OrgUpdated"
ORG_DEPRECATED: OrgEventType = "OrgDeprecated"


class OrgEvent(NexusModel):
    """Payload of an organization event from the event stream."""

    context: Any = Field(default=None, alias="@context")
    type: str | None = Field(default=None, alias="@type")
    id: str | None = Field(default=None, alias="_organizationId")
    label: str | None = Field(default=None, alias="_label")
    uuid: str | None = Field(default=None, alias="_uuid")
    rev: int | None = Field(default=None, alias="_rev")
    instant: str | None = Field(default=None, alias="_instant")
    subject: str | None = Field(default=None, alias="_subject")
    description: str | None = None


class OrgCreatedEvent(OrgEvent):
    """An organization was created."""


class OrgUpdatedEvent(OrgEvent):
    """An organization was updated."""


class OrgDeprecatedEvent(OrgEvent):
    """An organization was deprecated."""


ORG_EVENT_MODELS: dict[str, type[OrgEvent]] = {
    ORG_CREATED: OrgCreatedEvent,
    ORG_UPDATED: OrgUpdatedEvent,
    ORG_DEPRECATED: OrgDeprecatedEvent,
}
