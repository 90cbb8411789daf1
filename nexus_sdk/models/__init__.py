"""Public models for the Nexus API."""

from nexus_sdk.models.acl import ACL, AccessControlEntry
from nexus_sdk.models.common import ListResponse, NexusModel, PaginatedList, ResourceMetadata
from nexus_sdk.models.organization import (
    ORG_CREATED,
    ORG_DEPRECATED,
    ORG_UPDATED,
    CreateOrgPayload,
    ListOrgOptions,
    Organization,
    OrgCreatedEvent,
    OrgDeprecatedEvent,
    OrgEvent,
    OrgEventType,
    OrgUpdatedEvent,
)
from nexus_sdk.models.project import Project
from nexus_sdk.models.resource import Resource

__all__ = [
    "ACL",
    "AccessControlEntry",
    "CreateOrgPayload",
    "ListOrgOptions",
    "ListResponse",
    "NexusModel",
    "ORG_CREATED",
    "ORG_DEPRECATED",
    "ORG_UPDATED",
    "OrgCreatedEvent",
    "OrgDeprecatedEvent",
    "OrgEvent",
    "OrgEventType",
    "OrgUpdatedEvent",
    "Organization",
    "PaginatedList",
    "Project",
    "Resource",
    "ResourceMetadata",
]
