"""Access control list models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from nexus_sdk.models.common import NexusModel


class AccessControlEntry(BaseModel):
    """Permissions granted to one identity."""

    model_config = ConfigDict(frozen=True, extra="allow")

    identity: dict[str, Any]
    permissions: list[str] = Field(default_factory=list)


class ACL(NexusModel):
    """Access control list attached to a path."""

    path: str = Field(alias="_path")
    rev: int | None = Field(default=None, alias="_rev")
    acl: list[AccessControlEntry] = Field(default_factory=list)

    def permissions_for(self, identity_type: str) -> set[str]:
        """Permissions granted to identities of the given @type."""
        return {
            permission
            for entry in self.acl
            if entry.identity.get("@type") == identity_type
            for permission in entry.permissions
        }
