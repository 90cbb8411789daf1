"""Resource clients exposed by the Nexus client."""

from nexus_sdk.resources.organizations import OrganizationsResource, OrgEventListeners
from nexus_sdk.resources.projects import ProjectsResource

__all__ = ["OrgEventListeners", "OrganizationsResource", "ProjectsResource"]
