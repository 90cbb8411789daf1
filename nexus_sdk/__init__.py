"""Nexus SDK for Python.

Async client for the Nexus resource-management API.

Public API:
    Nexus - Client facade (token management, resource clients)
    OrgEventListeners - Callbacks for the organization event stream
    models - Typed views of API responses
    exceptions - Error hierarchy
"""

from nexus_sdk._version import __version__
from nexus_sdk.client import Nexus
from nexus_sdk.models import ACL, Organization, PaginatedList, Project, Resource
from nexus_sdk.resources import OrgEventListeners

__all__ = [
    "ACL",
    "Nexus",
    "OrgEventListeners",
    "Organization",
    "PaginatedList",
    "Project",
    "Resource",
    "__version__",
]
