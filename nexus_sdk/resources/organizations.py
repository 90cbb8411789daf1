"""Organization operations for the Nexus API."""

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

from nexus_sdk._internal.events import ERROR, OPEN, EventSource, Handler, ServerSentEvent
from nexus_sdk._internal.http import HttpTransport
from nexus_sdk._internal.log import get_logger
from nexus_sdk._internal.query import build_query_params
from nexus_sdk.exceptions import CreateOrganizationError, FetchOrganizationError, NexusError
from nexus_sdk.models.common import ListResponse, PaginatedList
from nexus_sdk.models.organization import (
    ORG_CREATED,
    ORG_DEPRECATED,
    ORG_EVENT_MODELS,
    ORG_UPDATED,
    CreateOrgPayload,
    ListOrgOptions,
    Organization,
    OrgCreatedEvent,
    OrgDeprecatedEvent,
    OrgEvent,
    OrgUpdatedEvent,
)

logger = get_logger(__name__)

ORGS_PATH = "/orgs"
ORG_EVENTS_PATH = "/orgs/events"

OrgPayload = CreateOrgPayload | Mapping[str, Any]
ListOptions = ListOrgOptions | Mapping[str, Any]


@dataclass(frozen=True)
class OrgEventListeners:
    """Callbacks for the organization event stream.

    Only the callbacks that are set get attached. Each may be a plain
    function or a coroutine function.
    """

    on_open: Callable[[], Awaitable[None] | None] | None = None
    on_error: Callable[[Exception], Awaitable[None] | None] | None = None
    on_org_created: Callable[[OrgCreatedEvent], Awaitable[None] | None] | None = None
    on_org_updated: Callable[[OrgUpdatedEvent], Awaitable[None] | None] | None = None
    on_org_deprecated: Callable[[OrgDeprecatedEvent], Awaitable[None] | None] | None = None

    def to_handlers(self) -> dict[str, Handler]:
        """Map the set callbacks to event-type keyed handlers."""
        handlers: dict[str, Handler] = {}
        if self.on_open is not None:
            handlers[OPEN] = self.on_open
        if self.on_error is not None:
            handlers[ERROR] = self.on_error
        for event_type, callback in (
            (ORG_CREATED, self.on_org_created),
            (ORG_UPDATED, self.on_org_updated),
            (ORG_DEPRECATED, self.on_org_deprecated),
        ):
            if callback is not None:
                handlers[event_type] = _typed_handler(ORG_EVENT_MODELS[event_type], callback)
        return handlers


def _typed_handler(model: type[OrgEvent], callback: Callable[[Any], Any]) -> Handler:
    def handle(event: ServerSentEvent) -> Any:
        return callback(model.from_response(event.json()))

    return handle


def _org_path(label: str) -> str:
    return f"{ORGS_PATH}/{quote(label, safe='')}"


def _organization(
    label: str, response: Any, body: dict[str, Any] | None = None
) -> Organization:
    """Build the organization from a write response.

    Write responses may omit the label and fields that were submitted; the
    label from the path and the submitted body fill them in.
    """
    data = response if isinstance(response, dict) else {}
    return Organization.from_response({"_label": label, **data, **(body or {})})


def _payload_body(payload: OrgPayload | None) -> dict[str, Any] | None:
    if payload is None:
        return None
    if isinstance(payload, CreateOrgPayload):
        return payload.to_body()
    return dict(payload)


class OrganizationsResource:
    """Create, fetch, list, update, deprecate and watch organizations."""

    def __init__(self, transport: HttpTransport) -> None:
        self._transport = transport

    async def create(self, label: str, payload: OrgPayload | None = None) -> Organization:
        """Create (or replace) the organization with the given label.

        The submitted payload is merged over the response, since the server
        does not echo every submitted field.

        Raises:
            CreateOrganizationError: If the request fails for any reason.
        """
        body = _payload_body(payload)
        try:
            response = await self._transport.put(_org_path(label), body)
            return _organization(label, response, body)
        except NexusError as e:
            logger.debug("Creating organization %s failed: %s", label, e)
            raise CreateOrganizationError.wrap(e) from e

    async def get(
        self,
        label: str,
        *,
        revision: int | None = None,
        tag: str | None = None,
    ) -> Organization:
        """Fetch an organization, optionally at a revision or tag.

        Raises:
            FetchOrganizationError: If the request fails for any reason.
        """
        query = build_query_params({"rev": revision, "tag": tag})
        try:
            response = await self._transport.get(f"{_org_path(label)}{query}")
            return Organization.from_response(response)
        except NexusError as e:
            raise FetchOrganizationError.wrap(e) from e

    async def list(self, options: ListOptions | None = None) -> PaginatedList[Organization]:
        """List organizations.

        A response flagged with an error code, or without results, yields an
        empty page instead of an error. Transport failures still raise.
        """
        if isinstance(options, ListOrgOptions):
            query_options = options.to_query()
        else:
            query_options = dict(options or {})

        response = ListResponse.from_response(
            await self._transport.get(f"{ORGS_PATH}{build_query_params(query_options)}")
        )
        if response.is_empty:
            logger.debug("Organization listing returned no results (code=%s)", response.code)
            return PaginatedList[Organization].empty()

        orgs = [
            Organization.from_response({**result, "@context": response.context})
            for result in response.results or []
        ]
        return PaginatedList[Organization](
            total=response.total,
            index=query_options.get("from") or 1,
            results=orgs,
        )

    async def update(self, label: str, rev: int, payload: OrgPayload) -> Organization:
        """Update an organization at its last known revision."""
        query = build_query_params({"rev": rev})
        response = await self._transport.put(f"{_org_path(label)}{query}", _payload_body(payload))
        return _organization(label, response)

    async def deprecate(self, label: str, rev: int) -> Organization:
        """Deprecate an organization at its last known revision."""
        query = build_query_params({"rev": rev})
        response = await self._transport.delete(f"{_org_path(label)}{query}")
        return _organization(label, response)

    def subscribe(self, listeners: OrgEventListeners) -> EventSource:
        """Listen to organization events.

        Must be called from a running event loop. The returned EventSource is
        already connecting; close it with `await source.close()`.
        """
        return EventSource(self._transport, ORG_EVENTS_PATH, listeners.to_handlers()).start()
