"""Server-sent event source for Nexus event streams."""

import asyncio
import inspect
import json
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from nexus_sdk._internal.http import HttpTransport
from nexus_sdk._internal.log import get_logger
from nexus_sdk.exceptions import NexusAPIError, NexusConnectionError, NexusValidationError

logger = get_logger(__name__)

OPEN = "open"
ERROR = "error"
DEFAULT_EVENT = "message"

Handler = Callable[..., Awaitable[None] | None]


@dataclass(frozen=True)
class ServerSentEvent:
    """One frame of a text/event-stream."""

    event: str
    data: str
    id: str | None = None
    retry: int | None = None

    def json(self) -> Any:
        try:
            return json.loads(self.data)
        except ValueError as e:
            raise NexusValidationError(f"Invalid JSON in '{self.event}' event") from e


async def parse_sse_stream(lines: AsyncIterator[str]) -> AsyncIterator[ServerSentEvent]:
    """Parse text/event-stream lines into events.

    Args:
        lines: Lines of the stream without line terminators.

    Yields:
        One ServerSentEvent per blank-line-terminated frame that carried data.
    """
    event_type: str | None = None
    event_id: str | None = None
    retry: int | None = None
    data_parts: list[str] = []

    async for line in lines:
        if line == "":
            if data_parts:
                yield ServerSentEvent(
                    event=event_type or DEFAULT_EVENT,
                    data="\n".join(data_parts),
                    id=event_id,
                    retry=retry,
                )
            event_type = None
            event_id = None
            retry = None
            data_parts = []
            continue
        if line.startswith(":"):
            continue

        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "event":
            event_type = value
        elif field == "data":
            data_parts.append(value)
        elif field == "id":
            event_id = value
        elif field == "retry" and value.isdigit():
            retry = int(value)

    if data_parts:
        yield ServerSentEvent(
            event=event_type or DEFAULT_EVENT,
            data="\n".join(data_parts),
            id=event_id,
            retry=retry,
        )


class EventSource:
    """Live connection to a server-sent event endpoint.

    Handlers are keyed by event type. "open" is called with no arguments once
    the stream is established, "error" with the exception that ended or
    interrupted the stream, every other key with the ServerSentEvent.
    Handlers may be plain functions or coroutine functions.

    The connection is not re-established once it ends.
    """

    def __init__(
        self,
        transport: HttpTransport,
        path: str,
        handlers: Mapping[str, Handler],
    ) -> None:
        self._transport = transport
        self._path = path
        self._handlers = dict(handlers)
        self._task: asyncio.Task[None] | None = None
        self.last_event_id: str | None = None

    @property
    def path(self) -> str:
        return self._path

    @property
    def handlers(self) -> dict[str, Handler]:
        return dict(self._handlers)

    @property
    def closed(self) -> bool:
        return self._task is None or self._task.done()

    def start(self) -> "EventSource":
        """Start reading the stream in a background task.

        Must be called from a running event loop.
        """
        if self._task is None:
            self._task = asyncio.get_running_loop().create_task(self._run())
        return self

    async def wait(self) -> None:
        """Wait until the stream ends; re-raises a failing handler's exception."""
        if self._task is not None:
            try:
                await self._task
            except asyncio.CancelledError:
                if not self._task.cancelled():
                    raise

    async def close(self) -> None:
        """Close the connection.

        If the stream already ended because a handler raised, that exception
        is re-raised here, as `wait()` does.
        """
        if self._task is None:
            return
        if self._task.done():
            if not self._task.cancelled():
                self._task.result()
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        logger.debug("Closed event stream %s", self._path)

    async def _run(self) -> None:
        try:
            async with self._transport.stream(self._path) as response:
                if not response.is_success:
                    await response.aread()
                    raise NexusAPIError(
                        f"{response.status_code} Failed to open event stream {self._path}",
                        status_code=response.status_code,
                    )
                logger.debug("Opened event stream %s", self._path)
                await self._call(OPEN)
                async for event in parse_sse_stream(response.aiter_lines()):
                    if event.id is not None:
                        self.last_event_id = event.id
                    await self._dispatch(event)
        except httpx.TransportError as e:
            await self._fail(NexusConnectionError(f"Event stream {self._path} failed: {e}"))
        except NexusAPIError as e:
            await self._fail(e)

    async def _dispatch(self, event: ServerSentEvent) -> None:
        if event.event not in self._handlers:
            logger.debug("No handler for '%s' event, dropped", event.event)
            return
        try:
            await self._call(event.event, event)
        except NexusValidationError as e:
            await self._fail(e)

    async def _fail(self, error: Exception) -> None:
        logger.debug("Event stream %s error: %s", self._path, error)
        await self._call(ERROR, error)

    async def _call(self, event_type: str, *args: Any) -> None:
        handler = self._handlers.get(event_type)
        if handler is None:
            return
        result = handler(*args)
        if inspect.isawaitable(result):
            await result
