"""Tests for the server-sent event source."""

import asyncio
from contextlib import asynccontextmanager

import httpx
import pytest
import respx

from nexus_sdk._internal.config import ClientConfig
from nexus_sdk._internal.events import (
    ERROR,
    OPEN,
    EventSource,
    ServerSentEvent,
    parse_sse_stream,
)
from nexus_sdk._internal.http import HttpTransport
from nexus_sdk.exceptions import NexusAPIError, NexusConnectionError, NexusValidationError

BASE_URL = "https://nexus.test/v1"


async def _lines(*lines):
    for line in lines:
        yield line


async def _collect(lines):
    return [event async for event in parse_sse_stream(_lines(*lines))]


def _sse_response(body: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=body.encode(),
        headers={"Content-Type": "text/event-stream"},
    )


class TestParseSseStream:
    """Tests for parse_sse_stream."""

    @pytest.mark.asyncio
    async def test_single_event(self):
        """Should parse event type, id and data."""
        events = await _collect(["event: OrgCreated", "id: 1", 'data: {"a": 1}', ""])
        assert events == [ServerSentEvent(event="OrgCreated", data='{"a": 1}', id="1")]

    @pytest.mark.asyncio
    async def test_default_event_type(self):
        """Should default the event type to 'message'."""
        events = await _collect(["data: hi", ""])
        assert events[0].event == "message"

    @pytest.mark.asyncio
    async def test_multiline_data(self):
        """Should join data lines with newlines."""
        events = await _collect(["data: first", "data: second", ""])
        assert events[0].data == "first\nsecond"

    @pytest.mark.asyncio
    async def test_skips_comments_and_empty_frames(self):
        """Should ignore comments and frames without data."""
        events = await _collect([": keep-alive", "", "event: OrgUpdated", "", "data: x", ""])
        assert len(events) == 1
        assert events[0].event == "message"

    @pytest.mark.asyncio
    async def test_retry_field(self):
        """Should parse numeric retry values."""
        events = await _collect(["retry: 3000", "data: x", ""])
        assert events[0].retry == 3000

    @pytest.mark.asyncio
    async def test_unterminated_last_frame(self):
        """Should emit a trailing frame without blank line."""
        events = await _collect(["event: OrgDeprecated", "data: {}"])
        assert events == [ServerSentEvent(event="OrgDeprecated", data="{}")]

    @pytest.mark.asyncio
    async def test_value_without_space(self):
        """Should accept fields without a space after the colon."""
        events = await _collect(["event:OrgCreated", "data:{}", ""])
        assert events[0].event == "OrgCreated"
        assert events[0].data == "{}"


class TestServerSentEvent:
    """Tests for ServerSentEvent.json."""

    def test_json(self):
        """Should decode the data as JSON."""
        assert ServerSentEvent(event="message", data='{"a": 1}').json() == {"a": 1}

    def test_invalid_json(self):
        """Should raise NexusValidationError for invalid JSON."""
        with pytest.raises(NexusValidationError):
            ServerSentEvent(event="OrgCreated", data="not json").json()


class TestEventSource:
    """Tests for EventSource against a mocked stream."""

    @pytest.fixture
    def transport(self):
        return HttpTransport(ClientConfig(base_url=BASE_URL, access_token="token"))

    @pytest.mark.asyncio
    async def test_dispatches_by_event_type(self, transport):
        """Should call open first, then the handler for each event type."""
        calls = []
        body = (
            'event: OrgCreated\ndata: {"_label": "a"}\n\n'
            "event: Unknown\ndata: {}\n\n"
            'event: OrgUpdated\nid: 7\ndata: {"_label": "b"}\n\n'
        )
        with respx.mock(base_url=BASE_URL) as router:
            route = router.get("/orgs/events").mock(return_value=_sse_response(body))
            source = EventSource(
                transport,
                "/orgs/events",
                {
                    OPEN: lambda: calls.append(("open",)),
                    "OrgCreated": lambda event: calls.append(("created", event.json())),
                    "OrgUpdated": lambda event: calls.append(("updated", event.json())),
                },
            ).start()
            await source.wait()

        assert calls == [
            ("open",),
            ("created", {"_label": "a"}),
            ("updated", {"_label": "b"}),
        ]
        assert source.closed
        assert source.last_event_id == "7"
        request = route.calls.last.request
        assert request.headers["accept"] == "text/event-stream"
        assert request.headers["authorization"] == "Bearer token"

    @pytest.mark.asyncio
    async def test_async_handlers(self, transport):
        """Should await coroutine handlers."""
        received = []

        async def on_created(event):
            await asyncio.sleep(0)
            received.append(event.data)

        with respx.mock(base_url=BASE_URL) as router:
            router.get("/orgs/events").mock(
                return_value=_sse_response("event: OrgCreated\ndata: {}\n\n")
            )
            source = EventSource(transport, "/orgs/events", {"OrgCreated": on_created}).start()
            await source.wait()

        assert received == ["{}"]

    @pytest.mark.asyncio
    async def test_error_status_calls_error_handler(self, transport):
        """Should report a non-2xx response to the error handler, not open."""
        calls = []
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/orgs/events").mock(return_value=httpx.Response(401, json={}))
            source = EventSource(
                transport,
                "/orgs/events",
                {OPEN: lambda: calls.append("open"), ERROR: calls.append},
            ).start()
            await source.wait()

        assert len(calls) == 1
        assert isinstance(calls[0], NexusAPIError)
        assert calls[0].status_code == 401

    @pytest.mark.asyncio
    async def test_network_error_calls_error_handler(self, transport):
        """Should report connection failures to the error handler."""
        errors = []
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/orgs/events").mock(side_effect=httpx.ConnectError("refused"))
            source = EventSource(transport, "/orgs/events", {ERROR: errors.append}).start()
            await source.wait()

        assert len(errors) == 1
        assert isinstance(errors[0], NexusConnectionError)

    @pytest.mark.asyncio
    async def test_invalid_payload_calls_error_handler(self, transport):
        """Should report unparseable payloads and keep reading."""
        errors = []
        received = []
        body = "event: OrgCreated\ndata: oops\n\nevent: OrgCreated\ndata: {}\n\n"
        with respx.mock(base_url=BASE_URL) as router:
            router.get("/orgs/events").mock(return_value=_sse_response(body))
            source = EventSource(
                transport,
                "/orgs/events",
                {ERROR: errors.append, "OrgCreated": lambda e: received.append(e.json())},
            ).start()
            await source.wait()

        assert len(errors) == 1
        assert isinstance(errors[0], NexusValidationError)
        assert received == [{}]

    @pytest.mark.asyncio
    async def test_close_cancels_stream(self):
        """Should stop a stream that is still open."""
        opened = asyncio.Event()

        class _BlockingResponse:
            is_success = True

            async def aiter_lines(self):
                opened.set()
                await asyncio.Event().wait()
                yield ""  # pragma: no cover

        class _Transport:
            @asynccontextmanager
            async def stream(self, path):
                yield _BlockingResponse()

        source = EventSource(_Transport(), "/orgs/events", {}).start()  # type: ignore[arg-type]
        await asyncio.wait_for(opened.wait(), timeout=1)
        assert not source.closed

        await source.close()

        assert source.closed
        await source.close()

    @pytest.mark.asyncio
    async def test_close_reraises_handler_failure(self, transport):
        """Should surface a handler exception from close() after the stream ended."""

        def on_created(event):
            raise RuntimeError("listener failed")

        with respx.mock(base_url=BASE_URL) as router:
            router.get("/orgs/events").mock(
                return_value=_sse_response("event: OrgCreated\ndata: {}\n\n")
            )
            source = EventSource(transport, "/orgs/events", {"OrgCreated": on_created}).start()
            while not source.closed:
                await asyncio.sleep(0)

        with pytest.raises(RuntimeError, match="listener failed"):
            await source.close()

    @pytest.mark.asyncio
    async def test_start_is_idempotent(self, transport):
        """Should not open a second connection when started twice."""
        with respx.mock(base_url=BASE_URL) as router:
            route = router.get("/orgs/events").mock(return_value=_sse_response(""))
            source = EventSource(transport, "/orgs/events", {})
            assert source.start() is source.start()
            await source.wait()
        assert route.call_count == 1
