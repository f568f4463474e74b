import json

import httpx
import pytest

from optima_core.http import TracedClient, create_traced_client, traced_fetch
from optima_core.tracing import TraceContext, run_with_trace_context, trace_context


class RecordingTransport(httpx.MockTransport):
    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json={"ok": True})


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
async def client(transport: RecordingTransport):
    async with httpx.AsyncClient(transport=transport) as http_client:
        yield http_client


async def test_traced_fetch_sends_request(client, transport) -> None:
    resp = await traced_fetch("http://localhost/api", client=client)

    assert resp.json() == {"ok": True}
    [request] = transport.requests
    assert str(request.url) == "http://localhost/api"
    assert request.method == "GET"
    assert "x-trace-id" not in request.headers


async def test_traced_fetch_injects_trace_headers(client, transport) -> None:
    async def call() -> None:
        await traced_fetch("http://localhost/api", client=client)

    await run_with_trace_context(TraceContext(trace_id="trace-123", request_id="req-456"), call)

    [request] = transport.requests
    assert request.headers["X-Trace-ID"] == "trace-123"
    assert request.headers["X-Parent-Span-ID"] == "req-456"


async def test_traced_fetch_can_skip_injection(client, transport) -> None:
    with trace_context(TraceContext(trace_id="trace-123")):
        await traced_fetch("http://localhost/api", client=client, inject_tracing=False)

    [request] = transport.requests
    assert "X-Trace-ID" not in request.headers


async def test_traced_fetch_preserves_user_headers(client, transport) -> None:
    with trace_context(TraceContext(trace_id="trace-123")):
        await traced_fetch(
            "http://localhost/api",
            client=client,
            headers={"Authorization": "Bearer token", "x-trace-id": "custom-trace"},
        )

    [request] = transport.requests
    assert request.headers["Authorization"] == "Bearer token"
    assert request.headers["X-Trace-ID"] == "custom-trace"


async def test_traced_fetch_forwards_deployment_id(set_env, client, transport) -> None:
    set_env(DEPLOYMENT_ID="green")

    await traced_fetch("http://localhost/api", client=client)

    [request] = transport.requests
    assert request.headers["X-Deployment-ID"] == "green"


async def test_traced_fetch_propagates_transport_errors() -> None:
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as failing:
        with pytest.raises(httpx.ConnectError):
            await traced_fetch("http://localhost/api", client=failing)


async def test_traced_client_uses_base_url(transport) -> None:
    async with create_traced_client("http://localhost:8000", transport=transport) as api:
        await api.get("/api/users")

    [request] = transport.requests
    assert str(request.url) == "http://localhost:8000/api/users"
    assert request.method == "GET"


async def test_traced_client_appends_path_to_base_path(transport) -> None:
    async with create_traced_client("http://svc/api", transport=transport) as api:
        await api.get("/users")

    [request] = transport.requests
    assert str(request.url) == "http://svc/api/users"


@pytest.mark.parametrize("method", ["post", "put", "patch"])
async def test_traced_client_sends_json_body(transport, method: str) -> None:
    async with TracedClient("http://localhost", transport=transport) as api:
        await getattr(api, method)("/api/1", {"name": "test"})

    [request] = transport.requests
    assert request.method == method.upper()
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == {"name": "test"}


async def test_traced_client_delete(transport) -> None:
    async with TracedClient("http://localhost", transport=transport) as api:
        await api.delete("/api/1")

    [request] = transport.requests
    assert request.method == "DELETE"


async def test_traced_client_injects_trace_headers(transport) -> None:
    async with TracedClient("http://localhost", transport=transport) as api:
        with trace_context(TraceContext(trace_id="trace-123", request_id="req-9")):
            await api.get("/api")

    [request] = transport.requests
    assert request.headers["X-Trace-ID"] == "trace-123"
    assert request.headers["X-Parent-Span-ID"] == "req-9"


def test_traced_client_requires_base_url() -> None:
    with pytest.raises(ValueError):
        TracedClient("")
