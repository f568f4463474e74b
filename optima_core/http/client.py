"""httpx helpers that forward the active trace context to downstream services."""

from __future__ import annotations

from typing import Any

import httpx

from optima_core.tracing.middleware import get_trace_headers


def merge_trace_headers(headers: Any = None, inject_tracing: bool = True) -> httpx.Headers:
    """Caller-supplied headers always win over injected trace headers."""

    merged = httpx.Headers(headers)
    if inject_tracing:
        for name, value in get_trace_headers().items():
            if name not in merged:
                merged[name] = value
    return merged


async def traced_fetch(
    url: httpx.URL | str,
    *,
    method: str = "GET",
    headers: Any = None,
    inject_tracing: bool = True,
    client: httpx.AsyncClient | None = None,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request with trace headers injected.

    Uses ``client`` when given, otherwise a short-lived ``httpx.AsyncClient``.
    Transport errors propagate unchanged.

    Example::

        response = await traced_fetch("http://user-auth:8000/api/users/123")
    """

    request_headers = merge_trace_headers(headers, inject_tracing)

    if client is not None:
        return await client.request(method, url, headers=request_headers, **kwargs)

    async with httpx.AsyncClient() as short_lived:
        return await short_lived.request(method, url, headers=request_headers, **kwargs)


class TracedClient:
    """``httpx.AsyncClient`` bound to a base URL that forwards trace headers.

    Example::

        async with TracedClient("http://user-auth:8000") as api:
            users = await api.get("/users/123")
            created = await api.post("/users", {"name": "John"})
    """

    def __init__(self, base_url: str, **client_kwargs: Any) -> None:
        if not base_url:
            raise ValueError("base_url must not be empty")
        self.base_url = base_url
        self._client = httpx.AsyncClient(base_url=base_url, **client_kwargs)

    async def __aenter__(self) -> TracedClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Any = None,
        inject_tracing: bool = True,
        **kwargs: Any,
    ) -> httpx.Response:
        return await traced_fetch(
            path,
            method=method,
            headers=headers,
            inject_tracing=inject_tracing,
            client=self._client,
            **kwargs,
        )

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, json: Any = None, **kwargs: Any) -> httpx.Response:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, json: Any = None, **kwargs: Any) -> httpx.Response:
        return await self.request("PUT", path, json=json, **kwargs)

    async def patch(self, path: str, json: Any = None, **kwargs: Any) -> httpx.Response:
        return await self.request("PATCH", path, json=json, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        return await self.request("DELETE", path, **kwargs)


def create_traced_client(base_url: str, **client_kwargs: Any) -> TracedClient:
    return TracedClient(base_url, **client_kwargs)
