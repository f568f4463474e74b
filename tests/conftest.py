from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from optima_core.config import get_cached_build_info, get_settings
from optima_core.diagnostics import create_diagnostics_router
from optima_core.logging import get_logger, reset_logger
from optima_core.tracing import get_parent_span_id, get_request_id, get_trace_id
from optima_core.tracing.asgi import TracingMiddleware


MANAGED_ENV_VARS = (
    "GIT_COMMIT",
    "GIT_BRANCH",
    "APP_VERSION",
    "BUILD_DATE",
    "DEPLOYMENT_ID",
    "ENVIRONMENT",
    "APP_ENV",
    "NODE_ENV",
    "LOG_FORMAT",
    "LOG_LEVEL",
    "DEBUG_KEY",
    "DEBUG",
    "INFISICAL_CLIENT_ID",
)


def clear_config_caches() -> None:
    get_settings.cache_clear()
    get_cached_build_info.cache_clear()


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in MANAGED_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_caches()
    reset_logger()

    yield

    reset_logger()
    clear_config_caches()


@pytest.fixture
def set_env(monkeypatch: pytest.MonkeyPatch):
    """Set environment variables and drop the cached settings/build info."""

    def _set(**values: str) -> None:
        for name, value in values.items():
            monkeypatch.setenv(name, value)
        clear_config_caches()

    return _set


async def _probe_database() -> dict:
    return {"status": "healthy"}


def create_test_app() -> FastAPI:
    app = FastAPI(title="orders-service")
    app.add_middleware(TracingMiddleware, service_name="orders-service", service_short="ord")
    app.include_router(create_diagnostics_router("orders-service", {"database": _probe_database}))

    @app.get("/orders")
    async def list_orders() -> dict:
        get_logger().info("listing orders")
        return {
            "traceId": get_trace_id(),
            "requestId": get_request_id(),
            "parentSpanId": get_parent_span_id(),
        }

    return app


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=create_test_app())
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
