from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


HealthStatus = Literal["healthy", "unhealthy"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class HealthCheckResult(CamelModel):
    status: HealthStatus
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(CamelModel):
    status: HealthStatus
    service: str
    version: str
    git_commit: str
    git_branch: str
    environment: str
    uptime_seconds: int
    timestamp: str
    checks: dict[str, HealthCheckResult]


class DebugBuild(CamelModel):
    git_commit: str
    git_branch: str
    build_date: str
    version: str


class DebugRuntime(CamelModel):
    python_version: str
    environment: str
    debug_mode: bool
    log_level: str


class DebugInfoResponse(CamelModel):
    build: DebugBuild
    runtime: DebugRuntime
    startup_time: str
    uptime_seconds: int


class DebugConfigResponse(CamelModel):
    config: dict[str, str]
    build_time_config: dict[str, str] | None = None
    infisical_enabled: bool
    config_source: Literal["infisical", "env"]
    environment: str
