"""Build metadata injected into the container at image build time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache

from optima_core.config.settings import Settings


SHORT_COMMIT_LENGTH = 7


@dataclass(frozen=True)
class BuildInfo:
    git_commit: str
    short_commit: str
    git_branch: str
    build_date: str
    version: str
    environment: str
    deployment_id: str


def get_build_info(settings: Settings | None = None) -> BuildInfo:
    """Read build metadata from the environment.

    Always reads a fresh ``Settings`` unless one is passed in; use
    ``get_cached_build_info`` on hot paths.
    """

    settings = settings or Settings()
    git_commit = settings.git_commit or "unknown"

    return BuildInfo(
        git_commit=git_commit,
        short_commit=git_commit[:SHORT_COMMIT_LENGTH],
        git_branch=settings.git_branch or "unknown",
        build_date=settings.build_date or datetime.now(timezone.utc).isoformat(),
        version=settings.app_version or "0.0.0",
        environment=settings.environment_name,
        deployment_id=settings.deployment_id,
    )


@lru_cache(maxsize=1)
def get_cached_build_info() -> BuildInfo:
    return get_build_info()
