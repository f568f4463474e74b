from optima_core.config.build_info import BuildInfo, get_build_info, get_cached_build_info
from optima_core.config.settings import Settings, get_settings

__all__ = [
    "BuildInfo",
    "Settings",
    "get_build_info",
    "get_cached_build_info",
    "get_settings",
]
