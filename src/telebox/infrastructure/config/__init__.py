from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, HttpConfig, LinkboxConfig, LoggingConfig

__all__ = [
    "AppConfig",
    "EnvOverrides",
    "HttpConfig",
    "LinkboxConfig",
    "LoggingConfig",
    "load_config",
]
