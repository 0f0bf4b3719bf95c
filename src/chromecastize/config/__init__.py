"""Configuration management for chromecastize."""

from __future__ import annotations

from .constants import *  # noqa: F403, F401
from .settings import ChromecastizeConfig, get_config

__all__ = [
    "ChromecastizeConfig",
    "get_config",
]
