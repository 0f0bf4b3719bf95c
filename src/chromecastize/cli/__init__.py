"""CLI module for chromecastize."""

from .main import ChromecastizeCLI

__all__ = [
    "ChromecastizeCLI",
]
