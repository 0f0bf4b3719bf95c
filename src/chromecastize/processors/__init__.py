"""Media processors built on the core architecture."""

from .chromecast_processor import ChromecastProcessor

__all__ = [
    "ChromecastProcessor",
]
