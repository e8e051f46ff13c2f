"""Configuration for catalog-sync."""

from .loader import load_config
from .settings import GOOGLE_TRANSLATE_URL, Settings

__all__ = ["GOOGLE_TRANSLATE_URL", "Settings", "load_config"]
