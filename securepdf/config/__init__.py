"""Configuration helpers for the upload service."""

from .models import Config
from .loader import load_config, create_handler

__all__ = ["Config", "load_config", "create_handler"]
