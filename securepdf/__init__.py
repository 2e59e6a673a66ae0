"""Top-level package for the PDF upload service."""

from .config import Config
from .core import UploadHandler, sanitize_filename

__all__ = ["Config", "UploadHandler", "sanitize_filename"]
