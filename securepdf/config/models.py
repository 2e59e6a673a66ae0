"""Configuration models for the PDF sharing service."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict
import os

from ..utils.io import read_yaml

UPLOAD_DIR_ENV = "SECUREPDF_UPLOAD_DIR"


@dataclass
class Config:
    """Runtime configuration for the upload service."""

    upload_dir: Path
    download_prefix: str = "/uploads"
    serve_uploads: bool = True
    title: str = "Secure PDF Share"
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str) -> "Config":
        """Load configuration from *path* with environment validation.

        A missing file is not an error; defaults apply. The upload directory
        may be overridden with ``SECUREPDF_UPLOAD_DIR`` and must not name an
        existing regular file.
        """
        from .loader import load_config

        raw: Dict[str, Any] = read_yaml(path, missing_ok=True)
        storage = raw.get("storage", {}) or {}

        prefix = storage.get("download_prefix", "/uploads")
        if not isinstance(prefix, str) or not prefix.strip().strip("/"):
            raise ValueError("storage.download_prefix must be a non-empty URL path")

        cfg = load_config(path)
        if cfg.upload_dir.is_file():
            source = UPLOAD_DIR_ENV if os.getenv(UPLOAD_DIR_ENV) else "storage.upload_dir"
            raise ValueError(f"{source} points at a file, not a directory: {cfg.upload_dir}")
        return cfg
