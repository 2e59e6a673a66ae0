"""Configuration loader for the PDF sharing service."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

from .models import Config, UPLOAD_DIR_ENV
from ..utils.io import read_yaml
from ..core.handler import UploadHandler

DEFAULT_UPLOAD_DIR = "wwwroot/uploads"


def _resolve_dir(value: str, base: Path) -> Path:
    candidate = Path(value).expanduser()
    if candidate.is_absolute():
        return candidate
    return base / candidate


def _normalise_prefix(prefix: str) -> str:
    return "/" + prefix.strip().strip("/")


def load_config(path: str) -> Config:
    """Load configuration from a YAML file.

    Parameters
    ----------
    path: str
        Path to the YAML configuration file. Relative ``storage.upload_dir``
        values resolve from the directory holding this file.
    """
    raw: Dict[str, Any] = read_yaml(path, missing_ok=True)

    storage = raw.get("storage", {}) or {}
    service = raw.get("service", {}) or {}
    logging_cfg = raw.get("logging", {}) or {}

    base = Path(path).resolve().parent
    upload_dir = os.getenv(UPLOAD_DIR_ENV) or storage.get("upload_dir", DEFAULT_UPLOAD_DIR)

    return Config(
        upload_dir=_resolve_dir(str(upload_dir), base),
        download_prefix=_normalise_prefix(storage.get("download_prefix", "/uploads")),
        serve_uploads=bool(storage.get("serve_uploads", True)),
        title=service.get("title", "Secure PDF Share"),
        host=service.get("host", "0.0.0.0"),
        port=int(service.get("port", 8000)),
        log_level=str(logging_cfg.get("level", "INFO")).upper(),
    )


__all__ = ["load_config"]


def create_handler(config_path: str) -> UploadHandler:
    """Application factory creating a configured :class:`UploadHandler`."""

    cfg = Config.from_yaml(config_path)
    return UploadHandler(cfg.upload_dir, download_prefix=cfg.download_prefix)


__all__.append("create_handler")
