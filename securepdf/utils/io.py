"""Utility helpers for I/O operations."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_yaml(path: PathLike, missing_ok: bool = False) -> Dict[str, Any]:
    """Read a YAML file and return its content as a dictionary.

    When ``missing_ok`` is set a non-existent file yields an empty mapping
    instead of raising :class:`FileNotFoundError`.
    """
    path = Path(path)
    if missing_ok and not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


def write_bytes(path: PathLike, content: bytes) -> int:
    """Write ``content`` to ``path``, truncating any existing file."""
    with open(path, "wb") as fh:
        return fh.write(content)


__all__ = ["read_yaml", "write_bytes"]
