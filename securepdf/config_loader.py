import logging
import os
from functools import lru_cache
from typing import Optional

from securepdf.config import Config
from securepdf.core.handler import UploadHandler

DEFAULT_CONFIG_PATH = "securepdf_config.yaml"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@lru_cache()
def load_config(path: Optional[str] = None) -> Config:
    """Load the service configuration.

    Parameters
    ----------
    path: Optional[str]
        Explicit path to the config file. If not provided, the
        ``SECUREPDF_CONFIG_PATH`` environment variable is used. Defaults
        to ``securepdf_config.yaml``.
    """
    cfg_path = path or os.getenv("SECUREPDF_CONFIG_PATH", DEFAULT_CONFIG_PATH)
    return Config.from_yaml(cfg_path)


@lru_cache()
def get_handler(path: Optional[str] = None) -> UploadHandler:
    """Initialise and cache an :class:`UploadHandler` instance."""

    cfg = load_config(path)
    return UploadHandler(cfg.upload_dir, download_prefix=cfg.download_prefix)


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the entry points."""

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    configured = getattr(logging, level.upper(), None)
    if isinstance(configured, int):
        logging.getLogger().setLevel(configured)
