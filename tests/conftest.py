"""Shared fixtures for the upload service tests."""
import os
import shutil
import tempfile

# Importing securepdf.service.app builds a default app; keep its uploads out of the repo.
DEFAULT_UPLOAD_DIR = None
if "SECUREPDF_UPLOAD_DIR" not in os.environ:
    DEFAULT_UPLOAD_DIR = tempfile.mkdtemp(prefix="securepdf-tests-")
    os.environ["SECUREPDF_UPLOAD_DIR"] = DEFAULT_UPLOAD_DIR

import pytest
from fastapi.testclient import TestClient

from securepdf.core.handler import UploadHandler
from securepdf.service.app import create_app


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    """A config file whose relative upload_dir resolves inside tmp_path."""
    monkeypatch.delenv("SECUREPDF_UPLOAD_DIR", raising=False)
    path = tmp_path / "securepdf_config.yaml"
    path.write_text(
        "storage:\n"
        "  upload_dir: uploads\n"
        "  download_prefix: /uploads\n"
        "logging:\n"
        "  level: debug\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def upload_dir(config_path):
    return config_path.parent / "uploads"


@pytest.fixture
def api_client(config_path):
    return TestClient(create_app(str(config_path)))


@pytest.fixture
def handler(tmp_path):
    return UploadHandler(tmp_path / "store")


def pytest_sessionfinish(session, exitstatus):
    if DEFAULT_UPLOAD_DIR:
        shutil.rmtree(DEFAULT_UPLOAD_DIR, ignore_errors=True)
