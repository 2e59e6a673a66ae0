"""PDF upload handling.

Validates an incoming upload, derives a safe storage name and writes the bytes
into a single upload directory. A later upload with the same sanitised name
replaces the earlier file.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from .sanitize import sanitize_filename
from ..utils.io import write_bytes

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"
SUCCESS_MESSAGE = "PDF uploaded successfully."


class UploadError(ValueError):
    """Client-side upload failure reported back as ``{"message": ...}``."""

    status_code = 400
    default_message = "Upload rejected."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingOrEmptyFileError(UploadError):
    default_message = "Please select a PDF file."


class InvalidFileTypeError(UploadError):
    default_message = "Only PDF files may be uploaded."


@dataclass
class StoredFile:
    """A file written into the upload directory."""

    file_name: str
    path: Path
    size_bytes: int
    download_url: str

    def to_response(self, message: str = SUCCESS_MESSAGE) -> Dict[str, Any]:
        return {
            "message": message,
            "fileName": self.file_name,
            "downloadUrl": self.download_url,
        }


class UploadHandler:
    """Store uploaded PDFs under sanitised names in ``upload_dir``."""

    def __init__(self, upload_dir: Union[str, Path], download_prefix: str = "/uploads"):
        self.upload_dir = Path(upload_dir)
        self.download_prefix = "/" + download_prefix.strip("/")
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def download_url(self, file_name: str) -> str:
        return f"{self.download_prefix}/{quote(file_name)}"

    def validate(self, filename: Optional[str], content: Optional[bytes]) -> str:
        """Check that a named, non-empty ``.pdf`` was supplied.

        Returns the original filename. Raises :class:`MissingOrEmptyFileError`
        or :class:`InvalidFileTypeError`.
        """
        if not filename or not content:
            logger.warning("Rejected upload %r: missing or empty file", filename)
            raise MissingOrEmptyFileError()
        if not filename.lower().endswith(PDF_EXTENSION):
            logger.warning("Rejected upload %r: not a PDF", filename)
            raise InvalidFileTypeError()
        return filename

    def store(self, filename: Optional[str], content: Optional[bytes]) -> StoredFile:
        """Validate and persist ``content`` under the sanitised ``filename``.

        Existing files with the same name are overwritten. I/O errors are not
        caught; a partially written file is left in place.
        """
        original = self.validate(filename, content)
        safe_name = sanitize_filename(original)
        target = self.upload_dir / safe_name

        size = write_bytes(target, content)
        logger.info("Saved file: %s (%d bytes)", target, size)

        return StoredFile(
            file_name=safe_name,
            path=target,
            size_bytes=size,
            download_url=self.download_url(safe_name),
        )

    async def save_upload(self, upload: Optional[UploadFile]) -> StoredFile:
        """Read a multipart upload and hand it to :meth:`store` in a worker thread."""
        if upload is None:
            return self.store(None, None)
        content = await upload.read()
        return await run_in_threadpool(self.store, upload.filename, content)
