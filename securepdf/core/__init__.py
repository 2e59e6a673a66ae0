"""Upload validation, filename sanitisation and storage."""

from .handler import (
    InvalidFileTypeError,
    MissingOrEmptyFileError,
    StoredFile,
    UploadError,
    UploadHandler,
)
from .sanitize import generate_filename, sanitize_filename

__all__ = [
    "InvalidFileTypeError",
    "MissingOrEmptyFileError",
    "StoredFile",
    "UploadError",
    "UploadHandler",
    "generate_filename",
    "sanitize_filename",
]
