"""Filename sanitisation for stored uploads.

Client supplied names are mapped onto a portable character set: anything that
Windows or POSIX refuses in a file name becomes ``_``. Names with nothing
usable left are replaced by a generated ``pdf_<token>.pdf`` name.
"""
from __future__ import annotations

import uuid

REPLACEMENT = "_"

# Control characters plus the printable characters forbidden on Windows.
# "/" and "\\" also cover the POSIX separator and path traversal.
INVALID_FILENAME_CHARS = frozenset(
    [chr(i) for i in range(32)] + ['"', "<", ">", "|", ":", "*", "?", "\\", "/"]
)

_TRANSLATION = {ord(ch): REPLACEMENT for ch in INVALID_FILENAME_CHARS}
_RESERVED = {"", ".", ".."}


def generate_filename() -> str:
    """Return a fresh ``pdf_<32 hex chars>.pdf`` name."""
    return f"pdf_{uuid.uuid4().hex}.pdf"


def sanitize_filename(name: str) -> str:
    """Replace every invalid character in ``name`` with an underscore.

    Each invalid character maps to exactly one underscore. If ``name`` holds
    no valid, non-whitespace character, or cleaning leaves ``.``/``..``, a
    generated name is returned instead.
    """
    name = name or ""
    usable = any(ch not in INVALID_FILENAME_CHARS and not ch.isspace() for ch in name)
    cleaned = name.translate(_TRANSLATION)
    if not usable or cleaned.strip() in _RESERVED:
        return generate_filename()
    return cleaned


__all__ = [
    "INVALID_FILENAME_CHARS",
    "generate_filename",
    "sanitize_filename",
]
