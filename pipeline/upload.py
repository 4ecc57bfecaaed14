"""
File-upload ingestion.

Turns an uploaded file into the same (code, language, filename) triple a
text submission carries, then hands it to the normal submit path:

    report.sol (4 KB)
        │ extension allowed?      no  → UploadRejected(400)
        │ size <= MAX_UPLOAD?     no  → UploadRejected(413)
        │ decode UTF-8 (replace bad bytes)
        ▼
    pipeline.submit(code, language=detect_language("report.sol"), filename="report.sol")
"""

import os

from config.settings import settings
from models.enums import Language

_EXTENSION_LANGUAGES = {
    ".py": Language.PYTHON,
    ".sol": Language.SOLIDITY,
    ".js": Language.JAVASCRIPT,
    ".ts": Language.JAVASCRIPT,
    ".jsx": Language.JAVASCRIPT,
    ".tsx": Language.JAVASCRIPT,
}


class UploadRejected(Exception):
    """The uploaded file cannot be accepted. status_code is the HTTP status to answer with."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def extension_of(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()


def detect_language(filename: str) -> Language:
    """Language from the file extension; anything unrecognised is treated as JavaScript."""
    return _EXTENSION_LANGUAGES.get(extension_of(filename), Language.JAVASCRIPT)


def check_upload(
    filename: str,
    size: int,
    allowed_extensions: list[str] | None = None,
    max_bytes: int | None = None,
) -> None:
    """
    Raises:
        UploadRejected: extension not in the allow-list (400) or file too large (413)
    """
    allowed = [e.lower() for e in (allowed_extensions or settings.ALLOWED_UPLOAD_EXTENSIONS)]
    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES

    if not filename or extension_of(filename) not in allowed:
        raise UploadRejected(400, "Only code files are allowed")
    if size > limit:
        raise UploadRejected(413, f"File too large: {size} bytes (limit {limit})")


def decode_upload(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")
