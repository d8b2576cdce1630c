"""Classify image reference strings by their syntax. No I/O happens here."""
from enum import Enum
from typing import Tuple
import re

from .errors import UnsupportedReferenceKind

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)
_FILE_URL_RE = re.compile(r"^file://", re.IGNORECASE)
_DATA_URI_RE = re.compile(r"^data:image/[^;]+;base64,")
_DATA_URI_PARTS_RE = re.compile(r"^data:([^;]+);base64,(.+)$", re.DOTALL)
_WINDOWS_PATH_RE = re.compile(r"^[A-Za-z]:\\")


class ReferenceKind(str, Enum):
    REMOTE_URL = "remote_url"
    FILE_URI = "file_uri"
    DATA_URI = "data_uri"
    ABSOLUTE_PATH = "absolute_path"


def is_url(ref: str) -> bool:
    return bool(_URL_RE.match(ref))


def is_file_url(ref: str) -> bool:
    return bool(_FILE_URL_RE.match(ref))


def is_data_uri(ref: str) -> bool:
    return bool(_DATA_URI_RE.match(ref))


def is_abs_path(ref: str) -> bool:
    return ref.startswith("/") or bool(_WINDOWS_PATH_RE.match(ref))


def classify(ref: str) -> ReferenceKind:
    if is_url(ref):
        return ReferenceKind.REMOTE_URL
    if is_file_url(ref):
        return ReferenceKind.FILE_URI
    if is_data_uri(ref):
        return ReferenceKind.DATA_URI
    if is_abs_path(ref):
        return ReferenceKind.ABSOLUTE_PATH
    raise UnsupportedReferenceKind(
        f"Unsupported image reference: {_preview(ref)} "
        "(expected https:// URL, file:// URL, absolute path or data:image/...;base64 URI)"
    )


def parse_data_uri(ref: str) -> Tuple[str, str]:
    """Split a base64 data URI into (declared mime type, payload)."""
    m = _DATA_URI_PARTS_RE.match(ref)
    if not m:
        raise UnsupportedReferenceKind(f"Invalid data URI format: {_preview(ref)}")
    return m.group(1), m.group(2).strip()


def _preview(ref: str, limit: int = 80) -> str:
    return repr(ref if len(ref) <= limit else ref[:limit] + "...")
