from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import unquote, urlparse
from urllib.request import url2pathname
import base64
import binascii
import logging
import os
import time

import requests

from .config import Settings
from .errors import (
    ContentTypeError,
    FetchError,
    HttpStatusError,
    ImageIOError,
    InvalidImageError,
    RequestTimeoutError,
    SizeLimitError,
)
from .references import ReferenceKind, classify, parse_data_uri

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class RawImage:
    data: bytes
    source: str
    kind: ReferenceKind


def fetch_image(ref: str, kind: Optional[ReferenceKind] = None, settings: Optional[Settings] = None, session: Any = None) -> RawImage:
    """Resolve an image reference into raw bytes.

    Nothing here decides whether the bytes are really an image; that is the
    normalizer's job. Only cheap pre-filters (declared content type, size)
    are applied.
    """
    settings = settings or Settings()
    kind = kind or classify(ref)
    if kind is ReferenceKind.DATA_URI:
        data = decode_data_uri(ref, settings.max_image_bytes)
        return RawImage(data, "data URI", kind)
    if kind is ReferenceKind.REMOTE_URL:
        data = download_image(ref, settings.max_image_bytes, settings.timeout, session=session)
        return RawImage(data, ref, kind)
    path = file_url_to_path(ref) if kind is ReferenceKind.FILE_URI else ref
    return RawImage(read_image_file(path, settings.max_image_bytes), path, kind)


def decode_data_uri(ref: str, max_bytes: int) -> bytes:
    mime_type, payload = parse_data_uri(ref)
    # line-wrapped base64 is common in pasted data URIs
    payload = "".join(payload.split())
    if not mime_type.startswith("image/"):
        raise ContentTypeError(f"Data URI must be an image, got: {mime_type}")
    # base64 is ~4/3 of the decoded size; refuse before spending time decoding
    estimated = len(payload) * 3 / 4
    if estimated > max_bytes:
        raise SizeLimitError(
            f"Data URI too large: ~{_mb(estimated)}MB (max {_mb(max_bytes)}MB)"
        )
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"Invalid base64 payload in data URI: {e}") from e


def file_url_to_path(url: str) -> str:
    parsed = urlparse(url)
    if parsed.netloc not in ("", "localhost"):
        raise ImageIOError(f"file URL must point to the local host, got host {parsed.netloc!r}")
    return url2pathname(unquote(parsed.path))


def read_image_file(path: str, max_bytes: int) -> bytes:
    try:
        size = os.stat(path).st_size
        if size > max_bytes:
            raise SizeLimitError(f"Image too large: {_mb(size)}MB (max {_mb(max_bytes)}MB): {path}")
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ImageIOError(f"Failed to read image file {path!r}: {e}") from e
    logger.debug("read %d bytes from %s", len(data), path)
    return data


def download_image(url: str, max_bytes: int, timeout: float, session: Any = None) -> bytes:
    """GET `url` and return the body, enforcing status, type, size and time budgets.

    `timeout` bounds each socket operation and, through a deadline, the whole
    transfer. The response is always closed, including on error paths.
    """
    http = session or requests
    deadline = time.monotonic() + timeout
    try:
        with http.get(url, stream=True, timeout=timeout) as resp:
            if resp.status_code != 200:
                raise HttpStatusError(f"Failed to fetch image: HTTP {resp.status_code}", resp.status_code)

            content_type = resp.headers.get("Content-Type") or ""
            if not content_type.startswith("image/"):
                raise ContentTypeError(f"URL must return an image, got: {content_type or 'no content type'}")

            declared = resp.headers.get("Content-Length")
            if declared and declared.isdigit() and int(declared) > max_bytes:
                raise SizeLimitError(f"Image too large: {_mb(int(declared))}MB (max {_mb(max_bytes)}MB)")

            buf = bytearray()
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise RequestTimeoutError(f"Timed out after {timeout}s fetching image: {url}")
                buf.extend(chunk)
                if len(buf) > max_bytes:
                    raise SizeLimitError(f"Image too large: {len(buf)} bytes received so far (max {_mb(max_bytes)}MB)")
    except requests.Timeout as e:
        raise RequestTimeoutError(f"Timed out after {timeout}s fetching image: {url}") from e
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch image {url}: {e}") from e

    logger.debug("downloaded %d bytes from %s", len(buf), url)
    return bytes(buf)


def _mb(n: float) -> str:
    return f"{n / 1024 / 1024:.1f}"
