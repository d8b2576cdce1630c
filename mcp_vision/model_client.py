"""Send an analysis request to Gemini and pull the text answer out.

One attempt per call: no retries. The timeout bounds each socket operation
and, through a deadline checked while the body streams in, the whole
exchange. Every failure surfaces as a `VisionError` subclass with the HTTP
status and (truncated) provider message.
"""
from typing import Any, List, Optional, Sequence, Union
import json
import logging
import time

import requests

from .config import Settings
from .errors import RequestTimeoutError
from .image_processing import ImagePart
from .providers import GeminiBackend, select_backend

logger = logging.getLogger(__name__)

ERROR_BODY_LIMIT = 200
_CHUNK_SIZE = 64 * 1024

Part = Union[ImagePart, dict]


def build_parts(images: Sequence[ImagePart], instruction: str) -> List[dict]:
    """Image parts in input order, then the instruction as the last part."""
    parts = [img.to_dict() for img in images]
    parts.append({"text": instruction})
    return parts


def build_request_body(parts: Sequence[Part]) -> dict:
    wire = [p.to_dict() if isinstance(p, ImagePart) else p for p in parts]
    return {"contents": [{"role": "user", "parts": wire}]}


def extract_text(data: Any) -> str:
    """Join the text of every part of the first candidate; "" when there is none.

    Shapes that do not match the documented envelope are treated as empty,
    and parts whose `text` is not a string are skipped.
    """
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list):
        return ""
    return "".join(
        p["text"] for p in parts if isinstance(p, dict) and isinstance(p.get("text"), str)
    )


def generate_content(
    parts: Sequence[Part],
    settings: Settings,
    backend: Optional[GeminiBackend] = None,
    session: Any = None,
) -> str:
    backend = backend or select_backend(settings)
    backend.validate()
    url = backend.build_url()
    headers = backend.build_headers()
    body = build_request_body(parts)
    http = session or requests

    logger.info(
        "calling %s model=%s parts=%d url=%s",
        backend.label, backend.normalize_model_name(settings.model), len(body["contents"][0]["parts"]),
        backend.redacted_url(),
    )
    deadline = time.monotonic() + settings.timeout
    try:
        with http.post(url, headers=headers, json=body, timeout=settings.timeout, stream=True) as resp:
            status = resp.status_code
            buf = bytearray()
            for chunk in resp.iter_content(chunk_size=_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    raise RequestTimeoutError(f"{backend.label} request timed out after {settings.timeout}s")
                buf.extend(chunk)
            raw = buf.decode("utf-8", errors="replace")
    except requests.Timeout as e:
        raise RequestTimeoutError(f"{backend.label} request timed out after {settings.timeout}s") from e
    except requests.RequestException as e:
        raise backend.error_class(f"{backend.label} request failed: {_scrub(str(e), settings)}") from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        raise backend.error_class(
            f"Failed to parse {backend.label} response ({status}): {raw[:ERROR_BODY_LIMIT]}", status
        ) from e

    if status != 200:
        message = None
        if isinstance(data, dict) and isinstance(data.get("error"), dict):
            message = data["error"].get("message")
        if not message:
            message = json.dumps(data)[:ERROR_BODY_LIMIT]
        raise backend.error_class(f"{backend.label} API error ({status}): {message}", status)

    text = extract_text(data)
    if not text:
        logger.info("%s returned no text candidates", backend.label)
    return text


def _scrub(message: str, settings: Settings) -> str:
    # requests includes the full URL in connection errors, which carries the key
    if settings.api_key:
        message = message.replace(settings.api_key, "***")
    return message
