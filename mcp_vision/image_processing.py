from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple
import base64
import io
import logging

from PIL import Image, ImageOps

from .config import Settings
from .errors import InvalidImageError, SizeLimitError

logger = logging.getLogger(__name__)

# Authoritative: the mime type sent upstream always comes from the decoded
# format, never from an extension or a declared content type.
FORMAT_MIME = {
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "mpo": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "tiff": "image/tiff",
    "avif": "image/avif",
    "heif": "image/heif",
    "heic": "image/heic",
}
DEFAULT_MIME = "image/png"

_LOSSY_FORMATS = ("JPEG", "WEBP", "AVIF")
_PNG_MODES = ("1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA")


@dataclass(frozen=True)
class ImageMetadata:
    format: str
    width: int
    height: int

    @property
    def long_edge(self) -> int:
        return max(self.width, self.height)


@dataclass(frozen=True)
class ImagePart:
    mime_type: str
    data: str

    def to_dict(self) -> dict:
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


def format_to_mime(fmt: Optional[str]) -> str:
    return FORMAT_MIME.get((fmt or "").lower(), DEFAULT_MIME)


def probe_image(data: bytes) -> ImageMetadata:
    """Fully decode `data` and report its real format and size.

    This is the gate that keeps arbitrary files from being forwarded, so the
    pixel data is loaded rather than trusting the header alone.
    """
    try:
        with Image.open(io.BytesIO(data)) as im:
            im.load()
            fmt = im.format
            width, height = im.size
    except Exception as e:
        raise InvalidImageError(f"Not a valid image file: {e}") from e
    if not fmt or not width or not height:
        raise InvalidImageError("Invalid or corrupted image")
    return ImageMetadata(fmt.lower(), width, height)


def fit_inside(width: int, height: int, max_edge: int) -> Tuple[int, int]:
    """Scale (width, height) so the longer edge equals `max_edge`, keeping aspect."""
    if width >= height:
        return max_edge, max(1, round(height * max_edge / width))
    return max(1, round(width * max_edge / height)), max_edge


def resize_image_bytes(data: bytes, max_long_edge: int, quality: int) -> Tuple[bytes, str, int, int]:
    """Downscale so the long edge is `max_long_edge` and re-encode.

    The source format is kept when Pillow can write it, otherwise PNG.
    Returns (bytes, format, width, height).
    """
    with Image.open(io.BytesIO(data)) as src:
        fmt = src.format or "PNG"
        im = ImageOps.exif_transpose(src)
        w, h = im.size
        if max(w, h) > max_long_edge:
            im = im.resize(fit_inside(w, h, max_long_edge), Image.LANCZOS)
        out, fmt = _encode(im, fmt, quality)
        final_w, final_h = im.size
    return out, fmt.lower(), final_w, final_h


def _encode(im: Image.Image, fmt: str, quality: int) -> Tuple[bytes, str]:
    kwargs = {"quality": quality} if fmt in _LOSSY_FORMATS else {}
    if fmt == "JPEG" and im.mode not in ("RGB", "L", "CMYK"):
        im = im.convert("RGB")
    buf = io.BytesIO()
    try:
        im.save(buf, format=fmt, **kwargs)
    except Exception as e:
        logger.debug("cannot re-encode as %s (%s), falling back to PNG", fmt, e)
        if im.mode not in _PNG_MODES:
            im = im.convert("RGBA")
        buf = io.BytesIO()
        fmt = "PNG"
        try:
            im.save(buf, format=fmt)
        except Exception as e2:
            raise InvalidImageError(f"Failed to re-encode resized image: {e2}") from e2
    out = buf.getvalue()
    if not out:
        raise InvalidImageError("resize resulted in empty bytes")
    return out, fmt


def normalize_image(data: bytes, settings: Optional[Settings] = None) -> ImagePart:
    settings = settings or Settings()
    meta = probe_image(data)
    mime_type = format_to_mime(meta.format)
    out = data

    if settings.max_long_edge > 0 and meta.long_edge > settings.max_long_edge:
        out, fmt, w, h = resize_image_bytes(data, settings.max_long_edge, settings.image_quality)
        mime_type = format_to_mime(fmt)
        logger.debug(
            "resized %s %dx%d -> %dx%d (%d -> %d bytes)",
            meta.format, meta.width, meta.height, w, h, len(data), len(out),
        )

    # Resizing is best effort; a detailed image can still be over budget
    if len(out) > settings.max_image_bytes:
        raise SizeLimitError(
            f"Image too large after processing: {len(out) / 1024 / 1024:.1f}MB "
            f"(max {settings.max_image_mb:.1f}MB)"
        )

    return ImagePart(mime_type, base64.b64encode(out).decode("ascii"))
