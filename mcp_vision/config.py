from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import os
import sys

from dotenv import load_dotenv, find_dotenv

logger = logging.getLogger(__name__)

PROVIDER_AI_STUDIO = "ais"
PROVIDER_VERTEX = "vertex"

DEFAULT_MODEL = "models/gemini-flash-lite-latest"
DEFAULT_LOCATION = "us-central1"
DEFAULT_MAX_IMAGES = 10
# Leaves headroom under the 20MB inline request limit of AI Studio
DEFAULT_MAX_IMAGE_MB = 18
DEFAULT_MAX_LONG_EDGE = 2048
DEFAULT_TIMEOUT = 60
DEFAULT_IMAGE_QUALITY = 90

LOG_FORMAT = "[mcp_vision] %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    provider: str = PROVIDER_AI_STUDIO
    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    project: Optional[str] = None
    location: str = DEFAULT_LOCATION
    access_token: Optional[str] = None
    max_images: int = DEFAULT_MAX_IMAGES
    max_image_bytes: int = DEFAULT_MAX_IMAGE_MB * 1024 * 1024
    max_long_edge: int = DEFAULT_MAX_LONG_EDGE
    timeout: int = DEFAULT_TIMEOUT
    image_quality: int = DEFAULT_IMAGE_QUALITY
    log_level: str = "INFO"

    @property
    def max_image_mb(self) -> float:
        return self.max_image_bytes / (1024 * 1024)


def _find_env_file() -> str:
    # Try find_dotenv(); if it fails to locate a file, search parent directories
    env_path = find_dotenv(usecwd=True)
    if env_path:
        return env_path
    for start in (os.getcwd(), os.path.dirname(__file__)):
        p = os.path.abspath(start)
        while True:
            cand = os.path.join(p, ".env")
            if os.path.exists(cand):
                return cand
            parent = os.path.dirname(p)
            if parent == p:
                break
            p = parent
    return ".env"


def load_config(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build `Settings` once at startup.

    With no explicit mapping the nearest `.env` is loaded into the process
    environment first, then `os.environ` is read.
    """
    if env is None:
        load_dotenv(_find_env_file())
        env = os.environ

    def _str_env(name: str) -> Optional[str]:
        v = env.get(name)
        if v is None:
            return None
        v = v.strip()
        return v or None

    def _int_env(name: str, default: int) -> int:
        v = env.get(name)
        if not v:
            return default
        try:
            return int(v)
        except ValueError:
            logger.warning("invalid %s=%r, using default %s", name, v, default)
            return default

    debug = str(env.get("DEBUG", "")).lower() in ("1", "true", "yes")
    log_level = "DEBUG" if debug else (_str_env("LOG_LEVEL") or "INFO").upper()

    return Settings(
        provider=(_str_env("GEMINI_PROVIDER") or PROVIDER_AI_STUDIO).lower(),
        model=_str_env("GEMINI_MODEL") or DEFAULT_MODEL,
        api_key=_str_env("GEMINI_API_KEY"),
        project=_str_env("GOOGLE_CLOUD_PROJECT"),
        location=_str_env("GEMINI_LOCATION") or DEFAULT_LOCATION,
        access_token=_str_env("GOOGLE_OAUTH_ACCESS_TOKEN"),
        max_images=_int_env("VISION_MAX_IMAGES", DEFAULT_MAX_IMAGES),
        max_image_bytes=_int_env("VISION_MAX_IMAGE_MB", DEFAULT_MAX_IMAGE_MB) * 1024 * 1024,
        max_long_edge=max(0, _int_env("VISION_MAX_LONG_EDGE", DEFAULT_MAX_LONG_EDGE)),
        timeout=_int_env("VISION_TIMEOUT", DEFAULT_TIMEOUT),
        image_quality=_int_env("IMAGE_QUALITY", DEFAULT_IMAGE_QUALITY),
        log_level=log_level,
    )


def setup_logging(level: str = "INFO") -> None:
    # stdout carries the MCP transport, so everything goes to stderr
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("mcp_vision")
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
