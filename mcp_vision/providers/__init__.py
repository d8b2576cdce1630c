"""Gemini backends (AI Studio and Vertex AI)."""
from ..config import PROVIDER_AI_STUDIO, PROVIDER_VERTEX, Settings
from ..errors import ConfigurationError
from .base import GeminiBackend
from .ai_studio import AIStudioBackend
from .vertex import VertexBackend

BACKENDS = {
    PROVIDER_AI_STUDIO: AIStudioBackend,
    PROVIDER_VERTEX: VertexBackend,
}


def select_backend(settings: Settings) -> GeminiBackend:
    try:
        backend_cls = BACKENDS[settings.provider]
    except KeyError:
        raise ConfigurationError(
            f"Unknown GEMINI_PROVIDER {settings.provider!r} (expected one of: {', '.join(BACKENDS)})"
        ) from None
    return backend_cls(settings)


__all__ = ["GeminiBackend", "AIStudioBackend", "VertexBackend", "BACKENDS", "select_backend"]
