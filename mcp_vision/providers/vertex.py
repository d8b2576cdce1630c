"""Vertex AI backend, authenticated with an OAuth bearer token."""
from __future__ import annotations

from typing import Callable, Dict, Optional

from ..config import Settings
from ..credentials import resolve_access_token
from ..errors import ConfigurationError, VertexApiError
from .base import GeminiBackend, MODEL_PREFIX


class VertexBackend(GeminiBackend):
    name = "vertex"
    label = "Gemini Vertex"
    error_class = VertexApiError

    def __init__(self, settings: Settings, token_resolver: Optional[Callable[[Settings], str]] = None):
        super().__init__(settings)
        self._token_resolver = token_resolver or resolve_access_token

    def validate(self) -> None:
        if not self.settings.project:
            raise ConfigurationError("GOOGLE_CLOUD_PROJECT is required for Vertex AI provider")

    def normalize_model_name(self, model: str) -> str:
        # Vertex rejects the "models/" prefix in the URL path
        return model[len(MODEL_PREFIX):] if model.startswith(MODEL_PREFIX) else model

    def build_url(self) -> str:
        self.validate()
        loc = self.settings.location
        model = self.normalize_model_name(self.settings.model)
        return (
            f"https://{loc}-aiplatform.googleapis.com/v1/projects/{self.settings.project}"
            f"/locations/{loc}/publishers/google/models/{model}:generateContent"
        )

    def build_headers(self) -> Dict[str, str]:
        self.validate()
        headers = super().build_headers()
        headers["Authorization"] = f"Bearer {self._token_resolver(self.settings)}"
        return headers
