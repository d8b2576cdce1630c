"""Google AI Studio backend, authenticated with an API key."""
from __future__ import annotations

from urllib.parse import quote

from ..errors import ConfigurationError
from .base import GeminiBackend, MODEL_PREFIX

AI_STUDIO_HOST = "generativelanguage.googleapis.com"


class AIStudioBackend(GeminiBackend):
    name = "ais"
    label = "Gemini"

    def validate(self) -> None:
        if not self.settings.api_key:
            raise ConfigurationError("GEMINI_API_KEY is required for AI Studio provider")

    def normalize_model_name(self, model: str) -> str:
        # AI Studio needs the "models/" prefix in the path
        return model if model.startswith(MODEL_PREFIX) else MODEL_PREFIX + model

    def _base_url(self) -> str:
        model = self.normalize_model_name(self.settings.model)
        return f"https://{AI_STUDIO_HOST}/v1beta/{model}:generateContent"

    def build_url(self) -> str:
        self.validate()
        return f"{self._base_url()}?key={quote(self.settings.api_key, safe='')}"

    def redacted_url(self) -> str:
        return f"{self._base_url()}?key=***"
