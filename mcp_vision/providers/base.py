from abc import ABC, abstractmethod
from typing import Dict, Type

from ..config import Settings
from ..errors import ProviderApiError

MODEL_PREFIX = "models/"


class GeminiBackend(ABC):
    """One way of reaching a Gemini `generateContent` endpoint.

    Backends only differ in how the URL, headers and model name are built;
    sending the request and reading the answer is shared in `model_client`.
    """

    name: str = ""
    label: str = "Gemini"
    error_class: Type[ProviderApiError] = ProviderApiError

    def __init__(self, settings: Settings):
        self.settings = settings

    def validate(self) -> None:
        """Raise `ConfigurationError` when required settings are missing."""

    @abstractmethod
    def normalize_model_name(self, model: str) -> str:
        ...

    @abstractmethod
    def build_url(self) -> str:
        ...

    def build_headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def redacted_url(self) -> str:
        return self.build_url()
