"""AnalyzerService: runs one `vision.analyze` invocation end to end."""
from typing import Any, List, Optional, Sequence, Union
import logging

from ..config import Settings
from ..errors import InvalidRequestError
from ..image_io import fetch_image
from ..image_processing import ImagePart, normalize_image
from ..model_client import build_parts, generate_content
from ..providers import GeminiBackend
from ..references import classify

logger = logging.getLogger(__name__)


class AnalyzerService:
    def __init__(self, settings: Settings, backend: Optional[GeminiBackend] = None, session: Any = None):
        self.settings = settings
        self.backend = backend
        self.session = session

    def validate_request(self, images: Union[str, Sequence[str], None], instruction: Optional[str]) -> List[str]:
        if images is None or images == "":
            raise InvalidRequestError("Missing required parameter: images")
        if not isinstance(instruction, str) or not instruction.strip():
            raise InvalidRequestError("Missing required parameter: instruction")
        if not isinstance(images, (str, list, tuple)):
            raise InvalidRequestError("images must be a string or a list of strings")
        refs = [images] if isinstance(images, str) else list(images)
        if not refs:
            raise InvalidRequestError("At least one image is required")
        if len(refs) > self.settings.max_images:
            raise InvalidRequestError(f"Too many images: {len(refs)} (max {self.settings.max_images})")
        for idx, ref in enumerate(refs, start=1):
            if not isinstance(ref, str) or not ref.strip():
                raise InvalidRequestError(f"Image {idx} must be a non-empty string")
        return [ref.strip() for ref in refs]

    def prepare_image(self, ref: str) -> ImagePart:
        kind = classify(ref)
        raw = fetch_image(ref, kind, self.settings, session=self.session)
        return normalize_image(raw.data, self.settings)

    def build_request(self, images: Union[str, Sequence[str]], instruction: str) -> List[dict]:
        """Validate, fetch and normalize every image; any failure aborts the whole request."""
        refs = self.validate_request(images, instruction)
        prepared = []
        for idx, ref in enumerate(refs, start=1):
            logger.debug("preparing image %d/%d", idx, len(refs))
            prepared.append(self.prepare_image(ref))
        return build_parts(prepared, instruction.strip())

    def analyze(self, images: Union[str, Sequence[str]], instruction: str) -> str:
        parts = self.build_request(images, instruction)
        return generate_content(parts, self.settings, backend=self.backend, session=self.session)
