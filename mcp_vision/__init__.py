"""Public API for mcp_vision.

Expose a small, explicit set of helpers used by the server, the CLI and tests.
"""
from importlib.metadata import PackageNotFoundError, version

try:
	__version__ = version("mcp-vision")
except PackageNotFoundError:
	__version__ = "0.0.0"

from .config import Settings, load_config, setup_logging
from .errors import (
	ConfigurationError,
	ContentTypeError,
	CredentialResolutionError,
	FetchError,
	HttpStatusError,
	ImageIOError,
	InvalidImageError,
	InvalidRequestError,
	ProviderApiError,
	RequestTimeoutError,
	SizeLimitError,
	UnsupportedReferenceKind,
	VertexApiError,
	VisionError,
)
from .references import ReferenceKind, classify
from .image_io import RawImage, fetch_image
from .image_processing import ImageMetadata, ImagePart, normalize_image, probe_image
from .model_client import build_parts, generate_content
from .services.analyzer import AnalyzerService
from .json_api import handle_json_request

__all__ = [
	"Settings",
	"load_config",
	"setup_logging",
	"VisionError",
	"UnsupportedReferenceKind",
	"FetchError",
	"ImageIOError",
	"HttpStatusError",
	"ContentTypeError",
	"RequestTimeoutError",
	"SizeLimitError",
	"InvalidImageError",
	"InvalidRequestError",
	"ConfigurationError",
	"ProviderApiError",
	"VertexApiError",
	"CredentialResolutionError",
	"ReferenceKind",
	"classify",
	"RawImage",
	"fetch_image",
	"ImageMetadata",
	"ImagePart",
	"normalize_image",
	"probe_image",
	"build_parts",
	"generate_content",
	"AnalyzerService",
	"handle_json_request",
	"__version__",
]
