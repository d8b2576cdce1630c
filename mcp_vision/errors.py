"""Error taxonomy for the vision pipeline.

Every failure raised by the pipeline derives from `VisionError` so the
tool shell can turn it into a single descriptive message.
"""
from typing import Optional


class VisionError(Exception):
    """Base class for all pipeline failures."""


class UnsupportedReferenceKind(VisionError):
    pass


class FetchError(VisionError):
    """Raised when an image reference cannot be turned into bytes."""


class ImageIOError(FetchError):
    pass


class HttpStatusError(FetchError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ContentTypeError(FetchError):
    pass


class RequestTimeoutError(VisionError, TimeoutError):
    pass


class SizeLimitError(VisionError):
    pass


class InvalidImageError(VisionError):
    pass


class InvalidRequestError(VisionError):
    pass


class ConfigurationError(VisionError):
    pass


class ProviderApiError(VisionError):
    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class VertexApiError(ProviderApiError):
    pass


class CredentialResolutionError(VisionError):
    pass
