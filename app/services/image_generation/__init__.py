"""
Image generation service: Imagen text-to-image and Gemini image editing.
"""
from .base import (
    ImageDispatchError,
    ImageGenerationError,
    ImageGenerationProvider,
    ImageGenerationRequest,
    ImageGenerationResponse,
    ImageInput,
    ImageModel,
    sanitize_response_for_log,
)
from .dispatcher import ImageDispatcher, generate_image, get_dispatcher
from .error_codes import ErrorCode, classify_error, classify_error_text
from .factory import ImageProviderFactory

__all__ = [
    "ImageDispatchError",
    "ImageGenerationError",
    "ImageGenerationProvider",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "ImageInput",
    "ImageModel",
    "sanitize_response_for_log",
    "ImageDispatcher",
    "generate_image",
    "get_dispatcher",
    "ErrorCode",
    "classify_error",
    "classify_error_text",
    "ImageProviderFactory",
]
