"""
Imagen text-to-image provider (Gemini API :predict endpoint).
"""
import logging
from typing import Any

from app.services.image_generation.base import (
    ImageDispatchError,
    ImageGenerationProvider,
    ImageGenerationRequest,
    ImageGenerationResponse,
    ImageModel,
    sanitize_response_for_log,
)
from app.services.image_generation.error_codes import ErrorCode

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_MIME_TYPE = "image/png"


def build_imagen_payload(request: ImageGenerationRequest, output_mime_type: str) -> dict[str, Any]:
    """Single image, fixed output format, caller's aspect ratio. Input image is not used."""
    return {
        "instances": [
            {
                "prompt": request.prompt,
            }
        ],
        "parameters": {
            "sampleCount": 1,
            "aspectRatio": request.aspect_ratio,
            "outputOptions": {"mimeType": output_mime_type},
        },
    }


def extract_imagen_image(result: dict[str, Any]) -> tuple[str, str | None] | None:
    """Return (base64, mime type) of the first generated image, or None."""
    predictions = result.get("predictions") or []
    if not predictions:
        return None
    # Filtered images come back without bytes
    image_b64 = predictions[0].get("bytesBase64Encoded")
    if not image_b64:
        return None
    return image_b64, predictions[0].get("mimeType")


class ImagenProvider(ImageGenerationProvider):
    """Imagen via generativelanguage.googleapis.com with api key."""

    name = "imagen"

    def __init__(self, config: dict) -> None:
        super().__init__(config)
        self.output_mime_type = config.get("output_mime_type") or DEFAULT_OUTPUT_MIME_TYPE

    @classmethod
    def get_supported_models(cls) -> list[ImageModel]:
        return [ImageModel.IMAGEN]

    async def generate(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        payload = build_imagen_payload(request, self.output_mime_type)
        url = f"{self.base_url}/{request.model.value}:predict"
        result = await self._post(url, payload)

        extracted = extract_imagen_image(result)
        if extracted is None:
            logger.warning(
                "imagen_no_images: %s",
                sanitize_response_for_log(result),
                extra={"model": request.model.value},
            )
            raise ImageDispatchError(ErrorCode.NO_IMAGES_RETURNED)

        image_b64, mime_type = extracted
        return ImageGenerationResponse(
            image_b64=image_b64,
            model=request.model.value,
            provider=self.name,
            mime_type=mime_type or self.output_mime_type,
        )
