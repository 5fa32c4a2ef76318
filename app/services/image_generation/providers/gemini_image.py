"""
Gemini image provider (Google AI generateContent, image + text modalities).
Edit-mode: optional input image first, then optional text.
A SAFETY finish reason is reported before any content is looked at.
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

RESPONSE_MODALITIES = ["IMAGE", "TEXT"]
SAFETY_FINISH_REASON = "SAFETY"


def build_gemini_parts(request: ImageGenerationRequest) -> list[dict[str, Any]]:
    """Image part (if any) then text part (if prompt is not blank)."""
    parts: list[dict[str, Any]] = []
    if request.image is not None:
        parts.append({
            "inlineData": {"mimeType": request.image.mime_type, "data": request.image.data},
        })
    if request.prompt.strip():
        parts.append({"text": request.prompt})
    return parts


def build_gemini_payload(parts: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {
            "responseModalities": RESPONSE_MODALITIES,
        },
    }


def build_gemini_error_detail(result: dict[str, Any]) -> dict[str, Any]:
    """
    Extract error-related fields from raw Gemini response for logging.
    Normalized keys: block_reason, finish_reason, finish_message, safety_ratings.
    """
    detail: dict[str, Any] = {}
    if not result:
        return detail
    prompt_feedback = result.get("promptFeedback") or {}
    if prompt_feedback.get("blockReason"):
        detail["block_reason"] = prompt_feedback.get("blockReason")
    candidates = result.get("candidates") or []
    if candidates:
        c0 = candidates[0]
        if "finishReason" in c0:
            detail["finish_reason"] = c0["finishReason"]
        if "finishMessage" in c0:
            detail["finish_message"] = c0["finishMessage"]
        if "safetyRatings" in c0:
            detail["safety_ratings"] = c0["safetyRatings"]
    return detail


def is_safety_finish(result: dict[str, Any]) -> bool:
    candidates = result.get("candidates") or []
    return bool(candidates) and candidates[0].get("finishReason") == SAFETY_FINISH_REASON


def extract_gemini_image(result: dict[str, Any]) -> tuple[str, str | None] | None:
    """Return (base64, mime type) of the first inline-data part of the first candidate, or None."""
    candidates = result.get("candidates") or []
    if not candidates:
        return None
    content = candidates[0].get("content") or {}
    for part in content.get("parts") or []:
        inline = part.get("inlineData") or part.get("inline_data")
        if inline and isinstance(inline.get("data"), str) and inline["data"]:
            return inline["data"], inline.get("mimeType") or inline.get("mime_type")
    return None


class GeminiImageProvider(ImageGenerationProvider):
    """Gemini image generation/editing via Google AI generateContent API."""

    name = "gemini"

    @classmethod
    def get_supported_models(cls) -> list[ImageModel]:
        return [ImageModel.GEMINI_FLASH_IMAGE]

    @classmethod
    def supports_image_editing(cls) -> bool:
        return True

    async def generate(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        parts = build_gemini_parts(request)
        if not parts:
            raise ImageDispatchError(ErrorCode.PROMPT_OR_IMAGE_REQUIRED)

        url = f"{self.base_url}/{request.model.value}:generateContent"
        result = await self._post(url, build_gemini_payload(parts))

        if is_safety_finish(result):
            logger.warning(
                "gemini_safety_finish",
                extra={"model": request.model.value, **build_gemini_error_detail(result)},
            )
            raise ImageDispatchError(ErrorCode.SAFETY_REJECTED)

        extracted = extract_gemini_image(result)
        if extracted is None:
            detail = build_gemini_error_detail(result)
            logger.warning(
                "gemini_no_image_in_response: %s",
                sanitize_response_for_log(result),
                extra={
                    "model": request.model.value,
                    "finish_reason": detail.get("finish_reason"),
                    "block_reason": detail.get("block_reason"),
                },
            )
            raise ImageDispatchError(ErrorCode.NO_IMAGES_RETURNED)

        image_b64, mime_type = extracted
        return ImageGenerationResponse(
            image_b64=image_b64,
            model=request.model.value,
            provider=self.name,
            mime_type=mime_type,
        )
