"""
Image request dispatcher: resolve credential, pick provider by model, make one call,
normalize every failure into an ErrorCode.
No retries, no caching: one remote call per invocation (none for pre-flight failures).
"""
import logging
import time

import httpx

from app.core.config import Settings, settings as app_settings
from app.services.image_generation.base import (
    ImageDispatchError,
    ImageGenerationRequest,
    ImageInput,
    ImageModel,
)
from app.services.image_generation.error_codes import ErrorCode, classify_error
from app.services.image_generation.factory import ImageProviderFactory
from app.utils.metrics import record_generation

logger = logging.getLogger(__name__)

UNKNOWN_MODEL_LABEL = "unknown"


class ImageDispatcher:
    """
    Dispatches generation requests to Imagen or Gemini.

    The process-wide API key is injected here; callers may override it per call.
    """

    def __init__(
        self,
        default_api_key: str | None = None,
        *,
        api_endpoint: str = "https://generativelanguage.googleapis.com",
        timeout: float = 180.0,
        output_mime_type: str = "image/png",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._default_api_key = (default_api_key or "").strip()
        self.api_endpoint = api_endpoint
        self.timeout = timeout
        self.output_mime_type = output_mime_type
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ImageDispatcher":
        return cls(
            settings.gemini_api_key,
            api_endpoint=settings.gemini_api_endpoint,
            timeout=settings.gemini_timeout,
            output_mime_type=settings.imagen_output_mime_type,
            **kwargs,
        )

    def resolve_api_key(self, api_key: str | None = None) -> str:
        """Override first, then the configured key. Raises CREDENTIALS_MISSING when neither is set."""
        effective = (api_key or "").strip() or self._default_api_key
        if not effective:
            raise ImageDispatchError(ErrorCode.CREDENTIALS_MISSING)
        return effective

    def _provider_config(self, api_key: str) -> dict:
        return {
            "api_key": api_key,
            "api_endpoint": self.api_endpoint,
            "timeout": self.timeout,
            "output_mime_type": self.output_mime_type,
            "transport": self._transport,
        }

    async def generate(
        self,
        prompt: str,
        aspect_ratio: str,
        model: str | ImageModel,
        image: ImageInput | None = None,
        api_key: str | None = None,
    ) -> str:
        """
        Generate one image and return it as base64 (no data URL prefix).

        Args:
            prompt: Text prompt; may be blank for the Gemini model when image is given
            aspect_ratio: e.g. "1:1", "16:9"; used by Imagen only
            model: Model identifier (see ImageModel)
            image: Optional source image for edit-mode (Gemini only)
            api_key: Optional per-call key overriding the configured one

        Raises:
            ImageDispatchError: always with one ErrorCode, never provider text
        """
        model_label = model.value if isinstance(model, ImageModel) else str(model)
        resolved_model = ImageProviderFactory.resolve_model(model)
        # Metric labels only take known model ids
        metric_model = resolved_model.value if resolved_model is not None else UNKNOWN_MODEL_LABEL
        start = time.monotonic()
        try:
            resolved_key = self.resolve_api_key(api_key)
            if resolved_model is None:
                logger.warning("unknown image model", extra={"model": model_label})
                raise ImageDispatchError(ErrorCode.NO_IMAGES_RETURNED)

            provider = ImageProviderFactory.create(resolved_model, self._provider_config(resolved_key))
            if image is not None and not provider.supports_image_editing():
                logger.info("input image ignored by %s", provider.name, extra={"model": model_label})
            request = ImageGenerationRequest(
                prompt=prompt or "",
                aspect_ratio=aspect_ratio,
                model=resolved_model,
                image=image,
            )
            response = await provider.generate(request)
        except Exception as e:
            code = classify_error(e)
            detail = getattr(e, "detail", None) or {}
            logger.error(
                "image_generation_failed: %s",
                e,
                exc_info=not isinstance(e, ImageDispatchError),
                extra={
                    "model": model_label,
                    "error_code": code.value,
                    "http_status": detail.get("http_status"),
                    "has_image": image is not None,
                },
            )
            record_generation(metric_model, code.value, time.monotonic() - start)
            raise ImageDispatchError(code) from None

        record_generation(metric_model, "success", time.monotonic() - start)
        logger.info(
            "image_generation_succeeded",
            extra={"model": model_label, "provider": response.provider, "aspect_ratio": aspect_ratio},
        )
        return response.image_b64


_dispatcher: ImageDispatcher | None = None


def get_dispatcher() -> ImageDispatcher:
    """Process-wide dispatcher built from settings."""
    global _dispatcher
    if _dispatcher is None:
        _dispatcher = ImageDispatcher.from_settings(app_settings)
    return _dispatcher


async def generate_image(
    prompt: str,
    aspect_ratio: str,
    model: str | ImageModel,
    image: ImageInput | None = None,
    api_key: str | None = None,
) -> str:
    """Convenience wrapper around the process-wide dispatcher."""
    return await get_dispatcher().generate(prompt, aspect_ratio, model, image=image, api_key=api_key)
