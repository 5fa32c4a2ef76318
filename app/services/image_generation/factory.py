"""
Factory for creating image generation providers by model.
"""
from typing import Optional
import logging

from app.services.image_generation.base import ImageGenerationProvider, ImageModel
from app.services.image_generation.providers.gemini_image import GeminiImageProvider
from app.services.image_generation.providers.imagen import ImagenProvider

logger = logging.getLogger(__name__)


PROVIDER_CLASSES: tuple[type[ImageGenerationProvider], ...] = (
    ImagenProvider,
    GeminiImageProvider,
)


def _get_providers_registry() -> dict[ImageModel, type[ImageGenerationProvider]]:
    """Build model -> provider registry from each provider's supported models."""
    reg: dict[ImageModel, type[ImageGenerationProvider]] = {}
    for provider_class in PROVIDER_CLASSES:
        for model in provider_class.get_supported_models():
            if model in reg:
                raise ValueError(f"Model {model.value} claimed by {reg[model].name} and {provider_class.name}")
            reg[model] = provider_class
    return reg


class ImageProviderFactory:
    """Factory for creating image generation providers."""

    # Every ImageModel member must be present
    PROVIDERS = _get_providers_registry()

    @classmethod
    def resolve_model(cls, model: str | ImageModel | None) -> Optional[ImageModel]:
        """Map a model identifier to ImageModel; None when unknown."""
        if isinstance(model, ImageModel):
            return model
        value = (model or "").strip()
        try:
            return ImageModel(value)
        except ValueError:
            return None

    @classmethod
    def create(cls, model: ImageModel, config: dict) -> ImageGenerationProvider:
        """
        Create provider instance for a model.

        Args:
            model: Model to generate with
            config: Provider configuration dict (api_key, api_endpoint, timeout, ...)

        Returns:
            Initialized provider instance

        Raises:
            ValueError: If model has no provider
        """
        provider_class = cls.PROVIDERS.get(model)

        if not provider_class:
            available = ", ".join(m.value for m in cls.PROVIDERS)
            raise ValueError(
                f"Unknown model: {model}. "
                f"Available models: {available}"
            )

        logger.debug("Creating image provider %s for %s", provider_class.name, model.value)
        provider = provider_class(config)

        if not provider.is_available():
            logger.warning("Provider %s created but not fully configured", provider_class.name)

        return provider

    @classmethod
    def get_available_models(cls) -> list[str]:
        """Get list of all supported model identifiers."""
        return [m.value for m in cls.PROVIDERS]

    @classmethod
    def get_editing_models(cls) -> list[str]:
        """Models that accept an input image."""
        return [m.value for m, provider_class in cls.PROVIDERS.items() if provider_class.supports_image_editing()]
