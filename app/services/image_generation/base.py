"""
Base classes and types for image generation providers.
Used by factory, dispatcher and both providers (imagen, gemini_image).
"""
import base64
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any

import httpx
from pydantic import BaseModel, Field

from app.services.image_generation.error_codes import ErrorCode

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


class ImageModel(str, Enum):
    """Supported remote models."""

    IMAGEN = "imagen-4.0-generate-001"  # text-to-image only
    GEMINI_FLASH_IMAGE = "gemini-2.5-flash-image-preview"  # image + text in, image out


class ImageInput(BaseModel):
    """Source image for edit-mode: base64 payload without the data URL prefix."""

    data: str
    mime_type: str = Field(alias="mimeType")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_bytes(cls, raw: bytes, mime_type: str) -> "ImageInput":
        return cls(data=base64.standard_b64encode(raw).decode("ascii"), mime_type=mime_type)

    @classmethod
    def from_data_url(cls, url: str) -> "ImageInput":
        """Build from 'data:image/png;base64,....' as produced by browser FileReader."""
        match = _DATA_URL_RE.match((url or "").strip())
        if not match:
            raise ValueError("Not a base64 data URL")
        return cls(data=match.group("data"), mime_type=match.group("mime"))


@dataclass
class ImageGenerationRequest:
    """Request for image generation."""
    prompt: str
    aspect_ratio: str
    model: ImageModel
    image: ImageInput | None = None


@dataclass
class ImageGenerationResponse:
    """Response from image generation."""
    image_b64: str
    model: str
    provider: str
    mime_type: str | None = None


class ImageGenerationError(Exception):
    """Raised by providers when the remote call fails; detail holds fields for logging."""
    def __init__(self, message: str, detail: dict[str, Any] | None = None):
        super().__init__(message)
        self.detail = detail or {}


class ImageDispatchError(Exception):
    """
    Surfaced to callers. Carries only the error code: str(err) is the tag,
    no provider text.
    """
    def __init__(self, code: ErrorCode):
        super().__init__(code.value)
        self.code = code


def _sanitize_value(value: Any) -> Any:
    """Recursively replace base64 data with placeholder."""
    if value is None:
        return None
    if isinstance(value, dict):
        if "data" in value and "mimeType" in value:
            return {"mimeType": value.get("mimeType"), "data": "[REDACTED]"}
        return {
            k: "[REDACTED]" if k == "bytesBase64Encoded" else _sanitize_value(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [_sanitize_value(v) for v in value]
    return value


def sanitize_response_for_log(result: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a Gemini/Imagen response safe for logging (no base64 image data)."""
    if not result:
        return {}
    out = _sanitize_value(result)
    return out if isinstance(out, dict) else {}


def format_http_error(response: httpx.Response) -> str:
    """
    Render a Google API error as '<code> <STATUS>. <message>'.
    Falls back to the raw body when it is not the usual {"error": {...}} JSON.
    """
    try:
        body = response.json()
    except ValueError:
        body = {}
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict):
        status = error.get("status") or response.reason_phrase
        message = error.get("message") or ""
        return f"{response.status_code} {status}. {message}".strip()
    return f"{response.status_code} {response.reason_phrase}. {response.text}".strip()


class ImageGenerationProvider(ABC):
    """Base class for image generation providers."""

    name: str = ""

    def __init__(self, config: dict) -> None:
        self.config = config
        self.api_key = (config.get("api_key") or "").strip()
        endpoint = (config.get("api_endpoint") or "https://generativelanguage.googleapis.com").rstrip("/")
        self.base_url = f"{endpoint}/v1beta/models"
        self.timeout = float(config.get("timeout", 180.0))
        self.transport: httpx.AsyncBaseTransport | None = config.get("transport")

    def is_available(self) -> bool:
        """Check if provider is configured and available."""
        return bool(self.api_key)

    @classmethod
    @abstractmethod
    def get_supported_models(cls) -> list[ImageModel]:
        """Return list of supported models; the factory routes these models here."""
        pass

    @classmethod
    def supports_image_editing(cls) -> bool:
        """Override if provider supports image editing (input image + prompt)."""
        return False

    async def _post(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST payload and return the decoded JSON; HTTP and transport failures become ImageGenerationError."""
        headers = {"x-goog-api-key": self.api_key}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(url, headers=headers, json=payload)
                resp.raise_for_status()
                return resp.json()
        except httpx.HTTPStatusError as e:
            detail = {"http_status": e.response.status_code}
            raise ImageGenerationError(format_http_error(e.response), detail=detail) from e
        except httpx.HTTPError as e:
            raise ImageGenerationError(str(e) or type(e).__name__, detail={}) from e

    @abstractmethod
    async def generate(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        """
        Generate image from request.
        Raises ImageDispatchError for known outcomes (safety, no image),
        ImageGenerationError for remote failures.
        """
        pass
