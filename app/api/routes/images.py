"""
Image generation API for the web UI.
Errors are returned as {"error": "<code>"}; the UI maps the code to a message.
"""
import logging

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from app.services.image_generation import (
    ErrorCode,
    ImageDispatchError,
    ImageInput,
    ImageProviderFactory,
    get_dispatcher,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])

ERROR_STATUS: dict[ErrorCode, int] = {
    ErrorCode.CREDENTIALS_MISSING: 500,
    ErrorCode.PROMPT_OR_IMAGE_REQUIRED: 400,
    ErrorCode.NO_IMAGES_RETURNED: 502,
    ErrorCode.SAFETY_REJECTED: 422,
    ErrorCode.INVALID_CREDENTIAL: 401,
    ErrorCode.BILLING_ISSUE: 402,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.UNSUPPORTED_LOCATION: 451,
    ErrorCode.QUOTA_EXHAUSTED: 429,
    ErrorCode.GENERIC_FAILURE: 502,
}


class GenerateImageBody(BaseModel):
    prompt: str = ""
    aspect_ratio: str = Field(default="1:1", alias="aspectRatio")
    model: str
    image: ImageInput | None = None

    model_config = {"populate_by_name": True}


class GenerateImageResult(BaseModel):
    image: str
    model: str


@router.get("/models")
def list_models() -> dict:
    return {
        "models": ImageProviderFactory.get_available_models(),
        "edit_models": ImageProviderFactory.get_editing_models(),
    }


@router.post("/generate", response_model=GenerateImageResult)
async def generate(
    body: GenerateImageBody,
    x_api_key: str | None = Header(default=None),
):
    """Generate one image; X-Api-Key overrides the server key."""
    try:
        image_b64 = await get_dispatcher().generate(
            body.prompt,
            body.aspect_ratio,
            body.model,
            image=body.image,
            api_key=x_api_key,
        )
    except ImageDispatchError as e:
        return JSONResponse(status_code=ERROR_STATUS.get(e.code, 502), content={"error": e.code.value})
    return GenerateImageResult(image=image_b64, model=body.model)
