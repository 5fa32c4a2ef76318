"""
Error codes surfaced to callers and the classifier for raw provider failures.
Provider errors come back as free text, so classification is substring matching.
Check order is a priority order: first match wins.
"""
from enum import Enum


class ErrorCode(str, Enum):
    """Closed set of tags; values double as UI message keys."""

    CREDENTIALS_MISSING = "error_api_key_not_configured"
    PROMPT_OR_IMAGE_REQUIRED = "error_prompt_or_image_required_for_edit"
    NO_IMAGES_RETURNED = "error_no_images_returned"
    SAFETY_REJECTED = "error_safety"
    INVALID_CREDENTIAL = "error_api_key"
    BILLING_ISSUE = "error_billing"
    PERMISSION_DENIED = "error_permission"
    UNSUPPORTED_LOCATION = "error_location"
    QUOTA_EXHAUSTED = "error_quota"
    GENERIC_FAILURE = "error_generic"


# (substrings, code) in priority order
CLASSIFICATION_RULES: tuple[tuple[tuple[str, ...], ErrorCode], ...] = (
    (("safety", "policy"), ErrorCode.SAFETY_REJECTED),
    (("api key not valid", "invalid api key"), ErrorCode.INVALID_CREDENTIAL),
    (("billing",), ErrorCode.BILLING_ISSUE),
    (("permission denied", "api is not enabled"), ErrorCode.PERMISSION_DENIED),
    (("unsupported location",), ErrorCode.UNSUPPORTED_LOCATION),
    (("429", "quota", "resource_exhausted"), ErrorCode.QUOTA_EXHAUSTED),
)


def classify_error_text(text: str) -> ErrorCode:
    """Map raw failure text to an ErrorCode. Case-insensitive; unknown text is GENERIC_FAILURE."""
    message = (text or "").lower()
    for needles, code in CLASSIFICATION_RULES:
        if any(needle in message for needle in needles):
            return code
    return ErrorCode.GENERIC_FAILURE


def classify_error(error: BaseException) -> ErrorCode:
    """
    Classify any exception raised while generating.
    Errors that already carry a code (ImageDispatchError) keep it.
    """
    code = getattr(error, "code", None)
    if isinstance(code, ErrorCode):
        return code
    return classify_error_text(str(error))
