"""
Unit-tests for the error classifier: one case per table row, plus priority order.
"""
import unittest

from app.services.image_generation.base import ImageDispatchError, ImageGenerationError
from app.services.image_generation.error_codes import ErrorCode, classify_error, classify_error_text


class TestClassifyErrorText(unittest.TestCase):
    def test_safety(self):
        self.assertEqual(classify_error_text("Blocked for SAFETY reasons"), ErrorCode.SAFETY_REJECTED)

    def test_policy(self):
        self.assertEqual(classify_error_text("Request violates usage Policy"), ErrorCode.SAFETY_REJECTED)

    def test_invalid_credential(self):
        self.assertEqual(
            classify_error_text("400 INVALID_ARGUMENT. API key not valid. Please pass a valid API key."),
            ErrorCode.INVALID_CREDENTIAL,
        )
        self.assertEqual(classify_error_text("Invalid API key"), ErrorCode.INVALID_CREDENTIAL)

    def test_billing(self):
        self.assertEqual(
            classify_error_text("Imagen API is only accessible to billed users at this time."),
            ErrorCode.GENERIC_FAILURE,
        )
        self.assertEqual(classify_error_text("Billing account not enabled"), ErrorCode.BILLING_ISSUE)

    def test_permission(self):
        self.assertEqual(classify_error_text("Permission denied on resource"), ErrorCode.PERMISSION_DENIED)
        self.assertEqual(
            classify_error_text("Generative Language API is not enabled for project 42"),
            ErrorCode.PERMISSION_DENIED,
        )

    def test_location(self):
        self.assertEqual(
            classify_error_text("400 FAILED_PRECONDITION. User location is not supported... Unsupported location"),
            ErrorCode.UNSUPPORTED_LOCATION,
        )

    def test_quota(self):
        self.assertEqual(classify_error_text("429 Too Many Requests"), ErrorCode.QUOTA_EXHAUSTED)
        self.assertEqual(classify_error_text("QUOTA exceeded for metric"), ErrorCode.QUOTA_EXHAUSTED)
        self.assertEqual(classify_error_text("RESOURCE_EXHAUSTED"), ErrorCode.QUOTA_EXHAUSTED)

    def test_unknown_is_generic(self):
        self.assertEqual(classify_error_text("connection reset by peer"), ErrorCode.GENERIC_FAILURE)
        self.assertEqual(classify_error_text(""), ErrorCode.GENERIC_FAILURE)

    def test_safety_wins_over_quota(self):
        self.assertEqual(classify_error_text("quota exceeded; see policy"), ErrorCode.SAFETY_REJECTED)

    def test_quota_independent_of_lower_priority_text(self):
        self.assertEqual(
            classify_error_text("Deadline exceeded while checking Quota"),
            ErrorCode.QUOTA_EXHAUSTED,
        )

    def test_credential_wins_over_billing(self):
        self.assertEqual(
            classify_error_text("API key not valid (billing check skipped)"),
            ErrorCode.INVALID_CREDENTIAL,
        )


class TestClassifyError(unittest.TestCase):
    def test_dispatch_error_keeps_code(self):
        # Tag text would classify as generic; the carried code must win
        err = ImageDispatchError(ErrorCode.PROMPT_OR_IMAGE_REQUIRED)
        self.assertEqual(classify_error(err), ErrorCode.PROMPT_OR_IMAGE_REQUIRED)

    def test_provider_error_uses_message(self):
        err = ImageGenerationError("429 RESOURCE_EXHAUSTED. Quota exceeded", detail={"http_status": 429})
        self.assertEqual(classify_error(err), ErrorCode.QUOTA_EXHAUSTED)

    def test_unexpected_exception(self):
        self.assertEqual(classify_error(KeyError("candidates")), ErrorCode.GENERIC_FAILURE)

    def test_dispatch_error_str_is_tag(self):
        self.assertEqual(str(ImageDispatchError(ErrorCode.QUOTA_EXHAUSTED)), "error_quota")
