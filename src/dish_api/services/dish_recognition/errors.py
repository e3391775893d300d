"""
Baidu error code classification.

Turns the provider's numeric ``error_code`` into a message a user can act on.
Error code reference: https://ai.baidu.com/ai-doc/IMAGERECOGNITION/
"""

from pydantic import BaseModel, Field


# Provider error codes with a dedicated user-facing message
PROVIDER_ERROR_MESSAGES: dict[int, str] = {
    216630: "no result, try a clearer photo",
    282810: "image URL could not be downloaded",
    216200: "invalid image format",
    216201: "invalid image dimensions",
    216202: "invalid image size",
    216203: "invalid image encoding",
    17: "daily request quota exceeded",
    18: "request rate exceeded",  # QPS limit
    19: "total request quota exceeded",
}

# Codes meaning the access token itself was rejected
TOKEN_REJECTED_CODES = frozenset({110, 111})


class ProviderErrorInfo(BaseModel):
    """Classified provider error."""

    message: str = Field(..., description="User-facing message")
    code: int = Field(..., description="Provider error code")


def classify_provider_error(code: int, message: str) -> ProviderErrorInfo:
    """
    Map a provider error code to a user-facing message.

    Unknown codes fall back to a generic message embedding the provider's own text.
    """
    user_message = PROVIDER_ERROR_MESSAGES.get(code)
    if user_message is None:
        user_message = f"classification error: {message}"
    return ProviderErrorInfo(message=user_message, code=code)


def is_token_rejected(code: int) -> bool:
    """Whether the provider rejected the access token (invalid or expired)."""
    return code in TOKEN_REJECTED_CODES
