"""Pydantic models for API schemas."""

from .recognition import (
    AccessToken,
    NutritionEstimate,
    RecognitionOutcome,
    RecognitionRequest,
    RecognitionResponse,
    RecognitionResult,
)

__all__ = [
    "AccessToken",
    "NutritionEstimate",
    "RecognitionOutcome",
    "RecognitionRequest",
    "RecognitionResponse",
    "RecognitionResult",
]
