"""Pydantic models for the dish recognition API contract.

Wire names follow the JSON the web client already consumes, so a few fields
use aliases (camelCase for request parameters and result fields, snake_case
for ``log_id``, ``error_code`` and ``baike_info``).
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Request Models
# =============================================================================


class RecognitionRequest(BaseModel):
    """Inbound recognition request."""

    model_config = ConfigDict(populate_by_name=True)

    image: str | None = Field(
        None, description="Base64 image payload, optionally with a data-URI prefix"
    )
    top_num: int = Field(5, ge=1, alias="topNum", description="Number of results to return")
    baike_num: int = Field(
        0, ge=0, alias="baikeNum", description="Number of results with encyclopedia info"
    )
    filter_threshold: float = Field(
        0.95,
        ge=0.0,
        le=1.0,
        alias="filterThreshold",
        description="Confidence threshold forwarded to the provider as-is",
    )


# =============================================================================
# Credential Models
# =============================================================================


class AccessToken(BaseModel):
    """Short-lived provider access token."""

    value: str = Field(..., min_length=1)
    obtained_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    expires_in: int | None = Field(None, ge=0, description="Lifetime in seconds")

    def is_expired(self, margin_seconds: int = 0, now: datetime | None = None) -> bool:
        """Whether the token is past its expiry, minus a safety margin."""
        if self.expires_in is None:
            return True
        now = now or datetime.now(UTC)
        lifetime = max(self.expires_in - margin_seconds, 0)
        return now >= self.obtained_at + timedelta(seconds=lifetime)


# =============================================================================
# Result Models
# =============================================================================


class NutritionEstimate(BaseModel):
    """Estimated nutrition for one assumed portion."""

    calories: int = Field(..., ge=0, description="Total kcal for the portion")
    protein: int = Field(..., ge=0, description="Protein in grams")
    carbs: int = Field(..., ge=0, description="Carbohydrates in grams")
    fat: int = Field(..., ge=0, description="Fat in grams")
    unit: str = Field(..., description="Portion the figures refer to, e.g. '200g'")


class RecognitionResult(BaseModel):
    """A single identified dish."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique within one response")
    name: str = Field(..., description="Dish name as reported by the provider")
    confidence: float = Field(..., description="Provider probability as a float")
    calorie: float = Field(..., description="kcal per 100g")
    total_calories: int = Field(..., alias="totalCalories")
    estimated_weight: int = Field(..., alias="estimatedWeight")
    probability: Any = Field(None, description="Provider probability, untouched")
    nutrition: NutritionEstimate
    baike_info: Any = Field(None, description="Encyclopedia info when baikeNum > 0")
    original_data: dict[str, Any] = Field(default_factory=dict, alias="originalData")


class RecognitionResponse(BaseModel):
    """Body returned for every recognition outcome."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    results: list[RecognitionResult] = Field(default_factory=list)
    total: int = 0
    log_id: str | int | None = None
    message: str | None = None
    error: str | None = None
    error_code: int | None = None
    details: str | None = Field(None, description="Traceback, only in debug mode")


class RecognitionOutcome(BaseModel):
    """HTTP status plus body, as decided by the pipeline."""

    status_code: int
    response: RecognitionResponse

    def to_content(self) -> dict[str, Any]:
        """Serialize the body with wire aliases, dropping unset optionals."""
        content = self.response.model_dump(by_alias=True, exclude_none=True)
        content.setdefault("results", [])
        return content
