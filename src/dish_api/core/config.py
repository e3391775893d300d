"""Application configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Baidu AI credentials (BAIDU_API_KEY / BAIDU_SECRET_KEY)
    baidu_api_key: str = ""
    baidu_secret_key: str = ""

    # Baidu AI endpoints
    baidu_token_url: str = "https://aip.baidubce.com/oauth/2.0/token"
    baidu_dish_url: str = "https://aip.baidubce.com/rest/2.0/image-classify/v2/dish"
    request_timeout: float = 30.0

    # Access token caching
    token_cache_enabled: bool = True
    token_expiry_margin_seconds: int = 3600  # Refresh an hour before expiry

    # Nutrition heuristic (approximation, not measured data)
    portion_weight_grams: int = Field(200, ge=1)
    protein_calorie_ratio: float = Field(0.20, ge=0, le=1)
    carbs_calorie_ratio: float = Field(0.50, ge=0, le=1)
    fat_calorie_ratio: float = Field(0.30, ge=0, le=1)

    # App
    debug: bool = False
    log_level: str = "INFO"
    app_name: str = "Dish Recognition API"
    api_version: str = "1.0.0"

    @property
    def is_provider_configured(self) -> bool:
        """Check if both Baidu credentials are present."""
        return bool(self.baidu_api_key and self.baidu_secret_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
