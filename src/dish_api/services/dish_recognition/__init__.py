"""
Dish Recognition Service - proxy for the Baidu dish classification API.

Hides the provider's credentials, token lifecycle, field names and numeric
error codes behind a single pipeline.
"""

from .client import BaiduDishClient
from .credentials import CredentialManager, TokenCache
from .errors import ProviderErrorInfo, classify_provider_error
from .factory import build_pipeline, close_http_client, get_recognition_pipeline
from .image import normalize_image
from .pipeline import PipelineState, RecognitionPipeline
from .transform import MacroSplit, estimate_nutrition, transform_results

__all__ = [
    "BaiduDishClient",
    "CredentialManager",
    "MacroSplit",
    "PipelineState",
    "ProviderErrorInfo",
    "RecognitionPipeline",
    "TokenCache",
    "build_pipeline",
    "classify_provider_error",
    "close_http_client",
    "estimate_nutrition",
    "get_recognition_pipeline",
    "normalize_image",
    "transform_results",
]
