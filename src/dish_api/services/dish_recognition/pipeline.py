"""
Recognition pipeline orchestration.

Sequences validation, token acquisition, classification, error classification
and result transformation, and turns every way a run can end into a single
RecognitionOutcome (HTTP status + body).

    VALIDATING -> ACQUIRING_TOKEN -> CLASSIFYING -> CLASSIFYING_ERROR
                                                 \\-> TRANSFORMING -> DONE
    any state -> FAULTED on an unexpected exception
"""

import logging
import traceback
from enum import Enum
from typing import Any

from dish_api.core.config import Settings
from dish_api.core.exceptions import (
    CallerError,
    ClassifiedProviderError,
    ConfigurationError,
    UpstreamTransportError,
)
from dish_api.models.recognition import (
    RecognitionOutcome,
    RecognitionRequest,
    RecognitionResponse,
)

from .client import BaiduDishClient
from .credentials import CredentialManager
from .errors import classify_provider_error, is_token_rejected
from .image import normalize_image
from .transform import MacroSplit, transform_results

logger = logging.getLogger(__name__)


MISSING_IMAGE_MESSAGE = "missing image data"
CONFIGURATION_ERROR_MESSAGE = "configuration error"
EMPTY_RESULT_MESSAGE = "no dish recognized, try a clearer photo"
UNEXPECTED_ERROR_MESSAGE = "recognition service temporarily unavailable"


class PipelineState(str, Enum):
    """Stages of a recognition run."""

    VALIDATING = "validating"
    ACQUIRING_TOKEN = "acquiring_token"
    CLASSIFYING = "classifying"
    CLASSIFYING_ERROR = "classifying_error"
    TRANSFORMING = "transforming"
    DONE = "done"
    FAULTED = "faulted"


class RecognitionPipeline:
    """
    Runs one dish recognition request end to end.

    Settings are injected at construction; credentials are never read from the
    environment mid-run.
    """

    def __init__(
        self,
        settings: Settings,
        credentials: CredentialManager,
        dish_client: BaiduDishClient,
        provider: str = "baidu",
    ):
        self.settings = settings
        self.credentials = credentials
        self.dish_client = dish_client
        self.provider = provider
        self.macro_split = MacroSplit(
            protein=settings.protein_calorie_ratio,
            carbs=settings.carbs_calorie_ratio,
            fat=settings.fat_calorie_ratio,
        )

    async def run(self, request: RecognitionRequest) -> RecognitionOutcome:
        """
        Recognize the dishes in the request's image.

        Never raises; every failure is reported through the outcome's status
        code and body.
        """
        state = PipelineState.VALIDATING
        try:
            image = self._validate(request)
            self._check_configuration()

            state = PipelineState.ACQUIRING_TOKEN
            token = await self.credentials.get_token(
                self.settings.baidu_api_key, self.settings.baidu_secret_key
            )

            state = PipelineState.CLASSIFYING
            data = await self.dish_client.classify(
                token.value,
                image,
                top_num=request.top_num,
                filter_threshold=request.filter_threshold,
                baike_num=request.baike_num,
            )

            if data.get("error_code"):
                state = PipelineState.CLASSIFYING_ERROR
                raise self._classified_error(data)

            raw_results = data.get("result") or []
            log_id = data.get("log_id")

            if not raw_results:
                logger.info("Provider returned no dishes")
                return self._outcome(
                    200,
                    success=True,
                    results=[],
                    total=0,
                    message=EMPTY_RESULT_MESSAGE,
                    log_id=log_id,
                )

            state = PipelineState.TRANSFORMING
            results = transform_results(
                raw_results,
                estimated_weight_grams=self.settings.portion_weight_grams,
                split=self.macro_split,
                provider=self.provider,
            )

            state = PipelineState.DONE
            logger.info(f"Recognized {len(results)} dish(es)")
            return self._outcome(
                200,
                success=True,
                results=results,
                total=len(results),
                log_id=log_id,
                message=f"recognized {len(results)} dish(es)",
            )

        except CallerError as e:
            logger.info(f"Rejected recognition request: {e.message}")
            return self._outcome(e.status_code, success=False, error=e.message)

        except ConfigurationError as e:
            logger.error("Baidu API key or secret key is not configured")
            return self._outcome(e.status_code, success=False, error=e.message)

        except ClassifiedProviderError as e:
            logger.warning(
                f"Provider rejected classification: {e.error_code} {e.provider_message}"
            )
            return self._outcome(
                e.status_code,
                success=False,
                error=e.message,
                error_code=e.error_code,
            )

        except UpstreamTransportError as e:
            logger.error(f"Recognition failed while {state.value} ({e.kind.value}): {e.message}")
            return self._outcome(
                e.status_code,
                success=False,
                error=e.message,
                details=self._diagnostics(),
            )

        except Exception:
            logger.exception(
                f"Unexpected error while {state.value}, run {PipelineState.FAULTED.value}"
            )
            return self._outcome(
                500,
                success=False,
                error=UNEXPECTED_ERROR_MESSAGE,
                details=self._diagnostics(),
            )

    def _validate(self, request: RecognitionRequest) -> str:
        """Return the normalized image payload or raise CallerError."""
        if not request.image:
            raise CallerError(MISSING_IMAGE_MESSAGE)

        image = normalize_image(request.image)
        if not image:
            raise CallerError(MISSING_IMAGE_MESSAGE)
        return image

    def _check_configuration(self) -> None:
        if not self.settings.is_provider_configured:
            raise ConfigurationError(CONFIGURATION_ERROR_MESSAGE)

    def _classified_error(self, data: dict[str, Any]) -> ClassifiedProviderError:
        """Build the classified error, dropping the cached token if it was rejected."""
        try:
            code = int(data["error_code"])
        except (TypeError, ValueError):
            code = -1
        provider_message = str(data.get("error_msg", ""))

        if is_token_rejected(code):
            self.credentials.invalidate(
                self.settings.baidu_api_key, self.settings.baidu_secret_key
            )

        info = classify_provider_error(code, provider_message)
        return ClassifiedProviderError(info.message, info.code, provider_message)

    def _diagnostics(self) -> str | None:
        """Traceback of the exception being handled, only in debug mode."""
        if not self.settings.debug:
            return None
        return traceback.format_exc()

    def _outcome(self, status_code: int, **fields: Any) -> RecognitionOutcome:
        return RecognitionOutcome(
            status_code=status_code,
            response=RecognitionResponse(**fields),
        )
