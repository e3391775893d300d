"""Dish recognition API routes."""

import logging

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from dish_api.api.dependencies import PipelineDep
from dish_api.models.recognition import RecognitionRequest, RecognitionResponse

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post(
    "/food-recognition",
    response_model=RecognitionResponse,
    responses={
        400: {"description": "Missing image or provider rejected the image"},
        500: {"description": "Configuration or upstream failure"},
    },
)
async def recognize_dish(request: RecognitionRequest, pipeline: PipelineDep) -> JSONResponse:
    """
    Identify the dishes in a photo.

    The image is a base64 string, optionally prefixed with a data URI. Each
    result carries Baidu's per-100g calories plus an estimated nutrition
    breakdown for one assumed portion.
    """
    outcome = await pipeline.run(request)
    return JSONResponse(status_code=outcome.status_code, content=outcome.to_content())


@router.options("/food-recognition")
async def recognition_preflight() -> Response:
    """Answer CORS preflight requests with an empty body."""
    return Response(status_code=200, content="", media_type="application/json")
