"""
Baidu dish classification client.

API reference: https://ai.baidu.com/ai-doc/IMAGERECOGNITION/tk3bcxbb0
"""

import logging
from typing import Any

import httpx

from dish_api.core.exceptions import UpstreamTransportError

logger = logging.getLogger(__name__)


class BaiduDishClient:
    """
    Client for the Baidu dish classification endpoint.

    Transport failures raise UpstreamTransportError. A JSON body carrying a
    provider ``error_code`` is a valid response and is returned unchanged.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        dish_url: str = "https://aip.baidubce.com/rest/2.0/image-classify/v2/dish",
    ):
        self._client = client
        self.dish_url = dish_url

    async def classify(
        self,
        token: str,
        image_base64: str,
        top_num: int = 5,
        filter_threshold: float = 0.95,
        baike_num: int = 0,
    ) -> dict[str, Any]:
        """
        Classify a dish image.

        Args:
            token: Provider access token
            image_base64: Raw base64 image payload (no data-URI prefix)
            top_num: Number of results to return
            filter_threshold: Confidence threshold, passed through to the provider
            baike_num: Number of results to enrich with encyclopedia info

        Returns:
            Raw provider response (``result``, ``log_id``, optional ``error_code``)

        Raises:
            UpstreamTransportError: If the request fails or returns non-2xx
        """
        form = {
            "image": image_base64,
            "top_num": str(top_num),
            "filter_threshold": str(filter_threshold),
            "baike_num": str(baike_num),
        }

        logger.info(
            f"Sending dish classification request (image size: {len(image_base64)} chars, "
            f"top_num={top_num}, baike_num={baike_num})"
        )

        try:
            response = await self._client.post(
                self.dish_url,
                params={"access_token": token},
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
        except httpx.RequestError as e:
            logger.error(f"Dish classification request failed: {e}")
            raise UpstreamTransportError(f"classification request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Dish classification failed: HTTP {response.status_code}")
            raise UpstreamTransportError(
                "classification request failed",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamTransportError(
                "classification response is not valid JSON",
                status_code=response.status_code,
                body=response.text,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamTransportError(
                "classification response has an unexpected shape",
                status_code=response.status_code,
            )

        logger.debug(f"Raw Baidu response: {str(data)[:500]}...")
        return data
