"""Tests for the Baidu dish classification client."""

import httpx
import pytest

from dish_api.core.exceptions import UpstreamTransportError
from dish_api.services.dish_recognition import BaiduDishClient

from .conftest import DISH_PATH, TINY_PNG_BASE64


DISH_URL = "https://aip.baidubce.com/rest/2.0/image-classify/v2/dish"


class TestBaiduDishClient:
    """Tests for BaiduDishClient.classify."""

    @pytest.fixture
    def client(self, http_client):
        return BaiduDishClient(http_client, dish_url=DISH_URL)

    @pytest.mark.asyncio
    async def test_sends_form_encoded_parameters(self, client, fake_baidu):
        await client.classify(
            "tok-123", TINY_PNG_BASE64, top_num=3, filter_threshold=0.7, baike_num=1
        )

        [request] = fake_baidu.calls_to(DISH_PATH)
        assert request.method == "POST"
        assert request.url.params["access_token"] == "tok-123"
        assert request.headers["content-type"] == "application/x-www-form-urlencoded"
        assert fake_baidu.dish_form() == {
            "image": TINY_PNG_BASE64,
            "top_num": "3",
            "filter_threshold": "0.7",
            "baike_num": "1",
        }

    @pytest.mark.asyncio
    async def test_default_parameters(self, client, fake_baidu):
        await client.classify("tok", TINY_PNG_BASE64)

        form = fake_baidu.dish_form()
        assert form["top_num"] == "5"
        assert form["filter_threshold"] == "0.95"
        assert form["baike_num"] == "0"

    @pytest.mark.asyncio
    async def test_returns_raw_response(self, client, fake_baidu, kung_pao_result):
        body = {"log_id": 7, "result_num": 1, "result": [kung_pao_result]}
        fake_baidu.respond_dish(body)

        data = await client.classify("tok", TINY_PNG_BASE64)

        assert data == body

    @pytest.mark.asyncio
    async def test_provider_error_code_is_passed_through(self, client, fake_baidu):
        body = {"error_code": 17, "error_msg": "Open api daily request limit reached"}
        fake_baidu.respond_dish(body)

        data = await client.classify("tok", TINY_PNG_BASE64)

        assert data == body

    @pytest.mark.asyncio
    async def test_server_error_raises(self, client, fake_baidu):
        fake_baidu.respond_dish("bad gateway", status_code=502)

        with pytest.raises(UpstreamTransportError) as exc_info:
            await client.classify("tok", TINY_PNG_BASE64)

        assert exc_info.value.message == "classification request failed"
        assert exc_info.value.upstream_status == 502

    @pytest.mark.asyncio
    async def test_network_error_raises(self, client, fake_baidu):
        fake_baidu.dish_reply = lambda request: httpx.ReadTimeout("timed out")

        with pytest.raises(UpstreamTransportError, match="timed out"):
            await client.classify("tok", TINY_PNG_BASE64)

    @pytest.mark.asyncio
    async def test_non_json_body_raises(self, client, fake_baidu):
        fake_baidu.respond_dish("<html>maintenance</html>")

        with pytest.raises(UpstreamTransportError, match="not valid JSON"):
            await client.classify("tok", TINY_PNG_BASE64)
