import httpx
import pytest

from curiosity_service.errors import TransportError
from curiosity_service.llms.gemini_provider import GENERIC_FAILURE, GeminiProvider
from curiosity_service.llms.registry import get_provider

PAYLOAD = {"contents": [{"parts": [{"text": 'Input: "x"'}]}]}


def _provider(handler) -> GeminiProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiProvider("gemini-test", base_url="https://gemini.test/v1beta", client=client)


async def test_success_returns_first_candidate_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, json={
            "candidates": [
                {"content": {"parts": [{"text": "### ⟁ VECTOR 1: Foo"}, {"text": "ignored"}]}},
                {"content": {"parts": [{"text": "second candidate"}]}},
            ]
        })

    text = await _provider(handler).generate(PAYLOAD, api_key="secret-key")

    assert text == "### ⟁ VECTOR 1: Foo"
    req = seen["request"]
    assert req.method == "POST"
    assert str(req.url) == "https://gemini.test/v1beta/models/gemini-test:generateContent"
    assert req.headers["x-goog-api-key"] == "secret-key"
    assert "secret-key" not in str(req.url)
    assert req.read() == httpx.Request("POST", "https://x", json=PAYLOAD).read()


async def test_quota_error_message_is_surfaced():
    def handler(request):
        return httpx.Response(429, json={"error": {"message": "quota exceeded"}})

    with pytest.raises(TransportError) as ei:
        await _provider(handler).generate(PAYLOAD, api_key="k")
    assert ei.value.message == "quota exceeded"
    assert ei.value.upstream_status == 429


@pytest.mark.parametrize("body", [b"<html>Internal Server Error</html>", b"", b'{"error": "flat string"}', b"[]"])
async def test_unparseable_error_body_uses_generic_message(body):
    def handler(request):
        return httpx.Response(500, content=body)

    with pytest.raises(TransportError) as ei:
        await _provider(handler).generate(PAYLOAD, api_key="k")
    assert ei.value.message == GENERIC_FAILURE
    assert ei.value.upstream_status == 500


async def test_network_failure_is_transport_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(TransportError) as ei:
        await _provider(handler).generate(PAYLOAD, api_key="k")
    assert ei.value.upstream_status is None
    assert isinstance(ei.value.__cause__, httpx.ConnectError)


@pytest.mark.parametrize("body", [
    {},
    {"candidates": []},
    {"candidates": [{"content": {}}]},
    {"candidates": [{"content": {"parts": []}}]},
    {"candidates": [{"content": {"parts": [{"text": None}]}}]},
    {"promptFeedback": {"blockReason": "SAFETY"}},
])
async def test_success_without_reply_text_is_transport_error(body):
    def handler(request):
        return httpx.Response(200, json=body)

    with pytest.raises(TransportError):
        await _provider(handler).generate(PAYLOAD, api_key="k")


async def test_success_with_non_json_body_is_transport_error():
    def handler(request):
        return httpx.Response(200, content=b"not json")

    with pytest.raises(TransportError):
        await _provider(handler).generate(PAYLOAD, api_key="k")


def test_registry():
    p = get_provider("Gemini", model_id="gemini-x")
    assert isinstance(p, GeminiProvider)
    assert p.model_id == "gemini-x"
    with pytest.raises(ValueError):
        get_provider("openai")
