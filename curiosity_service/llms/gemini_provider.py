# curiosity_service/llms/gemini_provider.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from curiosity_service.config import settings
from curiosity_service.errors import TransportError
from .base import LLMProvider

log = logging.getLogger(__name__)

GENERIC_FAILURE = "Failed to fetch from Gemini"
MISSING_TEXT = "Gemini reply did not contain generated text"


def _error_message(r: httpx.Response) -> str:
    """error.message from a Gemini error body, or the generic fallback."""
    try:
        body = r.json()
    except ValueError:
        return GENERIC_FAILURE
    err = body.get("error") if isinstance(body, dict) else None
    msg = err.get("message") if isinstance(err, dict) else None
    return msg if isinstance(msg, str) and msg.strip() else GENERIC_FAILURE


def _reply_text(body: Any) -> str:
    # candidates[0].content.parts[0].text
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        raise TransportError(MISSING_TEXT) from None
    if not isinstance(text, str):
        raise TransportError(MISSING_TEXT)
    return text


class GeminiProvider(LLMProvider):
    """One ``generateContent`` POST per call. No retries."""

    def __init__(
        self,
        model_id: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.model_id = model_id or settings.GEMINI_MODEL_ID
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout_s = timeout_s if timeout_s is not None else settings.REQUEST_TIMEOUT_S
        self._client = client

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model_id}:generateContent"

    async def _post(self, client: httpx.AsyncClient, payload: Dict[str, Any], api_key: str) -> httpx.Response:
        # key travels in a header so it never shows up in URLs or access logs
        return await client.post(
            self.endpoint,
            json=payload,
            headers={"x-goog-api-key": api_key, "Content-Type": "application/json"},
        )

    async def generate(self, payload: Dict[str, Any], *, api_key: str) -> str:
        try:
            if self._client is not None:
                r = await self._post(self._client, payload, api_key)
            else:
                async with httpx.AsyncClient(timeout=self.timeout_s) as client:
                    r = await self._post(client, payload, api_key)
        except httpx.HTTPError as e:
            log.error("gemini.request.failed", extra={"model_id": self.model_id, "error": type(e).__name__})
            raise TransportError(f"{GENERIC_FAILURE}: {e}" if str(e) else GENERIC_FAILURE) from e

        if r.is_error:
            message = _error_message(r)
            log.error(
                "gemini.request.rejected",
                extra={"model_id": self.model_id, "status_code": r.status_code, "error_message": message},
            )
            raise TransportError(message, upstream_status=r.status_code)

        try:
            body = r.json()
        except ValueError:
            raise TransportError(MISSING_TEXT) from None
        return _reply_text(body)
