"""
Chat completion adapter for OpenAI-compatible APIs (Moonshot by default).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.exceptions import (
    MalformedEstimateError,
    MissingCredentialError,
    UpstreamUnavailableError,
)

logger = logging.getLogger("macrolog.completion")


class ChatCompletionClient:
    """Thin HTTP client for ``POST {base_url}/chat/completions``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.moonshot.cn/v1",
        model: str = "moonshot-v1-8k",
        temperature: float = 0.1,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        if not api_key:
            raise MissingCredentialError("Missing MOONSHOT_API_KEY")
        self._api_key = api_key
        self._url = _completions_url(base_url)
        self.model = model
        self.temperature = temperature
        self._timeout = timeout
        # Tests plug an httpx.MockTransport in here
        self._transport = transport

    def _client(self) -> httpx.Client:
        kwargs: Dict[str, Any] = {"transport": self._transport}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout
        return httpx.Client(**kwargs)

    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send one chat completion request and return the first choice's text.

        Raises:
            UpstreamUnavailableError: transport failure or non-success status
            MalformedEstimateError: success response without completion text
        """
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_key}",
        }

        try:
            with self._client() as client:
                resp = client.post(self._url, headers=headers, json=payload)
        except httpx.RequestError as e:
            logger.error(f"Completion API unreachable: {e}")
            raise UpstreamUnavailableError(details={"reason": str(e)}) from e

        if not resp.is_success:
            logger.error(
                "Completion API error: status=%s body=%s", resp.status_code, resp.text
            )
            raise UpstreamUnavailableError(details={"status_code": resp.status_code})

        try:
            data = resp.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Completion API returned an unexpected envelope: {resp.text}")
            raise MalformedEstimateError(
                "AI response did not contain a completion"
            ) from e

        if not isinstance(content, str):
            raise MalformedEstimateError("AI response did not contain a completion")
        return content


def _completions_url(base_url: str) -> str:
    base = base_url.rstrip("/")
    if base.endswith("/chat/completions"):
        return base
    return f"{base}/chat/completions"
