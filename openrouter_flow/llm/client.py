# openrouter_flow/llm/client.py
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from .errors import (
    ApiError,
    EmptyResponse,
    NetworkError,
    NoKeyConfigured,
    Unavailable,
    UnexpectedFormat,
    error_for_status,
)
from .models import MAX_OUTPUT_TOKENS, ChatMessage, Credits, Model, messages_payload

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_REFERER = "https://homey.app"
DEFAULT_TITLE = "Homey OpenRouter"


class OpenRouterClient:
    """Client for the three OpenRouter endpoints used by the integration.

    Every call makes exactly one request with a fresh ``httpx.AsyncClient``;
    nothing is retried.
    """

    def __init__(
            self,
            base_url: str = DEFAULT_BASE_URL,
            referer: str = DEFAULT_REFERER,
            title: str = DEFAULT_TITLE,
            timeout: float = 30.0,
            transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.referer = referer
        self.title = title
        self.timeout = timeout
        self._transport = transport

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "HTTP-Referer": self.referer,
            "X-Title": self.title,
        }

    async def _request(self, method: str, path: str, api_key: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                return await client.request(
                    method,
                    f"{self.base_url}{path}",
                    headers=self._headers(api_key),
                    **kwargs
                )
        except httpx.RequestError as e:
            logger.error(f"Request to {path} failed: {e}")
            raise NetworkError(f"Could not reach OpenRouter: {e}") from e

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise UnexpectedFormat(f"Response is not valid JSON: {e}", response.status_code) from e
        if not isinstance(body, dict):
            raise UnexpectedFormat("Response body is not a JSON object", response.status_code)
        return body

    async def list_models(self, api_key: str) -> List[Model]:
        """
        Fetch the full model catalog.

        Args:
            api_key: OpenRouter API key

        Returns:
            Models in the order OpenRouter lists them
        """
        response = await self._request("GET", "/models", api_key)
        if not response.is_success:
            logger.error(f"Failed to fetch models: {response.status_code}")
            raise error_for_status(response.status_code)

        data = self._json(response).get("data")
        if not isinstance(data, list):
            raise UnexpectedFormat("Model listing has no 'data' list", response.status_code)

        models = []
        for entry in data:
            if not isinstance(entry, dict) or not entry.get("id"):
                continue
            models.append(Model(id=entry["id"], name=entry.get("name") or entry["id"]))

        logger.debug(f"Fetched {len(models)} models")
        return models

    async def check_status(self, api_key: str) -> bool:
        """Lightweight liveness check: True when the model listing answers 2xx."""
        response = await self._request("GET", "/models", api_key)
        return response.is_success

    async def validate_api_key(self, api_key: str) -> bool:
        """Validate an API key without raising."""
        try:
            return await self.check_status(api_key)
        except Exception as e:
            logger.error(f"API key validation error: {e}")
            return False

    async def get_credits(self, api_key: str) -> Credits:
        """
        Fetch the account balance.

        Raises:
            Unavailable: when the endpoint answers with any non-success status
        """
        response = await self._request("GET", "/credits", api_key)
        if not response.is_success:
            raise Unavailable("Credits endpoint not available", response.status_code)

        data = self._json(response).get("data")
        if not isinstance(data, dict):
            raise UnexpectedFormat("Credits response has no 'data' object", response.status_code)

        try:
            return Credits(
                total_credits=float(data["total_credits"]),
                total_usage=float(data["total_usage"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UnexpectedFormat(f"Malformed credits payload: {e}", response.status_code) from e

    async def generate(self, api_key: str, model: str, messages: List[ChatMessage]) -> str:
        """
        Post a chat completion and extract the answer.

        Args:
            api_key: OpenRouter API key
            model: Model identifier
            messages: Ordered chat messages

        Returns:
            The first choice's message content, trimmed
        """
        if not api_key:
            raise NoKeyConfigured()

        payload = {
            "model": model,
            "messages": messages_payload(messages),
            "max_tokens": MAX_OUTPUT_TOKENS,
        }

        response = await self._request("POST", "/chat/completions", api_key, json=payload)
        if not response.is_success:
            logger.error(f"OpenRouter API error: {response.text}")
            raise error_for_status(response.status_code)

        result = self._json(response)

        error = result.get("error")
        if error is not None:
            message = error.get("message") if isinstance(error, dict) else None
            raise ApiError(message or "Unknown API error", response.status_code)

        try:
            content = result["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError):
            content = None

        if not content or not isinstance(content, str):
            raise EmptyResponse()

        return content.strip()
