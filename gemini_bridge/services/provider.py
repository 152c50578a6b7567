"""Gemini REST provider: token counting and (streamed) content generation."""

import json
from collections.abc import AsyncIterator

from curl_cffi.requests import AsyncSession
from curl_cffi.requests.exceptions import RequestException, Timeout
from loguru import logger
from pydantic import ValidationError

from gemini_bridge.config import Settings
from gemini_bridge.exceptions import GeminiAPIError
from gemini_bridge.models.request import Content, GenerateContentRequest
from gemini_bridge.models.response import (
    CountTokensResponse,
    ErrorResponse,
    GenerateContentResponse,
)


class GeminiProvider:
    """Provider for the Google Generative Language REST API."""

    def __init__(
        self,
        session: AsyncSession,
        api_key: str,
        base_api: str = "https://generativelanguage.googleapis.com",
        api_version: str = "v1beta",
        timeout: int = 120,
        proxy: str | None = None,
    ):
        self.session = session
        self.api_key = api_key
        self.base_api = base_api.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self.proxy = proxy

    @classmethod
    def from_settings(cls, session: AsyncSession, settings: Settings) -> "GeminiProvider":
        return cls(
            session,
            api_key=settings.gemini_api_key,
            base_api=settings.gemini_base_api,
            api_version=settings.gemini_api_version,
            timeout=settings.timeout,
            proxy=settings.proxy,
        )

    async def count_tokens(self, model: str, contents: list[Content]) -> int:
        """
        Count the tokens of `contents` for `model`.

        Raises:
            GeminiAPIError: the API rejected the call, timed out or was unreachable
        """
        body = {"contents": [c.model_dump(mode="json", exclude_none=True) for c in contents]}
        result = await self._post(model, "countTokens", body)
        return CountTokensResponse.model_validate(result).totalTokens

    async def generate_content(
        self, model: str, request: GenerateContentRequest
    ) -> GenerateContentResponse:
        """
        Generate content in a single response.

        Raises:
            GeminiAPIError: the API rejected the call, timed out or was unreachable
        """
        result = await self._post(model, "generateContent", self._build_request_body(request))
        return GenerateContentResponse.model_validate(result)

    async def stream_generate_content(
        self, model: str, request: GenerateContentRequest
    ) -> AsyncIterator[GenerateContentResponse]:
        """
        Generate content as a stream of server-sent fragments.

        Yields:
            One GenerateContentResponse per SSE data line, in arrival order
        """
        url = f"{self._model_url(model, 'streamGenerateContent')}?alt=sse"
        try:
            async with self.session.stream(
                "POST",
                url,
                headers=self._headers(),
                json=self._build_request_body(request),
                timeout=self.timeout,
                proxy=self.proxy,
            ) as response:
                if response.status_code != 200:
                    raw = b"".join([chunk async for chunk in response.aiter_content()])
                    raise self._api_error(response.status_code, raw.decode("utf-8", "replace"))

                async for line in response.aiter_lines():
                    if isinstance(line, bytes):
                        line = line.decode("utf-8")
                    line = line.strip()
                    if not line.startswith("data:"):
                        continue
                    payload = line[len("data:"):].strip()
                    if not payload:
                        continue
                    try:
                        fragment = GenerateContentResponse.model_validate(json.loads(payload))
                    except (json.JSONDecodeError, ValidationError) as e:
                        logger.error(f"Malformed stream fragment: {payload[:500]}")
                        raise GeminiAPIError(f"Invalid stream fragment: {e}") from e
                    yield fragment
        except Timeout as e:
            logger.error(f"Stream timeout: {e}")
            raise GeminiAPIError("Request timeout") from e
        except RequestException as e:
            logger.error(f"Stream transport error: {e}")
            raise GeminiAPIError(f"Request failed: {e}") from e

    async def _post(self, model: str, method: str, body: dict) -> dict:
        """POST `body` to `models/{model}:{method}` and return the decoded JSON."""
        try:
            response = await self.session.post(
                url=self._model_url(model, method),
                headers=self._headers(),
                json=body,
                timeout=self.timeout,
                proxy=self.proxy,
            )
        except Timeout as e:
            logger.error(f"Request timeout: {e}")
            raise GeminiAPIError("Request timeout") from e
        except RequestException as e:
            logger.error(f"Transport error: {e}")
            raise GeminiAPIError(f"Request failed: {e}") from e

        if response.status_code != 200:
            logger.error(
                f"API request failed - method: {method}, status: {response.status_code}, "
                f"response: {response.text[:1024]}"
            )
            raise self._api_error(response.status_code, response.text)

        try:
            return response.json()
        except json.JSONDecodeError as e:
            logger.error(f"JSON decode error: {e}, response text: {response.text[:500] if response.text else 'empty'}")
            raise GeminiAPIError("Invalid JSON response") from e

    def _model_url(self, model: str, method: str) -> str:
        return f"{self.base_api}/{self.api_version}/models/{model}:{method}"

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }

    @staticmethod
    def _build_request_body(request: GenerateContentRequest) -> dict:
        """Build the JSON body for generateContent / streamGenerateContent."""
        return request.model_dump(mode="json", exclude_none=True)

    @staticmethod
    def _api_error(status_code: int, text: str) -> GeminiAPIError:
        """Build a GeminiAPIError from a Gemini style error body if there is one."""
        try:
            detail = ErrorResponse.model_validate(json.loads(text)).error
        except (json.JSONDecodeError, ValidationError, TypeError):
            return GeminiAPIError(
                f"API request failed: status {status_code}", status_code=status_code
            )
        return GeminiAPIError(detail.message, status_code=status_code, status=detail.status)
