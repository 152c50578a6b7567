"""Shared fakes for the Gemini provider."""

from __future__ import annotations

import pytest

from gemini_bridge.models.request import Content, Part, Role
from gemini_bridge.models.response import Candidate, GenerateContentResponse
from gemini_bridge.services.context import GeminiContext

TEXT_MODEL = "text-model"
VISION_MODEL = "vision-model"


def text_response(text: str, finish_reason: str = "STOP") -> GenerateContentResponse:
    return GenerateContentResponse(
        candidates=[
            Candidate(
                content=Content(role=Role.MODEL, parts=[Part(text=text)]),
                finishReason=finish_reason,
            )
        ]
    )


def tokens_per_part(contents: list[Content]) -> int:
    """Ten tokens for every part in every content."""
    return sum(10 * len(content.parts) for content in contents)


class FakeProvider:
    """Records calls and answers from canned data instead of the network."""

    def __init__(
        self,
        counter=tokens_per_part,
        response: GenerateContentResponse | None = None,
        fragments: list | None = None,
        count_error: Exception | None = None,
        generate_error: Exception | None = None,
    ) -> None:
        self.counter = counter
        self.response = response or text_response("ok")
        self.fragments = fragments or []
        self.count_error = count_error
        self.generate_error = generate_error
        self.count_calls: list[tuple[str, list[Content]]] = []
        self.generate_calls: list[tuple[str, object]] = []
        self.stream_calls: list[tuple[str, object]] = []
        self.stream_closed = False

    @property
    def remote_calls(self) -> int:
        return len(self.count_calls) + len(self.generate_calls) + len(self.stream_calls)

    async def count_tokens(self, model, contents):
        self.count_calls.append((model, list(contents)))
        if self.count_error is not None:
            raise self.count_error
        return self.counter(list(contents))

    async def generate_content(self, model, request):
        self.generate_calls.append((model, request))
        if self.generate_error is not None:
            raise self.generate_error
        return self.response

    def stream_generate_content(self, model, request):
        self.stream_calls.append((model, request))
        return self._stream()

    async def _stream(self):
        try:
            for fragment in self.fragments:
                if isinstance(fragment, Exception):
                    raise fragment
                yield text_response(fragment) if isinstance(fragment, str) else fragment
        finally:
            self.stream_closed = True


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def context(provider: FakeProvider) -> GeminiContext:
    return GeminiContext(provider=provider, text_model=TEXT_MODEL, vision_model=VISION_MODEL)
