"""Validation and assembly of outgoing generation requests."""

from collections.abc import Sequence
from dataclasses import dataclass

from gemini_bridge.models.request import (
    ChatRequest,
    Content,
    ContentRequest,
    GenerateContentRequest,
    GenerationConfig,
    Part,
    Role,
    SafetySetting,
)
from gemini_bridge.services.context import GeminiContext
from gemini_bridge.services.safety import merge_safety_settings


INPUT_TEXT_REQUIRED = "input text is required."
PROMPT_TEXT_REQUIRED = "prompt text is required."


@dataclass(frozen=True)
class AssembledRequest:
    """A validated request ready to be sent to `model`."""

    model: str
    body: GenerateContentRequest
    stream: bool = False

    @property
    def contents(self) -> list[Content]:
        return self.body.contents


class RequestAssembler:
    """Builds chat-turn and single-content requests over fixed defaults."""

    def __init__(
        self,
        text_model: str,
        vision_model: str,
        generation_defaults: GenerationConfig,
        safety_defaults: Sequence[SafetySetting],
    ):
        self.text_model = text_model
        self.vision_model = vision_model
        self.generation_defaults = generation_defaults
        self.safety_defaults = tuple(safety_defaults)

    @classmethod
    def from_context(cls, context: GeminiContext) -> "RequestAssembler":
        return cls(
            text_model=context.text_model,
            vision_model=context.vision_model,
            generation_defaults=context.generation_defaults,
            safety_defaults=context.safety_defaults,
        )

    def route_model(self, parts: Sequence[Part]) -> str:
        """Vision model when any part carries an inline blob, text model otherwise."""
        if any(part.has_blob for part in parts):
            return self.vision_model
        return self.text_model

    def assemble_chat(
        self, request: ChatRequest
    ) -> tuple[AssembledRequest | None, str | None]:
        """
        Assemble a chat turn.

        Returns:
            Tuple of (assembled_request, error_message)
        """
        if not request.inputText:
            return None, INPUT_TEXT_REQUIRED

        history = [item.to_content() for item in request.history]
        message = Content(role=Role.USER, parts=[Part(text=request.inputText)])
        body = self._build_body([*history, message], request.generationConfig, request.safetySettings)

        return (
            AssembledRequest(
                model=self.text_model,
                body=body,
                stream=request.isStream,
            ),
            None,
        )

    def assemble_content(
        self, request: ContentRequest
    ) -> tuple[AssembledRequest | None, str | None]:
        """
        Assemble a single-content request from explicit parts or a prompt.

        Returns:
            Tuple of (assembled_request, error_message)
        """
        if not request.parts and not request.prompt:
            return None, PROMPT_TEXT_REQUIRED

        input_parts = list(request.parts) if request.parts else [Part(text=request.prompt or "")]
        body = self._build_body(
            [Content(role=Role.USER, parts=input_parts)],
            request.generationConfig,
            request.safetySettings,
        )

        return (
            AssembledRequest(
                model=self.route_model(input_parts),
                body=body,
                stream=request.isStream,
            ),
            None,
        )

    def _build_body(
        self,
        contents: list[Content],
        generation_config: GenerationConfig | None,
        safety_settings: Sequence[SafetySetting] | None,
    ) -> GenerateContentRequest:
        return GenerateContentRequest(
            contents=contents,
            generationConfig=self.generation_defaults.merged(generation_config),
            safetySettings=merge_safety_settings(self.safety_defaults, safety_settings),
        )
