"""Chat, content and token count entry points."""

from collections.abc import Sequence

from loguru import logger

from gemini_bridge.models.request import (
    ChatRequest,
    Content,
    ContentRequest,
    Part,
    Role,
    TokenCountRequest,
)
from gemini_bridge.models.response import GenerationResult, TokenBudgetResult
from gemini_bridge.services.assembler import AssembledRequest, RequestAssembler
from gemini_bridge.services.context import GeminiContext
from gemini_bridge.services.normalizer import failure_result, normalize_outcome
from gemini_bridge.services.windowing import HistoryWindower


class GeminiService:
    """Runs requests against the models configured in a GeminiContext."""

    def __init__(self, context: GeminiContext):
        self.context = context
        self.provider = context.provider
        self.assembler = RequestAssembler.from_context(context)

    async def chat(self, request: ChatRequest) -> GenerationResult:
        """Send one chat turn on top of the supplied history."""
        assembled, error = self.assembler.assemble_chat(request)
        if error:
            return failure_result(error)
        return await self._invoke(assembled)

    async def content(self, request: ContentRequest) -> GenerationResult:
        """Generate content from a prompt or explicit parts."""
        assembled, error = self.assembler.assemble_content(request)
        if error:
            return failure_result(error)
        return await self._invoke(assembled)

    async def token_count(self, request: TokenCountRequest) -> TokenBudgetResult:
        """
        Count tokens for parts, a prompt or a history, in that order of precedence.

        Parts and history are windowed to `request.limit`; a prompt is only
        counted.

        Raises:
            GeminiAPIError: a countTokens call failed
        """
        if request.parts:
            model = self.assembler.route_model(request.parts)

            async def count_parts(parts: Sequence[Part]) -> int:
                return await self.provider.count_tokens(
                    model, [Content(role=Role.USER, parts=list(parts))]
                )

            return await HistoryWindower(count_parts, self.context.window_step).window(
                request.parts, request.limit
            )

        if request.prompt:
            total_tokens = await self.provider.count_tokens(
                self.context.text_model,
                [Content(role=Role.USER, parts=[Part(text=request.prompt)])],
            )
            return TokenBudgetResult(totalTokens=total_tokens, validIndex=0)

        if request.history:
            history = [item.to_content() for item in request.history]

            async def count_history(contents: Sequence[Content]) -> int:
                return await self.provider.count_tokens(self.context.text_model, list(contents))

            return await HistoryWindower(count_history, self.context.window_step).window(
                history, request.limit
            )

        return TokenBudgetResult(totalTokens=0, validIndex=0)

    async def _invoke(self, assembled: AssembledRequest) -> GenerationResult:
        """Count the outgoing contents, call the model and normalize the outcome."""
        try:
            total_tokens = await self.provider.count_tokens(assembled.model, assembled.contents)
            if assembled.stream:
                outcome = self.provider.stream_generate_content(assembled.model, assembled.body)
            else:
                outcome = await self.provider.generate_content(assembled.model, assembled.body)
        except Exception as e:
            logger.exception(f"Gemini call to {assembled.model} failed: {e}")
            return failure_result(e)

        return await normalize_outcome(outcome, total_tokens=total_tokens)
