"""Normalization of single and streamed model responses into one result shape."""

from collections.abc import AsyncIterator

from loguru import logger

from gemini_bridge.models.response import GenerateContentResponse, GenerationResult


def failure_result(error: BaseException | str) -> GenerationResult:
    """Failure result carrying a non-empty description of `error`."""
    if isinstance(error, BaseException):
        message = str(error) or error.__class__.__name__
    else:
        message = error
    return GenerationResult(status=False, text="", error=message)


async def collect_stream(fragments: AsyncIterator[GenerateContentResponse]) -> str:
    """
    Drain a fragment stream and join the fragment texts in arrival order.

    The iterator is closed once consumption stops, whether the stream ran
    out, raised, or the awaiting task was cancelled.
    """
    chunks: list[str] = []
    try:
        async for fragment in fragments:
            chunk_text = fragment.text
            logger.debug(f"Stream chunk: {chunk_text!r}")
            chunks.append(chunk_text)
    finally:
        aclose = getattr(fragments, "aclose", None)
        if aclose is not None:
            await aclose()
    return "".join(chunks)


async def normalize_outcome(
    outcome: GenerateContentResponse | AsyncIterator[GenerateContentResponse],
    total_tokens: int | None = None,
) -> GenerationResult:
    """
    Turn a model invocation outcome into a GenerationResult.

    Args:
        outcome: A single response, or an async iterator of stream fragments
        total_tokens: Token count of the outgoing request, attached as metadata

    Returns:
        A success result with the full text, or a failure result. No partial
        text is returned when a stream fails midway.
    """
    try:
        if isinstance(outcome, GenerateContentResponse):
            text = outcome.text
        else:
            text = await collect_stream(outcome)
    except Exception as e:
        logger.error(f"Failed to read model response: {e}")
        return failure_result(e)

    return GenerationResult(status=True, text=text, totalTokens=total_tokens)
