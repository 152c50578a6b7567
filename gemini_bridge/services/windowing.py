"""Token budget windowing over conversation history or content parts."""

from collections.abc import Awaitable, Callable, Sequence
from typing import Generic, TypeVar

from loguru import logger

from gemini_bridge.models.response import TokenBudgetResult


T = TypeVar("T")

# Counts the tokens of a suffix; backed by the remote countTokens call
TokenCounter = Callable[[Sequence[T]], Awaitable[int]]


class HistoryWindower(Generic[T]):
    """Find the longest suffix of a sequence whose token count fits a limit.

    Every count goes through `counter`, which is a remote call, so the scan
    walks forward one step at a time and stops at the first suffix that
    fits. Errors raised by `counter` are not retried and propagate to the
    caller.
    """

    def __init__(self, counter: TokenCounter, step: int = 1):
        if step < 1:
            raise ValueError(f"step must be >= 1, got {step}")
        self.counter = counter
        self.step = step

    async def window(self, sequence: Sequence[T], limit: int | None) -> TokenBudgetResult:
        """
        Count `sequence` and locate where the budget-fitting suffix starts.

        Args:
            sequence: Ordered history turns or parts, oldest first
            limit: Token budget; None or <= 0 disables windowing

        Returns:
            TokenBudgetResult with the full count and the suffix offset.
            An offset of len(sequence) means nothing fits.
        """
        if not sequence:
            return TokenBudgetResult(totalTokens=0, validIndex=0)

        total_tokens = await self.counter(sequence)
        if not limit or limit <= 0 or total_tokens <= limit:
            return TokenBudgetResult(totalTokens=total_tokens, validIndex=0)

        length = len(sequence)
        start = 0
        current_tokens = total_tokens
        while current_tokens > limit:
            start = min(start + self.step, length)
            if start >= length:
                break
            current_tokens = await self.counter(sequence[start:])
            logger.debug(f"Window offset {start}/{length}: {current_tokens} tokens")

        logger.info(
            f"Windowed {length} items to limit {limit}: "
            f"total={total_tokens}, validIndex={start}"
        )
        return TokenBudgetResult(totalTokens=total_tokens, validIndex=start)
