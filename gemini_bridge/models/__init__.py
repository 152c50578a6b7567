"""Data models for the application."""

from .request import (
    ChatRequest,
    Content,
    ContentRequest,
    GenerateContentRequest,
    GenerationConfig,
    GenerationOverrides,
    HarmBlockThreshold,
    HarmCategory,
    HistoryItem,
    InlineData,
    Part,
    Role,
    SafetySetting,
    TokenCountRequest,
)
from .response import (
    Candidate,
    CountTokensResponse,
    ErrorDetail,
    ErrorResponse,
    GenerateContentResponse,
    GenerationResult,
    PromptFeedback,
    TokenBudgetResult,
    UsageMetadata,
)

__all__ = [
    "ChatRequest",
    "Content",
    "ContentRequest",
    "GenerateContentRequest",
    "GenerationConfig",
    "GenerationOverrides",
    "HarmBlockThreshold",
    "HarmCategory",
    "HistoryItem",
    "InlineData",
    "Part",
    "Role",
    "SafetySetting",
    "TokenCountRequest",
    "Candidate",
    "CountTokensResponse",
    "ErrorDetail",
    "ErrorResponse",
    "GenerateContentResponse",
    "GenerationResult",
    "PromptFeedback",
    "TokenBudgetResult",
    "UsageMetadata",
]
