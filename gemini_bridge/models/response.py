"""Response models for Gemini API compatible responses."""

from pydantic import BaseModel, Field

from gemini_bridge.exceptions import ResponseBlockedError
from .request import Content


# Finish reasons after which the SDKs refuse to hand out candidate text
BLOCKED_FINISH_REASONS = frozenset({"SAFETY", "RECITATION"})


class Candidate(BaseModel):
    """Candidate response from the model."""

    content: Content | None = Field(default=None, description="Content of the candidate")
    finishReason: str | None = Field(default=None, description="Reason for finishing")
    index: int = Field(default=0, description="Index of the candidate")


class UsageMetadata(BaseModel):
    """Usage metadata for the response."""

    promptTokenCount: int = Field(default=0, description="Prompt token count")
    candidatesTokenCount: int = Field(default=0, description="Candidates token count")
    totalTokenCount: int = Field(default=0, description="Total token count")


class PromptFeedback(BaseModel):
    """Feedback on the prompt, set when the prompt itself was blocked."""

    blockReason: str | None = Field(default=None, description="Why the prompt was blocked")


class GenerateContentResponse(BaseModel):
    """Response (or stream fragment) from generateContent."""

    candidates: list[Candidate] = Field(default_factory=list, description="Candidates from generation")
    usageMetadata: UsageMetadata = Field(
        default_factory=UsageMetadata, description="Usage metadata"
    )
    promptFeedback: PromptFeedback | None = Field(default=None, description="Prompt feedback")
    modelVersion: str | None = Field(default=None, description="Model version used")

    @property
    def text(self) -> str:
        """Text of the first candidate.

        Raises:
            ResponseBlockedError: the candidate stopped for safety/recitation,
                or there is no candidate because the prompt was blocked.
        """
        if self.candidates:
            candidate = self.candidates[0]
            if candidate.finishReason in BLOCKED_FINISH_REASONS:
                raise ResponseBlockedError(
                    f"Candidate was blocked due to {candidate.finishReason}"
                )
            if candidate.content is None:
                return ""
            return "".join(part.text for part in candidate.content.parts if part.text)

        if self.promptFeedback and self.promptFeedback.blockReason:
            raise ResponseBlockedError(
                f"Text not available. Response was blocked due to {self.promptFeedback.blockReason}"
            )
        return ""


class CountTokensResponse(BaseModel):
    """Response model for countTokens."""

    totalTokens: int = Field(default=0, description="Token count of the submitted contents")


class ErrorDetail(BaseModel):
    """Error detail in response."""

    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    status: str = Field(default="UNKNOWN", description="Error status")


class ErrorResponse(BaseModel):
    """Error response model."""

    error: ErrorDetail = Field(..., description="Error details")


class GenerationResult(BaseModel):
    """Normalized outcome of a chat or content call."""

    status: bool = Field(..., description="Whether the call succeeded")
    text: str = Field(default="", description="Generated text")
    totalTokens: int | None = Field(default=None, description="Token count of the outgoing request")
    error: str | None = Field(default=None, description="Failure description")


class TokenBudgetResult(BaseModel):
    """Outcome of a token count, optionally windowed to a budget."""

    totalTokens: int = Field(default=0, description="Token count of the full input")
    validIndex: int = Field(default=0, description="Start of the suffix that fits the budget")
