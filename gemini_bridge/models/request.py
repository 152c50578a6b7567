"""Request models for Gemini API compatible requests."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Author of a content turn."""

    USER = "user"
    MODEL = "model"


class HarmCategory(str, Enum):
    """Safety categories understood by the Gemini API."""

    HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"
    DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"


class HarmBlockThreshold(str, Enum):
    """Block thresholds accepted by the Gemini API."""

    UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"
    BLOCK_NONE = "BLOCK_NONE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    # Turns the safety filter off entirely
    OFF = "OFF"


class InlineData(BaseModel):
    """Inline data for image content."""

    model_config = ConfigDict(frozen=True)

    mimeType: str = Field(..., description="MIME type of the data")
    data: str = Field(..., description="Base64 encoded data")


class Part(BaseModel):
    """Part of content, can be text or inline data."""

    model_config = ConfigDict(frozen=True)

    text: str | None = Field(default=None, description="Text content")
    inlineData: InlineData | None = Field(default=None, description="Inline data")

    @property
    def has_blob(self) -> bool:
        """True when the part carries inline data with both payload and MIME type."""
        return bool(
            self.inlineData is not None
            and self.inlineData.data
            and self.inlineData.mimeType
        )


class Content(BaseModel):
    """Content with role and parts."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(default=Role.USER, description="Role of the content")
    parts: list[Part] = Field(..., description="Parts of the content")


class HistoryItem(Content):
    """A conversation turn as stored by the caller.

    Callers keep bookkeeping fields (ids, timestamps, ...) next to role and
    parts; they are accepted here and dropped by `to_content`.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    def to_content(self) -> Content:
        return Content(role=self.role, parts=self.parts)


class GenerationConfig(BaseModel):
    """Generation configuration. Unset fields fall back to the defaults."""

    model_config = ConfigDict(frozen=True)

    temperature: float | None = Field(default=None, description="Temperature for generation")
    topK: int | None = Field(default=None, description="Top K for generation")
    topP: float | None = Field(default=None, description="Top P for generation")
    maxOutputTokens: int | None = Field(default=None, description="Maximum output tokens")

    def merged(self, overrides: "GenerationConfig | None") -> "GenerationConfig":
        """Return a copy with every field set in `overrides` replacing ours."""
        if overrides is None:
            return self.model_copy()
        return self.model_copy(update=overrides.model_dump(exclude_none=True))


class SafetySetting(BaseModel):
    """Safety setting for content generation.

    A missing threshold means "keep the default" when used as an override.
    """

    model_config = ConfigDict(frozen=True)

    category: HarmCategory = Field(..., description="Safety category")
    threshold: HarmBlockThreshold | None = Field(default=None, description="Safety threshold")


class GenerateContentRequest(BaseModel):
    """Body sent upstream to generateContent / streamGenerateContent."""

    contents: list[Content] = Field(..., description="Contents to generate from")
    generationConfig: GenerationConfig | None = Field(
        default=None, description="Generation configuration"
    )
    safetySettings: list[SafetySetting] | None = Field(
        default=None, description="Safety settings"
    )


_KNOWN_CATEGORIES = frozenset(category.value for category in HarmCategory)


class GenerationOverrides(BaseModel):
    """Caller overrides shared by chat and content requests."""

    generationConfig: GenerationConfig | None = Field(default=None)
    safetySettings: list[SafetySetting] | None = Field(default=None)
    isStream: bool = Field(default=False, description="Use the streaming endpoint")

    @field_validator("safetySettings", mode="before")
    @classmethod
    def drop_unknown_categories(cls, value):
        """Overrides for categories outside HarmCategory are ignored."""
        if not isinstance(value, list):
            return value
        return [
            setting
            for setting in value
            if not isinstance(setting, dict) or setting.get("category") in _KNOWN_CATEGORIES
        ]


class ChatRequest(GenerationOverrides):
    """Chat-turn request: prior history plus the new user message."""

    history: list[HistoryItem] = Field(default_factory=list, description="Prior turns")
    inputText: str = Field(default="", description="New user message")


class ContentRequest(GenerationOverrides):
    """Single-shot content request from a prompt or explicit parts."""

    prompt: str | None = Field(default=None, description="Prompt text")
    parts: list[Part] | None = Field(default=None, description="Explicit parts")


class TokenCountRequest(BaseModel):
    """Token count request, optionally windowed to `limit`."""

    prompt: str | None = Field(default=None)
    parts: list[Part] | None = Field(default=None)
    history: list[HistoryItem] | None = Field(default=None)
    limit: int | None = Field(default=None, description="Token budget, <= 0 disables windowing")
