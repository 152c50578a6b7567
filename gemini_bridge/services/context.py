"""Immutable per-process context shared by every request."""

from dataclasses import dataclass, field

from gemini_bridge.config import Settings
from gemini_bridge.models.request import GenerationConfig, SafetySetting
from gemini_bridge.services.provider import GeminiProvider
from gemini_bridge.services.safety import DEFAULT_SAFETY_SETTINGS


DEFAULT_GENERATION_CONFIG = GenerationConfig(
    temperature=0.9,
    topK=1,
    topP=1,
    maxOutputTokens=2048,
)


@dataclass(frozen=True)
class GeminiContext:
    """Provider, model names and default tables, built once at startup."""

    provider: GeminiProvider
    text_model: str
    vision_model: str
    generation_defaults: GenerationConfig = DEFAULT_GENERATION_CONFIG
    safety_defaults: tuple[SafetySetting, ...] = field(default=DEFAULT_SAFETY_SETTINGS)
    window_step: int = 1

    @classmethod
    def from_settings(cls, settings: Settings, provider: GeminiProvider) -> "GeminiContext":
        return cls(
            provider=provider,
            text_model=settings.text_model,
            vision_model=settings.vision_model,
            window_step=settings.window_step,
        )
