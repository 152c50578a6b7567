"""Services for the application."""

from .provider import GeminiProvider
from .safety import DEFAULT_SAFETY_SETTINGS, merge_safety_settings
from .context import DEFAULT_GENERATION_CONFIG, GeminiContext
from .windowing import HistoryWindower
from .assembler import AssembledRequest, RequestAssembler
from .normalizer import collect_stream, normalize_outcome
from .gemini import GeminiService
from .session import open_session

__all__ = [
    "GeminiProvider",
    "DEFAULT_SAFETY_SETTINGS",
    "merge_safety_settings",
    "DEFAULT_GENERATION_CONFIG",
    "GeminiContext",
    "HistoryWindower",
    "AssembledRequest",
    "RequestAssembler",
    "collect_stream",
    "normalize_outcome",
    "GeminiService",
    "open_session",
]
