"""Gemini chat/content bridge with token budget windowing."""

__version__ = "0.1.0"
