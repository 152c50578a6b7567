"""API routers."""

from .gemini import router as gemini_router

__all__ = ["gemini_router"]
