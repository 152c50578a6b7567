"""Main FastAPI application entry point."""

import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from gemini_bridge import __version__
from gemini_bridge.config import settings
from gemini_bridge.routers import gemini_router
from gemini_bridge.services.context import GeminiContext
from gemini_bridge.services.provider import GeminiProvider
from gemini_bridge.services.session import open_session


# Configure loguru
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    level=settings.log_level,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info(f"Starting Gemini bridge v{__version__}")
    logger.info(f"Server running on {settings.host}:{settings.port}")
    logger.info(f"Proxy: {settings.proxy or 'None'}")
    logger.info(f"Timeout: {settings.timeout}s")
    logger.info(f"Models: text={settings.text_model}, vision={settings.vision_model}")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set, upstream calls will be rejected")

    async with open_session() as session:
        provider = GeminiProvider.from_settings(session, settings)
        app.state.context = GeminiContext.from_settings(settings, provider)

        yield

        logger.info("Shutting down...")

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title="Gemini Bridge",
    description="Chat and content generation against Gemini with token budget windowing",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(gemini_router, tags=["Gemini"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint for health check."""
    return {
        "service": "Gemini Bridge",
        "version": __version__,
        "status": "healthy",
    }


@app.get("/health", tags=["Health"])
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


def run():
    """Run the application with uvicorn."""
    import uvicorn

    uvicorn.run(
        "gemini_bridge.main:app",
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
