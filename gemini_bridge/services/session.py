"""HTTP session management."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from curl_cffi.requests import AsyncSession


@asynccontextmanager
async def open_session() -> AsyncIterator[AsyncSession]:
    """Open an async session for the lifetime of the application."""
    session = AsyncSession()
    try:
        yield session
    finally:
        await session.close()
