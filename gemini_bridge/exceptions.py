"""Exceptions raised while talking to the Gemini API."""


class GeminiBridgeError(Exception):
    """Base class for errors raised by this package."""


class GeminiAPIError(GeminiBridgeError):
    """The Gemini API answered with an error or an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        status: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.status = status

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"[{self.status_code} {self.status or 'ERROR'}] {self.message}"


class ResponseBlockedError(GeminiBridgeError):
    """The response carries no text because the prompt or candidate was blocked."""
