"""Configuration management for the application."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Loguru level for the stdout sink")

    # Proxy Configuration
    proxy: str | None = Field(default=None, description="HTTP proxy URL")

    # Timeout Configuration
    timeout: int = Field(default=120, description="Request timeout in seconds")

    # Gemini API Configuration
    gemini_api_key: str = Field(default="", description="Google Gemini API key")
    gemini_base_api: str = Field(
        default="https://generativelanguage.googleapis.com",
        description="Gemini API base URL",
    )
    gemini_api_version: str = Field(default="v1beta", description="Gemini API version")

    # Model Configuration
    text_model: str = Field(default="gemini-pro", description="Text-only model")
    vision_model: str = Field(
        default="gemini-pro-vision", description="Model used when parts carry inline images"
    )

    # Token Windowing
    window_step: int = Field(
        default=1,
        ge=1,
        description="Items dropped per countTokens call while windowing history",
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
