"""
Application configuration using pydantic-settings.

WHAT: Centralized config from environment variables
WHY: Type-safe, validated config with sensible defaults
HOW: Pydantic BaseSettings reads from .env and environment
"""

from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import Literal, Optional
from pathlib import Path


ProviderName = Literal["openai", "groq"]


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # App metadata
    APP_NAME: str = "DealCounsel"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./data/dealcounsel.db"

    # Upstream providers (both speak the OpenAI chat-completions dialect)
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    GROQ_API_KEY: str = ""
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"

    # Per-feature model selection
    NEGOTIATION_PROVIDER: ProviderName = "groq"
    NEGOTIATION_MODEL: str = "llama-3.3-70b-versatile"
    NEGOTIATION_TEMPERATURE: float = 0.7

    CONTRACT_PROVIDER: ProviderName = "openai"
    CONTRACT_MODEL: str = "gpt-4o-mini"
    CONTRACT_TEMPERATURE: float = 0.2  # deterministic-leaning drafting

    ANALYZER_PROVIDER: ProviderName = "openai"
    ANALYZER_MODEL: str = "gpt-4o-mini"
    ANALYZER_TEMPERATURE: float = 0.3

    # LLM request configuration
    LLM_MAX_TOKENS: Optional[int] = None  # None lets the upstream decide
    LLM_REQUEST_TIMEOUT: Optional[float] = None  # seconds; None = no client-side limit

    # CORS - accepts comma-separated string or list
    CORS_ORIGINS: str = "*"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, list):
            return ",".join(v)
        return v

    def get_cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = "./data/logs/app.log"

    class Config:
        # Look for .env in project root first, then backend/.env
        env_file = [
            str(Path(__file__).parent.parent.parent.parent / ".env"),
            str(Path(__file__).parent.parent.parent / ".env"),
        ]
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Singleton instance
settings = Settings()
