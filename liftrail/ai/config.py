"""
AI Assistant Configuration Module for LiftRail.

Handles environment variable loading, provider selection and API key
masking for the advisory rail review.

Usage:
    config = AIConfig.from_env()
    provider = config.create_provider()
"""

from dataclasses import dataclass
from typing import Optional, Dict, Any
import os
import logging

from dotenv import load_dotenv

from .base_provider import BaseLLMProvider
from .providers import LLMProviderType, LLMProviderFactory

logger = logging.getLogger(__name__)


@dataclass
class AIConfig:
    """AI Assistant configuration.

    Attributes:
        provider_type: The LLM provider to use (gemini, deepseek, grok, openrouter)
        api_key: API key for the selected provider
        base_url: Optional custom base URL
        model: Optional model override (uses provider default if None)
        timeout: Request timeout in seconds (default: 60)
        max_retries: Maximum retry attempts (default: 3)
        track_costs: Log estimated cost per request (default: True)
        response_language: Language the review is written in (default: English)
        site_url: Optional site URL for OpenRouter rankings
        site_name: Optional site name for OpenRouter rankings
    """

    provider_type: LLMProviderType
    api_key: str
    base_url: Optional[str] = None
    model: Optional[str] = None
    timeout: float = 60.0
    max_retries: int = 3
    track_costs: bool = True
    response_language: str = "English"
    site_url: Optional[str] = None
    site_name: Optional[str] = None

    def __post_init__(self):
        if not self.api_key:
            raise ValueError("API key is required")

        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")

        if self.max_retries < 0:
            raise ValueError("Max retries cannot be negative")

        if not self.response_language.strip():
            raise ValueError("Response language cannot be empty")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AIConfig":
        """Load configuration from environment variables.

        Args:
            env_file: Optional path to a .env file loaded before reading

        Raises:
            ValueError: If required environment variables are missing or invalid
            FileNotFoundError: If env_file is specified but doesn't exist

        Environment Variables:
            LLM_PROVIDER: Provider type (gemini, deepseek, grok, openrouter)
            {PROVIDER}_API_KEY: API key for the provider
            {PROVIDER}_BASE_URL: Optional custom base URL
            LLM_MODEL: Optional model override
            LLM_TIMEOUT: Request timeout in seconds
            LLM_MAX_RETRIES: Maximum retry attempts
            LLM_TRACK_COSTS: Enable cost logging (true/false)
            LLM_RESPONSE_LANGUAGE: Language of the generated review
        """
        if env_file:
            cls._load_env_file(env_file)

        provider_str = os.getenv("LLM_PROVIDER", "gemini").strip().lower()
        try:
            provider_type = LLMProviderType(provider_str)
        except ValueError:
            valid = ", ".join(p.value for p in LLMProviderType)
            raise ValueError(f"Invalid LLM_PROVIDER: {provider_str}. Must be one of: {valid}")

        api_key_env = f"{provider_str.upper()}_API_KEY"
        api_key = os.getenv(api_key_env)
        if not api_key:
            raise ValueError(
                f"Missing API key: {api_key_env} environment variable is required"
            )

        try:
            timeout = float(os.getenv("LLM_TIMEOUT", "60"))
            max_retries = int(os.getenv("LLM_MAX_RETRIES", "3"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric LLM setting: {e}")

        return cls(
            provider_type=provider_type,
            api_key=api_key,
            base_url=os.getenv(f"{provider_str.upper()}_BASE_URL") or None,
            model=os.getenv("LLM_MODEL") or None,
            timeout=timeout,
            max_retries=max_retries,
            track_costs=os.getenv("LLM_TRACK_COSTS", "true").lower() == "true",
            response_language=os.getenv("LLM_RESPONSE_LANGUAGE") or "English",
            site_url=os.getenv("OPENROUTER_SITE_URL") or None,
            site_name=os.getenv("OPENROUTER_SITE_NAME") or None,
        )

    @staticmethod
    def _load_env_file(env_file: str) -> None:
        if not load_dotenv(env_file):
            raise FileNotFoundError(f".env file not found: {env_file}")

    def create_provider(self) -> BaseLLMProvider:
        """Create an LLM provider instance from this configuration."""
        kwargs: Dict[str, Any] = {"max_retries": self.max_retries}

        if self.provider_type == LLMProviderType.OPENROUTER:
            if self.site_url:
                kwargs["site_url"] = self.site_url
            if self.site_name:
                kwargs["site_name"] = self.site_name

        provider = LLMProviderFactory.create(
            provider_type=self.provider_type,
            api_key=self.api_key,
            base_url=self.base_url,
            model=self.model,
            timeout=self.timeout,
            **kwargs,
        )

        logger.info(
            f"Created {self.provider_type.value} provider "
            f"(model: {provider.default_model})"
        )
        return provider

    def mask_api_key(self) -> str:
        """Return masked API key for logging (first 8 and last 4 chars)."""
        if len(self.api_key) <= 12:
            return "***"
        return f"{self.api_key[:8]}...{self.api_key[-4:]}"

    def __repr__(self) -> str:
        return (
            f"AIConfig("
            f"provider={self.provider_type.value}, "
            f"model={self.model or 'default'}, "
            f"api_key={self.mask_api_key()})"
        )
