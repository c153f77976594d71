"""
LLM Provider Interface and Factory for the LiftRail advisory assistant.

This module provides a provider-agnostic interface for interacting with
LLM APIs through the OpenAI-compatible chat completions format, so the
provider can be swapped by configuration only.

Supported Providers:
- Gemini (DEFAULT): generativelanguage.googleapis.com OpenAI-compatible endpoint
- DeepSeek: api.deepseek.com, deepseek-chat model
- Grok: api.x.ai, grok-4-fast model
- OpenRouter: openrouter.ai gateway

Usage:
    provider = LLMProviderFactory.create(
        provider_type=LLMProviderType.GEMINI,
        api_key="your-api-key"
    )
    response = provider.chat([LLMMessage(role="user", content="Hello")])
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class LLMProviderType(Enum):
    """Supported LLM provider types."""
    GEMINI = "gemini"
    DEEPSEEK = "deepseek"
    GROK = "grok"
    OPENROUTER = "openrouter"


class MessageRole(Enum):
    """Message role types for chat completion."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass
class LLMMessage:
    """A message in a chat conversation.

    Attributes:
        role: The role of the message sender (system, user, or assistant)
        content: The text content of the message
        name: Optional name for the sender
    """
    role: str
    content: str
    name: Optional[str] = None

    def __post_init__(self):
        """Validate role is one of the allowed values."""
        valid_roles = {r.value for r in MessageRole}
        if self.role not in valid_roles:
            raise ValueError(
                f"Invalid role '{self.role}'. Must be one of: {valid_roles}"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API request."""
        result: Dict[str, Any] = {
            "role": self.role,
            "content": self.content,
        }
        if self.name:
            result["name"] = self.name
        return result


@dataclass
class LLMUsage:
    """Token usage statistics from LLM response."""
    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class LLMResponse:
    """Response from an LLM chat completion.

    Attributes:
        content: The text content of the response
        model: The model used for generation
        provider: The provider type that generated this response
        usage: Token usage statistics (if available)
        finish_reason: Why the completion stopped (stop, length, etc.)
        raw_response: The raw response from the API (for debugging)
    """
    content: str
    model: str
    provider: LLMProviderType
    usage: Optional[LLMUsage] = None
    finish_reason: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = field(default=None, repr=False)

    @property
    def total_tokens(self) -> int:
        return self.usage.total_tokens if self.usage else 0


class LLMProviderError(Exception):
    """Base exception for LLM provider errors.

    Attributes:
        message: Error description
        provider: The provider that raised the error
        status_code: HTTP status code (if applicable)
        response: Raw response data (if available)
    """

    def __init__(
        self,
        message: str,
        provider: Optional[LLMProviderType] = None,
        status_code: Optional[int] = None,
        response: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:
        parts = [self.message]
        if self.provider:
            parts.insert(0, f"[{self.provider.value}]")
        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")
        return " ".join(parts)


class RateLimitError(LLMProviderError):
    """Raised when API rate limit is exceeded (HTTP 429)."""
    pass


class AuthenticationError(LLMProviderError):
    """Raised when API authentication fails (HTTP 401/403)."""
    pass


class ProviderUnavailableError(LLMProviderError):
    """Raised when provider is temporarily unavailable (HTTP 5xx)."""
    pass


# USD per 1M tokens
PROVIDER_PRICING: Dict[str, Dict[str, float]] = {
    "gemini-2.5-flash": {"input_per_million": 0.30, "output_per_million": 2.50},
    "deepseek-chat": {"input_per_million": 0.14, "output_per_million": 0.28},
    "grok-4-fast": {"input_per_million": 1.00, "output_per_million": 3.00},
}


class LLMProviderFactory:
    """Factory for creating LLM provider instances.

    Usage:
        provider = LLMProviderFactory.create(
            provider_type=LLMProviderType.DEEPSEEK,
            api_key="your-api-key"
        )
    """

    _PROVIDER_CONFIGS: Dict[LLMProviderType, Dict[str, str]] = {
        LLMProviderType.GEMINI: {
            "base_url": "https://generativelanguage.googleapis.com/v1beta/openai",
            "default_model": "gemini-2.5-flash",
        },
        LLMProviderType.DEEPSEEK: {
            "base_url": "https://api.deepseek.com/v1",
            "default_model": "deepseek-chat",
        },
        LLMProviderType.GROK: {
            "base_url": "https://api.x.ai/v1",
            "default_model": "grok-4-fast",
        },
        LLMProviderType.OPENROUTER: {
            "base_url": "https://openrouter.ai/api/v1",
            "default_model": "openrouter/auto",
        },
    }

    @classmethod
    def create(
        cls,
        provider_type: LLMProviderType,
        api_key: str,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 60.0,
        **kwargs: Any,
    ) -> "BaseLLMProvider":
        """Create an LLM provider instance.

        Args:
            provider_type: The type of provider to create
            api_key: API key for authentication
            base_url: Override the default base URL (optional)
            model: Override the default model (optional)
            timeout: Request timeout in seconds (default 60)
            **kwargs: max_retries, retry_base_delay, site_url, site_name

        Raises:
            ValueError: If provider_type is not supported
        """
        from .base_provider import (
            GeminiProvider,
            DeepSeekProvider,
            GrokProvider,
            OpenRouterProvider,
        )

        config = cls.get_provider_config(provider_type)
        common: Dict[str, Any] = {
            "api_key": api_key,
            "base_url": base_url or config["base_url"],
            "default_model": model or config["default_model"],
            "timeout": timeout,
            "max_retries": kwargs.get("max_retries", 3),
            "retry_base_delay": kwargs.get("retry_base_delay", 1.0),
        }

        if provider_type == LLMProviderType.GEMINI:
            return GeminiProvider(**common)
        elif provider_type == LLMProviderType.DEEPSEEK:
            return DeepSeekProvider(**common)
        elif provider_type == LLMProviderType.GROK:
            return GrokProvider(**common)
        return OpenRouterProvider(
            site_url=kwargs.get("site_url"),
            site_name=kwargs.get("site_name"),
            **common,
        )

    @classmethod
    def get_provider_config(cls, provider_type: LLMProviderType) -> Dict[str, str]:
        """Get the default base_url and default_model for a provider."""
        if provider_type not in cls._PROVIDER_CONFIGS:
            raise ValueError(f"Unsupported provider type: {provider_type}")
        return cls._PROVIDER_CONFIGS[provider_type].copy()
