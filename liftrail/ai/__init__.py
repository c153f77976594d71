"""
AI Assistant Module for LiftRail

Advisory commentary on guide rail calculations. Nothing here feeds back
into the calculation engines.

Components:
- LLM Providers: Gemini (default), DeepSeek, Grok, OpenRouter
- Configuration: AIConfig
- Prompt Templates: rail review
- Response Parsing: structured JSON review with unstructured fallback
- AI Service: High-level service interface

Usage:
    from liftrail.ai import AIService

    service = AIService.from_env()
    review = service.get_rail_review(project)
"""

# Provider Infrastructure
from .providers import (
    LLMProviderType,
    LLMMessage,
    LLMResponse,
    LLMUsage,
    MessageRole,
    LLMProviderError,
    RateLimitError,
    AuthenticationError,
    ProviderUnavailableError,
    LLMProviderFactory,
    PROVIDER_PRICING,
)
from .base_provider import (
    BaseLLMProvider,
    GeminiProvider,
    DeepSeekProvider,
    GrokProvider,
    OpenRouterProvider,
)

# Configuration
from .config import AIConfig

# Prompts
from .prompts import (
    PromptType,
    PromptTemplate,
    get_template,
    create_rail_review_prompt,
)

# Response Parsing
from .response_parser import (
    RailReviewResponse,
    UnstructuredResponse,
    safe_parse_rail_review,
)

# Service
from .llm_service import AIService

__all__ = [
    "LLMProviderType",
    "LLMMessage",
    "LLMResponse",
    "LLMUsage",
    "MessageRole",
    "LLMProviderError",
    "RateLimitError",
    "AuthenticationError",
    "ProviderUnavailableError",
    "LLMProviderFactory",
    "PROVIDER_PRICING",
    "BaseLLMProvider",
    "GeminiProvider",
    "DeepSeekProvider",
    "GrokProvider",
    "OpenRouterProvider",
    "AIConfig",
    "PromptType",
    "PromptTemplate",
    "get_template",
    "create_rail_review_prompt",
    "RailReviewResponse",
    "UnstructuredResponse",
    "safe_parse_rail_review",
    "AIService",
]
