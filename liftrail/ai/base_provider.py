"""
Base LLM Provider and the concrete OpenAI-compatible providers.

All supported providers expose a /chat/completions endpoint with the same
payload shape, so the request loop, error mapping and response parsing live
in BaseLLMProvider. Subclasses only declare their identity, extra headers
and pricing.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any
import logging
import random
import time

import httpx

from .providers import (
    LLMProviderType,
    LLMMessage,
    LLMResponse,
    LLMUsage,
    AuthenticationError,
    RateLimitError,
    ProviderUnavailableError,
    LLMProviderError,
    PROVIDER_PRICING,
)

logger = logging.getLogger(__name__)


class BaseLLMProvider(ABC):
    """Base class for chat completion providers.

    chat() is a template method: it formats the payload, posts it with
    retry on transient failures and parses the first choice.

    Attributes:
        api_key: The API key for authentication
        base_url: The base URL for API requests
        default_model: The default model to use
        timeout: Request timeout in seconds
        max_retries: Retries after the first attempt for transient errors
        retry_base_delay: Base delay for exponential backoff
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        default_model: str,
        timeout: float = 60.0,
        max_retries: int = 3,
        retry_base_delay: float = 1.0,
    ):
        if not api_key:
            raise ValueError("API key is required")

        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._default_model = default_model
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay

    @property
    @abstractmethod
    def provider_type(self) -> LLMProviderType:
        """Return the provider type identifier."""

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

    def _get_endpoint(self) -> str:
        return "/chat/completions"

    def _format_request(
        self,
        messages: List[LLMMessage],
        model: str,
        temperature: float,
        max_tokens: Optional[int],
        json_mode: bool,
        **kwargs: Any,
    ) -> Dict[str, Any]:
        """Build the OpenAI-compatible request payload."""
        payload: Dict[str, Any] = {
            "model": model,
            "messages": [m.to_dict() for m in messages],
            "temperature": temperature,
        }
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        if json_mode:
            payload["response_format"] = {"type": "json_object"}
        payload.update(kwargs)
        return payload

    def _calculate_backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with up to 25% jitter."""
        delay = self._retry_base_delay * (2 ** attempt)
        return delay + delay * random.uniform(0, 0.25)

    def _raise_for_status(self, response: httpx.Response) -> None:
        """Map a non-200 HTTP response to the matching provider error.

        Raises:
            AuthenticationError: For 401/403
            RateLimitError: For 429
            ProviderUnavailableError: For 5xx
            LLMProviderError: For other errors
        """
        status_code = response.status_code
        try:
            error_data = response.json()
            error_message = error_data.get("error", {}).get("message", response.text)
        except (ValueError, AttributeError):
            error_data = None
            error_message = response.text

        if status_code in (401, 403):
            error_cls = AuthenticationError
            message = f"Authentication failed: {error_message}"
        elif status_code == 429:
            error_cls = RateLimitError
            message = f"Rate limit exceeded: {error_message}"
        elif status_code >= 500:
            error_cls = ProviderUnavailableError
            message = f"Server error: {error_message}"
        else:
            error_cls = LLMProviderError
            message = f"API error: {error_message}"

        raise error_cls(
            message,
            provider=self.provider_type,
            status_code=status_code,
            response=error_data,
        )

    def _make_request(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST the payload, retrying timeouts, 429 and 5xx responses.

        Raises:
            AuthenticationError: Invalid API key, never retried
            LLMProviderError: Client errors or retries exhausted
        """
        url = f"{self._base_url}{self._get_endpoint()}"
        headers = self._build_headers()
        attempts = self._max_retries + 1
        name = self.provider_type.value
        last_error: Optional[Exception] = None

        for attempt in range(attempts):
            try:
                with httpx.Client(timeout=self._timeout) as client:
                    response = client.post(url, json=payload, headers=headers)
                if response.status_code == 200:
                    return response.json()
                self._raise_for_status(response)

            except httpx.TimeoutException as e:
                last_error = e
                logger.warning(f"{name} request timeout (attempt {attempt + 1}/{attempts})")

            except httpx.RequestError as e:
                last_error = e
                logger.warning(f"{name} request error (attempt {attempt + 1}/{attempts}): {e}")

            except (RateLimitError, ProviderUnavailableError) as e:
                last_error = e
                if attempt == attempts - 1:
                    raise
                logger.info(f"{name} transient error, retrying: {e}")

            if attempt < attempts - 1:
                time.sleep(self._calculate_backoff_delay(attempt))

        raise LLMProviderError(
            f"Request failed after {attempts} attempts: {last_error}",
            provider=self.provider_type,
        )

    def _parse_response(self, response_data: Dict[str, Any], model: str) -> LLMResponse:
        choices = response_data.get("choices", [])
        if not choices:
            raise LLMProviderError(
                "No choices in API response",
                provider=self.provider_type,
            )

        choice = choices[0]
        usage_data = response_data.get("usage") or {}
        usage = LLMUsage(
            prompt_tokens=usage_data.get("prompt_tokens", 0),
            completion_tokens=usage_data.get("completion_tokens", 0),
            total_tokens=usage_data.get("total_tokens", 0),
        )

        return LLMResponse(
            content=choice.get("message", {}).get("content") or "",
            model=response_data.get("model", model),
            provider=self.provider_type,
            usage=usage,
            finish_reason=choice.get("finish_reason"),
            raw_response=response_data,
        )

    def chat(
        self,
        messages: List[LLMMessage],
        model: Optional[str] = None,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
        **kwargs: Any,
    ) -> LLMResponse:
        """Send a chat completion request.

        Args:
            messages: List of messages in the conversation
            model: Model to use (defaults to provider's default)
            temperature: Sampling temperature (0.0 to 2.0)
            max_tokens: Maximum tokens to generate (None = no limit)
            json_mode: If True, ask for a JSON object response
            **kwargs: Additional parameters passed to the API

        Returns:
            LLMResponse with the completion content and metadata
        """
        actual_model = model or self._default_model
        payload = self._format_request(
            messages=messages,
            model=actual_model,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=json_mode,
            **kwargs,
        )
        response_data = self._make_request(payload)
        return self._parse_response(response_data, actual_model)

    def health_check(self) -> bool:
        """Send a one-token request; True if the provider answers."""
        try:
            response = self.chat(
                messages=[LLMMessage(role="user", content="ping")],
                max_tokens=1,
                temperature=0,
            )
            return len(response.content) > 0
        except LLMProviderError as e:
            logger.warning(f"{self.provider_type.value} health check failed: {e}")
            return False

    def calculate_cost(self, usage: LLMUsage, model: Optional[str] = None) -> float:
        """Estimated cost in USD; 0.0 for models without known pricing."""
        pricing = PROVIDER_PRICING.get(model or self._default_model)
        if pricing is None:
            return 0.0
        return (
            usage.prompt_tokens / 1_000_000 * pricing["input_per_million"]
            + usage.completion_tokens / 1_000_000 * pricing["output_per_million"]
        )


class GeminiProvider(BaseLLMProvider):
    """Google Gemini through its OpenAI-compatible endpoint."""

    @property
    def provider_type(self) -> LLMProviderType:
        return LLMProviderType.GEMINI


class DeepSeekProvider(BaseLLMProvider):
    """DeepSeek chat API (deepseek-chat)."""

    @property
    def provider_type(self) -> LLMProviderType:
        return LLMProviderType.DEEPSEEK


class GrokProvider(BaseLLMProvider):
    """xAI Grok API."""

    @property
    def provider_type(self) -> LLMProviderType:
        return LLMProviderType.GROK


class OpenRouterProvider(BaseLLMProvider):
    """OpenRouter gateway with optional attribution headers."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        default_model: str,
        site_url: Optional[str] = None,
        site_name: Optional[str] = None,
        **kwargs: Any,
    ):
        super().__init__(api_key, base_url, default_model, **kwargs)
        self._site_url = site_url
        self._site_name = site_name

    @property
    def provider_type(self) -> LLMProviderType:
        return LLMProviderType.OPENROUTER

    def _build_headers(self) -> Dict[str, str]:
        headers = super()._build_headers()
        if self._site_url:
            headers["HTTP-Referer"] = self._site_url
        if self._site_name:
            headers["X-Title"] = self._site_name
        return headers


__all__ = [
    "BaseLLMProvider",
    "GeminiProvider",
    "DeepSeekProvider",
    "GrokProvider",
    "OpenRouterProvider",
]
