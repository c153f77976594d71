"""
Unit tests for AI Provider Interface, Factory and HTTP providers.

Tests cover:
- LLMProviderType and MessageRole enums
- LLMMessage validation and serialization
- LLMProviderFactory creation and configuration
- Chat requests over a mocked httpx.Client
- Error mapping and retry behaviour
- Cost calculation
"""

import pytest

from liftrail.ai.base_provider import (
    DeepSeekProvider,
    GeminiProvider,
    GrokProvider,
    OpenRouterProvider,
)
from liftrail.ai.providers import (
    LLMProviderType,
    MessageRole,
    LLMMessage,
    LLMUsage,
    LLMResponse,
    LLMProviderFactory,
    LLMProviderError,
    RateLimitError,
    AuthenticationError,
    ProviderUnavailableError,
)


SUCCESS_BODY = {
    "id": "chatcmpl-1",
    "model": "gemini-2.5-flash",
    "choices": [{
        "index": 0,
        "message": {"role": "assistant", "content": "Rails look fine."},
        "finish_reason": "stop",
    }],
    "usage": {"prompt_tokens": 10, "completion_tokens": 4, "total_tokens": 14},
}


class MockResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


def install_client(monkeypatch, responses, captured=None):
    """Patch httpx.Client to return the given responses in order."""
    queue = list(responses)

    class MockClient:
        def __init__(self, **kwargs):
            pass

        def __enter__(self):
            return self

        def __exit__(self, *args):
            pass

        def post(self, url, json, headers):
            if captured is not None:
                captured.append({"url": url, "json": json, "headers": headers})
            return queue.pop(0)

    monkeypatch.setattr("httpx.Client", MockClient)
    monkeypatch.setattr("time.sleep", lambda s: None)


def make_provider(cls=GeminiProvider, **kwargs):
    defaults = {
        "api_key": "test-key",
        "base_url": "https://example.test/v1/",
        "default_model": "gemini-2.5-flash",
        "retry_base_delay": 0.0,
    }
    defaults.update(kwargs)
    return cls(**defaults)


class TestEnums:
    """Tests for provider and role enums."""

    def test_provider_types(self):
        assert [p.value for p in LLMProviderType] == ["gemini", "deepseek", "grok", "openrouter"]

    def test_message_roles(self):
        assert {r.value for r in MessageRole} == {"system", "user", "assistant"}


class TestLLMMessage:
    """Tests for LLMMessage dataclass."""

    def test_invalid_role_raises_error(self):
        with pytest.raises(ValueError) as exc_info:
            LLMMessage(role="invalid", content="Test")
        assert "Invalid role" in str(exc_info.value)

    def test_to_dict(self):
        assert LLMMessage(role="user", content="Hi").to_dict() == {"role": "user", "content": "Hi"}
        assert LLMMessage(role="user", content="Hi", name="Eva").to_dict()["name"] == "Eva"

    def test_response_total_tokens(self):
        response = LLMResponse(content="x", model="m", provider=LLMProviderType.GROK)
        assert response.total_tokens == 0


class TestErrors:
    """Tests for the error hierarchy."""

    def test_str_includes_provider_and_status(self):
        error = RateLimitError("Slow down", provider=LLMProviderType.DEEPSEEK, status_code=429)
        assert str(error) == "[deepseek] Slow down (HTTP 429)"
        assert isinstance(error, LLMProviderError)


class TestLLMProviderFactory:
    """Tests for LLMProviderFactory."""

    @pytest.mark.parametrize("provider_type, cls", [
        (LLMProviderType.GEMINI, GeminiProvider),
        (LLMProviderType.DEEPSEEK, DeepSeekProvider),
        (LLMProviderType.GROK, GrokProvider),
        (LLMProviderType.OPENROUTER, OpenRouterProvider),
    ])
    def test_create(self, provider_type, cls):
        provider = LLMProviderFactory.create(provider_type, api_key="k")
        assert isinstance(provider, cls)
        assert provider.provider_type == provider_type

    def test_defaults_and_overrides(self):
        provider = LLMProviderFactory.create(
            LLMProviderType.DEEPSEEK, api_key="k", base_url="https://proxy.test/", model="deepseek-reasoner",
        )
        assert provider.base_url == "https://proxy.test"
        assert provider.default_model == "deepseek-reasoner"

    def test_gemini_default_endpoint(self):
        config = LLMProviderFactory.get_provider_config(LLMProviderType.GEMINI)
        assert "generativelanguage.googleapis.com" in config["base_url"]

    def test_missing_api_key(self):
        with pytest.raises(ValueError):
            LLMProviderFactory.create(LLMProviderType.GEMINI, api_key="")


class TestProviderChat:
    """Tests for chat() over a mocked HTTP client."""

    def test_chat_success(self, monkeypatch):
        captured = []
        install_client(monkeypatch, [MockResponse(body=SUCCESS_BODY)], captured)

        provider = make_provider()
        response = provider.chat([LLMMessage(role="user", content="Hello")], json_mode=True, max_tokens=50)

        assert response.content == "Rails look fine."
        assert response.provider == LLMProviderType.GEMINI
        assert response.usage.total_tokens == 14
        assert response.finish_reason == "stop"

        request = captured[0]
        assert request["url"] == "https://example.test/v1/chat/completions"
        assert request["headers"]["Authorization"] == "Bearer test-key"
        assert request["json"]["response_format"] == {"type": "json_object"}
        assert request["json"]["max_tokens"] == 50

    def test_auth_error_not_retried(self, monkeypatch):
        captured = []
        install_client(
            monkeypatch,
            [MockResponse(401, {"error": {"message": "Invalid API key"}}, "Unauthorized")],
            captured,
        )
        with pytest.raises(AuthenticationError) as exc_info:
            make_provider().chat([LLMMessage(role="user", content="Hello")])
        assert "Invalid API key" in str(exc_info.value)
        assert len(captured) == 1

    def test_server_error_retried_then_succeeds(self, monkeypatch):
        captured = []
        install_client(
            monkeypatch,
            [MockResponse(503, None, "busy"), MockResponse(body=SUCCESS_BODY)],
            captured,
        )
        response = make_provider().chat([LLMMessage(role="user", content="Hello")])
        assert response.content == "Rails look fine."
        assert len(captured) == 2

    def test_rate_limit_exhausts_retries(self, monkeypatch):
        install_client(monkeypatch, [MockResponse(429, {"error": {"message": "quota"}})] * 3)
        provider = make_provider(max_retries=2)
        with pytest.raises(RateLimitError):
            provider.chat([LLMMessage(role="user", content="Hello")])

    def test_server_error_without_retries(self, monkeypatch):
        install_client(monkeypatch, [MockResponse(502, None, "Bad gateway")])
        with pytest.raises(ProviderUnavailableError) as exc_info:
            make_provider(max_retries=0).chat([LLMMessage(role="user", content="Hello")])
        assert "Bad gateway" in str(exc_info.value)

    def test_client_error(self, monkeypatch):
        install_client(monkeypatch, [MockResponse(400, {"error": {"message": "bad model"}})])
        with pytest.raises(LLMProviderError) as exc_info:
            make_provider().chat([LLMMessage(role="user", content="Hello")])
        assert exc_info.value.status_code == 400

    def test_no_choices(self, monkeypatch):
        install_client(monkeypatch, [MockResponse(body={"choices": []})])
        with pytest.raises(LLMProviderError):
            make_provider().chat([LLMMessage(role="user", content="Hello")])

    def test_openrouter_headers(self, monkeypatch):
        captured = []
        install_client(monkeypatch, [MockResponse(body=SUCCESS_BODY)], captured)
        provider = make_provider(OpenRouterProvider, site_url="https://lift.example", site_name="LiftRail")
        provider.chat([LLMMessage(role="user", content="Hello")])
        assert captured[0]["headers"]["HTTP-Referer"] == "https://lift.example"
        assert captured[0]["headers"]["X-Title"] == "LiftRail"

    def test_health_check(self, monkeypatch):
        install_client(monkeypatch, [MockResponse(500, None, "down")] * 4)
        assert make_provider().health_check() is False


class TestCostCalculation:
    """Tests for calculate_cost."""

    def test_known_model(self):
        provider = make_provider(DeepSeekProvider, default_model="deepseek-chat")
        usage = LLMUsage(prompt_tokens=1_000_000, completion_tokens=1_000_000, total_tokens=2_000_000)
        assert provider.calculate_cost(usage) == pytest.approx(0.14 + 0.28)

    def test_unknown_model_is_free(self):
        provider = make_provider(default_model="custom-model")
        usage = LLMUsage(prompt_tokens=100, completion_tokens=100, total_tokens=200)
        assert provider.calculate_cost(usage) == 0.0
