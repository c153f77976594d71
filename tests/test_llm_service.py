"""
Unit tests for the AIService.

Tests cover:
- Rail review request shape and structured result
- Fallbacks for provider errors, missing results and free text
- Cost tracking
- Provider health check
"""

import json
from unittest.mock import Mock

import pytest

from liftrail.ai.base_provider import BaseLLMProvider
from liftrail.ai.config import AIConfig
from liftrail.ai.llm_service import AIService
from liftrail.ai.providers import (
    LLMProviderError,
    LLMProviderType,
    LLMResponse,
    LLMUsage,
    RateLimitError,
)
from liftrail.ai.response_parser import RailReviewResponse, UnstructuredResponse
from liftrail.core.data_models import RailProject


REVIEW_JSON = json.dumps({
    "verdict": "SAFE",
    "concerns": [],
    "custom_input_notes": ["Seismic zone 2 may need bracket checks"],
    "recommendations": ["None required"],
    "summary": "All checks pass with margin.",
})


def make_response(content):
    return LLMResponse(
        content=content,
        model="gemini-2.5-flash",
        provider=LLMProviderType.GEMINI,
        usage=LLMUsage(prompt_tokens=500, completion_tokens=100, total_tokens=600),
    )


@pytest.fixture
def provider():
    mock = Mock(spec=BaseLLMProvider)
    mock.calculate_cost.return_value = 0.0004
    return mock


@pytest.fixture
def service(provider):
    config = AIConfig(provider_type=LLMProviderType.GEMINI, api_key="test-key", response_language="Vietnamese")
    return AIService(config, provider=provider)


class TestRailReview:
    """Tests for AIService.get_rail_review."""

    def test_structured_review(self, service, provider, analysed_project):
        provider.chat.return_value = make_response(REVIEW_JSON)

        review = service.get_rail_review(analysed_project)

        assert isinstance(review, RailReviewResponse)
        assert review.verdict == "SAFE"
        kwargs = provider.chat.call_args.kwargs
        assert kwargs["json_mode"] is True
        assert kwargs["max_tokens"] == 800
        messages = kwargs["messages"]
        assert [m.role for m in messages] == ["system", "user"]
        assert "Answer in Vietnamese." in messages[1].content

    def test_results_not_modified(self, service, provider, analysed_project):
        before = analysed_project.to_dict()
        provider.chat.return_value = make_response(REVIEW_JSON)
        service.get_rail_review(analysed_project)
        assert analysed_project.to_dict() == before

    def test_free_text_falls_back(self, service, provider, analysed_project):
        provider.chat.return_value = make_response("Looks fine to me.")
        review = service.get_rail_review(analysed_project)
        assert isinstance(review, UnstructuredResponse)
        assert review.content == "Looks fine to me."

    def test_provider_error(self, service, provider, analysed_project):
        provider.chat.side_effect = RateLimitError("quota", provider=LLMProviderType.GEMINI, status_code=429)
        review = service.get_rail_review(analysed_project)
        assert isinstance(review, UnstructuredResponse)
        assert review.content.startswith("Error:")
        assert "quota" in review.parse_error

    def test_without_results(self, service, provider):
        review = service.get_rail_review(RailProject())
        assert isinstance(review, UnstructuredResponse)
        assert review.content.startswith("Error:")
        provider.chat.assert_not_called()

    def test_cost_tracked(self, service, provider, analysed_project):
        provider.chat.return_value = make_response(REVIEW_JSON)
        service.get_rail_review(analysed_project)
        provider.calculate_cost.assert_called_once()

    def test_cost_tracking_disabled(self, provider, analysed_project):
        config = AIConfig(provider_type=LLMProviderType.GEMINI, api_key="k", track_costs=False)
        provider.chat.return_value = make_response(REVIEW_JSON)
        AIService(config, provider=provider).get_rail_review(analysed_project)
        provider.calculate_cost.assert_not_called()


class TestHealthCheck:
    """Tests for AIService.health_check."""

    def test_health_check(self, service, provider):
        provider.health_check.return_value = True
        assert service.health_check() is True
