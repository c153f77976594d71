"""
AI Service Module for LiftRail.

High-level service interface for the advisory rail review, integrating
providers, prompts and response parsing. Commentary only: the service
never changes calculation results.

Usage:
    from liftrail.ai import AIService

    service = AIService.from_env()
    review = service.get_rail_review(project)
    project.ai_review = review.to_text()
"""

from typing import Optional
import logging

from ..core.data_models import RailProject
from .base_provider import BaseLLMProvider
from .config import AIConfig
from .providers import LLMMessage, LLMResponse, LLMProviderError
from .prompts import (
    PromptType,
    get_template,
    create_rail_review_prompt,
)
from .response_parser import (
    RailReviewResponse,
    UnstructuredResponse,
    safe_parse_rail_review,
)

logger = logging.getLogger(__name__)


class AIService:
    """High-level AI service for guide rail review.

    Attributes:
        config: AI configuration
        provider: LLM provider instance
    """

    def __init__(self, config: AIConfig, provider: Optional[BaseLLMProvider] = None):
        self.config = config
        self.provider = provider or config.create_provider()
        logger.info(f"AIService initialized with {config.provider_type.value} provider")

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AIService":
        return cls(AIConfig.from_env(env_file))

    def _log_usage(self, task: str, response: LLMResponse) -> None:
        if self.config.track_costs and response.usage:
            cost = self.provider.calculate_cost(response.usage, response.model)
            logger.info(
                f"{task}: {response.usage.total_tokens} tokens, ${cost:.6f} cost"
            )

    def get_rail_review(self, project: RailProject) -> RailReviewResponse | UnstructuredResponse:
        """Get an AI review of an analysed project.

        Provider failures are logged and returned as an UnstructuredResponse
        carrying the error, so callers can always display something.
        """
        try:
            system_prompt, user_prompt = create_rail_review_prompt(
                project, language=self.config.response_language,
            )
        except ValueError as e:
            logger.error(f"Rail review not possible: {e}")
            return UnstructuredResponse(content=f"Error: {e}", parse_error=str(e))

        template = get_template(PromptType.RAIL_REVIEW)
        messages = [
            LLMMessage(role="system", content=system_prompt),
            LLMMessage(role="user", content=user_prompt),
        ]

        try:
            response = self.provider.chat(
                messages=messages,
                temperature=template.temperature,
                max_tokens=template.max_tokens,
                json_mode=template.json_mode,
            )
        except LLMProviderError as e:
            logger.error(f"Rail review failed: {e}")
            return UnstructuredResponse(content=f"Error: {e}", parse_error=str(e))

        self._log_usage("Rail review", response)
        return safe_parse_rail_review(response.content)

    def health_check(self) -> bool:
        return self.provider.health_check()
