"""
Structured Response Parsing Module for the LiftRail AI Assistant.

Parses the JSON rail review returned by LLM providers, falling back to
the raw text when the model did not follow the requested format.

Usage:
    response = provider.chat(messages, json_mode=True)
    parsed = safe_parse_rail_review(response.content)
    if parsed.has_structure:
        print(parsed.verdict)
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import json
import logging

logger = logging.getLogger(__name__)

VALID_VERDICTS = ("SAFE", "UNSAFE", "REVIEW")


@dataclass
class RailReviewResponse:
    """Structured response from the rail review prompt.

    Attributes:
        verdict: SAFE, UNSAFE or REVIEW
        concerns: Safety or design concerns
        custom_input_notes: How imported non-standard parameters affect the result
        recommendations: Suggested changes or optimizations
        summary: 2-3 sentence overall assessment
        raw_response: Original JSON response for debugging
    """
    verdict: str
    concerns: List[str]
    custom_input_notes: List[str]
    recommendations: List[str]
    summary: str
    raw_response: Optional[Dict[str, Any]] = None
    has_structure: bool = True

    def __post_init__(self):
        self.verdict = self.verdict.strip().upper()
        if self.verdict not in VALID_VERDICTS:
            raise ValueError(f"Verdict must be one of {VALID_VERDICTS}, got {self.verdict!r}")

    def to_text(self) -> str:
        """Plain-text rendering for reports"""
        sections = [f"Verdict: {self.verdict}", self.summary]
        for title, items in (
            ("Concerns", self.concerns),
            ("Imported parameters", self.custom_input_notes),
            ("Recommendations", self.recommendations),
        ):
            if items:
                sections.append(title + ":\n" + "\n".join(f"- {item}" for item in items))
        return "\n\n".join(sections)


@dataclass
class UnstructuredResponse:
    """Fallback for unstructured AI responses.

    Attributes:
        content: Raw text content
        has_structure: Always False for this type
        parse_error: Optional error message if parsing failed
    """
    content: str
    has_structure: bool = False
    parse_error: Optional[str] = None

    def to_text(self) -> str:
        return self.content


# ============================================================================
# PARSING FUNCTIONS
# ============================================================================

def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list")
    return [str(item) for item in value]


def parse_rail_review_response(response_text: str) -> RailReviewResponse:
    """Parse rail review JSON response.

    Raises:
        ValueError: If JSON is invalid or required fields missing
    """
    try:
        data = json.loads(response_text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON response: {e}")

    if not isinstance(data, dict):
        raise ValueError("Response must be a JSON object")

    summary = data.get("summary", "")
    if not summary:
        raise ValueError("'summary' is required")

    return RailReviewResponse(
        verdict=str(data.get("verdict", "REVIEW")),
        concerns=_string_list(data, "concerns"),
        custom_input_notes=_string_list(data, "custom_input_notes"),
        recommendations=_string_list(data, "recommendations"),
        summary=str(summary),
        raw_response=data,
    )


def parse_response_with_fallback(
    response_text: str,
    parser_func: Callable[[str], RailReviewResponse],
) -> RailReviewResponse | UnstructuredResponse:
    """Parse a structured response, or wrap the raw text on failure."""
    try:
        return parser_func(response_text)
    except ValueError as e:
        logger.warning(f"Failed to parse structured response: {e}")
        logger.debug(f"Response text: {response_text[:200]}...")
        return UnstructuredResponse(
            content=response_text,
            parse_error=str(e),
        )


def extract_json_from_markdown(response_text: str) -> str:
    """Extract JSON from a ```json fenced block, if present.

    Returns the original (stripped) text when no JSON-looking block exists.
    """
    if "```json" in response_text:
        start = response_text.find("```json") + 7
        end = response_text.find("```", start)
        if end > start:
            return response_text[start:end].strip()

    if "```" in response_text:
        start = response_text.find("```") + 3
        end = response_text.find("```", start)
        if end > start:
            content = response_text[start:end].strip()
            if content.startswith("{") or content.startswith("["):
                return content

    return response_text.strip()


def safe_parse_rail_review(response_text: str) -> RailReviewResponse | UnstructuredResponse:
    json_text = extract_json_from_markdown(response_text)
    parsed = parse_response_with_fallback(json_text, parse_rail_review_response)
    if isinstance(parsed, UnstructuredResponse):
        parsed.content = response_text
    return parsed
