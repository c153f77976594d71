"""
Prompt Engineering Module for the LiftRail AI Assistant.

Prompt templates for guide rail review tasks. Prompts target:
- EN 81-20/50 lift guide rail verification
- Concise, practical engineering commentary
- JSON-structured outputs where applicable
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from ..core.constants import Constants, DEFAULT_CONSTANTS
from ..core.data_models import RailProject


class PromptType(Enum):
    """Types of prompts for different AI assistant tasks."""
    RAIL_REVIEW = "rail_review"


# ============================================================================
# SYSTEM PROMPTS
# ============================================================================

SYSTEM_PROMPT_BASE = """You are an expert lift (elevator) engineer specializing in guide rail design to EN 81-20 and EN 81-50.

Your expertise includes:
- Guide rail bending, deflection and buckling verification
- Safety gear operation and impact factors
- Rail bracket spacing and rail profile selection
- Counterweight guidance

Guidelines:
- Cite relevant EN 81-50 clauses when applicable
- Keep responses focused and concise
- Flag critical safety concerns immediately
- Provide specific, actionable recommendations
- Never claim the calculation is code-certified; it is a preliminary check"""

SYSTEM_PROMPT_RAIL_REVIEW = SYSTEM_PROMPT_BASE + """

For rail review tasks:
- Judge whether the installation is safe based on the results and limits
- Explain how any non-standard imported parameters (wind pressure, seismic
  zone, extra masses...) should influence the result, even though the
  calculator did not account for them
- If a check fails, propose concrete changes (larger rail, denser brackets)
- If all checks pass, comment on possible optimization"""


# ============================================================================
# PROMPT TEMPLATES
# ============================================================================

@dataclass
class PromptTemplate:
    """A prompt template with variable substitution.

    Attributes:
        name: Template identifier
        prompt_type: Type of prompt
        template: Template string with {variables} for substitution
        system_prompt: System prompt to use with this template
        max_tokens: Maximum response tokens
        temperature: Sampling temperature
        json_mode: Request JSON output
    """
    name: str
    prompt_type: PromptType
    template: str
    system_prompt: str
    max_tokens: int = 300
    temperature: float = 0.7
    json_mode: bool = False

    def format(self, **kwargs) -> str:
        return self.template.format(**kwargs)


RAIL_REVIEW_TEMPLATE = PromptTemplate(
    name="rail_review",
    prompt_type=PromptType.RAIL_REVIEW,
    system_prompt=SYSTEM_PROMPT_RAIL_REVIEW,
    template="""Analyze the following guide rail calculation. Answer in {language}.

**Standard Inputs:**
- Empty car mass P: {P} kg
- Rated load Q: {Q} kg
- Counterweight mass Mctw: {Mctw} kg
- Bracket distance L: {L} mm
- Car guide shoe distance h: {h_k} mm
- Number of rails: {n_rails}
- Car rail: {car_rail}
- Counterweight rail: {cwt_rail}

**Extra data imported from the spreadsheet:**
{custom_inputs}

**Calculation Results:**
- Max stress (safety gear): {sigma_safety:.2f} MPa (limit: {sigma_perm_safety} MPa)
- Max stress (normal running): {sigma_normal:.2f} MPa (limit: {sigma_perm_normal} MPa)
- Max stress (counterweight): {sigma_cwt:.2f} MPa (limit: {sigma_perm_normal} MPa)
- Max deflection: {deflection:.2f} mm (limit: {deflection_perm} mm)
- Slenderness λ: {slenderness:.1f}, buckling stress: {sigma_buckling:.2f} MPa
- Overall status: {status}

Format response in JSON:
{{
  "verdict": "<SAFE | UNSAFE | REVIEW>",
  "concerns": ["<concern 1>", "<concern 2>", ...],
  "custom_input_notes": ["<how an imported parameter affects the result>", ...],
  "recommendations": ["<rec 1>", "<rec 2>", ...],
  "summary": "<2-3 sentence overall assessment>"
}}""",
    json_mode=True,
    max_tokens=800,
    temperature=0.5,
)

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_template(prompt_type: PromptType) -> PromptTemplate:
    """Get prompt template by type.

    Raises:
        ValueError: If prompt type not found
    """
    templates = {
        PromptType.RAIL_REVIEW: RAIL_REVIEW_TEMPLATE,
    }

    template = templates.get(prompt_type)
    if not template:
        raise ValueError(f"No template found for prompt type: {prompt_type}")
    return template


def format_custom_inputs(project: RailProject) -> str:
    if not project.custom_inputs:
        return "- No extra data"
    return "\n".join(f"- {key}: {value}" for key, value in project.custom_inputs.items())


def create_rail_review_prompt(
    project: RailProject,
    language: str = "English",
    constants: Constants = DEFAULT_CONSTANTS,
) -> Tuple[str, str]:
    """Create the rail review prompt for an analysed project.

    Returns:
        Tuple of (system_prompt, user_prompt)

    Raises:
        ValueError: If the project has no results yet
    """
    if not project.has_results:
        raise ValueError("Run the rail analysis before requesting a review")

    template = get_template(PromptType.RAIL_REVIEW)
    inputs = project.inputs
    safety = project.safety_gear_check.result
    normal = project.normal_check.result

    user_prompt = template.format(
        language=language,
        P=inputs.P,
        Q=inputs.Q,
        Mctw=inputs.Mctw,
        L=inputs.L,
        h_k=inputs.h_k,
        n_rails=inputs.n_rails,
        car_rail=project.car_rail,
        cwt_rail=project.cwt_rail,
        custom_inputs=format_custom_inputs(project),
        sigma_safety=safety.sigma_m,
        sigma_normal=normal.sigma_m,
        sigma_cwt=project.counterweight_check.result.sigma_m,
        sigma_perm_safety=constants.sigma_perm_safety,
        sigma_perm_normal=constants.sigma_perm_normal,
        deflection=normal.max_deflection,
        deflection_perm=constants.deflection_perm,
        slenderness=safety.slenderness,
        sigma_buckling=safety.sigma_buckling,
        status=project.overall_status,
    )
    return (template.system_prompt, user_prompt)
