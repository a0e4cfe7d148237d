"""Prompt builders and input validation for schemacraft."""

from schemacraft.prompts.examples import EXAMPLE_PROMPTS
from schemacraft.prompts.schema_generation import (
    SYSTEM_PROMPT,
    build_analysis_prompt,
    build_improvement_prompt,
    build_new_schema_prompt,
    build_prompt,
    select_prompt_mode,
)
from schemacraft.prompts.validation import (
    InputValidationError,
    ensure_valid_input,
    validate_generation_input,
)

__all__ = [
    "EXAMPLE_PROMPTS",
    "SYSTEM_PROMPT",
    "InputValidationError",
    "build_analysis_prompt",
    "build_improvement_prompt",
    "build_new_schema_prompt",
    "build_prompt",
    "ensure_valid_input",
    "select_prompt_mode",
    "validate_generation_input",
]
