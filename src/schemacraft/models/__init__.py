"""Typed models shared across schemacraft."""

from schemacraft.models.generation import (
    GenerationContext,
    GenerationInput,
    GenerationOutcome,
    GenerationResult,
    InputValidationResult,
    Progress,
    ProgressCallback,
    PromptConfig,
    PromptMode,
)

__all__ = [
    "GenerationContext",
    "GenerationInput",
    "GenerationOutcome",
    "GenerationResult",
    "InputValidationResult",
    "Progress",
    "ProgressCallback",
    "PromptConfig",
    "PromptMode",
]
