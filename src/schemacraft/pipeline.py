"""End-to-end schema generation: validate, build prompt, call, parse."""

from __future__ import annotations

import logging
import time

from schemacraft.config import ConfigurationError
from schemacraft.llm.base import LLMError, NetworkError, ResponseCaller
from schemacraft.models.generation import (
    ErrorKind,
    GenerationInput,
    GenerationOutcome,
    ProgressCallback,
    PromptMode,
)
from schemacraft.parsing.response import parse_response
from schemacraft.prompts.schema_generation import build_prompt
from schemacraft.prompts.validation import validate_generation_input

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def generate_schema(
    generation_input: GenerationInput,
    caller: ResponseCaller,
    on_progress: ProgressCallback | None = None,
) -> GenerationOutcome:
    """Run one generation request and return a tagged outcome.

    Validation failures return before any call is made. Caller failures are
    reported in the outcome rather than raised, so a front end can always
    render a message. Progress notifications come from the caller unchanged.
    """
    started = time.perf_counter()

    validation = validate_generation_input(generation_input)
    if not validation.is_valid:
        logger.info("Generation input rejected: %s", "; ".join(validation.errors))
        return GenerationOutcome(
            success=False,
            error=", ".join(validation.errors),
            error_kind="validation",
            errors=validation.errors,
            duration_ms=_elapsed_ms(started),
        )

    prompt = build_prompt(generation_input)
    logger.debug(
        "Built %s prompt (%d chars).", prompt.mode.value, len(prompt.user_instruction)
    )

    try:
        raw = caller.complete(prompt, on_progress)
    except ConfigurationError as exc:
        return _failure(exc, "configuration", prompt.mode, started)
    except NetworkError as exc:
        return _failure(exc, "network", prompt.mode, started)
    except LLMError as exc:
        return _failure(exc, "upstream", prompt.mode, started)

    result = parse_response(raw)
    duration_ms = _elapsed_ms(started)
    logger.info("Generated %s schema in %d ms.", prompt.mode.value, duration_ms)
    return GenerationOutcome(
        success=True,
        result=result,
        mode=prompt.mode,
        duration_ms=duration_ms,
    )


def _failure(
    exc: Exception,
    kind: ErrorKind,
    mode: PromptMode,
    started: float,
) -> GenerationOutcome:
    logger.warning("Schema generation failed (%s): %s", kind, exc)
    return GenerationOutcome(
        success=False,
        error=str(exc),
        error_kind=kind,
        errors=[str(exc)],
        mode=mode,
        duration_ms=_elapsed_ms(started),
    )
