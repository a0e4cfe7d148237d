"""Input rules checked before any prompt is sent."""

from __future__ import annotations

import re

from schemacraft.models.generation import GenerationInput, InputValidationResult

MIN_DESCRIPTION_LENGTH = 10
MAX_DESCRIPTION_LENGTH = 2000
MIN_SQL_LENGTH = 20
MAX_SQL_LENGTH = 50_000

_SQL_KEYWORD_PATTERN = re.compile(
    r"\b(create|alter|table|select|insert|update|delete|drop|index|references|"
    r"primary|foreign|constraint|view|with)\b",
    re.IGNORECASE,
)


class InputValidationError(ValueError):
    """Raised when a generation request fails the input rules."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__(", ".join(errors))
        self.errors = list(errors)


def validate_generation_input(generation_input: GenerationInput) -> InputValidationResult:
    """Check every rule and report all violations together.

    Uploaded SQL must contain at least one SQL keyword. This rejects some
    long enough files that carry no DDL or DML at all, and lets a too-short
    non-SQL upload report two problems instead of one.
    """
    errors: list[str] = []
    description = generation_input.normalized_description
    sql_text = generation_input.normalized_sql

    if not description and not sql_text:
        errors.append("Please provide either a description or upload an SQL file")

    if description and len(description) < MIN_DESCRIPTION_LENGTH:
        errors.append("Description is too short. Please provide more details")

    if len(description) > MAX_DESCRIPTION_LENGTH:
        errors.append(
            "Description is too long. Please keep it under "
            f"{MAX_DESCRIPTION_LENGTH} characters"
        )

    if sql_text:
        if len(sql_text) < MIN_SQL_LENGTH:
            errors.append("SQL file is too short to be a valid schema")
        if len(sql_text) > MAX_SQL_LENGTH:
            errors.append("SQL file is too large. Please use files under 50KB")
        if not _SQL_KEYWORD_PATTERN.search(sql_text):
            errors.append("Uploaded file does not look like SQL")

    return InputValidationResult(is_valid=not errors, errors=errors)


def ensure_valid_input(generation_input: GenerationInput) -> None:
    """Validate a request and raise when any rule is violated."""
    validation = validate_generation_input(generation_input)
    if not validation.is_valid:
        raise InputValidationError(validation.errors)
