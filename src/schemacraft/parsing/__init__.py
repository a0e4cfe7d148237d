"""Response parsing for model output."""

from schemacraft.parsing.response import (
    DEFAULT_EXPLANATION,
    DEFAULT_SUGGESTION,
    extract_estimated_cost,
    extract_explanation,
    extract_sql,
    extract_suggestions,
    parse_response,
    render_response,
)

__all__ = [
    "DEFAULT_EXPLANATION",
    "DEFAULT_SUGGESTION",
    "extract_estimated_cost",
    "extract_explanation",
    "extract_sql",
    "extract_suggestions",
    "parse_response",
    "render_response",
]
