"""Lenient extraction of SQL, explanation, suggestions and cost from model output.

The upstream text format is a convention requested in the prompt, not a
contract, so every field has a fallback and parsing never raises.
"""

from __future__ import annotations

import logging
import re

from schemacraft.models.generation import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_EXPLANATION = "Schema generated successfully"
DEFAULT_SUGGESTION = "Schema is optimized for your requirements"

_SQL_BLOCK = re.compile(r"```[ \t]*sql[ \t]*\r?\n(.*?)```", re.IGNORECASE | re.DOTALL)
_ANY_FENCED_BLOCK = re.compile(r"```.*?(?:```|\Z)", re.DOTALL)

_EXPLANATION_MARKER = re.compile(
    r"^[ \t]*#{1,6}[^\n]*\bexplanation\b[^\n]*$"
    r"|\**\bexplanation\b[^\n:]{0,40}:\**",
    re.IGNORECASE | re.MULTILINE,
)
_SUGGESTIONS_MARKER = re.compile(
    r"^[ \t]*#{1,6}[^\n]*\bsuggestions?\b[^\n]*$"
    r"|\**\bsuggestions?\b[^\n:]{0,40}:\**",
    re.IGNORECASE | re.MULTILINE,
)
_COST_MARKER = re.compile(
    r"^[ \t]*(?:#{1,6}[ \t]*)?\**[ \t]*"
    r"(?:estimated\b[^\n:*]{0,20}?)?cost\b[^\n:*]{0,20}"
    r"\**[ \t]*(?::|-[ \t])\**[ \t]*(?P<rest>[^\n]*)"
    r"|^[ \t]*#{1,6}[^\n]*\bcost\b[^\n]*$",
    re.IGNORECASE | re.MULTILINE,
)
_SECTION_BREAK = re.compile(
    r"^[ \t]*(?:#{1,6}[ \t]|\*\*[^*\n]+\*\*[ \t]*:?[ \t]*$)",
    re.MULTILINE,
)
_LIST_SEPARATOR = re.compile(r"(?:^|\n)[ \t]*(?:\d+[.)]|[-*•])[ \t]+")


def extract_sql(raw: str) -> str:
    """Return the first ```sql block, or the whole text when there is none."""
    match = _SQL_BLOCK.search(raw)
    if match is None:
        return raw
    return match.group(1).strip()


def _prose(raw: str) -> str:
    # Markers inside code blocks (e.g. SQL comments) are not section headers.
    return _ANY_FENCED_BLOCK.sub("", raw)


def extract_explanation(raw: str) -> str:
    text = _prose(raw)
    marker = _EXPLANATION_MARKER.search(text)
    if marker is None:
        return ""

    body = text[marker.end():]
    end = _SUGGESTIONS_MARKER.search(body)
    if end is not None:
        body = body[: end.start()]
    return body.strip()


def _find_cost_marker(text: str) -> re.Match[str] | None:
    # Cost lines only count at the start of a line; "Estimated Cost" wins.
    markers = list(_COST_MARKER.finditer(text))
    for marker in markers:
        if "estimated" in marker.group(0).lower():
            return marker
    return markers[0] if markers else None


def _strip_emphasis(value: str) -> str:
    return value.strip().strip("*").strip()


def extract_suggestions(raw: str) -> list[str]:
    text = _prose(raw)
    marker = _SUGGESTIONS_MARKER.search(text)
    if marker is None:
        return []

    body = text[marker.end():]
    stops = [
        body.rfind("\n", 0, match.start()) + 1
        for match in (_SECTION_BREAK.search(body), _COST_MARKER.search(body))
        if match is not None
    ]
    if stops:
        body = body[: min(stops)]

    return [
        item
        for item in (_strip_emphasis(part) for part in _LIST_SEPARATOR.split(body))
        if item
    ]


def extract_estimated_cost(raw: str) -> str | None:
    text = _prose(raw)
    marker = _find_cost_marker(text)
    if marker is None:
        return None

    rest = _strip_emphasis(marker.group("rest") or "")
    if rest:
        return rest

    # Marker on its own line: the estimate is on the next non-blank line.
    for line in text[marker.end():].splitlines():
        candidate = _strip_emphasis(line)
        if candidate:
            return candidate
    return None


def parse_response(raw: str) -> GenerationResult:
    """Split raw model output into the fields shown on the dashboard."""
    raw = raw or ""
    sql_text = extract_sql(raw)
    if sql_text is raw:
        logger.debug("No ```sql block in response; using the full text as SQL.")

    explanation = extract_explanation(raw)
    suggestions = extract_suggestions(raw)
    if not suggestions:
        logger.debug("No suggestions found in response; using the default.")

    return GenerationResult(
        sql_text=sql_text,
        explanation_text=explanation or DEFAULT_EXPLANATION,
        suggestions=suggestions or [DEFAULT_SUGGESTION],
        estimated_cost=extract_estimated_cost(raw),
    )


def render_response(result: GenerationResult) -> str:
    """Write a result in the response format the prompts ask the model for."""
    parts = [
        f"```sql\n{result.sql_text}\n```",
        f"## Design Explanation\n\n{result.explanation_text}",
        "**Suggestions:**\n" + "\n".join(f"- {item}" for item in result.suggestions),
    ]
    if result.estimated_cost:
        parts.append(f"**Estimated Cost:** {result.estimated_cost}")
    return "\n\n".join(parts) + "\n"
