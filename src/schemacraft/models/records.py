"""Saved schema projects and their generation history."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from schemacraft.models.generation import GenerationInput, GenerationResult, PromptConfig

COMMON_TAGS = (
    "blog",
    "ecommerce",
    "social",
    "saas",
    "analytics",
    "users",
    "posts",
    "orders",
    "products",
    "auth",
)


class InputType(str, Enum):
    PROMPT = "prompt"
    SQL_UPLOAD = "sql_upload"
    MIXED = "mixed"


class NewSchemaProject(BaseModel):
    """Fields supplied when a project is first saved."""

    user_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    input_type: InputType
    original_prompt: str | None = None
    uploaded_sql: str | None = None
    generated_sql: str
    ai_explanation: str | None = None
    ai_suggestions: str | None = None
    tags: list[str] = Field(default_factory=list)
    is_favorite: bool = False


class SchemaProjectUpdate(BaseModel):
    """Partial update; unset fields are left untouched."""

    name: str | None = None
    description: str | None = None
    generated_sql: str | None = None
    ai_explanation: str | None = None
    ai_suggestions: str | None = None
    tags: list[str] | None = None
    is_favorite: bool | None = None


class SchemaProject(NewSchemaProject):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime
    updated_at: datetime


class NewGenerationHistory(BaseModel):
    project_id: UUID
    prompt_used: str
    sql_generated: str
    ai_model: str
    generation_time_ms: int = Field(ge=0)
    tokens_used: int | None = None


class GenerationHistory(NewGenerationHistory):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    created_at: datetime


class ProjectWithHistory(SchemaProject):
    generation_history: list[GenerationHistory] = Field(default_factory=list)


def infer_input_type(generation_input: GenerationInput) -> InputType:
    if generation_input.has_uploaded_sql and generation_input.has_description:
        return InputType.MIXED
    if generation_input.has_uploaded_sql:
        return InputType.SQL_UPLOAD
    return InputType.PROMPT


def generate_project_name(
    prompt: str | None = None,
    file_name: str | None = None,
    *,
    today: date | None = None,
) -> str:
    """Name a project from the first words of its prompt or its file name."""
    if prompt and prompt.strip():
        words = " ".join(prompt.split()[:4])
        return words[:30] + "..." if len(words) > 30 else words
    if file_name:
        return f"Schema from {file_name}"
    return f"Untitled Schema {(today or date.today()).isoformat()}"


def extract_tags(prompt: str | None) -> list[str]:
    lowered = (prompt or "").lower()
    return [tag for tag in COMMON_TAGS if tag in lowered]


def format_project_preview(project: NewSchemaProject) -> str:
    if project.original_prompt:
        prompt = project.original_prompt
        return prompt[:100] + "..." if len(prompt) > 100 else prompt
    if project.uploaded_sql:
        return "SQL file uploaded"
    return "No description available"


def build_project_record(
    owner_id: str,
    generation_input: GenerationInput,
    result: GenerationResult,
    *,
    name: str | None = None,
) -> NewSchemaProject:
    """Map a finished generation onto a project row."""
    description = generation_input.normalized_description or None
    return NewSchemaProject(
        user_id=owner_id,
        name=name
        or generate_project_name(description, generation_input.context_flags.file_name),
        description=description,
        input_type=infer_input_type(generation_input),
        original_prompt=description,
        uploaded_sql=generation_input.normalized_sql or None,
        generated_sql=result.sql_text,
        ai_explanation=result.explanation_text,
        ai_suggestions="\n".join(result.suggestions),
        tags=extract_tags(description),
    )


def build_history_record(
    project_id: UUID,
    prompt: PromptConfig,
    result: GenerationResult,
    *,
    ai_model: str,
    generation_time_ms: int,
    tokens_used: int | None = None,
) -> NewGenerationHistory:
    return NewGenerationHistory(
        project_id=project_id,
        prompt_used=prompt.user_instruction,
        sql_generated=result.sql_text,
        ai_model=ai_model,
        generation_time_ms=generation_time_ms,
        tokens_used=tokens_used,
    )
