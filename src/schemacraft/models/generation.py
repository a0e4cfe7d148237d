"""Typed payloads flowing through the schema generation pipeline."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict, Field


class PromptMode(str, Enum):
    """Prompt template selected from the shape of a generation request."""

    NEW_SCHEMA = "new_schema"
    IMPROVEMENT = "improvement"
    ANALYSIS = "analysis"


class GenerationContext(BaseModel):
    """Metadata about the uploaded file, if any."""

    model_config = ConfigDict(frozen=True)

    is_improvement: bool = False
    file_size: int | None = Field(default=None, ge=0)
    file_name: str | None = None


class GenerationInput(BaseModel):
    """A user request: free-text description and/or uploaded SQL."""

    model_config = ConfigDict(frozen=True)

    description: str | None = None
    uploaded_sql_text: str | None = None
    context_flags: GenerationContext = Field(default_factory=GenerationContext)

    @property
    def normalized_description(self) -> str:
        return (self.description or "").strip()

    @property
    def normalized_sql(self) -> str:
        return (self.uploaded_sql_text or "").strip()

    @property
    def has_description(self) -> bool:
        return bool(self.normalized_description)

    @property
    def has_uploaded_sql(self) -> bool:
        return bool(self.normalized_sql)


class PromptConfig(BaseModel):
    """System and user instructions plus sampling settings for one request."""

    model_config = ConfigDict(frozen=True)

    mode: PromptMode
    system_instruction: str
    user_instruction: str
    temperature: float = Field(ge=0.0, le=1.0)
    max_tokens: int = Field(gt=0)


class GenerationResult(BaseModel):
    """Parsed generation output rendered by the dashboard tabs."""

    model_config = ConfigDict(frozen=True)

    sql_text: str
    explanation_text: str
    suggestions: list[str] = Field(default_factory=list)
    estimated_cost: str | None = None


class Progress(BaseModel):
    """Transient progress notification emitted while a call is outstanding."""

    model_config = ConfigDict(frozen=True)

    step_name: str
    percent_complete: float = Field(ge=0, le=100)
    message: str


ProgressCallback = Callable[[Progress], None]


class InputValidationResult(BaseModel):
    """Outcome of validating a generation request; errors accumulate."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


ErrorKind = Literal["validation", "configuration", "upstream", "network"]


class GenerationOutcome(BaseModel):
    """Tagged result of one pipeline run; failures are data, not exceptions."""

    model_config = ConfigDict(frozen=True)

    success: bool
    result: GenerationResult | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    errors: list[str] = Field(default_factory=list)
    mode: PromptMode | None = None
    duration_ms: int = 0
