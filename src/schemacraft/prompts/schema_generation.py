"""Prompt builders for new-schema, improvement and analysis requests."""

from __future__ import annotations

from schemacraft.models.generation import GenerationInput, PromptConfig, PromptMode

SYSTEM_PROMPT = """You are an expert database architect and SQL specialist. Your role is to generate optimized, production-ready database schemas based on user requirements.

Core Responsibilities:
- Generate clean, normalized database schemas (typically 3NF unless specified otherwise)
- Create proper relationships with foreign keys and constraints
- Add appropriate indexes for performance optimization
- Choose data types that match the requirements
- Provide cost-effective solutions
- Follow database best practices and naming conventions

Output Requirements:
- Always respond with valid SQL DDL statements
- Include CREATE TABLE statements with proper constraints
- Add indexes where beneficial for performance
- Use snake_case for table and column names
- Include comments explaining complex relationships
- Provide a brief explanation of design decisions

Schema Optimization:
- Pick the normalization level that fits the use case
- Index foreign keys and frequently queried columns
- Use data types that minimize storage costs
- Consider query patterns when designing relationships
- Include created_at/updated_at timestamps where relevant

RESPONSE FORMAT EXAMPLE:

```sql
-- Blog System Database Schema

-- Users table for authentication and profiles
CREATE TABLE users (
    id SERIAL PRIMARY KEY,
    email VARCHAR(255) UNIQUE NOT NULL,
    username VARCHAR(100) UNIQUE NOT NULL,
    password_hash VARCHAR(255) NOT NULL,
    bio TEXT,
    is_active BOOLEAN DEFAULT true,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

-- Posts table for blog content
CREATE TABLE posts (
    id SERIAL PRIMARY KEY,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    title VARCHAR(500) NOT NULL,
    slug VARCHAR(500) UNIQUE NOT NULL,
    content TEXT NOT NULL,
    status VARCHAR(20) DEFAULT 'draft' CHECK (status IN ('draft', 'published', 'archived')),
    published_at TIMESTAMP,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_posts_user_id ON posts(user_id);
CREATE INDEX idx_posts_status_published ON posts(status, published_at) WHERE status = 'published';
```

## Design Explanation

This blog schema follows 3NF while optimizing for the read-heavy workload of a
blog platform. Posts carry a slug for SEO-friendly URLs and a status column for
the editorial workflow; the composite (status, published_at) index serves the
common "published posts" listing.

**Suggestions:**
- Add a full-text search index on post content if search is needed
- Use soft deletes for posts if content recovery matters
- Consider partitioning once the posts table exceeds a few million rows

**Estimated Cost:** ~$8-20/month for a small to medium blog on managed PostgreSQL

Always follow this structure: SQL code block, then explanation, then suggestions, then cost estimate."""

_RESPONSE_FORMAT_REMINDER = (
    "Please structure your response exactly like the example format in your system prompt:\n"
    "- Start with a ```sql code block containing all CREATE TABLE and CREATE INDEX statements\n"
    '- Follow with a "## Design Explanation" section explaining your decisions\n'
    '- Include a "**Suggestions:**" section with actionable recommendations as a bulleted list\n'
    '- End with "**Estimated Cost:**" for cloud hosting on a single line'
)

_MODE_SETTINGS: dict[PromptMode, tuple[float, int]] = {
    PromptMode.NEW_SCHEMA: (0.3, 2500),
    PromptMode.IMPROVEMENT: (0.2, 3000),
    PromptMode.ANALYSIS: (0.3, 3500),
}


def select_prompt_mode(generation_input: GenerationInput) -> PromptMode:
    """Pick the template for a request from which fields are present."""
    if generation_input.has_uploaded_sql and generation_input.has_description:
        return PromptMode.IMPROVEMENT
    if generation_input.has_uploaded_sql:
        return PromptMode.ANALYSIS
    return PromptMode.NEW_SCHEMA


def _prompt_config(mode: PromptMode, user_prompt: str) -> PromptConfig:
    temperature, max_tokens = _MODE_SETTINGS[mode]
    return PromptConfig(
        mode=mode,
        system_instruction=SYSTEM_PROMPT,
        user_instruction=user_prompt,
        temperature=temperature,
        max_tokens=max_tokens,
    )


def build_new_schema_prompt(generation_input: GenerationInput) -> PromptConfig:
    """Prompt for designing a schema from a description alone."""
    user_prompt = (
        "Create a database schema based on this description:\n\n"
        f'"{generation_input.normalized_description}"\n\n'
        "Requirements:\n"
        "1. Generate complete SQL DDL statements with proper constraints\n"
        "2. Add strategic indexes for performance optimization\n"
        "3. Follow 3NF normalization unless the use case requires otherwise\n"
        "4. Include audit timestamps (created_at, updated_at)\n"
        "5. Use appropriate data types and sizes\n"
        "6. Add meaningful comments for complex relationships\n\n"
        f"{_RESPONSE_FORMAT_REMINDER}\n\n"
        "Focus on a production-ready schema that balances performance, "
        "maintainability and cost efficiency."
    )
    return _prompt_config(PromptMode.NEW_SCHEMA, user_prompt)


def build_improvement_prompt(generation_input: GenerationInput) -> PromptConfig:
    """Prompt for improving uploaded SQL according to the user's description."""
    file_line = ""
    if generation_input.context_flags.file_name:
        file_line = f"Source file: {generation_input.context_flags.file_name}\n\n"

    user_prompt = (
        "Analyze and improve this existing SQL schema:\n\n"
        f"{file_line}"
        f"```sql\n{generation_input.normalized_sql}\n```\n\n"
        "Improvement requirements:\n"
        f'"{generation_input.normalized_description}"\n\n'
        "Please analyze the existing schema and provide improvements:\n"
        "1. Add missing indexes for performance\n"
        "2. Improve data types and constraints\n"
        "3. Fix normalization issues\n"
        "4. Add proper foreign key relationships\n"
        "5. Include audit timestamps if missing\n\n"
        "Start with a ```sql code block holding the complete improved DDL, with "
        "comments highlighting your changes. Then add a "
        '"## Explanation" section listing the issues found in the original schema '
        "and the key improvements made (performance, data integrity, normalization, "
        'best practices), a "**Suggestions:**" bulleted list of further optimizations, '
        'and a single "**Estimated Cost:**" line comparing original and improved hosting costs.\n\n'
        "Focus on maintaining data integrity while improving performance and maintainability."
    )
    return _prompt_config(PromptMode.IMPROVEMENT, user_prompt)


def build_analysis_prompt(generation_input: GenerationInput) -> PromptConfig:
    """Prompt for reviewing uploaded SQL when no description was given."""
    file_line = ""
    if generation_input.context_flags.file_name:
        file_line = f"Source file: {generation_input.context_flags.file_name}\n\n"

    user_prompt = (
        "Analyze this database schema and provide comprehensive improvement "
        "recommendations:\n\n"
        f"{file_line}"
        f"```sql\n{generation_input.normalized_sql}\n```\n\n"
        "Please provide a thorough analysis structured as follows:\n\n"
        "```sql\n"
        "-- OPTIMIZED SCHEMA\n"
        "-- Comments explaining each improvement\n"
        "[The improved SQL DDL with all your enhancements]\n"
        "```\n\n"
        "## Schema Analysis Explanation\n\n"
        "- What this schema appears to be designed for\n"
        "- The main entities and relationships and the current normalization level\n"
        "- Performance bottlenecks (missing indexes, inefficient structures)\n"
        "- Data integrity concerns (missing constraints, weak relationships)\n"
        "- Normalization problems and naming inconsistencies\n"
        "- The indexes, constraints and type changes you made, and why\n\n"
        "**Suggestions:**\n"
        "- Scaling considerations\n"
        "- Monitoring and maintenance recommendations\n\n"
        "**Estimated Cost:** hosting costs and performance impact of the improvements, on one line"
    )
    return _prompt_config(PromptMode.ANALYSIS, user_prompt)


_BUILDERS = {
    PromptMode.NEW_SCHEMA: build_new_schema_prompt,
    PromptMode.IMPROVEMENT: build_improvement_prompt,
    PromptMode.ANALYSIS: build_analysis_prompt,
}


def build_prompt(generation_input: GenerationInput) -> PromptConfig:
    """Build the prompt for whichever mode the request selects."""
    return _BUILDERS[select_prompt_mode(generation_input)](generation_input)
