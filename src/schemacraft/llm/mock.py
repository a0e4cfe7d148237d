"""Deterministic response caller for demos and tests. Never touches the network."""

from __future__ import annotations

import time
from dataclasses import dataclass

from schemacraft.llm.base import ResponseCaller, notify
from schemacraft.models.generation import (
    GenerationResult,
    Progress,
    ProgressCallback,
    PromptConfig,
    PromptMode,
)
from schemacraft.parsing.response import render_response

MOCK_STEPS: tuple[Progress, ...] = (
    Progress(step_name="validation", percent_complete=10, message="Validating your input..."),
    Progress(step_name="prompt", percent_complete=25, message="Preparing AI prompt..."),
    Progress(step_name="ai_call", percent_complete=40, message="Analyzing your requirements..."),
    Progress(
        step_name="ai_processing",
        percent_complete=70,
        message="AI is generating your schema...",
    ),
    Progress(step_name="parsing", percent_complete=90, message="Processing results..."),
    Progress(step_name="complete", percent_complete=100, message="Schema generation complete!"),
)

NEW_SCHEMA_RESULT = GenerationResult(
    sql_text="""-- Generated Schema
CREATE TABLE users (
    id SERIAL PRIMARY KEY,
    email VARCHAR(255) UNIQUE NOT NULL,
    username VARCHAR(100) UNIQUE NOT NULL,
    password_hash VARCHAR(255) NOT NULL,
    bio TEXT,
    avatar_url VARCHAR(500),
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_users_email ON users(email);
CREATE INDEX idx_users_username ON users(username);

CREATE TABLE posts (
    id SERIAL PRIMARY KEY,
    user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
    title VARCHAR(500) NOT NULL,
    content TEXT NOT NULL,
    excerpt VARCHAR(1000),
    published_at TIMESTAMP,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_posts_user_id ON posts(user_id);
CREATE INDEX idx_posts_published_at ON posts(published_at);

CREATE TABLE comments (
    id SERIAL PRIMARY KEY,
    post_id INTEGER REFERENCES posts(id) ON DELETE CASCADE,
    user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
    content TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_comments_post_id ON comments(post_id);
CREATE INDEX idx_comments_user_id ON comments(user_id);""",
    explanation_text=(
        "Created a normalized blog schema with proper relationships, indexes for "
        "performance, and audit timestamps. The design follows 3NF principles while "
        "optimizing for common query patterns."
    ),
    suggestions=[
        "Added indexes on foreign keys for faster joins",
        "Used appropriate VARCHAR sizes to keep storage small",
        "Included excerpt field for efficient list queries",
        "Added proper CASCADE deletes for data integrity",
    ],
    estimated_cost="~$5-15/month for small to medium blog",
)

IMPROVED_SCHEMA_RESULT = GenerationResult(
    sql_text="""-- Improved Schema
CREATE TABLE users (
    id SERIAL PRIMARY KEY,
    email VARCHAR(255) UNIQUE NOT NULL,
    password_hash VARCHAR(255) NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_users_email ON users(email);

CREATE TABLE posts (
    id SERIAL PRIMARY KEY,
    user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
    title VARCHAR(500) NOT NULL,
    content TEXT,
    published_at TIMESTAMP,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX idx_posts_user_id ON posts(user_id);
CREATE INDEX idx_posts_published_at ON posts(published_at);""",
    explanation_text=(
        "Improved your existing schema by adding proper indexes, foreign key "
        "constraints, and optimized data types for better performance."
    ),
    suggestions=[
        "Added indexes on frequently queried columns",
        "Implemented proper foreign key relationships",
        "Optimized VARCHAR sizes based on typical usage",
        "Added timestamps for audit trails",
    ],
    estimated_cost="~$10-25/month for moderate usage",
)


def canned_result(prompt: PromptConfig) -> GenerationResult:
    """Pick the canned payload: uploaded-SQL requests get the improved schema."""
    if prompt.mode in (PromptMode.IMPROVEMENT, PromptMode.ANALYSIS):
        return IMPROVED_SCHEMA_RESULT
    return NEW_SCHEMA_RESULT


@dataclass(frozen=True)
class MockResponseCaller(ResponseCaller):
    """Walk through fixed progress steps and answer with a canned schema."""

    step_delay_seconds: float = 0.5

    def complete(
        self,
        prompt: PromptConfig,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        for step in MOCK_STEPS:
            notify(on_progress, step)
            if self.step_delay_seconds > 0:
                time.sleep(self.step_delay_seconds)
        return render_response(canned_result(prompt))
