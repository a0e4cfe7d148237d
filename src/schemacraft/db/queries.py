"""SQL statements used by the schema project store."""

CREATE_TABLES_DDL = """
CREATE TABLE IF NOT EXISTS schema_projects (
  id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
  user_id TEXT NOT NULL,
  name TEXT NOT NULL,
  description TEXT,
  input_type TEXT NOT NULL CHECK (input_type IN ('prompt', 'sql_upload', 'mixed')),
  original_prompt TEXT,
  uploaded_sql TEXT,
  generated_sql TEXT NOT NULL,
  ai_explanation TEXT,
  ai_suggestions TEXT,
  tags TEXT[] NOT NULL DEFAULT '{}',
  is_favorite BOOLEAN NOT NULL DEFAULT false,
  created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
  updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_schema_projects_user_updated
  ON schema_projects (user_id, updated_at DESC);

CREATE TABLE IF NOT EXISTS generation_history (
  id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
  project_id UUID NOT NULL REFERENCES schema_projects(id) ON DELETE CASCADE,
  prompt_used TEXT NOT NULL,
  sql_generated TEXT NOT NULL,
  ai_model TEXT NOT NULL,
  generation_time_ms INTEGER NOT NULL,
  tokens_used INTEGER,
  created_at TIMESTAMPTZ NOT NULL DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_generation_history_project
  ON generation_history (project_id, created_at);
"""

PROJECT_COLUMNS = (
    "id, user_id, name, description, input_type, original_prompt, uploaded_sql, "
    "generated_sql, ai_explanation, ai_suggestions, tags, is_favorite, "
    "created_at, updated_at"
)

LIST_PROJECTS_QUERY = f"""
SELECT {PROJECT_COLUMNS}
FROM schema_projects
WHERE user_id = %(user_id)s
ORDER BY updated_at DESC;
"""

GET_PROJECT_QUERY = f"""
SELECT {PROJECT_COLUMNS}
FROM schema_projects
WHERE id = %(id)s;
"""

SEARCH_PROJECTS_QUERY = f"""
SELECT {PROJECT_COLUMNS}
FROM schema_projects
WHERE user_id = %(user_id)s
  AND (
    name ILIKE %(pattern)s
    OR description ILIKE %(pattern)s
    OR %(term)s = ANY(tags)
  )
ORDER BY updated_at DESC;
"""

INSERT_PROJECT_QUERY = f"""
INSERT INTO schema_projects (
  user_id, name, description, input_type, original_prompt, uploaded_sql,
  generated_sql, ai_explanation, ai_suggestions, tags, is_favorite
)
VALUES (
  %(user_id)s, %(name)s, %(description)s, %(input_type)s, %(original_prompt)s,
  %(uploaded_sql)s, %(generated_sql)s, %(ai_explanation)s, %(ai_suggestions)s,
  %(tags)s, %(is_favorite)s
)
RETURNING {PROJECT_COLUMNS};
"""

DELETE_PROJECT_QUERY = """
DELETE FROM schema_projects
WHERE id = %(id)s;
"""

SET_FAVORITE_QUERY = """
UPDATE schema_projects
SET is_favorite = %(is_favorite)s
WHERE id = %(id)s;
"""

HISTORY_COLUMNS = (
    "id, project_id, prompt_used, sql_generated, ai_model, generation_time_ms, "
    "tokens_used, created_at"
)

INSERT_HISTORY_QUERY = f"""
INSERT INTO generation_history (
  project_id, prompt_used, sql_generated, ai_model, generation_time_ms, tokens_used
)
VALUES (
  %(project_id)s, %(prompt_used)s, %(sql_generated)s, %(ai_model)s,
  %(generation_time_ms)s, %(tokens_used)s
)
RETURNING {HISTORY_COLUMNS};
"""

LIST_HISTORY_QUERY = f"""
SELECT {HISTORY_COLUMNS}
FROM generation_history
WHERE project_id = %(project_id)s
ORDER BY created_at;
"""
