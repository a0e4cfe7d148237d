"""Command-line entrypoint for schemacraft."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import UUID

from schemacraft import __version__
from schemacraft.config import ConfigurationError, Settings, load_settings
from schemacraft.models.generation import (
    GenerationContext,
    GenerationInput,
    GenerationResult,
    Progress,
)

if TYPE_CHECKING:
    from schemacraft.db import ProjectStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemacraft",
        description=(
            "Generate, improve and analyze database schemas from natural "
            "language descriptions or existing SQL."
        ),
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log pipeline activity to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command")
    subparsers.add_parser(
        "config-check",
        help="Validate environment configuration for schemacraft.",
    )
    examples_parser = subparsers.add_parser(
        "examples",
        help="Show example schema descriptions.",
    )
    examples_parser.add_argument("name", nargs="?", help="Example to print in full.")

    for name, help_text in (
        ("validate-input", "Check a request against the input rules."),
        ("build-prompt", "Show the prompt that would be sent for a request."),
        ("generate", "Generate a schema with the configured or mock model."),
    ):
        command_parser = subparsers.add_parser(name, help=help_text)
        _add_input_arguments(command_parser)

    generate_parser = subparsers.choices["generate"]
    generate_parser.add_argument(
        "--mock",
        action="store_true",
        help="Use the canned offline generator instead of the live API.",
    )
    generate_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON.",
    )
    generate_parser.add_argument(
        "--save",
        action="store_true",
        help="Save the result as a schema project (requires DATABASE_DSN).",
    )
    generate_parser.add_argument("--owner", help="Owner id used with --save.")
    generate_parser.add_argument("--name", help="Project name used with --save.")

    blueprint_parser = subparsers.add_parser(
        "blueprint",
        help="List tables, columns and indexes declared by a SQL file.",
    )
    blueprint_parser.add_argument("sql_file", type=Path, help="Path to a .sql file.")
    blueprint_parser.add_argument("--json", action="store_true", help="Print as JSON.")

    subparsers.add_parser("init-db", help="Create project storage tables.")
    list_parser = subparsers.add_parser("list-projects", help="List saved projects.")
    list_parser.add_argument("--owner", required=True, help="Owner id.")
    search_parser = subparsers.add_parser("search-projects", help="Search saved projects.")
    search_parser.add_argument("--owner", required=True, help="Owner id.")
    search_parser.add_argument("term", help="Text matched against name, description and tags.")
    show_parser = subparsers.add_parser("show-project", help="Show a project and its history.")
    show_parser.add_argument("project_id", type=UUID)
    favorite_parser = subparsers.add_parser("favorite-project", help="Mark a project favorite.")
    favorite_parser.add_argument("project_id", type=UUID)
    favorite_parser.add_argument("--off", action="store_true", help="Clear the favorite flag.")
    delete_parser = subparsers.add_parser("delete-project", help="Delete a saved project.")
    delete_parser.add_argument("project_id", type=UUID)
    return parser


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--description",
        default="",
        help="Natural-language description of the database or requested changes.",
    )
    parser.add_argument(
        "--sql-file",
        type=Path,
        default=None,
        help="Existing SQL schema to improve or analyze.",
    )


def _read_input(args: argparse.Namespace) -> GenerationInput:
    sql_text = None
    context = GenerationContext()
    if args.sql_file is not None:
        sql_text = args.sql_file.read_text(encoding="utf-8")
        context = GenerationContext(
            is_improvement=True,
            file_size=args.sql_file.stat().st_size,
            file_name=args.sql_file.name,
        )
    return GenerationInput(
        description=args.description,
        uploaded_sql_text=sql_text,
        context_flags=context,
    )


def _print_progress(progress: Progress) -> None:
    print(
        f"[{progress.percent_complete:5.1f}%] {progress.message}",
        file=sys.stderr,
    )


def _print_result(result: GenerationResult) -> None:
    print("SQL:")
    print(result.sql_text)
    print("\nExplanation:")
    print(result.explanation_text)
    print("\nSuggestions:")
    for suggestion in result.suggestions:
        print(f"- {suggestion}")
    if result.estimated_cost:
        print(f"\nEstimated cost: {result.estimated_cost}")


def _store(settings: Settings) -> ProjectStore:
    from schemacraft.db import ProjectStore

    settings.validate_storage_requirements()
    return ProjectStore(settings.database_dsn)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "config-check":
        try:
            settings = load_settings()
        except ConfigurationError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        redacted = "***" if settings.openai_api_key else "(not set)"
        print("Configuration loaded successfully:")
        print(f"- OPENAI_API_KEY: {redacted}")
        print(f"- OPENAI_MODEL: {settings.openai_model}")
        print(f"- OPENAI_BASE_URL: {settings.openai_base_url}")
        print(f"- OPENAI_TIMEOUT_SECONDS: {settings.openai_timeout_seconds}")
        print(f"- SCHEMACRAFT_USE_MOCK: {'yes' if settings.use_mock_llm else 'no'}")
        print(f"- DATABASE_DSN: {'***' if settings.database_dsn else '(not set)'}")
        return 0

    if args.command == "examples":
        from schemacraft.prompts import EXAMPLE_PROMPTS

        if args.name:
            if args.name not in EXAMPLE_PROMPTS:
                print(
                    f"Unknown example '{args.name}'. "
                    f"Available: {', '.join(sorted(EXAMPLE_PROMPTS))}",
                    file=sys.stderr,
                )
                return 1
            print(EXAMPLE_PROMPTS[args.name])
            return 0

        for name, text in EXAMPLE_PROMPTS.items():
            print(f"- {name}: {text[:72]}...")
        return 0

    generation_input = None
    if args.command in ("validate-input", "build-prompt", "generate"):
        try:
            generation_input = _read_input(args)
        except OSError as exc:
            print(f"Could not read {args.sql_file}: {exc}", file=sys.stderr)
            return 1

    if args.command == "validate-input":
        from schemacraft.prompts import validate_generation_input

        validation = validate_generation_input(generation_input)
        if not validation.is_valid:
            print("Input validation failed:")
            for item in validation.errors:
                print(f"- {item}")
            return 1
        print("Input is valid.")
        return 0

    if args.command == "build-prompt":
        from schemacraft.prompts import build_prompt, validate_generation_input

        validation = validate_generation_input(generation_input)
        if not validation.is_valid:
            print("Input validation failed:", file=sys.stderr)
            for item in validation.errors:
                print(f"- {item}", file=sys.stderr)
            return 1

        prompt = build_prompt(generation_input)
        print("Prompt build succeeded:")
        print(f"- mode: {prompt.mode.value}")
        print(f"- temperature: {prompt.temperature}")
        print(f"- max_tokens: {prompt.max_tokens}")
        print("\n--- SYSTEM PROMPT ---")
        print(prompt.system_instruction)
        print("\n--- USER PROMPT ---")
        print(prompt.user_instruction)
        return 0

    if args.command == "generate":
        from schemacraft.llm import create_response_caller
        from schemacraft.pipeline import generate_schema
        from schemacraft.prompts import build_prompt

        if args.save and not args.owner:
            print("--save requires --owner.", file=sys.stderr)
            return 2

        try:
            settings = load_settings()
        except ConfigurationError as exc:
            print(f"Configuration error:\n{exc}", file=sys.stderr)
            return 2

        caller = create_response_caller(settings, mock=True if args.mock else None)
        outcome = generate_schema(
            generation_input,
            caller,
            None if args.json else _print_progress,
        )
        if not outcome.success:
            print(f"Schema generation failed ({outcome.error_kind}):", file=sys.stderr)
            for item in outcome.errors:
                print(f"- {item}", file=sys.stderr)
            return 2 if outcome.error_kind == "configuration" else 1

        assert outcome.result is not None
        if args.json:
            print(json.dumps(outcome.model_dump(mode="json"), indent=2, sort_keys=True))
        else:
            _print_result(outcome.result)

        if args.save:
            from schemacraft.db import StorageError
            from schemacraft.models.records import (
                build_history_record,
                build_project_record,
            )

            model_name = settings.openai_model
            if args.mock or settings.use_mock_llm:
                model_name = "mock"
            try:
                store = _store(settings)
                project = store.create_project(
                    build_project_record(
                        args.owner, generation_input, outcome.result, name=args.name
                    )
                )
                store.add_generation_history(
                    build_history_record(
                        project.id,
                        build_prompt(generation_input),
                        outcome.result,
                        ai_model=model_name,
                        generation_time_ms=outcome.duration_ms,
                    )
                )
            except ConfigurationError as exc:
                print(f"Configuration error:\n{exc}", file=sys.stderr)
                return 2
            except StorageError as exc:
                print(f"Saving project failed:\n{exc}", file=sys.stderr)
                return 1
            print(f"\nSaved project {project.id} ({project.name}).", file=sys.stderr)
        return 0

    if args.command == "blueprint":
        from schemacraft.sql import build_blueprint

        try:
            sql_text = args.sql_file.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Could not read {args.sql_file}: {exc}", file=sys.stderr)
            return 1

        blueprint = build_blueprint(sql_text)
        if args.json:
            print(json.dumps(blueprint.to_dict(), indent=2))
            return 0

        print(f"Tables: {blueprint.table_count}  Relations: {blueprint.relation_count}")
        for table in blueprint.tables:
            print(f"\n{table.name}")
            for column in table.columns:
                constraints = ""
                if column.constraints:
                    constraints = f" [{', '.join(column.constraints)}]"
                print(f"  - {column.name} {column.data_type}{constraints}")
        if blueprint.indexes:
            print("\nIndexes:")
            for index in blueprint.indexes:
                print(f"- {index.name} ON {index.table} ({', '.join(index.columns)})")
        if blueprint.skipped_statements:
            print(f"\nSkipped {blueprint.skipped_statements} unparseable statement(s).")
        return 0

    from schemacraft.db import StorageError

    try:
        store = _store(load_settings())
        if args.command == "init-db":
            store.init_schema()
            print("Project storage tables are ready.")
            return 0

        if args.command in ("list-projects", "search-projects"):
            from schemacraft.models.records import format_project_preview

            if args.command == "list-projects":
                projects = store.list_projects(args.owner)
            else:
                projects = store.search_projects(args.owner, args.term)
            if not projects:
                print("No projects found.")
                return 0
            for project in projects:
                star = " *" if project.is_favorite else ""
                print(f"- {project.id} {project.name}{star}")
                print(f"  {format_project_preview(project)}")
            return 0

        if args.command == "show-project":
            project = store.get_project_with_history(args.project_id)
            if project is None:
                print(f"Project {args.project_id} not found.", file=sys.stderr)
                return 1
            print(json.dumps(project.model_dump(mode="json"), indent=2))
            return 0

        if args.command == "favorite-project":
            if not store.set_favorite(args.project_id, not args.off):
                print(f"Project {args.project_id} not found.", file=sys.stderr)
                return 1
            print("Favorite flag updated.")
            return 0

        if args.command == "delete-project":
            if not store.delete_project(args.project_id):
                print(f"Project {args.project_id} not found.", file=sys.stderr)
                return 1
            print("Project deleted.")
            return 0
    except ConfigurationError as exc:
        print(f"Configuration error:\n{exc}", file=sys.stderr)
        return 2
    except StorageError as exc:
        print(f"Project storage failed:\n{exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
