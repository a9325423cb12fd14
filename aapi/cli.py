"""Command-line entry point: ``aapi import <file>``.

Reads a JSON sample file, infers the entity's fields and either previews the
generated code or writes the model, GraphQL schema and resolver files into
the current project.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from aapi.config import Config
from aapi.importer import (
    ArtifactWriter,
    SchemaImportError,
    derive_type_name,
    load_samples,
    validate_type_name,
)
from aapi.schema.models import GenerationResult
from aapi.schema.projection import parse_and_generate
from aapi.utils import (
    console,
    print_code,
    print_error,
    print_fields_table,
    print_section,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the ``aapi`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="aapi",
        description="Generate Mongoose and GraphQL code from sample JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  aapi import users.json\n"
            "  aapi import data/products.json --name Product --preview\n"
            "  aapi import users.json --force\n"
        ),
    )
    commands = parser.add_subparsers(dest="command", required=True)

    import_cmd = commands.add_parser(
        "import", help="Generate a model, GraphQL schema and resolvers from a JSON file"
    )
    import_cmd.add_argument("file", help="Path to a JSON object or array of objects")
    import_cmd.add_argument(
        "--name", "-n",
        default=None,
        help="Model name (derived from the file name if omitted)",
    )
    import_cmd.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing model files",
    )
    import_cmd.add_argument(
        "--preview", "-p",
        action="store_true",
        help="Show the generated code without writing files",
    )
    import_cmd.add_argument(
        "--project-root",
        default=None,
        help="Project directory to write into (default: current directory)",
    )
    return parser


def show_preview(result: GenerationResult) -> None:
    """Print the summary, detected fields and generated schemas."""
    print_success("Schema analyzed successfully!")
    print_summary_table(
        {
            "Model name": result.type_name,
            "Total fields": result.summary.total_fields,
            "Required fields": result.summary.required_fields,
            "Optional fields": result.summary.optional_fields,
        },
        title="Schema Summary",
    )
    print_fields_table(result.fields)

    print_section("Generated Mongoose Schema")
    print_code(result.storage_schema, "javascript")
    print_section("Generated GraphQL Schema")
    print_code(result.api_schema, "graphql")

    console.print()
    print_warning("To create files, run without --preview")


def run_import(args: argparse.Namespace, config: Config) -> int:
    """Execute the ``import`` command and return the process exit code."""
    samples = load_samples(args.file)

    type_name = args.name or derive_type_name(args.file)
    validation = validate_type_name(type_name)
    if not validation.valid:
        print_error(f"Invalid model name: {validation.error}")
        console.print(f'[yellow]Derived name: "{escape(type_name)}"[/yellow]')
        console.print("[dim]Use --name to specify a custom name[/dim]")
        return 1

    with console.status(f"Generating {type_name} from schema..."):
        result = parse_and_generate(samples, type_name, config=config.inference)

    if args.preview:
        show_preview(result)
        return 0

    root = Path(args.project_root) if args.project_root else config.project_root
    writer = ArtifactWriter(root, config.output)
    written = asyncio.run(writer.write(result, force=args.force))

    print_success(f"{type_name} imported successfully!")
    print_summary_table(
        {
            "Total fields": result.summary.total_fields,
            "Required": result.summary.required_fields,
            "Optional": result.summary.optional_fields,
        },
        title="Schema Summary",
    )
    console.print("[bold]Files created:[/bold]")
    for path in written:
        console.print(f"  [cyan]- {escape(str(path.relative_to(root)))}[/cyan]")
    console.print()
    print_fields_table(result.fields)
    print_warning("Remember to restart your server if it's currently running.")
    return 0


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``aapi`` and ``python -m aapi``."""
    args = build_parser().parse_args(argv)
    config = Config.from_env()

    try:
        code = run_import(args, config)
    except SchemaImportError as exc:
        print_error(f"Import failed: {exc}")
        sys.exit(1)

    if code:
        sys.exit(code)


if __name__ == "__main__":
    main()
