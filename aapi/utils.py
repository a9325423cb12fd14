"""Shared utility functions for aapi.

Provides JSON file loading and the Rich-based console helpers used by the
command-line layer.  The inference engine itself never prints.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.syntax import Syntax
from rich.table import Table

from aapi.schema.models import FieldModel

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file, returning whatever value it holds.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_section(title: str) -> None:
    """Print a bold rule used to separate preview sections."""
    console.print()
    console.print(Rule(f"[bold]{title}[/bold]", style="cyan"))


def print_summary_table(data: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_fields_table(fields: FieldModel, title: str = "Detected Fields") -> None:
    """Print one row per inferred field with its GraphQL type and first sample."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Field", no_wrap=True)
    table.add_column("Type", style="yellow")
    table.add_column("Required")
    table.add_column("Sample", style="dim")

    for name, info in fields.preview().items():
        badge = "[red]required[/red]" if info["required"] else "[dim]optional[/dim]"
        sample = json.dumps(info["samples"][0], default=str) if info["samples"] else ""
        table.add_row(escape(name), escape(info["api_type"]), badge, escape(sample))

    console.print(table)


def print_code(code: str, lexer: str) -> None:
    """Print generated source with syntax highlighting."""
    console.print(Syntax(code, lexer, theme="ansi_dark", word_wrap=True))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
