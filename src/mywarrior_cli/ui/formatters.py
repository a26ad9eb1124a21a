"""Output formatters for different formats."""

import json
from typing import Any

import yaml
from rich.table import Table

from mywarrior_cli.utils.ui.console import get_console

console = get_console()


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and print data in the specified format."""
    if output_format == "json":
        console.print_json(json.dumps(data, default=str))
    elif output_format == "yaml":
        console.print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    else:
        format_table(data)


def format_table(data: Any) -> None:
    """Format data as a table."""
    if not data:
        console.print("[yellow]No data to display[/yellow]")
        return

    if isinstance(data, dict):
        format_single_item(data)
    else:
        console.print(data)


def format_single_item(item: dict, prefix: str = "") -> None:
    """Format a single (possibly nested) item as a key/value table."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value")

    for key, value in _flatten(item, prefix):
        table.add_row(key, str(value))

    console.print(table)


def _flatten(item: dict, prefix: str = "") -> list[tuple[str, Any]]:
    rows: list[tuple[str, Any]] = []
    for key, value in item.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            rows.extend(_flatten(value, f"{name}."))
        else:
            rows.append((name, value))
    return rows


def format_error(message: str) -> None:
    """Format an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def format_warning(message: str) -> None:
    """Format a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")
