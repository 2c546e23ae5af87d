"""Consolidated display utilities for CLI commands."""
from typing import Any, Dict

from rich.console import Console
from rich.markup import escape

console = Console()


def success(message: str) -> None:
    """Print success message."""
    console.print(f"[green]✓ {escape(message)}[/green]", soft_wrap=True)


def warning(message: str) -> None:
    """Print warning message."""
    console.print(f"[yellow]⚠️  {message}[/yellow]")


def error(message: str) -> None:
    """Print error message."""
    console.print(f"[red]❌ {escape(message)}[/red]", soft_wrap=True)


def plain(value: str) -> None:
    """Print a value verbatim (no markup, highlighting or wrapping)."""
    console.print(value, markup=False, highlight=False, soft_wrap=True)


def info_dict(data: Dict[str, Any], indent: str = "  ") -> None:
    """Print a dictionary as indented key-value pairs."""
    for key, value in data.items():
        console.print(f"{indent}{key}: {escape(str(value))}", highlight=False, soft_wrap=True)
