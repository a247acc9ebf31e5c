"""Shared utility functions for the microservice generator.

Provides JSON I/O for the answer store and Rich-based console reporting
(banners, per-file actions, summary tables, coloured status lines).  All
user-facing output goes through the module-level :data:`console` so tests
can capture or silence it in one place.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed value.  Callers that need an object must check the type;
        the top level of a JSON file may also be an array or a scalar.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    return json.loads(raw)


async def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> None:
    """Save data as pretty-printed JSON.

    Parent directories are created automatically.  The write runs in a
    worker thread so the event loop is not blocked.
    """
    file_path = Path(path)
    content = json.dumps(data, indent=2, ensure_ascii=False) + "\n"

    def _write() -> None:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")

    await asyncio.to_thread(_write)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------

FILE_ACTION_COLORS: dict[str, str] = {
    "create": "green",
    "force": "yellow",
    "skip": "dim",
}


def print_banner(title: str, subtitle: str | None = None) -> None:
    """Print a boxed welcome banner."""
    console.print(Panel.fit(title, subtitle=subtitle, border_style="red"))


def print_file_action(status: str, path: str | Path) -> None:
    """Print a right-aligned ``create``/``force`` line for a written file."""
    color = FILE_ACTION_COLORS.get(status, "white")
    console.print(f"[{color}]{status:>8}[/{color}] {path}")


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    console.print(message)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
