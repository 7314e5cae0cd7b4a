"""Shared utility functions for the configurator.

Provides lodash-compatible name helpers, async file writing, and Rich-based
console reporting used by the CLI and by ``Configurator.write``.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|[0-9]+")


def split_words(value: str) -> list[str]:
    """Split *value* into words the way lodash's ``_.words`` does.

    Examples::

        split_words("code-split-vendors") -> ["code", "split", "vendors"]
        split_words("reactHotLoader")     -> ["react", "Hot", "Loader"]
        split_words("css3")               -> ["css", "3"]
    """
    return _WORD_RE.findall(value)


def kebab_case(value: str | list[str] | tuple[str, ...]) -> str:
    """Convert *value* to kebab-case.

    Sequences are joined first, so ``kebab_case(["react", "typescript"])``
    gives ``"react-typescript"``.
    """
    if not isinstance(value, str):
        value = ",".join(value)
    return "-".join(word.lower() for word in split_words(value))


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def dump_json(data: Any) -> str:
    """Pretty-print *data* as JSON with a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def write_text(path: str | Path, content: str) -> Path:
    """Write *content* to *path* off the event loop.

    Parent directories are created automatically.
    """
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


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


def print_file(filename: str, content: str) -> None:
    """Print a generated file with syntax highlighting."""
    lexer = Syntax.guess_lexer(filename, code=content)
    console.rule(f"[bold cyan]{filename}[/bold cyan]")
    console.print(Syntax(content, lexer, line_numbers=False))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
