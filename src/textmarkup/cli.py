"""Command-line inspection of serializations.

``textmarkup show FILE`` prints the text and markups of an HTML fragment or
JSON payload, ``textmarkup json FILE`` prints its JSON form and
``textmarkup replace PATTERN REPLACEMENT FILE`` prints the HTML after a
substitution.
"""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from textmarkup.errors import TextMarkupError
from textmarkup.serialization import Serialization

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    """Build argparse parser for textmarkup subcommands."""
    parser = argparse.ArgumentParser(
        prog="textmarkup",
        description="Inspect and transform rich-text serializations.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # show
    show_p = sub.add_parser("show", help="Show text and markups")
    show_p.add_argument("file", type=Path, help="HTML fragment or JSON payload")

    # json
    json_p = sub.add_parser("json", help="Print the JSON form")
    json_p.add_argument("file", type=Path, help="HTML fragment or JSON payload")

    # replace
    replace_p = sub.add_parser("replace", help="Substitute a pattern, print HTML")
    replace_p.add_argument("pattern", help="Regular expression")
    replace_p.add_argument("replacement", help="Replacement template (re.sub style)")
    replace_p.add_argument("file", type=Path, help="HTML fragment or JSON payload")
    replace_p.add_argument(
        "--count", type=int, default=0, help="Replace at most N matches (default: all)"
    )
    replace_p.add_argument(
        "--ignore-case", action="store_true", help="Match case-insensitively"
    )

    return parser


def load_serialization(path: Path) -> Serialization:
    """Load a JSON payload (content starting with ``{``) or an HTML fragment."""
    content = path.read_text(encoding="utf-8")
    if content.lstrip().startswith("{"):
        return Serialization.from_json(content)
    return Serialization.from_html(content)


def _cmd_show(serialization: Serialization, con: Console) -> None:
    """Print text and a Rich table of markups."""
    con.print(f"[bold]<{serialization.type}>[/] ({serialization.length} chars)")
    con.print(serialization.text, markup=False, highlight=False)

    if not serialization.markups:
        con.print("[dim]No markups.[/]")
        return

    table = Table(title="Markups")
    table.add_column("Type", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Text")
    table.add_column("Href")

    for markup in serialization.markups:
        table.add_row(
            markup.type.name,
            str(markup.start),
            str(markup.end),
            serialization.text[markup.start : markup.end],
            markup.href or "",
        )

    con.print(table)


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``textmarkup`` command."""
    from textmarkup import setup_logging

    args = _build_parser().parse_args(argv)
    setup_logging()

    try:
        serialization = load_serialization(args.file)
        if args.command == "show":
            _cmd_show(serialization, console)
        elif args.command == "json":
            console.print_json(serialization.to_json())
        elif args.command == "replace":
            flags = re.IGNORECASE if args.ignore_case else 0
            result = serialization.replace(
                args.pattern, args.replacement, count=args.count, flags=flags
            )
            console.print(result.to_html(), markup=False, highlight=False)
    except FileNotFoundError:
        console.print(f"[red]Error:[/] file not found: {args.file}")
        sys.exit(1)
    except (TextMarkupError, re.error) as e:
        console.print(f"[red]Error:[/] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
