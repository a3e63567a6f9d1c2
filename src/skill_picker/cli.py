"""Command-line interface for skill-picker."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .catalog import count_total_options, load_catalog
from .config import load_config
from .errors import CatalogError
from .prompt import TabbedGroupMultiSelectPrompt, is_cancel

EXIT_CANCELLED = 130
EXIT_NO_TTY = 2

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


def _load(path_arg: str) -> dict:
    try:
        return load_catalog(Path(path_arg))
    except CatalogError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _emit(names: list[str], as_json: bool) -> None:
    if as_json:
        console.print_json(json.dumps(names))
    else:
        for name in names:
            console.print(escape(name))


def _catalog_names(groups: dict, raw: str | None, flag: str) -> list[str]:
    """Split a comma-separated option value; exit 1 on names not in the catalog."""
    known = {choice.label for choices in groups.values() for choice in choices}
    wanted = [name.strip() for name in (raw or "").split(",") if name.strip()]
    unknown = [name for name in wanted if name not in known]
    if unknown:
        err_console.print(f"[red]Unknown option(s) for {flag}:[/red] {escape(', '.join(unknown))}")
        sys.exit(1)
    return wanted


def cmd_pick(args: argparse.Namespace) -> None:
    """Run the picker over a catalog file and print the chosen names."""
    groups = _load(args.catalog)
    initial = _catalog_names(groups, args.initial, "--initial")

    if args.select is not None:
        _emit(_catalog_names(groups, args.select, "--select"), args.json)
        return

    if not sys.stdin.isatty():
        err_console.print(
            "[red]Interactive selection requires a TTY.[/red] "
            "[dim]Use --select for non-interactive mode.[/dim]"
        )
        sys.exit(EXIT_NO_TTY)

    if count_total_options(groups) == 0:
        err_console.print("[yellow]No skills available to select.[/yellow]")
        _emit([], args.json)
        return

    cfg = load_config(max_visible_items=args.max_items)
    prompt: TabbedGroupMultiSelectPrompt[str] = TabbedGroupMultiSelectPrompt(
        message=args.message,
        groups=groups,
        initial_values=initial,
        config=cfg,
        console=err_console,
    )
    result = asyncio.run(prompt.run())
    if is_cancel(result):
        sys.exit(EXIT_CANCELLED)
    _emit(list(result), args.json)


def cmd_list(args: argparse.Namespace) -> None:
    """Show the groups in a catalog file."""
    groups = _load(args.catalog)
    for name, choices in groups.items():
        console.print(f"[bold]{escape(name)}[/bold] [dim]({len(choices)})[/dim]")
        for choice in choices:
            hint = f"  [dim]{escape(choice.hint)}[/dim]" if choice.hint else ""
            console.print(f"  {escape(choice.label)}{hint}")
    console.print(f"\n[dim]{count_total_options(groups)} option(s) in {len(groups)} group(s)[/dim]")


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="skill-picker",
        description="skill-picker: tabbed, searchable multi-select for grouped catalogs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"skill-picker {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")

    subparsers = parser.add_subparsers(dest="command")

    # pick
    pick_p = subparsers.add_parser("pick", help="Pick options from a catalog file")
    pick_p.add_argument("catalog", help="YAML or JSON catalog file")
    pick_p.add_argument("--message", default="Select skills to install:", help="Prompt message")
    pick_p.add_argument("--max-items", type=int, default=None, help="Visible rows (default: 10)")
    pick_p.add_argument("--initial", help="Comma-separated names selected at start")
    pick_p.add_argument("--select", help="Comma-separated names to pick without prompting")
    pick_p.add_argument("--json", action="store_true", help="Print the result as a JSON array")
    pick_p.set_defaults(func=cmd_pick)

    # list
    list_p = subparsers.add_parser("list", help="List catalog groups and options")
    list_p.add_argument("catalog", help="YAML or JSON catalog file")
    list_p.set_defaults(func=cmd_list)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        if hasattr(args, "func"):
            args.func(args)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        print()
        sys.exit(EXIT_CANCELLED)


if __name__ == "__main__":
    main()
