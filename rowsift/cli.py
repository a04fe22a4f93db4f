#!/usr/bin/env python3
"""
cli.py - Entry point for ROWSIFT
Extract, group and sort release rows from a saved tracker listing page.
"""

try:
    import argparse
    import locale
    import sys
    from pathlib import Path
    from typing import Optional

    from rich.console import Console
    from rich.table import Table

    import rowsift as pkg
    from .config import RowsiftConfig, build_vocabularies, default_config, load_config
    from .extract.html_source import HtmlTableSource
    from .extract.pipeline import run_pass
    from .extract.sorting import SORT_COLUMNS
    from .extract.title_splitter import split_title
    from .logger import RowsiftLogger, set_logger
    from .render import ConsoleSink, JsonSink
except ImportError as e:
    print(f"Error: Missing required dependency: {e}")
    print("Please install required dependencies: pip install -e .")
    sys.exit(1)

console = Console()


def _ui_info(message: str) -> None:
    console.print(f"[cyan][INFO][/cyan] {message}")


def _ui_warn(message: str) -> None:
    console.print(f"[yellow][WARNING][/yellow] {message}")


def _ui_error(message: str) -> None:
    console.print(f"[red][ERROR][/red] {message}")


def show_help(parser: argparse.ArgumentParser) -> None:
    print(f"ROWSIFT v{getattr(pkg, '__version__', '0.0.0')} - Sift release rows out of tracker listing pages")
    print()
    parser.print_help()
    print()
    print(f"Sort columns: {', '.join(SORT_COLUMNS)}")


def show_title_parts(text: str) -> None:
    parts = split_title(text)
    table = Table(title="Title parts")
    table.add_column("Part", style="cyan")
    table.add_column("Value")
    table.add_row("Title", parts.title)
    table.add_row("Subtype", parts.subtype or "-")
    table.add_row("Year", parts.year or "-")
    console.print(table)


def resolve_config_path(args_config: Optional[str]) -> Optional[Path]:
    """Explicit path (file or directory) first, then ./config.toml; None means defaults."""
    if args_config:
        p = Path(args_config).expanduser()
        if p.is_dir():
            p = p / "config.toml"
        return p

    cwd_candidate = Path.cwd() / "config.toml"
    if cwd_candidate.exists():
        return cwd_candidate
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rowsift", add_help=False)
    for args, kwargs in (
        (("-h", "--help"), {"action": "store_true", "help": "Show help"}),
        (("-c", "--config"), {"metavar": "PATH", "help": "Path to config.toml (file or directory)"}),
        (("-t", "--table"), {"metavar": "ID", "help": "id of the listing table (default: first table with release rows)"}),
        (("-u", "--url"), {"metavar": "URL", "help": "Address the page was saved from (music listings use torrents2.php)"}),
        (("-s", "--sort"), {"metavar": "COLUMN", "help": "Sort releases in each section by this column"}),
        (("--desc",), {"action": "store_true", "help": "Sort descending"}),
        (("--json",), {"action": "store_true", "help": "Write JSON to stdout instead of tables"}),
        (("--details",), {"action": "store_true", "help": "Show whether each release carries a details blob"}),
        (("--log",), {"metavar": "FILE", "help": "Mirror log output to FILE"}),
        (("-d", "--debug"), {"action": "store_true", "help": "Debug mode with timestamps and per-row diagnostics"}),
        (("--split-title",), {"metavar": "TEXT", "help": "Split a compound title into title/subtype/year and exit"}),
    ):
        parser.add_argument(*args, **kwargs)
    parser.add_argument("page", nargs="?", help="Saved listing page (.html)")
    return parser


def run(args: argparse.Namespace, config: RowsiftConfig) -> int:
    page = Path(args.page).expanduser()
    if not page.exists():
        _ui_error(f"Page not found: {page}")
        return 1

    column = args.sort or config.display.sort_column
    if column and column not in SORT_COLUMNS:
        _ui_error(f"Unknown sort column '{column}'. Supported columns: {', '.join(SORT_COLUMNS)}.")
        return 1
    direction = "desc" if args.desc else config.display.sort_direction

    log_file = Path(args.log).expanduser() if args.log else config.logging.log_file
    debug = args.debug or config.logging.debug
    # stdout belongs to the JSON document
    with RowsiftLogger(log_file=log_file, debug=debug, quiet=args.json) as log:
        set_logger(log)
        source = HtmlTableSource(page.read_text(encoding="utf-8", errors="replace"), args.table, args.url)
        if source.table is None:
            _ui_error(f"No table found in {page}" + (f" with id '{args.table}'" if args.table else ""))
            return 1

        if args.json:
            sink = JsonSink(sys.stdout)
        else:
            sink = ConsoleSink(console, show_details=args.details or config.display.show_details)
        result = run_pass(source, sink, column, direction, vocabularies=build_vocabularies(config))
        log.info(f"{len(result.records())} release(s) in {len(result.entries)} section(s)")
    return 0


def use_system_collation() -> None:
    """Sort text the way the user's locale orders it."""
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        _ui_warn(f"Locale not available ({e}); text columns sort by code point within each letter")


def main():
    """Entry point"""
    use_system_collation()
    parser = build_parser()

    try:
        args = parser.parse_args()
        if args.help:
            show_help(parser)
            sys.exit(0)

        if args.split_title is not None:
            show_title_parts(args.split_title)
            sys.exit(0)

        if not args.page:
            show_help(parser)
            sys.exit(1)

        config_path = resolve_config_path(args.config)
        config = load_config(config_path) if config_path else default_config()
        sys.exit(run(args, config))
    except KeyboardInterrupt:
        _ui_info("Goodbye!")
        sys.exit(0)
    except Exception as e:
        _ui_error(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
