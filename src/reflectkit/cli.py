"""Command-line interface for reflectkit."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .command import Command
from .config import ReflectConfig
from .formatters.rich import RichRenderer
from .inspector import preload_modules
from .models import ErrorKind, ExecutionResult, ModuleHandle, TypeHandle
from .navigator import Navigator

logger = logging.getLogger(__name__)

EXIT_COMMANDS = frozenset({"quit", "exit"})


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="reflectkit",
        description="Interactive browser over loaded modules, their types and members",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  reflectkit                                 Start the interactive prompt
  reflectkit -c modules                      List loaded modules and exit
  reflectkit --import json -c "types -a json.encoder"
  reflectkit --import json -c "members -a json.encoder -t json.encoder.JSONEncoder"

Commands at the prompt:
  modules | assemblies
  types [-a <module>]
  members [-a <module>] [-t <type>]
  list modules|assemblies|types|members
  select -a <module> | -t <type>
  up, help, quit
  <number>                                   drill into the item at that row
""",
    )

    parser.add_argument(
        "--command",
        "-c",
        action="append",
        default=[],
        metavar="COMMAND",
        help="Run a command instead of starting the prompt (repeatable)",
    )
    parser.add_argument(
        "--import",
        "-i",
        dest="imports",
        action="append",
        default=[],
        metavar="MODULE",
        help="Import a module before browsing (repeatable)",
    )

    # Filtering flags
    parser.add_argument(
        "--private",
        "-p",
        action="store_true",
        default=None,
        help="Include private modules, types and members (starting with _)",
    )
    parser.add_argument(
        "--inherited",
        action="store_true",
        default=None,
        help="Include members inherited from base classes",
    )

    # Display options
    parser.add_argument(
        "--no-color",
        action="store_true",
        default=None,
        help="Disable colored output",
    )
    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def configure_logging(config: ReflectConfig) -> None:
    """Send log records to stderr through rich."""
    handler = RichHandler(
        console=Console(stderr=True, no_color=config.no_color),
        show_path=False,
    )
    logging.basicConfig(
        level=config.level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def drill_down(navigator: Navigator, index: int) -> ExecutionResult:
    """Select the item at ``index`` in the active collection."""
    try:
        item = navigator.item_at(index)
    except IndexError:
        return ExecutionResult.fail(
            ErrorKind.NOT_FOUND,
            f"No item at row {index} (showing {navigator.count()})",
        )

    if isinstance(item, ModuleHandle):
        return navigator.select_module_by_name(item.name)
    if isinstance(item, TypeHandle):
        return navigator.select_type_by_name(item.qualified_name)
    return ExecutionResult.ok(f"{item.name}: members have no further level")


def run_line(navigator: Navigator, renderer: RichRenderer, line: str) -> bool:
    """Execute one line and render the outcome. Returns success."""
    command = Command.parse(line)
    highlight: Optional[int] = None

    if command.primary is not None and command.primary.isdigit() and not command.parameters:
        result = drill_down(navigator, int(command.primary))
    elif command.primary == "up":
        drill = navigator.drill_up(navigator.active_collection_kind())
        result, highlight = drill.result, drill.restore_index
    else:
        result = navigator.execute(command)

    renderer.print_result(result)
    if result.success and not command.is_empty and command.primary != "help":
        renderer.render(navigator, highlight=highlight)
    return result.success


def repl(navigator: Navigator, renderer: RichRenderer, prompt: str) -> int:
    """Read commands until EOF or quit."""
    renderer.console.print(
        f"[bold]reflectkit {__version__}[/bold] [dim]- type 'help' for commands, 'quit' to leave[/dim]"
    )
    while True:
        try:
            line = renderer.console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            renderer.console.print()
            return 0
        if line.strip() in EXIT_COMMANDS:
            return 0
        run_line(navigator, renderer, line)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        config = ReflectConfig.from_env().with_overrides(
            include_private=args.private,
            include_inherited=args.inherited,
            no_color=args.no_color,
            log_level=args.log_level,
        )
    except ValueError as e:
        parser.error(str(e))

    configure_logging(config)
    logger.debug("Using %s", config)
    preload_modules(config.preload + tuple(args.imports))

    navigator = Navigator(config=config)
    renderer = RichRenderer(no_color=config.no_color)

    if not args.command:
        return repl(navigator, renderer, config.prompt)

    ok = True
    for line in args.command:
        if not run_line(navigator, renderer, line):
            ok = False
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
