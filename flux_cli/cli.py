"""Command-line entrypoint for publishing flux components."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from rich.console import Console
from rich.table import Table

from .catalogue import component_identifiers, discover_catalogue
from .config import Settings, is_distribution_installed, load_settings
from .prompts import Prompter, RichPrompter
from .publisher import Publisher
from .selection import resolve_selection

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _print_components(console: Console, components: List[str]) -> None:
    table = Table()
    table.add_column("Component")
    for component in sorted(components):
        table.add_row(component)
    console.print(table)


def cmd_publish(args: argparse.Namespace, prompter: Prompter | None = None, console: Console | None = None) -> int:
    settings = load_settings()
    _configure_logging(settings.flux_log_level)
    console = console or Console()

    pro_installed = is_distribution_installed(settings.flux_pro_distribution)
    logger.debug("Flux Pro installed: %s", pro_installed)

    catalogue = discover_catalogue(
        source_dir=settings.flux_source_dir,
        pro_source_dir=settings.flux_pro_source_dir,
        pro_available=lambda: pro_installed,
    )

    if args.list:
        _print_components(console, component_identifiers(catalogue))
        return 0

    components = resolve_selection(
        catalogue,
        prompter or RichPrompter(console),
        components=args.components,
        select_all=args.all,
        group=args.group,
        multiple=args.multiple,
    )

    publisher = _build_publisher(settings, pro_installed, args.force, console)
    publisher.publish(components)
    return 0


def _build_publisher(settings: Settings, pro_installed: bool, force: bool, console: Console) -> Publisher:
    return Publisher(
        source_dir=settings.flux_source_dir,
        destination_dir=settings.flux_destination_dir,
        pro_source_dir=settings.flux_pro_source_dir if pro_installed else None,
        force=force,
        console=console,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="flux", description="Flux component tooling")
    sub = parser.add_subparsers(dest="command", required=True)

    publish = sub.add_parser("publish", help="Publish individual flux components")
    publish.add_argument("components", nargs="*", help="Dotted component names, e.g. button.group")
    publish.add_argument("--multiple", action="store_true", help="Pick several components interactively")
    publish.add_argument("--group", action="store_true", help="Pick a component group interactively")
    publish.add_argument("--all", action="store_true", help="Publish every component")
    publish.add_argument("--list", action="store_true", help="List available components and exit")
    publish.add_argument("--force", action="store_true", help="Overwrite already published files")

    return parser


def main(argv: List[str] | None = None, prompter: Prompter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        if args.command == "publish":
            return cmd_publish(args, prompter=prompter)

        parser.print_help()
        return 1
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
