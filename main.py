#!/usr/bin/env python3
"""Magno: search magnet links across torrent sites from the command line."""

import argparse
import json
import logging
import sys
from pathlib import Path

from magno.config import ConfigManager, load_settings
from magno.errors import ConfigError, InvalidQuery
from magno.models import Result
from magno.service import AggregationService
from magno.sources import BUILTIN_SOURCES, add_trackers
from magno.utils import format_number, open_magnet


def print_results(results: list[Result]):
    """Display search results in a formatted list."""
    for i, r in enumerate(results, 1):
        size = r.extra.get("size")
        size_str = f" ({size})" if size else ""
        print(f"[{i}] {r.title}{size_str} - {format_number(r.seeds)}↑ [{r.source}]")


def download(result: Result):
    """Open magnet link in default torrent client."""
    if open_magnet(add_trackers(result.magnet_link)):
        print(f"Sent to torrent client: {result.title}")
    else:
        print(f"Failed to open magnet link for: {result.title}")


def read_settings(args):
    """Load settings, exiting with a message if the file is invalid."""
    try:
        return load_settings(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(1)


def load_service(args) -> AggregationService:
    """Build the service from settings, applying command line overrides."""
    settings = read_settings(args)
    if getattr(args, "timeout", None) is not None:
        settings.timeout = args.timeout if args.timeout > 0 else None
    return AggregationService.from_settings(settings)


def cmd_search(args):
    """Handle the search command."""
    query = " ".join(args.query)
    service = load_service(args)

    if not args.json:
        print(f"Searching for '{query}'...")
    try:
        results = service.handle_sync(query)[: args.number]
    except InvalidQuery as e:
        print(f"Invalid query: {e}", file=sys.stderr)
        sys.exit(2)

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return

    if not results:
        print(f"No results for '{query}'")
        sys.exit(0)

    print()
    print_results(results)
    print()

    # Interactive loop
    while True:
        try:
            user_input = input("> ").strip().lower()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if user_input == "q":
            break

        try:
            idx = int(user_input)
            if 1 <= idx <= len(results):
                download(results[idx - 1])
            else:
                print(f"Enter a number 1-{len(results)} or 'q' to quit")
        except ValueError:
            print(f"Enter a number 1-{len(results)} or 'q' to quit")


def cmd_serve(args):
    """Handle the serve command - run the HTTP API."""
    from magno.api import serve

    serve(read_settings(args), host=args.host, port=args.port)


def cmd_sources(args):
    """Handle the sources command - list built-in and dynamic sources."""
    settings = read_settings(args)

    print("Built-in sources:\n")
    for name in BUILTIN_SOURCES:
        status = "enabled" if name in settings.sources else "disabled"
        print(f"  {name} [{status}]")

    sites = ConfigManager().load_all()
    if sites:
        print("\nDynamic sites:\n")
        for key, config in sites.items():
            status = "enabled" if config.enabled else "disabled"
            print(f"  {key}: {config.name} [{status}]")


def cmd_sites(args):
    """Handle the sites command - list configured sites."""
    manager = ConfigManager()

    if args.all:
        sites = manager.load_all()
    else:
        sites = manager.load_enabled()

    if not sites:
        print("No configured sites.")
        print(f"Add sites to {manager.config_path} to search them.")
        return

    print("Configured sites:\n")
    for key, config in sites.items():
        status = "enabled" if config.enabled else "disabled"
        print(f"  {key}: {config.name} ({config.base_url}) [{status}]")


def cmd_remove(args):
    """Handle the remove command - remove a site."""
    name = args.name
    manager = ConfigManager()

    if manager.remove(name):
        print(f"Removed site '{name}'")
    else:
        print(f"Site '{name}' not found")
        sys.exit(1)


def cmd_enable(args):
    """Handle the enable command - enable a site."""
    name = args.name
    manager = ConfigManager()

    if manager.set_enabled(name, True):
        print(f"Enabled site '{name}'")
    else:
        print(f"Site '{name}' not found")
        sys.exit(1)


def cmd_disable(args):
    """Handle the disable command - disable a site."""
    name = args.name
    manager = ConfigManager()

    if manager.set_enabled(name, False):
        print(f"Disabled site '{name}'")
    else:
        print(f"Site '{name}' not found")
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="magno",
        description="Magno: magnet link search across torrent sites",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", type=Path, help="Settings file path")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    search_parser = subparsers.add_parser("search", help="Search for torrents")
    search_parser.add_argument("query", nargs="+", help="Search query")
    search_parser.add_argument(
        "-n", "--number", type=int, default=10, help="Number of results (default: 10)"
    )
    search_parser.add_argument(
        "-t", "--timeout", type=float,
        help="Per-source timeout in seconds, 0 disables (default: from settings)",
    )
    search_parser.add_argument(
        "--json", action="store_true", help="Print results as JSON and exit"
    )
    search_parser.set_defaults(func=cmd_search)

    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", help="Bind address (default: from settings)")
    serve_parser.add_argument(
        "--port", type=int, help="Bind port (default: from settings)"
    )
    serve_parser.set_defaults(func=cmd_serve)

    sources_parser = subparsers.add_parser("sources", help="List search sources")
    sources_parser.set_defaults(func=cmd_sources)

    sites_parser = subparsers.add_parser("sites", help="List configured sites")
    sites_parser.add_argument(
        "-a", "--all", action="store_true", help="Include disabled sites"
    )
    sites_parser.set_defaults(func=cmd_sites)

    remove_parser = subparsers.add_parser("remove", help="Remove a configured site")
    remove_parser.add_argument("name", help="Site key to remove")
    remove_parser.set_defaults(func=cmd_remove)

    enable_parser = subparsers.add_parser("enable", help="Enable a configured site")
    enable_parser.add_argument("name", help="Site key to enable")
    enable_parser.set_defaults(func=cmd_enable)

    disable_parser = subparsers.add_parser("disable", help="Disable a configured site")
    disable_parser.add_argument("name", help="Site key to disable")
    disable_parser.set_defaults(func=cmd_disable)

    return parser


KNOWN_COMMANDS = {
    "search", "serve", "sources", "sites", "remove", "enable", "disable",
}


def main(argv: list[str] | None = None):
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()

    # A bare query is a search
    if argv and not argv[0].startswith("-") and argv[0] not in KNOWN_COMMANDS:
        argv.insert(0, "search")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    args.func(args)


if __name__ == "__main__":
    main()
