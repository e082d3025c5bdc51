"""
gmtools CLI entry point.

Runs the MCP server, or calls a single tool from the command line.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

from gmtools import __version__
from gmtools.config.logging import get_logger, setup_logging
from gmtools.config.settings import Settings, load_settings


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="gmtools",
        description="TTRPG game-master generators served over MCP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"gmtools {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "serve",
        help="Run the MCP server over stdio",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    subparsers.add_parser(
        "tools",
        help="List the available tools",
    )

    generate_parser = subparsers.add_parser(
        "generate",
        help="Call one tool and print its JSON result",
    )
    generate_parser.add_argument(
        "tool",
        help="Tool name, e.g. generate_treasure",
    )
    generate_parser.add_argument(
        "--arg",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Tool argument; repeat for several. Values are parsed as JSON when "
             "possible (level=5 is an integer), otherwise kept as strings.",
    )
    generate_parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the random source to reproduce a result",
    )

    return parser


def parse_tool_arguments(pairs: list[str]) -> dict[str, Any]:
    """
    Turn ``KEY=VALUE`` strings into a tool argument dict.

    Raises:
        ValueError: If a pair has no ``=`` or an empty key
    """
    arguments: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got {pair!r}")
        try:
            arguments[key] = json.loads(raw)
        except ValueError:
            arguments[key] = raw
    return arguments


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== gmtools Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nData Base URL: {settings.data.base_url}")
    logger.info(f"Data File Suffix: {settings.data.file_suffix}")
    logger.info(f"Data Timeout: {settings.data.timeout}s")
    logger.info(f"\nServer Name: {settings.server.name}")
    logger.info(f"Server Version: {settings.server.version}")

    return 0


def cmd_tools() -> int:
    """Print the name and description of every tool."""
    from gmtools.tools.generator_tool import TOOL_SPECS

    for spec in TOOL_SPECS:
        schema = spec.input_schema()
        required = schema.get("required", [])
        params = ", ".join(
            name if name in required else f"[{name}]"
            for name in schema.get("properties", {})
        )
        print(f"{spec.name}({params})")
        print(f"    {spec.description}")
    return 0


async def cmd_generate(args, settings: Settings) -> int:
    """
    Call one tool against the configured data store.

    Prints the same JSON text an MCP client would receive.

    Returns:
        Exit code (0 for success, 1 for an error result)
    """
    from gmtools.data.fetcher import HttpTableFetcher
    from gmtools.generators.random_source import SystemRandomSource
    from gmtools.server import dispatch_tool_call
    from gmtools.tools.generator_tool import GeneratorToolAdapter

    logger = get_logger(__name__)

    try:
        arguments = parse_tool_arguments(args.arg)
    except ValueError as e:
        logger.error(str(e))
        return 1

    rng = SystemRandomSource(args.seed) if args.seed is not None else None
    fetcher = HttpTableFetcher(settings.data)

    async with GeneratorToolAdapter(fetcher, rng) as adapter:
        result = await dispatch_tool_call(adapter, args.tool, arguments)

    for block in result.content:
        print(block.text)
    return 1 if result.isError else 0


def cmd_serve(settings: Settings) -> int:
    """Run the MCP server until the client disconnects."""
    from gmtools.server import serve

    asyncio.run(serve(settings))
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    if args.command == "serve":
        return cmd_serve(settings)
    elif args.command == "config":
        return cmd_config(settings)
    elif args.command == "tools":
        return cmd_tools()
    elif args.command == "generate":
        return asyncio.run(cmd_generate(args, settings))
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
