"""
Command-line interface for libscout.

Builds the resource index for a shared library and runs component,
utility, plugin and best-practice queries against it from the shell.
Also starts the MCP server.

I'm libscout. I read your whole component library every time you ask,
and I still answer faster than the person who wrote it.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from libscout import __version__
from libscout.config import ScoutConfig
from libscout.errors import LibraryNotFoundError

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI output."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s" if not verbose else "%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _get_config(args: argparse.Namespace) -> ScoutConfig:
    """Build ScoutConfig from CLI args."""
    base_path = getattr(args, "base_path", None)
    if base_path:
        return ScoutConfig(base_path=Path(base_path))
    return ScoutConfig()


def _get_query_tool(args: argparse.Namespace) -> Any:
    """Create a query tool for the library selected by --library or config."""
    from libscout.index import ResourceIndex
    from libscout.query import ResourceQueryTool

    config = _get_config(args)
    library = getattr(args, "library", None)
    if library:
        config.use_library(Path(library))

    root = config.library_path
    if not root.is_dir():
        raise LibraryNotFoundError(root)

    return ResourceQueryTool(ResourceIndex(root=root, config=config))


def _print_json(data: object) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str))


def _print_suggestions(result: Dict[str, Any]) -> None:
    suggestions = result.get("suggestions", [])
    if not suggestions:
        return
    print("  Did you mean:")
    for suggestion in suggestions:
        extra = suggestion.get("category") or suggestion.get("parent")
        print(f"    - {suggestion['name']}" + (f" ({extra})" if extra else ""))


def _print_component(result: Dict[str, Any]) -> None:
    print(f"🧩 {result['name']}  [{result['category']}]")
    print(f"   {result['file_path']}")

    if result["props"]:
        print("\n  Props:")
        for prop in result["props"]:
            default = f" = {prop['default']}" if prop.get("default") is not None else ""
            description = f"  {prop['description']}" if prop.get("description") else ""
            print(f"    {prop['name']}: {prop['type']}{default}{description}")

    if result["events"]:
        print("\n  Events:")
        for event in result["events"]:
            description = f"  {event['description']}" if event.get("description") else ""
            print(f"    @{event['name']}{description}")

    for example in result.get("usage", []):
        print(f"\n  {example['title']}:")
        for line in example["code"].splitlines():
            print(f"    {line}")


def _print_utility(result: Dict[str, Any]) -> None:
    if result["type"] == "function":
        exported = "exported" if result["exported"] else "internal"
        print(f"🔧 {result['name']}  ({result['function_type']}, {exported})")
        print(f"   in {result['parent_module']}: {result['file_path']}")
        return

    print(f"🔧 {result['name']}")
    print(f"   {result['file_path']}")
    for function in result["functions"]:
        marker = "*" if function["exported"] else " "
        print(f"  {marker} {function['name']} ({function['kind']})")


def _print_plugin(result: Dict[str, Any]) -> None:
    print(f"🔌 {result['name']}")
    print(f"   {result['dir_path']}")
    for plugin_file in result["files"]:
        exports = ", ".join(plugin_file["exports"]) or "-"
        print(f"    {plugin_file['name']}: {exports}")


# ─── Command Handlers ────────────────────────────────────────────────

def cmd_index(args: argparse.Namespace) -> int:
    """Build the resource index and report what was found."""
    query_tool = _get_query_tool(args)
    json_output = getattr(args, "json_output", False)

    if not json_output:
        print(f"🤖 Indexing {query_tool.index.root}...")
    asyncio.run(query_tool.index.build())
    stats = query_tool.index.stats()

    if json_output:
        _print_json(stats)
        return 0

    print("  ✅ Index built")
    for kind in ("components", "utilities", "configs", "plugins", "examples"):
        print(f"     {kind.capitalize()}: {stats[kind]}")
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    """Query a component, utility or plugin."""
    subcmd = args.query_command
    if not subcmd:
        print("No query subcommand specified. Use 'libscout query --help' for options.")
        return 1

    query_tool = _get_query_tool(args)

    if subcmd == "component":
        result = asyncio.run(query_tool.query_component(args.name, category=args.category))
        printer = _print_component
    elif subcmd == "utility":
        result = asyncio.run(query_tool.query_utility(args.name))
        printer = _print_utility
    elif subcmd == "plugin":
        result = asyncio.run(query_tool.query_plugin(args.name))
        printer = _print_plugin
    else:
        print(f"Unknown query command: {subcmd}")
        return 1

    if getattr(args, "json_output", False):
        _print_json(result)
    elif result["found"]:
        printer(result)
    else:
        print(f"  ❌ Not found: {args.name}")
        _print_suggestions(result)

    return 0 if result["found"] else 1


def cmd_practices(args: argparse.Namespace) -> int:
    """Show best practices for a topic."""
    query_tool = _get_query_tool(args)
    result = asyncio.run(query_tool.get_best_practices(args.topic))

    if getattr(args, "json_output", False):
        _print_json(result)
        return 0

    if not result["practices"]:
        print(f"No practices found for '{args.topic}'.")
        return 0

    print(f"📚 Best practices: {args.topic}\n")
    for practice in result["practices"]:
        source = practice["type"]
        if practice.get("name"):
            source += f" {practice['name']}"
        print(f"  [{source}]")
        for line in practice["practice"].splitlines():
            print(f"    {line}")
        print()
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List every indexed resource of one kind."""
    query_tool = _get_query_tool(args)

    listers = {
        "components": query_tool.get_all_components,
        "utilities": query_tool.get_all_utilities,
        "plugins": query_tool.get_all_plugins,
    }
    items = asyncio.run(listers[args.kind]())

    if getattr(args, "json_output", False):
        _print_json(items)
        return 0

    if not items:
        print(f"No {args.kind} indexed.")
        return 0

    for item in items:
        description = f" - {item['description']}" if item.get("description") else ""
        category = f" [{item['category']}]" if item.get("category") else ""
        print(f"  {item['name']}{category}{description}")
    print(f"\n  Total: {len(items)}")
    return 0


def cmd_mcp(args: argparse.Namespace) -> int:
    """MCP server commands."""
    from libscout.mcp_server import ScoutMCPServer

    config = _get_config(args)
    library = getattr(args, "library", None)
    if library:
        config.use_library(Path(library))

    subcmd = args.mcp_command
    if not subcmd:
        print("No MCP subcommand specified. Use 'libscout mcp --help' for options.")
        return 1

    if subcmd == "serve":
        transport = getattr(args, "transport", "stdio")
        server = ScoutMCPServer(config=config)

        if transport == "stdio":
            server.run_stdio()
        elif transport == "sse":
            host = getattr(args, "host", "localhost")
            port = getattr(args, "port", 3333)
            server.run_sse(host=host, port=port)

    elif subcmd == "install":
        python_path = sys.executable
        config_snippet = {
            "mcpServers": {
                "libscout": {
                    "command": python_path,
                    "args": ["-m", "libscout", "mcp", "serve"],
                    "env": {"SHARED_LIBRARY_PATH": str(config.library_path)},
                }
            }
        }
        print("Add this to your MCP client configuration:\n")
        print(json.dumps(config_snippet, indent=2))

    else:
        print(f"Unknown MCP command: {subcmd}")
        return 1

    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show or change persistent settings in defaults.ini."""
    config = _get_config(args)

    subcmd = args.config_command
    if not subcmd:
        print("No config subcommand specified. Use 'libscout config --help' for options.")
        return 1

    if subcmd == "show":
        for section, values in config.DEFAULTS.items():
            print(f"[{section}]")
            for key in values:
                print(f"  {key} = {config.get(section, key)}")
            print()

    elif subcmd == "set":
        known = config.DEFAULTS.get(args.section, {})
        if args.key not in known:
            print(f"Unknown setting: {args.section}.{args.key}")
            return 1

        config.ensure_directories()
        config.set(args.section, args.key, args.value)
        config.save()
        print(f"  ✅ {args.section}.{args.key} = {args.value}")

    else:
        print(f"Unknown config command: {subcmd}")
        return 1

    return 0


def cmd_status(args: argparse.Namespace) -> int:
    """Show configuration and library status."""
    config = _get_config(args)
    status = config.get_status()

    library = getattr(args, "library", None)
    if library:
        status["library_path"] = str(Path(library).resolve())
    status["library_exists"] = Path(status["library_path"]).is_dir()

    if getattr(args, "json_output", False):
        _print_json(status)
        return 0

    print("🤖 libscout status\n")
    print(f"  Base path:    {status['base_path']}")
    print(f"  Config file:  {'yes' if status['config_exists'] else 'no (defaults)'}")
    print(f"  Library:      {status['library_path']}"
          f"{'' if status['library_exists'] else '  (missing)'}")
    thresholds = status["thresholds"]
    print(f"  Fuzzy accept: > {thresholds['accept']}")
    print(f"  Suggestions:  > {thresholds['suggestion']} (top {thresholds['max_suggestions']})")
    return 0


# ─── Argument Parser ─────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="libscout",
        description="🤖 libscout: Resource knowledge index for shared component libraries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"libscout {__version__}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )
    parser.add_argument(
        "--base-path", dest="base_path", help="Override libscout home (default: ~/.libscout)"
    )
    parser.add_argument(
        "-l", "--library", help="Shared library root (default: from configuration)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ─── index ────────────────────────────────
    index_parser = subparsers.add_parser("index", help="Build the resource index")
    index_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    # ─── query ────────────────────────────────
    query_parser = subparsers.add_parser("query", help="Query indexed resources")
    query_sub = query_parser.add_subparsers(dest="query_command", help="Query commands")

    component_parser = query_sub.add_parser("component", help="Component details")
    component_parser.add_argument("name", help="Component name")
    component_parser.add_argument("-c", "--category", help="Category hint (e.g. form)")
    component_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    utility_parser = query_sub.add_parser("utility", help="Utility module or function")
    utility_parser.add_argument("name", help="Utility or function name")
    utility_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    plugin_parser = query_sub.add_parser("plugin", help="Plugin details")
    plugin_parser.add_argument("name", help="Plugin name")
    plugin_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    # ─── practices ────────────────────────────
    practices_parser = subparsers.add_parser("practices", help="Best practices for a topic")
    practices_parser.add_argument("topic", help="Topic, e.g. component")
    practices_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    # ─── list ─────────────────────────────────
    list_parser = subparsers.add_parser("list", help="List indexed resources")
    list_parser.add_argument("kind", choices=["components", "utilities", "plugins"])
    list_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    # ─── mcp ─────────────────────────────────
    mcp_parser = subparsers.add_parser("mcp", help="MCP server for AI assistants")
    mcp_sub = mcp_parser.add_subparsers(dest="mcp_command", help="MCP commands")

    mcp_serve_parser = mcp_sub.add_parser("serve", help="Start MCP server")
    mcp_serve_parser.add_argument(
        "-t", "--transport", choices=["stdio", "sse"], default="stdio",
        help="Transport type (default: stdio)"
    )
    mcp_serve_parser.add_argument(
        "--host", default="localhost", help="SSE host (default: localhost)"
    )
    mcp_serve_parser.add_argument(
        "--port", type=int, default=3333, help="SSE port (default: 3333)"
    )

    mcp_sub.add_parser("install", help="Show MCP client configuration")

    # ─── config ───────────────────────────────
    config_parser = subparsers.add_parser("config", help="Show or change settings")
    config_sub = config_parser.add_subparsers(dest="config_command", help="Config commands")

    config_sub.add_parser("show", help="Print current settings")

    config_set_parser = config_sub.add_parser("set", help="Persist a setting to defaults.ini")
    config_set_parser.add_argument("section", help="INI section, e.g. search")
    config_set_parser.add_argument("key", help="Setting name, e.g. accept_threshold")
    config_set_parser.add_argument("value", help="New value")

    # ─── status ───────────────────────────────
    status_parser = subparsers.add_parser("status", help="Show configuration status")
    status_parser.add_argument("-j", "--json", dest="json_output", action="store_true")

    return parser


# ─── Main Entry Point ────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    _setup_logging(verbose=getattr(args, "verbose", False))

    command = args.command

    if not command:
        parser.print_help()
        return 0

    handlers = {
        "index": cmd_index,
        "query": cmd_query,
        "practices": cmd_practices,
        "list": cmd_list,
        "mcp": cmd_mcp,
        "config": cmd_config,
        "status": cmd_status,
    }

    handler = handlers.get(command)
    if not handler:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except KeyboardInterrupt:
        print("\n\nInterrupted.")
        return 130
    except Exception as e:
        if getattr(args, "verbose", False):
            logger.exception("Error: %s", e)
        else:
            print(f"\n❌ Error: {e}")
            print("   Run with -v for details.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
