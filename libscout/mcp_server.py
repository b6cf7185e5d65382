"""
MCP (Model Context Protocol) server for libscout.

Serves libscout's resource queries as MCP tools for AI coding
assistants, so they can look up shared components, utilities and
plugins instead of guessing at prop names.

Requires optional dependency:
    pip install libscout[mcp]

Your assistant asks, I answer. With props. And events. Documented ones, even.
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

from libscout.config import ScoutConfig

logger = logging.getLogger(__name__)


def _check_mcp_dependencies() -> Tuple[bool, str]:
    """Check if MCP dependencies are installed."""
    try:
        import mcp  # noqa: F401
        return True, "MCP dependencies available"
    except ImportError:
        return False, (
            "MCP dependencies not installed. "
            "Install with: pip install libscout[mcp]"
        )


def _require_string(arguments: Dict[str, Any], key: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"'{key}' is required and must be a non-empty string")
    return value.strip()


class ScoutMCPServer:
    """MCP server that exposes libscout's query tools.

    Tools exposed:
        - build_index: (Re)build the resource index
        - index_status: Counts per resource kind
        - query_component: Component props, events, docs and usage
        - query_utility: Utility module or function lookup
        - query_plugin: Plugin files, docs and usage
        - get_best_practices: Documentation excerpts for a topic
        - list_components / list_utilities / list_plugins
    """

    def __init__(self, config: Optional[ScoutConfig] = None):
        self.config = config or ScoutConfig()

    def _create_query_tool(self) -> Any:
        from libscout.index import ResourceIndex
        from libscout.query import ResourceQueryTool

        index = ResourceIndex(config=self.config)
        return ResourceQueryTool(index)

    def run_stdio(self) -> None:
        """Run the MCP server using stdio transport."""
        ok, msg = _check_mcp_dependencies()
        if not ok:
            raise RuntimeError(msg)

        import asyncio

        from mcp.server import Server
        from mcp.server.stdio import stdio_server
        import mcp.types as types

        server = Server("libscout")
        self._register_tools(server, types)

        async def _run() -> None:
            async with stdio_server() as (read_stream, write_stream):
                await server.run(read_stream, write_stream, server.create_initialization_options())

        asyncio.run(_run())

    def run_sse(self, host: str = "localhost", port: int = 3333) -> None:
        """Run the MCP server using SSE transport."""
        ok, msg = _check_mcp_dependencies()
        if not ok:
            raise RuntimeError(msg)

        from mcp.server import Server
        import mcp.types as types

        server = Server("libscout")
        self._register_tools(server, types)

        try:
            from mcp.server.sse import SseServerTransport
            from starlette.applications import Starlette
            from starlette.routing import Route
            import uvicorn

            sse = SseServerTransport("/messages")

            async def handle_sse(request: Any) -> Any:
                async with sse.connect_sse(
                    request.scope, request.receive, request._send
                ) as streams:
                    await server.run(
                        streams[0], streams[1],
                        server.create_initialization_options(),
                    )

            app = Starlette(routes=[
                Route("/sse", endpoint=handle_sse),
                Route("/messages", endpoint=sse.handle_post_message, methods=["POST"]),
            ])

            print(f"libscout MCP server running on http://{host}:{port}")
            print(f"  SSE endpoint: http://{host}:{port}/sse")
            uvicorn.run(app, host=host, port=port)

        except ImportError:
            raise RuntimeError(
                "SSE transport requires additional dependencies: "
                "pip install starlette uvicorn"
            )

    def _register_tools(self, server: Any, types: Any) -> None:
        """Register all libscout tools with the MCP server."""
        query_tool = self._create_query_tool()

        name_only = {
            "type": "object",
            "properties": {
                "name": {"type": "string", "description": "Resource name"},
            },
            "required": ["name"],
        }
        no_arguments = {"type": "object", "properties": {}}

        @server.list_tools()
        async def list_tools() -> list:
            return [
                types.Tool(
                    name="build_index",
                    description="Rebuild the shared library resource index",
                    inputSchema=no_arguments,
                ),
                types.Tool(
                    name="index_status",
                    description="Number of indexed components, utilities, configs, plugins and examples",
                    inputSchema=no_arguments,
                ),
                types.Tool(
                    name="query_component",
                    description=(
                        "Get a shared component's props, events, documentation "
                        "and usage examples (fuzzy matched, with suggestions)"
                    ),
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "name": {
                                "type": "string",
                                "description": "Component name, e.g. yb-avatar",
                            },
                            "category": {
                                "type": "string",
                                "description": "Category hint, e.g. form or chart (optional)",
                            },
                        },
                        "required": ["name"],
                    },
                ),
                types.Tool(
                    name="query_utility",
                    description="Look up a utility module or a function inside one",
                    inputSchema=name_only,
                ),
                types.Tool(
                    name="query_plugin",
                    description="Get a plugin's files, documentation and usage",
                    inputSchema=name_only,
                ),
                types.Tool(
                    name="get_best_practices",
                    description="Documentation excerpts and general advice for a topic",
                    inputSchema={
                        "type": "object",
                        "properties": {
                            "topic": {
                                "type": "string",
                                "description": "Topic, e.g. component-usage",
                            },
                        },
                        "required": ["topic"],
                    },
                ),
                types.Tool(
                    name="list_components",
                    description="List every indexed component",
                    inputSchema=no_arguments,
                ),
                types.Tool(
                    name="list_utilities",
                    description="List every indexed utility module",
                    inputSchema=no_arguments,
                ),
                types.Tool(
                    name="list_plugins",
                    description="List every indexed plugin",
                    inputSchema=no_arguments,
                ),
            ]

        @server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list:
            result = await self._handle_tool_call(name, arguments or {}, query_tool)
            return [types.TextContent(
                type="text",
                text=json.dumps(result, indent=2, default=str),
            )]

    async def _handle_tool_call(
        self,
        name: str,
        arguments: Dict[str, Any],
        query_tool: Any,
    ) -> Any:
        """Tool call handler.

        Dispatches to the appropriate query method based on tool name.
        """
        try:
            if name == "build_index":
                await query_tool.index.build()
                return query_tool.index.stats()

            elif name == "index_status":
                return await query_tool.status()

            elif name == "query_component":
                category = arguments.get("category")
                return await query_tool.query_component(
                    _require_string(arguments, "name"),
                    category=category if isinstance(category, str) and category else None,
                )

            elif name == "query_utility":
                return await query_tool.query_utility(_require_string(arguments, "name"))

            elif name == "query_plugin":
                return await query_tool.query_plugin(_require_string(arguments, "name"))

            elif name == "get_best_practices":
                return await query_tool.get_best_practices(
                    _require_string(arguments, "topic")
                )

            elif name == "list_components":
                return await query_tool.get_all_components()

            elif name == "list_utilities":
                return await query_tool.get_all_utilities()

            elif name == "list_plugins":
                return await query_tool.get_all_plugins()

            else:
                return {"error": f"Unknown tool: {name}"}

        except Exception as e:
            logger.exception("Tool call error: %s", e)
            return {"error": str(e)}
