# =============================================================================
# fieldedge_tools/mcp_server.py  —  FastMCP server (the protocol shell)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server that a model connects to over stdio.
#   It contains no FieldEdge logic of its own:
#
#     1. The caller lists tools       → every ToolDescriptor, schema as-is
#     2. The caller invokes a tool    → ForwardingTool.run()
#     3. run() hands the call to ToolDispatcher.dispatch()
#     4. The envelope text goes back; an error envelope is raised as
#        ToolError so FastMCP marks the result isError=true
#
#   Dashboard resources are registered from fieldedge_tools/resources.py.
#
# TOOL REGISTRATION:
#   The schemas are JSON-Schema data, not Python signatures, so each
#   descriptor is registered as a Tool subclass whose ``parameters`` is that
#   schema verbatim (instead of the usual @mcp.tool() decorator).
#
# RUNNING THIS SERVER:
#   python main.py            (loads .env, builds the client, runs stdio)
# =============================================================================

import json
import logging
import sys
from typing import Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from fieldedge.dispatcher import ToolDispatcher
from fieldedge.models import ToolDescriptor
from fieldedge_tools.resources import DEFAULT_UI_DIR, register_resources

SERVER_NAME = "fieldedge-mcp-server"

INSTRUCTIONS = (
    "Tools for the FieldEdge field-service platform: customers, jobs, work orders, "
    "invoices, estimates, equipment, technicians, scheduling and dispatch, inventory, "
    "payments, locations, service agreements, tasks and reports. Every tool returns the "
    "FieldEdge JSON response unchanged. List tools accept page/pageSize."
)

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: STDOUT carries the MCP stdio transport and any stray
# line there corrupts the JSON-RPC stream.
#
#   CYAN    incoming tool call (name + arguments)
#   YELLOW  intermediate status
#   GREEN   response sent back
# =============================================================================

_CYAN = "\033[36m"     # Requests
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status
_RESET = "\033[0m"

# Responses can be whole pages of records; the log line is cut here.
_MAX_LOGGED_RESPONSE = 500

logger = logging.getLogger("fieldedge.mcp")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, arguments: dict) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> None:
    """Log the response text, compacted and truncated, in GREEN."""
    try:
        compact = json.dumps(json.loads(text), separators=(",", ":"))
    except ValueError:
        compact = text
    if len(compact) > _MAX_LOGGED_RESPONSE:
        compact = compact[:_MAX_LOGGED_RESPONSE] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")


# =============================================================================
# ForwardingTool — one registered tool per ToolDescriptor
# =============================================================================
class ForwardingTool(Tool):
    """A FastMCP tool whose only job is to call ToolDispatcher.dispatch()."""

    _dispatcher: Any = PrivateAttr(default=None)

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, dispatcher: ToolDispatcher) -> "ForwardingTool":
        tool = cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments or {})
        envelope = await self._dispatcher.dispatch(self.name, arguments)
        if envelope.is_error:
            _log_status(envelope.text)
            raise ToolError(envelope.text)
        _log_response(self.name, envelope.text)
        return ToolResult(content=[TextContent(type="text", text=block.text) for block in envelope.content])


# =============================================================================
# Server factory
# =============================================================================
def create_server(dispatcher: ToolDispatcher, ui_dir: Optional[str] = None) -> FastMCP:
    """Build the FastMCP server around an already-wired dispatcher.

    Args:
        dispatcher: Owns the client and the routing map.
        ui_dir: Directory holding the pre-built dashboard apps.

    Returns:
        A FastMCP instance; call ``.run()`` for stdio.
    """
    mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)
    for descriptor in dispatcher.list_tools():
        mcp.add_tool(ForwardingTool.from_descriptor(descriptor, dispatcher))
    register_resources(mcp, ui_dir or DEFAULT_UI_DIR)
    logger.info(f"Registered {len(dispatcher.list_tools())} FieldEdge tools")
    return mcp
