# =============================================================================
# main.py  —  Entry point for the FieldEdge MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py        (or the installed `fieldedge-mcp` script)
#
# WHAT HAPPENS:
#   1. .env is loaded into the environment (python-dotenv)
#   2. Logging is pointed at stderr
#   3. ClientConfig is read from FIELDEDGE_* variables; a missing API key
#      exits with status 1 before anything is advertised
#   4. FieldEdgeClient → ToolDispatcher → FastMCP server are wired together
#   5. The server runs on stdio until the client disconnects
#
# REQUIRED:
#   FIELDEDGE_API_KEY
# OPTIONAL:
#   FIELDEDGE_ENVIRONMENT, FIELDEDGE_API_URL, FIELDEDGE_COMPANY_ID,
#   FIELDEDGE_SUBSCRIPTION_KEY, FIELDEDGE_TIMEOUT, FIELDEDGE_UI_DIR,
#   FIELDEDGE_LOG_LEVEL
# =============================================================================

import logging
import os
import sys

from dotenv import load_dotenv

# Load .env BEFORE reading any FIELDEDGE_* variable.
load_dotenv()

from fieldedge.client import FieldEdgeClient
from fieldedge.config import ConfigurationError, load_config
from fieldedge.dispatcher import ToolDispatcher
from fieldedge_tools import ALL_TOOLS, TOOL_HANDLERS
from fieldedge_tools.mcp_server import configure_logging, create_server


def main() -> int:
    configure_logging(os.getenv("FIELDEDGE_LOG_LEVEL", "INFO"))

    try:
        config = load_config()
    except ConfigurationError as e:
        logging.error(f"Configuration error: {e}")
        return 1

    client = FieldEdgeClient(config)
    dispatcher = ToolDispatcher(client, ALL_TOOLS, TOOL_HANDLERS)
    server = create_server(dispatcher, ui_dir=os.getenv("FIELDEDGE_UI_DIR"))

    logging.info(f"FieldEdge MCP server starting against {config.base_url}")
    server.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
