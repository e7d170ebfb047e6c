# =============================================================================
# fieldedge/__init__.py
# =============================================================================
# The API-client layer for the FieldEdge field-service REST API.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The client, the result type
#   and the dispatcher can be driven from a plain asyncio REPL (or a test)
#   with an httpx MockTransport standing in for the network.
#
# LAYOUT:
#   config.py      — ClientConfig + environment loading
#   errors.py      — the four failure kinds and the ApiResult wrapper
#   models.py      — ToolDescriptor / ToolCallRequest / ToolCallResult and
#                    the closed vocabularies the tool schemas reference
#   client.py      — FieldEdgeClient: one REST round-trip per call
#   dispatcher.py  — ToolDispatcher: name → handler → envelope
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.config import ClientConfig, ConfigurationError, load_config
from fieldedge.dispatcher import ToolDispatcher
from fieldedge.errors import (
    ApiResult,
    ErrorKind,
    FieldEdgeError,
    InvalidArgumentError,
    TransportError,
    UnknownToolError,
    UpstreamError,
)
from fieldedge.models import ToolCallRequest, ToolCallResult, ToolDescriptor

__all__ = [
    "ApiResult",
    "ClientConfig",
    "ConfigurationError",
    "ErrorKind",
    "FieldEdgeClient",
    "FieldEdgeError",
    "InvalidArgumentError",
    "ToolCallRequest",
    "ToolCallResult",
    "ToolDescriptor",
    "ToolDispatcher",
    "TransportError",
    "UnknownToolError",
    "UpstreamError",
    "load_config",
]
