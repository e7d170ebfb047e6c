# =============================================================================
# fieldedge/dispatcher.py  —  Tool name → handler → envelope
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   ToolDispatcher is the boundary between the protocol server and the
#   FieldEdge client.  For one call it:
#     1. looks the name up in the routing map     (UnknownToolError)
#     2. checks the descriptor's required fields   (InvalidArgumentError)
#     3. awaits the domain handler                 (ApiResult)
#     4. turns the ApiResult into a ToolCallResult
#
#   dispatch() never raises.  Even a bug inside a handler comes back as an
#   error envelope (and a logged traceback).
#
# STARTUP CHECK:
#   Every descriptor must have exactly one handler and every handler key a
#   descriptor.  A mismatch raises ValueError in __init__, before the server
#   advertises anything.
# =============================================================================

import logging
from typing import Awaitable, Callable, Iterable, Mapping, Optional

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import (
    ApiResult,
    ErrorKind,
    InvalidArgumentError,
    UnknownToolError,
)
from fieldedge.models import ToolCallRequest, ToolCallResult, ToolDescriptor

logger = logging.getLogger(__name__)

Handler = Callable[[FieldEdgeClient, str, dict], Awaitable[ApiResult]]


def _is_missing(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


class ToolDispatcher:
    """Routes tool calls to domain handlers.

    Args:
        client: The FieldEdge client every handler receives.
        tools: The full descriptor catalogue.
        handlers: Flat ``tool name → handler`` map.

    Raises:
        ValueError: duplicate descriptor names, or descriptors and handlers
            that do not cover the same set of names.
    """

    def __init__(
        self,
        client: FieldEdgeClient,
        tools: Iterable[ToolDescriptor],
        handlers: Mapping[str, Handler],
    ):
        self._client = client
        self._tools = list(tools)
        self._descriptors: dict[str, ToolDescriptor] = {}
        for tool in self._tools:
            if tool.name in self._descriptors:
                raise ValueError(f"Duplicate tool name in registry: {tool.name}")
            self._descriptors[tool.name] = tool

        self._handlers = dict(handlers)
        unrouted = sorted(set(self._descriptors) - set(self._handlers))
        orphaned = sorted(set(self._handlers) - set(self._descriptors))
        if unrouted or orphaned:
            raise ValueError(
                f"Tool registry and routing map disagree "
                f"(no handler: {unrouted}, no descriptor: {orphaned})"
            )

    def list_tools(self) -> list[ToolDescriptor]:
        return list(self._tools)

    async def dispatch(self, name: str, arguments: Optional[dict] = None) -> ToolCallResult:
        """Run one tool call and wrap the outcome.

        Args:
            name: Tool name as advertised in the catalogue.
            arguments: Caller arguments; None is treated as ``{}``.

        Returns:
            A success envelope holding the pretty-printed JSON value, or an
            error envelope holding one human-readable message.
        """
        request = ToolCallRequest.build(name, arguments)
        try:
            result = await self._run(request)
        except Exception as e:
            logger.exception(f"Tool {request.name} raised unexpectedly")
            return ToolCallResult.failure(f"{request.name} failed: {e}")
        return self._envelope(request, result)

    async def _run(self, request: ToolCallRequest) -> ApiResult:
        descriptor = self._descriptors.get(request.name)
        if descriptor is None:
            return ApiResult.fail(UnknownToolError(request.name))

        missing = [f for f in descriptor.required if _is_missing(request.arguments.get(f))]
        if missing:
            return ApiResult.fail(InvalidArgumentError(
                f"missing required field(s): {', '.join(missing)}",
                tool_name=request.name,
            ))

        handler = self._handlers[request.name]
        return await handler(self._client, request.name, request.arguments)

    def _envelope(self, request: ToolCallRequest, result: ApiResult) -> ToolCallResult:
        if not result.is_error:
            return ToolCallResult.success(result.value)

        error = result.error
        if error.kind in ErrorKind.caller_faults():
            logger.info(f"{request.name} rejected: {error.describe()}")
        else:
            logger.warning(f"{request.name} failed: {error.describe()}")
        return ToolCallResult.failure(error.describe())
