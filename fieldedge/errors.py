# =============================================================================
# fieldedge/errors.py  —  Failure kinds and the ApiResult wrapper
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Defines the four ways a tool call can fail, as plain frozen dataclasses
#   tagged with an ErrorKind, plus ApiResult: the value every client call
#   and every tool handler returns.
#
#   Failures are RETURNED, not raised.  The HTTP client hands back
#   ApiResult.fail(UpstreamError(...)); handlers pass the failed result up
#   unchanged; the dispatcher looks at the tag and builds the envelope.
#
#     InvalidArgumentError — caller omitted / mangled a field (no network call)
#     UnknownToolError     — name not in the routing map
#     UpstreamError        — FieldEdge answered with a non-2xx status
#     TransportError       — no status at all (DNS, refused, timeout)
# =============================================================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union


class ErrorKind(str, Enum):
    """Tag carried by every failure value."""
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN_TOOL = "unknown_tool"
    UPSTREAM = "upstream"
    TRANSPORT = "transport"

    @classmethod
    def caller_faults(cls) -> frozenset:
        """Kinds caused by the caller rather than by FieldEdge or the network."""
        return frozenset({cls.INVALID_ARGUMENT, cls.UNKNOWN_TOOL})


# -----------------------------------------------------------------------------
# The failure values
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class InvalidArgumentError:
    message: str                       # What was wrong with the arguments
    tool_name: str = ""                # Tool the arguments were meant for

    kind = ErrorKind.INVALID_ARGUMENT

    def describe(self) -> str:
        if self.tool_name:
            return f"Invalid arguments for {self.tool_name}: {self.message}"
        return f"Invalid arguments: {self.message}"


@dataclass(frozen=True)
class UnknownToolError:
    tool_name: str

    kind = ErrorKind.UNKNOWN_TOOL

    def describe(self) -> str:
        return f"Unknown tool: {self.tool_name}"


@dataclass(frozen=True)
class UpstreamError:
    status_code: int                   # HTTP status FieldEdge returned
    message: str                       # Upstream "message" field, or the body text
    raw_body: str = ""                 # Body exactly as received

    kind = ErrorKind.UPSTREAM

    def describe(self) -> str:
        return f"FieldEdge API error ({self.status_code}): {self.message}"


@dataclass(frozen=True)
class TransportError:
    message: str

    kind = ErrorKind.TRANSPORT

    def describe(self) -> str:
        return f"FieldEdge API request failed: {self.message}"


FieldEdgeError = Union[InvalidArgumentError, UnknownToolError, UpstreamError, TransportError]


# -----------------------------------------------------------------------------
# ApiResult — success value XOR one failure
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ApiResult:
    """Outcome of one client call or one tool handler.

    Exactly one of ``value`` / ``error`` is meaningful: ``error`` is None on
    success.  A successful call may legitimately carry ``value=None`` only
    when built directly; the client normalizes empty bodies to ``{}``.
    """

    value: Any = None
    error: Optional[FieldEdgeError] = None

    @classmethod
    def ok(cls, value: Any) -> "ApiResult":
        return cls(value=value)

    @classmethod
    def fail(cls, error: FieldEdgeError) -> "ApiResult":
        return cls(error=error)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None
