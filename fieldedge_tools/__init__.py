# =============================================================================
# fieldedge_tools/__init__.py  —  The tool catalogue
# =============================================================================
# This package is the translation layer between MCP and the FieldEdge
# client.  Each domain module exposes two things:
#
#   TOOLS   list[ToolDescriptor]   what the calling model can see
#   handle  async (client, name, arguments) -> ApiResult
#
# Below they are merged into the two structures the dispatcher needs:
#
#   ALL_TOOLS       every descriptor, in domain order
#   TOOL_HANDLERS   flat {tool name: that domain's handle}
#
# ToolDispatcher checks at construction that the two cover exactly the same
# names, so a descriptor without a handler (or the reverse) fails at startup.
# =============================================================================

from fieldedge_tools import (
    customers,
    equipment,
    estimates,
    inventory,
    invoices,
    jobs,
    locations,
    payments,
    reporting,
    scheduling,
    service_agreements,
    tasks,
    technicians,
    work_orders,
)

DOMAINS = (
    customers,
    jobs,
    work_orders,
    invoices,
    estimates,
    equipment,
    technicians,
    scheduling,
    inventory,
    payments,
    reporting,
    locations,
    service_agreements,
    tasks,
)

ALL_TOOLS = [tool for domain in DOMAINS for tool in domain.TOOLS]

TOOL_HANDLERS = {tool.name: domain.handle for domain in DOMAINS for tool in domain.TOOLS}

__all__ = ["ALL_TOOLS", "DOMAINS", "TOOL_HANDLERS"]
