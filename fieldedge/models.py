# =============================================================================
# fieldedge/models.py  —  Data Models (the "nouns" of the adapter)
# =============================================================================
#
# Three kinds of nouns live here:
#
#   1. ToolDescriptor   — one entry of the tool catalogue (static, immutable)
#   2. ToolCallRequest  — one inbound call (transient)
#      ToolCallResult   — the envelope handed back for that call (transient)
#   3. Vocabularies     — the closed value sets FieldEdge documents for status,
#                         priority, payment method, ...  Tool schemas list them
#                         as JSON-Schema enums.  They describe; they never gate.
#
# FieldEdge records themselves (customers, jobs, invoices, ...) are NOT
# modelled.  They arrive as JSON and leave as JSON, untouched.
# =============================================================================

import json
from dataclasses import dataclass, field
from typing import Any, Optional


# -----------------------------------------------------------------------------
# ToolDescriptor — name + description + JSON-Schema for the arguments
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    name: str                          # Unique, "fieldedge_" prefixed
    description: str                   # Read by the calling model
    input_schema: dict                 # {"type": "object", "properties": ..., "required": [...]}

    @property
    def required(self) -> list[str]:
        return list(self.input_schema.get("required", []))

    def to_dict(self) -> dict:
        """Discovery shape: ``{name, description, inputSchema}``."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# ToolCallRequest / ToolCallResult — one call in, one envelope out
# -----------------------------------------------------------------------------
@dataclass
class ToolCallRequest:
    name: str
    arguments: dict = field(default_factory=dict)

    @classmethod
    def build(cls, name: str, arguments: Optional[dict] = None) -> "ToolCallRequest":
        # Protocol clients may send null for a tool with no parameters.
        return cls(name=name, arguments=dict(arguments or {}))


@dataclass
class TextContent:
    text: str
    type: str = "text"

    def to_dict(self) -> dict:
        return {"type": self.type, "text": self.text}


@dataclass
class ToolCallResult:
    """Envelope returned for every dispatch, success or failure."""

    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def success(cls, value: Any) -> "ToolCallResult":
        return cls(content=[TextContent(text=serialize(value))])

    @classmethod
    def failure(cls, message: str) -> "ToolCallResult":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(block.text for block in self.content)

    def to_dict(self) -> dict:
        return {
            "content": [block.to_dict() for block in self.content],
            "isError": self.is_error,
        }


def serialize(value: Any) -> str:
    """Pretty-print a FieldEdge payload the way every success envelope carries it."""
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


# =============================================================================
# Vocabularies
# =============================================================================
# Tuples, in the order FieldEdge documents them.  Referenced from the tool
# schemas in fieldedge_tools/; kept here so a status set that appears on
# several tools (list, update, customer sub-resources) is written once.
# =============================================================================

SORT_ORDERS = ("asc", "desc")

CUSTOMER_STATUSES = ("active", "inactive", "prospect")
CUSTOMER_TYPES = ("residential", "commercial")

JOB_STATUSES = (
    "scheduled", "dispatched", "in-progress", "on-hold",
    "completed", "cancelled", "invoiced",
)
JOB_PRIORITIES = ("low", "normal", "high", "emergency")

WORK_ORDER_STATUSES = ("open", "scheduled", "in_progress", "completed", "canceled", "on_hold")
WORK_TYPES = ("service", "repair", "installation", "maintenance", "inspection")

INVOICE_STATUSES = ("draft", "sent", "viewed", "partial", "paid", "overdue", "void")
ESTIMATE_STATUSES = ("draft", "sent", "viewed", "approved", "declined", "expired")
LINE_ITEM_TYPES = ("service", "part", "equipment", "labor")

PAYMENT_METHODS = ("cash", "check", "credit-card", "debit-card", "ach", "wire", "other")
PAYMENT_STATUSES = ("pending", "processed", "failed", "refunded")

EQUIPMENT_STATUSES = ("active", "inactive", "decommissioned")
TECHNICIAN_STATUSES = ("active", "inactive", "on-leave")

APPOINTMENT_STATUSES = (
    "scheduled", "confirmed", "dispatched", "en-route",
    "arrived", "completed", "cancelled", "no-show",
)

INVENTORY_TRANSACTION_TYPES = ("receipt", "issue", "adjustment", "transfer", "return")

LOCATION_STATUSES = ("active", "inactive")
LOCATION_TYPES = ("primary", "secondary", "billing", "service")

AGREEMENT_STATUSES = ("active", "expired", "cancelled")
AGREEMENT_TYPES = ("maintenance", "warranty", "service-plan")
BILLING_CYCLES = ("monthly", "quarterly", "annual")
SERVICE_FREQUENCIES = ("weekly", "monthly", "quarterly", "semi-annual", "annual")

TASK_STATUSES = ("pending", "in-progress", "completed", "cancelled")
TASK_PRIORITIES = ("low", "normal", "high", "urgent")
TASK_TYPES = ("call", "email", "follow-up", "inspection", "other")

REPORT_GROUPINGS = ("day", "week", "month")
