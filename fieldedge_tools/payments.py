# =============================================================================
# fieldedge_tools/payments.py  —  Payment tools
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import PAYMENT_METHODS, PAYMENT_STATUSES, ToolDescriptor
from fieldedge_tools.shaping import (
    PAGING,
    create_record,
    enum,
    get_record,
    list_records,
    number,
    post_action,
    schema,
    string,
)

_PAYMENT_ID = {"id": string("Payment ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_payments",
        description="List all payments",
        input_schema=schema({
            **PAGING,
            "customerId": string(),
            "invoiceId": string(),
            "status": enum(PAYMENT_STATUSES),
            "paymentMethod": enum(PAYMENT_METHODS),
            "startDate": string(),
            "endDate": string(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_payment",
        description="Get specific payment",
        input_schema=schema(_PAYMENT_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_process_payment",
        description="Process a new payment",
        input_schema=schema(
            {
                "invoiceId": string(),
                "customerId": string(),
                "amount": number(),
                "paymentMethod": enum(PAYMENT_METHODS),
                "paymentDate": string(),
                "reference": string(),
                "notes": string(),
            },
            required=["invoiceId", "customerId", "amount", "paymentMethod"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_refund_payment",
        description="Refund a payment",
        input_schema=schema(
            {**_PAYMENT_ID, "amount": number(), "reason": string()},
            required=["id", "amount", "reason"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_void_payment",
        description="Void a payment",
        input_schema=schema(
            {**_PAYMENT_ID, "reason": string()},
            required=["id", "reason"],
        ),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_payments":
        return await list_records(client, "/payments", arguments)
    if name == "fieldedge_get_payment":
        return await get_record(client, "/payments", arguments)
    if name == "fieldedge_process_payment":
        return await create_record(client, "/payments", arguments)
    if name == "fieldedge_refund_payment":
        return await post_action(client, "/payments", "refund", arguments, fields=("amount", "reason"))
    if name == "fieldedge_void_payment":
        return await post_action(client, "/payments", "void", arguments, fields=("reason",))
    return ApiResult.fail(UnknownToolError(name))
