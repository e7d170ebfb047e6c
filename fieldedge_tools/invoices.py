# =============================================================================
# fieldedge_tools/invoices.py  —  Invoice tools
# =============================================================================
#
# Invoice lifecycle: draft → sent → viewed → partial/paid (or overdue, void).
# Payments against an invoice are posted to /payments; the PDF rendering is
# downloaded as bytes and handed back base64-encoded.
# =============================================================================

import base64

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import (
    INVOICE_STATUSES,
    LINE_ITEM_TYPES,
    PAYMENT_METHODS,
    SORT_ORDERS,
    ToolDescriptor,
)
from fieldedge_tools.shaping import (
    PAGING,
    array_of,
    create_record,
    delete_record,
    enum,
    get_record,
    identifier,
    item_path,
    list_records,
    missing_identifier,
    number,
    obj,
    post_action,
    schema,
    string,
    update_record,
)

_INVOICE_ID = {"id": string("Invoice ID")}

LINE_ITEM = obj(
    properties={
        "type": enum(LINE_ITEM_TYPES),
        "description": string(),
        "quantity": number(),
        "unitPrice": number(),
        "discount": number(default=0),
        "tax": number(default=0),
        "itemId": string(),
    },
    required=["type", "description", "quantity", "unitPrice"],
)

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_invoices",
        description="List all invoices with optional filtering and pagination",
        input_schema=schema({
            **PAGING,
            "status": enum(INVOICE_STATUSES),
            "customerId": string("Filter by customer ID"),
            "jobId": string("Filter by job ID"),
            "startDate": string("Filter invoices from this date"),
            "endDate": string("Filter invoices to this date"),
            "sortBy": string(),
            "sortOrder": enum(SORT_ORDERS),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_invoice",
        description="Get a specific invoice by ID",
        input_schema=schema(_INVOICE_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_invoice",
        description="Create a new invoice",
        input_schema=schema(
            {
                "customerId": string("Customer ID"),
                "jobId": string("Associated job ID"),
                "issueDate": string("Issue date (ISO 8601)"),
                "dueDate": string("Due date (ISO 8601)"),
                "lineItems": array_of(LINE_ITEM),
                "paymentTerms": string(),
                "notes": string(),
            },
            required=["customerId", "issueDate", "dueDate", "lineItems"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_invoice",
        description="Update an existing invoice",
        input_schema=schema(
            {
                **_INVOICE_ID,
                "status": enum(INVOICE_STATUSES),
                "dueDate": string(),
                "lineItems": array_of(LINE_ITEM),
                "discount": number(),
                "paymentTerms": string(),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_invoice",
        description="Delete an invoice",
        input_schema=schema(_INVOICE_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_send_invoice",
        description="Send invoice to customer via email",
        input_schema=schema(
            {
                **_INVOICE_ID,
                "email": string("Override customer email"),
                "subject": string("Email subject"),
                "message": string("Email message"),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_void_invoice",
        description="Void an invoice",
        input_schema=schema(
            {**_INVOICE_ID, "reason": string("Reason for voiding")},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_record_payment",
        description="Record a payment against an invoice",
        input_schema=schema(
            {
                "invoiceId": string("Invoice ID"),
                "amount": number("Payment amount"),
                "paymentMethod": enum(PAYMENT_METHODS),
                "paymentDate": string("Payment date (ISO 8601)"),
                "reference": string("Payment reference/confirmation number"),
                "notes": string(),
            },
            required=["invoiceId", "amount", "paymentMethod"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_invoice_pdf",
        description="Generate and get invoice PDF (base64-encoded)",
        input_schema=schema(_INVOICE_ID, required=["id"]),
    ),
]


async def invoice_pdf(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    invoice_id = identifier(arguments)
    if invoice_id is None:
        return missing_identifier()
    result = await client.download(item_path("/invoices", invoice_id, "pdf"))
    if result.is_error:
        return result
    pdf = result.value
    return ApiResult.ok({
        "success": True,
        "message": "PDF generated successfully",
        "size": len(pdf),
        "data": base64.b64encode(pdf).decode("ascii"),
    })


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_invoices":
        return await list_records(client, "/invoices", arguments)
    if name == "fieldedge_get_invoice":
        return await get_record(client, "/invoices", arguments)
    if name == "fieldedge_create_invoice":
        return await create_record(client, "/invoices", arguments)
    if name == "fieldedge_update_invoice":
        return await update_record(client, "/invoices", arguments)
    if name == "fieldedge_delete_invoice":
        return await delete_record(client, "/invoices", arguments)
    if name == "fieldedge_send_invoice":
        return await post_action(
            client, "/invoices", "send", arguments, fields=("email", "subject", "message"),
        )
    if name == "fieldedge_void_invoice":
        return await post_action(client, "/invoices", "void", arguments, fields=("reason",))
    if name == "fieldedge_record_payment":
        return await create_record(client, "/payments", arguments)
    if name == "fieldedge_get_invoice_pdf":
        return await invoice_pdf(client, arguments)
    return ApiResult.fail(UnknownToolError(name))
