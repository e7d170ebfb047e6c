# =============================================================================
# fieldedge_tools/estimates.py  —  Estimate (quote) tools
# =============================================================================
#
# An approved estimate becomes either a job (work to schedule) or an
# invoice (work already done).  Both conversions are single upstream
# actions; FieldEdge copies the line items across.
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import ESTIMATE_STATUSES, SORT_ORDERS, ToolDescriptor
from fieldedge_tools.invoices import LINE_ITEM
from fieldedge_tools.shaping import (
    PAGING,
    array_of,
    boolean,
    create_record,
    delete_record,
    enum,
    get_record,
    list_records,
    post_action,
    schema,
    string,
    string_list,
    update_record,
)

_ESTIMATE_ID = {"id": string("Estimate ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_estimates",
        description="List all estimates with optional filtering",
        input_schema=schema({
            **PAGING,
            "status": enum(ESTIMATE_STATUSES),
            "customerId": string(),
            "sortBy": string(),
            "sortOrder": enum(SORT_ORDERS),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_estimate",
        description="Get a specific estimate by ID",
        input_schema=schema(_ESTIMATE_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_estimate",
        description="Create a new estimate/quote",
        input_schema=schema(
            {
                "customerId": string(),
                "issueDate": string(),
                "expiryDate": string(),
                "lineItems": array_of(LINE_ITEM),
                "notes": string(),
            },
            required=["customerId", "issueDate", "expiryDate", "lineItems"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_estimate",
        description="Update an existing estimate",
        input_schema=schema(
            {
                **_ESTIMATE_ID,
                "status": enum(ESTIMATE_STATUSES),
                "expiryDate": string(),
                "lineItems": array_of(LINE_ITEM),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_estimate",
        description="Delete an estimate",
        input_schema=schema(_ESTIMATE_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_send_estimate",
        description="Send estimate to customer via email",
        input_schema=schema(
            {**_ESTIMATE_ID, "email": string(), "subject": string(), "message": string()},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_approve_estimate",
        description="Mark estimate as approved and optionally create a job",
        input_schema=schema(
            {**_ESTIMATE_ID, "createJob": boolean(default=True), "notes": string()},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_convert_estimate_to_invoice",
        description="Convert an approved estimate to an invoice",
        input_schema=schema(
            {**_ESTIMATE_ID, "issueDate": string(), "dueDate": string()},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_convert_estimate_to_job",
        description="Convert an approved estimate into a scheduled job",
        input_schema=schema(
            {
                **_ESTIMATE_ID,
                "scheduledStart": string("Scheduled start date/time (ISO 8601)"),
                "assignedTechnicians": string_list("Technician IDs"),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_estimates":
        return await list_records(client, "/estimates", arguments)
    if name == "fieldedge_get_estimate":
        return await get_record(client, "/estimates", arguments)
    if name == "fieldedge_create_estimate":
        return await create_record(client, "/estimates", arguments)
    if name == "fieldedge_update_estimate":
        return await update_record(client, "/estimates", arguments)
    if name == "fieldedge_delete_estimate":
        return await delete_record(client, "/estimates", arguments)
    if name == "fieldedge_send_estimate":
        return await post_action(
            client, "/estimates", "send", arguments, fields=("email", "subject", "message"),
        )
    if name == "fieldedge_approve_estimate":
        return await post_action(
            client, "/estimates", "approve", arguments, fields=("createJob", "notes"),
        )
    if name == "fieldedge_convert_estimate_to_invoice":
        return await post_action(
            client, "/estimates", "convert-to-invoice", arguments, fields=("issueDate", "dueDate"),
        )
    if name == "fieldedge_convert_estimate_to_job":
        return await post_action(
            client, "/estimates", "convert-to-job", arguments,
            fields=("scheduledStart", "assignedTechnicians", "notes"),
        )
    return ApiResult.fail(UnknownToolError(name))
