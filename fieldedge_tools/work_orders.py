# =============================================================================
# fieldedge_tools/work_orders.py  —  Work order tools
# =============================================================================
#
# A work order is the billable breakdown of a job (labor, material, line
# items).  Work orders are listed either account-wide or beneath one job,
# and unlike most FieldEdge records they are updated with a full PUT.
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import JOB_PRIORITIES, WORK_ORDER_STATUSES, WORK_TYPES, ToolDescriptor
from fieldedge_tools.shaping import (
    PAGING,
    array_of,
    create_record,
    enum,
    get_record,
    identifier,
    item_path,
    list_records,
    number,
    obj,
    schema,
    string,
    string_list,
    update_record,
)

_WORK_ORDER_ID = {"id": string("The work order ID")}

_LINE_ITEM = obj(
    properties={
        "type": enum(("labor", "material", "equipment", "service")),
        "description": string(),
        "quantity": number(),
        "unitPrice": number(),
        "itemId": string(),
    },
    required=["type", "description", "quantity", "unitPrice"],
)

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_work_orders",
        description=(
            "List work orders. Filter by status, customer, technician, and date range, "
            "or pass jobId to list the work orders of a single job."
        ),
        input_schema=schema({
            **PAGING,
            "jobId": string("Only work orders belonging to this job"),
            "status": enum(WORK_ORDER_STATUSES, "Filter by work order status"),
            "customerId": string("Filter work orders by customer ID"),
            "technicianId": string("Filter work orders by assigned technician ID"),
            "startDate": string("Filter by scheduled date (start) in YYYY-MM-DD format"),
            "endDate": string("Filter by scheduled date (end) in YYYY-MM-DD format"),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_work_order",
        description="Get detailed information about a specific work order by ID",
        input_schema=schema(_WORK_ORDER_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_work_order",
        description="Create a new work order",
        input_schema=schema(
            {
                "customerId": string("The customer ID"),
                "jobId": string("Job the work order belongs to"),
                "locationId": string("The service location ID"),
                "description": string("Work order description"),
                "workType": enum(WORK_TYPES, "Type of work"),
                "priority": enum(JOB_PRIORITIES, "Priority level"),
                "scheduledDate": string("Scheduled date in YYYY-MM-DD format"),
                "scheduledTime": string("Scheduled time in HH:MM format"),
                "technicianId": string("Assigned technician ID"),
                "equipmentIds": string_list("Array of equipment IDs related to this work order"),
                "lineItems": array_of(_LINE_ITEM),
                "notes": string("Additional notes or instructions"),
            },
            required=["customerId", "description"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_work_order",
        description="Replace the editable fields of a work order",
        input_schema=schema(
            {
                **_WORK_ORDER_ID,
                "status": enum(WORK_ORDER_STATUSES),
                "description": string(),
                "lineItems": array_of(_LINE_ITEM),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
]


async def list_work_orders(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    job_id = identifier(arguments, "jobId")
    if job_id is None:
        return await list_records(client, "/work-orders", arguments)
    filters = {key: value for key, value in arguments.items() if key != "jobId"}
    return await list_records(client, item_path("/jobs", job_id, "work-orders"), filters)


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_work_orders":
        return await list_work_orders(client, arguments)
    if name == "fieldedge_get_work_order":
        return await get_record(client, "/work-orders", arguments)
    if name == "fieldedge_create_work_order":
        return await create_record(client, "/work-orders", arguments)
    if name == "fieldedge_update_work_order":
        return await update_record(client, "/work-orders", arguments, method="PUT")
    return ApiResult.fail(UnknownToolError(name))
