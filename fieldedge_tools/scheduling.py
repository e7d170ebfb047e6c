# =============================================================================
# fieldedge_tools/scheduling.py  —  Appointments and the dispatch board
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import APPOINTMENT_STATUSES, ToolDescriptor
from fieldedge_tools.shaping import (
    PAGING,
    boolean,
    create_record,
    enum,
    get_record,
    list_records,
    obj,
    pick,
    post_action,
    schema,
    string,
    string_list,
    update_record,
)

_APPOINTMENT_ID = {"id": string("Appointment ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_appointments",
        description="List appointments with filtering",
        input_schema=schema({
            "startDate": string(),
            "endDate": string(),
            "technicianId": string(),
            "customerId": string(),
            "status": enum(APPOINTMENT_STATUSES),
            **PAGING,
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_appointment",
        description="Get specific appointment",
        input_schema=schema(_APPOINTMENT_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_appointment",
        description="Create a new appointment",
        input_schema=schema(
            {
                "jobId": string(),
                "customerId": string(),
                "technicianId": string(),
                "startTime": string(),
                "endTime": string(),
                "appointmentType": string(),
                "arrivalWindow": obj(properties={"start": string(), "end": string()}),
                "notes": string(),
            },
            required=["jobId", "customerId", "technicianId", "startTime", "endTime", "appointmentType"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_appointment",
        description="Update an appointment",
        input_schema=schema(
            {
                **_APPOINTMENT_ID,
                "startTime": string(),
                "endTime": string(),
                "technicianId": string(),
                "status": enum(APPOINTMENT_STATUSES),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_cancel_appointment",
        description="Cancel an appointment",
        input_schema=schema(
            {**_APPOINTMENT_ID, "reason": string(), "notifyCustomer": boolean(default=True)},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_dispatch_board",
        description="Get dispatch board for a specific date",
        input_schema=schema(
            {
                "date": string("Date (YYYY-MM-DD)"),
                "technicianIds": string_list("Filter by specific technicians"),
            },
            required=["date"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_dispatch_job",
        description="Dispatch a job to technician",
        input_schema=schema(
            {
                "jobId": string(),
                "technicianId": string(),
                "scheduledTime": string(),
                "notifyTechnician": boolean(default=True),
            },
            required=["jobId", "technicianId", "scheduledTime"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_optimize_routes",
        description="Optimize technician routes for a day",
        input_schema=schema(
            {"date": string(), "technicianIds": string_list()},
            required=["date"],
        ),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_appointments":
        return await list_records(client, "/appointments", arguments)
    if name == "fieldedge_get_appointment":
        return await get_record(client, "/appointments", arguments)
    if name == "fieldedge_create_appointment":
        return await create_record(client, "/appointments", arguments)
    if name == "fieldedge_update_appointment":
        return await update_record(client, "/appointments", arguments)
    if name == "fieldedge_cancel_appointment":
        return await post_action(
            client, "/appointments", "cancel", arguments, fields=("reason", "notifyCustomer"),
        )
    if name == "fieldedge_get_dispatch_board":
        return await client.get("/dispatch/board", query=pick(arguments, "date", "technicianIds"))
    if name == "fieldedge_dispatch_job":
        body = pick(arguments, "jobId", "technicianId", "scheduledTime", "notifyTechnician")
        return await client.post("/dispatch", body=body)
    if name == "fieldedge_optimize_routes":
        body = pick(arguments, "date", "technicianIds")
        return await client.post("/dispatch/optimize-routes", body=body)
    return ApiResult.fail(UnknownToolError(name))
