# =============================================================================
# fieldedge_tools/technicians.py  —  Technician and time-tracking tools
# =============================================================================
#
# Clock-in / clock-out go through /time-entries: clock-in creates a regular,
# billable entry stamped with the dispatch time; clock-out PATCHes that
# entry's endTime.
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import TECHNICIAN_STATUSES, ToolDescriptor
from fieldedge_tools.shaping import (
    PAGING,
    compact,
    create_record,
    delete_record,
    enum,
    get_record,
    identifier,
    item_path,
    list_records,
    missing_identifier,
    number,
    schema,
    string,
    string_list,
    update_record,
    utc_now,
)

_TECHNICIAN_ID = {"id": string("Technician ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_technicians",
        description="List all technicians",
        input_schema=schema({
            **PAGING,
            "status": enum(TECHNICIAN_STATUSES),
            "skills": string_list(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_technician",
        description="Get specific technician by ID",
        input_schema=schema(_TECHNICIAN_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_technician",
        description="Create a new technician",
        input_schema=schema(
            {
                "employeeNumber": string(),
                "firstName": string(),
                "lastName": string(),
                "email": string(),
                "phone": string(),
                "role": string(),
                "skills": string_list(),
                "hourlyRate": number(),
                "overtimeRate": number(),
                "serviceRadius": number(),
            },
            required=["employeeNumber", "firstName", "lastName", "email", "phone", "role"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_technician",
        description="Update technician details",
        input_schema=schema(
            {
                **_TECHNICIAN_ID,
                "status": enum(TECHNICIAN_STATUSES),
                "email": string(),
                "phone": string(),
                "role": string(),
                "skills": string_list(),
                "hourlyRate": number(),
                "overtimeRate": number(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_technician",
        description="Delete a technician",
        input_schema=schema(_TECHNICIAN_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_get_technician_schedule",
        description="Get technician schedule for a date range",
        input_schema=schema(
            {**_TECHNICIAN_ID, "startDate": string(), "endDate": string()},
            required=["id", "startDate", "endDate"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_technician_availability",
        description="Get technician availability for scheduling",
        input_schema=schema(
            {**_TECHNICIAN_ID, "date": string()},
            required=["id", "date"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_clock_in_technician",
        description="Clock in technician (start time tracking)",
        input_schema=schema(
            {"technicianId": string(), "jobId": string(), "notes": string()},
            required=["technicianId"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_clock_out_technician",
        description="Clock out technician (end time tracking)",
        input_schema=schema(
            {"timeEntryId": string(), "notes": string()},
            required=["timeEntryId"],
        ),
    ),
]


async def clock_in(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    entry = compact({
        "technicianId": arguments.get("technicianId"),
        "jobId": arguments.get("jobId"),
        "startTime": utc_now(),
        "type": "regular",
        "billable": True,
        "notes": arguments.get("notes"),
    })
    return await client.post("/time-entries", body=entry)


async def clock_out(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    entry_id = identifier(arguments, "timeEntryId")
    if entry_id is None:
        return missing_identifier("timeEntryId")
    body = compact({"endTime": utc_now(), "notes": arguments.get("notes")})
    return await client.patch(item_path("/time-entries", entry_id), body=body)


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_technicians":
        return await list_records(client, "/technicians", arguments)
    if name == "fieldedge_get_technician":
        return await get_record(client, "/technicians", arguments)
    if name == "fieldedge_create_technician":
        return await create_record(client, "/technicians", arguments)
    if name == "fieldedge_update_technician":
        return await update_record(client, "/technicians", arguments)
    if name == "fieldedge_delete_technician":
        return await delete_record(client, "/technicians", arguments)
    if name == "fieldedge_get_technician_schedule":
        return await get_record(
            client, "/technicians", arguments, action="schedule",
            query_fields=("startDate", "endDate"),
        )
    if name == "fieldedge_get_technician_availability":
        return await get_record(
            client, "/technicians", arguments, action="availability", query_fields=("date",),
        )
    if name == "fieldedge_clock_in_technician":
        return await clock_in(client, arguments)
    if name == "fieldedge_clock_out_technician":
        return await clock_out(client, arguments)
    return ApiResult.fail(UnknownToolError(name))
