# =============================================================================
# fieldedge_tools/jobs.py  —  Job tools
# =============================================================================
#
# Jobs carry the field-service lifecycle:
#
#   scheduled → dispatched → in-progress → completed → invoiced
#                                 ↘ on-hold      ↘ cancelled
#
# start / complete stamp actualStart / actualEnd with the dispatch time;
# the caller never supplies those.
#
# fieldedge_assign_technician is a composed action.  With replace=true it is
# a single PATCH.  Otherwise it reads the job first and PATCHes the merged
# technician list.
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import JOB_PRIORITIES, JOB_STATUSES, SORT_ORDERS, ToolDescriptor
from fieldedge_tools.shaping import (
    PAGING,
    boolean,
    create_record,
    delete_record,
    enum,
    get_record,
    identifier,
    item_path,
    list_records,
    missing_identifier,
    obj,
    post_action,
    schema,
    string,
    string_list,
    update_record,
    utc_now,
)

_JOB_ID = {"id": string("Job ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_jobs",
        description="List all jobs with optional filtering and pagination",
        input_schema=schema({
            **PAGING,
            "status": enum(JOB_STATUSES, "Filter by status"),
            "priority": enum(JOB_PRIORITIES),
            "customerId": string("Filter by customer ID"),
            "technicianId": string("Filter by technician ID"),
            "startDate": string("Filter jobs starting from this date"),
            "endDate": string("Filter jobs ending before this date"),
            "sortBy": string(),
            "sortOrder": enum(SORT_ORDERS),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_job",
        description="Get a specific job by ID",
        input_schema=schema(_JOB_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_job",
        description="Create a new job/work order",
        input_schema=schema(
            {
                "customerId": string("Customer ID"),
                "locationId": string("Service location ID"),
                "jobType": string("Type of job"),
                "priority": enum(JOB_PRIORITIES, default="normal"),
                "description": string("Job description"),
                "scheduledStart": string("Scheduled start date/time (ISO 8601)"),
                "scheduledEnd": string("Scheduled end date/time (ISO 8601)"),
                "assignedTechnicians": string_list("Technician IDs"),
                "equipmentIds": string_list("Equipment IDs"),
                "tags": string_list(),
                "customFields": obj(),
            },
            required=["customerId", "jobType", "description"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_job",
        description="Update an existing job",
        input_schema=schema(
            {
                **_JOB_ID,
                "jobType": string(),
                "status": enum(JOB_STATUSES),
                "priority": enum(JOB_PRIORITIES),
                "description": string(),
                "scheduledStart": string(),
                "scheduledEnd": string(),
                "actualStart": string(),
                "actualEnd": string(),
                "assignedTechnicians": string_list(),
                "equipmentIds": string_list(),
                "tags": string_list(),
                "customFields": obj(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_job",
        description="Delete a job",
        input_schema=schema(_JOB_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_start_job",
        description="Start a job (set status to in-progress and record actual start time)",
        input_schema=schema(
            {**_JOB_ID, "notes": string("Notes about starting the job")},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_complete_job",
        description="Complete a job (set status to completed and record actual end time)",
        input_schema=schema(
            {
                **_JOB_ID,
                "notes": string("Completion notes"),
                "createInvoice": boolean("Automatically create invoice", default=False),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_cancel_job",
        description="Cancel a job",
        input_schema=schema(
            {**_JOB_ID, "reason": string("Cancellation reason")},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_assign_technician",
        description="Assign or reassign technicians to a job",
        input_schema=schema(
            {
                **_JOB_ID,
                "technicianIds": string_list("Technician IDs to assign"),
                "replace": boolean("Replace existing technicians or add to them", default=False),
            },
            required=["id", "technicianIds"],
        ),
    ),
]


def merge_technicians(current, additions) -> list:
    """Existing assignments first, then new ids, without duplicates."""
    merged = []
    for tech_id in list(current or []) + list(additions or []):
        if tech_id not in merged:
            merged.append(tech_id)
    return merged


async def assign_technicians(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    job_id = identifier(arguments)
    if job_id is None:
        return missing_identifier()
    technician_ids = list(arguments.get("technicianIds") or [])
    path = item_path("/jobs", job_id)

    if not arguments.get("replace"):
        current = await client.get(path)
        if current.is_error:
            return current
        job = current.value if isinstance(current.value, dict) else {}
        technician_ids = merge_technicians(job.get("assignedTechnicians"), technician_ids)

    return await client.patch(path, body={"assignedTechnicians": technician_ids})


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_jobs":
        return await list_records(client, "/jobs", arguments)
    if name == "fieldedge_get_job":
        return await get_record(client, "/jobs", arguments)
    if name == "fieldedge_create_job":
        return await create_record(client, "/jobs", arguments)
    if name == "fieldedge_update_job":
        return await update_record(client, "/jobs", arguments)
    if name == "fieldedge_delete_job":
        return await delete_record(client, "/jobs", arguments)
    if name == "fieldedge_start_job":
        return await post_action(
            client, "/jobs", "start", arguments,
            fields=("notes",), defaults={"actualStart": utc_now()},
        )
    if name == "fieldedge_complete_job":
        return await post_action(
            client, "/jobs", "complete", arguments,
            fields=("notes", "createInvoice"), defaults={"actualEnd": utc_now()},
        )
    if name == "fieldedge_cancel_job":
        return await post_action(client, "/jobs", "cancel", arguments, fields=("reason",))
    if name == "fieldedge_assign_technician":
        return await assign_technicians(client, arguments)
    return ApiResult.fail(UnknownToolError(name))
