# =============================================================================
# fieldedge_tools/tasks.py  —  Office tasks (calls, follow-ups, inspections)
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import TASK_PRIORITIES, TASK_STATUSES, TASK_TYPES, ToolDescriptor
from fieldedge_tools.shaping import (
    compact,
    create_record,
    delete_record,
    enum,
    get_record,
    identifier,
    item_path,
    list_records,
    missing_identifier,
    schema,
    string,
    update_record,
    utc_now,
)

_TASK_ID = {"id": string("Task ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_tasks",
        description="List tasks",
        input_schema=schema({
            "status": enum(TASK_STATUSES),
            "priority": enum(TASK_PRIORITIES),
            "assignedTo": string(),
            "customerId": string(),
            "jobId": string(),
            "dueDate": string(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_task",
        description="Get specific task",
        input_schema=schema(_TASK_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_task",
        description="Create new task",
        input_schema=schema(
            {
                "title": string(),
                "description": string(),
                "type": enum(TASK_TYPES),
                "priority": enum(TASK_PRIORITIES, default="normal"),
                "dueDate": string(),
                "assignedTo": string(),
                "customerId": string(),
                "jobId": string(),
                "notes": string(),
            },
            required=["title", "description", "type"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_task",
        description="Update task",
        input_schema=schema(
            {
                **_TASK_ID,
                "status": enum(TASK_STATUSES),
                "priority": enum(TASK_PRIORITIES),
                "dueDate": string(),
                "assignedTo": string(),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_complete_task",
        description="Mark task as completed",
        input_schema=schema({**_TASK_ID, "notes": string()}, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_delete_task",
        description="Delete a task",
        input_schema=schema(_TASK_ID, required=["id"]),
    ),
]


async def complete_task(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    task_id = identifier(arguments)
    if task_id is None:
        return missing_identifier()
    body = compact({
        "status": "completed",
        "completedDate": utc_now(),
        "notes": arguments.get("notes"),
    })
    return await client.patch(item_path("/tasks", task_id), body=body)


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_tasks":
        return await list_records(client, "/tasks", arguments)
    if name == "fieldedge_get_task":
        return await get_record(client, "/tasks", arguments)
    if name == "fieldedge_create_task":
        return await create_record(client, "/tasks", arguments)
    if name == "fieldedge_update_task":
        return await update_record(client, "/tasks", arguments)
    if name == "fieldedge_complete_task":
        return await complete_task(client, arguments)
    if name == "fieldedge_delete_task":
        return await delete_record(client, "/tasks", arguments)
    return ApiResult.fail(UnknownToolError(name))
