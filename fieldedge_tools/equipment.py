# =============================================================================
# fieldedge_tools/equipment.py  —  Customer equipment tools
# =============================================================================
#
# Equipment = the installed units a technician services (furnaces,
# condensers, water heaters ...).  Each unit belongs to one customer.
#
# COMPOSED ACTION — fieldedge_schedule_equipment_maintenance:
#   FieldEdge has no maintenance endpoint; maintenance is a job of type
#   "maintenance" linked to the unit.  The sequence is:
#     1. GET /equipment/{equipmentId}   only when customerId was not given
#     2. POST /jobs                     the derived maintenance job
#   Steps run in order and a failure stops the sequence.  Nothing issued
#   before the failure is undone.
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, InvalidArgumentError, UnknownToolError
from fieldedge.models import EQUIPMENT_STATUSES, ToolDescriptor
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
    obj,
    schema,
    string,
    update_record,
)

_EQUIPMENT_ID = {"id": string("Equipment ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_equipment",
        description="List all equipment with optional filtering",
        input_schema=schema({
            **PAGING,
            "customerId": string(),
            "locationId": string(),
            "status": enum(EQUIPMENT_STATUSES),
            "type": string(),
            "manufacturer": string(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_equipment",
        description="Get specific equipment by ID",
        input_schema=schema(_EQUIPMENT_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_equipment",
        description="Create a new equipment record",
        input_schema=schema(
            {
                "customerId": string(),
                "locationId": string(),
                "type": string(),
                "manufacturer": string(),
                "model": string(),
                "serialNumber": string(),
                "installDate": string(),
                "warrantyExpiry": string(),
                "notes": string(),
                "customFields": obj(),
            },
            required=["customerId", "type", "manufacturer", "model"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_equipment",
        description="Update equipment record",
        input_schema=schema(
            {
                **_EQUIPMENT_ID,
                "status": enum(EQUIPMENT_STATUSES),
                "type": string(),
                "manufacturer": string(),
                "model": string(),
                "serialNumber": string(),
                "installDate": string(),
                "warrantyExpiry": string(),
                "lastServiceDate": string(),
                "nextServiceDue": string(),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_equipment",
        description="Delete equipment record",
        input_schema=schema(_EQUIPMENT_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_get_equipment_service_history",
        description="Get service history for equipment",
        input_schema=schema(
            {**_EQUIPMENT_ID, "startDate": string(), "endDate": string()},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_schedule_equipment_maintenance",
        description=(
            "Schedule preventive maintenance for equipment. Creates a maintenance job "
            "for the equipment's customer."
        ),
        input_schema=schema(
            {
                "equipmentId": string(),
                "customerId": string("Owner of the equipment; looked up when omitted"),
                "scheduledDate": string(),
                "technicianId": string(),
                "maintenanceType": string(),
                "notes": string(),
            },
            required=["equipmentId", "scheduledDate", "maintenanceType"],
        ),
    ),
]


async def schedule_maintenance(client: FieldEdgeClient, arguments: dict) -> ApiResult:
    equipment_id = identifier(arguments, "equipmentId")
    if equipment_id is None:
        return missing_identifier("equipmentId")

    customer_id = identifier(arguments, "customerId")
    if customer_id is None:
        unit = await client.get(item_path("/equipment", equipment_id))
        if unit.is_error:
            return unit
        owner = unit.value.get("customerId") if isinstance(unit.value, dict) else None
        if not owner:
            return ApiResult.fail(InvalidArgumentError(
                f"equipment {equipment_id} has no customerId; pass customerId explicitly",
                tool_name="fieldedge_schedule_equipment_maintenance",
            ))
        customer_id = str(owner)

    technician_id = arguments.get("technicianId")
    job = compact({
        "customerId": customer_id,
        "equipmentIds": [equipment_id],
        "jobType": "maintenance",
        "description": arguments.get("maintenanceType"),
        "scheduledStart": arguments.get("scheduledDate"),
        "assignedTechnicians": [technician_id] if technician_id else [],
        "notes": arguments.get("notes"),
    })
    return await client.post("/jobs", body=job)


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_equipment":
        return await list_records(client, "/equipment", arguments)
    if name == "fieldedge_get_equipment":
        return await get_record(client, "/equipment", arguments)
    if name == "fieldedge_create_equipment":
        return await create_record(client, "/equipment", arguments)
    if name == "fieldedge_update_equipment":
        return await update_record(client, "/equipment", arguments)
    if name == "fieldedge_delete_equipment":
        return await delete_record(client, "/equipment", arguments)
    if name == "fieldedge_get_equipment_service_history":
        return await get_record(
            client, "/equipment", arguments, action="service-history",
            query_fields=("startDate", "endDate"),
        )
    if name == "fieldedge_schedule_equipment_maintenance":
        return await schedule_maintenance(client, arguments)
    return ApiResult.fail(UnknownToolError(name))
