# =============================================================================
# fieldedge_tools/locations.py  —  Customer service locations
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import LOCATION_STATUSES, LOCATION_TYPES, ToolDescriptor
from fieldedge_tools.shaping import (
    create_record,
    delete_record,
    enum,
    get_record,
    list_records,
    obj,
    schema,
    string,
    update_record,
)

_LOCATION_ID = {"id": string("Location ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_locations",
        description="List customer locations",
        input_schema=schema({
            "customerId": string(),
            "status": enum(LOCATION_STATUSES),
            "type": enum(LOCATION_TYPES),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_location",
        description="Get specific location",
        input_schema=schema(_LOCATION_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_location",
        description="Create new location for customer",
        input_schema=schema(
            {
                "customerId": string(),
                "name": string(),
                "type": enum(LOCATION_TYPES),
                "address": obj(properties={
                    "street1": string(),
                    "street2": string(),
                    "city": string(),
                    "state": string(),
                    "zip": string(),
                }),
                "contactName": string(),
                "contactPhone": string(),
                "accessNotes": string(),
                "gateCode": string(),
            },
            required=["customerId", "name", "type", "address"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_location",
        description="Update location details",
        input_schema=schema(
            {
                **_LOCATION_ID,
                "name": string(),
                "status": enum(LOCATION_STATUSES),
                "contactName": string(),
                "contactPhone": string(),
                "accessNotes": string(),
                "gateCode": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_location",
        description="Delete a location",
        input_schema=schema(_LOCATION_ID, required=["id"]),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_locations":
        return await list_records(client, "/locations", arguments)
    if name == "fieldedge_get_location":
        return await get_record(client, "/locations", arguments)
    if name == "fieldedge_create_location":
        return await create_record(client, "/locations", arguments)
    if name == "fieldedge_update_location":
        return await update_record(client, "/locations", arguments)
    if name == "fieldedge_delete_location":
        return await delete_record(client, "/locations", arguments)
    return ApiResult.fail(UnknownToolError(name))
