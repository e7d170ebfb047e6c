# =============================================================================
# fieldedge_tools/service_agreements.py  —  Maintenance / warranty contracts
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import (
    AGREEMENT_STATUSES,
    AGREEMENT_TYPES,
    BILLING_CYCLES,
    SERVICE_FREQUENCIES,
    ToolDescriptor,
)
from fieldedge_tools.shaping import (
    array_of,
    boolean,
    create_record,
    enum,
    get_record,
    list_records,
    number,
    obj,
    post_action,
    schema,
    string,
    string_list,
    update_record,
)

_AGREEMENT_ID = {"id": string("Service agreement ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_service_agreements",
        description="List service agreements",
        input_schema=schema({
            "customerId": string(),
            "status": enum(AGREEMENT_STATUSES),
            "type": enum(AGREEMENT_TYPES),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_service_agreement",
        description="Get specific service agreement",
        input_schema=schema(_AGREEMENT_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_service_agreement",
        description="Create new service agreement",
        input_schema=schema(
            {
                "customerId": string(),
                "name": string(),
                "type": enum(AGREEMENT_TYPES),
                "startDate": string(),
                "endDate": string(),
                "billingCycle": enum(BILLING_CYCLES),
                "amount": number(),
                "autoRenew": boolean(default=False),
                "services": array_of(obj(properties={
                    "name": string(),
                    "description": string(),
                    "frequency": enum(SERVICE_FREQUENCIES),
                })),
                "equipmentIds": string_list(),
                "notes": string(),
            },
            required=["customerId", "name", "type", "startDate", "endDate", "billingCycle", "amount"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_service_agreement",
        description="Update service agreement",
        input_schema=schema(
            {
                **_AGREEMENT_ID,
                "status": enum(AGREEMENT_STATUSES),
                "endDate": string(),
                "amount": number(),
                "autoRenew": boolean(),
                "notes": string(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_cancel_service_agreement",
        description="Cancel a service agreement",
        input_schema=schema(
            {**_AGREEMENT_ID, "reason": string(), "effectiveDate": string()},
            required=["id", "reason"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_renew_service_agreement",
        description="Renew an expiring service agreement",
        input_schema=schema(
            {**_AGREEMENT_ID, "newEndDate": string(), "newAmount": number()},
            required=["id", "newEndDate"],
        ),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_service_agreements":
        return await list_records(client, "/service-agreements", arguments)
    if name == "fieldedge_get_service_agreement":
        return await get_record(client, "/service-agreements", arguments)
    if name == "fieldedge_create_service_agreement":
        return await create_record(client, "/service-agreements", arguments)
    if name == "fieldedge_update_service_agreement":
        return await update_record(client, "/service-agreements", arguments)
    if name == "fieldedge_cancel_service_agreement":
        return await post_action(
            client, "/service-agreements", "cancel", arguments, fields=("reason", "effectiveDate"),
        )
    if name == "fieldedge_renew_service_agreement":
        return await post_action(
            client, "/service-agreements", "renew", arguments, fields=("newEndDate", "newAmount"),
        )
    return ApiResult.fail(UnknownToolError(name))
