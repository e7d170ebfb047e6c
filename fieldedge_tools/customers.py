# =============================================================================
# fieldedge_tools/customers.py  —  Customer tools
# =============================================================================
#
# Customers are the root of most FieldEdge data: jobs, invoices, equipment
# and locations all hang off a customer id.  Besides plain CRUD this module
# exposes the customer sub-resources (balance, jobs, invoices, equipment).
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import (
    CUSTOMER_STATUSES,
    CUSTOMER_TYPES,
    EQUIPMENT_STATUSES,
    INVOICE_STATUSES,
    SORT_ORDERS,
    ToolDescriptor,
)
from fieldedge_tools.shaping import (
    PAGING,
    boolean,
    create_record,
    delete_record,
    enum,
    get_record,
    list_records,
    number,
    obj,
    schema,
    string,
    string_list,
    update_record,
)

ADDRESS = obj(
    properties={
        "street1": string(),
        "street2": string(),
        "city": string(),
        "state": string(),
        "zip": string(),
        "country": string(),
        "latitude": number(),
        "longitude": number(),
    },
    required=["street1", "city", "state", "zip"],
)

_CUSTOMER_FIELDS = {
    "firstName": string("Customer first name"),
    "lastName": string("Customer last name"),
    "companyName": string("Company name for commercial customers"),
    "email": string("Email address"),
    "phone": string("Primary phone number"),
    "mobilePhone": string("Mobile phone number"),
    "address": dict(ADDRESS, description="Service address"),
    "billingAddress": dict(ADDRESS, description="Billing address"),
    "customerType": enum(CUSTOMER_TYPES, "Customer type"),
    "taxExempt": boolean("Tax exempt status", default=False),
    "creditLimit": number("Credit limit"),
    "notes": string("Customer notes"),
    "tags": string_list("Customer tags"),
    "customFields": obj("Custom field values"),
}

_CUSTOMER_ID = {"id": string("Customer ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_customers",
        description="List all customers with optional filtering and pagination",
        input_schema=schema({
            **PAGING,
            "status": enum(CUSTOMER_STATUSES, "Filter by status"),
            "customerType": enum(CUSTOMER_TYPES, "Filter by type"),
            "sortBy": string("Field to sort by"),
            "sortOrder": enum(SORT_ORDERS, "Sort order"),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_customer",
        description="Get a specific customer by ID",
        input_schema=schema(_CUSTOMER_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_customer",
        description="Create a new customer",
        input_schema=schema(_CUSTOMER_FIELDS, required=["firstName", "lastName", "customerType"]),
    ),
    ToolDescriptor(
        name="fieldedge_update_customer",
        description="Update an existing customer",
        input_schema=schema(
            {
                **_CUSTOMER_ID,
                **_CUSTOMER_FIELDS,
                "status": enum(CUSTOMER_STATUSES, "Customer status"),
                "taxExempt": boolean("Tax exempt status"),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_delete_customer",
        description="Delete a customer",
        input_schema=schema(_CUSTOMER_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_search_customers",
        description="Search customers by name, email, phone, or other criteria",
        input_schema=schema({
            "search": string("Search query"),
            "status": enum(CUSTOMER_STATUSES),
            "customerType": enum(CUSTOMER_TYPES),
            "tags": string_list(),
            **PAGING,
            "sortBy": string(),
            "sortOrder": enum(SORT_ORDERS),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_customer_balance",
        description="Get customer account balance and payment history",
        input_schema=schema(_CUSTOMER_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_get_customer_jobs",
        description="Get all jobs for a specific customer",
        input_schema=schema(
            {**_CUSTOMER_ID, "status": string("Filter by job status"), **PAGING},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_customer_invoices",
        description="Get all invoices for a specific customer",
        input_schema=schema(
            {**_CUSTOMER_ID, "status": enum(INVOICE_STATUSES), **PAGING},
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_customer_equipment",
        description="Get all equipment for a specific customer",
        input_schema=schema(
            {**_CUSTOMER_ID, "status": enum(EQUIPMENT_STATUSES)},
            required=["id"],
        ),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_customers":
        return await list_records(client, "/customers", arguments)
    if name == "fieldedge_get_customer":
        return await get_record(client, "/customers", arguments)
    if name == "fieldedge_create_customer":
        return await create_record(client, "/customers", arguments)
    if name == "fieldedge_update_customer":
        return await update_record(client, "/customers", arguments)
    if name == "fieldedge_delete_customer":
        return await delete_record(client, "/customers", arguments)
    if name == "fieldedge_search_customers":
        return await list_records(client, "/customers/search", arguments)
    if name == "fieldedge_get_customer_balance":
        return await get_record(client, "/customers", arguments, action="balance")
    if name == "fieldedge_get_customer_jobs":
        return await get_record(
            client, "/customers", arguments, action="jobs",
            query_fields=("status", "page", "pageSize"),
        )
    if name == "fieldedge_get_customer_invoices":
        return await get_record(
            client, "/customers", arguments, action="invoices",
            query_fields=("status", "page", "pageSize"),
        )
    if name == "fieldedge_get_customer_equipment":
        return await get_record(
            client, "/customers", arguments, action="equipment",
            query_fields=("status",),
        )
    return ApiResult.fail(UnknownToolError(name))
