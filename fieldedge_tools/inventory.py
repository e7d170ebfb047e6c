# =============================================================================
# fieldedge_tools/inventory.py  —  Parts and stock tools
# =============================================================================
#
# Stock levels are never PATCHed directly: quantities move through
# inventory transactions (receipt, issue, adjustment, transfer, return).
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import INVENTORY_TRANSACTION_TYPES, ToolDescriptor
from fieldedge_tools.shaping import (
    PAGING,
    boolean,
    create_record,
    enum,
    get_record,
    list_records,
    number,
    schema,
    string,
    update_record,
)

_ITEM_ID = {"id": string("Inventory item ID")}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_list_inventory",
        description="List inventory items",
        input_schema=schema({
            **PAGING,
            "category": string(),
            "manufacturer": string(),
            "warehouse": string(),
            "lowStock": boolean("Show only low stock items"),
            "search": string(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_inventory_item",
        description="Get specific inventory item",
        input_schema=schema(_ITEM_ID, required=["id"]),
    ),
    ToolDescriptor(
        name="fieldedge_create_inventory_item",
        description="Create new inventory item",
        input_schema=schema(
            {
                "sku": string(),
                "name": string(),
                "description": string(),
                "category": string(),
                "manufacturer": string(),
                "modelNumber": string(),
                "unitOfMeasure": string(),
                "costPrice": number(),
                "sellPrice": number(),
                "reorderPoint": number(),
                "reorderQuantity": number(),
                "warehouse": string(),
                "binLocation": string(),
                "taxable": boolean(),
            },
            required=["sku", "name", "category", "unitOfMeasure", "costPrice", "sellPrice"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_update_inventory_item",
        description="Update inventory item",
        input_schema=schema(
            {
                **_ITEM_ID,
                "name": string(),
                "description": string(),
                "category": string(),
                "costPrice": number(),
                "sellPrice": number(),
                "reorderPoint": number(),
                "reorderQuantity": number(),
            },
            required=["id"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_adjust_inventory",
        description="Adjust inventory quantity",
        input_schema=schema(
            {
                "itemId": string(),
                "quantity": number("Adjustment quantity (positive or negative)"),
                "type": enum(INVENTORY_TRANSACTION_TYPES),
                "reference": string(),
                "notes": string(),
            },
            required=["itemId", "quantity", "type"],
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_inventory_transactions",
        description="Get inventory transaction history",
        input_schema=schema({
            "itemId": string(),
            "startDate": string(),
            "endDate": string(),
            "type": enum(INVENTORY_TRANSACTION_TYPES),
            **PAGING,
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_low_stock_items",
        description="Get items below reorder point",
        input_schema=schema({"warehouse": string()}),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    if name == "fieldedge_list_inventory":
        return await list_records(client, "/inventory", arguments)
    if name == "fieldedge_get_inventory_item":
        return await get_record(client, "/inventory", arguments)
    if name == "fieldedge_create_inventory_item":
        return await create_record(client, "/inventory", arguments)
    if name == "fieldedge_update_inventory_item":
        return await update_record(client, "/inventory", arguments)
    if name == "fieldedge_adjust_inventory":
        return await create_record(client, "/inventory/transactions", arguments)
    if name == "fieldedge_get_inventory_transactions":
        return await list_records(client, "/inventory/transactions", arguments)
    if name == "fieldedge_get_low_stock_items":
        return await list_records(client, "/inventory/low-stock", arguments)
    return ApiResult.fail(UnknownToolError(name))
