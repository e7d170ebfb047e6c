# =============================================================================
# fieldedge_tools/reporting.py  —  Read-only reports
# =============================================================================
#
# Every report is a GET under /reports/ with the caller's filters passed as
# the query string.  REPORT_PATHS is the whole routing table for this domain.
# =============================================================================

from fieldedge.client import FieldEdgeClient
from fieldedge.errors import ApiResult, UnknownToolError
from fieldedge.models import REPORT_GROUPINGS, ToolDescriptor
from fieldedge_tools.shaping import boolean, enum, list_records, schema, string, string_list

_PERIOD = {
    "startDate": string("Start date (YYYY-MM-DD)"),
    "endDate": string("End date (YYYY-MM-DD)"),
}
_PERIOD_REQUIRED = ["startDate", "endDate"]

REPORT_PATHS = {
    "fieldedge_get_revenue_report": "/reports/revenue",
    "fieldedge_get_technician_productivity_report": "/reports/technician-productivity",
    "fieldedge_get_job_completion_report": "/reports/job-completion",
    "fieldedge_get_aging_receivables_report": "/reports/aging-receivables",
    "fieldedge_get_sales_by_category_report": "/reports/sales-by-category",
    "fieldedge_get_equipment_maintenance_report": "/reports/equipment-maintenance",
    "fieldedge_get_customer_satisfaction_report": "/reports/customer-satisfaction",
    "fieldedge_get_inventory_valuation_report": "/reports/inventory-valuation",
}

TOOLS = [
    ToolDescriptor(
        name="fieldedge_get_revenue_report",
        description="Get revenue report for a period",
        input_schema=schema(
            {**_PERIOD, "groupBy": enum(REPORT_GROUPINGS, default="day")},
            required=_PERIOD_REQUIRED,
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_technician_productivity_report",
        description="Get technician productivity metrics",
        input_schema=schema(
            {**_PERIOD, "technicianIds": string_list()},
            required=_PERIOD_REQUIRED,
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_job_completion_report",
        description="Get job completion statistics",
        input_schema=schema(
            {**_PERIOD, "jobType": string(), "status": string()},
            required=_PERIOD_REQUIRED,
        ),
    ),
    ToolDescriptor(
        name="fieldedge_get_aging_receivables_report",
        description="Get accounts receivable aging report",
        input_schema=schema({
            "asOfDate": string("As of date (YYYY-MM-DD)"),
            "customerId": string(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_sales_by_category_report",
        description="Get sales breakdown by category",
        input_schema=schema(_PERIOD, required=_PERIOD_REQUIRED),
    ),
    ToolDescriptor(
        name="fieldedge_get_equipment_maintenance_report",
        description="Get equipment maintenance history and upcoming",
        input_schema=schema({
            "customerId": string(),
            "equipmentType": string(),
            "overdueOnly": boolean(),
        }),
    ),
    ToolDescriptor(
        name="fieldedge_get_customer_satisfaction_report",
        description="Get customer satisfaction metrics",
        input_schema=schema(_PERIOD, required=_PERIOD_REQUIRED),
    ),
    ToolDescriptor(
        name="fieldedge_get_inventory_valuation_report",
        description="Get current inventory valuation",
        input_schema=schema({"warehouse": string(), "category": string()}),
    ),
]


async def handle(client: FieldEdgeClient, name: str, arguments: dict) -> ApiResult:
    path = REPORT_PATHS.get(name)
    if path is None:
        return ApiResult.fail(UnknownToolError(name))
    return await list_records(client, path, arguments)
