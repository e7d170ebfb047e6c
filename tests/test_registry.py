"""Tests for the tool catalogue in fieldedge_tools"""

import pytest

from fieldedge.dispatcher import ToolDispatcher
from fieldedge.errors import UnknownToolError
from fieldedge_tools import ALL_TOOLS, DOMAINS, TOOL_HANDLERS

TOOL_NAMES = [tool.name for tool in ALL_TOOLS]


class TestCatalogue:

    def test_names_unique(self):
        assert len(TOOL_NAMES) == len(set(TOOL_NAMES))

    def test_names_prefixed(self):
        assert all(name.startswith("fieldedge_") for name in TOOL_NAMES)

    def test_routing_map_covers_catalogue_exactly(self):
        assert set(TOOL_HANDLERS) == set(TOOL_NAMES)

    def test_dispatcher_accepts_real_registry(self, client):
        dispatcher = ToolDispatcher(client, ALL_TOOLS, TOOL_HANDLERS)
        assert len(dispatcher.list_tools()) == len(ALL_TOOLS)

    def test_catalogue_size(self):
        assert len(ALL_TOOLS) == 102

    @pytest.mark.parametrize("name", [
        "fieldedge_create_customer",
        "fieldedge_start_job",
        "fieldedge_list_work_orders",
        "fieldedge_get_invoice_pdf",
        "fieldedge_convert_estimate_to_job",
        "fieldedge_schedule_equipment_maintenance",
        "fieldedge_clock_in_technician",
        "fieldedge_optimize_routes",
        "fieldedge_get_low_stock_items",
        "fieldedge_void_payment",
        "fieldedge_get_inventory_valuation_report",
        "fieldedge_delete_location",
        "fieldedge_renew_service_agreement",
        "fieldedge_complete_task",
    ])
    def test_expected_tools_present(self, name):
        assert name in TOOL_NAMES


@pytest.mark.parametrize("tool", ALL_TOOLS, ids=TOOL_NAMES)
class TestSchemas:

    def test_object_schema(self, tool):
        assert tool.input_schema["type"] == "object"
        assert isinstance(tool.input_schema["properties"], dict)

    def test_required_fields_are_declared(self, tool):
        assert set(tool.required) <= set(tool.input_schema["properties"])

    def test_description_present(self, tool):
        assert tool.description.strip()

    def test_enums_are_non_empty_string_lists(self, tool):
        for prop in tool.input_schema["properties"].values():
            if "enum" in prop:
                assert prop["enum"]
                assert all(isinstance(v, str) for v in prop["enum"])


class TestDomainHandlers:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("domain", DOMAINS, ids=lambda d: d.__name__.rsplit(".", 1)[-1])
    async def test_foreign_name_is_unknown(self, domain, client, upstream):
        result = await domain.handle(client, "fieldedge_not_in_this_domain", {})
        assert isinstance(result.error, UnknownToolError)
        assert upstream.requests == []
