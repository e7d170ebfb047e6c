"""Tests for fieldedge_tools.mcp_server — the FastMCP surface, in memory"""

import json

import httpx
import pytest
from fastmcp import Client
from fastmcp.exceptions import ResourceError, ToolError

from fieldedge.client import FieldEdgeClient
from fieldedge.config import ClientConfig
from fieldedge.dispatcher import ToolDispatcher
from fieldedge_tools import ALL_TOOLS, TOOL_HANDLERS
from fieldedge_tools.mcp_server import SERVER_NAME, _log_response, create_server
from fieldedge_tools.resources import DASHBOARD_APPS, URI_PREFIX, load_app_html

from conftest import BASE_URL, InMemoryFieldEdge


@pytest.fixture
def server(dispatcher, tmp_path):
    return create_server(dispatcher, ui_dir=str(tmp_path))


# =========================================================================
# Tools
# =========================================================================


class TestToolSurface:

    @pytest.mark.asyncio
    async def test_lists_whole_catalogue(self, server):
        async with Client(server) as mcp_client:
            tools = await mcp_client.list_tools()
        assert sorted(t.name for t in tools) == sorted(t.name for t in ALL_TOOLS)

    @pytest.mark.asyncio
    async def test_input_schemas_advertised_unchanged(self, server):
        by_name = {t.name: t for t in ALL_TOOLS}
        async with Client(server) as mcp_client:
            tools = await mcp_client.list_tools()
        for tool in tools:
            expected = by_name[tool.name].input_schema
            assert tool.inputSchema["properties"] == expected["properties"]
            assert tool.inputSchema.get("required", []) == expected.get("required", [])
            assert tool.description == by_name[tool.name].description

    @pytest.mark.asyncio
    async def test_call_returns_json_text(self, server, upstream):
        async with Client(server) as mcp_client:
            result = await mcp_client.call_tool("fieldedge_get_customer", {"id": "C1"})
        assert json.loads(result.content[0].text)["id"] == "X1"
        assert upstream.calls() == [("GET", "/customers/C1")]

    @pytest.mark.asyncio
    async def test_error_envelope_becomes_tool_error(self, tmp_path):
        client = FieldEdgeClient(
            ClientConfig(api_key="test-key", base_url=BASE_URL),
            transport=httpx.MockTransport(InMemoryFieldEdge()),
        )
        server = create_server(ToolDispatcher(client, ALL_TOOLS, TOOL_HANDLERS), ui_dir=str(tmp_path))
        async with Client(server) as mcp_client:
            with pytest.raises(ToolError, match="not found"):
                await mcp_client.call_tool("fieldedge_get_invoice", {"id": "missing"})

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error_naming_it(self, server, upstream):
        async with Client(server) as mcp_client:
            result = await mcp_client.call_tool("fieldedge_nonexistent", {}, raise_on_error=False)
        assert result.is_error
        assert "fieldedge_nonexistent" in result.content[0].text
        assert upstream.requests == []

    def test_server_name(self, server):
        assert server.name == SERVER_NAME


# =========================================================================
# Dashboard app resources
# =========================================================================


class TestResources:

    @pytest.mark.asyncio
    async def test_every_app_registered(self, server):
        async with Client(server) as mcp_client:
            resources = await mcp_client.list_resources()
        uris = {str(r.uri) for r in resources}
        assert uris == {f"{URI_PREFIX}{app.slug}" for app in DASHBOARD_APPS}
        assert len(DASHBOARD_APPS) == 16
        assert all(r.mimeType == "text/html" for r in resources)

    @pytest.mark.asyncio
    async def test_read_app_html(self, dispatcher, tmp_path):
        (tmp_path / "jobs").mkdir()
        (tmp_path / "jobs" / "index.html").write_text("<h1>Jobs</h1>", encoding="utf-8")
        server = create_server(dispatcher, ui_dir=str(tmp_path))
        async with Client(server) as mcp_client:
            contents = await mcp_client.read_resource("fieldedge://app/jobs")
        assert contents[0].text == "<h1>Jobs</h1>"

    def test_missing_bundle_raises_resource_error(self, tmp_path):
        with pytest.raises(ResourceError, match="Failed to load app: calendar"):
            load_app_html(tmp_path, "calendar")


class TestResponseLogging:

    def test_long_response_is_truncated(self, caplog):
        caplog.set_level("INFO", logger="fieldedge.mcp")
        _log_response("fieldedge_list_jobs", json.dumps({"data": ["x" * 1000]}))
        message = caplog.records[-1].getMessage()
        assert "fieldedge_list_jobs response" in message
        assert "…" in message
        assert len(message) < 700
