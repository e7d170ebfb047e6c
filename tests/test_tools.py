"""Tests for the domain handlers, driven through the real dispatcher"""

import base64
import json
from datetime import datetime, timezone

import httpx
import pytest

from fieldedge.client import FieldEdgeClient
from fieldedge.config import ClientConfig
from fieldedge.dispatcher import ToolDispatcher
from fieldedge_tools import ALL_TOOLS, TOOL_HANDLERS
from fieldedge_tools.jobs import merge_technicians

from conftest import BASE_URL, InMemoryFieldEdge, RecordingUpstream

SAMPLE_VALUES = {
    "string": "x1",
    "number": 1,
    "boolean": True,
    "array": ["a"],
    "object": {},
}


def minimal_arguments(tool) -> dict:
    properties = tool.input_schema["properties"]
    return {field: SAMPLE_VALUES[properties[field]["type"]] for field in tool.required}


def make_dispatcher(responder) -> tuple[ToolDispatcher, RecordingUpstream]:
    upstream = RecordingUpstream(responder)
    client = FieldEdgeClient(
        ClientConfig(api_key="test-key", base_url=BASE_URL),
        transport=httpx.MockTransport(upstream),
    )
    return ToolDispatcher(client, ALL_TOOLS, TOOL_HANDLERS), upstream


def parse_timestamp(value: str) -> datetime:
    assert value.endswith("Z")
    return datetime.fromisoformat(value[:-1] + "+00:00")


def now_ms() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


# =========================================================================
# Every tool, minimal arguments
# =========================================================================


class TestEveryTool:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool", ALL_TOOLS, ids=[t.name for t in ALL_TOOLS])
    async def test_minimal_call_succeeds(self, tool, dispatcher, upstream):
        result = await dispatcher.dispatch(tool.name, minimal_arguments(tool))
        assert not result.is_error, result.text
        json.loads(result.text)
        assert upstream.requests
        assert all(r.url.path.startswith("/v1/") for r in upstream.requests)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool",
        [t for t in ALL_TOOLS if t.name.startswith("fieldedge_update_")],
        ids=lambda t: t.name,
    )
    async def test_update_excludes_identifier_from_body(self, tool, dispatcher, upstream):
        arguments = {**minimal_arguments(tool), "notes": "changed"}
        result = await dispatcher.dispatch(tool.name, arguments)
        assert not result.is_error
        assert upstream.last.method in ("PATCH", "PUT")
        assert upstream.path().endswith("/x1")
        assert "id" not in upstream.body()
        assert upstream.body()["notes"] == "changed"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "tool",
        [t for t in ALL_TOOLS if t.name.startswith("fieldedge_list_") and not t.required],
        ids=lambda t: t.name,
    )
    async def test_list_without_filters_has_no_query(self, tool, dispatcher, upstream):
        result = await dispatcher.dispatch(tool.name, {})
        assert not result.is_error
        assert upstream.last.method == "GET"
        assert upstream.last.url.query == b""


# =========================================================================
# Simple CRUD behaviour
# =========================================================================


class TestCrud:

    @pytest.mark.asyncio
    async def test_list_customers_forwards_filters(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_list_customers", {"page": 2, "status": "active", "search": None})
        assert upstream.calls() == [("GET", "/customers")]
        assert upstream.query() == {"page": "2", "status": "active"}

    @pytest.mark.asyncio
    async def test_get_is_idempotent(self, dispatcher, upstream):
        first = await dispatcher.dispatch("fieldedge_get_customer", {"id": "C1"})
        second = await dispatcher.dispatch("fieldedge_get_customer", {"id": "C1"})
        assert first.text == second.text
        assert upstream.calls() == [("GET", "/customers/C1"), ("GET", "/customers/C1")]

    @pytest.mark.asyncio
    async def test_identifier_is_percent_encoded(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_get_job", {"id": "J/1 2"})
        assert upstream.last.url.raw_path.startswith(b"/v1/jobs/J%2F1%202")

    @pytest.mark.asyncio
    async def test_create_then_get_round_trip(self):
        dispatcher, upstream = make_dispatcher(InMemoryFieldEdge())
        created = await dispatcher.dispatch(
            "fieldedge_create_customer",
            {"firstName": "John", "lastName": "Doe", "customerType": "residential"},
        )
        assert not created.is_error
        record = json.loads(created.text)
        assert record["id"] == "customers-1"
        assert record["customerType"] == "residential"

        fetched = await dispatcher.dispatch("fieldedge_get_customer", {"id": record["id"]})
        assert json.loads(fetched.text) == record
        assert upstream.calls() == [("POST", "/customers"), ("GET", "/customers/customers-1")]

    @pytest.mark.asyncio
    async def test_not_found_surfaces_as_error(self):
        dispatcher, _ = make_dispatcher(InMemoryFieldEdge())
        result = await dispatcher.dispatch("fieldedge_get_invoice", {"id": "missing"})
        assert result.is_error
        assert result.text == "Error: FieldEdge API error (404): not found"

    @pytest.mark.asyncio
    async def test_update_forwards_explicit_null(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_update_job", {"id": "J1", "scheduledEnd": None, "notes": "x"})
        assert upstream.calls() == [("PATCH", "/jobs/J1")]
        assert upstream.body() == {"scheduledEnd": None, "notes": "x"}

    @pytest.mark.asyncio
    async def test_create_forwards_explicit_null(self, dispatcher, upstream):
        await dispatcher.dispatch(
            "fieldedge_create_task",
            {"title": "Call back", "description": "Follow up", "type": "call", "dueDate": None},
        )
        assert upstream.calls() == [("POST", "/tasks")]
        assert "dueDate" in upstream.body()
        assert upstream.body()["dueDate"] is None

    @pytest.mark.asyncio
    async def test_delete_returns_empty_object_on_204(self):
        dispatcher, upstream = make_dispatcher(lambda r: httpx.Response(204))
        result = await dispatcher.dispatch("fieldedge_delete_task", {"id": "T1"})
        assert not result.is_error
        assert json.loads(result.text) == {}
        assert upstream.calls() == [("DELETE", "/tasks/T1")]

    @pytest.mark.asyncio
    async def test_missing_identifier_makes_no_request(self, dispatcher, upstream):
        result = await dispatcher.dispatch("fieldedge_delete_customer", {"id": ""})
        assert result.is_error
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_unknown_tool(self, dispatcher, upstream):
        result = await dispatcher.dispatch("fieldedge_launch_rocket", {})
        assert result.is_error
        assert "fieldedge_launch_rocket" in result.text
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_customer_sub_resource_with_query(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_get_customer_jobs", {"id": "C1", "status": "completed"})
        assert upstream.calls() == [("GET", "/customers/C1/jobs")]
        assert upstream.query() == {"status": "completed"}


# =========================================================================
# Action endpoints with server-side defaults
# =========================================================================


class TestActions:

    @pytest.mark.asyncio
    async def test_start_job_stamps_actual_start(self, dispatcher, upstream):
        before = now_ms()
        await dispatcher.dispatch("fieldedge_start_job", {"id": "J1", "notes": "on site"})
        after = datetime.now(timezone.utc)

        assert upstream.calls() == [("POST", "/jobs/J1/start")]
        body = upstream.body()
        assert body["notes"] == "on site"
        assert before <= parse_timestamp(body["actualStart"]) <= after

    @pytest.mark.asyncio
    async def test_complete_job_stamps_actual_end(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_complete_job", {"id": "J1", "createInvoice": True})
        body = upstream.body()
        assert body["createInvoice"] is True
        assert parse_timestamp(body["actualEnd"])

    @pytest.mark.asyncio
    async def test_send_invoice_omits_absent_fields(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_send_invoice", {"id": "I1", "email": None, "subject": "Your bill"})
        assert upstream.calls() == [("POST", "/invoices/I1/send")]
        assert upstream.body() == {"subject": "Your bill"}

    @pytest.mark.asyncio
    async def test_record_payment_posts_to_payments(self, dispatcher, upstream):
        await dispatcher.dispatch(
            "fieldedge_record_payment",
            {"invoiceId": "I1", "amount": 125.5, "paymentMethod": "check"},
        )
        assert upstream.calls() == [("POST", "/payments")]
        assert upstream.body() == {"invoiceId": "I1", "amount": 125.5, "paymentMethod": "check"}

    @pytest.mark.asyncio
    async def test_clock_in_builds_time_entry(self, dispatcher, upstream):
        before = now_ms()
        await dispatcher.dispatch("fieldedge_clock_in_technician", {"technicianId": "T1", "jobId": "J1"})
        assert upstream.calls() == [("POST", "/time-entries")]
        body = upstream.body()
        assert body["technicianId"] == "T1"
        assert body["jobId"] == "J1"
        assert body["type"] == "regular"
        assert body["billable"] is True
        assert "notes" not in body
        assert parse_timestamp(body["startTime"]) >= before

    @pytest.mark.asyncio
    async def test_clock_out_patches_time_entry(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_clock_out_technician", {"timeEntryId": "TE9"})
        assert upstream.calls() == [("PATCH", "/time-entries/TE9")]
        assert set(upstream.body()) == {"endTime"}

    @pytest.mark.asyncio
    async def test_complete_task(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_complete_task", {"id": "TK1", "notes": "done"})
        assert upstream.calls() == [("PATCH", "/tasks/TK1")]
        body = upstream.body()
        assert body["status"] == "completed"
        assert body["notes"] == "done"
        assert parse_timestamp(body["completedDate"])

    @pytest.mark.asyncio
    async def test_dispatch_board_joins_technicians(self, dispatcher, upstream):
        await dispatcher.dispatch(
            "fieldedge_get_dispatch_board",
            {"date": "2026-03-02", "technicianIds": ["T1", "T2"]},
        )
        assert upstream.calls() == [("GET", "/dispatch/board")]
        assert upstream.query() == {"date": "2026-03-02", "technicianIds": "T1,T2"}


# =========================================================================
# Work orders
# =========================================================================


class TestWorkOrders:

    @pytest.mark.asyncio
    async def test_list_scoped_to_job(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_list_work_orders", {"jobId": "J7", "status": "open"})
        assert upstream.calls() == [("GET", "/jobs/J7/work-orders")]
        assert upstream.query() == {"status": "open"}

    @pytest.mark.asyncio
    async def test_list_across_jobs(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_list_work_orders", {"status": "open"})
        assert upstream.calls() == [("GET", "/work-orders")]

    @pytest.mark.asyncio
    async def test_update_uses_put(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_update_work_order", {"id": "W1", "status": "completed"})
        assert upstream.calls() == [("PUT", "/work-orders/W1")]
        assert upstream.body() == {"status": "completed"}


# =========================================================================
# Invoice PDF
# =========================================================================


class TestInvoicePdf:

    @pytest.mark.asyncio
    async def test_pdf_is_base64_wrapped(self):
        pdf = b"%PDF-1.7\n\x00\xffbinary"
        dispatcher, upstream = make_dispatcher(lambda r: httpx.Response(200, content=pdf))
        result = await dispatcher.dispatch("fieldedge_get_invoice_pdf", {"id": "I1"})
        payload = json.loads(result.text)
        assert payload["success"] is True
        assert payload["message"] == "PDF generated successfully"
        assert payload["size"] == len(pdf)
        assert base64.b64decode(payload["data"]) == pdf
        assert upstream.calls() == [("GET", "/invoices/I1/pdf")]

    @pytest.mark.asyncio
    async def test_pdf_failure(self):
        dispatcher, _ = make_dispatcher(lambda r: httpx.Response(404, json={"message": "no such invoice"}))
        result = await dispatcher.dispatch("fieldedge_get_invoice_pdf", {"id": "I1"})
        assert result.is_error
        assert "no such invoice" in result.text


# =========================================================================
# Technician assignment
# =========================================================================


class TestAssignTechnician:

    def test_merge_keeps_order_and_drops_duplicates(self):
        assert merge_technicians(["T0", "T1"], ["T1", "T2"]) == ["T0", "T1", "T2"]
        assert merge_technicians(None, ["T2"]) == ["T2"]

    @pytest.mark.asyncio
    async def test_replace_patches_directly(self, dispatcher, upstream):
        await dispatcher.dispatch(
            "fieldedge_assign_technician",
            {"id": "J1", "technicianIds": ["T1", "T2"], "replace": True},
        )
        assert upstream.calls() == [("PATCH", "/jobs/J1")]
        assert upstream.body() == {"assignedTechnicians": ["T1", "T2"]}

    @pytest.mark.asyncio
    async def test_default_merges_with_existing(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_assign_technician", {"id": "J1", "technicianIds": ["T1", "T0"]})
        assert upstream.calls() == [("GET", "/jobs/J1"), ("PATCH", "/jobs/J1")]
        assert upstream.body() == {"assignedTechnicians": ["T0", "T1"]}

    @pytest.mark.asyncio
    async def test_failed_lookup_stops_before_patch(self):
        dispatcher, upstream = make_dispatcher(lambda r: httpx.Response(404, json={"message": "not found"}))
        result = await dispatcher.dispatch("fieldedge_assign_technician", {"id": "J1", "technicianIds": ["T1"]})
        assert result.is_error
        assert upstream.calls() == [("GET", "/jobs/J1")]


# =========================================================================
# Equipment maintenance scheduling
# =========================================================================


class TestScheduleMaintenance:

    ARGS = {"equipmentId": "E1", "scheduledDate": "2026-04-01T09:00:00Z", "maintenanceType": "Annual tune-up"}

    @pytest.mark.asyncio
    async def test_creates_maintenance_job_from_equipment_owner(self, dispatcher, upstream):
        result = await dispatcher.dispatch(
            "fieldedge_schedule_equipment_maintenance",
            {**self.ARGS, "technicianId": "T4", "notes": "bring filters"},
        )
        assert not result.is_error
        assert upstream.calls() == [("GET", "/equipment/E1"), ("POST", "/jobs")]
        assert upstream.body() == {
            "customerId": "C1",
            "equipmentIds": ["E1"],
            "jobType": "maintenance",
            "description": "Annual tune-up",
            "scheduledStart": "2026-04-01T09:00:00Z",
            "assignedTechnicians": ["T4"],
            "notes": "bring filters",
        }

    @pytest.mark.asyncio
    async def test_explicit_customer_skips_lookup(self, dispatcher, upstream):
        await dispatcher.dispatch("fieldedge_schedule_equipment_maintenance", {**self.ARGS, "customerId": "C9"})
        assert upstream.calls() == [("POST", "/jobs")]
        body = upstream.body()
        assert body["customerId"] == "C9"
        assert body["assignedTechnicians"] == []

    @pytest.mark.asyncio
    async def test_lookup_failure_creates_nothing(self):
        dispatcher, upstream = make_dispatcher(lambda r: httpx.Response(404, json={"message": "not found"}))
        result = await dispatcher.dispatch("fieldedge_schedule_equipment_maintenance", self.ARGS)
        assert result.is_error
        assert upstream.calls() == [("GET", "/equipment/E1")]

    @pytest.mark.asyncio
    async def test_equipment_without_owner_is_rejected(self):
        dispatcher, upstream = make_dispatcher(lambda r: httpx.Response(200, json={"id": "E1"}))
        result = await dispatcher.dispatch("fieldedge_schedule_equipment_maintenance", self.ARGS)
        assert result.is_error
        assert "customerId" in result.text
        assert upstream.calls() == [("GET", "/equipment/E1")]

    @pytest.mark.asyncio
    async def test_job_creation_failure_is_not_compensated(self):
        def responder(request):
            if request.method == "GET":
                return httpx.Response(200, json={"id": "E1", "customerId": "C1"})
            return httpx.Response(500, json={"message": "job service down"})

        dispatcher, upstream = make_dispatcher(responder)
        result = await dispatcher.dispatch("fieldedge_schedule_equipment_maintenance", self.ARGS)
        assert result.is_error
        assert "job service down" in result.text
        assert upstream.calls() == [("GET", "/equipment/E1"), ("POST", "/jobs")]
