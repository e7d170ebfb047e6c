"""Shared fixtures: a recording fake FieldEdge upstream behind httpx.MockTransport."""

import json
import re
from typing import Callable, Optional

import httpx
import pytest

from fieldedge.client import FieldEdgeClient
from fieldedge.config import ClientConfig
from fieldedge.dispatcher import ToolDispatcher
from fieldedge_tools import ALL_TOOLS, TOOL_HANDLERS

BASE_URL = "https://api.test.fieldedge.com/v1"

STOCK_RECORD = {"id": "X1", "customerId": "C1", "assignedTechnicians": ["T0"]}


def stock_response(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json=STOCK_RECORD)


class RecordingUpstream:
    """Callable for httpx.MockTransport that remembers every request."""

    def __init__(self, responder: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: list[httpx.Request] = []
        self.responder = responder or stock_response

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1):
        content = self.requests[index].content
        return json.loads(content) if content else None

    def path(self, index: int = -1) -> str:
        return self.requests[index].url.path.removeprefix("/v1")

    def query(self, index: int = -1) -> dict:
        return dict(self.requests[index].url.params)

    def calls(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path.removeprefix("/v1")) for r in self.requests]


class InMemoryFieldEdge:
    """Tiny stateful upstream: POST creates a record with an id, GET reads it back."""

    def __init__(self):
        self.records: dict[str, dict] = {}
        self._next_id = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v1")
        if request.method == "POST" and re.fullmatch(r"/[a-z-]+", path):
            record = json.loads(request.content)
            record["id"] = f"{path.strip('/')}-{self._next_id}"
            self._next_id += 1
            self.records[f"{path}/{record['id']}"] = record
            return httpx.Response(201, json=record)
        if request.method == "GET" and path in self.records:
            return httpx.Response(200, json=self.records[path])
        return httpx.Response(404, json={"message": "not found"})


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(api_key="test-key", base_url=BASE_URL)


@pytest.fixture
def upstream() -> RecordingUpstream:
    return RecordingUpstream()


@pytest.fixture
def client(config, upstream) -> FieldEdgeClient:
    return FieldEdgeClient(config, transport=httpx.MockTransport(upstream))


@pytest.fixture
def dispatcher(client) -> ToolDispatcher:
    return ToolDispatcher(client, ALL_TOOLS, TOOL_HANDLERS)
