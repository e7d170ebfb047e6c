# =============================================================================
# fieldedge_tools/shaping.py  —  Schema builders and argument shaping
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   The pieces every domain module repeats:
#
#   SCHEMA BUILDERS (used when declaring TOOLS)
#     string() / number() / boolean() / string_list() / obj() / enum()
#     schema(properties, required)       → {"type": "object", ...}
#     PAGING                              → page + pageSize properties
#
#   SHAPING HELPERS (used inside handle())
#     list_records    GET  collection, every supplied field as a query param
#     get_record      GET  collection/{id}, optional query fields
#     create_record   POST collection, the whole argument bag as body
#     update_record   PATCH (or PUT) collection/{id}, id removed from body
#     delete_record   DELETE collection/{id}
#     post_action     POST collection/{id}/action, body from a fixed subset
#
#   All helpers return an ApiResult, so a handler's last line is always
#   ``return await <helper>(...)``.
# =============================================================================

from datetime import datetime, timezone
from typing import Any, Iterable, Mapping, Optional

from fieldedge.client import FieldEdgeClient, path_segment
from fieldedge.errors import ApiResult, InvalidArgumentError


# -----------------------------------------------------------------------------
# Schema builders
# -----------------------------------------------------------------------------
def _prop(kind: str, description: Optional[str], **extra) -> dict:
    prop = {"type": kind}
    if description:
        prop["description"] = description
    prop.update(extra)
    return prop


def string(description: Optional[str] = None, **extra) -> dict:
    return _prop("string", description, **extra)


def number(description: Optional[str] = None, **extra) -> dict:
    return _prop("number", description, **extra)


def boolean(description: Optional[str] = None, **extra) -> dict:
    return _prop("boolean", description, **extra)


def string_list(description: Optional[str] = None) -> dict:
    return _prop("array", description, items={"type": "string"})


def obj(description: Optional[str] = None, properties: Optional[dict] = None, **extra) -> dict:
    if properties is not None:
        extra["properties"] = properties
    return _prop("object", description, **extra)


def array_of(items: dict, description: Optional[str] = None) -> dict:
    return _prop("array", description, items=items)


def enum(values: Iterable[str], description: Optional[str] = None, **extra) -> dict:
    return _prop("string", description, enum=list(values), **extra)


def schema(properties: dict, required: Iterable[str] = ()) -> dict:
    result = {"type": "object", "properties": properties}
    required = list(required)
    if required:
        result["required"] = required
    return result


PAGING = {
    "page": number("Page number (default: 1)"),
    "pageSize": number("Items per page"),
}


# -----------------------------------------------------------------------------
# Argument helpers
# -----------------------------------------------------------------------------
def utc_now() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def compact(mapping: Mapping[str, Any]) -> dict:
    """Drop None values so absent optional fields never reach FieldEdge."""
    return {key: value for key, value in mapping.items() if value is not None}


def pick(arguments: Mapping[str, Any], *fields: str) -> dict:
    return compact({f: arguments.get(f) for f in fields})


def identifier(arguments: Mapping[str, Any], field: str = "id") -> Optional[str]:
    value = arguments.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return str(value)


def missing_identifier(field: str = "id") -> ApiResult:
    return ApiResult.fail(InvalidArgumentError(f"'{field}' is required"))


def split_identifier(arguments: Mapping[str, Any], field: str = "id") -> tuple[Optional[str], dict]:
    """Separate the routing identifier from the rest of the argument bag."""
    body = {key: value for key, value in arguments.items() if key != field}
    return identifier(arguments, field), body


def item_path(collection: str, record_id: str, action: Optional[str] = None) -> str:
    path = f"{collection}/{path_segment(record_id)}"
    if action:
        path = f"{path}/{action}"
    return path


# -----------------------------------------------------------------------------
# Shaping helpers
# -----------------------------------------------------------------------------
async def list_records(
    client: FieldEdgeClient,
    path: str,
    arguments: Mapping[str, Any],
) -> ApiResult:
    return await client.get(path, query=compact(arguments))


async def get_record(
    client: FieldEdgeClient,
    collection: str,
    arguments: Mapping[str, Any],
    action: Optional[str] = None,
    query_fields: Iterable[str] = (),
    field: str = "id",
) -> ApiResult:
    record_id = identifier(arguments, field)
    if record_id is None:
        return missing_identifier(field)
    query = pick(arguments, *query_fields)
    return await client.get(item_path(collection, record_id, action), query=query)


async def create_record(
    client: FieldEdgeClient,
    path: str,
    arguments: Mapping[str, Any],
) -> ApiResult:
    return await client.post(path, body=dict(arguments))


async def update_record(
    client: FieldEdgeClient,
    collection: str,
    arguments: Mapping[str, Any],
    method: str = "PATCH",
    field: str = "id",
) -> ApiResult:
    record_id, body = split_identifier(arguments, field)
    if record_id is None:
        return missing_identifier(field)
    return await client.request(method, item_path(collection, record_id), body=body)


async def delete_record(
    client: FieldEdgeClient,
    collection: str,
    arguments: Mapping[str, Any],
    field: str = "id",
) -> ApiResult:
    record_id = identifier(arguments, field)
    if record_id is None:
        return missing_identifier(field)
    return await client.delete(item_path(collection, record_id))


async def post_action(
    client: FieldEdgeClient,
    collection: str,
    action: str,
    arguments: Mapping[str, Any],
    fields: Iterable[str] = (),
    defaults: Optional[Mapping[str, Any]] = None,
    field: str = "id",
) -> ApiResult:
    """POST to ``collection/{id}/action`` with a body built from ``fields``.

    ``defaults`` are server-side values (timestamps, fixed flags) merged in
    before the caller's fields; a None default is dropped like any other.
    """
    record_id = identifier(arguments, field)
    if record_id is None:
        return missing_identifier(field)
    body = dict(defaults or {})
    body.update(pick(arguments, *fields))
    return await client.post(item_path(collection, record_id, action), body=compact(body))
