# =============================================================================
# fieldedge/client.py  —  The FieldEdge REST client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs exactly one HTTP round-trip per call and hands back an
#   ApiResult.  It never raises for an HTTP or network failure:
#
#     2xx, JSON body      → ApiResult.ok(parsed JSON)
#     2xx, empty body     → ApiResult.ok({})
#     non-2xx             → ApiResult.fail(UpstreamError(status, message, body))
#     DNS / refused / timeout → ApiResult.fail(TransportError(message))
#
# REQUEST ASSEMBLY:
#   URL      base_url + path + query (only non-None values, insertion order)
#   Headers  Authorization: Bearer <key>, Accept: application/json, plus
#            X-Company-Id / Ocp-Apim-Subscription-Key when configured
#   Body     JSON with Content-Type: application/json, only when given
#
# STATE:
#   Only the frozen ClientConfig.  Each call opens its own
#   httpx.AsyncClient, so concurrent dispatches share nothing.
# =============================================================================

import json
import logging
from typing import Any, Mapping, Optional, Union
from urllib.parse import quote

import httpx

from fieldedge.config import ClientConfig
from fieldedge.errors import ApiResult, TransportError, UpstreamError

logger = logging.getLogger(__name__)


def encode_query(params: Optional[Mapping[str, Any]]) -> list[tuple[str, str]]:
    """Turn an argument mapping into query pairs.

    None values are dropped.  Booleans become ``true``/``false`` and lists
    become one comma-joined value, matching how FieldEdge reads filters such
    as ``technicianIds``.
    """
    pairs: list[tuple[str, str]] = []
    if not params:
        return pairs
    for key, value in params.items():
        if value is None:
            continue
        pairs.append((key, _query_value(value)))
    return pairs


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(_query_value(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def path_segment(value: Any) -> str:
    """Percent-encode an identifier so it stays a single path segment."""
    return quote(str(value), safe="")


def _error_detail(response: httpx.Response) -> str:
    text = response.text
    if not text.strip():
        return response.reason_phrase or "no response body"
    try:
        payload = json.loads(text)
    except ValueError:
        return text
    if isinstance(payload, dict) and payload.get("message"):
        return str(payload["message"])
    return json.dumps(payload)


class FieldEdgeClient:
    """Async client for the FieldEdge REST API.

    Args:
        config: Credentials, base URL and timeout.
        transport: Optional httpx transport.  Tests pass an
            ``httpx.MockTransport``; production leaves it None.
    """

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._transport = transport

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Accept": "application/json",
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        if self._config.company_id:
            headers["X-Company-Id"] = self._config.company_id
        if self._config.subscription_key:
            headers["Ocp-Apim-Subscription-Key"] = self._config.subscription_key
        return headers

    def _url(self, path: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _send(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> Union[httpx.Response, TransportError]:
        url = self._url(path)
        content = None if body is None else json.dumps(body).encode("utf-8")
        logger.debug(f"{method} {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout,
                transport=self._transport,
            ) as client:
                return await client.request(
                    method,
                    url,
                    params=encode_query(query) or None,
                    headers=self._headers(has_body=content is not None),
                    content=content,
                )
        except httpx.TimeoutException:
            return TransportError(f"{method} {path} timed out after {self._config.timeout:g}s")
        except httpx.HTTPError as e:
            return TransportError(f"{method} {path}: {e}")

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: Optional[Mapping[str, Any]] = None,
    ) -> ApiResult:
        """Perform one call and parse the JSON answer.

        Args:
            method: HTTP verb.
            path: Path below the base URL, e.g. ``/jobs/J1/start``.
            body: JSON-serializable payload; None sends no body at all.
            query: Filter mapping; None values are skipped.

        Returns:
            ApiResult with the parsed JSON (``{}`` for an empty body), or an
            UpstreamError / TransportError.
        """
        response = await self._send(method, path, body=body, query=query)
        if isinstance(response, TransportError):
            return ApiResult.fail(response)

        if not response.is_success:
            return ApiResult.fail(UpstreamError(
                status_code=response.status_code,
                message=_error_detail(response),
                raw_body=response.text,
            ))

        if not response.content.strip():
            return ApiResult.ok({})
        try:
            return ApiResult.ok(response.json())
        except ValueError:
            return ApiResult.fail(UpstreamError(
                status_code=response.status_code,
                message="response body is not valid JSON",
                raw_body=response.text,
            ))

    async def download(self, path: str, query: Optional[Mapping[str, Any]] = None) -> ApiResult:
        """GET a binary resource (e.g. an invoice PDF); the value is raw bytes."""
        response = await self._send("GET", path, query=query)
        if isinstance(response, TransportError):
            return ApiResult.fail(response)
        if not response.is_success:
            return ApiResult.fail(UpstreamError(
                status_code=response.status_code,
                message=_error_detail(response),
                raw_body=response.text,
            ))
        return ApiResult.ok(response.content)

    # --- Verb shortcuts ------------------------------------------------------

    async def get(self, path: str, query: Optional[Mapping[str, Any]] = None) -> ApiResult:
        return await self.request("GET", path, query=query)

    async def post(self, path: str, body: Any = None) -> ApiResult:
        return await self.request("POST", path, body=body)

    async def put(self, path: str, body: Any = None) -> ApiResult:
        return await self.request("PUT", path, body=body)

    async def patch(self, path: str, body: Any = None) -> ApiResult:
        return await self.request("PATCH", path, body=body)

    async def delete(self, path: str) -> ApiResult:
        return await self.request("DELETE", path)
